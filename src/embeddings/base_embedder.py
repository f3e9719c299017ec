# src/embeddings/base_embedder.py — v1
"""Abstract embeddings interface."""

from __future__ import annotations

from abc import ABC, abstractmethod


class EmbeddingError(Exception):
    """The embedding model failed to load or to encode."""


class BaseEmbedder(ABC):
    """Unified interface for sentence-embedding providers.

    Implementations return L2-normalized vectors, one per input text, in
    input order.
    """

    @abstractmethod
    async def embed_texts(self, texts: list[str]) -> list[list[float]]:
        """Embed a batch of texts into vectors.

        Raises:
            EmbeddingError: If the model cannot be loaded or inference fails.
        """

    @property
    @abstractmethod
    def provider_name(self) -> str:
        """Provider identifier."""

    @property
    @abstractmethod
    def model_name(self) -> str:
        """Model identifier."""
