# src/embeddings/sentence_tf_embedder.py — v1
"""Sentence Transformers embedding adapter (local inference).

Default model: distiluse-base-multilingual-cased-v2 (mean pooling), which
places Hebrew and English sentences in one vector space.
"""

from __future__ import annotations

import asyncio
import logging
import threading

from bialign.embeddings.base_embedder import BaseEmbedder, EmbeddingError

logger = logging.getLogger(__name__)

DEFAULT_MODEL = "sentence-transformers/distiluse-base-multilingual-cased-v2"


class SentenceTransformerEmbedder(BaseEmbedder):
    """Local multilingual embeddings via sentence-transformers.

    The model is loaded on first use, exactly once, under a lock.
    """

    def __init__(self, model: str = DEFAULT_MODEL, device: str | None = None) -> None:
        self._model_name = model
        self._device = device
        self._lock = threading.Lock()
        self.__model = None

    @property
    def loaded(self) -> bool:
        return self.__model is not None

    def _load(self):
        if self.__model is None:
            with self._lock:
                if self.__model is None:
                    try:
                        from sentence_transformers import SentenceTransformer
                    except ImportError as e:
                        raise EmbeddingError(
                            "sentence-transformers package required: "
                            "pip install sentence-transformers"
                        ) from e
                    logger.info("Loading sentence transformer model %s", self._model_name)
                    try:
                        self.__model = SentenceTransformer(self._model_name, device=self._device)
                    except Exception as e:
                        raise EmbeddingError(
                            f"Failed to load embedding model {self._model_name!r}: {e}"
                        ) from e
                    logger.info("Sentence transformer model loaded")
        return self.__model

    def _encode(self, texts: list[str]) -> list[list[float]]:
        model = self._load()
        try:
            embeddings = model.encode(
                texts, show_progress_bar=False, normalize_embeddings=True
            )
        except Exception as e:
            raise EmbeddingError(f"Embedding inference failed: {e}") from e
        return [emb.tolist() for emb in embeddings]

    async def embed_texts(self, texts: list[str]) -> list[list[float]]:
        """Embed texts in a worker thread so the event loop keeps serving."""
        if not texts:
            return []
        return await asyncio.to_thread(self._encode, texts)

    @property
    def provider_name(self) -> str:
        return "sentence_transformers"

    @property
    def model_name(self) -> str:
        return self._model_name
