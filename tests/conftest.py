# tests/conftest.py — v1
"""Shared test fixtures for all unit and integration tests.

Provides a deterministic fake embedder, a scripted fake LLM client and
temp-dir cache stores. No model downloads or network calls.
"""

from __future__ import annotations

import asyncio
import hashlib
import math

import pytest

from bialign.cache.jsonl_store import JsonlCacheStore
from bialign.embeddings.base_embedder import BaseEmbedder, EmbeddingError
from bialign.llm.base_client import BaseLLMClient
from bialign.llm.models import LLMResponse, Message
from bialign.scoring.scorer import SimilarityScorer
from bialign.text.normalizer import normalize

# === FAKES ===


class HashingEmbedder(BaseEmbedder):
    """Bag-of-words embedder: each token hashed into a fixed number of buckets.

    Identical texts get identical vectors; texts sharing no token are nearly
    orthogonal.
    """

    def __init__(self, dims: int = 256) -> None:
        self._dims = dims
        self.calls: list[list[str]] = []

    def vector(self, text: str) -> list[float]:
        vec = [0.0] * self._dims
        for token in text.split():
            bucket = int(hashlib.md5(token.encode("utf-8")).hexdigest(), 16) % self._dims  # noqa: S324
            vec[bucket] += 1.0
        norm = math.sqrt(sum(v * v for v in vec))
        return [v / norm for v in vec] if norm else vec

    async def embed_texts(self, texts: list[str]) -> list[list[float]]:
        self.calls.append(list(texts))
        return [self.vector(t) for t in texts]

    @property
    def provider_name(self) -> str:
        return "fake"

    @property
    def model_name(self) -> str:
        return "hashing-bow"


class TableEmbedder(BaseEmbedder):
    """Embedder backed by a lookup table keyed on normalized text."""

    def __init__(self, table: dict[str, list[float]], dims: int = 2) -> None:
        self._table = {normalize(k): v for k, v in table.items()}
        self._dims = dims

    async def embed_texts(self, texts: list[str]) -> list[list[float]]:
        return [self._table.get(t, [0.0] * self._dims) for t in texts]

    @property
    def provider_name(self) -> str:
        return "fake"

    @property
    def model_name(self) -> str:
        return "table"


class FailingEmbedder(BaseEmbedder):
    """Embedder whose model never loads."""

    async def embed_texts(self, texts: list[str]) -> list[list[float]]:
        raise EmbeddingError("model unavailable")

    @property
    def provider_name(self) -> str:
        return "fake"

    @property
    def model_name(self) -> str:
        return "broken"


class FakeLLMClient(BaseLLMClient):
    """LLM client returning scripted translations keyed by the user message."""

    def __init__(
        self,
        translations: dict[str, str] | None = None,
        default: str | None = None,
        delay_s: float = 0.0,
        error: Exception | None = None,
    ) -> None:
        self.translations = translations or {}
        self.default = default
        self.delay_s = delay_s
        self.error = error
        self.calls: list[tuple[list[Message], str | None]] = []

    async def complete(
        self,
        messages: list[Message],
        system: str | None = None,
        max_tokens: int = 4096,
        temperature: float = 0.0,
    ) -> LLMResponse:
        self.calls.append((messages, system))
        if self.delay_s:
            await asyncio.sleep(self.delay_s)
        if self.error is not None:
            raise self.error
        text = messages[-1].content
        content = self.translations.get(text, self.default if self.default is not None else text)
        return LLMResponse(content=content, model="fake-model", provider="fake")

    @property
    def provider_name(self) -> str:
        return "fake"

    @property
    def model_name(self) -> str:
        return "fake-model"


# === FIXTURES ===


@pytest.fixture
def hashing_embedder() -> HashingEmbedder:
    return HashingEmbedder()


@pytest.fixture
def scorer(hashing_embedder: HashingEmbedder) -> SimilarityScorer:
    return SimilarityScorer(hashing_embedder)


@pytest.fixture
def fake_llm() -> FakeLLMClient:
    return FakeLLMClient(
        translations={
            "מזג האוויר נעים היום.": "The weather is nice today.",
            "החתול ישב.": "The cat sat.",
        }
    )


@pytest.fixture
def store(tmp_path) -> JsonlCacheStore:
    return JsonlCacheStore(tmp_path / "cache")
