# tests/integration/conftest.py — v1
"""Shared fixtures for integration tests.

The real multilingual embedding model is loaded once per session and only for
tests marked ``slow``. Without network access or the model in the local
Hugging Face cache those tests are skipped, not failed.
"""

from __future__ import annotations

import logging

import pytest

from bialign.embeddings.base_embedder import EmbeddingError
from bialign.embeddings.sentence_tf_embedder import DEFAULT_MODEL, SentenceTransformerEmbedder

logger = logging.getLogger(__name__)


@pytest.fixture(scope="session")
def real_embedder() -> SentenceTransformerEmbedder:
    """Loaded distiluse-base-multilingual-cased-v2 embedder."""
    pytest.importorskip("sentence_transformers")
    embedder = SentenceTransformerEmbedder(model=DEFAULT_MODEL)
    try:
        embedder._load()
    except EmbeddingError as e:
        pytest.skip(f"Embedding model unavailable: {e}")
    logger.info("Real embedder ready: %s", embedder.model_name)
    return embedder
