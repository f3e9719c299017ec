# src/embeddings/shared.py — v1
"""Process-wide embedder handles, one per model name.

Every scorer in the process shares the same loaded model; it is never
re-initialized per request.
"""

from __future__ import annotations

import threading

from bialign.embeddings.base_embedder import BaseEmbedder
from bialign.embeddings.sentence_tf_embedder import DEFAULT_MODEL, SentenceTransformerEmbedder

_handles: dict[str, BaseEmbedder] = {}
_handles_lock = threading.Lock()


def get_shared_embedder(model: str = DEFAULT_MODEL) -> BaseEmbedder:
    """Return the shared embedder for ``model``, creating it on first call."""
    with _handles_lock:
        embedder = _handles.get(model)
        if embedder is None:
            embedder = SentenceTransformerEmbedder(model=model)
            _handles[model] = embedder
        return embedder


def reset_shared_embedders() -> None:
    """Drop all shared handles (for testing)."""
    with _handles_lock:
        _handles.clear()
