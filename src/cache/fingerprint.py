# src/cache/fingerprint.py — v1
"""Cache key computation for source-language paragraphs.

The key is the base64 encoding of the UTF-8 bytes, the format used by the
lecture cache files produced from translation batches. It is injective, so
two different paragraphs never share a record.
"""

from __future__ import annotations

import base64
import hashlib


def compute_cache_key(source_text: str) -> str:
    """Deterministic cache key for a source text."""
    return base64.b64encode(source_text.encode("utf-8")).decode("ascii")


def short_key(key: str, length: int = 8) -> str:
    """Short, log-friendly digest of a cache key."""
    return hashlib.sha256(key.encode("ascii")).hexdigest()[:length]
