# src/cache/base_cache_store.py — v1
"""Abstract persisted store for per-collection translation caches."""

from __future__ import annotations

from abc import ABC, abstractmethod
from collections.abc import Iterable

from bialign.cache.models import CacheRecord


class CacheLoadError(Exception):
    """Persisted cache for a collection is missing or unreadable."""

    def __init__(self, collection_id: str, reason: str):
        self.collection_id = collection_id
        self.reason = reason
        super().__init__(f"Cannot load cache for collection {collection_id!r}: {reason}")


class BaseCacheStore(ABC):
    """Unified interface for cache storage backends."""

    @abstractmethod
    def read(self, collection_id: str) -> list[CacheRecord]:
        """Read all valid records for a collection.

        Raises:
            CacheLoadError: If the collection has no readable store.
        """

    @abstractmethod
    def write(self, collection_id: str, records: Iterable[CacheRecord]) -> int:
        """Replace the persisted records of a collection. Returns count written."""

    @abstractmethod
    def exists(self, collection_id: str) -> bool:
        """Whether a persisted store exists for the collection."""
