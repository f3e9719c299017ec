# src/cache/scope.py — v1
"""In-memory translation cache for one collection (e.g. one lecture).

A scope loaded from a persisted store is read-only: curated translation sets
must not be altered by live translations. A scope with no store behind it is
ephemeral and accepts inserts until it is flushed.
"""

from __future__ import annotations

import logging
from collections.abc import Iterator

from bialign.cache.base_cache_store import BaseCacheStore, CacheLoadError
from bialign.cache.fingerprint import short_key
from bialign.cache.models import CacheRecord

logger = logging.getLogger(__name__)


class CacheScope:
    """Append-only ``key -> CacheRecord`` map bound to one collection."""

    def __init__(
        self,
        collection_id: str,
        records: dict[str, CacheRecord] | None = None,
        persistent: bool = False,
    ) -> None:
        self._collection_id = collection_id
        self._records: dict[str, CacheRecord] = dict(records or {})
        self._persistent = persistent

    @classmethod
    def load(cls, store: BaseCacheStore, collection_id: str) -> CacheScope:
        """Load a collection's records from a store.

        A missing or unreadable store is not an error: the result is an empty,
        writable scope.
        """
        try:
            records = store.read(collection_id)
        except CacheLoadError as e:
            logger.warning(
                "Cache miss for whole collection %s (%s); starting empty writable scope",
                collection_id, e.reason,
            )
            return cls(collection_id, persistent=False)

        by_key: dict[str, CacheRecord] = {}
        for record in records:
            # First occurrence wins, as with put()
            by_key.setdefault(record.key, record)
        logger.info(
            "Loaded %d cache records for collection %s", len(by_key), collection_id
        )
        return cls(collection_id, by_key, persistent=True)

    @property
    def collection_id(self) -> str:
        return self._collection_id

    @property
    def persistent(self) -> bool:
        return self._persistent

    def get(self, key: str) -> CacheRecord | None:
        return self._records.get(key)

    def put(self, record: CacheRecord) -> bool:
        """Insert if the scope is writable and the key is new.

        Returns:
            True if the record was stored.
        """
        if self._persistent:
            logger.debug(
                "Scope %s is persistent; not caching %s",
                self._collection_id, short_key(record.key),
            )
            return False
        if record.key in self._records:
            return False
        self._records[record.key] = record
        return True

    def flush(self, store: BaseCacheStore) -> int:
        """Persist an ephemeral scope and promote it to persistent.

        An empty scope is not written and stays writable: an empty file would
        load as a persistent scope that can never cache anything.

        Returns:
            Number of records written (0 for an already persistent scope).
        """
        if self._persistent:
            logger.debug("Scope %s already persistent; nothing to flush", self._collection_id)
            return 0
        if not self._records:
            logger.debug("Scope %s is empty; nothing to flush", self._collection_id)
            return 0
        written = store.write(self._collection_id, self._records.values())
        self._persistent = True
        return written

    def records(self) -> list[CacheRecord]:
        return list(self._records.values())

    def __len__(self) -> int:
        return len(self._records)

    def __contains__(self, key: object) -> bool:
        return key in self._records

    def __iter__(self) -> Iterator[CacheRecord]:
        return iter(list(self._records.values()))

    def __repr__(self) -> str:
        return (
            f"CacheScope(collection_id={self._collection_id!r}, "
            f"records={len(self._records)}, persistent={self._persistent})"
        )
