# src/cache/jsonl_store.py — v1
"""JSON Lines cache store: one ``<collection_id>.jsonl`` file per collection.

Malformed lines are skipped so a single corrupt record never hides the rest
of a curated translation set.
"""

from __future__ import annotations

import json
import logging
import os
import tempfile
from collections.abc import Iterable
from pathlib import Path

from pydantic import ValidationError

from bialign.cache.base_cache_store import BaseCacheStore, CacheLoadError
from bialign.cache.models import CacheRecord

logger = logging.getLogger(__name__)


class JsonlCacheStore(BaseCacheStore):
    """File-based cache store using JSONL files under a cache root."""

    def __init__(self, cache_root: str | Path) -> None:
        self._root = Path(cache_root).expanduser()

    @property
    def root(self) -> Path:
        return self._root

    def path_for(self, collection_id: str) -> Path:
        """Return file path for a collection."""
        safe_id = str(collection_id).replace("/", "_").replace("\\", "_")
        return self._root / f"{safe_id}.jsonl"

    def exists(self, collection_id: str) -> bool:
        return self.path_for(collection_id).is_file()

    def read(self, collection_id: str) -> list[CacheRecord]:
        path = self.path_for(collection_id)
        try:
            text = path.read_text(encoding="utf-8")
        except (OSError, UnicodeDecodeError) as e:
            raise CacheLoadError(collection_id, str(e)) from e

        records: list[CacheRecord] = []
        skipped = 0
        for lineno, line in enumerate(text.splitlines(), start=1):
            if not line.strip():
                continue
            try:
                records.append(CacheRecord.model_validate(json.loads(line)))
            except (json.JSONDecodeError, ValidationError, TypeError) as e:
                skipped += 1
                logger.debug("Skipping malformed cache line %s:%d: %s", path.name, lineno, e)

        if skipped:
            logger.warning(
                "Skipped %d malformed lines in cache file %s", skipped, path
            )
        return records

    def write(self, collection_id: str, records: Iterable[CacheRecord]) -> int:
        path = self.path_for(collection_id)
        path.parent.mkdir(parents=True, exist_ok=True)
        lines = [record.to_json_line() for record in records]
        content = "".join(f"{line}\n" for line in lines)

        # Write-then-rename so readers never see a half-written file
        fd, tmp_name = tempfile.mkstemp(
            prefix=f".{path.stem}.", suffix=".tmp", dir=str(path.parent)
        )
        try:
            with os.fdopen(fd, "w", encoding="utf-8") as fh:
                fh.write(content)
            os.replace(tmp_name, path)
        except BaseException:
            Path(tmp_name).unlink(missing_ok=True)
            raise

        logger.info("Wrote %d cache records to %s", len(lines), path)
        return len(lines)
