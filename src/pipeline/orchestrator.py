# src/pipeline/orchestrator.py — v1
"""Alignment orchestrator: cache-through translation, then scoring.

The orchestrator owns the single active CacheScope. Selecting another
collection replaces the in-memory scope; unflushed records of the previous
scope are dropped.

Each distinct source text is translated at most once per process while its
scope is writable. Concurrent requests for the same uncached text share one
in-flight translation when ``dedupe_inflight`` is on; with it off both reach
the translator and the second ``put`` is a no-op.
"""

from __future__ import annotations

import asyncio
import logging

from bialign.cache.base_cache_store import BaseCacheStore
from bialign.cache.fingerprint import compute_cache_key, short_key
from bialign.cache.models import CacheRecord
from bialign.cache.scope import CacheScope
from bialign.core.models import ScoreOutcome, TranslationError, TranslationOutcome
from bialign.logging.context import set_collection_context
from bialign.scoring.scorer import SimilarityScorer
from bialign.translation.translator import Translator

logger = logging.getLogger(__name__)


class AlignmentOrchestrator:
    """Compose cache, translator and scorer for paragraph-level scoring."""

    def __init__(
        self,
        store: BaseCacheStore,
        translator: Translator,
        scorer: SimilarityScorer,
        scope: CacheScope | None = None,
        dedupe_inflight: bool = True,
    ) -> None:
        self._store = store
        self._translator = translator
        self._scorer = scorer
        self._scope = scope
        self._dedupe_inflight = dedupe_inflight
        self._inflight: dict[str, asyncio.Task[TranslationOutcome]] = {}

    # --- Cache lifecycle ---

    @property
    def scope(self) -> CacheScope | None:
        return self._scope

    def load_cache(self, collection_id: str) -> CacheScope:
        """Make ``collection_id`` the active scope.

        Re-selecting the active collection keeps its in-memory state.
        """
        collection_id = str(collection_id)
        # Set before loading so the load's own log records carry the collection
        set_collection_context(collection_id)
        if self._scope is not None and self._scope.collection_id == collection_id:
            return self._scope

        if self._scope is not None:
            logger.info(
                "Switching cache scope %s -> %s", self._scope.collection_id, collection_id
            )
        self._scope = CacheScope.load(self._store, collection_id)
        self._inflight.clear()
        return self._scope

    def flush_cache(self) -> int:
        """Persist the active scope. Returns number of records written."""
        if self._scope is None:
            logger.debug("No active cache scope to flush")
            return 0
        return self._scope.flush(self._store)

    # --- Operations ---

    async def resolve_translation(
        self, source_text: str, collection_id: str | None = None
    ) -> TranslationOutcome:
        """Cached translation of ``source_text``, translating on a miss."""
        scope = self._active_scope(collection_id)
        if scope is None:
            logger.error("No cache scope loaded; pass a collection_id or call load_cache() first")
            return TranslationError(reason="no cache scope loaded")
        key = compute_cache_key(source_text)

        cached = scope.get(key)
        if cached is not None:
            logger.info("Cache hit for %s", short_key(key))
            return cached.translated_text
        logger.info("Cache miss for %s; translating", short_key(key))

        if not self._dedupe_inflight:
            return await self._translate_and_store(scope, key, source_text)

        task = self._inflight.get(key)
        if task is None:
            task = asyncio.ensure_future(self._translate_and_store(scope, key, source_text))
            self._inflight[key] = task
            task.add_done_callback(lambda t, k=key: self._forget_inflight(k, t))
        else:
            logger.debug("Joining in-flight translation for %s", short_key(key))
        # One waiter being cancelled must not cancel the shared call
        return await asyncio.shield(task)

    async def resolve_and_score(
        self, original: str, source_text: str, collection_id: str
    ) -> ScoreOutcome:
        """Score ``original`` against the translation of ``source_text``."""
        translation = await self.resolve_translation(source_text, collection_id)
        if isinstance(translation, TranslationError):
            logger.warning("No score for pair: %s", translation.reason)
            return translation
        return await self._scorer.score(original, translation)

    # --- Internals ---

    def _active_scope(self, collection_id: str | None) -> CacheScope | None:
        if collection_id is not None:
            return self.load_cache(collection_id)
        return self._scope

    def _forget_inflight(self, key: str, task: asyncio.Task[TranslationOutcome]) -> None:
        # A task from a replaced scope must not evict the current scope's task
        if self._inflight.get(key) is task:
            del self._inflight[key]

    async def _translate_and_store(
        self, scope: CacheScope, key: str, source_text: str
    ) -> TranslationOutcome:
        translation = await self._translator.translate(source_text)
        if isinstance(translation, TranslationError):
            return translation
        scope.put(
            CacheRecord(key=key, source_text=source_text, translated_text=translation)
        )
        return translation
