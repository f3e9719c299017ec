# src/api/facade.py — v1
"""Public API facade: the operations the web/API layer calls.

Usage:
    from bialign.api.facade import AlignmentEngine
    engine = AlignmentEngine.from_settings()
    await engine.load_cache("12")
    result = await engine.score_pair(english_paragraph, hebrew_paragraph, "12")
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from bialign.core.models import ScoreOutcome, SentenceMatch, TranslationOutcome
from bialign.logging.context import set_operation_context
from bialign.pipeline.orchestrator import AlignmentOrchestrator
from bialign.scoring.matcher import SentenceMatcher
from bialign.scoring.scorer import SimilarityScorer
from bialign.text.sentence_splitter import split_sentences

if TYPE_CHECKING:
    from bialign.cache.base_cache_store import BaseCacheStore
    from bialign.config.settings import Settings
    from bialign.embeddings.base_embedder import BaseEmbedder
    from bialign.llm.base_client import BaseLLMClient

logger = logging.getLogger(__name__)


class AlignmentEngine:
    """Paragraph scoring, sentence matching and cache lifecycle hooks."""

    def __init__(
        self,
        orchestrator: AlignmentOrchestrator,
        matcher: SentenceMatcher,
    ) -> None:
        self._orchestrator = orchestrator
        self._matcher = matcher

    @classmethod
    def from_settings(
        cls,
        settings: Settings | None = None,
        llm_client: BaseLLMClient | None = None,
        embedder: BaseEmbedder | None = None,
        store: BaseCacheStore | None = None,
    ) -> AlignmentEngine:
        """Wire every component from settings; explicit arguments win.

        Args:
            settings: Global settings. Loaded from .env if None.
            llm_client: Translation LLM. Built from LLM_PROVIDER/LLM_MODEL if None.
            embedder: Embedding provider. Shared sentence-transformers handle if None.
            store: Persisted cache store. JSONL files under CACHE_ROOT if None.
        """
        from bialign.cache.jsonl_store import JsonlCacheStore
        from bialign.config.settings import Settings
        from bialign.embeddings.shared import get_shared_embedder
        from bialign.llm.client_factory import create_translation_client
        from bialign.translation.translator import Translator

        settings = settings or Settings()
        llm_client = llm_client or create_translation_client(settings)
        embedder = embedder or get_shared_embedder(settings.embedding_model)
        store = store or JsonlCacheStore(settings.cache_root)

        translator = Translator(
            llm_client,
            source_language=settings.translation_source_language,
            target_language=settings.translation_target_language,
            timeout_s=settings.translation_timeout_s,
            max_tokens=settings.llm_max_tokens,
            temperature=settings.llm_temperature,
        )
        scorer = SimilarityScorer(embedder)
        orchestrator = AlignmentOrchestrator(
            store=store,
            translator=translator,
            scorer=scorer,
            dedupe_inflight=settings.dedupe_inflight_translations,
        )
        logger.debug(
            "AlignmentEngine ready: llm=%s, embedder=%s",
            settings.llm_key, embedder.model_name,
        )
        return cls(orchestrator, SentenceMatcher(scorer))

    @property
    def orchestrator(self) -> AlignmentOrchestrator:
        return self._orchestrator

    async def score_pair(
        self, original: str, source_language_text: str, collection_id: str
    ) -> ScoreOutcome:
        """Paragraph-level score of ``original`` against a source-language paragraph."""
        set_operation_context("score_pair")
        return await self._orchestrator.resolve_and_score(
            original, source_language_text, collection_id
        )

    async def match_sentences(
        self, source_sentences: list[str], target_translated_text: str
    ) -> list[SentenceMatch]:
        """Best target sentence of a translated paragraph for each source sentence."""
        set_operation_context("match_sentences")
        targets = split_sentences(target_translated_text)
        return await self._matcher.match(source_sentences, targets)

    async def translate(
        self, source_language_text: str, collection_id: str | None = None
    ) -> TranslationOutcome:
        """Cache-through translation of one source-language paragraph."""
        set_operation_context("translate")
        return await self._orchestrator.resolve_translation(source_language_text, collection_id)

    async def load_cache(self, collection_id: str) -> int:
        """Activate a collection's cache scope. Returns its record count."""
        set_operation_context("load_cache")
        return len(self._orchestrator.load_cache(collection_id))

    async def flush_cache(self) -> int:
        """Persist the active scope. Returns records written."""
        set_operation_context("flush_cache")
        return self._orchestrator.flush_cache()
