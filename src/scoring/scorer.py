# src/scoring/scorer.py — v1
"""Blended similarity scorer for (original, candidate) pairs.

blended = (0.6 * lexical_overlap + 0.4 * semantic_similarity) * length_ratio ** 2

The squared length ratio strongly penalises pairs whose lengths differ, the
usual symptom of a dropped or merged sentence. Weights and exponent live in
``bialign.core.models`` and are fixed so scores stay comparable across runs.
"""

from __future__ import annotations

import logging

from bialign.core.models import ScoreResult
from bialign.core.similarity import clamp_unit, cosine_similarity, cosine_similarity_row
from bialign.embeddings.base_embedder import BaseEmbedder
from bialign.scoring.metrics import length_ratio, lexical_overlap
from bialign.text.normalizer import normalize

logger = logging.getLogger(__name__)


class SimilarityScorer:
    """Score candidate translations with lexical, semantic and length signals."""

    def __init__(self, embedder: BaseEmbedder) -> None:
        self._embedder = embedder

    @property
    def embedder(self) -> BaseEmbedder:
        return self._embedder

    async def score(self, original: str, candidate: str) -> ScoreResult:
        """Score one pair. Embedding failures count as zero semantic similarity."""
        semantic = await self.semantic_similarity(original, candidate)
        result = ScoreResult.from_signals(
            lexical_overlap=lexical_overlap(original, candidate),
            semantic_similarity=semantic,
            length_ratio=length_ratio(original, candidate),
        )
        logger.debug(
            "Scored pair: overlap=%.4f semantic=%.4f ratio=%.4f blended=%.4f",
            result.lexical_overlap, result.semantic_similarity,
            result.length_ratio, result.blended,
        )
        return result

    async def score_many(self, original: str, candidates: list[str]) -> list[ScoreResult]:
        """Score one original against several candidates with one embedding call.

        Equivalent to calling ``score`` for each candidate.
        """
        if not candidates:
            return []
        semantics = await self._semantic_row(original, candidates)
        return [
            ScoreResult.from_signals(
                lexical_overlap=lexical_overlap(original, candidate),
                semantic_similarity=semantic,
                length_ratio=length_ratio(original, candidate),
            )
            for candidate, semantic in zip(candidates, semantics)
        ]

    async def semantic_similarity(self, original: str, candidate: str) -> float:
        """Clamped cosine similarity of the normalized texts, 0.0 on failure."""
        try:
            v1, v2 = await self._embedder.embed_texts([normalize(original), normalize(candidate)])
        except Exception:
            logger.warning("Embedding failed; semantic similarity set to 0", exc_info=True)
            return 0.0
        return clamp_unit(cosine_similarity(v1, v2))

    async def _semantic_row(self, original: str, candidates: list[str]) -> list[float]:
        texts = [normalize(original)] + [normalize(c) for c in candidates]
        try:
            vectors = await self._embedder.embed_texts(texts)
        except Exception:
            logger.warning("Embedding failed; semantic similarity set to 0", exc_info=True)
            return [0.0] * len(candidates)
        sims = cosine_similarity_row(vectors[0], vectors[1:])
        return [clamp_unit(s) for s in sims]
