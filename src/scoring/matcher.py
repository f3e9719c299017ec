# src/scoring/matcher.py — v1
"""Greedy sentence matcher inside a confirmed paragraph pair.

Each source sentence is paired with its best-scoring target sentence. Targets
may be reused; the result drives highlighting, not ground truth, so no
one-to-one assignment is attempted. Cost is O(n * m) scorer calls, fine for
paragraphs of tens of sentences.
"""

from __future__ import annotations

import logging

from bialign.core.models import SentenceMatch
from bialign.scoring.scorer import SimilarityScorer

logger = logging.getLogger(__name__)


class SentenceMatcher:
    """Argmax matching of source sentences to target sentences."""

    def __init__(self, scorer: SimilarityScorer) -> None:
        self._scorer = scorer

    async def match(
        self,
        source_sentences: list[str],
        target_sentences: list[str],
    ) -> list[SentenceMatch]:
        """Best target for every source sentence, in source order.

        Ties go to the earliest target. With no targets every match has
        target index -1 and score 0.0.
        """
        matches: list[SentenceMatch] = []
        for i, source in enumerate(source_sentences):
            best_idx = -1
            best_score = -1.0
            scores = await self._scorer.score_many(source, target_sentences)
            for j, result in enumerate(scores):
                # Strict improvement only: first index reaching the max wins
                if result.blended > best_score:
                    best_score = result.blended
                    best_idx = j
            matches.append(
                SentenceMatch(
                    source_sentence_index=i,
                    target_sentence_index=best_idx,
                    score=max(best_score, 0.0),
                )
            )

        logger.debug(
            "Matched %d source sentences against %d targets",
            len(source_sentences), len(target_sentences),
        )
        return matches
