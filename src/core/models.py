# src/core/models.py — v1
"""Shared domain models: ScoreResult, SentenceMatch, TranslationError.

ScoreResult and SentenceMatch are transient values recomputed per request.
TranslationError is the failed branch of every translation-dependent result;
it is returned, never raised.
"""

from __future__ import annotations

from decimal import ROUND_HALF_UP, Decimal
from typing import Union

from pydantic import BaseModel, ConfigDict, Field, model_validator

LEXICAL_WEIGHT = 0.6
SEMANTIC_WEIGHT = 0.4
LENGTH_RATIO_EXPONENT = 2
SCORE_PRECISION = 4
# Blending already-rounded signals can drift from the stored blend by a few quanta
BLEND_TOLERANCE = 5e-4

_QUANTUM = Decimal(1).scaleb(-SCORE_PRECISION)


def round_score(value: float) -> float:
    """Round half-up to SCORE_PRECISION decimal places."""
    return float(Decimal(repr(float(value))).quantize(_QUANTUM, rounding=ROUND_HALF_UP))


def blend(lexical_overlap: float, semantic_similarity: float, length_ratio: float) -> float:
    """Blended score: weighted signal mix, penalised by the squared length ratio."""
    base = LEXICAL_WEIGHT * lexical_overlap + SEMANTIC_WEIGHT * semantic_similarity
    return base * length_ratio**LENGTH_RATIO_EXPONENT


class ScoreResult(BaseModel):
    """Similarity of an (original, candidate) pair. All values in [0, 1]."""

    model_config = ConfigDict(frozen=True)

    lexical_overlap: float = Field(ge=0.0, le=1.0)
    semantic_similarity: float = Field(ge=0.0, le=1.0)
    length_ratio: float = Field(ge=0.0, le=1.0)
    blended: float = Field(ge=0.0, le=1.0)

    @model_validator(mode="after")
    def validate_blended(self) -> ScoreResult:
        expected = round_score(
            blend(self.lexical_overlap, self.semantic_similarity, self.length_ratio)
        )
        if abs(self.blended - expected) > BLEND_TOLERANCE:
            raise ValueError(
                f"blended={self.blended} does not match its signals (expected {expected})"
            )
        return self

    @classmethod
    def from_signals(
        cls,
        lexical_overlap: float,
        semantic_similarity: float,
        length_ratio: float,
    ) -> ScoreResult:
        """Build a result from raw signals; blended is always derived here."""
        blended = blend(lexical_overlap, semantic_similarity, length_ratio)
        return cls(
            lexical_overlap=round_score(lexical_overlap),
            semantic_similarity=round_score(semantic_similarity),
            length_ratio=round_score(length_ratio),
            blended=round_score(blended),
        )

    @classmethod
    def zero(cls) -> ScoreResult:
        return cls.from_signals(0.0, 0.0, 0.0)


class SentenceMatch(BaseModel):
    """Best target sentence for one source sentence."""

    model_config = ConfigDict(frozen=True)

    source_sentence_index: int = Field(ge=0)
    target_sentence_index: int = Field(ge=-1)
    score: float = Field(ge=0.0, le=1.0)


class TranslationError(BaseModel):
    """A translation that could not be produced."""

    model_config = ConfigDict(frozen=True)

    reason: str
    source_preview: str = ""


ScoreOutcome = Union[ScoreResult, TranslationError]
TranslationOutcome = Union[str, TranslationError]
