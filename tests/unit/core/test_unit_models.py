# tests/unit/core/test_unit_models.py — v1
"""Tests for core/models.py — rounding, blending and result invariants."""

from __future__ import annotations

import itertools

import pytest
from pydantic import ValidationError

from bialign.core.models import (
    ScoreResult,
    SentenceMatch,
    TranslationError,
    blend,
    round_score,
)


class TestRoundScore:
    def test_four_places(self):
        assert round_score(2 / 3) == 0.6667

    def test_half_up(self):
        assert round_score(0.12345) == 0.1235
        assert round_score(0.00005) == 0.0001

    def test_exact_values_unchanged(self):
        assert round_score(1.0) == 1.0
        assert round_score(0.0) == 0.0


class TestBlend:
    def test_perfect(self):
        assert blend(1.0, 1.0, 1.0) == pytest.approx(1.0)

    def test_weights(self):
        assert blend(1.0, 0.0, 1.0) == pytest.approx(0.6)
        assert blend(0.0, 1.0, 1.0) == pytest.approx(0.4)

    def test_length_ratio_squared(self):
        assert blend(1.0, 1.0, 0.5) == pytest.approx(0.25)

    def test_zero_ratio_zeroes_score(self):
        assert blend(1.0, 1.0, 0.0) == 0.0

    def test_monotonic_in_each_signal(self):
        grid = [0.0, 0.25, 0.5, 0.75, 1.0]
        for lex, sem, ratio in itertools.product(grid, repeat=3):
            base = blend(lex, sem, ratio)
            if lex < 1.0:
                assert blend(min(lex + 0.25, 1.0), sem, ratio) >= base
            if sem < 1.0:
                assert blend(lex, min(sem + 0.25, 1.0), ratio) >= base
            if ratio < 1.0:
                assert blend(lex, sem, min(ratio + 0.25, 1.0)) >= base


class TestScoreResult:
    def test_from_signals_rounds(self):
        result = ScoreResult.from_signals(2 / 3, 0.123456, 1.0)
        assert result.lexical_overlap == 0.6667
        assert result.semantic_similarity == 0.1235
        assert result.length_ratio == 1.0

    def test_blended_uses_unrounded_signals(self):
        lex, sem, ratio = 2 / 3, 1 / 3, 5 / 6
        result = ScoreResult.from_signals(lex, sem, ratio)
        assert result.blended == round_score(blend(lex, sem, ratio))

    def test_zero(self):
        zero = ScoreResult.zero()
        assert zero.blended == 0.0
        assert zero.lexical_overlap == 0.0

    def test_frozen(self):
        result = ScoreResult.zero()
        with pytest.raises(ValidationError):
            result.blended = 0.5

    def test_out_of_range_rejected(self):
        with pytest.raises(ValidationError):
            ScoreResult(
                lexical_overlap=1.2, semantic_similarity=0.0, length_ratio=0.0, blended=0.0
            )

    def test_inconsistent_blended_rejected(self):
        with pytest.raises(ValidationError, match="does not match its signals"):
            ScoreResult(
                lexical_overlap=0.0, semantic_similarity=0.0, length_ratio=0.0, blended=1.0
            )

    def test_consistent_direct_construction_accepted(self):
        result = ScoreResult(
            lexical_overlap=0.5, semantic_similarity=1.0, length_ratio=0.5, blended=0.175
        )
        assert result.blended == 0.175

    @pytest.mark.parametrize(
        "lex,sem,ratio",
        [(0.33333, 0.66666, 0.77777), (0.99995, 0.00005, 0.99995), (0.12345, 0.98765, 0.55555)],
    )
    def test_from_signals_passes_blend_check(self, lex, sem, ratio):
        result = ScoreResult.from_signals(lex, sem, ratio)
        ScoreResult.model_validate(result.model_dump())


class TestSentenceMatch:
    def test_no_target(self):
        match = SentenceMatch(source_sentence_index=0, target_sentence_index=-1, score=0.0)
        assert match.target_sentence_index == -1

    def test_negative_source_rejected(self):
        with pytest.raises(ValidationError):
            SentenceMatch(source_sentence_index=-1, target_sentence_index=0, score=0.5)

    def test_target_below_minus_one_rejected(self):
        with pytest.raises(ValidationError):
            SentenceMatch(source_sentence_index=0, target_sentence_index=-2, score=0.5)


class TestTranslationError:
    def test_fields(self):
        err = TranslationError(reason="timed out", source_preview="abc")
        assert err.reason == "timed out"
        assert err.source_preview == "abc"

    def test_default_preview(self):
        assert TranslationError(reason="x").source_preview == ""
