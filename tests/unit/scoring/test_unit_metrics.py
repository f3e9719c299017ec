# tests/unit/scoring/test_unit_metrics.py — v1
"""Tests for scoring/metrics.py — lexical overlap and length ratio."""

from __future__ import annotations

import pytest

from bialign.scoring.metrics import length_ratio, length_tokens, lexical_overlap


class TestLexicalOverlap:
    def test_identical(self):
        assert lexical_overlap("The cat sat.", "The cat sat.") == 1.0

    def test_case_insensitive(self):
        assert lexical_overlap("The cat sat.", "the CAT sat.") == 1.0

    def test_punctuation_is_part_of_token(self):
        assert lexical_overlap("The cat sat.", "The cat sat") == pytest.approx(2 / 3)

    def test_candidate_repeats_all_count(self):
        assert lexical_overlap("cat", "cat cat dog") == pytest.approx(2 / 3)

    def test_original_repeats_do_not_inflate(self):
        assert lexical_overlap("cat cat cat", "cat dog") == pytest.approx(0.5)

    def test_no_overlap(self):
        assert lexical_overlap("alpha beta", "gamma delta") == 0.0

    def test_empty_candidate(self):
        assert lexical_overlap("The cat sat.", "") == 0.0

    def test_empty_original(self):
        assert lexical_overlap("", "The cat sat.") == 0.0

    def test_no_brevity_penalty(self):
        # A one-word candidate fully contained in the original scores 1.0
        assert lexical_overlap("The weather is nice today.", "weather") == 1.0


class TestLengthTokens:
    def test_punctuation_isolated(self):
        assert length_tokens("Hello, world!") == ["Hello", ",", "world", "!"]

    def test_guillemets(self):
        assert length_tokens("«quote»") == ["«", "quote", "»"]

    def test_whitespace_collapsed(self):
        assert length_tokens("a \n\t b") == ["a", "b"]

    def test_empty(self):
        assert length_tokens("") == []


class TestLengthRatio:
    def test_equal_length(self):
        assert length_ratio("a b c", "x y z") == 1.0

    def test_half(self):
        assert length_ratio("a b c d", "a b") == 0.5

    def test_symmetric(self):
        assert length_ratio("a b", "a b c d") == length_ratio("a b c d", "a b")

    def test_punctuation_counts(self):
        # "The cat sat." -> 4 tokens, "The cat sat" -> 3
        assert length_ratio("The cat sat.", "The cat sat") == pytest.approx(0.75)

    def test_empty_side(self):
        assert length_ratio("", "a b") == 0.0
        assert length_ratio("a b", "") == 0.0
        assert length_ratio("", "") == 0.0
