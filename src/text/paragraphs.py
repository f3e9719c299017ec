# src/text/paragraphs.py — v1
"""Paragraph segmentation for whole texts.

Paragraphs are separated by two or more line breaks. Source-language (Hebrew)
paragraphs get their punctuation canonicalized; for English texts, paragraphs
that are entirely German (umlauts and no common English word) are dropped,
since the lecture sources interleave untranslated German quotations.
"""

from __future__ import annotations

import logging
import re
from typing import Literal

from bialign.text.normalizer import normalize_punctuation

logger = logging.getLogger(__name__)

_PARAGRAPH_BREAK_RE = re.compile(r"(?:\s*\n\s*){2,}")
_GERMAN_CHARS_RE = re.compile(r"[äöüßÄÖÜ]")
_ENGLISH_WORD_RE = re.compile(
    r"\b(the|and|is|are|to|of|in|that|it|for|on|with|as|was|at|by|an|be|this|"
    r"have|from|or|one|had|not|but|all|were|they|you|her|his|can|my|their|so|"
    r"me|if|we|do|no|will|just|has|him|out|up|about|who|get|which|go|when|make|"
    r"like|time|could|into|then|than|now|only|its|over|also|back|after|use|two|"
    r"how|our|work|first|well|way|even|new|want|because|any|these|give|day|most|us)\b",
    re.IGNORECASE,
)


def is_german_only(paragraph: str) -> bool:
    """True if the paragraph has German characters and no common English word."""
    return bool(_GERMAN_CHARS_RE.search(paragraph)) and not _ENGLISH_WORD_RE.search(paragraph)


def parse_paragraphs(
    text: str | None,
    language: Literal["english", "hebrew"],
) -> list[str]:
    """Split a text into paragraphs, applying per-language clean-up."""
    if not text:
        return []
    paragraphs = [p.strip() for p in _PARAGRAPH_BREAK_RE.split(text)]
    paragraphs = [p for p in paragraphs if p]

    if language == "english":
        kept = [p for p in paragraphs if not is_german_only(p)]
        if len(kept) != len(paragraphs):
            logger.debug("Dropped %d German-only paragraphs", len(paragraphs) - len(kept))
        return kept

    return [normalize_punctuation(p) for p in paragraphs]
