# src/text/sentence_splitter.py — v1
"""Sentence segmentation on terminal punctuation."""

from __future__ import annotations

import re

# Record separator: never present in prose, unlike '|'
_SENTINEL = "\x1e"
_BOUNDARY_RE = re.compile(r"([.?!])(?=\s|$)")


def split_sentences(paragraph: str) -> list[str]:
    """Split a paragraph into trimmed, non-empty sentences.

    A boundary is a '.', '?' or '!' followed by whitespace or the end of the
    text. Text without terminal punctuation is returned as a single sentence.
    """
    if not paragraph:
        return []
    marked = _BOUNDARY_RE.sub(lambda m: m.group(1) + _SENTINEL, paragraph)
    pieces = (piece.strip() for piece in marked.split(_SENTINEL))
    return [piece for piece in pieces if piece]
