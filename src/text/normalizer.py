# src/text/normalizer.py — v1
"""Canonical text forms for comparison.

``normalize`` feeds the embedding comparison only. Lexical overlap and length
ratio are computed on the raw text so punctuation and casing still count.
"""

from __future__ import annotations

import re
import unicodedata

# Hebrew points and cantillation marks (niqqud, te'amim)
_DIACRITICS_RE = re.compile(r"[\u0591-\u05C7]")
# . , ; : ! ? ( ) " ' - and the Hebrew maqaf
_PUNCT_RE = re.compile(r"[.,;:!?()\"'\-\u05BE]")
_WS_RE = re.compile(r"\s+")


def normalize(text: str, strip_diacritics: bool = True) -> str:
    """Normalize text for semantic comparison.

    Steps: NFC composition, optional diacritic removal, punctuation removal,
    whitespace collapse, lowercase, trim.
    """
    text = unicodedata.normalize("NFC", text)
    if strip_diacritics:
        text = _DIACRITICS_RE.sub("", text)
    text = _PUNCT_RE.sub("", text)
    text = _WS_RE.sub(" ", text)
    return text.lower().strip()


_DASHES_RE = re.compile(r"[\u2010-\u2015]")
_SINGLE_QUOTES_RE = re.compile(r"[\u2018\u2019\u201A\u201B\u2039\u203A]")
_DOUBLE_QUOTES_RE = re.compile(r"[\u201C\u201D\u201E\u201F\u00AB\u00BB]")
_SPACE_BEFORE_PUNCT_RE = re.compile(r"\s+([.,;!?:%])")
_MISSING_SPACE_AFTER_PUNCT_RE = re.compile(r"([.,;!?:%])(?=[^\s.,;!?:%])")
_SINGLE_NEWLINE_RE = re.compile(r"([^\n])\n([^\n])")
_SPACES_RE = re.compile(r" +")


def normalize_punctuation(text: str) -> str:
    """Canonicalize typographic punctuation and spacing in a paragraph.

    Dashes become '-', curly/angle quotes become ASCII quotes, the ellipsis
    character becomes '...', spacing around punctuation is fixed and single
    line breaks are joined.
    """
    text = _DASHES_RE.sub("-", text)
    text = _SINGLE_QUOTES_RE.sub("'", text)
    text = _DOUBLE_QUOTES_RE.sub('"', text)
    text = text.replace("\u2026", "...")
    text = _SPACE_BEFORE_PUNCT_RE.sub(r"\1", text)
    text = _MISSING_SPACE_AFTER_PUNCT_RE.sub(r"\1 ", text)
    text = _SINGLE_NEWLINE_RE.sub(r"\1 \2", text)
    text = _SPACES_RE.sub(" ", text)
    return text.strip()
