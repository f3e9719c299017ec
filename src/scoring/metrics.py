# src/scoring/metrics.py — v1
"""Surface-form similarity signals.

Both signals work on raw text. Punctuation attached to a word is part of the
token, so "today." and "today" do not overlap.
"""

from __future__ import annotations

import re

_WS_RE = re.compile(r"\s+")
# ASCII punctuation plus guillemets and low/high double quotes
_ISOLATED_PUNCT_RE = re.compile(r"""([.!?;,:'"()\[\]{}<>«»„”])""")


def lexical_overlap(original: str, candidate: str) -> float:
    """Unigram precision of ``candidate`` against the original's token set.

    The reference set is case-folded and de-duplicated. Every candidate token
    counts, repeats included. This is deliberately not BLEU: there is no
    brevity penalty and no n-gram clipping.
    """
    candidate_tokens = candidate.split()
    if not candidate_tokens:
        return 0.0
    reference = {token.casefold() for token in original.split()}
    hits = sum(1 for token in candidate_tokens if token.casefold() in reference)
    return hits / len(candidate_tokens)


def length_tokens(text: str) -> list[str]:
    """Tokens for length comparison: words plus each punctuation mark on its own."""
    text = _WS_RE.sub(" ", text)
    text = _ISOLATED_PUNCT_RE.sub(r" \1 ", text)
    return text.split()


def length_ratio(original: str, candidate: str) -> float:
    """min/max of the two token counts; 0.0 when either side is empty."""
    n1 = len(length_tokens(original))
    n2 = len(length_tokens(candidate))
    if n1 == 0 or n2 == 0:
        return 0.0
    return min(n1, n2) / max(n1, n2)
