# src/core/similarity.py — v1
"""Cosine similarity between embedding vectors (numpy)."""

from __future__ import annotations

import math

import numpy as np


def cosine_similarity(a: np.ndarray | list[float], b: np.ndarray | list[float]) -> float:
    """Cosine similarity of two vectors, in [-1, 1]. Zero vectors give 0.0."""
    va = np.asarray(a, dtype=np.float64)
    vb = np.asarray(b, dtype=np.float64)
    if va.shape != vb.shape:
        raise ValueError(f"Shape mismatch: {va.shape} vs {vb.shape}")
    norm_a = np.linalg.norm(va)
    norm_b = np.linalg.norm(vb)
    if norm_a == 0 or norm_b == 0:
        return 0.0
    return float(np.dot(va, vb) / (norm_a * norm_b))


def cosine_similarity_row(query: np.ndarray, candidates: np.ndarray) -> np.ndarray:
    """Cosine similarity of one vector against each row of a 2D array.

    Args:
        query: 1D array of shape (n_features,).
        candidates: 2D array of shape (n_candidates, n_features).

    Returns:
        1D array of shape (n_candidates,) with values in [-1, 1].
    """
    q = np.asarray(query, dtype=np.float64)
    c = np.asarray(candidates, dtype=np.float64)
    if c.ndim != 2:
        raise ValueError(f"Expected 2D candidates, got {c.ndim}D")
    if c.shape[0] == 0:
        return np.empty((0,), dtype=np.float64)
    q_norm = max(float(np.linalg.norm(q)), 1e-10)
    c_norms = np.maximum(np.linalg.norm(c, axis=1), 1e-10)
    return (c @ q) / (c_norms * q_norm)


def clamp_unit(value: float) -> float:
    """Clamp a similarity into [0, 1]; negative or NaN cosine counts as unrelated."""
    value = float(value)
    if math.isnan(value):
        return 0.0
    return max(0.0, min(1.0, value))
