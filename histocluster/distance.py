"""Distances between histograms."""

from __future__ import annotations

from typing import Any

import numpy as np


def _as_float_array(values: Any) -> np.ndarray:
    """Return *values* as a flat float64 array; raw bytes are read as unsigned octets."""
    if isinstance(values, (bytes, bytearray, memoryview)):
        return np.frombuffer(values, dtype=np.uint8).astype(np.float64)
    return np.asarray(values, dtype=np.float64).ravel()


def _paired(us: Any, them: Any) -> tuple[np.ndarray, np.ndarray]:
    a = _as_float_array(us)
    b = _as_float_array(them)
    n = min(a.size, b.size)
    return a[:n], b[:n]


def euclidean_distance(us: Any, them: Any) -> float:
    """L2 distance between two histograms, compared over their common length."""
    a, b = _paired(us, them)
    diff = a - b
    return float(np.sqrt(np.dot(diff, diff)))


def earth_movers_distance(us: Any, them: Any) -> float:
    """One-dimensional earth mover's distance: the summed gap of the running totals."""
    a, b = _paired(us, them)
    return float(np.abs(np.cumsum(a) - np.cumsum(b)).sum())