"""k-means++ seeding of centroids from flat histogram data."""

from __future__ import annotations

from typing import Any, Callable

import numpy as np

from .distance import _as_float_array

_RowDistance = Callable[[np.ndarray, np.ndarray], np.ndarray]


def _histograms(data: Any, histogram_size: int) -> np.ndarray:
    if histogram_size <= 0:
        raise ValueError("histogram_size must be positive")
    flat = _as_float_array(data)
    count = flat.size // histogram_size
    return flat[: count * histogram_size].reshape(count, histogram_size)


def _euclidean_rows(histograms: np.ndarray, centroid: np.ndarray) -> np.ndarray:
    diff = histograms - centroid
    return np.sqrt((diff * diff).sum(axis=1))


def _emd_rows(histograms: np.ndarray, centroid: np.ndarray) -> np.ndarray:
    return np.abs(np.cumsum(histograms - centroid, axis=1)).sum(axis=1)


def _kmeans_plusplus(
    data: Any, histogram_size: int, k: int, rng: Any, distance_to: _RowDistance
) -> np.ndarray:
    histograms = _histograms(data, histogram_size)
    count = len(histograms)
    if count == 0:
        raise ValueError("data holds no complete histogram")
    generator = np.random.default_rng(rng)

    chosen = [int(generator.integers(count))]
    min_distances = np.full(count, np.inf)
    for _ in range(1, k):
        min_distances = np.minimum(min_distances, distance_to(histograms, histograms[chosen[-1]]))
        total = min_distances.sum()
        if not np.isfinite(total) or total <= 0:
            raise ValueError("every histogram is already at distance zero from a centroid")
        chosen.append(int(generator.choice(count, p=min_distances / total)))
    return histograms[chosen].copy()


def kmeans_plusplus_euclidean(data: Any, histogram_size: int, k: int, rng: Any = None) -> np.ndarray:
    """Pick k starting centroids, each weighted by its Euclidean distance to the nearest pick."""
    return _kmeans_plusplus(data, histogram_size, k, rng, _euclidean_rows)


def kmeans_plusplus_emd(data: Any, histogram_size: int, k: int, rng: Any = None) -> np.ndarray:
    """Pick k starting centroids, each weighted by its earth mover's distance to the nearest pick."""
    return _kmeans_plusplus(data, histogram_size, k, rng, _emd_rows)