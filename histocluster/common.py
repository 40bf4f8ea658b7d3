"""Pieces shared by the k-means variants: results, errors, centroid updates, convergence."""

from __future__ import annotations

import math
from dataclasses import dataclass
from typing import Any

import numpy as np

from .initialization import _histograms


class ClusteringError(ValueError):
    """Raised when a clustering run cannot be carried out with the given parameters."""


@dataclass(frozen=True)
class KMeansResult:
    """Outcome of one k-means run."""

    centroids: np.ndarray
    labels: np.ndarray
    inertia: float


def frobenius_norm(centroids: Any, prev_centroids: Any) -> float:
    """Frobenius norm of the difference between two sets of centroids."""
    current = np.asarray(centroids, dtype=np.float64)
    previous = np.asarray(prev_centroids, dtype=np.float64)
    if current.shape != previous.shape:
        raise ValueError(
            f"centroid sets differ in shape: {current.shape} and {previous.shape}"
        )
    diff = current - previous
    return float(np.sqrt(np.sum(diff * diff)))


def relative_change(centroids: Any, prev_centroids: Any) -> float:
    """Movement of the centroids relative to the norm of the new centroids.

    Zero over zero gives NaN and a positive change over zero gives infinity,
    so an all-zero set of centroids never counts as converged.
    """
    change = frobenius_norm(centroids, prev_centroids)
    norm = float(np.sqrt(np.sum(np.square(np.asarray(centroids, dtype=np.float64)))))
    if norm == 0.0:
        return math.nan if change == 0.0 else math.inf
    return change / norm


def validate_cluster_count(data: Any, histogram_size: int, k: int) -> int:
    """Check that *k* clusters can be formed and return the number of histograms."""
    count = len(_histograms(data, histogram_size))
    if k < 1:
        raise ClusteringError("Number of clusters must be at least one")
    if k > count:
        raise ClusteringError(
            "Number of clusters cannot be greater than the number of data points"
        )
    return count


def update_centroids(
    data: Any, histogram_size: int, labels: Any, centroids: Any, rng: Any = None
) -> np.ndarray:
    """Move each centroid to the mean of its histograms.

    A centroid left without histograms is replaced by a randomly chosen histogram.
    """
    histograms = _histograms(data, histogram_size)
    label_array = np.asarray(labels, dtype=np.intp).ravel()
    k = len(centroids)
    if label_array.size > len(histograms):
        raise ValueError(
            f"{label_array.size} labels given for {len(histograms)} histograms"
        )
    if label_array.size and (label_array.min() < 0 or label_array.max() >= k):
        raise IndexError("label refers to a centroid that does not exist")

    points = histograms[: label_array.size]
    sums = np.zeros((k, histogram_size))
    np.add.at(sums, label_array, points)
    sizes = np.bincount(label_array, minlength=k)

    updated = np.empty_like(sums)
    filled = sizes > 0
    updated[filled] = sums[filled] / sizes[filled, None]

    empty = np.flatnonzero(~filled)
    if empty.size:
        if len(histograms) == 0:
            raise ValueError("data holds no complete histogram")
        generator = np.random.default_rng(rng)
        updated[empty] = histograms[generator.integers(len(histograms), size=empty.size)]
    return updated