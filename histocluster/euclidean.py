"""k-means clustering of histograms under the Euclidean (L2) distance."""

from __future__ import annotations

import logging
from typing import Any

import numpy as np

from .common import KMeansResult, relative_change, update_centroids, validate_cluster_count
from .inertia import inertia_euclidean
from .initialization import _histograms, kmeans_plusplus_euclidean

_log = logging.getLogger(__name__)


def _squared_distances(histograms: np.ndarray, centroids: np.ndarray) -> np.ndarray:
    """Matrix of squared distances, one row per histogram and one column per centroid."""
    return np.stack(
        [np.square(histograms - centroid).sum(axis=1) for centroid in centroids], axis=1
    )


def kmeans_euclidean(
    data: Any,
    histogram_size: int,
    k: int,
    max_iters: int,
    convergence_threshold: float,
    rng: Any = None,
) -> KMeansResult:
    """Cluster the histograms in *data* into *k* groups by Euclidean distance."""
    count = validate_cluster_count(data, histogram_size, k)
    generator = np.random.default_rng(rng)
    histograms = _histograms(data, histogram_size)

    centroids = kmeans_plusplus_euclidean(histograms, histogram_size, k, generator)
    _log.info("initialized kmeans++")
    labels = np.zeros(count, dtype=np.uint16)
    previous = centroids.copy()

    for iteration in range(max_iters):
        distances = _squared_distances(histograms, centroids)
        labels = np.argmin(distances, axis=1).astype(np.uint16)
        centroids = update_centroids(histograms, histogram_size, labels, centroids, generator)

        if relative_change(centroids, previous) < convergence_threshold:
            _log.info("Converged after %d iterations", iteration + 1)
            break
        previous = centroids.copy()

        if iteration > 0 and iteration % 10 == 0:
            inertia = inertia_euclidean(histograms, histogram_size, centroids, labels)
            _log.info("Finished iteration %d with an inertia of %s", iteration, inertia)

    inertia = inertia_euclidean(histograms, histogram_size, centroids, labels)
    return KMeansResult(centroids, labels, inertia)


def kmeans_euclidean_triangle_inequality(
    data: Any,
    histogram_size: int,
    k: int,
    max_iters: int,
    convergence_threshold: float,
    rng: Any = None,
) -> KMeansResult:
    """Euclidean k-means that keeps each histogram's label unless a centroid beats its bound.

    Every histogram remembers the squared distance recorded when its label last
    changed; it moves only to a centroid strictly closer than that bound.
    """
    count = validate_cluster_count(data, histogram_size, k)
    generator = np.random.default_rng(rng)
    histograms = _histograms(data, histogram_size)

    centroids = kmeans_plusplus_euclidean(histograms, histogram_size, k, generator)
    _log.info("initialized kmeans++")
    labels = np.zeros(count, dtype=np.uint16)
    previous = centroids.copy()
    min_squared = np.full(count, np.finfo(np.float64).max)

    for iteration in range(max_iters):
        distances = _squared_distances(histograms, centroids)
        closer = distances < min_squared[:, None]
        candidates = np.argmin(np.where(closer, distances, np.inf), axis=1)
        moved = closer.any(axis=1) & (candidates != labels)
        min_squared[moved] = distances[moved, candidates[moved]]
        labels[moved] = candidates[moved]

        centroids = update_centroids(histograms, histogram_size, labels, centroids, generator)

        change = relative_change(centroids, previous)
        if change < convergence_threshold:
            _log.info("Converged after %d iterations", iteration + 1)
            break
        previous = centroids.copy()

        inertia = inertia_euclidean(histograms, histogram_size, centroids, labels)
        _log.info(
            "Finished iteration %d with an inertia of %s and frobenius_norm of %s",
            iteration,
            inertia,
            change,
        )

    inertia = inertia_euclidean(histograms, histogram_size, centroids, labels)
    return KMeansResult(centroids, labels, inertia)