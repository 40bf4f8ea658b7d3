"""Earth mover's distance k-means that skips centroids ruled out by the triangle inequality."""

from __future__ import annotations

import logging
from typing import Any

import numpy as np

from .common import (
    ClusteringError,
    KMeansResult,
    relative_change,
    update_centroids,
    validate_cluster_count,
)
from .emd import _byte_values, _emd_matrix
from .inertia import inertia_emd
from .initialization import _histograms, kmeans_plusplus_emd

_log = logging.getLogger(__name__)

_UNREACHED = np.finfo(np.float64).max


def _assign(
    histograms: np.ndarray,
    centroids: np.ndarray,
    min_distances: np.ndarray,
    generator: np.random.Generator,
) -> tuple[np.ndarray, np.ndarray]:
    """Label each histogram, measuring only centroids whose bound beats its last distance.

    Every histogram draws a random reference centroid.  A centroid is measured
    only when the distance to the reference plus the reference's distance to
    that centroid is below the histogram's recorded minimum; the others count
    as unreachable.  Returns the new labels and the new recorded minima.
    """
    count = len(histograms)
    k = len(centroids)
    distances = _emd_matrix(histograms, centroids)
    between = _emd_matrix(centroids, centroids)
    reference = generator.integers(k, size=count)
    rows = np.arange(count)

    bounds = distances[rows, reference][:, None] + between[reference]
    candidates = np.where(bounds < min_distances[:, None], distances, _UNREACHED)
    best = np.argmin(candidates, axis=1)
    return best.astype(np.uint16), candidates[rows, best]


def _kmeans_emd_triangle(
    data: Any,
    histogram_size: int,
    k: int,
    max_iters: int,
    convergence_threshold: float,
    rng: Any,
    precise: bool,
) -> KMeansResult:
    count = validate_cluster_count(data, histogram_size, k)
    if not precise and max_iters % 2 == 0:
        raise ClusteringError("Please use an odd number of iterations")
    generator = np.random.default_rng(rng)
    histograms = _histograms(data, histogram_size)

    centroids = kmeans_plusplus_emd(histograms, histogram_size, k, generator)
    _log.info("initialized kmeans++")
    labels = np.zeros(count, dtype=np.uint16)
    previous = centroids.copy()
    min_distances = np.full(count, _UNREACHED)

    for iteration in range(max_iters):
        labels, min_distances = _assign(histograms, centroids, min_distances, generator)
        centroids = update_centroids(histograms, histogram_size, labels, centroids, generator)

        # Only odd iterations of the byte variant are checked for convergence.
        if not precise and (iteration == 0 or iteration % 2 == 0):
            continue

        change = relative_change(centroids, previous)
        if change < convergence_threshold:
            _log.info("Converged after %d iterations", iteration + 1)
            break
        previous = centroids.copy()

        if precise:
            inertia = inertia_emd(histograms, histogram_size, centroids, labels)
            _log.info(
                "Finished iteration %d with an inertia of %s and frobenius norm of %s",
                iteration,
                inertia,
                change,
            )
        elif (iteration - 1) % 10 == 0:
            inertia = inertia_emd(histograms, histogram_size, centroids, labels)
            _log.info("Finished iteration %d with an inertia of %s", iteration, inertia)

    inertia = inertia_emd(histograms, histogram_size, centroids, labels)
    return KMeansResult(centroids, labels, inertia)


def kmeans_emd_triangle_inequality(
    data: Any,
    histogram_size: int,
    k: int,
    max_iters: int,
    convergence_threshold: float,
    rng: Any = None,
) -> KMeansResult:
    """Cluster byte-valued histograms by earth mover's distance with triangle-inequality pruning.

    *max_iters* must be odd; convergence is checked after odd-numbered iterations only.
    """
    return _kmeans_emd_triangle(
        _byte_values(data), histogram_size, k, max_iters, convergence_threshold, rng, False
    )


def kmeans_emd_triangle_inequality_precise(
    data: Any,
    histogram_size: int,
    k: int,
    max_iters: int,
    convergence_threshold: float,
    rng: Any = None,
) -> KMeansResult:
    """Cluster floating-point histograms by earth mover's distance with triangle-inequality pruning."""
    return _kmeans_emd_triangle(
        np.asarray(data, dtype=np.float64).ravel(),
        histogram_size,
        k,
        max_iters,
        convergence_threshold,
        rng,
        True,
    )