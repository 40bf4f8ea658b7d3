"""k-means clustering of histograms under the earth mover's distance."""

from __future__ import annotations

import logging
from typing import Any

import numpy as np

from .common import KMeansResult, relative_change, update_centroids, validate_cluster_count
from .inertia import inertia_emd
from .initialization import _histograms, kmeans_plusplus_emd

_log = logging.getLogger(__name__)


def _byte_values(data: Any) -> Any:
    """Return *data* unchanged if it holds only octets, otherwise raise ValueError."""
    if isinstance(data, (bytes, bytearray, memoryview)):
        return data
    values = np.asarray(data)
    if values.size and (
        not np.all(np.isfinite(values.astype(np.float64)))
        or not np.all(values == np.round(values))
        or values.min() < 0
        or values.max() > 255
    ):
        raise ValueError("byte histograms must hold whole numbers from 0 to 255")
    return values.astype(np.uint8)


def _emd_matrix(histograms: np.ndarray, centroids: np.ndarray) -> np.ndarray:
    """Earth mover's distances, one row per histogram and one column per centroid."""
    return np.stack(
        [np.abs(np.cumsum(histograms - centroid, axis=1)).sum(axis=1) for centroid in centroids],
        axis=1,
    )


def _kmeans_emd(
    data: Any,
    histogram_size: int,
    k: int,
    max_iters: int,
    convergence_threshold: float,
    rng: Any,
    precise: bool,
) -> KMeansResult:
    count = validate_cluster_count(data, histogram_size, k)
    generator = np.random.default_rng(rng)
    histograms = _histograms(data, histogram_size)

    centroids = kmeans_plusplus_emd(histograms, histogram_size, k, generator)
    if not precise:
        _log.info("initial centroids: %s", centroids.tolist())
    _log.info("initialized kmeans++")
    labels = np.zeros(count, dtype=np.uint16)
    previous = centroids.copy()

    for iteration in range(max_iters):
        if iteration > 0 and iteration % 10 == 0:
            _log.info("Finished iteration %d", iteration)

        labels = np.argmin(_emd_matrix(histograms, centroids), axis=1).astype(np.uint16)
        centroids = update_centroids(histograms, histogram_size, labels, centroids, generator)

        change = relative_change(centroids, previous)
        if change < convergence_threshold:
            _log.info("Converged after %d iterations", iteration + 1)
            break
        previous = centroids.copy()

        inertia = inertia_emd(histograms, histogram_size, centroids, labels)
        if precise:
            _log.info(
                "iteration: %d inertia: %s frobenius norm: %s", iteration, inertia, change
            )
        else:
            _log.info("inertia: %s", inertia)

    inertia = inertia_emd(histograms, histogram_size, centroids, labels)
    return KMeansResult(centroids, labels, inertia)


def kmeans_emd(
    data: Any,
    histogram_size: int,
    k: int,
    max_iters: int,
    convergence_threshold: float,
    rng: Any = None,
) -> KMeansResult:
    """Cluster byte-valued histograms in *data* into *k* groups by earth mover's distance."""
    return _kmeans_emd(
        _byte_values(data), histogram_size, k, max_iters, convergence_threshold, rng, False
    )


def kmeans_emd_precise(
    data: Any,
    histogram_size: int,
    k: int,
    max_iters: int,
    convergence_threshold: float,
    rng: Any = None,
) -> KMeansResult:
    """Cluster floating-point histograms in *data* into *k* groups by earth mover's distance."""
    return _kmeans_emd(
        np.asarray(data, dtype=np.float64).ravel(),
        histogram_size,
        k,
        max_iters,
        convergence_threshold,
        rng,
        True,
    )