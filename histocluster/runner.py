"""Repeated k-means runs that keep the best initialization and hand results to a saver."""

from __future__ import annotations

import logging
import sys
from dataclasses import dataclass, field
from typing import Any, Callable, Optional

import numpy as np

from .common import KMeansResult
from .emd import kmeans_emd, kmeans_emd_precise
from .emd_triangle import (
    kmeans_emd_triangle_inequality,
    kmeans_emd_triangle_inequality_precise,
)
from .euclidean import kmeans_euclidean, kmeans_euclidean_triangle_inequality

_log = logging.getLogger(__name__)

SaveCallback = Callable[[np.ndarray, np.ndarray, int, int], None]
_Algorithm = Callable[..., KMeansResult]


@dataclass
class RunSummary:
    """What came of a series of k-means initializations."""

    inertia_per_initialization: list[float] = field(default_factory=list)
    best_initialization_index: int = 0
    best_inertia: float = sys.float_info.max
    best_result: Optional[KMeansResult] = None


def _run(
    algorithm: _Algorithm,
    description: str,
    data: Any,
    histogram_size: int,
    round_index: int,
    k: int,
    max_iters: int,
    convergence_threshold: float,
    num_initializations: int,
    only_save_best: bool,
    save: Optional[SaveCallback],
    rng: Any,
) -> RunSummary:
    generator = np.random.default_rng(rng)
    summary = RunSummary()

    for initialization_index in range(num_initializations):
        _log.info("Starting KMeans with %s", description)
        result = algorithm(
            data, histogram_size, k, max_iters, convergence_threshold, generator
        )

        if not only_save_best and save is not None:
            save(result.labels, result.centroids, round_index, initialization_index)
        if result.inertia < summary.best_inertia:
            summary.best_inertia = result.inertia
            summary.best_initialization_index = initialization_index
            summary.best_result = result
        summary.inertia_per_initialization.append(result.inertia)

        _log.info(
            "Finished KMeans for initialization #%d - Inertia: %s",
            initialization_index,
            result.inertia,
        )

    _log.info("Finished all initializations!")
    _log.info("Inertia per initialization: %s", summary.inertia_per_initialization)
    _log.info(
        "Best initialization is index #%d with %s inertia",
        summary.best_initialization_index,
        summary.best_inertia,
    )

    if only_save_best and save is not None:
        best = summary.best_result
        if best is None:
            labels = np.zeros(0, dtype=np.uint16)
            centroids = np.zeros((0, histogram_size))
        else:
            labels, centroids = best.labels, best.centroids
        save(labels, centroids, round_index, summary.best_initialization_index)

    return summary


def run_kmeans(
    data: Any,
    histogram_size: int,
    round_index: int,
    k: int,
    max_iters: int,
    convergence_threshold: float,
    num_initializations: int,
    triangle_inequality: bool,
    euclidean: bool,
    only_save_best: bool,
    save: Optional[SaveCallback] = None,
    rng: Any = None,
) -> RunSummary:
    """Cluster byte-valued histograms several times and report the best run.

    *save* receives (labels, centroids, round_index, initialization_index):
    once per run, or only for the best run when *only_save_best* is set.
    """
    if triangle_inequality:
        if euclidean:
            algorithm: _Algorithm = kmeans_euclidean_triangle_inequality
            description = "L2 (Euclidian) distance & triangle inequality"
        else:
            algorithm = kmeans_emd_triangle_inequality
            description = "Earth Mover's Distance & triangle inequality"
    elif euclidean:
        algorithm = kmeans_euclidean
        description = "L2 (Euclidian) distance"
    else:
        algorithm = kmeans_emd
        description = "Earth Mover's Distance"

    return _run(
        algorithm,
        description,
        data,
        histogram_size,
        round_index,
        k,
        max_iters,
        convergence_threshold,
        num_initializations,
        only_save_best,
        save,
        rng,
    )


def run_kmeans_precise(
    data: Any,
    histogram_size: int,
    round_index: int,
    k: int,
    max_iters: int,
    convergence_threshold: float,
    num_initializations: int,
    triangle_inequality: bool,
    only_save_best: bool,
    save: Optional[SaveCallback] = None,
    rng: Any = None,
) -> RunSummary:
    """Cluster floating-point histograms by earth mover's distance several times."""
    if triangle_inequality:
        algorithm: _Algorithm = kmeans_emd_triangle_inequality_precise
        description = "Earth Mover's Distance & triangle inequality"
    else:
        algorithm = kmeans_emd_precise
        description = "Earth Mover's Distance"

    return _run(
        algorithm,
        description,
        data,
        histogram_size,
        round_index,
        k,
        max_iters,
        convergence_threshold,
        num_initializations,
        only_save_best,
        save,
        rng,
    )