"""Total distance of clustered histograms from their assigned centroids."""

from __future__ import annotations

from typing import Any

import numpy as np

from .distance import _as_float_array


def _assigned_pairs(
    data: Any, histogram_size: int, centroids: Any, labels: Any
) -> tuple[np.ndarray, np.ndarray]:
    """Return each labelled histogram alongside the centroid it is assigned to."""
    if histogram_size <= 0:
        raise ValueError("histogram_size must be positive")
    flat = _as_float_array(data)
    label_array = np.asarray(labels, dtype=np.intp).ravel()
    count = label_array.size
    if count == 0:
        empty = np.zeros((0, histogram_size))
        return empty, empty
    needed = count * histogram_size
    if flat.size < needed:
        raise ValueError(
            f"data holds {flat.size // histogram_size} histograms but {count} labels were given"
        )
    points = flat[:needed].reshape(count, histogram_size)

    centroid_array = np.asarray(centroids, dtype=np.float64)
    if centroid_array.ndim != 2:
        raise ValueError("centroids must be a two-dimensional collection")
    if label_array.min() < 0 or label_array.max() >= centroid_array.shape[0]:
        raise IndexError("label refers to a centroid that does not exist")
    assigned = centroid_array[label_array]
    width = min(histogram_size, centroid_array.shape[1])
    return points[:, :width], assigned[:, :width]


def inertia_emd(data: Any, histogram_size: int, centroids: Any, labels: Any) -> float:
    """Sum of earth mover's distances from each histogram to its centroid."""
    points, assigned = _assigned_pairs(data, histogram_size, centroids, labels)
    return float(np.abs(np.cumsum(points - assigned, axis=1)).sum())


def inertia_euclidean(data: Any, histogram_size: int, centroids: Any, labels: Any) -> float:
    """Sum of Euclidean distances from each histogram to its centroid."""
    points, assigned = _assigned_pairs(data, histogram_size, centroids, labels)
    diff = points - assigned
    return float(np.sqrt((diff * diff).sum(axis=1)).sum())