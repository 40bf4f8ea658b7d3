"""k-means clustering of flat histogram data with earth mover's and Euclidean distances."""

__version__ = "0.1.0"

__all__ = [
    "common",
    "distance",
    "emd",
    "emd_triangle",
    "euclidean",
    "inertia",
    "initialization",
    "logger",
    "runner",
]