import logging

import numpy as np
import pytest

from histocluster.common import ClusteringError
from histocluster.runner import RunSummary, run_kmeans, run_kmeans_precise

DATA = bytes([0, 0, 0, 1, 1, 0, 50, 50, 51, 50, 50, 51])
SIZE = 2


class Recorder:
    def __init__(self):
        self.calls = []

    def __call__(self, labels, centroids, round_index, initialization_index):
        self.calls.append((np.asarray(labels).copy(), np.asarray(centroids).copy(),
                           round_index, initialization_index))


@pytest.mark.parametrize(
    "triangle,euclidean",
    [(False, False), (False, True), (True, False), (True, True)],
)
def test_best_is_minimum_inertia(triangle, euclidean):
    summary = run_kmeans(DATA, SIZE, 2, 2, 5, 0.0001, 3, triangle, euclidean, False, rng=7)
    assert len(summary.inertia_per_initialization) == 3
    assert summary.best_inertia == min(summary.inertia_per_initialization)
    index = summary.best_initialization_index
    assert summary.inertia_per_initialization[index] == summary.best_inertia
    assert summary.best_result.inertia == summary.best_inertia
    assert len(summary.best_result.labels) == 6


def test_save_every_initialization():
    recorder = Recorder()
    run_kmeans(DATA, SIZE, 3, 2, 5, 0.0001, 4, False, True, False, save=recorder, rng=1)
    assert [call[3] for call in recorder.calls] == [0, 1, 2, 3]
    assert all(call[2] == 3 for call in recorder.calls)
    assert all(len(call[0]) == 6 for call in recorder.calls)


def test_save_only_best():
    recorder = Recorder()
    summary = run_kmeans(DATA, SIZE, 2, 2, 5, 0.0001, 4, False, False, True,
                         save=recorder, rng=2)
    assert len(recorder.calls) == 1
    labels, centroids, round_index, index = recorder.calls[0]
    assert round_index == 2
    assert index == summary.best_initialization_index
    np.testing.assert_array_equal(labels, summary.best_result.labels)
    np.testing.assert_array_equal(centroids, summary.best_result.centroids)


def test_separated_groups_share_labels():
    summary = run_kmeans(DATA, SIZE, 1, 2, 9, 0.0001, 5, False, True, True, rng=3)
    labels = summary.best_result.labels
    assert labels[0] == labels[1] == labels[2]
    assert labels[3] == labels[4] == labels[5]
    assert labels[0] != labels[3]


def test_too_many_clusters():
    with pytest.raises(ClusteringError):
        run_kmeans(DATA, SIZE, 1, 7, 5, 0.0001, 1, False, True, False, rng=0)


def test_even_iterations_rejected_for_byte_emd_triangle():
    with pytest.raises(ClusteringError):
        run_kmeans(DATA, SIZE, 1, 2, 4, 0.0001, 1, True, False, False, rng=0)


def test_zero_initializations_saves_empty_best():
    recorder = Recorder()
    summary = run_kmeans(DATA, SIZE, 1, 2, 5, 0.0001, 0, False, True, True,
                         save=recorder, rng=0)
    assert summary.inertia_per_initialization == []
    assert summary.best_result is None
    assert len(recorder.calls) == 1
    assert recorder.calls[0][0].size == 0
    assert recorder.calls[0][3] == 0


@pytest.mark.parametrize("triangle", [False, True])
def test_precise_runs(triangle):
    data = np.array([0.1, 0.9, 0.2, 0.8, 0.9, 0.1, 0.8, 0.2])
    recorder = Recorder()
    summary = run_kmeans_precise(data, SIZE, 1, 2, 6, 0.0001, 2, triangle, False,
                                 save=recorder, rng=5)
    assert len(recorder.calls) == 2
    assert summary.best_inertia == min(summary.inertia_per_initialization)
    assert summary.best_result.centroids.shape == (2, SIZE)


def test_precise_too_many_clusters():
    with pytest.raises(ClusteringError):
        run_kmeans_precise([0.5, 0.5], SIZE, 1, 2, 3, 0.0001, 1, False, False, rng=0)


def test_logs_best_initialization(caplog):
    with caplog.at_level(logging.INFO, logger="histocluster"):
        summary = run_kmeans(DATA, SIZE, 1, 2, 5, 0.0001, 2, False, True, False, rng=4)
    messages = [record.getMessage() for record in caplog.records]
    expected = (
        f"Best initialization is index #{summary.best_initialization_index} "
        f"with {summary.best_inertia} inertia"
    )
    assert expected in messages
    assert "Finished all initializations!" in messages


def test_summary_defaults():
    summary = RunSummary()
    assert summary.inertia_per_initialization == []
    assert summary.best_initialization_index == 0
    assert summary.best_result is None