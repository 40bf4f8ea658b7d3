import numpy as np
import pytest

from histocluster.distance import earth_movers_distance, euclidean_distance


def test_euclidean_pythagorean_triple():
    assert euclidean_distance([0, 0], [3, 4]) == pytest.approx(5.0)


def test_emd_moving_mass_across_bins():
    assert earth_movers_distance([1, 0, 0], [0, 0, 1]) == pytest.approx(2.0)


@pytest.mark.parametrize("func", [euclidean_distance, earth_movers_distance])
def test_identical_histograms_have_zero_distance(func):
    hist = [5.0, 1.5, 0.0, 7.25]
    assert func(hist, hist) == 0.0


@pytest.mark.parametrize("func", [euclidean_distance, earth_movers_distance])
def test_distance_is_symmetric(func):
    rng = np.random.default_rng(3)
    a = rng.random(12)
    b = rng.random(12)
    assert func(a, b) == pytest.approx(func(b, a))


@pytest.mark.parametrize("func", [euclidean_distance, earth_movers_distance])
def test_triangle_inequality_holds(func):
    rng = np.random.default_rng(11)
    for _ in range(20):
        a, b, c = rng.random((3, 8))
        assert func(a, c) <= func(a, b) + func(b, c) + 1e-12


@pytest.mark.parametrize("func", [euclidean_distance, earth_movers_distance])
def test_longer_input_is_truncated_to_common_length(func):
    short = [1.0, 2.0, 3.0]
    longer = [3.0, 2.0, 1.0, 100.0, 200.0]
    assert func(short, longer) == pytest.approx(func(short, longer[:3]))


@pytest.mark.parametrize("func", [euclidean_distance, earth_movers_distance])
def test_bytes_are_read_as_unsigned_values(func):
    raw_a = bytes([10, 200, 0])
    raw_b = bytes([0, 255, 30])
    assert func(raw_a, raw_b) == pytest.approx(func([10, 200, 0], [0, 255, 30]))


def test_emd_of_single_bin_shift_equals_moved_mass():
    assert earth_movers_distance([0, 4, 0, 0], [0, 0, 4, 0]) == pytest.approx(4.0)


def test_emd_grows_with_shift_distance():
    base = [1, 0, 0, 0, 0]
    near = [0, 1, 0, 0, 0]
    far = [0, 0, 0, 0, 1]
    assert earth_movers_distance(base, near) < earth_movers_distance(base, far)


def test_empty_inputs_give_zero():
    assert euclidean_distance([], []) == 0.0
    assert earth_movers_distance([], []) == 0.0