import numpy as np
import pytest

from neldermead.algebra import add, centroid, diff, scale
from neldermead.errors import ValidationError


def test_add_and_diff_elementwise():
    assert np.allclose(add([1.0, 2.0, 3.0], [5.0, 6.0, 7.0]), [6.0, 8.0, 10.0])
    assert np.allclose(diff([1.0, 2.0, 3.0], [5.0, 6.0, 7.0]), [-4.0, -4.0, -4.0])


def test_diff_then_add_restores_point():
    rng = np.random.default_rng(3)
    for _ in range(20):
        p = rng.normal(size=4) * 100
        q = rng.normal(size=4) * 100
        assert np.allclose(add(diff(p, q), q), p)


def test_scale():
    p = np.array([5.0, -6.0, 7.0])
    assert np.allclose(scale(2.0, p), [10.0, -12.0, 14.0])
    assert np.array_equal(scale(1, p), p)
    assert np.array_equal(scale(0, p), np.zeros(3))


def test_centroid_is_plain_mean():
    assert np.allclose(centroid([[1.0, 2.0, 3.0], [5.0, 6.0, 7.0]]), [3.0, 4.0, 5.0])
    p = np.array([0.3, -1.7])
    assert np.allclose(centroid([p]), p)
    assert np.allclose(centroid([p, p]), p)


def test_length_mismatch_is_rejected():
    # would broadcast silently in numpy
    with pytest.raises(ValidationError):
        add([1.0], [1.0, 2.0])
    with pytest.raises(ValidationError):
        diff([1.0, 2.0, 3.0], [1.0, 2.0])
    with pytest.raises(ValidationError):
        centroid([[1.0, 2.0], [1.0]])


def test_centroid_of_nothing():
    with pytest.raises(ValidationError):
        centroid([])
