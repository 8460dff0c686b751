import numpy as np
import pytest

from benchmarks.quadratic import plane, shifted_bowl, sphere_plus_five
from neldermead import (
    Bounds,
    Params,
    ValidationError,
    maximize,
    maximize_unbounded,
    minimize,
    minimize_unbounded,
)

TOL = 1e-5


def test_unbounded_bowl():
    x, fx = minimize_unbounded(shifted_bowl, [5.0, 5.0], 1.0, Params(), 1000, seed=1)
    assert np.allclose(x, [-1.0, 0.0], atol=TOL)
    assert fx == pytest.approx(0.0, abs=TOL)


def test_bounded_bowl_stops_at_corner():
    bounds = Bounds([0.0, 0.0], [10.0, 10.0])
    x, fx = minimize(shifted_bowl, [5.0, 5.0], 1.0, Params(), bounds, 1000, seed=1)
    assert np.allclose(x, [0.0, 0.0], atol=TOL)
    assert fx == pytest.approx(1.0, abs=TOL)


def test_bounded_maximize():
    def f(x):
        return -2.0 * shifted_bowl(x)

    x, fx = maximize(f, [5.0, 5.0], 1.0, Params(), [(0.0, 10.0), (0.0, 10.0)], 1000, seed=1)
    assert np.allclose(x, [0.0, 0.0], atol=TOL)
    assert fx == pytest.approx(-2.0, abs=TOL)


def test_sphere_plus_five():
    x, fx = minimize_unbounded(sphere_plus_five, [2.0, 2.0], 0.5, Params(), 500, seed=2)
    assert np.allclose(x, [0.0, 0.0], atol=TOL)
    assert fx == pytest.approx(5.0, abs=TOL)


def test_plane_in_box():
    bounds = Bounds([-1.0, 0.5], [10.0, 10.0])
    x, fx = minimize(plane, [2.0, 2.0], 0.5, Params(), bounds, 500, seed=2)
    assert np.allclose(x, [-1.0, 0.5], atol=TOL)
    assert fx == pytest.approx(4.5, abs=TOL)


def test_maximize_unbounded_restores_sign():
    def hill(x):
        return 7.0 - (x[0] - 3.0) ** 2

    x, fx = maximize_unbounded(hill, [0.0], 1.0, max_iter=300, seed=3)
    assert np.allclose(x, [3.0], atol=TOL)
    assert fx == pytest.approx(7.0, abs=TOL)


def test_same_seed_same_answer():
    a = minimize(shifted_bowl, [5.0, 5.0], 1.0, max_iter=50, seed=42)
    b = minimize(shifted_bowl, [5.0, 5.0], 1.0, max_iter=50, rng=np.random.default_rng(42))
    assert np.array_equal(a[0], b[0])
    assert a[1] == b[1]


def test_unbounded_matches_default_bounds():
    a = minimize_unbounded(shifted_bowl, [5.0, 5.0], 1.0, max_iter=100, seed=9)
    b = minimize(shifted_bowl, [5.0, 5.0], 1.0, bounds=None, max_iter=100, seed=9)
    assert np.array_equal(a[0], b[0])


def test_zero_iterations_still_returns_a_point():
    x, fx = minimize(shifted_bowl, [5.0, 5.0], 1.0, max_iter=0, seed=0)
    assert x.shape == (2,)
    assert fx == pytest.approx(shifted_bowl(x))


def test_callback_for_maximize_sees_negated_values():
    values = []

    def record(iteration, simplex, move):
        values.append(simplex[0].value)

    maximize_unbounded(lambda x: 10.0 - x[0] ** 2, [1.0], 0.5, max_iter=20, seed=0, callback=record)
    assert len(values) == 20
    assert all(v >= -10.0 - 1e-12 for v in values)


@pytest.mark.parametrize("kwargs", [
    dict(initial_point=[]),
    dict(initial_point=[[1.0, 2.0]]),
    dict(initial_point=[np.nan, 1.0]),
    dict(initial_radius=0.0),
    dict(initial_radius=-1.0),
    dict(bounds=Bounds([0.0], [1.0])),
    dict(bounds=[(1.0, 0.0), (0.0, 1.0)]),
    dict(max_iter=-1),
    dict(max_iter=2.5),
    dict(seed=1, rng=np.random.default_rng(1)),
])
def test_contract_violations(kwargs):
    call = dict(f=shifted_bowl, initial_point=[5.0, 5.0], initial_radius=1.0, max_iter=10)
    call.update(kwargs)
    with pytest.raises(ValidationError):
        minimize(**call)


def test_objective_must_be_callable():
    with pytest.raises(ValidationError):
        minimize(42, [1.0])
    with pytest.raises(ValidationError):
        maximize(None, [1.0])


def test_objective_errors_propagate():
    def broken(x):
        raise ZeroDivisionError("bad objective")

    with pytest.raises(ZeroDivisionError):
        minimize_unbounded(broken, [1.0], seed=0)
