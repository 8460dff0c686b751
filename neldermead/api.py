from __future__ import annotations
from numbers import Integral
from typing import Optional, Sequence, Tuple, Union
import math
import numpy as np

from . import simplex as _simplex
from .bounds import Bounds, unbounded
from .errors import ValidationError
from .params import Params
from .simplex import Callback, Objective, make_rng, new_simplex

BoundsLike = Union[Bounds, Sequence[Tuple[float, float]], None]
Result = Tuple[np.ndarray, float]


def _check_point(initial_point) -> np.ndarray:
    x0 = np.asarray(initial_point, dtype=float)
    if x0.ndim != 1 or x0.size == 0:
        raise ValidationError("initial_point must be a non-empty 1-D sequence of reals")
    if not np.all(np.isfinite(x0)):
        raise ValidationError("initial_point must be finite")
    return x0


def _check_radius(radius) -> float:
    r = float(radius)
    if not math.isfinite(r) or r <= 0.0:
        raise ValidationError(f"initial_radius must be a positive finite number, got {radius!r}")
    return r


def _check_max_iter(max_iter) -> int:
    if isinstance(max_iter, bool) or not isinstance(max_iter, Integral) or max_iter < 0:
        raise ValidationError(f"max_iter must be a non-negative integer, got {max_iter!r}")
    return int(max_iter)


def _coerce_bounds(bounds: BoundsLike, n: int) -> Bounds:
    if bounds is None:
        return unbounded(n)
    if not isinstance(bounds, Bounds):
        bounds = Bounds.from_pairs(bounds)
    if bounds.dim != n:
        raise ValidationError(f"Bounds have {bounds.dim} dims but initial_point has {n}")
    return bounds


def _resolve_rng(seed: Optional[int], rng: Optional[np.random.Generator]) -> np.random.Generator:
    if seed is not None and rng is not None:
        raise ValidationError("Pass either seed or rng, not both")
    return rng if rng is not None else make_rng(seed)


def minimize(f: Objective, initial_point, initial_radius: float = 1.0,
             params: Optional[Params] = None, bounds: BoundsLike = None, max_iter: int = 1000,
             *, seed: Optional[int] = None, rng: Optional[np.random.Generator] = None,
             clamp_shrink: bool = False, callback: Optional[Callback] = None) -> Result:
    """
    Minimise f inside `bounds` starting from a random simplex around
    `initial_point`.

    The simplex is built with uniform perturbations of +/- initial_radius,
    then stepped exactly max_iter times. Returns (point, value).
    """
    if not callable(f):
        raise ValidationError("f must be callable")
    x0 = _check_point(initial_point)
    radius = _check_radius(initial_radius)
    max_iter = _check_max_iter(max_iter)
    box = _coerce_bounds(bounds, x0.size)
    generator = _resolve_rng(seed, rng)

    start = new_simplex(f, x0, radius, rng=generator)
    return _simplex.minimize(
        f, start, params if params is not None else Params(), box, max_iter,
        clamp_shrink=clamp_shrink, callback=callback,
    )


def maximize(f: Objective, initial_point, initial_radius: float = 1.0,
             params: Optional[Params] = None, bounds: BoundsLike = None, max_iter: int = 1000,
             *, seed: Optional[int] = None, rng: Optional[np.random.Generator] = None,
             clamp_shrink: bool = False, callback: Optional[Callback] = None) -> Result:
    """
    Maximise f by minimising -f. The returned value is f at the returned
    point (sign restored); a callback sees the negated objective.
    """
    if not callable(f):
        raise ValidationError("f must be callable")

    def neg(x):
        return -f(x)

    x, value = minimize(neg, initial_point, initial_radius, params, bounds, max_iter,
                        seed=seed, rng=rng, clamp_shrink=clamp_shrink, callback=callback)
    return x, -value


def minimize_unbounded(f: Objective, initial_point, initial_radius: float = 1.0,
                       params: Optional[Params] = None, max_iter: int = 1000, **kwargs) -> Result:
    return minimize(f, initial_point, initial_radius, params, None, max_iter, **kwargs)


def maximize_unbounded(f: Objective, initial_point, initial_radius: float = 1.0,
                       params: Optional[Params] = None, max_iter: int = 1000, **kwargs) -> Result:
    return maximize(f, initial_point, initial_radius, params, None, max_iter, **kwargs)
