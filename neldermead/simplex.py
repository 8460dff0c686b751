from __future__ import annotations
from enum import Enum
from typing import Callable, Iterable, NamedTuple, Optional, Tuple
import math
import warnings
import numpy as np

from .algebra import add, as_point, centroid, diff, scale
from .bounds import Bounds, clamp, unbounded
from .errors import EntropyError, ValidationError
from .params import Params

Objective = Callable[[np.ndarray], float]


class Vertex(NamedTuple):
    point: np.ndarray
    value: float


Simplex = Tuple[Vertex, ...]

# callback(iteration, simplex, move) -> truthy to stop early
Callback = Callable[[int, Simplex, "Move"], Optional[bool]]


class Move(str, Enum):
    REFLECTION = "reflection"
    EXPANSION = "expansion"
    CONTRACTION = "contraction"
    SHRINK = "shrink"


def make_rng(seed: Optional[int] = None) -> np.random.Generator:
    """
    Generator for the initial simplex. seed=None pulls fresh OS entropy,
    an int gives a reproducible stream.
    """
    try:
        return np.random.default_rng(seed)
    except OSError as exc:
        raise EntropyError(f"Could not seed random generator from OS entropy: {exc}") from exc


def evaluate(f: Objective, x) -> Vertex:
    """Evaluate f at x and freeze the pair. NaN objective values count as +inf."""
    point = np.array(x, dtype=float)
    point.setflags(write=False)
    value = float(f(point.copy()))
    if math.isnan(value):
        warnings.warn("Objective returned NaN; treating it as +inf", RuntimeWarning, stacklevel=2)
        value = math.inf
    return Vertex(point, value)


def sort_simplex(vertices: Iterable[Vertex]) -> Simplex:
    # stable: on equal values earlier vertices stay first
    return tuple(sorted(vertices, key=lambda v: v.value))


def check_simplex(simplex: Simplex) -> int:
    """Return the dimension n of a simplex of n+1 vertices, or raise."""
    if len(simplex) < 2:
        raise ValidationError(f"A simplex needs at least 2 vertices, got {len(simplex)}")
    n = len(simplex) - 1
    for v in simplex:
        if v.point.shape != (n,):
            raise ValidationError(
                f"Simplex of {n + 1} vertices needs {n}-dimensional points, got shape {v.point.shape}"
            )
    return n


def new_simplex(f: Objective, center, radius: float,
                rng: Optional[np.random.Generator] = None) -> Simplex:
    """
    Build n+1 vertices around `center`, each coordinate perturbed by an
    independent uniform draw in [-radius, radius), and sort them by value.
    """
    center = as_point(center)
    if center.ndim != 1 or center.size == 0:
        raise ValidationError("Center must be a non-empty 1-D point")
    if rng is None:
        rng = make_rng()
    n = center.size
    offsets = rng.uniform(-radius, radius, size=(n + 1, n))
    return sort_simplex(evaluate(f, center + d) for d in offsets)


def _accept(simplex: Simplex, vertex: Vertex) -> Simplex:
    # insert, re-sort, drop the single worst
    return sort_simplex(simplex + (vertex,))[:-1]


def _shrink(f: Objective, simplex: Simplex, delta: float,
            bounds: Bounds, clamp_shrink: bool) -> Simplex:
    best = simplex[0]
    shrunk = []
    for v in simplex[1:]:
        x = add(best.point, scale(delta, diff(v.point, best.point)))
        if clamp_shrink:
            x = clamp(x, bounds)
        shrunk.append(evaluate(f, x))
    shrunk.append(best)
    return sort_simplex(shrunk)


def step_with_move(f: Objective, simplex: Simplex, params: Params, bounds: Bounds,
                   clamp_shrink: bool = False) -> Tuple[Simplex, Move]:
    """
    One Nelder-Mead iteration on a sorted simplex.

    Reflected, expanded and contracted candidates are all computed and
    clamped into `bounds` before the decision:
    1) reflection  if f(best) <= fr < f(second worst)
    2) expansion   if fe < f(worst); keep the expanded point only if fe < fr,
                   otherwise the reflected one
    3) contraction if fc < f(worst)
    4) shrink every vertex towards the best one (clamped only if clamp_shrink)

    Returns the new sorted simplex and the move that produced it. The input
    simplex is not modified.
    """
    n = len(simplex) - 1
    best = simplex[0]
    second_worst = simplex[n - 1]
    worst = simplex[n]

    c = centroid([v.point for v in simplex[:n]])

    r = evaluate(f, clamp(add(c, scale(params.alpha, diff(c, worst.point))), bounds))
    e = evaluate(f, clamp(add(c, scale(params.gamma, diff(r.point, c))), bounds))
    k = evaluate(f, clamp(add(c, scale(params.rho, diff(worst.point, c))), bounds))

    if best.value <= r.value < second_worst.value:
        return _accept(simplex, r), Move.REFLECTION
    if e.value < worst.value:
        return _accept(simplex, e if e.value < r.value else r), Move.EXPANSION
    if k.value < worst.value:
        return _accept(simplex, k), Move.CONTRACTION
    return _shrink(f, simplex, params.delta, bounds, clamp_shrink), Move.SHRINK


def step(f: Objective, simplex: Simplex, params: Params, bounds: Bounds,
         clamp_shrink: bool = False) -> Simplex:
    return step_with_move(f, simplex, params, bounds, clamp_shrink)[0]


def best_of(f: Objective, simplex: Simplex) -> Tuple[np.ndarray, float]:
    """
    Pick the better of the best vertex and the centroid of the n best vertices.
    The vertex wins only when strictly lower.
    """
    n = len(simplex) - 1
    best = simplex[0]
    mid = evaluate(f, centroid([v.point for v in simplex[:n]]))
    winner = best if best.value < mid.value else mid
    return np.array(winner.point), winner.value


def minimize(f: Objective, simplex: Simplex, params: Optional[Params] = None,
             bounds: Optional[Bounds] = None, max_iter: int = 1000,
             clamp_shrink: bool = False, callback: Optional[Callback] = None) -> Tuple[np.ndarray, float]:
    """
    Run exactly `max_iter` steps from `simplex` (no convergence test), then
    return (point, value) from best_of(). A callback returning a truthy value
    stops the loop early.
    """
    n = check_simplex(simplex)
    if params is None:
        params = Params()
    if bounds is None:
        bounds = unbounded(n)
    elif bounds.dim != n:
        raise ValidationError(f"Bounds have {bounds.dim} dims but the simplex has {n}")

    current = sort_simplex(simplex)
    for it in range(1, max_iter + 1):
        current, move = step_with_move(f, current, params, bounds, clamp_shrink)
        if callback is not None and callback(it, current, move):
            break
    return best_of(f, current)
