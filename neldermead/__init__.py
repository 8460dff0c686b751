from .api import maximize, maximize_unbounded, minimize, minimize_unbounded
from .bounds import Bounds, clamp, unbounded
from .errors import EntropyError, ValidationError
from .params import Params
from .simplex import Move, Vertex, make_rng, new_simplex, step, step_with_move

__all__ = [
    "minimize", "maximize", "minimize_unbounded", "maximize_unbounded",
    "Bounds", "clamp", "unbounded", "Params", "Move", "Vertex",
    "make_rng", "new_simplex", "step", "step_with_move",
    "ValidationError", "EntropyError",
]
