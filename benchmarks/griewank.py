import numpy as np

# usual search box, per dimension
GRIEWANK_BOX = (-600.0, 600.0)


def griewank(x: np.ndarray) -> float:
    """
    1 + sum(x_i^2) / 4000 - prod(cos(x_i / sqrt(i))), i starting at 1.
    Global minimum f = 0 at the origin, surrounded by a regular lattice of
    local minima; a single simplex run only resolves the basin it starts in.
    """
    x = np.asarray(x, dtype=float)
    idx = np.arange(1, x.size + 1, dtype=float)
    bowl = np.dot(x, x) / 4000.0
    ripple = np.prod(np.cos(x / np.sqrt(idx)))
    return float(1.0 + bowl - ripple)


def griewank_bounds(dim: int):
    return [GRIEWANK_BOX] * dim
