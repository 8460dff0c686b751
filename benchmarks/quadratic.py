import numpy as np


def shifted_bowl(x: np.ndarray) -> float:
    """
    (x0 + 1)^2 + sum_{i>0} x_i^2.
    Global minimum at (-1, 0, ..., 0), f = 0.
    """
    x = np.asarray(x, dtype=float)
    return float((x[0] + 1.0) ** 2 + np.sum(x[1:] ** 2))


def sphere_plus_five(x: np.ndarray) -> float:
    """Sphere lifted by 5: minimum at x = 0, f = 5."""
    x = np.asarray(x, dtype=float)
    return float(np.sum(x * x) + 5.0)


def plane(x: np.ndarray) -> float:
    """sum(x) + 5. Unbounded below, so only meaningful inside a box."""
    return float(np.sum(np.asarray(x, dtype=float)) + 5.0)
