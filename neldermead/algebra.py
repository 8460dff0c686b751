from __future__ import annotations
from typing import Sequence
import numpy as np

from .errors import ValidationError


def as_point(p) -> np.ndarray:
    return np.asarray(p, dtype=float)


def _check_same_length(p: np.ndarray, q: np.ndarray):
    # numpy would broadcast a length-1 vector silently, so check explicitly
    if p.shape != q.shape:
        raise ValidationError(f"Point length mismatch: {p.shape} vs {q.shape}")


def add(p, q) -> np.ndarray:
    """Elementwise p + q."""
    p, q = as_point(p), as_point(q)
    _check_same_length(p, q)
    return p + q


def diff(p, q) -> np.ndarray:
    """Elementwise p - q."""
    p, q = as_point(p), as_point(q)
    _check_same_length(p, q)
    return p - q


def scale(k: float, p) -> np.ndarray:
    return float(k) * as_point(p)


def centroid(points: Sequence) -> np.ndarray:
    """
    Arithmetic mean of a non-empty sequence of equal-length points.
    Computed as scale(1/len, running sum) so the result matches a plain,
    unweighted mean.
    """
    if len(points) == 0:
        raise ValidationError("centroid() needs at least one point")
    total = as_point(points[0])
    for p in points[1:]:
        total = add(total, p)
    return scale(1.0 / len(points), total)
