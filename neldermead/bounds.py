from __future__ import annotations
from dataclasses import dataclass
from typing import List, Sequence, Tuple
import numpy as np

from .errors import ValidationError

BoundPairs = List[Tuple[float, float]]

_FLOAT_MIN = float(np.finfo(float).min)
_FLOAT_MAX = float(np.finfo(float).max)


@dataclass(frozen=True, eq=False)
class Bounds:
    """
    Axis-aligned box: lower[i] <= x[i] <= upper[i] for every dimension i.
    Both arrays are stored read-only; a Bounds never changes during a run.
    """
    lower: np.ndarray
    upper: np.ndarray

    def __post_init__(self):
        lo = np.array(self.lower, dtype=float)
        hi = np.array(self.upper, dtype=float)
        if lo.ndim != 1 or hi.ndim != 1:
            raise ValidationError("Bounds must be 1-D sequences")
        if lo.shape != hi.shape:
            raise ValidationError(f"Bounds length mismatch: lower={lo.size}, upper={hi.size}")
        if np.any(np.isnan(lo)) or np.any(np.isnan(hi)):
            raise ValidationError("Bounds must not contain NaN")
        if np.any(lo > hi):
            bad = np.flatnonzero(lo > hi).tolist()
            raise ValidationError(f"Lower bound exceeds upper bound in dimension(s) {bad}")
        lo.setflags(write=False)
        hi.setflags(write=False)
        object.__setattr__(self, "lower", lo)
        object.__setattr__(self, "upper", hi)

    @property
    def dim(self) -> int:
        return int(self.lower.size)

    @classmethod
    def unbounded(cls, n: int) -> "Bounds":
        """Full representable float range in each of n dimensions."""
        return cls(np.full(n, _FLOAT_MIN), np.full(n, _FLOAT_MAX))

    @classmethod
    def from_pairs(cls, pairs: Sequence[Tuple[float, float]]) -> "Bounds":
        lo = [b[0] for b in pairs]
        hi = [b[1] for b in pairs]
        return cls(lo, hi)

    def as_pairs(self) -> BoundPairs:
        return [(float(lo), float(hi)) for lo, hi in zip(self.lower, self.upper)]

    def contains(self, x) -> bool:
        x = np.asarray(x, dtype=float)
        return bool(np.all(x >= self.lower) and np.all(x <= self.upper))


def unbounded(n: int) -> Bounds:
    return Bounds.unbounded(n)


def clamp(x, bounds: Bounds) -> np.ndarray:
    """Return a new point with every coordinate clipped into [lower[i], upper[i]]."""
    x = np.asarray(x, dtype=float)
    if x.shape != bounds.lower.shape:
        raise ValidationError(f"Point has {x.size} dims but bounds have {bounds.dim}")
    return np.minimum(np.maximum(x, bounds.lower), bounds.upper)
