from __future__ import annotations
from dataclasses import dataclass
from typing import Dict, Optional


@dataclass(frozen=True)
class Params:
    """
    Nelder-Mead coefficients.
    - alpha: reflection (default 1.0)
    - gamma: expansion (default 2.0)
    - rho: contraction (default 0.5)
    - delta: shrink (default 0.5)

    Values are not validated; odd combinations (e.g. gamma < alpha) still run,
    they just converge poorly.
    """
    alpha: float = 1.0
    gamma: float = 2.0
    rho: float = 0.5
    delta: float = 0.5

    @classmethod
    def from_options(cls, options: Optional[Dict] = None) -> "Params":
        opt = options or {}
        return cls(
            alpha=float(opt.get("alpha", 1.0)),
            gamma=float(opt.get("gamma", 2.0)),
            rho=float(opt.get("rho", 0.5)),
            delta=float(opt.get("delta", 0.5)),
        )

    def as_dict(self) -> Dict[str, float]:
        return {"alpha": self.alpha, "gamma": self.gamma, "rho": self.rho, "delta": self.delta}
