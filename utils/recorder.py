from __future__ import annotations

import csv
import json
from collections import Counter
from dataclasses import asdict, dataclass
from datetime import datetime
from pathlib import Path
from typing import Any, Dict, Iterable, List, Optional

import numpy as np

from neldermead.simplex import Move, Simplex


# Project root: .../neldermead-project
PROJECT_ROOT = Path(__file__).resolve().parents[1]

DATA_ROOT = PROJECT_ROOT / "data"
RESULTS_ROOT = DATA_ROOT / "results"
FIGURES_ROOT = DATA_ROOT / "figures"

CONVERGENCE_FIELDS = ["iter", "move", "f_best", "f_worst", "f_mean", "f_std"]


@dataclass
class RunConfig:
    """Minimal run configuration metadata to store with each run."""
    problem: str         # e.g. "shifted_bowl", "griewank"
    dim: int
    max_iter: int
    radius: float
    seed: Optional[int]
    alpha: float = 1.0
    gamma: float = 2.0
    rho: float = 0.5
    delta: float = 0.5
    bounded: bool = False
    maximize: bool = False
    clamp_shrink: bool = False
    algorithm: str = "nelder-mead"


class History:
    """
    Driver callback that records per-iteration statistics of the simplex.

    Pass an instance as `callback=`; it never asks the loop to stop unless
    `stop_below` is set and the best minimised value drops under it.
    With maximize=True the run minimises -f, so recorded values are negated
    back into the caller's objective (f_best is then the largest value).
    Simplex vertices are kept only for 2-D problems when trace_every > 0.
    """
    def __init__(self, trace_every: int = 0, stop_below: Optional[float] = None,
                 maximize: bool = False):
        self.trace_every = int(trace_every)
        self.maximize = maximize
        self.stop_below = stop_below
        self.rows: List[Dict[str, Any]] = []
        self.moves: Counter = Counter()
        self._simplex_trace: List[np.ndarray] = []

    def __call__(self, iteration: int, simplex: Simplex, move: Move) -> bool:
        raw = np.array([v.value for v in simplex], dtype=float)
        values = -raw if self.maximize else raw
        self.moves[move.value] += 1
        self.rows.append({
            "iter": iteration,
            "move": move.value,
            "f_best": float(values[0]),
            "f_worst": float(values[-1]),
            "f_mean": float(np.mean(values)),
            "f_std": float(np.std(values)),
        })
        dim = len(simplex) - 1
        if self.trace_every and dim == 2 and iteration % self.trace_every == 0:
            self._simplex_trace.append(np.stack([v.point for v in simplex], axis=0))
        return self.stop_below is not None and raw[0] < self.stop_below

    def best_history(self) -> List[float]:
        return [r["f_best"] for r in self.rows]

    def simplex_trace(self) -> List[np.ndarray]:
        """Recorded (3, 2) vertex arrays. Empty if tracing disabled or D != 2."""
        return list(self._simplex_trace)


def _ensure_dir(path: Path) -> None:
    path.mkdir(parents=True, exist_ok=True)


def create_run_dir(problem: str, mode: str = "single", root: Path = RESULTS_ROOT) -> Path:
    """
    Create and return a unique directory for a single run.

    Structure:
        {root}/{mode}/run_YYYYmmdd_HHMMSS_XXXX/

    mode : "single" or "multi"
    """
    if mode not in {"single", "multi"}:
        raise ValueError(f"Unknown mode: {mode}")

    base = Path(root) / mode
    _ensure_dir(base)

    timestamp = datetime.now().strftime("%Y%m%d_%H%M%S")
    # Short suffix from microseconds to avoid collisions
    suffix = datetime.now().strftime("%f")[-4:]
    run_dir = base / f"run_{timestamp}_{suffix}"
    _ensure_dir(run_dir)

    (run_dir / "problem.txt").write_text(problem)
    return run_dir


def save_convergence_csv(run_dir: Path, history: History) -> Path:
    """
    Save convergence history to CSV:
        iter, move, f_best, f_worst, f_mean, f_std
    """
    path = Path(run_dir) / "convergence.csv"
    with path.open("w", newline="") as f:
        writer = csv.DictWriter(f, fieldnames=CONVERGENCE_FIELDS)
        writer.writeheader()
        for row in history.rows:
            writer.writerow(row)
    return path


def save_simplex_2d_csv(run_dir: Path, history: History) -> Path:
    """
    Save traced 2D simplex vertices.

    CSV columns:
        frame, vertex, x1, x2
    """
    path = Path(run_dir) / "simplex_2d.csv"
    with path.open("w", newline="") as f:
        writer = csv.writer(f)
        writer.writerow(["frame", "vertex", "x1", "x2"])
        for frame, pts in enumerate(history.simplex_trace()):
            for vid, pos in enumerate(pts):
                writer.writerow([frame, vid, float(pos[0]), float(pos[1])])
    return path


def save_run_metadata(run_dir: Path, config: RunConfig, extra: Dict[str, Any] | None = None) -> Path:
    """Save run configuration and optional extra info to metadata.json."""
    meta: Dict[str, Any] = asdict(config)
    if extra:
        meta.update(extra)

    path = Path(run_dir) / "metadata.json"
    with path.open("w") as f:
        json.dump(meta, f, indent=2)
    return path


def append_multi_summary(
    problem: str,
    rows: Iterable[Dict[str, Any]],
    filename: str = "summary.csv",
    root: Path = RESULTS_ROOT,
) -> Path:
    """
    Append summary rows for multiple runs (one row per seed).

    File location:
        {root}/multi/{problem}_{filename}
    """
    base = Path(root) / "multi"
    _ensure_dir(base)

    path = base / f"{problem}_{filename}"

    rows = list(rows)
    if not rows:
        return path

    fieldnames: List[str] = sorted(rows[0].keys())

    write_header = not path.exists()
    with path.open("a", newline="") as f:
        writer = csv.DictWriter(f, fieldnames=fieldnames)
        if write_header:
            writer.writeheader()
        for row in rows:
            writer.writerow(row)

    return path
