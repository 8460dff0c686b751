import os
from typing import List, Optional

import numpy as np
import pandas as pd
import matplotlib.pyplot as plt


def _ensure_dir(path: str):
    os.makedirs(os.path.dirname(path) or ".", exist_ok=True)


def read_log(csv_path: str) -> pd.DataFrame:
    """Read a convergence CSV written by utils.recorder and coerce columns."""
    df = pd.read_csv(csv_path)
    for c in ["f_best", "f_worst", "f_mean", "f_std"]:
        df[c] = pd.to_numeric(df[c], errors="coerce")
    return df


def plot_convergence(csv_path: str, outpath: Optional[str] = None, title: Optional[str] = None):
    """
    Best and worst vertex value per iteration.
    Semilogy when every value is positive, linear otherwise.
    """
    df = read_log(csv_path)
    fig = plt.figure()
    ax = plt.gca()
    positive = (df["f_best"] > 0).all() and (df["f_worst"] > 0).all()
    plot = ax.semilogy if positive else ax.plot
    plot(df["iter"], df["f_best"], label="best vertex")
    plot(df["iter"], df["f_worst"], label="worst vertex", alpha=0.6)
    ax.set_xlabel("Iteration")
    ax.set_ylabel("Objective value")
    ax.grid(True, which="both", linestyle=":")
    ax.legend()
    ax.set_title(title or "Nelder-Mead convergence")

    if outpath is None:
        # save next to the run directory by default
        outpath = os.path.join(os.path.dirname(csv_path), "convergence.png")
    _ensure_dir(outpath)
    fig.savefig(outpath, dpi=300, bbox_inches="tight")
    plt.close(fig)
    return outpath


def plot_simplex_2d(trace: List[np.ndarray], outpath: str, bounds=None):
    """
    Draw each traced triangle, fading from light (early) to dark (late).
    bounds: optional list of (lo, hi) pairs to draw the feasible box.
    """
    fig = plt.figure()
    ax = plt.gca()
    n = max(len(trace), 1)
    for i, pts in enumerate(trace):
        closed = np.vstack([pts, pts[:1]])
        ax.plot(closed[:, 0], closed[:, 1], color="tab:blue", alpha=0.15 + 0.85 * (i + 1) / n, lw=0.8)
    if bounds is not None:
        (x_lo, x_hi), (y_lo, y_hi) = bounds
        ax.plot([x_lo, x_hi, x_hi, x_lo, x_lo], [y_lo, y_lo, y_hi, y_hi, y_lo], "k--", lw=0.8)
    ax.set_xlabel("x1")
    ax.set_ylabel("x2")
    ax.set_aspect("equal", adjustable="datalim")
    ax.set_title("Simplex trajectory")

    _ensure_dir(outpath)
    fig.savefig(outpath, dpi=300, bbox_inches="tight")
    plt.close(fig)
    return outpath
