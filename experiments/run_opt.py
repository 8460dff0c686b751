# experiments/run_opt.py
import argparse
import time
from pathlib import Path
from typing import Dict, List, Optional

import numpy as np

from benchmarks import PROBLEMS
from benchmarks.griewank import griewank_bounds
from neldermead import Bounds, Params, maximize, minimize
from utils.recorder import (
    RESULTS_ROOT,
    History,
    RunConfig,
    append_multi_summary,
    create_run_dir,
    save_convergence_csv,
    save_run_metadata,
    save_simplex_2d_csv,
)


def format_time(seconds: float) -> str:
    m, s = divmod(int(seconds), 60)
    h, m = divmod(m, 60)
    if h > 0:
        return f"{h}h {m:02d}m {s:02d}s"
    return f"{m}m {s:02d}s"


def optimize(f, x0, radius: float, params: Params, bounds: Optional[Bounds], max_iter: int,
             seed: Optional[int], maximise: bool = False, clamp_shrink: bool = False,
             log_every: int = 100, trace_every: int = 0):
    """
    Run one Nelder-Mead optimisation while recording history and printing
    a progress line every `log_every` iterations.
    """
    history = History(trace_every=trace_every, maximize=maximise)
    start_time = time.time()

    def progress(iteration, simplex, move):
        history(iteration, simplex, move)
        if log_every and iteration % log_every == 0:
            row = history.rows[-1]
            elapsed = format_time(time.time() - start_time)
            print(f"[Iter {iteration}] move={row['move']:<11} | Best: {row['f_best']:.6e} | "
                  f"Worst: {row['f_worst']:.6e} | Elapsed: {elapsed}")
        return False

    solve = maximize if maximise else minimize
    x, fx = solve(f, x0, radius, params, bounds, max_iter,
                  seed=seed, clamp_shrink=clamp_shrink, callback=progress)
    return {"x": x, "f": fx}, history


def run_single(args, seed: Optional[int], mode: str = "single") -> Dict:
    f = PROBLEMS[args.problem]
    x0 = np.array(args.x0 if args.x0 else [args.start] * args.D, dtype=float)
    D = x0.size

    bounds = None
    if args.lower is not None or args.upper is not None:
        lower = args.lower if args.lower is not None else [-np.inf] * D
        upper = args.upper if args.upper is not None else [np.inf] * D
        bounds = Bounds(lower, upper)
    elif args.problem == "griewank":
        bounds = Bounds.from_pairs(griewank_bounds(D))

    params = Params(alpha=args.alpha, gamma=args.gamma, rho=args.rho, delta=args.delta)

    print(f"--- {args.problem} D={D} iters={args.iters} seed={seed} ---")
    best, history = optimize(
        f, x0, args.radius, params, bounds, args.iters, seed,
        maximise=args.maximize, clamp_shrink=args.clamp_shrink,
        log_every=args.log_every, trace_every=args.trace_every,
    )
    print(f"Best: x={best['x'].tolist()} f={best['f']:.12e}")
    print("Moves:", dict(history.moves))

    root = Path(args.out) if args.out else RESULTS_ROOT
    run_dir = create_run_dir(args.problem, mode=mode, root=root)
    config = RunConfig(
        problem=args.problem, dim=D, max_iter=args.iters, radius=args.radius, seed=seed,
        bounded=bounds is not None, maximize=args.maximize, clamp_shrink=args.clamp_shrink,
        **params.as_dict(),
    )
    save_run_metadata(run_dir, config, extra={
        "x_best": best["x"].tolist(),
        "f_best": best["f"],
        "moves": dict(history.moves),
    })
    conv_csv = save_convergence_csv(run_dir, history)
    print("Saved convergence log:", conv_csv)

    if history.simplex_trace():
        save_simplex_2d_csv(run_dir, history)

    if not args.no_plots and history.rows:
        # plotting pulls in matplotlib, keep it off the import path of headless runs
        from experiments.plotting import plot_convergence, plot_simplex_2d

        print("Saved convergence plot:", plot_convergence(str(conv_csv), title=f"{args.problem}, D={D}"))
        if history.simplex_trace():
            out_png = plot_simplex_2d(history.simplex_trace(), str(run_dir / "simplex_2d.png"),
                                      bounds=bounds.as_pairs() if bounds is not None else None)
            print("Saved 2D simplex trajectory:", out_png)

    return {
        "seed": seed,
        "f_best": best["f"],
        "x_best": str(best["x"].tolist()),
        "run_dir": str(run_dir),
    }


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="Nelder-Mead simplex optimisation on benchmark problems")
    parser.add_argument("--problem", type=str, default="shifted_bowl", choices=sorted(PROBLEMS))
    parser.add_argument("--D", type=int, default=2, help="Dimension (ignored when --x0 is given)")
    parser.add_argument("--start", type=float, default=5.0, help="Start coordinate used for every dimension")
    parser.add_argument("--x0", type=float, nargs="+", default=None, help="Explicit start point")
    parser.add_argument("--radius", type=float, default=1.0, help="Initial simplex radius")
    parser.add_argument("--iters", type=int, default=1000, help="Fixed iteration count")
    parser.add_argument("--lower", type=float, nargs="+", default=None, help="Lower bounds per dimension")
    parser.add_argument("--upper", type=float, nargs="+", default=None, help="Upper bounds per dimension")
    parser.add_argument("--alpha", type=float, default=1.0)
    parser.add_argument("--gamma", type=float, default=2.0)
    parser.add_argument("--rho", type=float, default=0.5)
    parser.add_argument("--delta", type=float, default=0.5)
    parser.add_argument("--maximize", action="store_true", help="Maximise instead of minimise")
    parser.add_argument("--clamp_shrink", action="store_true", help="Clamp shrink points into bounds too")
    parser.add_argument("--seed", type=int, default=None, help="RNG seed (default: OS entropy)")
    parser.add_argument("--seeds", type=int, default=1, help="Number of consecutive seeds to run from --seed")
    parser.add_argument("--log_every", type=int, default=100, help="Print progress every N iterations (0 = quiet)")
    parser.add_argument("--trace_every", type=int, default=0, help="Record 2D simplex every N iters (D=2 only)")
    parser.add_argument("--out", type=str, default=None, help="Results root (default data/results)")
    parser.add_argument("--no_plots", action="store_true", help="Skip matplotlib figures")
    return parser


def main(argv: Optional[List[str]] = None):
    args = build_parser().parse_args(argv)

    if args.seeds <= 1:
        return [run_single(args, args.seed)]

    base_seed = args.seed if args.seed is not None else 0
    rows = [run_single(args, base_seed + s, mode="multi") for s in range(args.seeds)]
    root = Path(args.out) if args.out else RESULTS_ROOT
    summary = append_multi_summary(args.problem, rows, root=root)
    print("Saved multi-seed summary:", summary)
    return rows


if __name__ == "__main__":
    main()
