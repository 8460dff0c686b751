import csv
import json
from pathlib import Path

import pytest

from experiments.run_opt import main


def test_runner_single(tmp_path, capsys):
    rows = main([
        "--problem", "sphere_plus_five", "--start", "2", "--radius", "0.5",
        "--iters", "200", "--seed", "3", "--out", str(tmp_path),
        "--log_every", "50", "--no_plots",
    ])
    assert len(rows) == 1
    assert rows[0]["f_best"] == pytest.approx(5.0, abs=1e-4)
    run_dir = Path(rows[0]["run_dir"])
    meta = json.loads((run_dir / "metadata.json").read_text())
    assert meta["problem"] == "sphere_plus_five"
    assert sum(meta["moves"].values()) == 200
    assert (run_dir / "convergence.csv").exists()
    assert "[Iter 200]" in capsys.readouterr().out


def test_runner_bounded_maximize_multi_seed(tmp_path):
    rows = main([
        "--problem", "plane", "--x0", "2", "2", "--lower", "-1", "0.5", "--upper", "10", "10",
        "--iters", "300", "--seed", "1", "--seeds", "2", "--maximize",
        "--out", str(tmp_path), "--log_every", "0", "--no_plots",
    ])
    assert [r["seed"] for r in rows] == [1, 2]
    # maximum of x + y + 5 in the box is the far corner
    assert rows[0]["f_best"] == pytest.approx(25.0, abs=1e-4)
    assert (tmp_path / "multi" / "plane_summary.csv").exists()
    # the logged history is in the maximised objective, same sign as the result
    with (Path(rows[0]["run_dir"]) / "convergence.csv").open() as fh:
        last = list(csv.DictReader(fh))[-1]
    assert float(last["f_best"]) == pytest.approx(25.0, abs=1e-4)


def test_runner_writes_plots(tmp_path):
    rows = main([
        "--problem", "shifted_bowl", "--iters", "60", "--seed", "0", "--trace_every", "5",
        "--out", str(tmp_path), "--log_every", "0",
    ])
    run_dir = Path(rows[0]["run_dir"])
    assert (run_dir / "convergence.png").exists()
    assert (run_dir / "simplex_2d.png").exists()
    assert (run_dir / "simplex_2d.csv").exists()
