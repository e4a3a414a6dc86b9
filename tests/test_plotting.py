import os

import numpy as np

from noisyline.config import DEFAULT_CONFIGURATIONS
from noisyline.plotting import interval_band, plot_run, plot_runs
from noisyline.simulation import run_many


def make_runs():
    return run_many(DEFAULT_CONFIGURATIONS[:2], seed=6, noise_policy="normal")


def test_plot_run(tmp_path):
    run = make_runs()[0]
    out = plot_run(run, str(tmp_path / "nested" / "run.png"))
    assert out.endswith("run.png")
    assert os.path.exists(out)


def test_plot_runs(tmp_path):
    out = plot_runs(make_runs(), output_dir=str(tmp_path))
    assert len(out) == 2
    assert all(os.path.exists(p) for p in out)


def test_interval_band_contains_fit():
    run = make_runs()[1]
    x = np.linspace(-25, 25, 11)
    lo, hi = interval_band(run.result, x)
    fit = run.result.estimated_slope * x + run.result.estimated_intercept
    assert np.all(lo <= fit + 1e-12)
    assert np.all(fit <= hi + 1e-12)
