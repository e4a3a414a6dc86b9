"""Render generated datasets with their true and fitted lines.

Figures receive finished runs and only draw them: observations, vertical
deviations from the true line, the true line, the fitted line and the band
spanned by the slope/intercept confidence intervals.
"""

from __future__ import annotations

import os
from dataclasses import dataclass
from itertools import product
from typing import List, Sequence

import matplotlib.pyplot as plt
import numpy as np

from .model import true_line


@dataclass(frozen=True)
class PlotStyle:
    FIGSIZE: tuple[float, float] = (8.0, 6.0)
    DPI: int = 150
    LINEWIDTH: float = 2.0
    LINEWIDTH_THIN: float = 0.8
    MARKERSIZE: float = 36.0
    ALPHA_BAND: float = 0.15
    GRID_ALPHA: float = 0.35
    TRUE_COLOR: str = "tab:blue"
    FIT_COLOR: str = "black"
    POINT_COLOR: str = "tab:red"
    DEVIATION_COLOR: str = "gray"


STYLE = PlotStyle()


def interval_band(result, x: np.ndarray) -> tuple[np.ndarray, np.ndarray]:
    """Pointwise min/max over the four corner lines of the slope/intercept box."""
    lines = np.array(
        [a * x + b for a, b in product(result.slope_interval, result.intercept_interval)]
    )
    return lines.min(axis=0), lines.max(axis=0)


def plot_run(run, output_path: str, style: PlotStyle = STYLE) -> str:
    """Draw one run and save it as a PNG.

    Args:
        run (DatasetRun): Finished run.
        output_path (str): Target PNG path; parent directories are created.
        style (PlotStyle): Figure styling.

    Returns:
        str: ``output_path``.
    """
    cfg = run.config
    series = run.series
    res = run.result

    x_line = np.linspace(
        min(cfg.min_x, float(series.x.min())), max(cfg.max_x, float(series.x.max())), 200
    )
    y_true = true_line(cfg, x_line)
    y_fit = res.estimated_slope * x_line + res.estimated_intercept
    band_lo, band_hi = interval_band(res, x_line)

    fig, ax = plt.subplots(figsize=style.FIGSIZE)
    try:
        ax.fill_between(
            x_line,
            band_lo,
            band_hi,
            color=style.FIT_COLOR,
            alpha=style.ALPHA_BAND,
            linewidth=0,
            label=f"{100 * res.confidence_level:g}% parameter band",
        )
        ax.vlines(
            series.x,
            true_line(cfg, series.x),
            series.y,
            colors=style.DEVIATION_COLOR,
            linewidth=style.LINEWIDTH_THIN,
        )
        ax.plot(
            x_line,
            y_true,
            color=style.TRUE_COLOR,
            linewidth=style.LINEWIDTH,
            label=f"True: y = {cfg.slope:.3f}x + {cfg.intercept:.3f}",
        )
        ax.plot(
            x_line,
            y_fit,
            color=style.FIT_COLOR,
            linewidth=style.LINEWIDTH,
            linestyle="--",
            label=(
                f"Fit: y = {res.estimated_slope:.3f}x + {res.estimated_intercept:.3f}"
            ),
        )
        ax.scatter(
            series.x,
            series.y,
            s=style.MARKERSIZE,
            color=style.POINT_COLOR,
            zorder=3,
            label="Observations",
        )
        ax.axhline(0.0, color="0.5", linewidth=style.LINEWIDTH_THIN)
        ax.axvline(0.0, color="0.5", linewidth=style.LINEWIDTH_THIN)
        ax.grid(True, alpha=style.GRID_ALPHA)
        ax.set_xlabel("x")
        ax.set_ylabel("Y")
        ax.set_title(f"Y = aX + b + E ({cfg.label})")
        ax.legend(loc="upper left", frameon=False)

        parent = os.path.dirname(output_path)
        if parent:
            os.makedirs(parent, exist_ok=True)
        fig.savefig(output_path, dpi=style.DPI, bbox_inches="tight")
    finally:
        plt.close(fig)
    return output_path


def plot_runs(runs: Sequence, output_dir: str = "output") -> List[str]:
    fig_dir = os.path.join(output_dir, "figures")
    return [
        plot_run(run, os.path.join(fig_dir, f"run_{k}.png"))
        for k, run in enumerate(runs)
    ]
