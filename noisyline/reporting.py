"""Format estimation runs as console tables.

This module only reads finished :class:`~noisyline.simulation.DatasetRun`
objects; it never recomputes statistics.
"""

from __future__ import annotations

import math
from typing import Iterable, Tuple

import pandas as pd

SEPARATOR = "____________________________"


def _round_uncertainty(u: float) -> Tuple[float, int]:
    """Round an uncertainty to 1 s.f. (2 s.f. when the leading digit is 1).

    Returns:
        tuple[float, int]: Rounded uncertainty and the ``round`` digit count.
    """
    if u <= 0 or not math.isfinite(u):
        return u, 0

    u = abs(float(u))
    exponent = math.floor(math.log10(u))
    leading = u / (10**exponent)

    sig_figs = 2 if 1.0 <= leading < 2.0 else 1
    ndigits = sig_figs - 1 - exponent
    return float(round(u, ndigits)), int(ndigits)


def format_value_with_uncertainty(value: float, uncertainty: float) -> str:
    """Render ``value ± uncertainty`` with the value rounded to match.

    Falls back to six significant figures when the uncertainty is zero or not
    finite, which happens for noiseless series.
    """
    ru, ndigits = _round_uncertainty(abs(float(uncertainty)))
    if ru == 0 or not math.isfinite(ru):
        return f"{value:.6g} ± {uncertainty:.6g}"
    dp = max(ndigits, 0)
    return f"{round(float(value), ndigits):.{dp}f} ± {ru:.{dp}f}"


def format_interval(interval, digits: int = 4) -> str:
    lower, upper = interval
    return f"[{lower:.{digits}f}, {upper:.{digits}f}]"


def format_run_table(run, digits: int = 4) -> str:
    """Build the console report for one run.

    Args:
        run (DatasetRun): Finished run.
        digits (int): Decimal places for noise, responses and estimates.

    Returns:
        str: Parameters header, ``n | x | E | Y`` rows, true values, point
        estimates and the three confidence intervals, newline separated.
    """
    cfg = run.config
    series = run.series
    res = run.result
    level = f"{100 * res.confidence_level:g}%"

    lines = [
        f"Parameters: x ∈ [{cfg.min_x}, {cfg.max_x}], h = {cfg.increment}, "
        f"n = {cfg.sample_count}, σ = {cfg.noise_std_dev:g} "
        f"True model parameters: a = {cfg.slope:.{digits}f}, "
        f"b = {cfg.intercept:.{digits}f}",
        "   n   |   x   |   E   |   Y",
        SEPARATOR,
    ]
    for i in range(len(series)):
        lines.append(
            f"   {i:<4} |   {int(series.x[i]):<5} |   "
            f"{series.noise[i]:<6.{digits}f} |   {series.y[i]:<6.{digits}f}"
        )
    lines.extend(
        [
            f"True values: a = {cfg.slope:.{digits}f}, b = {cfg.intercept:.{digits}f}, "
            f"σ² = {cfg.noise_std_dev ** 2:g}",
            f"Point estimates: a = {res.estimated_slope:.{digits}f}, "
            f"b = {res.estimated_intercept:.{digits}f}, "
            f"σ² = {res.estimated_variance:.{digits}f}",
            f"Standard errors: a = "
            f"{format_value_with_uncertainty(res.estimated_slope, res.slope_se)}, "
            f"b = {format_value_with_uncertainty(res.estimated_intercept, res.intercept_se)}",
            f"{level} CI for a: {format_interval(res.slope_interval, digits)}",
            f"{level} CI for b: {format_interval(res.intercept_interval, digits)}",
            f"{level} CI for σ²: {format_interval(res.variance_interval, digits)}",
        ]
    )
    return "\n".join(lines)


def print_run_table(run, digits: int = 4) -> None:
    print(format_run_table(run, digits=digits))


def print_summary(results_df: pd.DataFrame) -> None:
    """Print one line per run from ``create_results_dataframe`` output."""
    print("\nEstimation summary:")
    if results_df.empty:
        print("  (no runs)")
        return

    for _, row in results_df.iterrows():
        hits = [
            name
            for name, col in (("a", "a in CI"), ("b", "b in CI"), ("σ²", "sigma^2 in CI"))
            if bool(row[col])
        ]
        covered = ", ".join(hits) if hits else "none"
        print(
            f" - Run {row['Run']} ({row['Configuration']}): "
            f"a = {row['a (estimate)']:.4f}, b = {row['b (estimate)']:.4f}, "
            f"σ² = {row['sigma^2 (estimate)']:.4f} | true values inside CI: {covered}"
        )


def print_run_tables(runs: Iterable, digits: int = 4) -> None:
    for run in runs:
        print_run_table(run, digits=digits)
        print()
