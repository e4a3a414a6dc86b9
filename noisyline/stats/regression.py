"""Ordinary least-squares estimation for the simple linear model.

This module supports:
- point estimates of slope, intercept and residual variance,
- standard errors of the slope and intercept, and
- confidence intervals for all three parameters at a chosen level.
"""

from __future__ import annotations

import logging
import math
from dataclasses import dataclass
from typing import NamedTuple, Sequence

import numpy as np

from ..errors import DegenerateInputError, InvalidArgumentError
from .quantiles import chi_squared_quantile, student_t_critical

logger = logging.getLogger(__name__)

DEFAULT_CONFIDENCE_LEVEL = 0.90
MIN_POINTS = 3


class ConfidenceInterval(NamedTuple):
    lower: float
    upper: float

    @property
    def width(self) -> float:
        return self.upper - self.lower

    def contains(self, value: float) -> bool:
        return self.lower <= value <= self.upper


@dataclass(frozen=True)
class EstimationResult:
    """Point and interval estimates produced by :func:`fit`.

    Attributes:
        estimated_slope: Least-squares slope ``a_hat``.
        estimated_intercept: Least-squares intercept ``b_hat``.
        estimated_variance: Residual variance ``sigma_hat^2`` with ``n - 2``
            degrees of freedom.
        slope_interval: Confidence interval for the slope.
        intercept_interval: Confidence interval for the intercept.
        variance_interval: Confidence interval for the residual variance.
        slope_se: Standard error of the slope.
        intercept_se: Standard error of the intercept.
        dof: Residual degrees of freedom ``n - 2``.
        confidence_level: Coverage used for all three intervals.
        t_critical: Student's t critical value used for slope and intercept.
    """

    estimated_slope: float
    estimated_intercept: float
    estimated_variance: float
    slope_interval: ConfidenceInterval
    intercept_interval: ConfidenceInterval
    variance_interval: ConfidenceInterval
    slope_se: float
    intercept_se: float
    dof: int
    confidence_level: float
    t_critical: float

    @property
    def estimated_std_dev(self) -> float:
        return math.sqrt(self.estimated_variance)


def _as_vector(name: str, values: Sequence[float]) -> np.ndarray:
    arr = np.asarray(values, dtype=float)
    if arr.ndim != 1:
        raise InvalidArgumentError(f"{name} must be one-dimensional.")
    if not np.all(np.isfinite(arr)):
        raise InvalidArgumentError(f"{name} contains non-finite values.")
    return arr


def variance_interval(
    estimated_variance: float, dof: int, confidence_level: float
) -> ConfidenceInterval:
    """Chi-squared interval ``[dof*s2/chi2(1-a/2), dof*s2/chi2(a/2)]``.

    The quantiles come from :func:`chi_squared_quantile`. If the approximation
    returns a non-positive lower-tail quantile (only possible for one or two
    degrees of freedom at high confidence) the upper bound is unbounded.
    """
    alpha = 1.0 - confidence_level
    scaled = dof * estimated_variance
    q_upper = chi_squared_quantile(1.0 - alpha / 2.0, dof)
    q_lower = chi_squared_quantile(alpha / 2.0, dof)

    if q_lower <= 0:
        logger.warning(
            "Chi-squared approximation gave %.4g at p=%.4g, dof=%d; "
            "variance interval has no finite upper bound",
            q_lower,
            alpha / 2.0,
            dof,
        )
        upper = math.inf
    else:
        upper = scaled / q_lower
    return ConfidenceInterval(scaled / q_upper, upper)


def fit(
    x: Sequence[float],
    y: Sequence[float],
    confidence_level: float = DEFAULT_CONFIDENCE_LEVEL,
) -> EstimationResult:
    """Fit ``y = a*x + b`` by ordinary least squares.

    Args:
        x: Independent variable values.
        y: Observed responses, same length as ``x``.
        confidence_level: Coverage of all intervals, in ``(0, 1)``.
            Defaults to ``0.90``.

    Returns:
        EstimationResult: Estimates, standard errors and intervals.

    Raises:
        InvalidArgumentError: If the lengths differ, fewer than three points
            are given, a value is not finite, or ``confidence_level`` is
            outside ``(0, 1)``.
        DegenerateInputError: If all x values are identical.

    Note:
        ``a_hat = Sxy / Sxx``, ``b_hat = y_bar - a_hat * x_bar``,
        ``sigma_hat^2 = SSE / (n - 2)``, ``SE(a) = sqrt(sigma_hat^2 / Sxx)``,
        ``SE(b) = sqrt(sigma_hat^2 * (1/n + x_bar^2 / Sxx))``. Slope and
        intercept intervals are ``estimate ± t * SE``.

    References:
        Ordinary least squares linear regression.
    """
    x_arr = _as_vector("x", x)
    y_arr = _as_vector("y", y)
    if x_arr.size != y_arr.size:
        raise InvalidArgumentError(
            f"x and y must have the same length, got {x_arr.size} and {y_arr.size}"
        )
    n = int(x_arr.size)
    if n < MIN_POINTS:
        raise InvalidArgumentError(
            f"Regression needs at least {MIN_POINTS} points, got {n}"
        )
    level = float(confidence_level)
    if not (0.0 < level < 1.0):
        raise InvalidArgumentError(
            f"confidence_level must lie strictly between 0 and 1, got {confidence_level!r}"
        )

    if np.ptp(x_arr) == 0:
        raise DegenerateInputError("All x values are identical (Sxx == 0).")

    xbar = float(np.mean(x_arr))
    ybar = float(np.mean(y_arr))
    dx = x_arr - xbar
    ssxx = float(np.sum(dx**2))

    slope = float(np.sum(dx * (y_arr - ybar))) / ssxx
    intercept = ybar - slope * xbar

    resid = y_arr - slope * x_arr - intercept
    dof = n - 2
    variance = float(np.sum(resid**2)) / dof

    se_slope = math.sqrt(variance / ssxx)
    se_intercept = math.sqrt(variance * (1.0 / n + xbar**2 / ssxx))

    t_crit = student_t_critical(level, dof)
    slope_ci = ConfidenceInterval(slope - t_crit * se_slope, slope + t_crit * se_slope)
    intercept_ci = ConfidenceInterval(
        intercept - t_crit * se_intercept, intercept + t_crit * se_intercept
    )

    logger.debug(
        "OLS fit n=%d: a=%.6g (se %.3g), b=%.6g (se %.3g), s2=%.6g, t=%.4f",
        n,
        slope,
        se_slope,
        intercept,
        se_intercept,
        variance,
        t_crit,
    )

    return EstimationResult(
        estimated_slope=slope,
        estimated_intercept=intercept,
        estimated_variance=variance,
        slope_interval=slope_ci,
        intercept_interval=intercept_ci,
        variance_interval=variance_interval(variance, dof, level),
        slope_se=se_slope,
        intercept_se=se_intercept,
        dof=dof,
        confidence_level=level,
        t_critical=t_crit,
    )


def fit_series(series, confidence_level: float = DEFAULT_CONFIDENCE_LEVEL) -> EstimationResult:
    """Fit a :class:`~noisyline.model.SampleSeries`."""
    return fit(series.x, series.y, confidence_level=confidence_level)
