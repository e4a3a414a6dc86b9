"""
Statistical estimation engine.

This subpackage provides the numerical routines that turn model parameters
into a noisy dataset and a noisy dataset back into parameter estimates. All
functions operate on arrays and primitive types; no reporting or plotting
logic is included.

Modules:
    noise:
        Discretized Gaussian density tables and the sampler that draws
        additive noise from them with an injected random generator.

    regression:
        Ordinary least-squares slope, intercept and residual variance with
        standard errors and confidence intervals.

    quantiles:
        Probit and Chi-squared quantile approximations and Student's t
        critical values.

Design Principle:
    This subpackage has no dependencies on reporting, output or plotting
    modules. It can be tested independently.
"""

from .noise import DEFAULT_NOISE_STEP, NoiseSampler, NoiseTable, gaussian_density
from .quantiles import chi_squared_quantile, probit, student_t_critical
from .regression import (
    DEFAULT_CONFIDENCE_LEVEL,
    ConfidenceInterval,
    EstimationResult,
    fit,
    fit_series,
)

__all__ = [
    "DEFAULT_NOISE_STEP",
    "NoiseSampler",
    "NoiseTable",
    "gaussian_density",
    "chi_squared_quantile",
    "probit",
    "student_t_critical",
    "DEFAULT_CONFIDENCE_LEVEL",
    "ConfidenceInterval",
    "EstimationResult",
    "fit",
    "fit_series",
]
