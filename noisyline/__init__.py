"""
A Python package for recovering linear model parameters from synthetic data.

Generates a noisy linear dataset ``Y = aX + b + E`` from true parameters and
recovers them by ordinary least squares with confidence intervals.

Modules:
    - config: Immutable dataset configuration and the default configurations.
    - model: Evaluates the linear model on the configured x grid.
    - stats: Noise sampling, least-squares estimation and quantile functions.
    - simulation: Runs configurations end to end and tabulates the results.
    - reporting / output / plotting: Console tables, CSV export and figures.
"""

__version__ = "1.0.0"

from .config import DEFAULT_CONFIGURATIONS, DatasetConfiguration
from .errors import DegenerateInputError, InvalidArgumentError
from .model import SampleSeries, evaluate
from .simulation import DatasetRun, create_results_dataframe, run_dataset, run_many
from .stats import (
    ConfidenceInterval,
    EstimationResult,
    NoiseSampler,
    NoiseTable,
    chi_squared_quantile,
    fit,
)

__all__ = [
    # Configuration
    "DatasetConfiguration",
    "DEFAULT_CONFIGURATIONS",
    # Errors
    "InvalidArgumentError",
    "DegenerateInputError",
    # Model
    "SampleSeries",
    "evaluate",
    # Estimation
    "NoiseSampler",
    "NoiseTable",
    "ConfidenceInterval",
    "EstimationResult",
    "chi_squared_quantile",
    "fit",
    # Simulation
    "DatasetRun",
    "run_dataset",
    "run_many",
    "create_results_dataframe",
]
