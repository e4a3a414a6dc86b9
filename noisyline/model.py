"""Evaluate the noisy linear model ``Y = a * X + b + E`` on a configured grid."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Sequence

import numpy as np
import pandas as pd

from .config import DatasetConfiguration
from .errors import InvalidArgumentError


@dataclass(frozen=True)
class SampleSeries:
    """Parallel ``x``, ``noise`` and ``y`` arrays of one generated dataset.

    ``x`` holds integers (``min_x + i * increment``); ``noise`` and ``y`` are
    floats. All arrays are read-only and share the same length.
    """

    x: np.ndarray
    noise: np.ndarray
    y: np.ndarray

    def __len__(self) -> int:
        return int(self.x.size)

    def to_frame(self) -> pd.DataFrame:
        """Return the series as a table with columns ``n``, ``x``, ``E``, ``Y``."""
        return pd.DataFrame(
            {
                "n": np.arange(len(self), dtype=int),
                "x": self.x,
                "E": self.noise,
                "Y": self.y,
            }
        )


def evaluate(config: DatasetConfiguration, noise: Sequence[float]) -> SampleSeries:
    """Compute ``y[i] = slope * x[i] + intercept + noise[i]`` for every index.

    Args:
        config: Dataset configuration supplying the grid and true parameters.
        noise: One additive perturbation per observation.

    Returns:
        SampleSeries: Fresh arrays; inputs are never modified.

    Raises:
        InvalidArgumentError: If ``noise`` is not one-dimensional or its
            length differs from ``config.sample_count``.
    """
    noise_arr = np.array(noise, dtype=float, copy=True)
    if noise_arr.ndim != 1:
        raise InvalidArgumentError("noise must be a one-dimensional sequence.")
    if noise_arr.size != config.sample_count:
        raise InvalidArgumentError(
            f"noise has {noise_arr.size} values but sample_count is "
            f"{config.sample_count}"
        )

    x = config.x_values()
    y = config.slope * x + config.intercept + noise_arr

    for arr in (x, noise_arr, y):
        arr.setflags(write=False)
    return SampleSeries(x=x, noise=noise_arr, y=y)


def true_line(config: DatasetConfiguration, x) -> np.ndarray:
    """Evaluate the noiseless model line at ``x``."""
    return config.slope * np.asarray(x, dtype=float) + config.intercept
