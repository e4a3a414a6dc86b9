"""Gaussian noise drawn from a discretized probability-density table.

The table stores density values ``f(x)`` on an evenly spaced grid covering
``±5`` standard deviations. A draw picks a uniformly random grid index and
returns the density found there, so the noise is a *density reading* used as an
additive perturbation rather than a draw from the distribution's support.
Existing datasets were generated this way, so the policy is kept as is.
:meth:`NoiseSampler.sample_normal` provides the standard Gaussian draw for
comparison.
"""

from __future__ import annotations

import logging
import math
import numbers
from dataclasses import dataclass

import numpy as np

from ..errors import InvalidArgumentError

logger = logging.getLogger(__name__)

DEFAULT_NOISE_STEP = 1e-4
STD_DEV_RANGE = 5

# Guards the truncating grid-size division against 10 / 1e-4 == 99999.99...
_GRID_EPS = 1e-9


@dataclass(frozen=True)
class NoiseTable:
    """Immutable density table built by :meth:`NoiseSampler.build`.

    Attributes:
        offsets: Grid positions, symmetric about ``mean``.
        densities: Gaussian density evaluated at each grid position.
        mean: Mean of the density.
        std_dev: Standard deviation of the density.
        step: Spacing between grid positions.
    """

    offsets: np.ndarray
    densities: np.ndarray
    mean: float
    std_dev: float
    step: float

    def __len__(self) -> int:
        return int(self.densities.size)

    def pairs(self):
        """Iterate ``(x_offset, density)`` pairs in grid order."""
        return zip(self.offsets.tolist(), self.densities.tolist())


def gaussian_density(x, mean: float, std_dev: float):
    """Evaluate the normal probability density ``N(mean, std_dev**2)`` at ``x``."""
    variance = float(std_dev) ** 2
    x_arr = np.asarray(x, dtype=float)
    norm = 1.0 / math.sqrt(2.0 * math.pi * variance)
    return norm * np.exp(-((x_arr - mean) ** 2) / (2.0 * variance))


def _check_count(n) -> int:
    if isinstance(n, bool) or not isinstance(n, numbers.Integral) or n <= 0:
        raise InvalidArgumentError(f"n must be a positive integer, got {n!r}")
    return int(n)


def grid_size(std_dev: float, step: float) -> int:
    """Return the number of grid points covering ``±5 * std_dev`` at ``step``."""
    span = 2 * STD_DEV_RANGE * float(std_dev)
    return int(math.floor(span / float(step) + _GRID_EPS)) + 1


class NoiseSampler:
    """Draw additive noise from density tables using an injected generator.

    Args:
        rng: A :class:`numpy.random.Generator`, an integer seed, or ``None``
            for fresh OS entropy. Each sampler owns its generator; share a
            sampler across threads only behind a lock.
    """

    def __init__(self, rng: np.random.Generator | int | None = None):
        if isinstance(rng, np.random.Generator):
            self.rng = rng
        else:
            self.rng = np.random.default_rng(rng)

    @staticmethod
    def build(
        mean: float, std_dev: float, step: float = DEFAULT_NOISE_STEP
    ) -> NoiseTable:
        """Build the density table for ``N(mean, std_dev**2)``.

        Args:
            mean: Mean of the density.
            std_dev: Standard deviation, strictly positive.
            step: Grid spacing, strictly positive.

        Returns:
            NoiseTable: ``int(10 * std_dev / step) + 1`` points on a grid
            running from ``mean - half_range`` to ``mean + half_range``.

        Raises:
            InvalidArgumentError: If ``std_dev <= 0``, ``step <= 0`` or an
                argument is not finite.
        """
        mean = float(mean)
        std_dev = float(std_dev)
        step = float(step)
        if not np.isfinite(std_dev) or std_dev <= 0:
            raise InvalidArgumentError(f"std_dev must be positive, got {std_dev!r}")
        if not np.isfinite(step) or step <= 0:
            raise InvalidArgumentError(f"step must be positive, got {step!r}")
        if not np.isfinite(mean):
            raise InvalidArgumentError(f"mean must be finite, got {mean!r}")

        count = grid_size(std_dev, step)
        half_range = (count - 1) * step / 2.0
        offsets = mean - half_range + np.arange(count, dtype=float) * step
        densities = gaussian_density(offsets, mean, std_dev)

        offsets.setflags(write=False)
        densities.setflags(write=False)
        logger.debug(
            "Built noise table: mean=%g, std_dev=%g, step=%g, points=%d",
            mean,
            std_dev,
            step,
            count,
        )
        return NoiseTable(
            offsets=offsets, densities=densities, mean=mean, std_dev=std_dev, step=step
        )

    def sample(self, table: NoiseTable) -> float:
        """Return the density at one uniformly random table index."""
        if len(table) == 0:
            raise InvalidArgumentError("Cannot sample from an empty noise table.")
        return float(table.densities[self.rng.integers(len(table))])

    def sample_many(self, table: NoiseTable, n: int) -> np.ndarray:
        """Draw ``n`` densities with replacement, in draw order.

        Raises:
            InvalidArgumentError: If ``n <= 0`` or the table is empty.
        """
        n = _check_count(n)
        if len(table) == 0:
            raise InvalidArgumentError("Cannot sample from an empty noise table.")
        idx = self.rng.integers(0, len(table), size=n)
        return table.densities[idx].astype(float, copy=True)

    def sample_normal(self, mean: float, std_dev: float, n: int) -> np.ndarray:
        """Draw ``n`` values from ``N(mean, std_dev**2)`` itself."""
        if not np.isfinite(float(std_dev)) or std_dev <= 0:
            raise InvalidArgumentError(f"std_dev must be positive, got {std_dev!r}")
        n = _check_count(n)
        return self.rng.normal(float(mean), float(std_dev), size=n)
