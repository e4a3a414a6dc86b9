"""Define the immutable parameter bundle for one synthetic dataset run."""

from __future__ import annotations

import numbers
from dataclasses import dataclass
from typing import Tuple

import numpy as np

from .errors import InvalidArgumentError

DEFAULT_MIN_X: int = -25
DEFAULT_MAX_X: int = 25


def _require_int(name: str, value) -> int:
    if isinstance(value, bool) or not isinstance(value, numbers.Integral):
        raise InvalidArgumentError(f"{name} must be an integer, got {value!r}")
    return int(value)


@dataclass(frozen=True)
class DatasetConfiguration:
    """Parameters of the noisy linear model ``Y = slope * X + intercept + E``.

    Attributes:
        slope: True slope ``a`` of the model line.
        intercept: True intercept ``b`` of the model line.
        increment: Integer step ``h`` between consecutive x values.
        sample_count: Number of observations ``n``.
        noise_std_dev: Standard deviation ``sigma`` of the Gaussian noise
            density used to perturb the observations.
        min_x: First x value of the grid.
        max_x: Upper bound of the plotting domain. The grid itself is fully
            determined by ``min_x``, ``increment`` and ``sample_count`` and is
            not clipped to ``max_x``.

    Raises:
        InvalidArgumentError: On a non-positive increment, sample count or
            standard deviation, a non-integer grid parameter, or
            ``max_x < min_x``.

    Note:
        Use :meth:`from_coefficients` to derive ``slope`` and ``intercept``
        from the two model coefficients ``N`` and ``M``.
    """

    slope: float
    intercept: float
    increment: int
    sample_count: int
    noise_std_dev: float
    min_x: int = DEFAULT_MIN_X
    max_x: int = DEFAULT_MAX_X

    def __post_init__(self) -> None:
        increment = _require_int("increment", self.increment)
        sample_count = _require_int("sample_count", self.sample_count)
        min_x = _require_int("min_x", self.min_x)
        max_x = _require_int("max_x", self.max_x)

        if increment <= 0:
            raise InvalidArgumentError(f"increment must be positive, got {increment}")
        if sample_count <= 0:
            raise InvalidArgumentError(
                f"sample_count must be positive, got {sample_count}"
            )
        sigma = float(self.noise_std_dev)
        if not np.isfinite(sigma) or sigma <= 0:
            raise InvalidArgumentError(
                f"noise_std_dev must be positive, got {self.noise_std_dev!r}"
            )
        if max_x < min_x:
            raise InvalidArgumentError(
                f"max_x ({max_x}) must not be smaller than min_x ({min_x})"
            )
        for name in ("slope", "intercept"):
            if not np.isfinite(float(getattr(self, name))):
                raise InvalidArgumentError(f"{name} must be finite")

        # Normalize numpy scalars and ints-as-floats to plain Python types.
        object.__setattr__(self, "slope", float(self.slope))
        object.__setattr__(self, "intercept", float(self.intercept))
        object.__setattr__(self, "increment", increment)
        object.__setattr__(self, "sample_count", sample_count)
        object.__setattr__(self, "noise_std_dev", sigma)
        object.__setattr__(self, "min_x", min_x)
        object.__setattr__(self, "max_x", max_x)

    @classmethod
    def from_coefficients(
        cls,
        n: float,
        m: float,
        increment: int,
        sample_count: int,
        noise_std_dev: float,
        min_x: int = DEFAULT_MIN_X,
        max_x: int = DEFAULT_MAX_X,
    ) -> "DatasetConfiguration":
        """Build a configuration from the model coefficients ``N`` and ``M``.

        Args:
            n: Coefficient ``N``.
            m: Coefficient ``M``.
            increment: Step between x values.
            sample_count: Number of observations.
            noise_std_dev: Noise standard deviation.
            min_x: First x value.
            max_x: Upper bound of the x domain.

        Returns:
            DatasetConfiguration: With ``slope = M + N/7`` and
            ``intercept = N/3 + M/2``.
        """
        n = float(n)
        m = float(m)
        return cls(
            slope=m + n / 7.0,
            intercept=n / 3.0 + m / 2.0,
            increment=increment,
            sample_count=sample_count,
            noise_std_dev=noise_std_dev,
            min_x=min_x,
            max_x=max_x,
        )

    @property
    def label(self) -> str:
        return f"n={self.sample_count}, h={self.increment}, sigma={self.noise_std_dev:g}"

    def x_values(self) -> np.ndarray:
        """Return the integer grid ``min_x + i * increment`` for ``i < n``."""
        return self.min_x + np.arange(self.sample_count, dtype=np.int64) * self.increment


DEFAULT_CONFIGURATIONS: Tuple[DatasetConfiguration, ...] = (
    DatasetConfiguration.from_coefficients(5.0, 4.0, increment=5, sample_count=11, noise_std_dev=1),
    DatasetConfiguration.from_coefficients(5.0, 4.0, increment=1, sample_count=51, noise_std_dev=1),
    DatasetConfiguration.from_coefficients(5.0, 4.0, increment=5, sample_count=11, noise_std_dev=3),
    DatasetConfiguration.from_coefficients(5.0, 4.0, increment=1, sample_count=51, noise_std_dev=3),
)
