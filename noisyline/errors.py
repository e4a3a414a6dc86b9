"""Exception types raised by the estimation engine."""

from __future__ import annotations


class InvalidArgumentError(ValueError):
    """Raised when a configuration or call argument is outside its domain.

    Covers non-positive increments, sample counts and standard deviations,
    probabilities outside ``(0, 1)``, mismatched sequence lengths and samples
    too small for a two-parameter fit.
    """


class DegenerateInputError(InvalidArgumentError):
    """Raised when every x value is identical, so ``Sxx == 0``."""
