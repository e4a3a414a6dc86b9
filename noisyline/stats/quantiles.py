"""Quantile functions used to build regression confidence intervals.

``chi_squared_quantile`` is an analytic approximation: a closed-form probit
estimate is fed into the Cornish-Fisher expansion of the Chi-squared
distribution. Relative error is a few percent for very small degrees of freedom
and well below one percent from about nine degrees of freedom at the 5%/95%
tails. Exact Chi-squared quantiles are intentionally not used.

Student's t critical values come from :mod:`scipy.stats`.
"""

from __future__ import annotations

import math
import numbers

from scipy.stats import t as student_t

from ..errors import InvalidArgumentError

SQRT2 = math.sqrt(2.0)


def _check_probability(probability: float) -> float:
    p = float(probability)
    if not (0.0 < p < 1.0):
        raise InvalidArgumentError(
            f"probability must lie strictly between 0 and 1, got {probability!r}"
        )
    return p


def _check_dof(degrees_of_freedom: int) -> int:
    if isinstance(degrees_of_freedom, bool) or not isinstance(
        degrees_of_freedom, numbers.Integral
    ):
        raise InvalidArgumentError(
            f"degrees_of_freedom must be an integer, got {degrees_of_freedom!r}"
        )
    if degrees_of_freedom <= 0:
        raise InvalidArgumentError(
            f"degrees_of_freedom must be positive, got {degrees_of_freedom}"
        )
    return int(degrees_of_freedom)


def probit(probability: float) -> float:
    """Approximate the standard normal quantile ``z`` with ``Phi(z) = p``.

    Uses ``2.0637 * (ln(1/q) - 0.16) ** 0.4274 - 1.5774`` on the upper tail
    (``q = 1 - p``) and its mirror image on the lower tail. Absolute error is
    about ``1e-3`` over the central range.

    Raises:
        InvalidArgumentError: If ``probability`` is outside ``(0, 1)``.
    """
    p = _check_probability(probability)
    if p > 0.5:
        return 2.0637 * (math.log(1.0 / (1.0 - p)) - 0.16) ** 0.4274 - 1.5774
    return -2.0637 * (math.log(1.0 / p) - 0.16) ** 0.4274 + 1.5774


def chi_squared_quantile(probability: float, degrees_of_freedom: int) -> float:
    """Approximate the Chi-squared quantile ``chi2(p, n)``.

    Args:
        probability: Lower-tail probability in ``(0, 1)``.
        degrees_of_freedom: Positive integer ``n``.

    Returns:
        float: ``n + z*sqrt(2n) + 2/3*(z^2 - 1) + z(z^2 - 7)/(9*sqrt(2n))
        - (6z^4 + 14z^2 - 32)/(405n) + z(9z^4 + 256z^2 - 433)/(4860*n*sqrt(2n))``
        with ``z = probit(p)``.

    Raises:
        InvalidArgumentError: If ``probability`` is outside ``(0, 1)`` or
            ``degrees_of_freedom`` is not a positive integer.

    Note:
        For ``p = 0.5`` the result is close to ``n - 2/3``, the usual median
        approximation.

        Earlier releases added the linear term as ``2z`` without the
        ``sqrt(n)`` factor and added the ``1/n`` term with a positive sign.
        This version scales and signs both terms as the Cornish-Fisher
        expansion does, so results differ from previously generated
        intervals (by about 20% at ``n = 9``).
    """
    p = _check_probability(probability)
    n = _check_dof(degrees_of_freedom)
    z = probit(p)
    z2 = z * z

    linear = z * SQRT2
    quadratic = (2.0 / 3.0) * (z2 - 1.0)
    cubic = z * (z2 - 7.0) / (9.0 * SQRT2)
    quartic = (6.0 * z2 * z2 + 14.0 * z2 - 32.0) / 405.0
    quintic = z * (9.0 * z2 * z2 + 256.0 * z2 - 433.0) / (4860.0 * SQRT2)

    root_n = math.sqrt(n)
    return (
        n
        + linear * root_n
        + quadratic
        + cubic / root_n
        - quartic / n
        + quintic / (n * root_n)
    )


def student_t_critical(confidence_level: float, degrees_of_freedom: int) -> float:
    """Return the two-sided Student's t critical value.

    Args:
        confidence_level: Coverage of the interval, e.g. ``0.90``.
        degrees_of_freedom: Positive integer degrees of freedom.

    Returns:
        float: ``t`` such that ``P(|T| <= t) = confidence_level``, i.e. the
        ``1 - alpha/2`` quantile. At 95% this is ``2.2622`` for 9 and ``2.0096``
        for 49 degrees of freedom.
    """
    level = _check_probability(confidence_level)
    dof = _check_dof(degrees_of_freedom)
    alpha = 1.0 - level
    return float(student_t.ppf(1.0 - alpha / 2.0, dof))
