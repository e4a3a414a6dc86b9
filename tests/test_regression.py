import logging
import math

import numpy as np
import pytest
from scipy.stats import chi2

from noisyline.config import DatasetConfiguration
from noisyline.errors import DegenerateInputError, InvalidArgumentError
from noisyline.model import evaluate
from noisyline.stats.noise import NoiseSampler
from noisyline.stats.regression import ConfidenceInterval, fit, fit_series


def test_zero_noise_recovers_parameters():
    x = np.arange(-25, 26, 5)
    y = 4.714 * x + 3.667
    res = fit(x, y)
    assert res.estimated_slope == pytest.approx(4.714, abs=1e-9)
    assert res.estimated_intercept == pytest.approx(3.667, abs=1e-9)
    assert res.estimated_variance == pytest.approx(0.0, abs=1e-20)
    assert res.dof == 9


def test_zero_noise_configured_series():
    cfg = DatasetConfiguration.from_coefficients(
        5.0, 4.0, increment=1, sample_count=51, noise_std_dev=1
    )
    res = fit_series(evaluate(cfg, np.zeros(cfg.sample_count)))
    assert res.estimated_slope == pytest.approx(cfg.slope, abs=1e-9)
    assert res.estimated_intercept == pytest.approx(cfg.intercept, abs=1e-9)
    assert res.estimated_variance == pytest.approx(0.0, abs=1e-20)


def test_matches_polyfit_and_textbook_formulas():
    x = np.array([1.0, 2.0, 3.0, 4.0, 5.0])
    y = np.array([2.1, 3.9, 6.2, 7.8, 10.1])
    res = fit(x, y, confidence_level=0.95)

    m, b = np.polyfit(x, y, 1)
    assert res.estimated_slope == pytest.approx(m)
    assert res.estimated_intercept == pytest.approx(b)

    resid = y - (m * x + b)
    s2 = np.sum(resid**2) / 3
    sxx = np.sum((x - x.mean()) ** 2)
    assert res.estimated_variance == pytest.approx(s2)
    assert res.slope_se == pytest.approx(math.sqrt(s2 / sxx))
    assert res.intercept_se == pytest.approx(math.sqrt(s2 * (1 / 5 + x.mean() ** 2 / sxx)))


def test_intervals_are_symmetric(rng):
    x = np.arange(-25, 26)
    y = 2.0 * x - 1.0 + rng.normal(0.0, 3.0, size=x.size)
    res = fit(x, y)
    for est, ci in (
        (res.estimated_slope, res.slope_interval),
        (res.estimated_intercept, res.intercept_interval),
    ):
        assert ci.upper - est == pytest.approx(est - ci.lower, abs=1e-12)
        assert ci.lower < est < ci.upper


def test_t_critical_for_reference_sample_sizes():
    x11 = np.arange(11, dtype=float)
    x51 = np.arange(51, dtype=float)
    res11 = fit(x11, x11 + np.sin(x11), confidence_level=0.95)
    res51 = fit(x51, x51 + np.sin(x51), confidence_level=0.95)
    assert res11.t_critical == pytest.approx(2.2621571628540993, rel=1e-9)
    assert res51.t_critical == pytest.approx(2.0095752371292397, rel=1e-9)
    half = res11.slope_interval.upper - res11.estimated_slope
    assert half == pytest.approx(res11.t_critical * res11.slope_se)


def test_variance_interval_close_to_exact_chi_squared(rng):
    x = np.arange(-25, 26, 5)
    y = x + rng.normal(0.0, 1.0, size=x.size)
    res = fit(x, y, confidence_level=0.90)
    s2 = res.estimated_variance
    lower, upper = res.variance_interval
    assert lower == pytest.approx(9 * s2 / chi2.ppf(0.95, 9), rel=0.01)
    assert upper == pytest.approx(9 * s2 / chi2.ppf(0.05, 9), rel=0.01)
    assert lower < s2 < upper


def test_variance_interval_unbounded_for_one_dof(caplog):
    with caplog.at_level(logging.WARNING, logger="noisyline.stats.regression"):
        res = fit([0.0, 1.0, 2.0], [0.0, 1.5, 1.9], confidence_level=0.99)
    lower, upper = res.variance_interval
    assert res.dof == 1
    assert upper == math.inf
    assert 0 < lower < res.estimated_variance
    assert "no finite upper bound" in caplog.text


def test_slope_interval_coverage_with_gaussian_noise():
    sampler = NoiseSampler(12345)
    x = np.arange(-25, 26, 5)
    hits = 0
    trials = 200
    for _ in range(trials):
        y = 1.5 * x + 0.5 + sampler.sample_normal(0.0, 2.0, x.size)
        hits += fit(x, y, confidence_level=0.90).slope_interval.contains(1.5)
    assert 0.8 <= hits / trials <= 0.97


def test_estimated_std_dev_property():
    x = np.array([0.0, 1.0, 2.0, 3.0])
    y = np.array([0.0, 2.0, 1.0, 3.0])
    res = fit(x, y)
    assert res.estimated_std_dev == pytest.approx(math.sqrt(res.estimated_variance))


@pytest.mark.parametrize(
    "x, y",
    [
        ([1.0, 2.0], [1.0, 2.0]),
        ([1.0, 2.0, 3.0], [1.0, 2.0]),
        ([1.0, 2.0, float("nan")], [1.0, 2.0, 3.0]),
        ([[1.0, 2.0, 3.0]], [[1.0, 2.0, 3.0]]),
    ],
)
def test_invalid_inputs_raise(x, y):
    with pytest.raises(InvalidArgumentError):
        fit(x, y)


@pytest.mark.parametrize("level", [0.0, 1.0, 1.5])
def test_invalid_confidence_level_raises(level):
    with pytest.raises(InvalidArgumentError):
        fit([1.0, 2.0, 3.0], [1.0, 2.0, 4.0], confidence_level=level)


def test_identical_x_values_are_degenerate():
    with pytest.raises(DegenerateInputError):
        fit([0.1, 0.1, 0.1], [1.0, 2.0, 3.0])


def test_confidence_interval_helpers():
    ci = ConfidenceInterval(1.0, 3.0)
    assert ci.width == 2.0
    assert ci.contains(1.0)
    assert not ci.contains(3.5)
