import logging

import numpy as np
import pytest

from noisyline.config import DEFAULT_CONFIGURATIONS, DatasetConfiguration
from noisyline.errors import InvalidArgumentError
from noisyline.simulation import create_results_dataframe, run_dataset, run_many
from noisyline.stats.noise import NoiseSampler


@pytest.fixture
def config():
    return DatasetConfiguration.from_coefficients(
        5.0, 4.0, increment=5, sample_count=11, noise_std_dev=1
    )


def test_run_dataset_uses_density_noise(config):
    run = run_dataset(config, rng=3, step=0.01)
    table = NoiseSampler.build(0.0, config.noise_std_dev, step=0.01)
    assert np.all(np.isin(run.series.noise, table.densities))
    assert len(run.series) == config.sample_count
    assert run.result.dof == config.sample_count - 2
    assert run.result.confidence_level == pytest.approx(0.90)


def test_run_dataset_is_reproducible(config):
    a = run_dataset(config, rng=11, step=0.01)
    b = run_dataset(config, rng=11, step=0.01)
    assert np.array_equal(a.series.y, b.series.y)
    assert a.result == b.result


def test_normal_policy_recovers_slope(config):
    run = run_dataset(config, rng=5, noise_policy="normal")
    assert run.result.estimated_slope == pytest.approx(config.slope, abs=0.3)


def test_unknown_noise_policy_raises(config):
    with pytest.raises(InvalidArgumentError):
        run_dataset(config, rng=0, noise_policy="uniform")


def test_run_many_independent_and_reproducible():
    configs = DEFAULT_CONFIGURATIONS[:2]
    first = run_many(configs, seed=99, step=0.01)
    second = run_many(configs, seed=99, step=0.01)
    assert len(first) == 2
    for a, b in zip(first, second):
        assert np.array_equal(a.series.noise, b.series.noise)
    assert first[0].config is configs[0]


def test_density_noise_bias_is_logged(caplog):
    # Density readings are positive, so the intercept is biased upwards.
    caplog.set_level(logging.WARNING)
    cfg = DatasetConfiguration.from_coefficients(
        5.0, 4.0, increment=1, sample_count=51, noise_std_dev=1
    )
    run = run_dataset(cfg, rng=2024, step=0.001)
    assert run.result.estimated_intercept > cfg.intercept
    assert any("true intercept" in rec.message for rec in caplog.records)


def test_create_results_dataframe(config):
    runs = run_many([config, config], seed=1, step=0.01)
    df = create_results_dataframe(runs)
    assert len(df) == 2
    assert set(df.columns) >= {
        "Run",
        "Configuration",
        "a (true)",
        "a (estimate)",
        "sigma^2 (estimate)",
        "a CI lower",
        "a CI upper",
        "sigma^2 CI upper",
        "a in CI",
    }
    row = df.iloc[0]
    assert row["a CI lower"] <= row["a (estimate)"] <= row["a CI upper"]
    assert row["a (true)"] == pytest.approx(config.slope)
