import pytest

from noisyline.config import DatasetConfiguration
from noisyline.reporting import (
    format_interval,
    format_run_table,
    format_value_with_uncertainty,
    print_summary,
)
from noisyline.simulation import create_results_dataframe, run_dataset


@pytest.fixture
def run():
    cfg = DatasetConfiguration.from_coefficients(
        5.0, 4.0, increment=5, sample_count=11, noise_std_dev=1
    )
    return run_dataset(cfg, rng=8, step=0.01)


def test_format_interval():
    assert format_interval((1.23456, 2.0)) == "[1.2346, 2.0000]"
    assert format_interval((-1.0, 1.0), digits=1) == "[-1.0, 1.0]"


def test_format_value_with_uncertainty():
    assert format_value_with_uncertainty(4.71234, 0.0123) == "4.712 ± 0.012"
    assert format_value_with_uncertainty(3.6667, 0.04) == "3.67 ± 0.04"
    assert format_value_with_uncertainty(4.71234, 0.0) == "4.71234 ± 0"


def test_format_run_table_layout(run):
    text = format_run_table(run)
    lines = text.splitlines()
    assert lines[0].startswith("Parameters: x ∈ [-25, 25], h = 5, n = 11")
    assert lines[1] == "   n   |   x   |   E   |   Y"
    # header (3) + one row per observation + 6 result lines
    assert len(lines) == 3 + 11 + 6
    assert lines[3].split("|")[1].strip() == "-25"
    assert "90% CI for a: [" in text
    assert "90% CI for σ²: [" in text


def test_print_summary(run, capsys):
    print_summary(create_results_dataframe([run]))
    out = capsys.readouterr().out
    assert "Estimation summary" in out
    assert "Run 0 (n=11, h=5, sigma=1)" in out


def test_print_summary_empty(capsys):
    import pandas as pd

    print_summary(pd.DataFrame())
    assert "(no runs)" in capsys.readouterr().out
