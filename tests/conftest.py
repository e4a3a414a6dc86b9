"""Pytest configuration for repository-relative imports."""

import os
import sys

import matplotlib
import numpy as np
import pytest

ROOT = os.path.abspath(os.path.join(os.path.dirname(__file__), ".."))
if ROOT not in sys.path:
    sys.path.insert(0, ROOT)

matplotlib.use("Agg")


@pytest.fixture
def rng():
    return np.random.default_rng(20240611)
