"""Pytest configuration for repository-relative imports and shared fixtures."""

import os
import sys

import matplotlib
import numpy as np
import pytest

ROOT = os.path.abspath(os.path.join(os.path.dirname(__file__), ".."))
if ROOT not in sys.path:
    sys.path.insert(0, ROOT)

matplotlib.use("Agg")

from numkit.points import points_from_xy  # noqa: E402


@pytest.fixture
def rng():
    return np.random.default_rng(12345)


@pytest.fixture
def zigzag_points():
    xs = [0.0, 1.0, 2.0, 3.0, 4.0, 5.0, 6.0]
    ys = [0.0, 1.5, 0.5, 2.0, 1.0, 2.5, 0.0]
    return points_from_xy(xs, ys)
