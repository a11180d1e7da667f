import math

import numpy as np
import pytest

from numkit.constants import is_nan_pair
from numkit.differentiation import central_difference, derivative
from numkit.errors import DimensionMismatch, NumericsError
from numkit.points import (
    FunctionCurve,
    ParametricCurve,
    Point,
    PointLike,
    coordinates,
    points_from_xy,
)


def test_central_difference_of_smooth_functions():
    assert abs(central_difference(math.sin, 0.3) - math.cos(0.3)) < 1e-8
    assert abs(central_difference(lambda x, a: a * x * x, 2.0, args=(3.0,)) - 12.0) < 1e-6


def test_derivative_returns_callable():
    d = derivative(math.exp)
    assert abs(d(1.0) - math.e) < 1e-8


def test_points_from_xy_and_coordinates():
    pts = points_from_xy([1, 2, 3], [4, 5, 6])
    assert all(isinstance(p, PointLike) for p in pts)
    np.testing.assert_array_equal(coordinates(pts), [[1, 4], [2, 5], [3, 6]])

    pts[0].x = -1.0
    assert coordinates(pts)[0, 0] == -1.0


def test_points_from_xy_length_mismatch():
    with pytest.raises(DimensionMismatch):
        points_from_xy([1.0, 2.0], [1.0])
    with pytest.raises(NumericsError):
        points_from_xy([1.0], [1.0, 2.0])


def test_function_curve_adapter():
    curve = FunctionCurve(lambda t: 2.0 * t, lambda t: t + 1.0)
    assert isinstance(curve, ParametricCurve)
    assert curve.X(1.5) == 3.0
    assert curve.Y(1.5) == 2.5


def test_nan_pair_marks_gaps():
    assert is_nan_pair(math.nan, 1.0)
    assert is_nan_pair(1.0, math.nan)
    assert not is_nan_pair(0.0, 0.0)
    p = Point(1.0, 2.0)
    assert not is_nan_pair(p.X(), p.Y())
