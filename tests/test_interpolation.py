import math

import numpy as np
import pytest
from scipy.interpolate import CubicSpline

from numkit.errors import DimensionMismatch, InvalidConfiguration
from numkit.interpolation import (
    BezierCurve,
    BSpline,
    CardinalSpline,
    CatmullRomSpline,
    LagrangePolynomial,
    NaturalCubicSpline,
    NevilleCurve,
    RegressionPolynomial,
    knot_vector,
    polynomial_term,
)
from numkit.points import Point, points_from_xy


def test_neville_passes_through_nodes(zigzag_points):
    curve = NevilleCurve(zigzag_points)
    for i, p in enumerate(zigzag_points):
        assert curve.X(float(i)) == p.x
        assert curve.Y(float(i)) == p.y
    assert curve.domain == (0.0, 6.0)


def test_neville_reproduces_polynomials():
    pts = points_from_xy([0.0, 1.0, 2.0, 3.0], [0.0, 1.0, 4.0, 9.0])
    curve = NevilleCurve(pts)
    assert np.isclose(curve.X(1.5), 1.5)
    assert np.isclose(curve.Y(1.5), 2.25)


def test_neville_cache_requires_invalidate():
    pts = points_from_xy([0.0, 1.0, 2.0], [0.0, 1.0, 0.0])
    curve = NevilleCurve(pts)
    assert curve.Y(1.0) == 1.0

    pts[1].y = 5.0
    assert curve.Y(1.0) == 1.0
    curve.invalidate()
    assert curve.Y(1.0) == 5.0


def test_lagrange_polynomial_quadratic():
    poly = LagrangePolynomial(points_from_xy([0.0, 1.0, 2.0], [1.0, 3.0, 7.0]))
    assert np.isclose(poly(1.5), 4.75)
    assert poly(2.0) == 7.0
    np.testing.assert_allclose(poly(np.array([0.5, -1.0])), [1.75, 1.0])


def test_natural_spline_reproduces_knots_and_lines():
    spline = NaturalCubicSpline.fit([0.0, 1.0, 2.0, 3.0, 4.0], [1.0, 3.0, 5.0, 7.0, 9.0])
    assert np.allclose(spline.second_derivatives, 0.0)
    assert np.isclose(spline.evaluate(2.5), 6.0)

    xs = [0.0, 0.7, 1.5, 2.0, 3.2]
    ys = [1.0, -0.5, 2.0, 0.3, 0.8]
    spline = NaturalCubicSpline.fit(xs, ys)
    np.testing.assert_allclose(spline.evaluate(np.array(xs)), ys, atol=1e-10)


def test_natural_spline_matches_scipy():
    x = np.linspace(0.0, 2.0 * math.pi, 9)
    y = np.sin(x)
    q = np.linspace(0.0, 2.0 * math.pi, 50)
    ours = NaturalCubicSpline.fit(x, y).evaluate(q)
    np.testing.assert_allclose(ours, CubicSpline(x, y, bc_type="natural")(q), atol=1e-10)


def test_natural_spline_sorts_input_and_returns_nan_outside():
    spline = NaturalCubicSpline.fit([2.0, 0.0, 1.0], [0.0, 0.0, 1.0])
    assert np.isclose(spline.evaluate(1.0), 1.0)
    assert math.isnan(spline.evaluate(-0.1))
    assert math.isnan(spline.evaluate(2.1))
    assert isinstance(spline.evaluate(0.5), float)


def test_natural_spline_two_points_is_a_line():
    spline = NaturalCubicSpline.fit([0.0, 2.0], [0.0, 4.0])
    assert np.isclose(spline(1.0), 2.0)


def test_natural_spline_rejects_bad_input():
    with pytest.raises(InvalidConfiguration):
        NaturalCubicSpline.fit([1.0], [1.0])
    with pytest.raises(DimensionMismatch):
        NaturalCubicSpline.fit([0.0, 1.0, 2.0], [0.0, 1.0])


def test_cardinal_spline_hits_points_and_end_clamps(zigzag_points):
    spline = CardinalSpline(zigzag_points, tension=0.3)
    for i, p in enumerate(zigzag_points):
        assert spline.X(float(i)) == p.x
        assert spline.Y(float(i)) == p.y
    assert spline.Y(-2.0) == zigzag_points[0].y
    assert spline.Y(10.0) == zigzag_points[-1].y
    assert math.isnan(spline.X(float("nan")))


def test_cardinal_spline_is_continuous_at_joints(zigzag_points):
    spline = CatmullRomSpline(zigzag_points)
    for i in range(1, len(zigzag_points) - 1):
        assert abs(spline.Y(i - 1e-9) - zigzag_points[i].y) < 1e-6
        assert abs(spline.Y(i + 1e-9) - zigzag_points[i].y) < 1e-6


def test_catmull_rom_reproduces_straight_lines():
    pts = points_from_xy([0.0, 1.0, 2.0, 3.0, 4.0], [0.0, 2.0, 4.0, 6.0, 8.0])
    spline = CatmullRomSpline(pts)
    assert np.isclose(spline.X(1.5), 1.5)
    assert np.isclose(spline.Y(2.25), 4.5)


def test_cardinal_spline_degenerate_inputs():
    assert math.isnan(CatmullRomSpline([Point(1.0, 2.0)]).X(0.5))
    with pytest.raises(InvalidConfiguration):
        CardinalSpline([Point(0.0, 0.0), Point(1.0, 1.0)], tension=0.0)


def test_cardinal_spline_reads_callable_tension_on_rebuild(zigzag_points):
    tension = {"value": 0.5}
    spline = CardinalSpline(zigzag_points, tension=lambda: tension["value"])
    before = spline.Y(2.25)

    tension["value"] = 0.9
    assert spline.Y(2.25) == before
    spline.recompute()
    assert spline.Y(2.25) != before


def test_bezier_single_segment():
    pts = points_from_xy([0.0, 1.0, 2.0, 3.0], [0.0, 2.0, 2.0, 0.0])
    curve = BezierCurve(pts)
    assert curve.X(0.0) == 0.0
    assert curve.X(1.0) == 3.0
    assert np.isclose(curve.Y(0.5), (0.0 + 3 * 2.0 + 3 * 2.0 + 0.0) / 8.0)
    assert curve.Y(-1.0) == 0.0


def test_bezier_ignores_incomplete_trailing_segment(zigzag_points):
    pts = zigzag_points[:6]
    curve = BezierCurve(pts)
    assert curve.domain == (0.0, 1.0)
    assert curve.segments == 1
    assert curve.X(5.0) == pts[3].x


def test_bezier_requires_four_points():
    with pytest.raises(InvalidConfiguration):
        BezierCurve(points_from_xy([0.0, 1.0, 2.0], [0.0, 1.0, 0.0]))


def test_knot_vector_is_clamped():
    assert knot_vector(4, 4) == (0.0, 0.0, 0.0, 0.0, 1.0, 2.0, 2.0, 2.0, 2.0)


def test_bspline_endpoints_and_partition_of_unity(zigzag_points):
    curve = BSpline(zigzag_points, 4)
    assert curve.X(0.0) == zigzag_points[0].x
    assert curve.Y(curve.domain[1]) == zigzag_points[-1].y

    flat = BSpline([Point(3.0, -1.0) for _ in range(5)], 4)
    for t in np.linspace(0.05, 1.95, 12):
        assert np.isclose(flat.X(t), 3.0)
        assert np.isclose(flat.Y(t), -1.0)


def test_bspline_order_is_clamped_to_point_count():
    pts = points_from_xy([0.0, 1.0, 2.0], [0.0, 2.0, 0.0])
    curve = BSpline(pts, 10)
    assert curve.domain == (0.0, 1.0)
    assert np.isclose(curve.Y(0.5), 1.0)
    assert np.isclose(curve.X(0.5), 1.0)


def test_bspline_degenerate_inputs():
    assert math.isnan(BSpline([Point(1.0, 1.0)], 3).X(0.5))
    with pytest.raises(InvalidConfiguration):
        BSpline([Point(0.0, 0.0), Point(1.0, 1.0)], 0)


def test_regression_recovers_exact_polynomial():
    x = np.arange(6, dtype=float)
    y = 1.0 + 2.0 * x + 3.0 * x**2
    poly = RegressionPolynomial(2, x, y)
    np.testing.assert_allclose(poly.coefficients, [1.0, 2.0, 3.0], atol=1e-6)
    assert np.isclose(poly(1.5), 1.0 + 3.0 + 6.75)
    np.testing.assert_allclose(poly(np.array([0.0, 2.0])), [1.0, 17.0], atol=1e-6)


def test_regression_matches_numpy_polyfit(rng):
    x = np.linspace(-2.0, 2.0, 25)
    y = 0.5 - x + 0.25 * x**3 + rng.normal(scale=0.1, size=x.size)
    poly = RegressionPolynomial(3, x, y)
    np.testing.assert_allclose(poly.coefficients, np.polyfit(x, y, 3)[::-1], atol=1e-8)


def test_regression_from_points_and_term():
    pts = points_from_xy([0.0, 1.0, 2.0, 3.0], [1.0, 3.0, 5.0, 7.0])
    poly = RegressionPolynomial.from_points(1, pts)
    assert np.isclose(poly(10.0), 21.0)
    assert poly.term() == polynomial_term(poly.coefficients, 1, "x", 3)


def test_regression_live_degree_refits():
    holder = {"degree": 1.7}
    x = [0.0, 1.0, 2.0, 3.0, 4.0]
    y = [0.0, 1.0, 4.0, 9.0, 16.0]
    poly = RegressionPolynomial(lambda: holder["degree"], x, y)
    assert poly.degree == 1

    holder["degree"] = 2
    assert poly.degree == 2
    assert np.isclose(poly(5.0), 25.0)


def test_regression_rejects_bad_arguments():
    with pytest.raises(InvalidConfiguration):
        RegressionPolynomial("two", [0.0, 1.0], [0.0, 1.0])
    with pytest.raises(DimensionMismatch):
        RegressionPolynomial(1, [0.0, 1.0, 2.0], [0.0, 1.0])


def test_polynomial_term_formatting():
    assert polynomial_term([1.0, 2.0, 3.0], 2) == "(3)*x^2 + (2)*x + (1)"
    assert polynomial_term([0.5, -1.25], 1, varname="t", precision=2) == "(-1.2)*t + (0.5)"
