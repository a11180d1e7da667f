"""
Interpolation and curve fitting.

Modules:
    lagrange:
        Barycentric interpolating polynomials: the parametric
        :class:`NevilleCurve` over equidistant nodes and the function
        :class:`LagrangePolynomial`.

    spline:
        Natural cubic splines for function data ``y(x)``.

    cardinal:
        Cardinal and Catmull-Rom splines through a list of points.

    bezier:
        Composite cubic Bezier curves.

    bspline:
        Uniform B-spline curves of arbitrary order.

    regression:
        Least-squares regression polynomials and a polynomial formatter.

Design Principle:
    Every evaluator reads its inputs once, caches its coefficients, and
    serves later evaluations from the cache. Moving an input point has no
    effect until ``invalidate()`` or ``recompute()`` is called, so a sampling
    pass over many ``t`` values costs a single rebuild.
"""

from ._cache import CachedEvaluator
from .bezier import BezierCurve
from .bspline import BSpline, basis_functions, knot_vector
from .cardinal import CardinalSpline, CatmullRomSpline
from .lagrange import LagrangePolynomial, NevilleCurve
from .regression import RegressionPolynomial, polynomial_term
from .spline import NaturalCubicSpline, evaluate_spline, spline_second_derivatives

__all__ = [
    "CachedEvaluator",
    "NevilleCurve",
    "LagrangePolynomial",
    "NaturalCubicSpline",
    "spline_second_derivatives",
    "evaluate_spline",
    "CardinalSpline",
    "CatmullRomSpline",
    "BezierCurve",
    "BSpline",
    "knot_vector",
    "basis_functions",
    "RegressionPolynomial",
    "polynomial_term",
]
