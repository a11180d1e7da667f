"""
Small-scale numerical routines for an interactive geometry and plotting stack.

Solves small dense linear systems, integrates, differentiates and finds roots
of scalar functions, interpolates and fits point sets, integrates ODE systems
and simplifies polylines.

Modules:
    - linalg: Gauss-Jordan solver, determinants and Jacobi eigen-decomposition.
    - quadrature: Newton-Cotes, Romberg, Gauss-Legendre, Gauss-Kronrod,
      adaptive QAG integration and Riemann sums.
    - roots: Newton, Brent root finding and minimization, curve intersection.
    - interpolation: Neville, Lagrange, natural cubic, cardinal, Bezier and
      B-spline evaluators and regression polynomials.
    - ode: Explicit Runge-Kutta integration with Butcher tableaux.
    - simplify: Ramer-Douglas-Peucker polyline simplification.
    - output / plotting: CSV and PNG export of sampled results.
"""

__version__ = "1.0.0"

from .differentiation import central_difference, derivative
from .errors import (
    DimensionMismatch,
    InvalidConfiguration,
    NonConvergenceWarning,
    NumericsError,
    NumericsWarning,
    SingularMatrix,
    ToleranceUnreachable,
    ToleranceWarning,
)
from .interpolation import (
    BezierCurve,
    BSpline,
    CardinalSpline,
    CatmullRomSpline,
    LagrangePolynomial,
    NaturalCubicSpline,
    NevilleCurve,
    RegressionPolynomial,
)
from .linalg import determinant, jacobi_eigen, solve
from .ode import ButcherTableau, runge_kutta
from .points import FunctionCurve, Point, points_from_xy
from .quadrature import (
    adaptive_quadrature,
    gauss_legendre,
    integrate,
    newton_cotes,
    riemann,
    romberg,
)
from .roots import CurveIntersector, find_root, minimize, newton, root
from .simplify import simplify

__all__ = [
    # Differentiation
    "central_difference",
    "derivative",
    # Linear algebra
    "solve",
    "determinant",
    "jacobi_eigen",
    # Quadrature
    "newton_cotes",
    "romberg",
    "gauss_legendre",
    "adaptive_quadrature",
    "integrate",
    "riemann",
    # Roots
    "newton",
    "find_root",
    "root",
    "minimize",
    "CurveIntersector",
    # Interpolation
    "NevilleCurve",
    "LagrangePolynomial",
    "NaturalCubicSpline",
    "CardinalSpline",
    "CatmullRomSpline",
    "BezierCurve",
    "BSpline",
    "RegressionPolynomial",
    # ODE
    "ButcherTableau",
    "runge_kutta",
    # Polylines
    "simplify",
    # Geometry adapters
    "Point",
    "FunctionCurve",
    "points_from_xy",
    # Errors
    "NumericsError",
    "DimensionMismatch",
    "SingularMatrix",
    "InvalidConfiguration",
    "ToleranceUnreachable",
    "NumericsWarning",
    "NonConvergenceWarning",
    "ToleranceWarning",
]
