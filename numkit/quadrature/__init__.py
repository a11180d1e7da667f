"""
Numerical integration of scalar functions over finite intervals.

Modules:
    newton_cotes:
        Composite trapezoid, Simpson and Milne (Boole) rules and Romberg
        extrapolation on equidistant grids.

    gauss:
        Tabulated Gauss-Legendre rules (orders 2-18) and the QUADPACK
        Gauss-Kronrod pairs 7/15, 10/21 and 15/31 with error estimates.

    adaptive:
        The QUADPACK ``qag`` driver with its error-ordered worklist, plus the
        :func:`integrate` convenience wrapper.

    riemann:
        Riemann sums and bar outlines for display.

Design Principle:
    Integrands are plain Python callables evaluated one abscissa at a time;
    the routines never assume vectorized integrands.
"""

from .adaptive import QuadratureWorklist, adaptive_quadrature, integrate
from .gauss import (
    gauss_kronrod15,
    gauss_kronrod21,
    gauss_kronrod31,
    gauss_legendre,
    rescale_error,
)
from .newton_cotes import newton_cotes, romberg
from .riemann import riemann, riemann_sum

__all__ = [
    "newton_cotes",
    "romberg",
    "gauss_legendre",
    "gauss_kronrod15",
    "gauss_kronrod21",
    "gauss_kronrod31",
    "rescale_error",
    "QuadratureWorklist",
    "adaptive_quadrature",
    "integrate",
    "riemann",
    "riemann_sum",
]
