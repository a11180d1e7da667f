"""
One-dimensional root finding, minimization and curve intersection.

Modules:
    newton:
        Scalar Newton iteration with central-difference derivatives and the
        two-dimensional Newton solver behind :class:`CurveIntersector`.

    brent:
        Brent's bracketing root finder (with automatic bracket search and
        fallbacks) and Brent's golden-section/parabolic minimizer.

Design Principle:
    Every routine is bounded by a fixed iteration cap and reports whether it
    certified its answer through the ``status`` of the returned record; none
    of them raise on non-convergence.
"""

from .brent import find_root, minimize, root
from .newton import CurveIntersector, newton

__all__ = [
    "newton",
    "find_root",
    "root",
    "minimize",
    "CurveIntersector",
]
