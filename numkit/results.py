"""Define the result records returned by the iterative routines.

Each record carries the computed value together with a ``status`` string so
callers can tell a certified answer from a best-effort one:

- ``"converged"``: the routine's own stopping test was satisfied.
- ``"best_effort"``: an iteration cap or fallback path produced the value.
- ``"failed"``: the routine gave up early; the value is the last estimate.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Tuple

import numpy as np

CONVERGED = "converged"
BEST_EFFORT = "best_effort"
FAILED = "failed"

# Adaptive quadrature error classification.
ERROR_NONE = "none"
ERROR_ROUNDOFF = "roundoff"
ERROR_SINGULAR = "singular"
ERROR_MAX_ITERATIONS = "max_iterations"


@dataclass(frozen=True)
class KronrodEstimate:
    """Single Gauss-Kronrod evaluation over one interval.

    Attributes:
        value: Kronrod estimate of the integral.
        abserr: Rescaled absolute error estimate.
        resabs: Kronrod approximation of the integral of ``|f|``.
        resasc: Kronrod approximation of the integral of ``|f - mean|``.
    """

    value: float
    abserr: float
    resabs: float
    resasc: float


@dataclass(frozen=True)
class QuadratureResult:
    """Outcome of :func:`numkit.quadrature.adaptive_quadrature`.

    Attributes:
        value: Sum of the subinterval estimates.
        abserr: Accumulated absolute error estimate.
        status: ``converged``, ``best_effort`` or ``failed``.
        error: ``none``, ``roundoff``, ``singular`` or ``max_iterations``.
        iterations: Number of bisection iterations performed (1 = initial rule).
        intervals: Number of subintervals in the final worklist.
    """

    value: float
    abserr: float
    status: str
    error: str
    iterations: int
    intervals: int

    @property
    def converged(self) -> bool:
        return self.status == CONVERGED


@dataclass(frozen=True)
class OptimizeResult:
    """Outcome of the one-dimensional root and minimum finders.

    Attributes:
        x: Final abscissa.
        fun: Function value at ``x``.
        status: ``converged`` or ``best_effort``.
        iterations: Main-loop iterations performed.
        nfev: Number of function evaluations.
        method: Algorithm that produced ``x`` (``brent``, ``newton``,
            ``fminbr``).
    """

    x: float
    fun: float
    status: str
    iterations: int
    nfev: int
    method: str

    @property
    def converged(self) -> bool:
        return self.status == CONVERGED

    def __float__(self) -> float:
        return float(self.x)


@dataclass(frozen=True)
class IntersectionResult:
    """Outcome of :meth:`numkit.roots.CurveIntersector.intersect`."""

    point: Tuple[float, float]
    t1: float
    t2: float
    status: str
    iterations: int

    @property
    def converged(self) -> bool:
        return self.status == CONVERGED


@dataclass(frozen=True)
class RiemannSum:
    """Bar outline and area produced by :func:`numkit.quadrature.riemann`.

    Attributes:
        x: Outline abscissae, upper bar ends left to right followed by the
            lower bar ends right to left.
        y: Outline ordinates matching ``x``.
        area: Signed area between the upper and lower functions.
    """

    x: np.ndarray
    y: np.ndarray
    area: float
