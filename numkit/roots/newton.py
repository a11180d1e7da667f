"""Newton iterations: scalar root finding and curve-curve intersection."""

from __future__ import annotations

from typing import Callable, Optional, Tuple

import numpy as np

from numkit.constants import EPS, MAX_ITERATIONS_INTERSECTION, MAX_ITERATIONS_NEWTON
from numkit.differentiation import central_difference, derivative
from numkit.errors import InvalidConfiguration
from numkit.points import ParametricCurve
from numkit.results import BEST_EFFORT, CONVERGED, IntersectionResult, OptimizeResult


def newton(
    f: Callable[..., float],
    x0: float,
    args: Tuple = (),
    rng: Optional[np.random.Generator] = None,
    max_iterations: int = MAX_ITERATIONS_NEWTON,
) -> OptimizeResult:
    """Find a root of ``f`` with Newton's method.

    Args:
        f: Scalar function ``f(x, *args)``.
        x0: Scalar starting value.
        args: Extra positional arguments forwarded to ``f``.
        rng: Random generator used to kick the iterate off flat spots.
        max_iterations: Iteration cap.

    Returns:
        OptimizeResult: ``status="converged"`` when ``|f(x)| <= EPS``,
        otherwise ``"best_effort"`` with the last iterate.

    Raises:
        InvalidConfiguration: If ``x0`` is not a scalar.

    Note:
        The derivative is a central difference. Where ``|f'(x)| <= EPS`` the
        iterate is shifted by a random offset in ``[-1, -0.8)`` instead of
        dividing by a vanishing slope.
    """
    if np.ndim(x0) != 0:
        raise InvalidConfiguration("newton expects a scalar starting value.")
    if rng is None:
        rng = np.random.default_rng()

    x = float(x0)
    fx = f(x, *args)
    nfev = 1
    i = 0

    while i < max_iterations and abs(fx) > EPS:
        df = central_difference(f, x, args=args)
        nfev += 2

        if abs(df) > EPS:
            x -= fx / df
        else:
            x += rng.random() * 0.2 - 1.0

        fx = f(x, *args)
        nfev += 1
        i += 1

    status = CONVERGED if abs(fx) <= EPS else BEST_EFFORT
    return OptimizeResult(
        x=float(x), fun=float(fx), status=status, iterations=i, nfev=nfev, method="newton"
    )


class CurveIntersector:
    """Two-dimensional Newton solver for ``c1(t1) = c2(t2)``.

    The solver remembers the parameters of its last solution and uses them
    as the starting guess of the next call, which makes tracking an
    intersection of slowly moving curves cheap. Call :meth:`reset` (or pass
    ``use_memo=False``) to start from the supplied guesses instead.

    Attributes:
        t1_memo: Parameter on the first curve from the last call, or ``None``.
        t2_memo: Parameter on the second curve from the last call, or ``None``.

    Note:
        Instances are not thread safe: the memo is read and written without
        locking.
    """

    def __init__(self, max_iterations: int = MAX_ITERATIONS_INTERSECTION):
        self.max_iterations = int(max_iterations)
        self.t1_memo: Optional[float] = None
        self.t2_memo: Optional[float] = None

    def reset(self) -> None:
        self.t1_memo = None
        self.t2_memo = None

    def intersect(
        self,
        c1: ParametricCurve,
        c2: ParametricCurve,
        t1_guess: float,
        t2_guess: float,
        use_memo: bool = True,
    ) -> IntersectionResult:
        """Locate a common point of two parametric curves.

        Solves ``(c1.X(t1) - c2.X(t2), c1.Y(t1) - c2.Y(t2)) = (0, 0)`` with the
        Jacobian

            J = [[c1.X'(t1), -c2.X'(t2)],
                 [c1.Y'(t1), -c2.Y'(t2)]]

        built from central differences.

        Args:
            c1: First curve.
            c2: Second curve.
            t1_guess: Starting parameter on ``c1`` (ignored when a memo exists).
            t2_guess: Starting parameter on ``c2`` (ignored when a memo exists).
            use_memo: Start from the previous solution when available.

        Returns:
            IntersectionResult: The coincidence point taken from the curve
            whose converged parameter is smaller in magnitude (ties go to
            ``c2``; the choice is arbitrary), both parameters, and a status.
        """
        if use_memo and self.t1_memo is not None and self.t2_memo is not None:
            t1, t2 = self.t1_memo, self.t2_memo
        else:
            t1, t2 = float(t1_guess), float(t2_guess)

        e = c1.X(t1) - c2.X(t2)
        f = c1.Y(t1) - c2.Y(t2)
        mismatch = e * e + f * f

        dx1 = derivative(c1.X)
        dx2 = derivative(c2.X)
        dy1 = derivative(c1.Y)
        dy2 = derivative(c2.Y)

        count = 0
        while mismatch > EPS and count < self.max_iterations:
            a = dx1(t1)
            b = -dx2(t2)
            c = dy1(t1)
            d = -dy2(t2)
            disc = a * d - b * c
            if disc == 0.0:
                break
            t1 -= (d * e - b * f) / disc
            t2 -= (a * f - c * e) / disc
            e = c1.X(t1) - c2.X(t2)
            f = c1.Y(t1) - c2.Y(t2)
            mismatch = e * e + f * f
            count += 1

        self.t1_memo = t1
        self.t2_memo = t2

        if abs(t1) < abs(t2):
            point = (float(c1.X(t1)), float(c1.Y(t1)))
        else:
            point = (float(c2.X(t2)), float(c2.Y(t2)))

        status = CONVERGED if mismatch <= EPS else BEST_EFFORT
        return IntersectionResult(
            point=point, t1=float(t1), t2=float(t2), status=status, iterations=count
        )
