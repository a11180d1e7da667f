"""Bracketing root finder and minimizer after Brent.

Both routines follow the ALGOL/Fortran codes in Forsythe, Malcolm and Moler,
*Computer Methods for Mathematical Computations* (1977): ``zeroin`` for
:func:`find_root` and ``fminbr`` for :func:`minimize`. The absolute tolerance
is :data:`numkit.constants.EPS` throughout.
"""

from __future__ import annotations

import math
from typing import Callable, Sequence, Tuple, Union

import numpy as np

from numkit.constants import EPS, MAX_ITERATIONS_MINIMIZE, MAX_ITERATIONS_ROOT
from numkit.errors import InvalidConfiguration
from numkit.results import BEST_EFFORT, CONVERGED, OptimizeResult
from numkit.roots.newton import newton

GOLDEN_RATIO_STEP = (3.0 - math.sqrt(5.0)) * 0.5


def _is_bracket(x0) -> bool:
    return np.ndim(x0) > 0


def _probe_candidates(a: float) -> Tuple[float, ...]:
    aa = 1.0 if a == 0 else a
    return (
        0.9 * aa,
        1.1 * aa,
        aa - 1,
        aa + 1,
        0.5 * aa,
        1.5 * aa,
        -aa,
        2 * aa,
        -10 * aa,
        10 * aa,
    )


def find_root(
    f: Callable[..., float],
    x0: Union[float, Sequence[float]],
    args: Tuple = (),
    max_iterations: int = MAX_ITERATIONS_ROOT,
) -> OptimizeResult:
    """Find a zero of ``f`` with Brent's method.

    Args:
        f: Scalar function ``f(x, *args)``.
        x0: Either a bracket ``[a, b]`` or a scalar starting point. For a
            scalar, the partner ``b`` is searched among
            ``0.9x, 1.1x, x-1, x+1, 0.5x, 1.5x, -x, 2x, -10x, 10x`` (with
            ``x = 1`` when the start is zero) until ``f`` changes sign.
        args: Extra positional arguments forwarded to ``f``.
        max_iterations: Cap on Brent iterations.

    Returns:
        OptimizeResult: ``method="brent"`` when a sign change was enclosed.
        Without one, the result of :func:`minimize` (bracket input) or
        :func:`~numkit.roots.newton.newton` (scalar input) is returned with
        ``status="best_effort"``.

    Raises:
        InvalidConfiguration: If a bracket has fewer than two entries.
    """
    nfev = 0
    if _is_bracket(x0):
        if len(x0) < 2:
            raise InvalidConfiguration("find_root: a bracket needs at least two entries.")
        a = float(x0[0])
        b = float(x0[1])
        fa = f(a, *args)
        fb = f(b, *args)
        nfev += 2
    else:
        a = float(x0)
        fa = f(a, *args)
        nfev += 1

        b, fb = a, fa
        for b in _probe_candidates(a):
            fb = f(b, *args)
            nfev += 1
            if fa * fb <= 0:
                break

        if b < a:
            a, b = b, a
            fa, fb = fb, fa

    if fa * fb > 0:
        if _is_bracket(x0):
            fallback = minimize(f, [a, b], args=args)
        else:
            fallback = newton(f, a, args=args)
        return OptimizeResult(
            x=fallback.x,
            fun=fallback.fun,
            status=BEST_EFFORT,
            iterations=fallback.iterations,
            nfev=nfev + fallback.nfev,
            method=fallback.method,
        )

    c, fc = a, fa
    niter = 0

    while niter < max_iterations:
        prev_step = b - a

        # Keep b as the best approximation.
        if abs(fc) < abs(fb):
            a, b, c = b, c, b
            fa, fb, fc = fb, fc, fb

        tol_act = 2 * EPS * abs(b) + EPS * 0.5
        new_step = (c - b) * 0.5

        if abs(new_step) <= tol_act and abs(fb) <= EPS:
            return OptimizeResult(
                x=float(b),
                fun=float(fb),
                status=CONVERGED,
                iterations=niter,
                nfev=nfev,
                method="brent",
            )

        # Interpolate only if the previous step was large enough and went the
        # right way.
        if abs(prev_step) >= tol_act and abs(fa) > abs(fb):
            cb = c - b
            if a == c:
                # Secant.
                t1 = fb / fa
                p = cb * t1
                q = 1.0 - t1
            else:
                # Inverse quadratic interpolation.
                q = fa / fc
                t1 = fb / fc
                t2 = fb / fa
                p = t2 * (cb * q * (q - t1) - (b - a) * (t1 - 1.0))
                q = (q - 1.0) * (t1 - 1.0) * (t2 - 1.0)

            if p > 0:
                q = -q
            else:
                p = -p

            if p < (0.75 * cb * q - abs(tol_act * q) * 0.5) and p < abs(
                prev_step * q * 0.5
            ):
                new_step = p / q

        if abs(new_step) < tol_act:
            new_step = tol_act if new_step > 0 else -tol_act

        a, fa = b, fb
        b += new_step
        fb = f(b, *args)
        nfev += 1

        # c must keep the sign opposite to b.
        if (fb > 0 and fc > 0) or (fb < 0 and fc < 0):
            c, fc = a, fa

        niter += 1

    return OptimizeResult(
        x=float(b),
        fun=float(fb),
        status=BEST_EFFORT,
        iterations=niter,
        nfev=nfev,
        method="brent",
    )


def root(
    f: Callable[..., float], x0: Union[float, Sequence[float]], args: Tuple = ()
) -> float:
    """Return only the abscissa found by :func:`find_root`."""
    return find_root(f, x0, args=args).x


def minimize(
    f: Callable[..., float],
    bracket: Sequence[float],
    args: Tuple = (),
    max_iterations: int = MAX_ITERATIONS_MINIMIZE,
) -> OptimizeResult:
    """Locate a minimum of ``f`` inside ``bracket``.

    Golden-section search accelerated by successive parabolic interpolation.
    The first step is always a golden-section step.

    Args:
        f: Scalar function ``f(x, *args)``.
        bracket: Interval ``[a, b]`` expected to contain the minimum.
        args: Extra positional arguments forwarded to ``f``.
        max_iterations: Iteration cap.

    Returns:
        OptimizeResult: ``status="converged"`` when the enclosing range
        shrank below the tolerance, ``"best_effort"`` at the cap.

    Raises:
        InvalidConfiguration: If ``bracket`` is not a sequence of at least two
            numbers.
    """
    if not _is_bracket(bracket) or len(bracket) < 2:
        raise InvalidConfiguration("minimize: bracket needs at least two entries.")

    r = GOLDEN_RATIO_STEP
    tol = EPS
    sqrteps = EPS

    a = float(bracket[0])
    b = float(bracket[1])
    v = a + r * (b - a)
    fv = f(v, *args)
    nfev = 1

    x = w = v
    fx = fw = fv
    niter = 0
    status = BEST_EFFORT

    while niter < max_iterations:
        middle_range = (a + b) * 0.5
        tol_act = sqrteps * abs(x) + tol / 3.0

        if abs(x - middle_range) + (b - a) * 0.5 <= 2.0 * tol_act:
            status = CONVERGED
            break

        new_step = r * (b - x if x < middle_range else a - x)

        if abs(x - w) >= tol_act:
            t = (x - w) * (fx - fv)
            q = (x - v) * (fx - fw)
            p = (x - v) * q - (x - w) * t
            q = 2 * (q - t)

            if q > 0:
                p = -p
            else:
                q = -q

            # Accept the parabolic step when it lands inside [a, b] away from
            # both ends and is not too large.
            if (
                abs(p) < abs(new_step * q)
                and p > q * (a - x + 2 * tol_act)
                and p < q * (b - x - 2 * tol_act)
            ):
                new_step = p / q

        if abs(new_step) < tol_act:
            new_step = tol_act if new_step > 0 else -tol_act

        t = x + new_step
        ft = f(t, *args)
        nfev += 1

        if ft <= fx:
            if t < x:
                b = x
            else:
                a = x
            v, w, x = w, x, t
            fv, fw, fx = fw, fx, ft
        else:
            if t < x:
                a = t
            else:
                b = t

            if ft <= fw or w == x:
                v, w = w, t
                fv, fw = fw, ft
            elif ft <= fv or v == x or v == w:
                v = t
                fv = ft

        niter += 1

    return OptimizeResult(
        x=float(x),
        fun=float(fx),
        status=status,
        iterations=niter,
        nfev=nfev,
        method="fminbr",
    )
