"""Central-difference numerical derivatives.

The quadrature, root-finding and curve-intersection routines only need first
derivatives of well-behaved scalar functions, so a fixed-step symmetric
difference is used throughout:

    f'(x) ≈ (f(x + h) - f(x - h)) / (2h)

The truncation error is O(h^2); the default ``h = 1e-5`` balances it against
floating-point cancellation for functions of moderate scale.
"""

from __future__ import annotations

from typing import Callable, Tuple

from .constants import DIFF_STEP


def central_difference(
    f: Callable[..., float],
    x: float,
    h: float = DIFF_STEP,
    args: Tuple = (),
) -> float:
    """Evaluate the central-difference derivative of ``f`` at ``x``.

    Args:
        f: Scalar function ``f(x, *args)``.
        x: Evaluation point.
        h: Half-width of the difference stencil.
        args: Extra positional arguments forwarded to ``f``.

    Returns:
        float: Approximation of ``f'(x)``.
    """
    return (f(x + h, *args) - f(x - h, *args)) / (2.0 * h)


def derivative(
    f: Callable[..., float], h: float = DIFF_STEP, args: Tuple = ()
) -> Callable[[float], float]:
    """Return the central-difference derivative of ``f`` as a callable.

    Args:
        f: Scalar function ``f(x, *args)``.
        h: Half-width of the difference stencil.
        args: Extra positional arguments forwarded to ``f``.

    Returns:
        Callable[[float], float]: ``x -> central_difference(f, x, h, args)``.
    """

    def df(x: float) -> float:
        return central_difference(f, x, h, args)

    return df
