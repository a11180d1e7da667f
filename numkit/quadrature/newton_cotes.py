"""Closed Newton-Cotes rules and Romberg extrapolation.

Both schemes evaluate the integrand on an equidistant grid and do a fixed
(Newton-Cotes) or bounded (Romberg) amount of work, so they never report a
convergence status.
"""

from __future__ import annotations

from typing import Callable, Sequence

from numkit.errors import InvalidConfiguration

DEFAULT_NODES = 28
DEFAULT_RULE = "milne"
DEFAULT_ROMBERG_ITERATIONS = 20
DEFAULT_ROMBERG_EPS = 1.0e-7

NEWTON_COTES_RULES = ("trapezoid", "simpson", "milne")


def newton_cotes(
    interval: Sequence[float],
    f: Callable[[float], float],
    nodes: int = DEFAULT_NODES,
    rule: str = DEFAULT_RULE,
) -> float:
    """Integrate ``f`` over ``interval`` with a composite Newton-Cotes rule.

    Args:
        interval: Integration bounds ``(a, b)``.
        f: Scalar integrand.
        nodes: Number of subintervals of the equidistant grid.
        rule: ``"trapezoid"``, ``"simpson"`` (``nodes`` even) or ``"milne"``
            (Boole's rule, ``nodes`` a multiple of 4).

    Returns:
        float: Approximation of the integral.

    Raises:
        InvalidConfiguration: If the rule is unknown, ``nodes`` is not
            positive, or ``nodes`` does not match the rule's panel width.
    """
    if rule not in NEWTON_COTES_RULES:
        raise InvalidConfiguration(
            f"Unknown Newton-Cotes rule {rule!r}; expected one of {NEWTON_COTES_RULES}."
        )
    nodes = int(nodes)
    if nodes <= 0:
        raise InvalidConfiguration(f"nodes must be positive, got {nodes}.")

    a, b = float(interval[0]), float(interval[1])
    h = (b - a) / nodes

    if rule == "trapezoid":
        total = 0.5 * (f(a) + f(b))
        for i in range(1, nodes):
            total += f(a + i * h)
        return total * h

    if rule == "simpson":
        if nodes % 2 > 0:
            raise InvalidConfiguration(
                f"Simpson's rule requires an even number of nodes, got {nodes}."
            )
        panels = nodes // 2
        total = f(a) + f(b)
        for k in range(1, panels):
            total += 2.0 * f(a + 2 * k * h)
        for k in range(1, panels + 1):
            total += 4.0 * f(a + (2 * k - 1) * h)
        return total * h / 3.0

    if nodes % 4 > 0:
        raise InvalidConfiguration(
            f"Milne's rule requires the number of nodes to be a multiple of 4, got {nodes}."
        )
    panels = nodes // 4
    total = 7.0 * (f(a) + f(b))
    for k in range(1, panels):
        total += 14.0 * f(a + 4 * k * h)
    for k in range(1, panels + 1):
        total += 32.0 * (f(a + (4 * k - 3) * h) + f(a + (4 * k - 1) * h))
        total += 12.0 * f(a + (4 * k - 2) * h)
    return total * 2.0 * h / 45.0


def romberg(
    interval: Sequence[float],
    f: Callable[[float], float],
    max_iterations: int = DEFAULT_ROMBERG_ITERATIONS,
    eps: float = DEFAULT_ROMBERG_EPS,
) -> float:
    """Integrate ``f`` with Romberg's method.

    The trapezoid estimate is refined by halving the step ``max_iterations``
    times at most; after every refinement the column of the Romberg tableau
    is updated in place by Richardson extrapolation.

    Args:
        interval: Integration bounds ``(a, b)``.
        f: Scalar integrand.
        max_iterations: Maximum number of step halvings.
        eps: Relative change of the extrapolated estimate that stops the
            iteration.

    Returns:
        float: Extrapolated estimate of the integral.
    """
    a, b = float(interval[0]), float(interval[1])
    h = b - a
    n = 1
    p = [0.5 * h * (f(a) + f(b))]
    integral = p[0]
    last = float("inf")

    for k in range(int(max_iterations)):
        h *= 0.5
        n *= 2
        s = 0.0
        for i in range(1, n, 2):
            s += f(a + i * h)

        p.append(0.5 * p[k] + s * h)
        integral = p[k + 1]

        q = 1.0
        for i in range(k - 1, -1, -1):
            q *= 4.0
            p[i] = p[i + 1] + (p[i + 1] - p[i]) / (q - 1.0)
            integral = p[i]

        if abs(integral - last) < eps * abs(integral):
            break
        last = integral

    return integral
