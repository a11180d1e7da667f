"""Riemann sums with bar outlines for display.

:func:`riemann` partitions ``[start, end]`` into ``n`` equal bars and returns
both the polygon tracing the bars (for drawing) and the signed area between
an upper function ``f`` and an optional lower function ``lower``.

Bar heights per ``kind``:

- ``left`` / ``right`` / ``middle``: value at that point of the bar.
- ``trapezoidal``: straight segment between the two bar edges.
- ``simpson``: Simpson average ``(f(a) + 4 f(m) + f(b)) / 6``.
- ``lower`` / ``upper``: minimum / maximum sampled at 1 % of the bar width.
- ``random``: value at a uniformly drawn point of the bar.
"""

from __future__ import annotations

from typing import Callable, List, Optional

import numpy as np

from numkit.errors import InvalidConfiguration
from numkit.results import RiemannSum

RIEMANN_KINDS = (
    "left",
    "right",
    "middle",
    "trapezoidal",
    "lower",
    "upper",
    "random",
    "simpson",
)


def _bar_value(
    x: float,
    f: Callable[[float], float],
    kind: str,
    delta: float,
    rng: np.random.Generator,
) -> float:
    # A negative width walks the lower function from right to left.
    if delta < 0:
        if kind != "trapezoidal":
            x = x + delta
        delta = -delta
        if kind == "lower":
            kind = "upper"
        elif kind == "upper":
            kind = "lower"

    if kind == "right":
        return f(x + delta)
    if kind == "middle":
        return f(x + delta * 0.5)
    if kind in ("left", "trapezoidal"):
        return f(x)
    if kind in ("lower", "upper"):
        samples = [f(xs) for xs in np.linspace(x, x + delta, 101)]
        return min(samples) if kind == "lower" else max(samples)
    if kind == "random":
        return f(x + delta * rng.random())
    # simpson
    return (f(x) + 4.0 * f(x + delta * 0.5) + f(x + delta)) / 6.0


def riemann(
    f: Callable[[float], float],
    n: int,
    kind: str,
    start: float,
    end: float,
    lower: Optional[Callable[[float], float]] = None,
    rng: Optional[np.random.Generator] = None,
) -> RiemannSum:
    """Compute a Riemann sum and the outline of its bars.

    Args:
        f: Upper function.
        n: Number of bars; non-integer values are floored.
        kind: Bar height rule, one of :data:`RIEMANN_KINDS`.
        start: Left end of the range.
        end: Right end of the range.
        lower: Optional lower function; the x-axis is used when omitted.
        rng: Random generator for ``kind="random"``.

    Returns:
        RiemannSum: Outline coordinates and signed area.

    Raises:
        InvalidConfiguration: If ``kind`` is unknown.
    """
    if kind not in RIEMANN_KINDS:
        raise InvalidConfiguration(
            f"Unknown Riemann sum type {kind!r}; expected one of {RIEMANN_KINDS}."
        )
    if rng is None:
        rng = np.random.default_rng()

    n = int(np.floor(n))
    if n <= 0:
        return RiemannSum(np.array([]), np.array([]), 0.0)

    delta = (end - start) / n
    xs: List[float] = []
    ys: List[float] = []
    total = 0.0

    # Upper bar ends, left to right.
    x = start
    for _ in range(n):
        y = _bar_value(x, f, kind, delta, rng)
        xs.append(x)
        ys.append(y)
        x += delta
        if kind == "trapezoidal":
            y = f(x)
        xs.append(x)
        ys.append(y)

    # Lower bar ends, right to left, closing each bar with a vertical edge.
    for i in range(n):
        if lower is not None:
            y = _bar_value(x, lower, kind, -delta, rng)
        else:
            y = 0.0
        xs.append(x)
        ys.append(y)
        x -= delta
        if kind == "trapezoidal" and lower is not None:
            y = lower(x)
        xs.append(x)
        ys.append(y)

        if kind != "trapezoidal":
            y_low = y
            y_up = ys[2 * (n - 1) - 2 * i]
        else:
            y_up = 0.5 * (f(x + delta) + f(x))
            y_low = 0.5 * (lower(x + delta) + lower(x)) if lower is not None else 0.0
        total += (y_up - y_low) * delta

        xs.append(x)
        ys.append(ys[2 * (n - 1) - 2 * i])

    return RiemannSum(np.asarray(xs, dtype=float), np.asarray(ys, dtype=float), float(total))


def riemann_sum(
    f: Callable[[float], float],
    n: int,
    kind: str,
    start: float,
    end: float,
    lower: Optional[Callable[[float], float]] = None,
) -> float:
    """Return only the area of :func:`riemann`."""
    return riemann(f, n, kind, start, end, lower=lower).area
