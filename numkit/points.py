"""Capability interfaces for the geometric inputs of the interpolators.

The geometry layer owns its own point and curve types. Rather than guessing
at their shape, every routine here talks to them through two small
interfaces:

- :class:`PointLike` exposes ``X()`` and ``Y()`` (current coordinates).
- :class:`ParametricCurve` exposes ``X(t)`` and ``Y(t)``.

Collaborators adapt to these interfaces; :class:`Point`,
:func:`points_from_xy` and :class:`FunctionCurve` are the adapters shipped
with the package.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Callable, List, Protocol, Sequence, runtime_checkable

import numpy as np

from .errors import DimensionMismatch


@runtime_checkable
class PointLike(Protocol):
    def X(self) -> float: ...

    def Y(self) -> float: ...


@runtime_checkable
class ParametricCurve(Protocol):
    def X(self, t: float) -> float: ...

    def Y(self, t: float) -> float: ...


@dataclass
class Point:
    """Mutable point satisfying :class:`PointLike`.

    Moving a point (assigning ``x``/``y``) does not touch evaluators built
    from it; call their ``invalidate()`` to pick up the change.
    """

    x: float
    y: float

    def X(self) -> float:
        return self.x

    def Y(self) -> float:
        return self.y


class FunctionCurve:
    """Adapt two callables ``x(t)``, ``y(t)`` to :class:`ParametricCurve`."""

    def __init__(self, x: Callable[[float], float], y: Callable[[float], float]):
        self._x = x
        self._y = y

    def X(self, t: float) -> float:
        return self._x(t)

    def Y(self, t: float) -> float:
        return self._y(t)


def points_from_xy(xs: Sequence[float], ys: Sequence[float]) -> List[Point]:
    """Build :class:`Point` objects from parallel coordinate arrays.

    Args:
        xs: Horizontal coordinates.
        ys: Vertical coordinates, same length as ``xs``.

    Returns:
        list[Point]: One point per coordinate pair.

    Raises:
        DimensionMismatch: If the arrays differ in length.
    """
    x_arr = np.asarray(xs, dtype=float).ravel()
    y_arr = np.asarray(ys, dtype=float).ravel()
    if len(x_arr) != len(y_arr):
        raise DimensionMismatch(
            f"x and y must have the same length, got {len(x_arr)} and {len(y_arr)}"
        )
    return [Point(float(x), float(y)) for x, y in zip(x_arr, y_arr)]


def coordinates(points: Sequence[PointLike]) -> np.ndarray:
    """Return the current coordinates of ``points`` as an ``(n, 2)`` array."""
    out = np.empty((len(points), 2), dtype=float)
    for i, p in enumerate(points):
        out[i, 0] = p.X()
        out[i, 1] = p.Y()
    return out
