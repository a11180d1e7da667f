"""Composite cubic Bezier curves."""

from __future__ import annotations

import math
from typing import Sequence

from numkit.errors import InvalidConfiguration
from numkit.interpolation._cache import CachedEvaluator
from numkit.points import PointLike, coordinates


class BezierCurve(CachedEvaluator):
    """Chain of cubic Bezier segments sharing their end points.

    Points at positions ``3k`` are on the curve, points ``3k+1`` and ``3k+2``
    are the control points of segment ``k``. Trailing points that do not
    complete a segment are ignored. Segment ``floor(t)`` is evaluated at the
    local parameter ``t mod 1``; the domain is ``[0, segments]``.

    Raises:
        InvalidConfiguration: If fewer than four points are given.
    """

    def __init__(self, points: Sequence[PointLike]):
        super().__init__()
        if len(points) < 4:
            raise InvalidConfiguration(
                f"A cubic Bezier curve needs at least 4 points, got {len(points)}."
            )
        self.points = points

    def _build(self) -> None:
        self._coords = coordinates(self.points)
        self._flen = 3 * ((len(self._coords) - 1) // 3)
        self.segments = self._flen // 3

    @property
    def domain(self):
        self._ensure()
        return 0.0, float(self.segments)

    def _evaluate(self, t: float, column: int) -> float:
        self._ensure()
        p = self._coords[:, column]
        if t < 0:
            return float(p[0])
        if t >= self.segments:
            return float(p[self._flen])
        if math.isnan(t):
            return math.nan

        z = math.floor(t) * 3
        t0 = t % 1
        t1 = 1.0 - t0
        return float(
            t1 * t1 * (t1 * p[z] + 3.0 * t0 * p[z + 1])
            + (3.0 * t1 * p[z + 2] + t0 * p[z + 3]) * t0 * t0
        )

    def X(self, t: float) -> float:
        return self._evaluate(t, 0)

    def Y(self, t: float) -> float:
        return self._evaluate(t, 1)
