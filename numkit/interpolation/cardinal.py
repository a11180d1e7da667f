"""Cardinal and Catmull-Rom splines through a list of points.

The curve is uniformly parametrized: segment ``s`` (``0 <= s < n-1``) joins
``points[s]`` and ``points[s+1]`` for ``t`` in ``[s, s+1]``. Two phantom
control points, ``2 p0 - p1`` before the first point and
``2 p_{n-1} - p_{n-2}`` after the last one, give the end segments a tangent.
"""

from __future__ import annotations

import math
from typing import Callable, Sequence, Union

import numpy as np

from numkit.errors import InvalidConfiguration
from numkit.interpolation._cache import CachedEvaluator
from numkit.points import PointLike, coordinates

DEFAULT_TENSION = 0.5

Tension = Union[float, Callable[[], float]]


class CardinalSpline(CachedEvaluator):
    """Piecewise cubic interpolating curve with adjustable tension.

    Args:
        points: Points the curve passes through.
        tension: Positive number, or a zero-argument callable read whenever
            the cache is rebuilt. ``0.5`` gives the Catmull-Rom spline.

    Raises:
        InvalidConfiguration: If the tension is zero, at construction for a
            number and at rebuild time for a callable.

    Note:
        With fewer than two points ``X(t)`` and ``Y(t)`` return NaN.
    """

    def __init__(self, points: Sequence[PointLike], tension: Tension = DEFAULT_TENSION):
        super().__init__()
        if not callable(tension) and float(tension) == 0.0:
            raise InvalidConfiguration("Cardinal spline tension must be nonzero.")
        self.points = points
        self.tension = tension

    @property
    def domain(self):
        return 0.0, float(max(len(self.points) - 1, 0))

    def _current_tension(self) -> float:
        tau = self.tension() if callable(self.tension) else self.tension
        tau = float(tau)
        if tau == 0.0:
            raise InvalidConfiguration("Cardinal spline tension must be nonzero.")
        return tau

    def _build(self) -> None:
        self._coords = coordinates(self.points)
        n = len(self._coords)
        if n < 2:
            self._coeffs = None
            return

        tau = self._current_tension()
        first = 2.0 * self._coords[0] - self._coords[1]
        last = 2.0 * self._coords[-1] - self._coords[-2]
        p = np.vstack([first, self._coords, last])

        p0 = p[:-3]
        p1 = p[1:-2]
        p2 = p[2:-1]
        p3 = p[3:]
        # coeffs[s, k] holds the t^k coefficient of segment s, scaled by 1/tau.
        self._coeffs = np.stack(
            [
                p1 / tau,
                -p0 + p2,
                2.0 * p0 + (-3.0 / tau + 1.0) * p1 + (3.0 / tau - 2.0) * p2 - p3,
                -p0 + (2.0 / tau - 1.0) * p1 + (-2.0 / tau + 1.0) * p2 + p3,
            ],
            axis=1,
        )
        self._tau = tau

    def _evaluate(self, t: float, column: int) -> float:
        self._ensure()
        n = len(self._coords)
        if n < 2 or math.isnan(t):
            return math.nan
        if t <= 0.0:
            return float(self._coords[0, column])
        if t >= n - 1:
            return float(self._coords[-1, column])

        s = math.floor(t)
        if s == t:
            return float(self._coords[s, column])

        u = t - s
        c = self._coeffs[s, :, column]
        return float(self._tau * (((c[3] * u + c[2]) * u + c[1]) * u + c[0]))

    def X(self, t: float) -> float:
        return self._evaluate(t, 0)

    def Y(self, t: float) -> float:
        return self._evaluate(t, 1)


class CatmullRomSpline(CardinalSpline):
    """Cardinal spline with tension 0.5."""

    def __init__(self, points: Sequence[PointLike]):
        super().__init__(points, tension=DEFAULT_TENSION)
