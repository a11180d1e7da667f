"""Polynomial interpolation in barycentric form.

Both evaluators use the second (true) barycentric formula

    p(x) = sum_i (w_i / (x - x_i)) y_i / sum_i (w_i / (x - x_i))

which is stable and costs O(n) per evaluation once the weights are known.

References:
    J.-P. Berrut and L. N. Trefethen, "Barycentric Lagrange Interpolation",
    SIAM Review 46(3), 2004, pp. 501-517.
"""

from __future__ import annotations

from typing import Sequence

import numpy as np
from scipy.special import comb

from numkit.errors import InvalidConfiguration
from numkit.interpolation._cache import CachedEvaluator
from numkit.points import PointLike, coordinates


class NevilleCurve(CachedEvaluator):
    """Parametric interpolating polynomial through points at ``t = 0..n-1``.

    For equidistant nodes the barycentric weights reduce to
    ``(-1)^i * C(n-1, i)``. ``X(t)`` and ``Y(t)`` pass exactly through the
    ``i``-th point at ``t = i``.
    """

    def __init__(self, points: Sequence[PointLike]):
        super().__init__()
        if len(points) == 0:
            raise InvalidConfiguration("NevilleCurve needs at least one point.")
        self.points = points

    @property
    def domain(self):
        return 0.0, float(len(self.points) - 1)

    def _build(self) -> None:
        n = len(self.points)
        signs = np.where(np.arange(n) % 2 == 0, 1.0, -1.0)
        self._weights = comb(n - 1, np.arange(n)) * signs
        self._coords = coordinates(self.points)

    def _evaluate(self, t: float, column: int) -> float:
        self._ensure()
        values = self._coords[:, column]
        num = 0.0
        denom = 0.0
        d = t
        for i in range(len(values)):
            if d == 0:
                return float(values[i])
            s = self._weights[i] / d
            d -= 1
            num += values[i] * s
            denom += s
        return float(num / denom)

    def X(self, t: float) -> float:
        return self._evaluate(t, 0)

    def Y(self, t: float) -> float:
        return self._evaluate(t, 1)


class LagrangePolynomial(CachedEvaluator):
    """Interpolating polynomial ``y(x)`` through the points' coordinates.

    Args:
        points: Nodes; their ``X()`` values must be pairwise distinct.

    Note:
        Evaluating exactly at a node returns that node's ``Y()`` without
        division.
    """

    def __init__(self, points: Sequence[PointLike]):
        super().__init__()
        if len(points) == 0:
            raise InvalidConfiguration("LagrangePolynomial needs at least one point.")
        self.points = points

    def _build(self) -> None:
        coords = coordinates(self.points)
        x = coords[:, 0]
        diff = x[:, None] - x[None, :]
        np.fill_diagonal(diff, 1.0)
        self._weights = 1.0 / np.prod(diff, axis=1)
        self._x = x
        self._y = coords[:, 1]

    def _evaluate(self, x: float) -> float:
        num = 0.0
        denom = 0.0
        for xi, yi, wi in zip(self._x, self._y, self._weights):
            if x == xi:
                return float(yi)
            s = wi / (x - xi)
            denom += s
            num += s * yi
        return float(num / denom)

    def __call__(self, x):
        self._ensure()
        if np.ndim(x) == 0:
            return self._evaluate(float(x))
        return np.array([self._evaluate(float(v)) for v in np.ravel(x)]).reshape(
            np.shape(x)
        )

    @property
    def weights(self) -> np.ndarray:
        self._ensure()
        return self._weights.copy()
