"""Uniform B-spline curves via the Cox-de Boor recursion."""

from __future__ import annotations

import math
from functools import lru_cache
from typing import Sequence, Tuple

import numpy as np

from numkit.errors import InvalidConfiguration
from numkit.interpolation._cache import CachedEvaluator
from numkit.points import PointLike, coordinates


@lru_cache(maxsize=64)
def knot_vector(n: int, k: int) -> Tuple[float, ...]:
    """Return the clamped uniform knot vector for ``n+1`` points of order ``k``.

    ``kn[j]`` is 0 for ``j < k``, ``j - k + 1`` for ``k <= j <= n`` and
    ``n - k + 2`` beyond.
    """
    kn = []
    for j in range(n + k + 1):
        if j < k:
            kn.append(0.0)
        elif j <= n:
            kn.append(float(j - k + 1))
        else:
            kn.append(float(n - k + 2))
    return tuple(kn)


def basis_functions(t: float, kn: Sequence[float], k: int, s: int) -> np.ndarray:
    """Evaluate the ``k`` non-zero basis functions of order ``k`` at ``t``.

    Args:
        t: Curve parameter with ``kn[s] <= t < kn[s+1]``.
        kn: Knot vector.
        k: Order (degree + 1).
        s: Knot span index.

    Returns:
        numpy.ndarray: Array ``N`` of length ``len(kn)``; only entries
        ``s-k+1 .. s`` are meaningful.
    """
    N = np.zeros(len(kn))
    N[s] = 1.0 if kn[s] <= t < kn[s + 1] else 0.0

    # Raise the order in place; N[j + 1] still holds the lower-order value
    # when N[j] is overwritten.
    for i in range(2, k + 1):
        for j in range(s - i + 1, s + 1):
            a = 0.0 if (j <= s - i + 1 or j < 0) else N[j]
            b = 0.0 if j >= s else N[j + 1]

            den = kn[j + i - 1] - kn[j]
            N[j] = 0.0 if den == 0 else (t - kn[j]) / den * a

            den = kn[j + i] - kn[j + 1]
            if den != 0:
                N[j] += (kn[j + i] - t) / den * b
    return N


class BSpline(CachedEvaluator):
    """B-spline curve of a given order through its control points.

    Args:
        points: Control points.
        order: Order ``k`` (degree + 1). Reduced to ``n + 1`` when it exceeds
            what ``n + 1`` points support.

    Raises:
        InvalidConfiguration: If ``order`` is below 1.

    Note:
        The curve starts at the first and ends at the last control point;
        queries outside ``[0, n - k + 2]`` clamp to those end points. A single
        point yields NaN.
    """

    def __init__(self, points: Sequence[PointLike], order: int):
        super().__init__()
        if int(order) < 1:
            raise InvalidConfiguration(f"B-spline order must be at least 1, got {order}.")
        self.points = points
        self.order = int(order)

    def _build(self) -> None:
        self._coords = coordinates(self.points)
        n = len(self._coords) - 1
        k = self.order
        if n + 2 <= k:
            k = n + 1
        self._n = n
        self._k = k
        self._knots = knot_vector(n, k) if n > 0 else ()

    @property
    def domain(self):
        self._ensure()
        return 0.0, float(max(self._n - self._k + 2, 0))

    def _evaluate(self, t: float, column: int) -> float:
        self._ensure()
        n, k = self._n, self._k
        if n <= 0:
            return math.nan
        p = self._coords[:, column]
        if t <= 0:
            return float(p[0])
        if t >= n - k + 2:
            return float(p[n])
        if math.isnan(t):
            return math.nan

        s = math.floor(t) + k - 1
        N = basis_functions(t, self._knots, k, s)
        lo = max(s - k + 1, 0)
        hi = min(s, n)
        return float(np.dot(p[lo : hi + 1], N[lo : hi + 1]))

    def X(self, t: float) -> float:
        return self._evaluate(t, 0)

    def Y(self, t: float) -> float:
        return self._evaluate(t, 1)
