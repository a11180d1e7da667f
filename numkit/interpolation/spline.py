"""Natural cubic spline interpolation of function data ``y(x)``.

The spline is twice continuously differentiable with vanishing second
derivative at both end knots. Fitting solves the symmetric tridiagonal
system for the interior second derivatives by a forward sweep and back
substitution; evaluation picks the containing interval and evaluates

    y(x) = a + b u + c u^2 + d u^3,   u = x - x_j

with ``a = y_j``, ``b = (y_{j+1} - y_j)/h - h (F_{j+1} + 2 F_j)/6``,
``c = F_j/2`` and ``d = (F_{j+1} - F_j)/(6h)``.
"""

from __future__ import annotations

from typing import Sequence, Tuple

import numpy as np

from numkit.errors import DimensionMismatch, InvalidConfiguration
from numkit.interpolation._cache import CachedEvaluator


def spline_second_derivatives(
    x: Sequence[float], y: Sequence[float]
) -> Tuple[np.ndarray, np.ndarray, np.ndarray]:
    """Sort the knots and compute the spline's second derivatives.

    Args:
        x: Knot abscissae (any order, pairwise distinct).
        y: Knot ordinates.

    Returns:
        tuple: ``(x_sorted, y_sorted, F)`` where ``F`` holds the second
        derivatives at the sorted knots, zero at both ends.

    Raises:
        DimensionMismatch: If ``x`` and ``y`` differ in length.
        InvalidConfiguration: If fewer than two knots are given.
    """
    x = np.asarray(x, dtype=float).ravel()
    y = np.asarray(y, dtype=float).ravel()
    if len(x) != len(y):
        raise DimensionMismatch(
            f"x and y must have the same length, got {len(x)} and {len(y)}"
        )
    n = len(x)
    if n < 2:
        raise InvalidConfiguration("A spline needs at least two knots.")

    order = np.argsort(x, kind="stable")
    x = x[order]
    y = y[order]

    F = np.zeros(n)
    if n == 2:
        return x, y, F

    dx = np.diff(x)
    delta = 6.0 * (y[2:] - y[1:-1]) / dx[1:] - 6.0 * (y[1:-1] - y[:-2]) / dx[:-1]

    m = n - 2
    diag = np.empty(m)
    z = np.empty(m)
    diag[0] = 2.0 * (dx[0] + dx[1])
    z[0] = delta[0]
    for i in range(m - 1):
        l = dx[i + 1] / diag[i]
        diag[i + 1] = 2.0 * (dx[i + 1] + dx[i + 2]) - l * dx[i + 1]
        z[i + 1] = delta[i + 1] - l * z[i]

    inner = np.empty(m)
    inner[m - 1] = z[m - 1] / diag[m - 1]
    for i in range(m - 2, -1, -1):
        inner[i] = (z[i] - dx[i + 1] * inner[i + 1]) / diag[i]

    F[1:-1] = inner
    return x, y, F


def evaluate_spline(x0, x: np.ndarray, y: np.ndarray, F: np.ndarray):
    """Evaluate a fitted natural spline.

    Args:
        x0: Scalar or array of query abscissae.
        x: Sorted knot abscissae.
        y: Knot ordinates.
        F: Second derivatives from :func:`spline_second_derivatives`.

    Returns:
        float or numpy.ndarray: Spline values; NaN outside ``[x[0], x[-1]]``.
    """
    scalar = np.ndim(x0) == 0
    q = np.atleast_1d(np.asarray(x0, dtype=float))

    n = len(x)
    j = np.clip(np.searchsorted(x, q, side="left") - 1, 0, n - 2)

    h = x[j + 1] - x[j]
    a = y[j]
    b = (y[j + 1] - y[j]) / h - h / 6.0 * (F[j + 1] + 2.0 * F[j])
    c = F[j] / 2.0
    d = (F[j + 1] - F[j]) / (6.0 * h)
    u = q - x[j]
    out = a + (b + (c + d * u) * u) * u

    out = np.where((q < x[0]) | (q > x[-1]), np.nan, out)
    if scalar:
        return float(out[0])
    return out.reshape(np.shape(x0))


class NaturalCubicSpline(CachedEvaluator):
    """Natural cubic spline through ``(x_i, y_i)``.

    Example:
        >>> spline = NaturalCubicSpline.fit([0, 1, 2], [0, 1, 0])
        >>> spline.evaluate(1.0)
        1.0
    """

    def __init__(self, x: Sequence[float], y: Sequence[float]):
        super().__init__()
        self._x_in = x
        self._y_in = y

    @classmethod
    def fit(cls, x: Sequence[float], y: Sequence[float]) -> "NaturalCubicSpline":
        spline = cls(x, y)
        spline.recompute()
        return spline

    def _build(self) -> None:
        self.x, self.y, self.second_derivatives = spline_second_derivatives(
            self._x_in, self._y_in
        )

    def evaluate(self, x0):
        self._ensure()
        return evaluate_spline(x0, self.x, self.y, self.second_derivatives)

    __call__ = evaluate
