"""Least-squares regression polynomials.

The coefficients ``c`` of the degree-``d`` polynomial minimize
``||M c - y||`` where ``M`` is the Vandermonde matrix ``M[j, i] = x_j^i``.
They are obtained from the normal equations ``M^T M c = M^T y`` with
:func:`numkit.linalg.solve`.
"""

from __future__ import annotations

import math
import numbers
from typing import Callable, Sequence, Union

import numpy as np

from numkit.errors import DimensionMismatch, InvalidConfiguration
from numkit.interpolation._cache import CachedEvaluator
from numkit.linalg import solve
from numkit.points import PointLike

Degree = Union[int, float, Callable[[], float]]


def polynomial_term(
    coeffs: Sequence[float], degree: int, varname: str = "x", precision: int = 3
) -> str:
    """Format a polynomial as text, highest power first.

    Args:
        coeffs: Coefficients; ``coeffs[i]`` belongs to ``varname**i``.
        degree: Highest power to print.
        varname: Variable name.
        precision: Significant digits per coefficient.

    Returns:
        str: For example ``"(2)*x^2 + (0)*x + (-1)"``.
    """
    parts = []
    for i in range(int(degree), -1, -1):
        parts.append(f"({float(coeffs[i]):.{precision}g})")
        if i > 1:
            parts.append(f"*{varname}^{i} + ")
        elif i == 1:
            parts.append(f"*{varname} + ")
    return "".join(parts)


def _resolve(value) -> float:
    return float(value() if callable(value) else value)


class RegressionPolynomial(CachedEvaluator):
    """Least-squares polynomial fitted to ``(x, y)`` data.

    Args:
        degree: Polynomial degree, or a zero-argument callable returning it.
            The value is floored. A callable is re-read on every evaluation
            and the fit is redone when the degree changes.
        x: Abscissae; entries may be numbers or zero-argument callables.
        y: Ordinates; same length and conventions as ``x``.

    Raises:
        InvalidConfiguration: If ``degree`` is neither a number nor callable.
        DimensionMismatch: If ``x`` and ``y`` differ in length.

    Note:
        The normal equations become singular when there are fewer distinct
        abscissae than coefficients; :class:`numkit.errors.SingularMatrix`
        then propagates from the first evaluation.
    """

    def __init__(self, degree: Degree, x: Sequence, y: Sequence):
        super().__init__()
        if isinstance(degree, bool) or not (
            isinstance(degree, numbers.Real) or callable(degree)
        ):
            raise InvalidConfiguration(
                f"Can't create a regression polynomial from degree of type "
                f"{type(degree).__name__!r}."
            )
        if len(x) != len(y):
            raise DimensionMismatch(
                f"x and y must have the same length, got {len(x)} and {len(y)}"
            )
        self._degree_source = degree
        self._x_source = x
        self._y_source = y
        self._points = None
        self._degree = None

    @classmethod
    def from_points(cls, degree: Degree, points: Sequence[PointLike]):
        """Fit to the current coordinates of ``points``."""
        poly = cls(degree, [], [])
        poly._points = points
        return poly

    def _current_degree(self) -> int:
        return int(math.floor(_resolve(self._degree_source)))

    def _data(self):
        if self._points is not None:
            x = [p.X() for p in self._points]
            y = [p.Y() for p in self._points]
        else:
            x = [_resolve(v) for v in self._x_source]
            y = [_resolve(v) for v in self._y_source]
        return np.asarray(x, dtype=float), np.asarray(y, dtype=float)

    def _build(self) -> None:
        d = self._current_degree()
        if d < 0:
            raise InvalidConfiguration(f"Degree must be non-negative, got {d}.")
        x, y = self._data()
        M = np.vander(x, d + 1, increasing=True)
        self._coeffs = np.asarray(solve(M.T @ M, M.T @ y), dtype=float)
        self._degree = d

    def _ensure(self) -> None:
        if self._valid and callable(self._degree_source):
            if self._current_degree() != self._degree:
                self.invalidate()
        super()._ensure()

    @property
    def degree(self) -> int:
        self._ensure()
        return self._degree

    @property
    def coefficients(self) -> np.ndarray:
        """Coefficients, lowest power first."""
        self._ensure()
        return self._coeffs.copy()

    def __call__(self, x):
        self._ensure()
        c = self._coeffs
        xv = np.asarray(x, dtype=float)
        s = np.full_like(xv, c[-1])
        for ci in c[-2::-1]:
            s = s * xv + ci
        if np.ndim(x) == 0:
            return float(s)
        return s

    def term(self, varname: str = "x", precision: int = 3) -> str:
        self._ensure()
        return polynomial_term(self._coeffs, self._degree, varname, precision)
