"""Determinants via the closed 2x2 form and Bareiss elimination."""

from __future__ import annotations

from typing import Sequence

import numpy as np

from numkit.constants import EPS


def gauss_bareiss(mat: Sequence[Sequence[float]]) -> float:
    """Compute a determinant with fraction-free Gauss-Bareiss elimination.

    Args:
        mat: Matrix as a sequence of rows. If a row is shorter than the number
            of rows, the leading square block of that width is used.

    Returns:
        float: Determinant; ``0.0`` for an empty matrix or when a column has
        no pivot of magnitude at least ``EPS``.

    Note:
        Each elimination step divides by the previous pivot, so integer
        matrices keep integer intermediate values (up to rounding).

    References:
        H. Cohen, "A Course in Computational Algebraic Number Theory",
        Algorithm 2.2.6.
    """
    n = len(mat)
    if n <= 0:
        return 0.0
    if len(mat[0]) < n:
        n = len(mat[0])

    m = np.array([list(row[:n]) for row in mat[:n]], dtype=float)

    c = 1.0
    sign = 1.0
    for k in range(n - 1):
        p = m[k, k]

        if abs(p) < EPS:
            below = np.nonzero(np.abs(m[k + 1 :, k]) >= EPS)[0]
            if len(below) == 0:
                return 0.0
            i = k + 1 + int(below[0])
            m[[i, k], k:] = m[[k, i], k:]
            sign = -sign
            p = m[k, k]

        for i in range(k + 1, n):
            m[i, k + 1 :] = (p * m[i, k + 1 :] - m[i, k] * m[k, k + 1 :]) / c

        c = p

    return float(sign * m[n - 1, n - 1])


def determinant(mat: Sequence[Sequence[float]]) -> float:
    """Return the determinant of a square matrix.

    Args:
        mat: Matrix as a sequence of rows.

    Returns:
        float: ``a*d - c*b`` for a 2x2 matrix, otherwise the Bareiss result.
        The empty matrix yields ``0.0``.
    """
    if len(mat) == 2 and len(mat[0]) == 2:
        return float(mat[0][0] * mat[1][1] - mat[1][0] * mat[0][1])
    return gauss_bareiss(mat)
