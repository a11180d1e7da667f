"""Solve small dense linear systems by Gauss-Jordan elimination.

The elimination works on a copy of the operands and uses an
epsilon-threshold pivoting rule: rows are exchanged only when the current
pivot is numerically zero (below :data:`numkit.constants.EPS`) and a row
below it carries a usable entry. This keeps the row order stable for the
well-conditioned 2x2 to 10x10 systems produced by curve fitting, while still
recovering from structurally zero pivots.
"""

from __future__ import annotations

from typing import Sequence

import numpy as np

from numkit.constants import EPS
from numkit.errors import DimensionMismatch, SingularMatrix


def solve(A: Sequence[Sequence[float]], b: Sequence[float]) -> np.ndarray:
    """Solve ``A x = b`` for a square matrix ``A``.

    Args:
        A: Square coefficient matrix as a sequence of rows.
        b: Right-hand side; its length must equal the order of ``A``.

    Returns:
        numpy.ndarray: Solution vector ``x``.

    Raises:
        DimensionMismatch: If ``A`` is not square or ``b`` has the wrong
            length.
        SingularMatrix: If a pivot remains below ``EPS`` after elimination.

    Note:
        Neither ``A`` nor ``b`` is modified. Cost is O(n^3).
    """
    a = np.array(A, dtype=float)
    x = np.array(b, dtype=float).ravel()
    if a.size == 0:
        a = a.reshape(0, 0)
    if a.ndim != 2:
        raise DimensionMismatch("A must be a two-dimensional matrix.")

    n = a.shape[1]
    if n != len(x) or n != a.shape[0]:
        raise DimensionMismatch(
            "A must be a square matrix and b must be of the same length as A; "
            f"got A with shape {a.shape} and b with length {len(x)}."
        )

    for j in range(n):
        for i in range(n - 1, j, -1):
            if abs(a[i, j]) > EPS:
                if abs(a[j, j]) < EPS:
                    a[[i, j]] = a[[j, i]]
                    x[[i, j]] = x[[j, i]]
                else:
                    # a[i, j] keeps the multiplier of the implicit LU factor.
                    a[i, j] /= a[j, j]
                    x[i] -= a[i, j] * x[j]
                    a[i, j + 1 :] -= a[i, j] * a[j, j + 1 :]

        if abs(a[j, j]) < EPS:
            raise SingularMatrix(
                f"Matrix is singular: pivot {j} has magnitude {abs(a[j, j]):.3g}."
            )

    return back_substitute(a, x, overwrite=True)


def back_substitute(
    R: Sequence[Sequence[float]], b: Sequence[float], overwrite: bool = False
) -> np.ndarray:
    """Solve ``R x = b`` for an upper-triangular ``R``.

    Args:
        R: Upper-triangular matrix; entries below the diagonal are ignored.
        b: Right-hand side.
        overwrite: If ``True`` and ``b`` is a float ``ndarray``, the solution
            is written into ``b``; otherwise a copy is used.

    Returns:
        numpy.ndarray: Solution vector.

    Note:
        A zero on the diagonal is not checked; the result then contains
        ``inf``/``nan`` entries.
    """
    r = np.asarray(R, dtype=float)
    if overwrite and isinstance(b, np.ndarray) and b.dtype == np.float64:
        x = b
    else:
        x = np.array(b, dtype=float).ravel()

    m = r.shape[0] if r.ndim == 2 else 0
    n = r.shape[1] if m > 0 else 0

    for i in range(m - 1, -1, -1):
        if i + 1 < n:
            x[i] -= float(np.dot(r[i, i + 1 : n], x[i + 1 : n]))
        x[i] /= r[i, i]

    return x
