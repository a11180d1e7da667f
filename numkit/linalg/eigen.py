"""Eigen-decomposition of small symmetric matrices with Jacobi rotations.

Each sweep visits every upper off-diagonal entry ``a_ij`` and, when it is not
already negligible, applies the plane rotation with angle

    phi = atan2(2 a_ij, a_ii - a_jj) / 2

to the columns of the working matrix and of the accumulated eigenvector
matrix, then restores symmetry from the rotated columns. Sweeps continue
until the mean absolute off-diagonal mass, relative to the mean absolute
entry of the input, drops below ``EPS``.

Adapted from a FORTRAN routine by E. Wilson (1990).
"""

from __future__ import annotations

import math
import warnings
from typing import Sequence, Tuple

import numpy as np

from numkit.constants import EPS, MAX_SWEEPS_JACOBI
from numkit.errors import DimensionMismatch, NonConvergenceWarning


def jacobi_eigen(
    A: Sequence[Sequence[float]], max_sweeps: int = MAX_SWEEPS_JACOBI
) -> Tuple[np.ndarray, np.ndarray]:
    """Diagonalize a symmetric matrix.

    Args:
        A: Symmetric square matrix (typically 3x3).
        max_sweeps: Upper bound on the number of sweeps.

    Returns:
        tuple[numpy.ndarray, numpy.ndarray]: ``(D, V)`` where the diagonal of
        ``D`` holds the eigenvalues and column ``k`` of ``V`` is the
        eigenvector belonging to ``D[k, k]``.

    Raises:
        DimensionMismatch: If ``A`` is not square.

    Note:
        Symmetry is assumed, not checked. When the sweep cap is reached the
        current (best-effort) matrices are returned and a
        :class:`~numkit.errors.NonConvergenceWarning` is emitted.
    """
    a = np.array(A, dtype=float)
    if a.ndim != 2 or a.shape[0] != a.shape[1]:
        raise DimensionMismatch(f"Jacobi requires a square matrix, got shape {a.shape}.")

    n = a.shape[0]
    v = np.eye(n)
    total = float(np.sum(np.abs(a)))

    # Trivial problems
    if n <= 1 or total <= 0.0:
        return a, v

    total /= n * n

    sweeps = 0
    while True:
        off_sum = 0.0
        for j in range(1, n):
            for i in range(j):
                aa = abs(a[i, j])
                off_sum += aa
                if aa < EPS:
                    continue

                phi = 0.5 * math.atan2(2.0 * a[i, j], a[i, i] - a[j, j])
                si = math.sin(phi)
                co = math.cos(phi)

                col_i = a[:, i].copy()
                a[:, i] = co * col_i + si * a[:, j]
                a[:, j] = -si * col_i + co * a[:, j]
                col_i = v[:, i].copy()
                v[:, i] = co * col_i + si * v[:, j]
                v[:, j] = -si * col_i + co * v[:, j]

                a_ii = co * a[i, i] + si * a[j, i]
                a_jj = -si * a[i, j] + co * a[j, j]
                a[i, i] = a_ii
                a[j, j] = a_jj

                a[i, :] = a[:, i]
                a[j, :] = a[:, j]
                a[i, j] = 0.0
                a[j, i] = 0.0

        sweeps += 1
        if abs(off_sum) / total <= EPS:
            break
        if sweeps >= max_sweeps:
            warnings.warn(
                f"Jacobi iteration stopped after {sweeps} sweeps without reaching "
                "the off-diagonal tolerance; returning best-effort result.",
                NonConvergenceWarning,
                stacklevel=2,
            )
            break

    return a, v
