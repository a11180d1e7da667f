"""Centralized numeric constants shared by the numerical routines."""

from __future__ import annotations

import sys

#: Working tolerance used for pivots, residuals and convergence tests.
EPS: float = 1.0e-6

#: Machine epsilon for IEEE-754 double precision.
DBL_EPS: float = sys.float_info.epsilon

#: Smallest positive normalized double.
DBL_MIN: float = sys.float_info.min

#: Step width used by the central-difference derivative.
DIFF_STEP: float = 1.0e-5

MAX_ITERATIONS_NEWTON: int = 50
MAX_ITERATIONS_ROOT: int = 80
MAX_ITERATIONS_MINIMIZE: int = 500
MAX_SWEEPS_JACOBI: int = 2000
MAX_ITERATIONS_INTERSECTION: int = 10


def is_nan_pair(x: float, y: float) -> bool:
    """Return ``True`` when a coordinate pair does not describe a real point.

    Args:
        x (float): Horizontal coordinate.
        y (float): Vertical coordinate.

    Returns:
        bool: ``True`` if either coordinate is NaN.

    Note:
        Polylines use such pairs as gap markers between disconnected pieces.
    """
    return x != x or y != y
