"""Tabulate curves and ODE trajectories and write them to CSV files.

This module is the boundary between in-memory numerical results and
reproducible tabular artifacts.
"""

from __future__ import annotations

import os
from typing import Optional, Sequence

import numpy as np
import pandas as pd

from .errors import DimensionMismatch
from .points import ParametricCurve


def sample_curve(
    curve: ParametricCurve, t_min: float, t_max: float, num: int = 200
) -> pd.DataFrame:
    """Sample a parametric curve on an equidistant parameter grid.

    Args:
        curve (ParametricCurve): Any object with ``X(t)`` and ``Y(t)``.
        t_min (float): First parameter value.
        t_max (float): Last parameter value (included).
        num (int): Number of samples.

    Returns:
        pandas.DataFrame: Columns ``t``, ``x`` and ``y``.
    """
    t = np.linspace(float(t_min), float(t_max), int(num))
    return pd.DataFrame(
        {
            "t": t,
            "x": [curve.X(float(v)) for v in t],
            "y": [curve.Y(float(v)) for v in t],
        }
    )


def trajectory_to_frame(
    states: np.ndarray,
    interval: Sequence[float],
    labels: Optional[Sequence[str]] = None,
) -> pd.DataFrame:
    """Attach time stamps to the output of :func:`numkit.ode.runge_kutta`.

    Args:
        states (numpy.ndarray): ``(N, dim)`` array, row ``i`` taken at
            ``t_start + i h``.
        interval (Sequence[float]): ``(t_start, t_end)`` passed to the
            integrator.
        labels (Sequence[str] | None): Column names for the state
            components; defaults to ``x0, x1, ...``.

    Returns:
        pandas.DataFrame: Column ``t`` followed by one column per component.

    Raises:
        DimensionMismatch: If the number of labels differs from ``dim``.
    """
    states = np.atleast_2d(np.asarray(states, dtype=float))
    n, dim = states.shape
    if labels is None:
        labels = [f"x{i}" for i in range(dim)]
    if len(labels) != dim:
        raise DimensionMismatch(f"Expected {dim} labels, got {len(labels)}.")

    h = (interval[1] - interval[0]) / n if n else 0.0
    df = pd.DataFrame(states, columns=list(labels))
    df.insert(0, "t", interval[0] + h * np.arange(n))
    return df


def save_frame_to_csv(df: pd.DataFrame, path: str) -> str:
    """Write ``df`` to ``path`` without the index, creating parent folders.

    Returns:
        str: The path written.
    """
    directory = os.path.dirname(path)
    if directory:
        os.makedirs(directory, exist_ok=True)
    df.to_csv(path, index=False)
    return path
