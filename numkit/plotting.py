"""
Render curves, Riemann sums and polyline simplifications to PNG files.

Every public function builds one figure, saves it under ``output_dir`` and
closes it, so the module is safe to use with the non-interactive ``Agg``
backend and in long-running loops.
"""

from __future__ import annotations

import os
import re
from typing import Optional, Sequence

import matplotlib.pyplot as plt
import numpy as np
import pandas as pd

from .results import RiemannSum

FIGURE_DPI = 300
FIGSIZE_SINGLE = (7.0, 4.2)
FIGSIZE_WIDE = (10.8, 4.2)


def setup_plot_style():
    """Clean report style with light grid and no top/right spines."""
    if "seaborn-v0_8-whitegrid" in plt.style.available:
        plt.style.use("seaborn-v0_8-whitegrid")
    else:
        plt.style.use("default")

    plt.rcParams.update(
        {
            "font.family": "serif",
            "font.serif": ["Times New Roman", "Times", "Nimbus Roman", "DejaVu Serif"],
            "mathtext.fontset": "stix",
            "font.size": 12,
            "axes.titlesize": 14,
            "axes.labelsize": 12,
            "legend.fontsize": 11,
            "xtick.labelsize": 11,
            "ytick.labelsize": 11,
            "figure.dpi": 120,
            "savefig.dpi": FIGURE_DPI,
            "savefig.bbox": "tight",
            "axes.spines.top": False,
            "axes.spines.right": False,
            "axes.linewidth": 1.2,
            "grid.alpha": 0.25,
            "grid.linestyle": "--",
            "grid.linewidth": 0.7,
            "legend.frameon": False,
        }
    )


def _output_path(output_dir: str, name: str) -> str:
    os.makedirs(output_dir, exist_ok=True)
    sanitized = re.sub(r"[^A-Za-z0-9._-]+", "_", name).strip("_") or "figure"
    return os.path.join(output_dir, f"{sanitized}.png")


def plot_curve(
    samples: pd.DataFrame,
    output_dir: str = "output",
    name: str = "curve",
    control_points: Optional[np.ndarray] = None,
    title: Optional[str] = None,
) -> str:
    """Plot a sampled parametric curve and, optionally, its control points.

    Args:
        samples (pandas.DataFrame): Output of
            :func:`numkit.output.sample_curve` (columns ``x`` and ``y``).
        output_dir (str): Target directory.
        name (str): File stem; unsafe characters are replaced.
        control_points (numpy.ndarray | None): ``(n, 2)`` array drawn as
            markers joined by a dashed polygon.
        title (str | None): Axes title.

    Returns:
        str: Path of the written PNG.
    """
    setup_plot_style()
    fig, ax = plt.subplots(figsize=FIGSIZE_SINGLE)

    ax.plot(samples["x"], samples["y"], color="black", lw=2.0, label="curve")
    if control_points is not None:
        cp = np.asarray(control_points, dtype=float)
        ax.plot(
            cp[:, 0],
            cp[:, 1],
            ls="--",
            lw=1.0,
            color="0.5",
            marker="o",
            ms=5,
            label="control points",
        )

    ax.set_xlabel(r"$x$")
    ax.set_ylabel(r"$y$")
    if title:
        ax.set_title(title)
    ax.legend(loc="best")

    out_path = _output_path(output_dir, name)
    fig.savefig(out_path, dpi=FIGURE_DPI)
    plt.close(fig)
    return out_path


def plot_riemann(
    f,
    bars: RiemannSum,
    start: float,
    end: float,
    output_dir: str = "output",
    name: str = "riemann",
    title: Optional[str] = None,
) -> str:
    """Plot a function together with the bar outline of a Riemann sum.

    Args:
        f: The summed function, drawn on ``[start, end]``.
        bars (RiemannSum): Output of :func:`numkit.quadrature.riemann`.
        start (float): Left end of the plotted range.
        end (float): Right end of the plotted range.
        output_dir (str): Target directory.
        name (str): File stem.
        title (str | None): Axes title; the area is appended.

    Returns:
        str: Path of the written PNG.
    """
    setup_plot_style()
    fig, ax = plt.subplots(figsize=FIGSIZE_SINGLE)

    xs = np.linspace(start, end, 400)
    ax.plot(xs, [f(x) for x in xs], color="black", lw=2.0, label=r"$f(x)$")
    if len(bars.x):
        ax.fill(bars.x, bars.y, facecolor=(0, 0, 0, 0.12), edgecolor="0.3", lw=1.0)

    label = f"area = {bars.area:.6g}"
    ax.set_title(f"{title}: {label}" if title else label)
    ax.set_xlabel(r"$x$")
    ax.set_ylabel(r"$y$")
    ax.legend(loc="best")

    out_path = _output_path(output_dir, name)
    fig.savefig(out_path, dpi=FIGURE_DPI)
    plt.close(fig)
    return out_path


def plot_simplification(
    original: np.ndarray,
    simplified: np.ndarray,
    output_dir: str = "output",
    name: str = "simplification",
    eps: Optional[float] = None,
) -> str:
    """Overlay a polyline and its simplification side by side.

    Args:
        original (numpy.ndarray): ``(n, 2)`` input polyline.
        simplified (numpy.ndarray): ``(m, 2)`` simplified polyline.
        output_dir (str): Target directory.
        name (str): File stem.
        eps (float | None): Tolerance shown in the title.

    Returns:
        str: Path of the written PNG.
    """
    setup_plot_style()
    original = np.asarray(original, dtype=float)
    simplified = np.asarray(simplified, dtype=float)

    fig, (ax1, ax2) = plt.subplots(1, 2, figsize=FIGSIZE_WIDE, sharey=True)
    ax1.plot(original[:, 0], original[:, 1], color="0.4", lw=1.0, marker=".", ms=3)
    ax1.set_title(f"input ({len(original)} points)")
    ax2.plot(original[:, 0], original[:, 1], color="0.8", lw=1.0)
    ax2.plot(simplified[:, 0], simplified[:, 1], color="black", lw=1.6, marker="o", ms=4)
    suffix = f", eps = {eps:g}" if eps is not None else ""
    ax2.set_title(f"simplified ({len(simplified)} points{suffix})")
    for ax in (ax1, ax2):
        ax.set_xlabel(r"$x$")
    ax1.set_ylabel(r"$y$")

    fig.tight_layout()
    out_path = _output_path(output_dir, name)
    fig.savefig(out_path, dpi=FIGURE_DPI)
    plt.close(fig)
    return out_path


def plot_trajectory(
    frame: pd.DataFrame,
    output_dir: str = "output",
    name: str = "trajectory",
    columns: Optional[Sequence[str]] = None,
) -> str:
    """Plot ODE state components against time.

    Args:
        frame (pandas.DataFrame): Output of
            :func:`numkit.output.trajectory_to_frame`.
        output_dir (str): Target directory.
        name (str): File stem.
        columns (Sequence[str] | None): Components to draw; all by default.

    Returns:
        str: Path of the written PNG.
    """
    setup_plot_style()
    fig, ax = plt.subplots(figsize=FIGSIZE_SINGLE)
    if columns is None:
        columns = [c for c in frame.columns if c != "t"]
    for col in columns:
        ax.plot(frame["t"], frame[col], lw=1.6, label=col)
    ax.set_xlabel(r"$t$")
    ax.set_ylabel("state")
    ax.legend(loc="best")

    out_path = _output_path(output_dir, name)
    fig.savefig(out_path, dpi=FIGURE_DPI)
    plt.close(fig)
    return out_path
