#!/usr/bin/env python3
"""
Main script for running the numerical routine demonstrations.
"""

# Pipeline overview:
# 1) Solve a small linear system and diagonalize a symmetric matrix.
# 2) Integrate test functions with the fixed, extrapolated and adaptive rules
#    and compare against scipy.integrate.quad.
# 3) Find roots and minima, and intersect two parametric curves.
# 4) Sample the interpolating curves through a shared control polygon.
# 5) Integrate an ODE, simplify a noisy polyline, and export CSVs and plots.

import argparse
import logging
import math
import os
import sys
import time
from typing import List, Optional

import numpy as np
from scipy import integrate as sp_integrate

sys.path.insert(0, os.path.dirname(os.path.abspath(__file__)))

from numkit.interpolation import (
    BezierCurve,
    BSpline,
    CatmullRomSpline,
    NaturalCubicSpline,
    NevilleCurve,
    RegressionPolynomial,
)
from numkit.linalg import determinant, jacobi_eigen, solve
from numkit.ode import runge_kutta
from numkit.output import sample_curve, save_frame_to_csv, trajectory_to_frame
from numkit.plotting import (
    plot_curve,
    plot_riemann,
    plot_simplification,
    plot_trajectory,
)
from numkit.points import FunctionCurve, coordinates, points_from_xy
from numkit.quadrature import (
    adaptive_quadrature,
    gauss_legendre,
    newton_cotes,
    riemann,
    romberg,
)
from numkit.roots import CurveIntersector, find_root, minimize
from numkit.simplify import simplify_array

DEFAULT_OUTPUT_DIR = "output"


def _build_arg_parser() -> argparse.ArgumentParser:
    """Build command-line parser for the demonstration run."""
    parser = argparse.ArgumentParser(
        description="Run the numkit demonstrations and export their results."
    )
    parser.add_argument(
        "--output-dir",
        default=DEFAULT_OUTPUT_DIR,
        help=f"Output directory (default: {DEFAULT_OUTPUT_DIR}).",
    )
    parser.add_argument(
        "--log-file",
        default=None,
        help="Optional path of a log file written in addition to stdout.",
    )
    parser.add_argument(
        "--no-plots",
        action="store_true",
        help="Skip figure generation and only write CSV files.",
    )
    return parser


def _configure_logging(log_file: Optional[str]) -> None:
    handlers: List[logging.Handler] = [logging.StreamHandler(sys.stdout)]
    if log_file:
        handlers.append(logging.FileHandler(log_file, mode="w"))
    logging.basicConfig(
        level=logging.INFO,
        format="%(asctime)s - %(levelname)s - %(message)s",
        handlers=handlers,
    )


def demo_linear_algebra() -> None:
    A = [[4.0, -2.0, 1.0], [-2.0, 4.0, -2.0], [1.0, -2.0, 4.0]]
    b = [11.0, -16.0, 17.0]
    x = solve(A, b)
    logging.info("solve: x = %s, residual = %.3e", np.round(x, 6), np.max(np.abs(np.dot(A, x) - b)))
    logging.info("determinant = %.6f (numpy: %.6f)", determinant(A), np.linalg.det(A))
    D, _ = jacobi_eigen(A)
    logging.info("Jacobi eigenvalues = %s", np.round(np.sort(np.diag(D)), 6))


def demo_quadrature() -> None:
    cases = [
        ("sin on [0, pi]", math.sin, (0.0, math.pi)),
        ("exp(-x^2) on [-2, 2]", lambda x: math.exp(-x * x), (-2.0, 2.0)),
        ("sqrt on [0, 1]", math.sqrt, (0.0, 1.0)),
    ]
    for label, f, interval in cases:
        reference, _ = sp_integrate.quad(f, *interval)
        adaptive = adaptive_quadrature(interval, f)
        logging.info(
            "%s: milne=%.10f romberg=%.10f gauss12=%.10f qag=%.10f (%s, %s) quad=%.10f",
            label,
            newton_cotes(interval, f),
            romberg(interval, f),
            gauss_legendre(interval, f),
            adaptive.value,
            adaptive.status,
            adaptive.error,
            reference,
        )


def demo_roots() -> None:
    result = find_root(lambda x: x * x - 2.0, [0.0, 2.0])
    logging.info("root of x^2 - 2: %.10f via %s (%s)", result.x, result.method, result.status)

    result = find_root(math.cos, 1.0)
    logging.info("root of cos near 1: %.10f via %s (%s)", result.x, result.method, result.status)

    result = minimize(lambda x: (x - 3.0) ** 2 + 1.0, [0.0, 10.0])
    logging.info("minimum of (x-3)^2 + 1: x = %.8f (%s)", result.x, result.status)

    circle = FunctionCurve(math.cos, math.sin)
    line = FunctionCurve(lambda t: t, lambda t: t)
    hit = CurveIntersector().intersect(circle, line, 0.5, 0.5)
    logging.info(
        "circle/diagonal intersection: (%.6f, %.6f) after %d steps (%s)",
        hit.point[0],
        hit.point[1],
        hit.iterations,
        hit.status,
    )


def demo_interpolation(output_dir: str, make_plots: bool) -> List[str]:
    xs = [0.0, 1.0, 2.0, 3.0, 4.0, 5.0, 6.0]
    ys = [0.0, 1.5, 0.5, 2.0, 1.0, 2.5, 0.0]
    points = points_from_xy(xs, ys)
    control = coordinates(points)

    curves = {
        "neville": NevilleCurve(points),
        "catmull_rom": CatmullRomSpline(points),
        "bezier": BezierCurve(points),
        "bspline_order4": BSpline(points, 4),
    }

    written: List[str] = []
    for name, curve in curves.items():
        t_min, t_max = curve.domain
        samples = sample_curve(curve, t_min, t_max)
        written.append(save_frame_to_csv(samples, os.path.join(output_dir, f"{name}.csv")))
        if make_plots:
            written.append(plot_curve(samples, output_dir, name, control, title=name))

    spline = NaturalCubicSpline.fit(xs, ys)
    logging.info("natural spline at 2.5: %.6f", spline.evaluate(2.5))

    fit = RegressionPolynomial(2, xs, ys)
    logging.info("quadratic regression: %s", fit.term())
    return written


def demo_ode_and_polylines(output_dir: str, make_plots: bool) -> List[str]:
    written: List[str] = []

    interval = (0.0, 4.0 * math.pi)
    states = runge_kutta("rk4", [1.0, 0.0], interval, 400, lambda t, x: [x[1], -x[0]])
    frame = trajectory_to_frame(states, interval, labels=["position", "velocity"])
    written.append(save_frame_to_csv(frame, os.path.join(output_dir, "oscillator.csv")))
    logging.info("oscillator energy drift: %.3e", abs(states[-1] @ states[-1] - 1.0))

    rng = np.random.default_rng(7)
    t = np.linspace(0.0, 2.0 * math.pi, 500)
    noisy = np.column_stack([t, np.sin(t) + 0.01 * rng.standard_normal(len(t))])
    simplified = simplify_array(noisy, 0.05)
    logging.info("polyline simplified from %d to %d points", len(noisy), len(simplified))

    bars = riemann(math.sin, 12, "middle", 0.0, math.pi)
    logging.info("midpoint Riemann sum of sin on [0, pi]: %.6f", bars.area)

    if make_plots:
        written.append(plot_trajectory(frame, output_dir, "oscillator"))
        written.append(plot_simplification(noisy, simplified, output_dir, "simplification", 0.05))
        written.append(plot_riemann(math.sin, bars, 0.0, math.pi, output_dir, "riemann_sin"))
    return written


def main(argv: Optional[List[str]] = None) -> int:
    """Main execution function with step timings."""
    args = _build_arg_parser().parse_args(argv)
    _configure_logging(args.log_file)

    start_time = time.time()
    logging.info("Initializing numkit demonstrations")

    output_dir = args.output_dir
    os.makedirs(output_dir, exist_ok=True)
    logging.info("Output directory ensured: %s", output_dir)

    written: List[str] = []
    steps = [
        ("Linear algebra", lambda: demo_linear_algebra()),
        ("Quadrature", lambda: demo_quadrature()),
        ("Root finding", lambda: demo_roots()),
        ("Interpolation", lambda: written.extend(demo_interpolation(output_dir, not args.no_plots))),
        ("ODE and polylines", lambda: written.extend(demo_ode_and_polylines(output_dir, not args.no_plots))),
    ]
    for label, step in steps:
        step_start = time.time()
        step()
        logging.info("%s completed in %.2f seconds", label, time.time() - step_start)

    total_duration = time.time() - start_time
    logging.info("Total execution time: %.2f seconds", total_duration)
    logging.info("Generated output files:")
    for path in written:
        logging.info("  - %s", path)
    return 0


if __name__ == "__main__":
    sys.exit(main())
