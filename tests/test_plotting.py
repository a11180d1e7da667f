import math
import os

import numpy as np

from numkit.interpolation import CatmullRomSpline
from numkit.ode import runge_kutta
from numkit.output import sample_curve, trajectory_to_frame
from numkit.plotting import (
    plot_curve,
    plot_riemann,
    plot_simplification,
    plot_trajectory,
)
from numkit.points import coordinates
from numkit.quadrature import riemann
from numkit.simplify import simplify_array


def test_plot_curve_with_control_points(tmp_path, zigzag_points):
    spline = CatmullRomSpline(zigzag_points)
    samples = sample_curve(spline, *spline.domain, num=50)
    out = plot_curve(
        samples, str(tmp_path), "catmull rom/test", coordinates(zigzag_points), title="test"
    )
    assert os.path.basename(out) == "catmull_rom_test.png"
    assert os.path.exists(out)


def test_plot_riemann_and_empty_sum(tmp_path):
    bars = riemann(math.sin, 6, "left", 0.0, math.pi)
    assert os.path.exists(plot_riemann(math.sin, bars, 0.0, math.pi, str(tmp_path), "left"))

    empty = riemann(math.sin, 0, "left", 0.0, math.pi)
    assert os.path.exists(plot_riemann(math.sin, empty, 0.0, math.pi, str(tmp_path), "empty"))


def test_plot_simplification(tmp_path):
    t = np.linspace(0.0, 2.0 * math.pi, 100)
    coords = np.column_stack([t, np.sin(t)])
    out = plot_simplification(coords, simplify_array(coords, 0.05), str(tmp_path), eps=0.05)
    assert out.endswith("simplification.png")
    assert os.path.exists(out)


def test_plot_trajectory(tmp_path):
    interval = (0.0, 1.0)
    states = runge_kutta("rk4", [1.0, 0.0], interval, 20, lambda t, x: [x[1], -x[0]])
    frame = trajectory_to_frame(states, interval, labels=["q", "p"])
    out = plot_trajectory(frame, str(tmp_path), "oscillator", columns=["q"])
    assert os.path.exists(out)
