import math

import numpy as np
import pytest

from numkit.errors import InvalidConfiguration
from numkit.points import FunctionCurve
from numkit.roots import CurveIntersector, find_root, minimize, newton, root


def test_root_of_quadratic_in_bracket():
    result = find_root(lambda x: x * x - 2.0, [0.0, 2.0])
    assert result.converged
    assert result.method == "brent"
    assert abs(result.x - math.sqrt(2.0)) < 1e-5
    assert abs(root(lambda x: x * x - 2.0, [0.0, 2.0]) - math.sqrt(2.0)) < 1e-5


def test_find_root_probes_for_a_bracket_from_a_scalar():
    result = find_root(math.cos, 1.0)
    assert result.method == "brent"
    assert abs(result.x - math.pi / 2.0) < 1e-5


def test_find_root_zero_start_uses_unit_scale():
    result = find_root(lambda x: x - 0.95, 0.0)
    assert abs(result.x - 0.95) < 1e-5


def test_find_root_forwards_args():
    result = find_root(lambda x, c: x - c, [0.0, 10.0], args=(3.0,))
    assert abs(result.x - 3.0) < 1e-5


def test_find_root_falls_back_to_minimize_for_bracket_without_sign_change():
    result = find_root(lambda x: x * x + 1.0, [-1.0, 2.0])
    assert result.status == "best_effort"
    assert result.method == "fminbr"
    assert abs(result.x) < 1e-4


def test_find_root_falls_back_to_newton_for_scalar_without_sign_change():
    result = find_root(lambda x: x * x + 1.0, 3.0)
    assert result.status == "best_effort"
    assert result.method == "newton"


def test_find_root_short_bracket_raises():
    with pytest.raises(InvalidConfiguration):
        find_root(math.sin, [1.0])


def test_minimize_parabola():
    result = minimize(lambda x: (x - 3.0) ** 2, [0.0, 10.0])
    assert result.converged
    assert abs(result.x - 3.0) < 1e-4
    assert float(result) == result.x


def test_minimize_cosine_in_bracket():
    result = minimize(math.cos, [2.0, 5.0])
    assert abs(result.x - math.pi) < 1e-4
    assert np.isclose(result.fun, -1.0)


def test_minimize_requires_bracket():
    with pytest.raises(InvalidConfiguration):
        minimize(math.cos, 2.0)


def test_newton_cubic():
    result = newton(lambda x: x**3 - 8.0, 3.0)
    assert result.converged
    assert abs(result.x - 2.0) < 1e-5
    assert result.iterations <= 50


def test_newton_leaves_flat_start(rng):
    result = newton(lambda x: x * x - 4.0, 0.0, rng=rng)
    assert result.converged
    assert abs(abs(result.x) - 2.0) < 1e-5


def test_newton_is_scalar_only():
    with pytest.raises(InvalidConfiguration):
        newton(math.sin, [1.0, 2.0])


def test_curve_intersection_circle_and_diagonal():
    circle = FunctionCurve(math.cos, math.sin)
    line = FunctionCurve(lambda t: t, lambda t: t)
    solver = CurveIntersector()

    hit = solver.intersect(circle, line, 0.5, 0.5)
    assert hit.converged
    assert abs(hit.point[0] - math.sqrt(0.5)) < 2e-3
    assert abs(hit.point[1] - math.sqrt(0.5)) < 2e-3
    assert abs(hit.t1 - math.pi / 4.0) < 2e-3


def test_curve_intersection_reuses_previous_solution():
    circle = FunctionCurve(math.cos, math.sin)
    line = FunctionCurve(lambda t: t, lambda t: t)
    solver = CurveIntersector()
    first = solver.intersect(circle, line, 0.5, 0.5)

    again = solver.intersect(circle, line, 100.0, -100.0)
    assert again.iterations == 0
    assert again.t1 == first.t1 and again.t2 == first.t2

    solver.reset()
    assert solver.t1_memo is None and solver.t2_memo is None


def test_curve_intersection_without_memo_uses_guesses():
    circle = FunctionCurve(math.cos, math.sin)
    line = FunctionCurve(lambda t: t, lambda t: t)
    solver = CurveIntersector()
    solver.intersect(circle, line, 0.5, 0.5)

    hit = solver.intersect(circle, line, 3.9, -0.7, use_memo=False)
    assert hit.converged
    assert abs(hit.point[0] + math.sqrt(0.5)) < 2e-3


def test_find_root_zero_dimensional_array_is_a_start_point():
    result = find_root(lambda x: x * x - 2.0, np.array(1.0))
    assert result.method == "brent"
    assert abs(result.x - math.sqrt(2.0)) < 1e-5


def test_find_root_stops_at_iteration_cap_on_a_jump():
    step = lambda x: 1.0 if x > 0.3 else -1.0
    result = find_root(step, [0.0, 1.0])
    assert result.status == "best_effort"
    assert result.method == "brent"
    assert result.iterations == 80
    assert abs(result.x - 0.3) < 1e-4

    short = find_root(lambda x: x**3 - 2.0, [0.0, 2.0], max_iterations=2)
    assert short.status == "best_effort"
    assert short.iterations == 2


def test_newton_without_real_root_is_best_effort():
    result = newton(lambda x: x * x + 1.0, 3.0, rng=np.random.default_rng(0))
    assert result.status == "best_effort"
    assert not result.converged
    assert result.iterations == 50
    assert result.fun >= 1.0


def test_curve_intersection_parallel_lines_is_best_effort():
    lower = FunctionCurve(lambda t: t, lambda t: 0.0)
    upper = FunctionCurve(lambda t: t, lambda t: 1.0)
    hit = CurveIntersector().intersect(lower, upper, 0.0, 0.0)
    assert hit.status == "best_effort"
    assert hit.iterations == 0


def test_curve_intersection_iteration_cap():
    circle = FunctionCurve(math.cos, math.sin)
    line = FunctionCurve(lambda t: t, lambda t: t)
    hit = CurveIntersector(max_iterations=1).intersect(circle, line, 0.0, 2.0)
    assert hit.status == "best_effort"
    assert hit.iterations == 1
    assert hit.t1 == pytest.approx(1.0) and hit.t2 == pytest.approx(1.0)
