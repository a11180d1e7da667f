import math

import numpy as np
import pytest

from numkit.errors import InvalidConfiguration
from numkit.ode import EULER, RK4, ButcherTableau, get_tableau, runge_kutta


def _growth(t, x):
    return x


def test_euler_is_first_order():
    errors = []
    for steps in (100, 200):
        states = runge_kutta("euler", [1.0], (0.0, 1.0), steps, _growth)
        h = 1.0 / steps
        errors.append(abs(states[-1, 0] - math.exp(1.0 - h)))
    assert 1.6 <= errors[0] / errors[1] <= 2.4


def test_rk4_harmonic_oscillator():
    steps = 200
    interval = (0.0, 2.0 * math.pi)
    states = runge_kutta("rk4", [1.0, 0.0], interval, steps, lambda t, x: [x[1], -x[0]])
    t = interval[0] + (interval[1] - interval[0]) / steps * np.arange(steps)
    np.testing.assert_allclose(states[:, 0], np.cos(t), atol=1e-5)
    np.testing.assert_allclose(states[:, 1], -np.sin(t), atol=1e-5)


def test_heun_uses_time_argument():
    states = runge_kutta("heun", [0.0], (0.0, 1.0), 4, lambda t, x: [2.0 * t])
    h = 0.25
    expected = [(i * h) ** 2 for i in range(4)]
    np.testing.assert_allclose(states[:, 0], expected, atol=1e-12)


def test_first_row_is_initial_state_and_input_untouched():
    x0 = np.array([1.0, -2.0])
    states = runge_kutta(RK4, x0, (0.0, 1.0), 10, lambda t, x: -x)
    assert states.shape == (10, 2)
    assert np.array_equal(states[0], [1.0, -2.0])
    assert np.array_equal(x0, [1.0, -2.0])


def test_zero_steps_returns_empty_trajectory():
    states = runge_kutta("euler", [1.0, 2.0, 3.0], (0.0, 1.0), 0, _growth)
    assert states.shape == (0, 3)


def test_negative_steps_raise():
    with pytest.raises(InvalidConfiguration):
        runge_kutta("euler", [1.0], (0.0, 1.0), -1, _growth)


def test_custom_tableau_matches_preset():
    midpoint = ButcherTableau(stages=2, a=((0.0, 0.0), (0.5, 0.0)), b=(0.0, 1.0), c=(0.0, 0.5))
    states = runge_kutta(midpoint, [1.0], (0.0, 1.0), 50, _growth)
    assert abs(states[-1, 0] - math.exp(1.0 - 1.0 / 50)) < 1e-3


def test_preset_lookup():
    assert get_tableau("EULER") is EULER
    assert get_tableau(RK4) is RK4
    with pytest.raises(InvalidConfiguration):
        get_tableau("dopri5")


def test_malformed_tableaux_raise():
    with pytest.raises(InvalidConfiguration):
        ButcherTableau(stages=2, a=((0.0, 0.0),), b=(0.5, 0.5), c=(0.0, 1.0))
    with pytest.raises(InvalidConfiguration):
        ButcherTableau(stages=1, a=((1.0,),), b=(1.0,), c=(0.0,))
