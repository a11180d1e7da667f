import math

import numpy as np
import pytest
from scipy import integrate as sp_integrate

from numkit.errors import InvalidConfiguration, ToleranceUnreachable, ToleranceWarning
from numkit.quadrature import (
    QuadratureWorklist,
    adaptive_quadrature,
    gauss_kronrod15,
    gauss_kronrod21,
    gauss_kronrod31,
    gauss_legendre,
    integrate,
    newton_cotes,
    riemann,
    riemann_sum,
    romberg,
)


def test_newton_cotes_rules_on_sine():
    for rule, nodes, tol in (("trapezoid", 400, 1e-4), ("simpson", 40, 1e-5), ("milne", 28, 1e-6)):
        assert abs(newton_cotes([0.0, math.pi], math.sin, nodes=nodes, rule=rule) - 2.0) < tol


def test_simpson_is_exact_for_cubics():
    assert np.isclose(newton_cotes([0.0, 1.0], lambda x: x**3, nodes=4, rule="simpson"), 0.25)


def test_newton_cotes_rejects_bad_configuration():
    with pytest.raises(InvalidConfiguration):
        newton_cotes([0.0, 1.0], math.sin, nodes=5, rule="simpson")
    with pytest.raises(InvalidConfiguration):
        newton_cotes([0.0, 1.0], math.sin, nodes=6, rule="milne")
    with pytest.raises(InvalidConfiguration):
        newton_cotes([0.0, 1.0], math.sin, rule="boole")


def test_romberg_exponential():
    assert abs(romberg([0.0, 1.0], math.exp) - (math.e - 1.0)) < 1e-8


def test_gauss_legendre_order_two_is_exact_for_quadratics():
    assert np.isclose(gauss_legendre([0.0, 2.0], lambda x: x * x, order=2), 8.0 / 3.0)


def test_gauss_legendre_clamps_large_orders():
    f = lambda x: math.exp(-x * x)
    assert gauss_legendre([-1.0, 1.0], f, order=40) == gauss_legendre([-1.0, 1.0], f, order=18)


def test_gauss_legendre_odd_order_against_scipy():
    reference, _ = sp_integrate.quad(math.cos, 0.0, 1.5)
    assert abs(gauss_legendre([0.0, 1.5], math.cos, order=7) - reference) < 1e-10


def test_gauss_legendre_rejects_order_below_two():
    with pytest.raises(InvalidConfiguration):
        gauss_legendre([0.0, 1.0], math.sin, order=1)


def test_gauss_kronrod_rules_on_polynomial():
    for rule in (gauss_kronrod15, gauss_kronrod21, gauss_kronrod31):
        est = rule([0.0, 1.0], lambda x: x**5)
        assert np.isclose(est.value, 1.0 / 6.0, rtol=1e-12)
        assert est.abserr < 1e-10
        assert est.resabs >= abs(est.value)


def test_worklist_tracks_largest_error():
    ws = QuadratureWorklist((0.0, 1.0), 10)
    ws.set_initial_result(1.0, 0.5)

    ws.update(0.0, 0.5, 0.4, 0.1, 0.5, 1.0, 0.6, 0.3)
    assert ws.retrieve() == (0.5, 1.0, 0.6, 0.3)

    ws.update(0.5, 0.75, 0.3, 0.05, 0.75, 1.0, 0.3, 0.02)
    assert ws.retrieve() == (0.0, 0.5, 0.4, 0.1)
    assert np.isclose(ws.sum_results(), 1.0)
    assert ws.maximum_level == 2


def test_integrate_identity():
    assert abs(integrate([0.0, 1.0], lambda x: x) - 0.5) < 1e-12


@pytest.mark.parametrize(
    "f, a, b",
    [
        (math.sin, 0.0, math.pi),
        (lambda x: math.exp(-x * x), -3.0, 3.0),
        (math.sqrt, 0.0, 1.0),
        (lambda x: 1.0 / (1.0 + 25.0 * x * x), -1.0, 1.0),
    ],
)
def test_adaptive_quadrature_matches_scipy(f, a, b):
    reference, _ = sp_integrate.quad(f, a, b)
    result = adaptive_quadrature([a, b], f)
    assert abs(result.value - reference) < 1e-6
    assert result.intervals <= 15


def test_adaptive_quadrature_reports_best_effort():
    f = lambda x: 1.0 / math.sqrt(x)
    result = adaptive_quadrature([0.0, 1.0], f, limit=2, epsabs=1e-12, epsrel=1e-12)
    assert result.status == "best_effort"
    assert not result.converged
    assert result.error in ("max_iterations", "roundoff", "singular")


def test_adaptive_quadrature_raise_on_failure():
    f = lambda x: 1.0 / math.sqrt(x)
    with pytest.raises(ToleranceUnreachable) as excinfo:
        adaptive_quadrature(
            [0.0, 1.0], f, limit=2, epsabs=1e-12, epsrel=1e-12, raise_on_failure=True
        )
    assert excinfo.value.result is not None
    assert excinfo.value.result.value > 0.0


def test_adaptive_quadrature_single_iteration_warns():
    f = lambda x: 1.0 / math.sqrt(x)
    with pytest.warns(ToleranceWarning):
        result = adaptive_quadrature([0.0, 1.0], f, limit=1)
    assert result.status == "failed"
    assert result.error == "max_iterations"


def test_adaptive_quadrature_warns_on_unreachable_tolerance():
    with pytest.warns(ToleranceWarning):
        adaptive_quadrature([0.0, 1.0], lambda x: x * x, epsabs=0.0, epsrel=1e-20)


def test_adaptive_quadrature_rejects_zero_limit():
    with pytest.raises(InvalidConfiguration):
        adaptive_quadrature([0.0, 1.0], math.sin, limit=0)


def test_riemann_left_sum():
    assert np.isclose(riemann_sum(lambda x: x, 4, "left", 0.0, 1.0), 0.375)


def test_riemann_middle_and_trapezoidal():
    f = lambda x: x * x
    assert np.isclose(riemann_sum(f, 2, "middle", 0.0, 1.0), 0.3125)
    assert np.isclose(riemann_sum(f, 2, "trapezoidal", 0.0, 1.0), 0.375)
    assert np.isclose(riemann_sum(f, 1, "simpson", 0.0, 1.0), 1.0 / 3.0)


def test_riemann_upper_and_lower_bound_the_integral():
    f = lambda x: x
    assert np.isclose(riemann_sum(f, 4, "upper", 0.0, 1.0), 0.625)
    assert np.isclose(riemann_sum(f, 4, "lower", 0.0, 1.0), 0.375)


def test_riemann_between_two_functions():
    bars = riemann(lambda x: 1.0, 2, "middle", 0.0, 1.0, lower=lambda x: x)
    assert np.isclose(bars.area, 0.5)
    assert len(bars.x) == len(bars.y) == 10


def test_riemann_random_stays_between_bounds():
    f = lambda x: x
    area = riemann(f, 8, "random", 0.0, 1.0, rng=np.random.default_rng(3)).area
    assert riemann_sum(f, 8, "lower", 0.0, 1.0) <= area <= riemann_sum(f, 8, "upper", 0.0, 1.0)


def test_riemann_empty_and_invalid():
    bars = riemann(math.sin, 0, "left", 0.0, 1.0)
    assert len(bars.x) == 0 and bars.area == 0.0
    with pytest.raises(InvalidConfiguration):
        riemann(math.sin, 4, "sideways", 0.0, 1.0)


def test_adaptive_quadrature_flags_singular_interval():
    jump = lambda x: 1.0 if x > 1.0 + 3.3e-14 else 0.0
    result = adaptive_quadrature([1.0, 1.0 + 1e-13], jump, epsabs=1e-30)
    assert result.status == "best_effort"
    assert result.error == "singular"
    assert result.iterations == 4


def test_adaptive_quadrature_roundoff_on_first_attempt():
    f = lambda x: 1e300 * (1.0 + 1e-15 * math.sin(1e6 * x))
    with pytest.warns(ToleranceWarning) as record:
        result = adaptive_quadrature([0.0, 1.0], f, epsabs=0.0, epsrel=1e-17)
    messages = [str(w.message) for w in record]
    assert any("cannot be achieved" in m for m in messages)
    assert any("roundoff error on first attempt" in m for m in messages)
    assert result.status == "failed"
    assert result.error == "roundoff"
    assert result.iterations == 1


def test_adaptive_quadrature_stops_at_limit():
    f = lambda x: 1.0 / math.sqrt(x)
    result = adaptive_quadrature([0.0, 1.0], f, limit=3, epsabs=1e-12, epsrel=1e-12)
    assert result.status == "best_effort"
    assert result.error == "max_iterations"
    assert result.iterations == 3
    assert result.intervals == 3
