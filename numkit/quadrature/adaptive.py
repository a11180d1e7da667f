"""Globally adaptive quadrature (QUADPACK ``qag``).

The driver keeps a worklist of subintervals together with their estimates
and error bounds. Each iteration bisects the subinterval with the largest
error, integrates both halves with a Gauss-Kronrod rule and updates the
running totals, until the accumulated error meets

    errsum <= max(epsabs, epsrel * |area|)

or a failure condition is detected:

- ``roundoff``: bisection keeps changing the area by almost nothing while the
  error does not shrink (6 occurrences), or the error grows after the tenth
  iteration (20 occurrences).
- ``singular``: the bisected interval has shrunk to machine precision.
- ``max_iterations``: the subdivision limit was reached.

References:
    R. Piessens et al., "QUADPACK", routine QAG; GSL ``gsl_integration_qag``.
"""

from __future__ import annotations

import warnings
from typing import Callable, Optional, Sequence

import numpy as np

from numkit.constants import DBL_EPS, DBL_MIN
from numkit.errors import InvalidConfiguration, ToleranceUnreachable, ToleranceWarning
from numkit.quadrature.gauss import gauss_kronrod15
from numkit.results import (
    BEST_EFFORT,
    CONVERGED,
    ERROR_MAX_ITERATIONS,
    ERROR_NONE,
    ERROR_ROUNDOFF,
    ERROR_SINGULAR,
    FAILED,
    KronrodEstimate,
    QuadratureResult,
)

DEFAULT_LIMIT = 15
DEFAULT_EPSREL = 1.0e-7
DEFAULT_EPSABS = 1.0e-7

ROUNDOFF_TYPE1_LIMIT = 6
ROUNDOFF_TYPE2_LIMIT = 20

KronrodRule = Callable[[Sequence[float], Callable[[float], float]], KronrodEstimate]


class QuadratureWorklist:
    """Subinterval store with the worst error addressable in O(1).

    Arrays ``alist``/``blist`` hold the subinterval bounds, ``rlist`` the
    estimates, ``elist`` the error bounds and ``level`` the bisection depth.
    ``order`` lists subinterval indices by decreasing error for the part of
    the list that can still be bisected; ``nrmax`` points at the entry of
    ``order`` holding the current maximum and ``current`` is that
    subinterval's index.
    """

    def __init__(self, interval: Sequence[float], limit: int):
        self.limit = int(limit)
        size = max(self.limit, 2)
        self.alist = np.zeros(size)
        self.blist = np.zeros(size)
        self.rlist = np.zeros(size)
        self.elist = np.zeros(size)
        self.order = np.zeros(size, dtype=int)
        self.level = np.zeros(size, dtype=int)
        self.alist[0] = float(interval[0])
        self.blist[0] = float(interval[1])
        self.size = 0
        self.nrmax = 0
        self.current = 0
        self.maximum_level = 0

    def set_initial_result(self, result: float, error: float) -> None:
        self.size = 1
        self.rlist[0] = result
        self.elist[0] = error

    def retrieve(self):
        """Return ``(a, b, estimate, error)`` of the worst subinterval."""
        i = self.current
        return (
            float(self.alist[i]),
            float(self.blist[i]),
            float(self.rlist[i]),
            float(self.elist[i]),
        )

    def update(
        self,
        a1: float,
        b1: float,
        area1: float,
        error1: float,
        a2: float,
        b2: float,
        area2: float,
        error2: float,
    ) -> None:
        """Replace the worst subinterval by its two halves and re-sort."""
        i_max = self.current
        i_new = self.size
        new_level = int(self.level[i_max]) + 1

        # The half with the larger error keeps the slot of the bisected interval.
        if error2 > error1:
            self.alist[i_max] = a2
            self.rlist[i_max] = area2
            self.elist[i_max] = error2
            self.level[i_max] = new_level

            self.alist[i_new] = a1
            self.blist[i_new] = b1
            self.rlist[i_new] = area1
            self.elist[i_new] = error1
            self.level[i_new] = new_level
        else:
            self.blist[i_max] = b1
            self.rlist[i_max] = area1
            self.elist[i_max] = error1
            self.level[i_max] = new_level

            self.alist[i_new] = a2
            self.blist[i_new] = b2
            self.rlist[i_new] = area2
            self.elist[i_new] = error2
            self.level[i_new] = new_level

        self.size += 1
        self.maximum_level = max(self.maximum_level, new_level)
        self._qpsrt()

    def _qpsrt(self) -> None:
        last = self.size - 1
        limit = self.limit
        i_nrmax = self.nrmax
        i_maxerr = int(self.order[i_nrmax])
        order = self.order
        elist = self.elist

        if last < 2:
            order[0] = 0
            order[1] = 1
            self.current = i_maxerr
            return

        errmax = elist[i_maxerr]

        # Only reached when subdivision increased the error estimate.
        while i_nrmax > 0 and errmax > elist[order[i_nrmax - 1]]:
            order[i_nrmax] = order[i_nrmax - 1]
            i_nrmax -= 1

        # Only the intervals that can still be bisected are kept sorted.
        if last < (limit // 2 + 2):
            top = last
        else:
            top = limit - last + 1

        i = i_nrmax + 1
        while i < top and errmax < elist[order[i]]:
            order[i - 1] = order[i]
            i += 1
        order[i - 1] = i_maxerr

        errmin = elist[last]
        k = top - 1
        while k > i - 2 and errmin >= elist[order[k]]:
            order[k + 1] = order[k]
            k -= 1
        order[k + 1] = last

        self.current = int(order[i_nrmax])
        self.nrmax = i_nrmax

    def sum_results(self) -> float:
        return float(np.sum(self.rlist[: self.size]))

    @staticmethod
    def subinterval_too_small(a1: float, a2: float, b2: float) -> bool:
        tmp = (1.0 + 100.0 * DBL_EPS) * (abs(a2) + 1000.0 * DBL_MIN)
        return abs(a1) <= tmp and abs(b2) <= tmp


def _finish(result: QuadratureResult, raise_on_failure: bool) -> QuadratureResult:
    if raise_on_failure and not result.converged:
        raise ToleranceUnreachable(
            f"Adaptive quadrature did not reach tolerance (error type {result.error!r}, "
            f"abserr={result.abserr:.3g}).",
            result=result,
        )
    return result


def adaptive_quadrature(
    interval: Sequence[float],
    f: Callable[[float], float],
    limit: int = DEFAULT_LIMIT,
    epsrel: float = DEFAULT_EPSREL,
    epsabs: float = DEFAULT_EPSABS,
    rule: Optional[KronrodRule] = None,
    raise_on_failure: bool = False,
) -> QuadratureResult:
    """Integrate ``f`` adaptively by repeated bisection.

    Args:
        interval: Integration bounds ``(a, b)``.
        f: Scalar integrand.
        limit: Maximum number of subintervals (iterations).
        epsrel: Requested relative accuracy.
        epsabs: Requested absolute accuracy.
        rule: Gauss-Kronrod rule applied to each subinterval; defaults to
            :func:`~numkit.quadrature.gauss.gauss_kronrod15`.
        raise_on_failure: Raise :class:`~numkit.errors.ToleranceUnreachable`
            instead of returning a non-converged result.

    Returns:
        QuadratureResult: Sum of subinterval estimates, accumulated error,
        status and error classification.

    Raises:
        InvalidConfiguration: If ``limit`` is below 1.
        ToleranceUnreachable: If ``raise_on_failure`` is set and the
            tolerance was not met.

    Note:
        The two fatal early exits (roundoff on the very first estimate and
        an iteration budget of one) return the first estimate with
        ``status="failed"`` and emit a :class:`~numkit.errors.ToleranceWarning`.
    """
    limit = int(limit)
    if limit < 1:
        raise InvalidConfiguration(f"limit must be at least 1, got {limit}.")
    if rule is None:
        rule = gauss_kronrod15

    if epsabs <= 0 and (epsrel < 50 * DBL_EPS or epsrel < 0.5e-28):
        warnings.warn(
            "Tolerance cannot be achieved with the given epsabs and epsrel.",
            ToleranceWarning,
            stacklevel=2,
        )

    ws = QuadratureWorklist(interval, limit)

    first = rule(interval, f)
    ws.set_initial_result(first.value, first.abserr)

    tolerance = max(epsabs, epsrel * abs(first.value))
    round_off = 50.0 * DBL_EPS * first.resabs

    if first.abserr <= round_off and first.abserr > tolerance:
        warnings.warn(
            "Cannot reach tolerance because of roundoff error on first attempt.",
            ToleranceWarning,
            stacklevel=2,
        )
        return _finish(
            QuadratureResult(first.value, first.abserr, FAILED, ERROR_ROUNDOFF, 1, 1),
            raise_on_failure,
        )

    if (first.abserr <= tolerance and first.abserr != first.resasc) or first.abserr == 0.0:
        return QuadratureResult(first.value, first.abserr, CONVERGED, ERROR_NONE, 1, 1)

    if limit == 1:
        warnings.warn(
            "A maximum of one iteration was insufficient.",
            ToleranceWarning,
            stacklevel=2,
        )
        return _finish(
            QuadratureResult(
                first.value, first.abserr, FAILED, ERROR_MAX_ITERATIONS, 1, 1
            ),
            raise_on_failure,
        )

    area = first.value
    errsum = first.abserr
    iteration = 1
    roundoff_type1 = 0
    roundoff_type2 = 0
    error_type = ERROR_NONE

    while True:
        a_i, b_i, r_i, e_i = ws.retrieve()

        a1 = a_i
        b1 = 0.5 * (a_i + b_i)
        a2 = b1
        b2 = b_i

        left = rule((a1, b1), f)
        right = rule((a2, b2), f)

        area12 = left.value + right.value
        error12 = left.abserr + right.abserr

        errsum += error12 - e_i
        area += area12 - r_i

        if left.resasc != left.abserr and right.resasc != right.abserr:
            delta = r_i - area12
            if abs(delta) <= 1.0e-5 * abs(area12) and error12 >= 0.99 * e_i:
                roundoff_type1 += 1
            if iteration >= 10 and error12 > e_i:
                roundoff_type2 += 1

        tolerance = max(epsabs, epsrel * abs(area))

        if errsum > tolerance:
            if (
                roundoff_type1 >= ROUNDOFF_TYPE1_LIMIT
                or roundoff_type2 >= ROUNDOFF_TYPE2_LIMIT
            ):
                error_type = ERROR_ROUNDOFF
            # Bad integrand behaviour at a point of the integration range.
            if ws.subinterval_too_small(a1, a2, b2):
                error_type = ERROR_SINGULAR

        ws.update(a1, b1, left.value, left.abserr, a2, b2, right.value, right.abserr)
        iteration += 1

        if iteration >= limit or error_type != ERROR_NONE or errsum <= tolerance:
            break

    value = ws.sum_results()

    if errsum <= tolerance:
        status, error_type = CONVERGED, ERROR_NONE
    else:
        status = BEST_EFFORT
        if error_type == ERROR_NONE:
            error_type = ERROR_MAX_ITERATIONS

    return _finish(
        QuadratureResult(value, errsum, status, error_type, iteration, ws.size),
        raise_on_failure,
    )


def integrate(interval: Sequence[float], f: Callable[[float], float]) -> float:
    """Integrate ``f`` over ``interval`` with the default adaptive setup.

    Equivalent to ``adaptive_quadrature(interval, f, limit=15, epsrel=1e-7,
    epsabs=1e-7, rule=gauss_kronrod15).value``.

    Args:
        interval: Integration bounds ``(a, b)``.
        f: Scalar integrand.

    Returns:
        float: Best available estimate of the integral.
    """
    return adaptive_quadrature(
        interval,
        f,
        limit=DEFAULT_LIMIT,
        epsrel=DEFAULT_EPSREL,
        epsabs=DEFAULT_EPSABS,
        rule=gauss_kronrod15,
    ).value
