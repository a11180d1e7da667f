"""Explicit Runge-Kutta integration of first-order ODE systems.

A method is described by its Butcher tableau ``(a, b, c)`` with ``s``
stages. One step of width ``h`` from ``(t, x)`` computes

    k_j = f(t + c_j h, x + h * sum_{l<j} a_jl k_l),   j = 0..s-1
    x  <- x + h * sum_j b_j k_j
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Callable, Dict, Sequence, Tuple, Union

import numpy as np

from numkit.errors import InvalidConfiguration


@dataclass(frozen=True)
class ButcherTableau:
    """Coefficients of an explicit Runge-Kutta method.

    Attributes:
        stages: Number of stages ``s``.
        a: ``s x s`` strictly lower-triangular stage matrix.
        b: Length-``s`` weights of the stage derivatives.
        c: Length-``s`` stage nodes.

    Raises:
        InvalidConfiguration: If the shapes disagree with ``stages`` or ``a``
            has entries on or above the diagonal.
    """

    stages: int
    a: Tuple[Tuple[float, ...], ...]
    b: Tuple[float, ...]
    c: Tuple[float, ...]

    def __post_init__(self):
        s = self.stages
        if s < 1:
            raise InvalidConfiguration(f"A tableau needs at least one stage, got {s}.")
        a = np.asarray(self.a, dtype=float)
        if a.shape != (s, s) or len(self.b) != s or len(self.c) != s:
            raise InvalidConfiguration(
                f"Tableau shapes do not match {s} stages: a {a.shape}, "
                f"b {len(self.b)}, c {len(self.c)}."
            )
        if np.any(np.triu(a) != 0.0):
            raise InvalidConfiguration("Explicit tableau needs a strictly lower-triangular a.")


EULER = ButcherTableau(stages=1, a=((0.0,),), b=(1.0,), c=(0.0,))

HEUN = ButcherTableau(
    stages=2,
    a=((0.0, 0.0), (1.0, 0.0)),
    b=(0.5, 0.5),
    c=(0.0, 1.0),
)

RK4 = ButcherTableau(
    stages=4,
    a=(
        (0.0, 0.0, 0.0, 0.0),
        (0.5, 0.0, 0.0, 0.0),
        (0.0, 0.5, 0.0, 0.0),
        (0.0, 0.0, 1.0, 0.0),
    ),
    b=(1.0 / 6.0, 1.0 / 3.0, 1.0 / 3.0, 1.0 / 6.0),
    c=(0.0, 0.5, 0.5, 1.0),
)

PRESETS: Dict[str, ButcherTableau] = {"euler": EULER, "heun": HEUN, "rk4": RK4}


def get_tableau(tableau: Union[str, ButcherTableau]) -> ButcherTableau:
    """Resolve a preset name or pass a tableau through."""
    if isinstance(tableau, ButcherTableau):
        return tableau
    if isinstance(tableau, str):
        try:
            return PRESETS[tableau.lower()]
        except KeyError:
            raise InvalidConfiguration(
                f"Unknown Runge-Kutta method {tableau!r}; expected one of {sorted(PRESETS)}."
            ) from None
    raise InvalidConfiguration(
        f"Expected a preset name or ButcherTableau, got {type(tableau).__name__}."
    )


def runge_kutta(
    tableau: Union[str, ButcherTableau],
    x0: Sequence[float],
    interval: Sequence[float],
    steps: int,
    f: Callable[[float, np.ndarray], Sequence[float]],
) -> np.ndarray:
    """Integrate ``x' = f(t, x)`` with a fixed-step explicit Runge-Kutta method.

    Args:
        tableau: ``"euler"``, ``"heun"``, ``"rk4"`` or a :class:`ButcherTableau`.
        x0: Initial state at ``interval[0]``; never modified.
        interval: ``(t_start, t_end)``.
        steps: Number of steps ``N``; the step width is
            ``(t_end - t_start) / N``.
        f: Right-hand side returning a vector of the same length as ``x0``.

    Returns:
        numpy.ndarray: Array of shape ``(N, dim)``; row ``i`` is the state at
        ``t_start + i h`` recorded before step ``i`` is taken. The state after
        the final step is not included.

    Raises:
        InvalidConfiguration: For unknown presets, malformed tableaux or a
            negative step count.
    """
    bt = get_tableau(tableau)
    steps = int(steps)
    if steps < 0:
        raise InvalidConfiguration(f"steps must be non-negative, got {steps}.")

    x = np.array(x0, dtype=float).ravel()
    dim = len(x)
    result = np.empty((steps, dim))
    if steps == 0:
        return result

    a = np.asarray(bt.a, dtype=float)
    b = np.asarray(bt.b, dtype=float)
    c = np.asarray(bt.c, dtype=float)
    s = bt.stages

    h = (interval[1] - interval[0]) / steps
    t = float(interval[0])

    for i in range(steps):
        result[i] = x
        k = np.zeros((s, dim))
        for j in range(s):
            y = x + h * (a[j, :j] @ k[:j])
            k[j] = np.asarray(f(t + c[j] * h, y), dtype=float)
        x = x + h * (b @ k)
        t += h

    return result
