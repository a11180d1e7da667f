"""Exception and warning taxonomy for the numerical routines.

Structural problems (shapes, configuration) raise immediately. Numerical
non-convergence is reported through result status fields or warnings, as
documented per routine.

All exceptions derive from :class:`ValueError` so callers that already guard
numeric input with ``except ValueError`` keep working.
"""

from __future__ import annotations


class NumericsError(ValueError):
    """Base class for errors raised by :mod:`numkit`."""


class DimensionMismatch(NumericsError):
    """Operand shapes are incompatible (non-square matrix, wrong vector length)."""


class SingularMatrix(NumericsError):
    """A pivot stayed below the working tolerance after elimination."""


class InvalidConfiguration(NumericsError):
    """An option combination or argument type is not supported."""


class ToleranceUnreachable(NumericsError):
    """An adaptive routine could not certify the requested tolerance.

    Attributes:
        result: The best-effort result object computed before giving up.
    """

    def __init__(self, message: str, result=None):
        super().__init__(message)
        self.result = result


class NumericsWarning(UserWarning):
    """Base class for warnings emitted by :mod:`numkit`."""


class NonConvergenceWarning(NumericsWarning):
    """An iteration cap was reached; the returned value is best effort."""


class ToleranceWarning(NumericsWarning):
    """The requested tolerance cannot be reached or was not reached."""
