"""Lazy coefficient cache shared by the interpolation evaluators."""

from __future__ import annotations


class CachedEvaluator:
    """Base class for evaluators whose coefficients derive from their inputs.

    Subclasses implement :meth:`_build`, which reads the current inputs
    (point coordinates, tension, degree) and stores whatever coefficients the
    evaluation needs. The build runs on first use and is reused afterwards;
    moving an input point has no effect until :meth:`invalidate` (lazy) or
    :meth:`recompute` (eager) is called.
    """

    def __init__(self) -> None:
        self._valid = False

    def invalidate(self) -> None:
        """Mark the cache stale; the next evaluation rebuilds it."""
        self._valid = False

    def recompute(self) -> None:
        """Rebuild the cache from the current inputs now."""
        self._build()
        self._valid = True

    def _ensure(self) -> None:
        if not self._valid:
            self.recompute()

    def _build(self) -> None:
        raise NotImplementedError
