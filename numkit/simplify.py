"""Polyline simplification with the Ramer-Douglas-Peucker algorithm.

A segment ``i..j`` is kept as a straight line when no point between its end
points lies farther than ``eps`` from it; otherwise it is split at the
farthest point and both halves are processed. The distance of a point to the
segment is measured to the orthogonal projection clamped onto the segment,
so points beyond either end are measured to that end point.

Polylines may contain NaN points as gap markers between disconnected pieces.
Leading and trailing gap markers are dropped. An interior run of them is
collapsed to a single marker and each piece is simplified separately.
"""

from __future__ import annotations

import math
from typing import List, Sequence, Tuple

import numpy as np

from numkit.constants import EPS, is_nan_pair
from numkit.points import PointLike, coordinates


def _is_gap(coords: np.ndarray, k: int) -> bool:
    return is_nan_pair(coords[k, 0], coords[k, 1])


def _find_split(coords: np.ndarray, i: int, j: int) -> Tuple[float, int]:
    """Return ``(distance, index)`` of the point farthest from segment ``i..j``.

    The distance is NaN when a gap marker lies between ``i`` and ``j``; the
    index is then that of the first marker.
    """
    if j - i < 2:
        return -1.0, i

    ci = coords[i]
    cj = coords[j]
    x1 = cj[0] - ci[0]
    y1 = cj[1] - ci[1]
    den = x1 * x1 + y1 * y1

    dist = 0.0
    split = i
    for k in range(i + 1, j):
        if _is_gap(coords, k):
            return math.nan, k

        x0 = coords[k, 0] - ci[0]
        y0 = coords[k, 1] - ci[1]
        if den >= EPS:
            lbda = min(max((x0 * x1 + y0 * y1) / den, 0.0), 1.0)
            x0 -= lbda * x1
            y0 -= lbda * y1
        d = x0 * x0 + y0 * y0

        if d > dist:
            dist = d
            split = k
    return math.sqrt(dist), split


def simplify_indices(coords: np.ndarray, eps: float) -> List[int]:
    """Return the indices of the points kept by the simplification.

    Args:
        coords: ``(n, 2)`` coordinate array; NaN rows mark gaps.
        eps: Distance tolerance.

    Returns:
        list[int]: Increasing indices into ``coords``.
    """
    coords = np.asarray(coords, dtype=float).reshape(-1, 2)
    n = len(coords)

    first = 0
    while first < n and _is_gap(coords, first):
        first += 1
    last = n - 1
    while last > first and _is_gap(coords, last):
        last -= 1
    if first >= n:
        return []

    kept = [first]
    # Work items are ("segment", i, j) or ("keep", k); popped in list order.
    stack = [("segment", first, last)]
    while stack:
        item = stack.pop()
        if item[0] == "keep":
            kept.append(item[1])
            continue

        _, i, j = item
        dist, k = _find_split(coords, i, j)

        if math.isnan(dist):
            resume = k + 1
            while resume <= j and _is_gap(coords, resume):
                resume += 1
            todo = []
            if k - 1 > i:
                todo.append(("segment", i, k - 1))
            todo.append(("keep", k))
            todo.append(("keep", resume))
            if resume < j:
                todo.append(("segment", resume, j))
            stack.extend(reversed(todo))
        elif dist > eps and i < k < j:
            stack.append(("segment", k, j))
            stack.append(("segment", i, k))
        elif j > i:
            kept.append(j)

    return kept


def simplify(points: Sequence[PointLike], eps: float) -> List[PointLike]:
    """Simplify a polyline given as point objects.

    Args:
        points: Polyline vertices; NaN coordinates mark gaps.
        eps: Distance tolerance in the points' coordinate units.

    Returns:
        list: The retained original point objects, in input order. The first
        and last non-gap points are always retained.

    Example:
        >>> from numkit.points import points_from_xy
        >>> pts = points_from_xy([0, 1, 2], [0, 0.01, 0])
        >>> [p.x for p in simplify(pts, 0.1)]
        [0.0, 2.0]
    """
    return [points[k] for k in simplify_indices(coordinates(points), eps)]


def simplify_array(coords, eps: float) -> np.ndarray:
    """Simplify a polyline given as an ``(n, 2)`` coordinate array."""
    coords = np.asarray(coords, dtype=float).reshape(-1, 2)
    return coords[simplify_indices(coords, eps)]
