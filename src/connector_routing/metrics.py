"""
Route quality metrics.

Provides quantitative measures of routed connectors:
- Bend count: Number of direction changes
- Route length: Total Manhattan length of the polyline
- Orthogonality: Whether every segment is axis-aligned
- Obstacle crossings: Segments passing through a shape body

All metrics work on plain point sequences, so they apply equally to freshly
computed routes and to connectors edited by hand.
"""

from __future__ import annotations

from typing import Any, Optional, Sequence

import numpy as np

from .orthogonal.geometry import segment_crosses_rect
from .types import TOLERANCE, Point, Rect


def _as_points(points: Sequence[Sequence[float]]) -> list[Point]:
    return [Point(float(p[0]), float(p[1])) for p in points]


def bend_count(points: Sequence[Sequence[float]], tolerance: float = TOLERANCE) -> int:
    """
    Count direction changes along a polyline.

    Zero-length segments are ignored; a reversal on the same axis is not a
    bend.

    Args:
        points: Polyline vertices
        tolerance: Deltas below this count as zero

    Returns:
        Number of bends
    """
    pts = _as_points(points)
    bends = 0
    previous: Optional[str] = None
    for a, b in zip(pts, pts[1:]):
        horizontal = abs(a.y - b.y) < tolerance
        vertical = abs(a.x - b.x) < tolerance
        if horizontal and vertical:
            continue
        axis = "h" if horizontal else "v" if vertical else "d"
        if previous is not None and axis != previous:
            bends += 1
        previous = axis
    return bends


def route_length(points: Sequence[Sequence[float]]) -> float:
    """Total Manhattan length of a polyline."""
    if len(points) < 2:
        return 0.0
    arr = np.asarray(points, dtype=float)
    return float(np.abs(np.diff(arr, axis=0)).sum())


def is_orthogonal(points: Sequence[Sequence[float]], tolerance: float = TOLERANCE) -> bool:
    """Check that every segment differs by less than ``tolerance`` on at least one axis."""
    if len(points) < 2:
        return True
    deltas = np.abs(np.diff(np.asarray(points, dtype=float), axis=0))
    return bool(np.all(deltas.min(axis=1) < tolerance))


def crossed_obstacles(
    points: Sequence[Sequence[float]],
    obstacles: Sequence[Rect],
) -> list[int]:
    """
    Indices of obstacles whose interior some segment passes through.

    Time Complexity: O(s * r) for s segments and r rects
    """
    pts = _as_points(points)
    crossed: list[int] = []
    for i, rect in enumerate(obstacles):
        if any(segment_crosses_rect(a, b, rect) for a, b in zip(pts, pts[1:])):
            crossed.append(i)
    return crossed


def route_quality_summary(
    routes: Sequence[Sequence[Sequence[float]]],
    obstacles: Optional[Sequence[Sequence[Rect]]] = None,
) -> dict[str, Any]:
    """
    Aggregate quality statistics over several routes.

    Args:
        routes: Polylines to evaluate
        obstacles: Optional per-route obstacle lists, aligned with ``routes``

    Returns:
        Dictionary with count, mean/max bends, mean/max length, the fraction
        of orthogonal routes and the total number of obstacle crossings.
    """
    if not routes:
        return {
            "count": 0,
            "mean_bends": 0.0,
            "max_bends": 0,
            "mean_length": 0.0,
            "max_length": 0.0,
            "orthogonal_fraction": 1.0,
            "crossings": 0,
        }

    bends = np.array([bend_count(r) for r in routes], dtype=int)
    lengths = np.array([route_length(r) for r in routes], dtype=float)
    orthogonal = np.array([is_orthogonal(r) for r in routes], dtype=bool)

    crossings = 0
    if obstacles is not None:
        for route, rects in zip(routes, obstacles):
            crossings += len(crossed_obstacles(route, rects))

    return {
        "count": len(routes),
        "mean_bends": float(bends.mean()),
        "max_bends": int(bends.max()),
        "mean_length": float(lengths.mean()),
        "max_length": float(lengths.max()),
        "orthogonal_fraction": float(orthogonal.mean()),
        "crossings": crossings,
    }


__all__ = [
    "bend_count",
    "crossed_obstacles",
    "is_orthogonal",
    "route_length",
    "route_quality_summary",
]
