"""
Path clean-up passes.

Generated routes go through clean_route(). The connector-level passes,
simplify_ortho_points() and enforce_orthogonality(), are also run by hosts
after a user drags a connector's waypoints.
"""

from __future__ import annotations

from typing import Sequence

from ..types import EDIT_TOLERANCE, TOLERANCE, DrawingElement, Point
from .geometry import insert_elbows


def _collinear(a: Point, b: Point, c: Point, tolerance: float) -> bool:
    same_x = abs(a.x - b.x) < tolerance and abs(b.x - c.x) < tolerance
    same_y = abs(a.y - b.y) < tolerance and abs(b.y - c.y) < tolerance
    return same_x or same_y


def dedupe_points(points: Sequence[Point], tolerance: float = TOLERANCE) -> list[Point]:
    """Merge consecutive points that are within ``tolerance`` on both axes."""
    if not points:
        return []
    clean = [points[0]]
    for p in points[1:]:
        last = clean[-1]
        if abs(p.x - last.x) > tolerance or abs(p.y - last.y) > tolerance:
            clean.append(p)
    return clean


def clean_route(points: Sequence[Point], tolerance: float = TOLERANCE) -> list[Point]:
    """
    Tidy a composed route, keeping both endpoints exactly where they are.

    Near-duplicate points are merged first, so tiny jogs between closely
    spaced rulers cannot hide a corner. Collinear points are then dropped
    against the last *kept* point, re-checking after every drop. Any segment
    the merging left diagonal gets an elbow.

    Returns:
        At least two points when given at least two.
    """
    if len(points) < 2:
        return list(points)

    last = points[-1]
    merged = dedupe_points(points[:-1], tolerance)
    tail = merged[-1]
    if len(merged) > 1 and abs(tail.x - last.x) <= tolerance and abs(tail.y - last.y) <= tolerance:
        merged[-1] = last
    else:
        merged.append(last)

    kept: list[Point] = []
    for p in merged:
        while len(kept) >= 2 and _collinear(kept[-2], kept[-1], p, tolerance):
            kept.pop()
        kept.append(p)

    return insert_elbows(kept, tolerance)


def orthogonalize(points: Sequence[Point], tolerance: float = TOLERANCE) -> list[Point]:
    """
    Snap near-diagonal segments to the axis of dominant travel.

    For a segment differing by more than ``tolerance`` on both axes, the
    later point takes the earlier point's coordinate on the axis with the
    smaller delta. Later segments see the already-snapped point.
    """
    result = list(points)
    for i in range(len(result) - 1):
        a, b = result[i], result[i + 1]
        adx = abs(a.x - b.x)
        ady = abs(a.y - b.y)
        if adx > tolerance and ady > tolerance:
            if adx <= ady:
                result[i + 1] = Point(a.x, b.y)
            else:
                result[i + 1] = Point(b.x, a.y)
    return result


def simplify_ortho_points(connector: DrawingElement, tolerance: float = EDIT_TOLERANCE) -> None:
    """
    Remove redundant collinear waypoints from a connector, in place.

    After a removal the previous triple is re-examined, so the result has no
    collinear consecutive triple left and a second pass changes nothing.
    """
    points = connector.points
    if len(points) < 3:
        return
    i = 0
    while i < len(points) - 2:
        if _collinear(points[i], points[i + 1], points[i + 2], tolerance):
            del points[i + 1]
            i = max(0, i - 1)
        else:
            i += 1


def enforce_orthogonality(connector: DrawingElement, tolerance: float = TOLERANCE) -> None:
    """Make every segment of a connector strictly horizontal or vertical, in place."""
    if len(connector.points) < 2:
        return
    connector.points[:] = orthogonalize(connector.points, tolerance)


__all__ = [
    "clean_route",
    "dedupe_points",
    "enforce_orthogonality",
    "orthogonalize",
    "simplify_ortho_points",
]
