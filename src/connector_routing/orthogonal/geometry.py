"""Geometric primitives shared by the orthogonal routing pipeline."""

from __future__ import annotations

from typing import Sequence

from ..types import TOLERANCE, Point, Rect

# Fixed-precision scale for spot keys: coordinates are compared at 1/100 unit.
KEY_SCALE = 100

SpotKey = tuple[int, int]


def coord_key(value: float) -> int:
    """Integer key of a single coordinate."""
    return round(value * KEY_SCALE)


def spot_key(p: Point) -> SpotKey:
    """Exact, hashable integer key of a point."""
    return (coord_key(p.x), coord_key(p.y))


def segment_crosses_rect(a: Point, b: Point, rect: Rect) -> bool:
    """
    Check if an axis-aligned segment passes strictly through a rect interior.

    Running along an edge or touching a corner does not count. Diagonal
    segments are never reported as crossing.
    """
    if abs(a.y - b.y) < TOLERANCE:
        # Horizontal segment
        y = a.y
        if y <= rect.top or y >= rect.bottom:
            return False
        return min(a.x, b.x) < rect.right and max(a.x, b.x) > rect.left
    if abs(a.x - b.x) < TOLERANCE:
        # Vertical segment
        x = a.x
        if x <= rect.left or x >= rect.right:
            return False
        return min(a.y, b.y) < rect.bottom and max(a.y, b.y) > rect.top
    return False


def is_blocked(a: Point, b: Point, rects: Sequence[Rect]) -> bool:
    """Check if a segment crosses any of the given rects."""
    return any(segment_crosses_rect(a, b, r) for r in rects)


def insert_elbows(points: Sequence[Point], tolerance: float = TOLERANCE) -> list[Point]:
    """
    Replace every diagonal segment by an L-shaped pair (vertical leg first).

    A segment is diagonal when it moves at least ``tolerance`` on both axes.
    Endpoints are never moved.
    """
    if not points:
        return []
    fixed: list[Point] = [points[0]]
    for p in points[1:]:
        prev = fixed[-1]
        if abs(prev.x - p.x) >= tolerance and abs(prev.y - p.y) >= tolerance:
            fixed.append(Point(prev.x, p.y))
        fixed.append(p)
    return fixed


__all__ = [
    "KEY_SCALE",
    "SpotKey",
    "coord_key",
    "insert_elbows",
    "is_blocked",
    "segment_crosses_rect",
    "spot_key",
]
