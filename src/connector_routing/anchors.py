"""
Anchor model and nearest-anchor lookup.

Anchors are generated on demand at a fixed spatial density (one per grid
unit of edge length, corners included) and never persisted. A connector
stores only a Connection (element id, side, t); resolving it always reads
the live shape so moved or resized shapes are picked up.
"""

from __future__ import annotations

import math
from typing import Optional, Sequence

from .types import GRID, SNAP_RADIUS, AnchorPoint, AnchorSide, Connection, DrawingElement, Point


def _side_segments(el: DrawingElement) -> list[tuple[AnchorSide, float, float, float, float]]:
    """(side, x1, y1, x2, y2) for each edge, in anchor enumeration order."""
    left, top = el.x, el.y
    right, bottom = el.x + el.width, el.y + el.height
    return [
        (AnchorSide.TOP, left, top, right, top),
        (AnchorSide.BOTTOM, left, bottom, right, bottom),
        (AnchorSide.LEFT, left, top, left, bottom),
        (AnchorSide.RIGHT, right, top, right, bottom),
    ]


def get_anchors(element: DrawingElement, grid: float = GRID) -> list[AnchorPoint]:
    """
    Get the anchor points of a shape.

    Each side of length L is split into ``max(1, floor(L / grid))`` equal
    segments, giving one anchor per segment boundary including both corners.
    Sides are enumerated top, bottom, left, right; anchors run left-to-right
    or top-to-bottom along each side.

    Args:
        element: The shape. Connectors, lines, freehand strokes and text have
            no anchors.
        grid: Anchor spacing.

    Returns:
        List of anchors in deterministic order.
    """
    if not element.type.has_anchors():
        return []

    anchors: list[AnchorPoint] = []
    for side, x1, y1, x2, y2 in _side_segments(element):
        length = math.hypot(x2 - x1, y2 - y1)
        count = max(1, math.floor(length / grid))
        for i in range(count + 1):
            t = i / count
            anchors.append(
                AnchorPoint(
                    element_id=element.id,
                    side=side,
                    t=t,
                    x=x1 + (x2 - x1) * t,
                    y=y1 + (y2 - y1) * t,
                )
            )
    return anchors


def anchor_position(element: DrawingElement, side: AnchorSide, t: float) -> Point:
    """World position of the point at fraction ``t`` along one side of a shape."""
    t = min(1.0, max(0.0, t))
    if side == AnchorSide.TOP:
        return Point(element.x + element.width * t, element.y)
    elif side == AnchorSide.BOTTOM:
        return Point(element.x + element.width * t, element.y + element.height)
    elif side == AnchorSide.LEFT:
        return Point(element.x, element.y + element.height * t)
    else:  # RIGHT
        return Point(element.x + element.width, element.y + element.height * t)


def find_element(elements: Sequence[DrawingElement], element_id: Optional[str]) -> Optional[DrawingElement]:
    """First element with the given id, or None."""
    if element_id is None:
        return None
    for el in elements:
        if el.id == element_id:
            return el
    return None


def resolve_anchor(elements: Sequence[DrawingElement], connection: Connection) -> Optional[Point]:
    """
    Resolve a connection to world coordinates against the live shape.

    Returns:
        The anchor position, or None if the referenced shape no longer exists.
        Callers keep the connector's own stored endpoint in that case.
    """
    el = find_element(elements, connection.element_id)
    if el is None:
        return None
    return anchor_position(el, connection.side, connection.t)


def find_nearest_anchor(
    elements: Sequence[DrawingElement],
    x: float,
    y: float,
    exclude_id: Optional[str] = None,
    snap_radius: float = SNAP_RADIUS,
    grid: float = GRID,
) -> Optional[AnchorPoint]:
    """
    Find the anchor closest to (x, y) within the snap radius.

    Shapes whose box, grown by the current best distance plus 10, cannot
    contain the point are skipped before any anchor is generated.

    Args:
        elements: Candidate shapes (other element kinds contribute nothing).
        x: Cursor x in world space.
        y: Cursor y in world space.
        exclude_id: Element to ignore (typically the connector being edited).
        snap_radius: Anchors at or beyond this distance never match.
        grid: Anchor spacing.

    Returns:
        The closest anchor strictly inside the snap radius; the first one
        enumerated wins ties. None if nothing qualifies.
    """
    best: Optional[AnchorPoint] = None
    best_dist = snap_radius

    for el in elements:
        if el.id == exclude_id:
            continue
        margin = best_dist + 10
        if (
            x < el.x - margin
            or x > el.x + el.width + margin
            or y < el.y - margin
            or y > el.y + el.height + margin
        ):
            continue
        for anchor in get_anchors(el, grid):
            d = math.hypot(x - anchor.x, y - anchor.y)
            if d < best_dist:
                best_dist = d
                best = anchor

    return best


__all__ = [
    "anchor_position",
    "find_element",
    "find_nearest_anchor",
    "get_anchors",
    "resolve_anchor",
]
