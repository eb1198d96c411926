"""
Connection lifecycle and re-routing of attached connectors.

These functions are the only mutators of connector geometry: they rewrite a
connector's ``points``, ``x``, ``y``, ``width``, ``height`` and connection
fields, and only ever read shape elements. Every re-route is a full rebuild,
since a moved obstacle can invalidate any part of a previously valid path.
"""

from __future__ import annotations

import logging
from typing import Literal, Optional, Sequence

from .anchors import find_element, resolve_anchor
from .orthogonal.routing import compute_ortho_route
from .orthogonal.simplify import enforce_orthogonality
from .types import GRID, AnchorPoint, Connection, DrawingElement, Point, Rect, snap

logger = logging.getLogger(__name__)

Endpoint = Literal["start", "end"]


def shape_elements(elements: Sequence[DrawingElement]) -> list[DrawingElement]:
    """All non-connector elements."""
    return [el for el in elements if not el.is_arrow]


def connector_obstacle_rect(
    shapes: Sequence[DrawingElement],
    element_id: Optional[str],
    origin: Point,
) -> Optional[Rect]:
    """
    Body of a shape as an obstacle in a connector's local space.

    Returns:
        The shape rect translated by ``-origin``, or None if no such shape.
    """
    shape = find_element(shapes, element_id)
    if shape is None:
        return None
    return shape.rect.translate(-origin.x, -origin.y)


def _endpoint_position(
    elements: Sequence[DrawingElement],
    connector: DrawingElement,
    connection: Optional[Connection],
    fallback: Point,
) -> Point:
    if connection is None:
        return fallback
    resolved = resolve_anchor(elements, connection)
    if resolved is None:
        logger.debug(
            "Connector %s: %r no longer exists, keeping endpoint %s",
            connector.id,
            connection.element_id,
            fallback,
        )
        return fallback
    return resolved


def _resolve_optional(
    elements: Sequence[DrawingElement],
    connection: Optional[Connection],
) -> Optional[Point]:
    return resolve_anchor(elements, connection) if connection is not None else None


def _update_extent(connector: DrawingElement) -> None:
    last = connector.points[-1] if connector.points else Point(0.0, 0.0)
    connector.width = abs(last.x)
    connector.height = abs(last.y)


def reroute_connector(
    elements: Sequence[DrawingElement],
    connector: DrawingElement,
    shapes: Optional[Sequence[DrawingElement]] = None,
    avoid_all_shapes: bool = False,
    grid: float = GRID,
) -> bool:
    """
    Rebuild one connector's geometry from its current connections.

    Connected endpoints move to their live anchors; an endpoint whose shape
    is gone keeps its previous absolute position. The connector origin moves
    to the start point. Orthogonal connectors are fully re-routed around the
    connected shapes (and every other shape when ``avoid_all_shapes``);
    straight arrows just get their first and last points moved.

    Args:
        elements: All canvas elements.
        connector: Connector to rebuild, mutated in place.
        shapes: Pre-filtered non-connector elements, to share across calls.
        avoid_all_shapes: Also route around unconnected shapes.
        grid: Routing margin.

    Returns:
        False if the connector has fewer than two points and was left alone.
    """
    points = connector.points
    if len(points) < 2:
        return False
    if shapes is None:
        shapes = shape_elements(elements)

    first, last = points[0], points[-1]
    abs_start = _endpoint_position(
        elements,
        connector,
        connector.start_connection,
        Point(connector.x + first.x, connector.y + first.y),
    )
    abs_end = _endpoint_position(
        elements,
        connector,
        connector.end_connection,
        Point(connector.x + last.x, connector.y + last.y),
    )

    connector.x = abs_start.x
    connector.y = abs_start.y
    dx = abs_end.x - abs_start.x
    dy = abs_end.y - abs_start.y

    if connector.is_ortho:
        start_conn = connector.start_connection
        end_conn = connector.end_connection
        start_id = start_conn.element_id if start_conn else None
        end_id = end_conn.element_id if end_conn else None

        obstacles: list[Rect] = []
        if avoid_all_shapes:
            obstacles = [
                s.rect.translate(-abs_start.x, -abs_start.y)
                for s in shapes
                if s.type.has_anchors() and s.id not in (start_id, end_id)
            ]

        connector.points = compute_ortho_route(
            dx,
            dy,
            start_conn.side if start_conn else None,
            end_conn.side if end_conn else None,
            connector_obstacle_rect(shapes, start_id, abs_start),
            connector_obstacle_rect(shapes, end_id, abs_start),
            obstacles=obstacles,
            margin=grid,
        )
        enforce_orthogonality(connector)
    else:
        points[0] = Point(0.0, 0.0)
        points[-1] = Point(dx, dy)

    _update_extent(connector)
    return True


def update_connected_arrows(
    elements: Sequence[DrawingElement],
    moved_element_id: str,
    avoid_all_shapes: bool = False,
    grid: float = GRID,
) -> list[DrawingElement]:
    """
    Re-route every connector attached to a moved or resized shape.

    Args:
        elements: All canvas elements; only connectors are mutated.
        moved_element_id: Id of the shape that changed.
        avoid_all_shapes: Also route around unconnected shapes.
        grid: Routing margin.

    Returns:
        The connectors that were rebuilt, in element order.
    """
    shapes = shape_elements(elements)
    updated: list[DrawingElement] = []

    for el in elements:
        if not el.is_arrow:
            continue
        attached = {
            conn.element_id for conn in (el.start_connection, el.end_connection) if conn is not None
        }
        if moved_element_id not in attached:
            continue
        if reroute_connector(elements, el, shapes, avoid_all_shapes=avoid_all_shapes, grid=grid):
            updated.append(el)

    return updated


def connect_endpoint(
    connector: DrawingElement,
    end: Endpoint,
    anchor: Optional[AnchorPoint],
) -> None:
    """Attach one end of a connector to an anchor, or detach it with None."""
    connection = anchor.to_connection() if anchor is not None else None
    if end == "start":
        connector.start_connection = connection
    elif end == "end":
        connector.end_connection = connection
    else:
        raise ValueError(f"end must be 'start' or 'end', got {end!r}")


def detach_connections(
    elements: Sequence[DrawingElement],
    deleted_id: str,
) -> list[DrawingElement]:
    """
    Clear every connection referencing a deleted shape.

    Connector geometry is untouched, so each detached end stays at its last
    absolute position.

    Returns:
        The connectors that lost at least one connection.
    """
    detached: list[DrawingElement] = []
    for el in elements:
        changed = False
        if el.start_connection is not None and el.start_connection.element_id == deleted_id:
            el.start_connection = None
            changed = True
        if el.end_connection is not None and el.end_connection.element_id == deleted_id:
            el.end_connection = None
            changed = True
        if changed:
            detached.append(el)
    return detached


def snap_connector_to_grid(
    elements: Sequence[DrawingElement],
    connector: DrawingElement,
    grid: float = GRID,
) -> None:
    """
    Snap a hand-edited connector back onto the grid, keeping its connections.

    Interior waypoints snap to the grid in world space. The start moves to
    its live anchor, or to the nearest grid point when unconnected, and the
    connector origin follows it so ``points[0]`` stays (0, 0). A connected
    end is pinned to its anchor; a free end snaps to the grid.
    """
    points = connector.points
    if len(points) < 2:
        return

    ox, oy = connector.x, connector.y
    for i in range(1, len(points) - 1):
        p = points[i]
        points[i] = Point(snap(p.x + ox, grid) - ox, snap(p.y + oy, grid) - oy)

    start = _resolve_optional(elements, connector.start_connection)
    if start is None:
        p = points[0]
        start = Point(snap(p.x + ox, grid), snap(p.y + oy, grid))
    shift_x, shift_y = start.x - ox, start.y - oy
    points[:] = [Point(p.x - shift_x, p.y - shift_y) for p in points]
    connector.x, connector.y = start.x, start.y
    points[0] = Point(0.0, 0.0)

    end = _resolve_optional(elements, connector.end_connection)
    if end is not None:
        points[-1] = Point(end.x - connector.x, end.y - connector.y)
    else:
        p = points[-1]
        points[-1] = Point(
            snap(p.x + connector.x, grid) - connector.x,
            snap(p.y + connector.y, grid) - connector.y,
        )
    _update_extent(connector)


__all__ = [
    "Endpoint",
    "connect_endpoint",
    "connector_obstacle_rect",
    "detach_connections",
    "reroute_connector",
    "shape_elements",
    "snap_connector_to_grid",
    "update_connected_arrows",
]
