"""
Orthogonal connector routing.

Pipeline: rulers -> spots -> spot graph -> Dijkstra with bend penalty ->
simplify. Inputs and output are in the connector's local coordinate space,
whose origin is the connector start.
"""

from __future__ import annotations

import logging
from typing import Optional, Sequence

from ..types import GRID, TOLERANCE, AnchorSide, Point, Rect, SideLike
from .geometry import insert_elbows
from .grid import build_routing_grid
from .search import build_spot_graph, shortest_route
from .simplify import clean_route

logger = logging.getLogger(__name__)


def _parse_side(side: Optional[SideLike]) -> Optional[AnchorSide]:
    return None if side is None else AnchorSide.parse(side)


def compute_ortho_route(
    dx: float,
    dy: float,
    start_side: Optional[SideLike] = None,
    end_side: Optional[SideLike] = None,
    start_rect: Optional[Rect] = None,
    end_rect: Optional[Rect] = None,
    obstacles: Sequence[Rect] = (),
    margin: float = GRID,
) -> list[Point]:
    """
    Route an orthogonal connector from (0, 0) to (dx, dy).

    The route leaves the start shape perpendicular to ``start_side`` and
    enters the end shape perpendicular to ``end_side``, never crosses the
    interior of any given rect, and prefers fewer bends.

    Args:
        dx: End x relative to the start.
        dy: End y relative to the start.
        start_side: Side of the start shape the connector is attached to.
        end_side: Side of the end shape the connector is attached to.
        start_rect: Start shape body, relative to the start point.
        end_rect: End shape body, relative to the start point.
        obstacles: Further bodies to route around, relative to the start point.
        margin: Antenna length and obstacle clearance (the grid unit).

    Returns:
        At least two points joined by axis-aligned segments, the first always
        (0, 0) and the last always (dx, dy). Without any side
        information the fixed two-bend path [(0, 0), (dx, 0), (dx, dy)] is
        returned.
    """
    start = _parse_side(start_side)
    end = _parse_side(end_side)

    if start is None and end is None:
        return [Point(0.0, 0.0), Point(float(dx), 0.0), Point(float(dx), float(dy))]

    grid = build_routing_grid(dx, dy, start, end, start_rect, end_rect, obstacles, margin)
    graph = build_spot_graph(grid.spots, grid.obstacles)
    path = shortest_route(graph, grid.antenna_start, grid.antenna_end)

    if path is None:
        logger.debug(
            "No spot route between antennas %s and %s (%d spots); using direct segment",
            grid.antenna_start,
            grid.antenna_end,
            len(grid.spots),
        )
        path = [grid.antenna_start, grid.antenna_end]

    full = insert_elbows([grid.origin, *path, grid.destination], TOLERANCE)
    return clean_route(full, TOLERANCE)


__all__ = ["compute_ortho_route"]
