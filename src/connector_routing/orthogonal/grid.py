"""
Ruler, boundary and spot construction for orthogonal routing.

Instead of a uniform grid, candidate lines ("rulers") are derived from the
inflated obstacle edges and the antenna positions, so the search space stays
small regardless of canvas scale. Midpoints between adjacent rulers keep open
regions between obstacles connected.

All coordinates are in the connector's local space (origin = start point).
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Iterable, Optional, Sequence

from ..types import GRID, AnchorSide, Point, Rect
from .geometry import KEY_SCALE, coord_key, spot_key

# Spots closer than this to a true obstacle are discarded
SPOT_CLEARANCE = 1.0


@dataclass
class RoutingGrid:
    """
    Sparse search space for one connector.

    Attributes:
        origin: Connector start (always (0, 0))
        destination: Connector end
        antenna_start: Start point extruded outward from the start side
        antenna_end: End point extruded outward from the end side
        obstacles: True (non-inflated) obstacle rects
        inflated: Obstacle rects grown by the routing margin
        vertical: Sorted unique x coordinates of vertical rulers
        horizontal: Sorted unique y coordinates of horizontal rulers
        bounds: Search space boundary
        spots: Candidate waypoints, deduplicated
    """

    origin: Point
    destination: Point
    antenna_start: Point
    antenna_end: Point
    obstacles: list[Rect] = field(default_factory=list)
    inflated: list[Rect] = field(default_factory=list)
    vertical: list[float] = field(default_factory=list)
    horizontal: list[float] = field(default_factory=list)
    bounds: Rect = field(default_factory=lambda: Rect(0.0, 0.0, 0.0, 0.0))
    spots: list[Point] = field(default_factory=list)


def antenna_point(anchor: Point, side: Optional[AnchorSide], margin: float) -> Point:
    """Extrude an endpoint outward from its side by ``margin`` (unchanged if no side)."""
    if side is None:
        return anchor
    offset = side.outward(margin)
    return Point(anchor.x + offset.x, anchor.y + offset.y)


def unique_sorted(values: Iterable[float]) -> list[float]:
    """Round to 1/100 unit, deduplicate and sort."""
    return sorted({coord_key(v) / KEY_SCALE for v in values})


def build_rulers(
    inflated: Sequence[Rect],
    antennas: Sequence[tuple[Point, Optional[AnchorSide]]],
) -> tuple[list[float], list[float]]:
    """
    Collect vertical (x) and horizontal (y) rulers.

    Every inflated obstacle contributes its four edges. An antenna leaving a
    horizontal edge (top/bottom) contributes its x as a vertical ruler,
    otherwise its y as a horizontal ruler.

    Returns:
        (vertical, horizontal) sorted unique coordinates
    """
    vertical: list[float] = []
    horizontal: list[float] = []

    for obs in inflated:
        vertical.extend((obs.left, obs.right))
        horizontal.extend((obs.top, obs.bottom))

    for antenna, side in antennas:
        if side is not None and side.is_horizontal():
            vertical.append(antenna.x)
        else:
            horizontal.append(antenna.y)

    return unique_sorted(vertical), unique_sorted(horizontal)


def search_bounds(
    points: Sequence[Point],
    vertical: Sequence[float],
    horizontal: Sequence[float],
    margin: float,
) -> Rect:
    """Union box of the given points and rulers, grown by ``margin``."""
    xs = [p.x for p in points] + list(vertical)
    ys = [p.y for p in points] + list(horizontal)
    left, top = min(xs) - margin, min(ys) - margin
    right, bottom = max(xs) + margin, max(ys) + margin
    return Rect(left, top, right - left, bottom - top)


def _midpoints(values: Sequence[float]) -> list[float]:
    return [(values[i] + values[i + 1]) / 2 for i in range(len(values) - 1)]


def generate_spots(
    vertical: Sequence[float],
    horizontal: Sequence[float],
    bounds: Rect,
    antennas: Sequence[Point],
    obstacles: Sequence[Rect],
) -> list[Point]:
    """
    Materialise candidate waypoints.

    Spots are every intersection of (boundary + rulers) in both axes, the
    midpoints between adjacent lines (pure-axis and cross midpoints), and the
    antennas. Spots within SPOT_CLEARANCE of a true obstacle are dropped and
    the rest deduplicated by integer key, keeping first-seen order.
    """
    cell_xs = [bounds.left, *vertical, bounds.right]
    cell_ys = [bounds.top, *horizontal, bounds.bottom]
    mid_xs = _midpoints(cell_xs)
    mid_ys = _midpoints(cell_ys)

    raw: list[Point] = [Point(x, y) for x in cell_xs for y in cell_ys]
    for mx in mid_xs:
        raw.extend(Point(mx, y) for y in cell_ys)
        raw.extend(Point(mx, my) for my in mid_ys)
    for my in mid_ys:
        raw.extend(Point(x, my) for x in cell_xs)
    raw.extend(antennas)

    seen: set[tuple[int, int]] = set()
    spots: list[Point] = []
    for p in raw:
        if any(obs.contains(p, SPOT_CLEARANCE) for obs in obstacles):
            continue
        key = spot_key(p)
        if key in seen:
            continue
        seen.add(key)
        spots.append(p)
    return spots


def build_routing_grid(
    dx: float,
    dy: float,
    start_side: Optional[AnchorSide],
    end_side: Optional[AnchorSide],
    start_rect: Optional[Rect] = None,
    end_rect: Optional[Rect] = None,
    obstacles: Sequence[Rect] = (),
    margin: float = GRID,
) -> RoutingGrid:
    """
    Build the full search space for a connector from (0, 0) to (dx, dy).

    Args:
        dx: End x relative to the start.
        dy: End y relative to the start.
        start_side: Side the connector leaves the start shape from.
        end_side: Side the connector enters the end shape through.
        start_rect: Start shape body in local space.
        end_rect: End shape body in local space.
        obstacles: Further shape bodies to avoid, in local space.
        margin: Antenna length and obstacle clearance.

    Returns:
        RoutingGrid with rulers, bounds and spots populated.
    """
    origin = Point(0.0, 0.0)
    destination = Point(float(dx), float(dy))
    antenna_start = antenna_point(origin, start_side, margin)
    antenna_end = antenna_point(destination, end_side, margin)

    true_rects = [r for r in (start_rect, end_rect) if r is not None]
    true_rects.extend(obstacles)
    inflated = [r.inflate(margin) for r in true_rects]

    vertical, horizontal = build_rulers(
        inflated, [(antenna_start, start_side), (antenna_end, end_side)]
    )
    bounds = search_bounds(
        [origin, destination, antenna_start, antenna_end], vertical, horizontal, margin
    )
    spots = generate_spots(vertical, horizontal, bounds, [antenna_start, antenna_end], true_rects)

    return RoutingGrid(
        origin=origin,
        destination=destination,
        antenna_start=antenna_start,
        antenna_end=antenna_end,
        obstacles=true_rects,
        inflated=inflated,
        vertical=vertical,
        horizontal=horizontal,
        bounds=bounds,
        spots=spots,
    )


__all__ = [
    "SPOT_CLEARANCE",
    "RoutingGrid",
    "antenna_point",
    "build_routing_grid",
    "build_rulers",
    "generate_spots",
    "search_bounds",
    "unique_sorted",
]
