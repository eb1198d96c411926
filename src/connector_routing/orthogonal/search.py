"""
Spot graph construction and bend-penalised shortest-path search.

Each spot is linked only to its immediate neighbour in the same column and
row, which bounds the graph to O(spots) edges. Edges crossing a true obstacle
interior are omitted. Dijkstra then runs from the start antenna to the end
antenna, charging Manhattan length plus ``(w + 1) ** 2`` whenever the route
changes direction onto an edge of length ``w``.
"""

from __future__ import annotations

import heapq
from collections import defaultdict
from dataclasses import dataclass, field
from enum import Enum
from typing import NamedTuple, Optional, Sequence

from ..types import Point, Rect
from .geometry import SpotKey, coord_key, is_blocked, spot_key

_INF = float("inf")


class Direction(Enum):
    """Axis of travel along a graph edge."""

    HORIZONTAL = "h"
    VERTICAL = "v"


class GraphEdge(NamedTuple):
    """Directed half of an undirected spot-graph edge."""

    to: SpotKey
    weight: float
    direction: Direction


@dataclass
class SpotGraph:
    """
    Sparse orthogonal visibility graph over routing spots.

    Attributes:
        positions: Spot key -> point
        adjacency: Spot key -> outgoing edges (columns first, then rows)
    """

    positions: dict[SpotKey, Point] = field(default_factory=dict)
    adjacency: dict[SpotKey, list[GraphEdge]] = field(default_factory=dict)

    @property
    def edge_count(self) -> int:
        """Number of undirected edges."""
        return sum(len(edges) for edges in self.adjacency.values()) // 2

    def __contains__(self, p: Point) -> bool:
        return spot_key(p) in self.positions

    def neighbors(self, p: Point) -> list[Point]:
        """Points directly reachable from ``p``."""
        return [self.positions[e.to] for e in self.adjacency.get(spot_key(p), [])]


def _link(graph: SpotGraph, a: Point, b: Point, weight: float, direction: Direction) -> None:
    ka, kb = spot_key(a), spot_key(b)
    graph.adjacency[ka].append(GraphEdge(kb, weight, direction))
    graph.adjacency[kb].append(GraphEdge(ka, weight, direction))


def build_spot_graph(spots: Sequence[Point], obstacles: Sequence[Rect]) -> SpotGraph:
    """
    Connect co-linear spots to their immediate neighbours.

    Args:
        spots: Deduplicated routing spots.
        obstacles: True obstacle rects; edges crossing their interior are
            left out.

    Returns:
        SpotGraph over the given spots.
    """
    graph = SpotGraph()
    columns: dict[int, list[Point]] = defaultdict(list)
    rows: dict[int, list[Point]] = defaultdict(list)

    for s in spots:
        key = spot_key(s)
        graph.positions[key] = s
        graph.adjacency[key] = []
        columns[coord_key(s.x)].append(s)
        rows[coord_key(s.y)].append(s)

    for column in columns.values():
        column.sort(key=lambda p: p.y)
        for a, b in zip(column, column[1:]):
            if is_blocked(a, b, obstacles):
                continue
            _link(graph, a, b, abs(b.y - a.y), Direction.VERTICAL)

    for row in rows.values():
        row.sort(key=lambda p: p.x)
        for a, b in zip(row, row[1:]):
            if is_blocked(a, b, obstacles):
                continue
            _link(graph, a, b, abs(b.x - a.x), Direction.HORIZONTAL)

    return graph


def bend_penalty(arrived: Optional[Direction], leaving: Direction, weight: float) -> float:
    """Extra cost of turning from ``arrived`` onto an edge of length ``weight``."""
    if arrived is None or arrived == leaving:
        return 0.0
    return (weight + 1) ** 2


def shortest_route(graph: SpotGraph, source: Point, target: Point) -> Optional[list[Point]]:
    """
    Lowest-cost route from ``source`` to ``target`` with bend penalty.

    Frontier ties (equal tentative cost) are broken by insertion order, so
    identical inputs always yield the identical route.

    Returns:
        Waypoints from source to target inclusive, or None if either point is
        not a spot or the target is unreachable.
    """
    src, dst = spot_key(source), spot_key(target)
    if src not in graph.positions or dst not in graph.positions:
        return None

    dist: dict[SpotKey, float] = {src: 0.0}
    prev: dict[SpotKey, SpotKey] = {}
    arrived: dict[SpotKey, Optional[Direction]] = {src: None}
    visited: set[SpotKey] = set()

    # (cost, insertion counter, key)
    counter = 0
    heap: list[tuple[float, int, SpotKey]] = [(0.0, counter, src)]

    while heap:
        d, _, u = heapq.heappop(heap)
        if u in visited:
            continue
        visited.add(u)
        if u == dst:
            break

        for edge in graph.adjacency[u]:
            v = edge.to
            if v in visited:
                continue
            nd = d + edge.weight + bend_penalty(arrived[u], edge.direction, edge.weight)
            if nd < dist.get(v, _INF):
                dist[v] = nd
                prev[v] = u
                arrived[v] = edge.direction
                counter += 1
                heapq.heappush(heap, (nd, counter, v))

    if dst not in visited:
        return None

    path: list[Point] = []
    k: Optional[SpotKey] = dst
    while k is not None:
        path.append(graph.positions[k])
        k = prev.get(k)
    path.reverse()
    return path


__all__ = [
    "Direction",
    "GraphEdge",
    "SpotGraph",
    "bend_penalty",
    "build_spot_graph",
    "shortest_route",
]
