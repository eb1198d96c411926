"""
Orthogonal connector routing.

Routes connectors between two shapes using only horizontal and vertical
segments, leaving and entering each shape perpendicular to its edge:

- grid: rulers, search bounds and candidate spots
- search: spot graph and Dijkstra with bend penalty
- simplify: collinear removal, dedup and orthogonality enforcement
- routing: compute_ortho_route, composing the above
"""

from .geometry import (
    insert_elbows,
    is_blocked,
    segment_crosses_rect,
    spot_key,
)
from .grid import (
    RoutingGrid,
    antenna_point,
    build_routing_grid,
    build_rulers,
    generate_spots,
    search_bounds,
)
from .routing import compute_ortho_route
from .search import (
    Direction,
    GraphEdge,
    SpotGraph,
    bend_penalty,
    build_spot_graph,
    shortest_route,
)
from .simplify import (
    dedupe_points,
    enforce_orthogonality,
    orthogonalize,
    clean_route,
    simplify_ortho_points,
)

__all__ = [
    # Routing
    "compute_ortho_route",
    # Grid construction
    "RoutingGrid",
    "antenna_point",
    "build_routing_grid",
    "build_rulers",
    "generate_spots",
    "search_bounds",
    # Search
    "Direction",
    "GraphEdge",
    "SpotGraph",
    "bend_penalty",
    "build_spot_graph",
    "shortest_route",
    # Simplification
    "dedupe_points",
    "enforce_orthogonality",
    "orthogonalize",
    "clean_route",
    "simplify_ortho_points",
    # Geometry
    "insert_elbows",
    "is_blocked",
    "segment_crosses_rect",
    "spot_key",
]
