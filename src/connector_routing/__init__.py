"""
connector-routing: Orthogonal connector routing and anchor management.

This package routes connectors between shapes on a freeform canvas using
only horizontal and vertical segments, and keeps them attached as shapes
move.

Available components:
- anchors: Edge anchors, connection resolution and nearest-anchor snapping
- orthogonal: Ruler/spot grid, bend-penalised Dijkstra and path clean-up
- connections: Re-routing of connectors attached to a moved shape
- router: ConnectorRouter configuration facade
- metrics: Route quality measures
"""

__version__ = "0.1.0"

# Anchor model
from .anchors import (
    anchor_position,
    find_element,
    find_nearest_anchor,
    get_anchors,
    resolve_anchor,
)

# Connection coordination
from .connections import (
    connect_endpoint,
    connector_obstacle_rect,
    detach_connections,
    reroute_connector,
    shape_elements,
    snap_connector_to_grid,
    update_connected_arrows,
)

# Metrics for route quality evaluation
from .metrics import (
    bend_count,
    crossed_obstacles,
    is_orthogonal,
    route_length,
    route_quality_summary,
)

# Orthogonal routing
from .orthogonal import (
    compute_ortho_route,
    enforce_orthogonality,
    simplify_ortho_points,
)
from .router import ConnectorRouter
from .types import (
    ANCHOR_RADIUS,
    EDIT_TOLERANCE,
    GRID,
    SNAP_RADIUS,
    TOLERANCE,
    AnchorPoint,
    AnchorSide,
    Connection,
    DrawingElement,
    ElementLike,
    ElementType,
    Event,
    EventType,
    Point,
    Rect,
    SideLike,
    element_bounds,
    snap,
)

# Validation utilities
from .validation import (
    InvalidConnectionError,
    InvalidElementError,
    InvalidGridError,
    ValidationError,
    validate_connections,
    validate_elements,
    validate_grid,
    validate_snap_radius,
)

__all__ = [
    # Version
    "__version__",
    # Constants
    "GRID",
    "SNAP_RADIUS",
    "ANCHOR_RADIUS",
    "TOLERANCE",
    "EDIT_TOLERANCE",
    # Shared types
    "Point",
    "Rect",
    "AnchorSide",
    "AnchorPoint",
    "Connection",
    "ElementType",
    "DrawingElement",
    "EventType",
    "Event",
    "element_bounds",
    "snap",
    # Type aliases for API
    "ElementLike",
    "SideLike",
    # Anchors
    "get_anchors",
    "anchor_position",
    "find_element",
    "resolve_anchor",
    "find_nearest_anchor",
    # Routing
    "compute_ortho_route",
    "simplify_ortho_points",
    "enforce_orthogonality",
    # Connections
    "update_connected_arrows",
    "reroute_connector",
    "connect_endpoint",
    "detach_connections",
    "connector_obstacle_rect",
    "shape_elements",
    "snap_connector_to_grid",
    # Router
    "ConnectorRouter",
    # Metrics
    "bend_count",
    "route_length",
    "is_orthogonal",
    "crossed_obstacles",
    "route_quality_summary",
    # Validation
    "ValidationError",
    "InvalidGridError",
    "InvalidElementError",
    "InvalidConnectionError",
    "validate_grid",
    "validate_snap_radius",
    "validate_elements",
    "validate_connections",
]
