"""
Common types for connector routing.

This module provides the fundamental types shared by the anchor model, the
orthogonal router and the connection coordinator:
- Point: Plane coordinate (local space for routing, world space for anchors)
- Rect: Axis-aligned box used as a true or inflated obstacle
- AnchorSide: Edge of a shape a connector can attach to
- AnchorPoint: Ephemeral, edge-parametrised attachment point
- Connection: Persisted reference from a connector endpoint into a shape
- DrawingElement: Shape or connector on the canvas
- EventType / Event: Notifications emitted by ConnectorRouter
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum, IntEnum
from typing import Any, Callable, NamedTuple, Optional, TypedDict, Union

# Spatial unit shared by anchor density and routing margin. Antennas only land
# on generated rulers when both use the same value.
GRID = 30.0

# Maximum distance at which a cursor snaps onto an anchor
SNAP_RADIUS = 20.0

# Visual radius of an anchor marker (for hosts drawing anchor overlays)
ANCHOR_RADIUS = 5.0

# Collinearity / dedup / diagonal tolerance for generated routes
TOLERANCE = 0.5

# Collinearity tolerance used after manual waypoint edits
EDIT_TOLERANCE = 1.0


def snap(value: float, grid: float = GRID) -> float:
    """Round a coordinate to the nearest multiple of ``grid``."""
    return round(value / grid) * grid


class Point(NamedTuple):
    """A plane coordinate."""

    x: float
    y: float


@dataclass(frozen=True)
class Rect:
    """
    Axis-aligned bounding box anchored at its top-left corner.

    Used both as a true obstacle (a shape body) and as an inflated obstacle
    (body plus clearance margin).
    """

    x: float
    y: float
    w: float
    h: float

    @property
    def left(self) -> float:
        """Left edge x coordinate."""
        return self.x

    @property
    def right(self) -> float:
        """Right edge x coordinate."""
        return self.x + self.w

    @property
    def top(self) -> float:
        """Top edge y coordinate."""
        return self.y

    @property
    def bottom(self) -> float:
        """Bottom edge y coordinate."""
        return self.y + self.h

    def inflate(self, margin: float) -> Rect:
        """Grow the box by ``margin`` on all four sides."""
        return Rect(self.x - margin, self.y - margin, self.w + margin * 2, self.h + margin * 2)

    def translate(self, dx: float, dy: float) -> Rect:
        """Return the box shifted by (dx, dy)."""
        return Rect(self.x + dx, self.y + dy, self.w, self.h)

    def contains(self, point: tuple[float, float], margin: float = 0.0) -> bool:
        """Check if a point lies inside the box grown by ``margin`` (edges included)."""
        px, py = point
        return (
            self.left - margin <= px <= self.right + margin
            and self.top - margin <= py <= self.bottom + margin
        )


class AnchorSide(Enum):
    """Side of a shape where a connector can attach."""

    TOP = "top"
    RIGHT = "right"
    BOTTOM = "bottom"
    LEFT = "left"

    @classmethod
    def parse(cls, value: Union[AnchorSide, str]) -> AnchorSide:
        """Accept an AnchorSide or its string name ('top', 'RIGHT', ...)."""
        if isinstance(value, AnchorSide):
            return value
        try:
            return cls(str(value).lower())
        except ValueError:
            valid = [s.value for s in cls]
            raise ValueError(f"side must be one of {valid}, got {value!r}") from None

    def opposite(self) -> AnchorSide:
        """Get the opposite side."""
        opposites = {
            AnchorSide.TOP: AnchorSide.BOTTOM,
            AnchorSide.BOTTOM: AnchorSide.TOP,
            AnchorSide.LEFT: AnchorSide.RIGHT,
            AnchorSide.RIGHT: AnchorSide.LEFT,
        }
        return opposites[self]

    def is_horizontal(self) -> bool:
        """Check if this side lies on a horizontal edge (connector leaves vertically)."""
        return self in (AnchorSide.TOP, AnchorSide.BOTTOM)

    def is_vertical(self) -> bool:
        """Check if this side lies on a vertical edge (connector leaves horizontally)."""
        return self in (AnchorSide.LEFT, AnchorSide.RIGHT)

    def outward(self, amount: float) -> Point:
        """Offset of length ``amount`` along the side's outward normal."""
        if self == AnchorSide.TOP:
            return Point(0.0, -amount)
        elif self == AnchorSide.BOTTOM:
            return Point(0.0, amount)
        elif self == AnchorSide.LEFT:
            return Point(-amount, 0.0)
        else:  # RIGHT
            return Point(amount, 0.0)


SideLike = Union[AnchorSide, str]
"""Input type for sides: AnchorSide members or their string values."""


@dataclass
class Connection:
    """
    Persisted reference from a connector endpoint into a shape.

    Only the shape id, the side and the fractional position along that side are
    stored; absolute coordinates are always re-derived from the live shape.
    """

    element_id: str
    side: AnchorSide
    t: float = 0.5  # Position along the side (0.0 to 1.0)

    def __post_init__(self) -> None:
        self.side = AnchorSide.parse(self.side)
        self.t = min(1.0, max(0.0, float(self.t)))

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> Connection:
        """Build from a host dict (``elementId`` or ``element_id`` keys)."""
        element_id = data.get("elementId", data.get("element_id"))
        if element_id is None:
            raise ValueError("Connection requires an elementId")
        return cls(element_id=str(element_id), side=data["side"], t=data.get("t", 0.5))

    def to_dict(self) -> dict[str, Any]:
        return {"elementId": self.element_id, "side": self.side.value, "t": self.t}


@dataclass(frozen=True)
class AnchorPoint:
    """A discrete attachment point along one edge of a shape (world space)."""

    element_id: str
    side: AnchorSide
    t: float
    x: float
    y: float

    @property
    def point(self) -> Point:
        return Point(self.x, self.y)

    def to_connection(self) -> Connection:
        """The persisted reference a connector stores for this anchor."""
        return Connection(element_id=self.element_id, side=self.side, t=self.t)


class ElementType(str, Enum):
    """Kinds of drawing elements."""

    RECTANGLE = "rectangle"
    ELLIPSE = "ellipse"
    DIAMOND = "diamond"
    TEXT = "text"
    LINE = "line"
    FREEDRAW = "freedraw"
    ARROW = "arrow"
    ORTHO_ARROW = "ortho-arrow"

    def is_arrow(self) -> bool:
        """Connectors that may hold start/end connections."""
        return self in (ElementType.ARROW, ElementType.ORTHO_ARROW)

    def has_anchors(self) -> bool:
        """Shapes that expose anchors along their edges."""
        return self in (ElementType.RECTANGLE, ElementType.ELLIPSE, ElementType.DIAMOND)


@dataclass
class DrawingElement:
    """
    A shape or connector on the canvas.

    Shapes are read-only inputs to routing. Connectors own their ``points``,
    expressed relative to the connector's (x, y) origin, with ``points[0]``
    always at (0, 0).
    """

    id: str
    type: ElementType = ElementType.RECTANGLE
    x: float = 0.0
    y: float = 0.0
    width: float = 0.0
    height: float = 0.0
    points: list[Point] = field(default_factory=list)
    start_connection: Optional[Connection] = None
    end_connection: Optional[Connection] = None

    def __post_init__(self) -> None:
        self.type = ElementType(self.type)
        self.points = [Point(float(p[0]), float(p[1])) for p in self.points]

    @property
    def is_arrow(self) -> bool:
        return self.type.is_arrow()

    @property
    def is_ortho(self) -> bool:
        return self.type == ElementType.ORTHO_ARROW

    @property
    def rect(self) -> Rect:
        """Body rectangle in world space."""
        return Rect(self.x, self.y, self.width, self.height)

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> DrawingElement:
        """
        Build an element from a host dict.

        Accepts the host application's camelCase connection keys
        (``startConnection``/``endConnection``) as well as snake_case ones,
        and ``[x, y]`` point pairs. Unknown keys (styling etc.) are ignored.
        """
        start = data.get("startConnection", data.get("start_connection"))
        end = data.get("endConnection", data.get("end_connection"))
        return cls(
            id=str(data["id"]),
            type=ElementType(data.get("type", ElementType.RECTANGLE)),
            x=float(data.get("x", 0.0)),
            y=float(data.get("y", 0.0)),
            width=float(data.get("width", 0.0)),
            height=float(data.get("height", 0.0)),
            points=list(data.get("points") or []),
            start_connection=_coerce_connection(start),
            end_connection=_coerce_connection(end),
        )

    def __repr__(self) -> str:
        return (
            f"DrawingElement(id={self.id!r}, type={self.type.value}, "
            f"x={self.x:.2f}, y={self.y:.2f}, w={self.width:.2f}, h={self.height:.2f})"
        )


def _coerce_connection(value: Any) -> Optional[Connection]:
    if value is None or isinstance(value, Connection):
        return value
    return Connection.from_dict(value)


def element_bounds(element: DrawingElement) -> Rect:
    """World-space bounding box of an element, using its points for connectors."""
    if element.points:
        xs = [element.x + p.x for p in element.points]
        ys = [element.y + p.y for p in element.points]
        return Rect(min(xs), min(ys), max(xs) - min(xs), max(ys) - min(ys))
    return element.rect


class EventType(IntEnum):
    """
    Router notifications.

    - rerouted: A connector's geometry was rebuilt
    - detached: A connector endpoint lost its connection (shape deleted)
    """

    rerouted = 0
    detached = 1


class Event(TypedDict, total=False):
    """Event payload passed to event listeners."""

    type: EventType
    connector: DrawingElement
    element_id: str


ElementLike = Union[DrawingElement, dict[str, Any]]
"""Input type for elements: DrawingElement objects or host dicts."""

EventCallback = Callable[[Event], None]


__all__ = [
    "GRID",
    "SNAP_RADIUS",
    "ANCHOR_RADIUS",
    "TOLERANCE",
    "EDIT_TOLERANCE",
    "snap",
    "Point",
    "Rect",
    "AnchorSide",
    "SideLike",
    "Connection",
    "AnchorPoint",
    "ElementType",
    "DrawingElement",
    "element_bounds",
    "EventType",
    "Event",
    "EventCallback",
    "ElementLike",
]
