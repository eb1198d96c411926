"""
Configuration facade over the anchor and routing functions.

ConnectorRouter holds the routing configuration and the host's element
list, and forwards to the module-level functions. It adds nothing to their
semantics; it exists so interaction handlers can share one configured object
and subscribe to re-route notifications.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Optional, Sequence

if TYPE_CHECKING:
    from typing_extensions import Self

from .anchors import find_element, find_nearest_anchor, get_anchors, resolve_anchor
from .connections import (
    Endpoint,
    connect_endpoint,
    connector_obstacle_rect,
    detach_connections,
    reroute_connector,
    update_connected_arrows,
)
from .orthogonal.routing import compute_ortho_route
from .types import (
    GRID,
    SNAP_RADIUS,
    AnchorPoint,
    Connection,
    DrawingElement,
    ElementLike,
    Event,
    EventCallback,
    EventType,
    Point,
    Rect,
    SideLike,
)
from .validation import (
    validate_connections,
    validate_elements,
    validate_grid,
    validate_snap_radius,
)


class ConnectorRouter:
    """
    Anchor lookup and connector routing over a set of drawing elements.

    The element list is shared with the caller, not copied: connectors in it
    are updated in place, shapes are only read.

    Example:
        router = ConnectorRouter(elements=elements, grid=30)
        anchor = router.nearest_anchor(105, 30)
        ...
        shape.x += 50
        for connector in router.move(shape.id):
            redraw(connector)
    """

    def __init__(
        self,
        *,
        elements: Optional[Sequence[ElementLike]] = None,
        grid: float = GRID,
        snap_radius: float = SNAP_RADIUS,
        avoid_all_shapes: bool = False,
        on_rerouted: Optional[EventCallback] = None,
        on_detached: Optional[EventCallback] = None,
    ) -> None:
        """
        Initialize router with configuration.

        Args:
            elements: Elements (DrawingElement objects or host dicts)
            grid: Anchor spacing and routing margin
            snap_radius: Maximum cursor distance for anchor snapping
            avoid_all_shapes: Route around unconnected shapes as well
            on_rerouted: Callback for each rebuilt connector
            on_detached: Callback for each connector losing a connection
        """
        self._elements: list[DrawingElement] = []
        self._grid: float = GRID
        self._snap_radius: float = SNAP_RADIUS
        self._avoid_all_shapes: bool = False
        self._events: dict[EventType, EventCallback] = {}

        if elements is not None:
            self.elements = elements
        self.grid = grid
        self.snap_radius = snap_radius
        self.avoid_all_shapes = avoid_all_shapes

        if on_rerouted:
            self._events[EventType.rerouted] = on_rerouted
        if on_detached:
            self._events[EventType.detached] = on_detached

    # -------------------------------------------------------------------------
    # Properties
    # -------------------------------------------------------------------------

    @property
    def elements(self) -> list[DrawingElement]:
        """Get the list of elements."""
        return self._elements

    @elements.setter
    def elements(self, value: Sequence[ElementLike]) -> None:
        """Set elements from DrawingElement objects or host dicts."""
        if isinstance(value, list) and all(isinstance(el, DrawingElement) for el in value):
            self._elements = value
            return
        self._elements = [
            el if isinstance(el, DrawingElement) else DrawingElement.from_dict(el) for el in value
        ]

    @property
    def grid(self) -> float:
        """Get the grid unit."""
        return self._grid

    @grid.setter
    def grid(self, value: float) -> None:
        """
        Set the grid unit.

        Raises:
            InvalidGridError: If value is not a positive finite number.
        """
        self._grid = validate_grid(value)

    @property
    def snap_radius(self) -> float:
        """Get the anchor snap radius."""
        return self._snap_radius

    @snap_radius.setter
    def snap_radius(self, value: float) -> None:
        self._snap_radius = validate_snap_radius(value)

    @property
    def avoid_all_shapes(self) -> bool:
        """Get whether unconnected shapes are treated as obstacles."""
        return self._avoid_all_shapes

    @avoid_all_shapes.setter
    def avoid_all_shapes(self, value: bool) -> None:
        self._avoid_all_shapes = bool(value)

    # -------------------------------------------------------------------------
    # Event System
    # -------------------------------------------------------------------------

    def on(self, event: EventType | str, callback: EventCallback) -> Self:
        """
        Subscribe to a router event.

        Args:
            event: Event type (EventType enum or string name)
            callback: Function to call when event fires

        Returns:
            self (for chaining)
        """
        if isinstance(event, str):
            event = EventType[event]
        self._events[event] = callback
        return self

    def trigger(self, event: Event) -> None:
        """Call the callback registered for the event's type, if any."""
        event_type = event.get("type")
        if event_type is not None and event_type in self._events:
            self._events[event_type](event)

    # -------------------------------------------------------------------------
    # Validation
    # -------------------------------------------------------------------------

    def validate(self) -> Self:
        """
        Validate the element list.

        Returns:
            self (for chaining)

        Raises:
            InvalidElementError: On duplicate ids, negative sizes or short connectors.
            InvalidConnectionError: On dangling or non-anchorable connections.
        """
        validate_elements(self._elements, strict=True)
        validate_connections(self._elements, strict=True)
        return self

    # -------------------------------------------------------------------------
    # Anchors
    # -------------------------------------------------------------------------

    def anchors(self, element: DrawingElement | str) -> list[AnchorPoint]:
        """Anchor points of a shape (given directly or by id)."""
        if isinstance(element, str):
            found = find_element(self._elements, element)
            if found is None:
                return []
            element = found
        return get_anchors(element, self._grid)

    def resolve(self, connection: Connection) -> Optional[Point]:
        """World position of a connection, or None if its shape is gone."""
        return resolve_anchor(self._elements, connection)

    def nearest_anchor(
        self, x: float, y: float, exclude_id: Optional[str] = None
    ) -> Optional[AnchorPoint]:
        """Closest anchor to (x, y) within the snap radius."""
        return find_nearest_anchor(
            self._elements, x, y, exclude_id, snap_radius=self._snap_radius, grid=self._grid
        )

    # -------------------------------------------------------------------------
    # Routing
    # -------------------------------------------------------------------------

    def route(
        self,
        dx: float,
        dy: float,
        start_side: Optional[SideLike] = None,
        end_side: Optional[SideLike] = None,
        start_rect: Optional[Rect] = None,
        end_rect: Optional[Rect] = None,
        obstacles: Sequence[Rect] = (),
    ) -> list[Point]:
        """Local-space orthogonal route using this router's grid."""
        return compute_ortho_route(
            dx, dy, start_side, end_side, start_rect, end_rect, obstacles, margin=self._grid
        )

    def route_between(self, start: AnchorPoint, end: AnchorPoint) -> list[Point]:
        """
        Local-space route between two anchors, around their shapes.

        The result is relative to ``start``.
        """
        origin = start.point
        return self.route(
            end.x - start.x,
            end.y - start.y,
            start.side,
            end.side,
            connector_obstacle_rect(self._elements, start.element_id, origin),
            connector_obstacle_rect(self._elements, end.element_id, origin),
        )

    def connect(
        self,
        connector: DrawingElement,
        end: Endpoint,
        anchor: Optional[AnchorPoint],
    ) -> DrawingElement:
        """Attach (or detach with None) one end of a connector and re-route it."""
        connect_endpoint(connector, end, anchor)
        if reroute_connector(
            self._elements,
            connector,
            avoid_all_shapes=self._avoid_all_shapes,
            grid=self._grid,
        ):
            self.trigger({"type": EventType.rerouted, "connector": connector})
        return connector

    def move(self, element_id: str) -> list[DrawingElement]:
        """
        Re-route all connectors attached to a shape that moved or resized.

        Returns:
            The rebuilt connectors.
        """
        updated = update_connected_arrows(
            self._elements,
            element_id,
            avoid_all_shapes=self._avoid_all_shapes,
            grid=self._grid,
        )
        for connector in updated:
            self.trigger(
                {"type": EventType.rerouted, "connector": connector, "element_id": element_id}
            )
        return updated

    def delete(self, element_id: str) -> list[DrawingElement]:
        """
        Remove an element and clear connections that referenced it.

        Returns:
            The connectors that lost a connection.
        """
        self._elements[:] = [el for el in self._elements if el.id != element_id]
        detached = detach_connections(self._elements, element_id)
        for connector in detached:
            self.trigger(
                {"type": EventType.detached, "connector": connector, "element_id": element_id}
            )
        return detached


__all__ = ["ConnectorRouter"]
