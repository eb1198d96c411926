"""
Input validation utilities for connector routing.

Routing itself never raises: degenerate geometry degrades to a simpler but
still orthogonal path. The validators here cover configuration values and
element collections supplied by the host, and raise descriptive exceptions
on invalid input (or return the list of issues when ``strict=False``).
"""

from __future__ import annotations

import math
from typing import Sequence

from .types import DrawingElement


class ValidationError(ValueError):
    """Base exception for connector routing validation errors."""

    pass


class InvalidGridError(ValidationError):
    """Raised when the grid unit or snap radius is invalid."""

    pass


class InvalidElementError(ValidationError):
    """Raised when a drawing element is malformed."""

    pass


class InvalidConnectionError(ValidationError):
    """Raised when a connection references a missing or non-anchorable element."""

    pass


def validate_grid(grid: float) -> float:
    """
    Validate the grid unit (anchor spacing and routing margin).

    Args:
        grid: Grid unit in canvas units

    Returns:
        Validated grid as float

    Raises:
        InvalidGridError: If grid is not a positive finite number
    """
    value = float(grid)
    if not math.isfinite(value) or value <= 0:
        raise InvalidGridError(f"grid must be a positive finite number, got {grid}")
    return value


def validate_snap_radius(radius: float) -> float:
    """
    Validate the nearest-anchor snap radius.

    Raises:
        InvalidGridError: If radius is not a positive finite number
    """
    value = float(radius)
    if not math.isfinite(value) or value <= 0:
        raise InvalidGridError(f"snap_radius must be a positive finite number, got {radius}")
    return value


def validate_elements(
    elements: Sequence[DrawingElement],
    strict: bool = True,
) -> list[tuple[int, str]]:
    """
    Validate element geometry and ids.

    Checks for duplicate ids, negative or non-finite sizes, and connectors
    with fewer than two points.

    Args:
        elements: Elements to check
        strict: If True, raises on invalid. If False, returns list of issues.

    Returns:
        List of (element_index, issue_description) tuples

    Raises:
        InvalidElementError: If strict=True and invalid elements found
    """
    issues: list[tuple[int, str]] = []
    seen: set[str] = set()

    for i, el in enumerate(elements):
        if el.id in seen:
            issues.append((i, f"Element {i}: duplicate id {el.id!r}"))
        seen.add(el.id)

        coords = (el.x, el.y, el.width, el.height)
        if not all(math.isfinite(v) for v in coords):
            issues.append((i, f"Element {i}: non-finite geometry {coords}"))
        elif el.width < 0 or el.height < 0:
            issues.append((i, f"Element {i}: negative size ({el.width}, {el.height})"))

        if el.is_arrow and len(el.points) < 2:
            issues.append((i, f"Element {i}: connector needs at least 2 points, got {len(el.points)}"))

    if strict and issues:
        msg = "Invalid elements:\n" + "\n".join(issue[1] for issue in issues)
        raise InvalidElementError(msg)

    return issues


def validate_connections(
    elements: Sequence[DrawingElement],
    strict: bool = True,
) -> list[tuple[int, str]]:
    """
    Validate that connector connections reference anchorable shapes.

    A dangling reference is legal at routing time (the connector keeps its
    last endpoint), so this is a host-side consistency check.

    Args:
        elements: Elements to check
        strict: If True, raises on invalid. If False, returns list of issues.

    Returns:
        List of (element_index, issue_description) tuples

    Raises:
        InvalidConnectionError: If strict=True and invalid connections found
    """
    issues: list[tuple[int, str]] = []
    by_id = {el.id: el for el in elements}

    for i, el in enumerate(elements):
        for end, conn in (("start", el.start_connection), ("end", el.end_connection)):
            if conn is None:
                continue
            if not el.is_arrow:
                issues.append((i, f"Element {i}: {end} connection on non-connector {el.id!r}"))
                continue
            target = by_id.get(conn.element_id)
            if target is None:
                issues.append((i, f"Element {i}: {end} connection to missing {conn.element_id!r}"))
            elif not target.type.has_anchors():
                issues.append(
                    (i, f"Element {i}: {end} connection to {target.type.value} {conn.element_id!r}")
                )

    if strict and issues:
        msg = "Invalid connections:\n" + "\n".join(issue[1] for issue in issues)
        raise InvalidConnectionError(msg)

    return issues


__all__ = [
    "ValidationError",
    "InvalidGridError",
    "InvalidElementError",
    "InvalidConnectionError",
    "validate_grid",
    "validate_snap_radius",
    "validate_elements",
    "validate_connections",
]
