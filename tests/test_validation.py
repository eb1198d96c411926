"""Tests for input validation module."""

import pytest

from connector_routing import Connection, DrawingElement
from connector_routing.validation import (
    InvalidConnectionError,
    InvalidElementError,
    InvalidGridError,
    ValidationError,
    validate_connections,
    validate_elements,
    validate_grid,
    validate_snap_radius,
)


def _shape(id, **kwargs):
    return DrawingElement(id=id, width=kwargs.pop("width", 100), height=kwargs.pop("height", 60), **kwargs)


def _connector(id, start=None, end=None, points=((0, 0), (10, 0))):
    return DrawingElement(
        id=id,
        type="ortho-arrow",
        points=list(points),
        start_connection=start,
        end_connection=end,
    )


class TestGridValidation:
    """Tests for grid and snap radius validation."""

    def test_valid_grid(self):
        """Valid grid returns float."""
        assert validate_grid(30) == 30.0
        assert isinstance(validate_grid(30), float)

    def test_zero_grid_raises(self):
        """Zero grid raises InvalidGridError."""
        with pytest.raises(InvalidGridError, match="grid must be a positive finite number"):
            validate_grid(0)

    def test_negative_grid_raises(self):
        """Negative grid raises InvalidGridError."""
        with pytest.raises(InvalidGridError):
            validate_grid(-30)

    def test_infinite_grid_raises(self):
        """Infinite grid raises InvalidGridError."""
        with pytest.raises(InvalidGridError):
            validate_grid(float("inf"))

    def test_snap_radius(self):
        """Snap radius follows the same rules."""
        assert validate_snap_radius(20) == 20.0
        with pytest.raises(InvalidGridError, match="snap_radius"):
            validate_snap_radius(-1)


class TestElementValidation:
    """Tests for element validation."""

    def test_valid_elements(self):
        """Valid elements pass."""
        elements = [_shape("a"), _shape("b"), _connector("c")]
        assert validate_elements(elements) == []

    def test_duplicate_id(self):
        """Duplicate ids are reported."""
        with pytest.raises(InvalidElementError, match="duplicate id 'a'"):
            validate_elements([_shape("a"), _shape("a")])

    def test_negative_size(self):
        """Negative width raises InvalidElementError."""
        with pytest.raises(InvalidElementError, match="negative size"):
            validate_elements([_shape("a", width=-1)])

    def test_non_finite_geometry(self):
        """NaN coordinates are reported."""
        with pytest.raises(InvalidElementError, match="non-finite"):
            validate_elements([_shape("a", x=float("nan"))])

    def test_short_connector(self):
        """Connector with a single point is reported."""
        with pytest.raises(InvalidElementError, match="at least 2 points"):
            validate_elements([_connector("c", points=[(0, 0)])])

    def test_non_strict_returns_issues(self):
        """Non-strict mode returns list of issues."""
        issues = validate_elements([_shape("a"), _shape("a", width=-1)], strict=False)
        assert [i for i, _ in issues] == [1, 1]


class TestConnectionValidation:
    """Tests for connection validation."""

    def test_valid_connections(self):
        """Connections to existing shapes pass."""
        elements = [
            _shape("a"),
            _shape("b"),
            _connector("c", Connection("a", "right"), Connection("b", "left")),
        ]
        assert validate_connections(elements) == []

    def test_missing_target(self):
        """Connection to missing shape raises InvalidConnectionError."""
        elements = [_shape("a"), _connector("c", Connection("a", "right"), Connection("x", "left"))]
        with pytest.raises(InvalidConnectionError, match="end connection to missing 'x'"):
            validate_connections(elements)

    def test_non_anchorable_target(self):
        """Connection to a text element is reported."""
        elements = [
            DrawingElement(id="t", type="text", width=50, height=20),
            _connector("c", Connection("t", "top")),
        ]
        issues = validate_connections(elements, strict=False)
        assert len(issues) == 1
        assert "text 't'" in issues[0][1]

    def test_connection_on_shape(self):
        """Shapes cannot hold connections."""
        shape = _shape("a", start_connection=Connection("b", "top"))
        issues = validate_connections([shape, _shape("b")], strict=False)
        assert issues == [(0, "Element 0: start connection on non-connector 'a'")]


class TestExceptionHierarchy:
    """Tests for exception class hierarchy."""

    def test_all_inherit_from_validation_error(self):
        """All validation errors inherit from ValidationError."""
        assert issubclass(InvalidGridError, ValidationError)
        assert issubclass(InvalidElementError, ValidationError)
        assert issubclass(InvalidConnectionError, ValidationError)

    def test_validation_error_is_value_error(self):
        """ValidationError inherits from ValueError."""
        assert issubclass(ValidationError, ValueError)
