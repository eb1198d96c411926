"""Tests for the end-to-end orthogonal routing pipeline."""

from __future__ import annotations

import itertools
import logging
import random

import pytest

from connector_routing.metrics import bend_count, crossed_obstacles, is_orthogonal
from connector_routing.orthogonal import compute_ortho_route
from connector_routing.types import AnchorSide, Point, Rect

SHAPE_A = Rect(0, 0, 100, 60)
SHAPE_B = Rect(300, 200, 100, 60)


def _side_midpoint(rect: Rect, side: AnchorSide) -> Point:
    if side == AnchorSide.TOP:
        return Point(rect.x + rect.w / 2, rect.top)
    if side == AnchorSide.BOTTOM:
        return Point(rect.x + rect.w / 2, rect.bottom)
    if side == AnchorSide.LEFT:
        return Point(rect.left, rect.y + rect.h / 2)
    return Point(rect.right, rect.y + rect.h / 2)


def _route_between(
    a: Rect, a_side: AnchorSide, b: Rect, b_side: AnchorSide, obstacles: tuple[Rect, ...] = ()
) -> tuple[list[Point], list[Rect]]:
    """Route in local space; returns the route and every body in local space."""
    start = _side_midpoint(a, a_side)
    end = _side_midpoint(b, b_side)
    local_a = a.translate(-start.x, -start.y)
    local_b = b.translate(-start.x, -start.y)
    local_obstacles = [r.translate(-start.x, -start.y) for r in obstacles]
    route = compute_ortho_route(
        end.x - start.x,
        end.y - start.y,
        a_side,
        b_side,
        local_a,
        local_b,
        local_obstacles,
    )
    return route, [local_a, local_b, *local_obstacles]


# ---------------------------------------------------------------------------
# Basic shapes of the result
# ---------------------------------------------------------------------------


class TestComputeOrthoRoute:
    def test_without_sides(self) -> None:
        assert compute_ortho_route(120, 80) == [(0, 0), (120, 0), (120, 80)]

    def test_aligned_shapes_give_straight_line(self) -> None:
        route, _ = _route_between(
            Rect(0, 0, 100, 60), AnchorSide.RIGHT, Rect(400, 0, 100, 60), AnchorSide.LEFT
        )
        assert route == [(0, 0), (300, 0)]

    def test_offset_shapes(self) -> None:
        route, bodies = _route_between(
            Rect(0, 0, 100, 60), AnchorSide.RIGHT, Rect(400, 100, 100, 60), AnchorSide.LEFT
        )
        assert route[0] == (0, 0)
        assert route[-1] == (300, 100)
        assert is_orthogonal(route)
        assert crossed_obstacles(route, bodies) == []
        # leaves rightward, enters from the left
        assert route[1].y == 0 and route[1].x > 0
        assert route[-2].y == 100 and route[-2].x < 300
        assert bend_count(route) == 2

    def test_routes_around_obstacle(self) -> None:
        blocker = Rect(200, -45, 200, 150)
        route, bodies = _route_between(
            Rect(0, 0, 100, 60),
            AnchorSide.RIGHT,
            Rect(500, 0, 100, 60),
            AnchorSide.LEFT,
            obstacles=(blocker,),
        )
        assert route[0] == (0, 0)
        assert route[-1] == (400, 0)
        assert is_orthogonal(route)
        assert crossed_obstacles(route, bodies) == []
        assert bend_count(route) >= 2

    def test_string_sides(self) -> None:
        local_a = Rect(-100, -30, 100, 60)
        local_b = Rect(300, 70, 100, 60)
        by_name = compute_ortho_route(300, 100, "right", "left", local_a, local_b)
        by_enum = compute_ortho_route(300, 100, AnchorSide.RIGHT, AnchorSide.LEFT, local_a, local_b)
        assert by_name == by_enum

    def test_invalid_side(self) -> None:
        with pytest.raises(ValueError, match="side must be one of"):
            compute_ortho_route(10, 10, "diagonal", "left")

    def test_single_side_only(self) -> None:
        route = compute_ortho_route(200, 120, AnchorSide.BOTTOM, None, Rect(-50, -60, 100, 60))
        assert route[0] == (0, 0)
        assert route[-1] == (200, 120)
        assert route[1].x == 0
        assert is_orthogonal(route)

    def test_zero_length(self) -> None:
        route = compute_ortho_route(0, 0, AnchorSide.RIGHT, AnchorSide.RIGHT)
        assert len(route) >= 2
        assert route[0] == (0, 0)
        assert is_orthogonal(route)

    def test_fallback_when_antenna_is_buried(self, caplog: pytest.LogCaptureFixture) -> None:
        # start antenna (30, 0) lies inside the end shape
        with caplog.at_level(logging.DEBUG, logger="connector_routing"):
            route = compute_ortho_route(
                100, 50, AnchorSide.RIGHT, AnchorSide.LEFT, end_rect=Rect(10, -20, 50, 40)
            )
        assert route == [(0, 0), (30, 0), (30, 50), (100, 50)]
        assert "No spot route" in caplog.text

    def test_deterministic(self) -> None:
        first = _route_between(SHAPE_A, AnchorSide.TOP, SHAPE_B, AnchorSide.BOTTOM)[0]
        for _ in range(5):
            assert _route_between(SHAPE_A, AnchorSide.TOP, SHAPE_B, AnchorSide.BOTTOM)[0] == first

    def test_custom_margin(self) -> None:
        route = compute_ortho_route(
            300, 100, "right", "left", Rect(-100, -30, 100, 60), Rect(300, 70, 100, 60), margin=10
        )
        assert is_orthogonal(route)
        assert route[1] == (290, 0)


# ---------------------------------------------------------------------------
# All side combinations
# ---------------------------------------------------------------------------


@pytest.mark.parametrize(
    "start_side, end_side", list(itertools.product(AnchorSide, AnchorSide))
)
class TestSideCombinations:
    def test_orthogonal_and_clear(self, start_side: AnchorSide, end_side: AnchorSide) -> None:
        route, bodies = _route_between(SHAPE_A, start_side, SHAPE_B, end_side)
        end = _side_midpoint(SHAPE_B, end_side)
        start = _side_midpoint(SHAPE_A, start_side)

        assert route[0] == (0, 0)
        assert route[-1] == pytest.approx((end.x - start.x, end.y - start.y))
        assert is_orthogonal(route)
        assert crossed_obstacles(route, bodies) == []

    def test_leaves_along_normal(self, start_side: AnchorSide, end_side: AnchorSide) -> None:
        route, _ = _route_between(SHAPE_A, start_side, SHAPE_B, end_side)
        normal = start_side.outward(1)
        first = route[1]
        # first leg heads outward from the start side
        assert first.x * normal.x >= 0 and first.y * normal.y >= 0
        assert (first.x == 0) == (normal.x == 0)

    def test_no_redundant_points(self, start_side: AnchorSide, end_side: AnchorSide) -> None:
        route, _ = _route_between(SHAPE_A, start_side, SHAPE_B, end_side)
        for a, b, c in zip(route, route[1:], route[2:]):
            assert not (a.x == b.x == c.x or a.y == b.y == c.y)


# ---------------------------------------------------------------------------
# Off-grid geometry
# ---------------------------------------------------------------------------


def _random_pair(rng: random.Random) -> tuple[Rect, AnchorSide, Rect, AnchorSide]:
    """Two disjoint shapes at non-integer positions with random sides."""
    a = Rect(0, 0, round(rng.uniform(60, 200), 2), round(rng.uniform(40, 150), 2))
    while True:
        b = Rect(
            round(rng.uniform(-500, 500), 3),
            round(rng.uniform(-400, 400), 3),
            round(rng.uniform(60, 200), 2),
            round(rng.uniform(40, 150), 2),
        )
        disjoint = (
            b.right < a.left or b.left > a.right or b.bottom < a.top or b.top > a.bottom
        )
        if disjoint:
            return a, rng.choice(list(AnchorSide)), b, rng.choice(list(AnchorSide))


class TestOffGridGeometry:
    def test_corner_between_close_rulers(self) -> None:
        a, b = Rect(0, 0, 200, 150), Rect(-351.88, 0.674, 100, 40)
        route, _ = _route_between(a, AnchorSide.TOP, b, AnchorSide.RIGHT)
        start = _side_midpoint(a, AnchorSide.TOP)
        end = _side_midpoint(b, AnchorSide.RIGHT)
        assert route[0] == (0, 0)
        assert route[-1] == (end.x - start.x, end.y - start.y)
        assert route[-1] == pytest.approx((-351.88, 20.674))
        assert is_orthogonal(route)

    def test_random_pairs_stay_orthogonal(self) -> None:
        rng = random.Random(7)
        failures = []
        for _ in range(400):
            a, a_side, b, b_side = _random_pair(rng)
            route, _ = _route_between(a, a_side, b, b_side)
            start = _side_midpoint(a, a_side)
            end = _side_midpoint(b, b_side)
            expected_end = (end.x - start.x, end.y - start.y)
            if route[0] != (0, 0) or route[-1] != expected_end or not is_orthogonal(route):
                failures.append((a, a_side, b, b_side, route))
        assert failures == []
