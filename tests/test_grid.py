"""Tests for ruler, bounds and spot construction."""

from __future__ import annotations

import pytest

from connector_routing.orthogonal.geometry import spot_key
from connector_routing.orthogonal.grid import (
    antenna_point,
    build_routing_grid,
    build_rulers,
    generate_spots,
    search_bounds,
    unique_sorted,
)
from connector_routing.types import AnchorSide, Point, Rect


def _make_aligned_grid():
    """Two 100x60 shapes 300 apart, connected right side -> left side."""
    return build_routing_grid(
        300,
        0,
        AnchorSide.RIGHT,
        AnchorSide.LEFT,
        start_rect=Rect(-100, -30, 100, 60),
        end_rect=Rect(300, -30, 100, 60),
        margin=30,
    )


class TestAntennaPoint:
    @pytest.mark.parametrize(
        "side, expected",
        [
            (AnchorSide.TOP, (10, -10)),
            (AnchorSide.BOTTOM, (10, 50)),
            (AnchorSide.LEFT, (-20, 20)),
            (AnchorSide.RIGHT, (40, 20)),
        ],
    )
    def test_extrudes_along_normal(self, side: AnchorSide, expected: tuple[float, float]) -> None:
        assert antenna_point(Point(10, 20), side, 30) == expected

    def test_no_side_leaves_point(self) -> None:
        assert antenna_point(Point(10, 20), None, 30) == (10, 20)


class TestRulers:
    def test_unique_sorted_merges_near_values(self) -> None:
        assert unique_sorted([3.0, 1.0, 1.001, 0.999, 2.0]) == [1.0, 2.0, 3.0]

    def test_obstacle_edges_and_antennas(self) -> None:
        vertical, horizontal = build_rulers(
            [Rect(0, 0, 10, 20)],
            [(Point(50, 60), AnchorSide.TOP), (Point(70, 80), AnchorSide.RIGHT)],
        )
        assert vertical == [0, 10, 50]
        assert horizontal == [0, 20, 80]

    def test_antenna_without_side_adds_horizontal_ruler(self) -> None:
        vertical, horizontal = build_rulers([], [(Point(5, 7), None)])
        assert vertical == []
        assert horizontal == [7]

    def test_search_bounds(self) -> None:
        bounds = search_bounds([Point(0, 0), Point(50, 40)], [-10.0], [100.0], 30)
        assert bounds == Rect(-40, -30, 120, 160)


class TestGenerateSpots:
    def test_includes_intersections_midpoints_and_antennas(self) -> None:
        spots = generate_spots([0.0], [0.0], Rect(-10, -10, 20, 20), [Point(3, 4)], [])
        keys = {spot_key(p) for p in spots}
        assert spot_key(Point(0, 0)) in keys
        assert spot_key(Point(-10, 10)) in keys
        assert spot_key(Point(-5, -5)) in keys
        assert spot_key(Point(5, 0)) in keys
        assert spot_key(Point(3, 4)) in keys
        # 3x3 lines + 2x3 + 2x2 + 3x2 midpoints + 1 antenna
        assert len(spots) == 9 + 6 + 4 + 6 + 1

    def test_drops_spots_near_obstacles(self) -> None:
        obstacle = Rect(-2, -2, 4, 4)
        spots = generate_spots([0.0], [0.0], Rect(-10, -10, 20, 20), [], [obstacle])
        assert all(not obstacle.contains(p, 1.0) for p in spots)
        assert spot_key(Point(0, 0)) not in {spot_key(p) for p in spots}

    def test_no_duplicates(self) -> None:
        spots = generate_spots([0.0, 0.0], [0.0], Rect(-10, -10, 20, 20), [Point(0, 0)], [])
        keys = [spot_key(p) for p in spots]
        assert len(keys) == len(set(keys))


class TestBuildRoutingGrid:
    def test_aligned_shapes(self) -> None:
        grid = _make_aligned_grid()
        assert grid.origin == (0, 0)
        assert grid.destination == (300, 0)
        assert grid.antenna_start == (30, 0)
        assert grid.antenna_end == (270, 0)
        assert grid.vertical == [-130, 30, 270, 430]
        assert grid.horizontal == [-60, 0, 60]
        assert grid.bounds == Rect(-160, -90, 620, 180)
        assert len(grid.obstacles) == 2
        assert grid.inflated[0] == Rect(-130, -60, 160, 120)

    def test_antennas_are_spots(self) -> None:
        grid = _make_aligned_grid()
        keys = {spot_key(p) for p in grid.spots}
        assert spot_key(grid.antenna_start) in keys
        assert spot_key(grid.antenna_end) in keys

    def test_extra_obstacles_contribute_rulers(self) -> None:
        grid = build_routing_grid(
            300, 0, AnchorSide.RIGHT, AnchorSide.LEFT, obstacles=[Rect(100, -75, 100, 150)], margin=30
        )
        assert 70 in grid.vertical
        assert 230 in grid.vertical
        assert -105 in grid.horizontal
        assert 105 in grid.horizontal

    def test_no_spot_inside_shape_bodies(self) -> None:
        grid = _make_aligned_grid()
        for p in grid.spots:
            assert not any(r.contains(p, 1.0) for r in grid.obstacles)
