"""Tests for lightcycle.domain.geometry module."""

from __future__ import annotations

import pytest

from lightcycle.domain.geometry import (
    DIRECTIONS,
    Direction,
    Position,
    move_by_direction,
    neighbors,
    toroidal_distance,
)

GRID_SIZES = [(1, 1), (1, 4), (3, 1), (2, 3), (5, 4), (20, 20)]


class TestMoveByDirection:
    @pytest.mark.parametrize(("width", "height"), GRID_SIZES)
    def test_left_from_first_column_wraps(self, width: int, height: int) -> None:
        assert move_by_direction(Position(0, 0), Direction.LEFT, width, height) == Position(
            width - 1, 0
        )

    @pytest.mark.parametrize(("width", "height"), GRID_SIZES)
    def test_right_from_last_column_wraps(self, width: int, height: int) -> None:
        assert move_by_direction(
            Position(width - 1, 0), Direction.RIGHT, width, height
        ) == Position(0, 0)

    @pytest.mark.parametrize(("width", "height"), GRID_SIZES)
    def test_up_from_first_row_wraps(self, width: int, height: int) -> None:
        assert move_by_direction(Position(0, 0), Direction.UP, width, height) == Position(
            0, height - 1
        )

    @pytest.mark.parametrize(("width", "height"), GRID_SIZES)
    def test_down_from_last_row_wraps(self, width: int, height: int) -> None:
        assert move_by_direction(
            Position(0, height - 1), Direction.DOWN, width, height
        ) == Position(0, 0)

    def test_interior_moves(self) -> None:
        origin = Position(2, 2)
        assert move_by_direction(origin, Direction.UP, 5, 5) == Position(2, 1)
        assert move_by_direction(origin, Direction.DOWN, 5, 5) == Position(2, 3)
        assert move_by_direction(origin, Direction.LEFT, 5, 5) == Position(1, 2)
        assert move_by_direction(origin, Direction.RIGHT, 5, 5) == Position(3, 2)

    def test_zero_dimensions_rejected(self) -> None:
        with pytest.raises(ValueError, match="not initialized"):
            move_by_direction(Position(0, 0), Direction.UP, 0, 0)


class TestNeighbors:
    def test_order_matches_directions(self) -> None:
        pos = Position(0, 3)
        expected = tuple(move_by_direction(pos, d, 6, 4) for d in DIRECTIONS)
        assert neighbors(pos, 6, 4) == expected

    def test_all_neighbors_inside_grid(self) -> None:
        for n in neighbors(Position(4, 0), 5, 3):
            assert 0 <= n.x < 5
            assert 0 <= n.y < 3


class TestDirection:
    def test_wire_names(self) -> None:
        assert [d.value for d in DIRECTIONS] == ["up", "right", "down", "left"]

    def test_deltas_cancel_pairwise(self) -> None:
        up, down = Direction.UP.delta, Direction.DOWN.delta
        left, right = Direction.LEFT.delta, Direction.RIGHT.delta
        assert (up[0] + down[0], up[1] + down[1]) == (0, 0)
        assert (left[0] + right[0], left[1] + right[1]) == (0, 0)


class TestToroidalDistance:
    def test_wraps_shorter_way(self) -> None:
        assert toroidal_distance(Position(0, 0), Position(4, 0), 5, 5) == pytest.approx(1.0)

    def test_euclidean_inside(self) -> None:
        assert toroidal_distance(Position(0, 0), Position(3, 4), 10, 10) == pytest.approx(5.0)

    def test_symmetric(self) -> None:
        a, b = Position(1, 7), Position(8, 2)
        assert toroidal_distance(a, b, 9, 9) == toroidal_distance(b, a, 9, 9)
