"""Toroidal grid geometry: positions, move directions and wrap-around moves."""

from __future__ import annotations

import math
from enum import Enum
from typing import NamedTuple


class Position(NamedTuple):
    """A grid cell; equality and hashing are by value."""

    x: int
    y: int


class Direction(Enum):
    """Cardinal move; the value is the wire name used in ``move|<value>``."""

    UP = "up"
    RIGHT = "right"
    DOWN = "down"
    LEFT = "left"

    @property
    def delta(self) -> tuple[int, int]:
        return _DELTAS[self]


_DELTAS: dict[Direction, tuple[int, int]] = {
    Direction.UP: (0, -1),
    Direction.RIGHT: (1, 0),
    Direction.DOWN: (0, 1),
    Direction.LEFT: (-1, 0),
}

DIRECTIONS: tuple[Direction, ...] = tuple(Direction)
"""All four directions in wire order; candidate enumeration follows this order."""


def _check_dimensions(width: int, height: int) -> None:
    if width < 1 or height < 1:
        raise ValueError("grid dimensions must be >= 1 (grid not initialized?)")


def move_by_direction(pos: Position, direction: Direction, width: int, height: int) -> Position:
    """Apply *direction* to *pos*, wrapping around both grid edges."""
    _check_dimensions(width, height)
    dx, dy = direction.delta
    return Position((pos.x + dx) % width, (pos.y + dy) % height)


def neighbors(pos: Position, width: int, height: int) -> tuple[Position, ...]:
    """Return the four toroidal 4-neighbours of *pos* in ``DIRECTIONS`` order.

    On grids narrower than 3 cells the same cell can appear twice.
    """
    x, y = pos
    return (
        Position(x, (y - 1) % height),
        Position((x + 1) % width, y),
        Position(x, (y + 1) % height),
        Position((x - 1) % width, y),
    )


def toroidal_distance(a: Position, b: Position, width: int, height: int) -> float:
    """Euclidean distance between two cells taking the shorter way around each axis."""
    _check_dimensions(width, height)
    dx = abs(a.x - b.x) % width
    dy = abs(a.y - b.y) % height
    return math.hypot(min(dx, width - dx), min(dy, height - dy))
