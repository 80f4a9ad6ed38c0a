"""Toroidal occupancy grid and per-player head positions.

Trail invariant: a cell set by a position update stays occupied until a death
event names its owner. Trails never fade on their own.
"""

from __future__ import annotations

import logging
from collections.abc import Iterable
from dataclasses import dataclass, field

import numpy as np

from lightcycle.domain.geometry import DIRECTIONS, Direction, Position, move_by_direction

logger = logging.getLogger(__name__)

PlayerId = int

FREE = -1
"""Sentinel stored in the occupancy array for an unowned cell."""


def _empty_occupation(width: int, height: int) -> np.ndarray:
    return np.full((height, width), FREE, dtype=np.int64)


@dataclass(eq=False)
class GridModel:
    """Game state observed from the event stream.

    ``occupation`` is a ``(height, width)`` array indexed ``[y, x]`` holding the
    owning ``PlayerId`` of every cell or ``FREE``.
    """

    width: int = 0
    height: int = 0
    my_id: PlayerId = 0
    my_position: Position = Position(0, 0)
    occupation: np.ndarray = field(default_factory=lambda: _empty_occupation(0, 0))
    heads: dict[PlayerId, Position] = field(default_factory=dict)

    # -- event application -------------------------------------------------

    def apply_game_start(self, width: int, height: int, my_id: PlayerId) -> None:
        """Reset the model for a new game of the given size."""
        self.width = max(width, 0)
        self.height = max(height, 0)
        self.my_id = my_id
        self.my_position = Position(0, 0)
        self.occupation = _empty_occupation(self.width, self.height)
        self.heads.clear()

    def apply_position_update(self, player: PlayerId, pos: Position) -> None:
        """Mark *pos* as owned by *player* and move its head there."""
        if not self.contains(pos):
            logger.warning("Ignoring position %s outside %dx%d grid", pos, self.width, self.height)
            return
        self.occupation[pos.y, pos.x] = player
        self.heads[player] = pos
        if player == self.my_id:
            self.my_position = pos

    def apply_deaths(self, players: Iterable[PlayerId]) -> None:
        """Clear every cell owned by any of *players* in one batch."""
        dead = list(dict.fromkeys(players))
        if not dead:
            return
        mask = np.isin(self.occupation, dead)
        self.occupation[mask] = FREE
        for player in dead:
            self.heads.pop(player, None)

    def reset(self) -> None:
        """Return to the uninitialized state."""
        self.apply_game_start(0, 0, 0)

    # -- queries -----------------------------------------------------------

    def is_initialized(self) -> bool:
        return self.width > 0 and self.height > 0

    def contains(self, pos: Position) -> bool:
        return 0 <= pos.x < self.width and 0 <= pos.y < self.height

    def is_occupied(self, pos: Position) -> bool:
        return bool(self.occupation[pos.y, pos.x] != FREE)

    def owner(self, pos: Position) -> PlayerId | None:
        value = int(self.occupation[pos.y, pos.x])
        return None if value == FREE else value

    def opponent_heads(self) -> dict[PlayerId, Position]:
        """Heads of every live player except the agent."""
        return {p: pos for p, pos in self.heads.items() if p != self.my_id}

    def free_cell_count(self) -> int:
        return int(np.count_nonzero(self.occupation == FREE))

    def step(self, pos: Position, direction: Direction) -> Position:
        return move_by_direction(pos, direction, self.width, self.height)

    def legal_directions(self, pos: Position | None = None) -> list[Direction]:
        """Directions from *pos* (default: own head) whose destination is free."""
        origin = self.my_position if pos is None else pos
        return [d for d in DIRECTIONS if not self.is_occupied(self.step(origin, d))]

    # -- what-if simulation ------------------------------------------------

    def copy(self) -> GridModel:
        return GridModel(
            width=self.width,
            height=self.height,
            my_id=self.my_id,
            my_position=self.my_position,
            occupation=self.occupation.copy(),
            heads=dict(self.heads),
        )

    def simulate_step(self, pos: Position) -> GridModel:
        """Return a copy in which the agent has moved to *pos*; ``self`` is untouched."""
        snapshot = self.copy()
        snapshot.apply_position_update(self.my_id, pos)
        return snapshot
