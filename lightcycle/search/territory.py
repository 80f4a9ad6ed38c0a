"""Territory field: per-cell contestedness by opponent heads.

Every cell starts at ``field_max_score``. Each opponent head floods outward
over free cells and multiplies the value of a cell ``h`` hops away by
``1 - field_decay_base ** (field_alpha * h)``; contributions of several
opponents compound. Values therefore stay in ``(0, field_max_score]`` and
cells out of every opponent's reach keep the maximum.
"""

from __future__ import annotations

from collections import deque
from dataclasses import dataclass

import numpy as np

from lightcycle.config.types import EngineConfig
from lightcycle.domain.geometry import Position, neighbors
from lightcycle.domain.grid import FREE, GridModel

UNREACHED = -1


def hop_distances(grid: GridModel, origin: Position) -> np.ndarray:
    """BFS hop count from *origin* to every free cell reachable from it.

    *origin* itself is 0 whether or not it is occupied; cells that cannot be
    reached through free cells are ``UNREACHED``.
    """
    free = (grid.occupation == FREE).tolist()
    hops = np.full((grid.height, grid.width), UNREACHED, dtype=np.int64)
    hops[origin.y, origin.x] = 0
    queue: deque[tuple[int, Position]] = deque([(0, origin)])
    while queue:
        dist, pos = queue.popleft()
        for nxt in neighbors(pos, grid.width, grid.height):
            if free[nxt.y][nxt.x] and hops[nxt.y, nxt.x] == UNREACHED:
                hops[nxt.y, nxt.x] = dist + 1
                queue.append((dist + 1, nxt))
    return hops


def _adjacent_to(mask: np.ndarray) -> np.ndarray:
    """Cells whose toroidal 4-neighbourhood contains a True cell of *mask*."""
    return (
        np.roll(mask, 1, axis=0)
        | np.roll(mask, -1, axis=0)
        | np.roll(mask, 1, axis=1)
        | np.roll(mask, -1, axis=1)
    )


@dataclass(frozen=True, eq=False)
class TerritoryField:
    """Territory values plus the adjacency masks used to penalise them."""

    values: np.ndarray
    wall_adjacent: np.ndarray
    head_adjacent: np.ndarray
    weights: np.ndarray

    def value_at(self, pos: Position) -> float:
        return float(self.values[pos.y, pos.x])

    def hugs_wall(self, pos: Position) -> bool:
        """True if *pos* touches an opponent trail cell that is not a head."""
        return bool(self.wall_adjacent[pos.y, pos.x])

    def near_head(self, pos: Position) -> bool:
        """True if *pos* touches a live opponent head."""
        return bool(self.head_adjacent[pos.y, pos.x])

    def integrate(self, grid: GridModel, start: Position, distance_decay: float) -> float:
        """Sum penalised field values over the free region reachable from *start*.

        A cell contributes its weight scaled by the running product of the
        field values along its BFS path and ``distance_decay`` per hop, so near
        and uncontested cells dominate.
        """
        if grid.is_occupied(start):
            return 0.0
        free = (grid.occupation == FREE).tolist()
        values = self.values.tolist()
        weights = self.weights.tolist()

        total = 0.0
        visited = {start}
        queue: deque[tuple[float, Position]] = deque([(1.0, start)])
        while queue:
            scale, pos = queue.popleft()
            total += scale * weights[pos.y][pos.x]
            child_scale = scale * values[pos.y][pos.x] * distance_decay
            for nxt in neighbors(pos, grid.width, grid.height):
                if nxt not in visited and free[nxt.y][nxt.x]:
                    visited.add(nxt)
                    queue.append((child_scale, nxt))
        return total


def compute_territory_field(grid: GridModel, config: EngineConfig | None = None) -> TerritoryField:
    """Build the territory field for the current opponent heads.

    Depends only on opponent heads and the grid, so it is computed once per
    tick and shared by every candidate direction.
    """
    cfg = config or EngineConfig()
    values = np.full((grid.height, grid.width), cfg.field_max_score, dtype=np.float64)

    opponent_heads = grid.opponent_heads()
    for player in sorted(opponent_heads):
        hops = hop_distances(grid, opponent_heads[player])
        reached = hops > 0
        values[reached] *= 1.0 - cfg.field_decay_base ** (cfg.field_alpha * hops[reached])

    head_mask = np.zeros((grid.height, grid.width), dtype=bool)
    for head in opponent_heads.values():
        head_mask[head.y, head.x] = True
    opponent_trail = (grid.occupation != FREE) & (grid.occupation != grid.my_id) & ~head_mask

    wall_adjacent = _adjacent_to(opponent_trail)
    head_adjacent = _adjacent_to(head_mask)
    weights = (
        values
        * np.where(wall_adjacent, cfg.wall_penalty, 1.0)
        * np.where(head_adjacent, cfg.neighbour_head_penalty, 1.0)
    )
    return TerritoryField(
        values=values,
        wall_adjacent=wall_adjacent,
        head_adjacent=head_adjacent,
        weights=weights,
    )
