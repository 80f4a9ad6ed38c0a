"""Region exploration: breadth-first flood fill over free cells.

The fill expands through free cells only. Occupied cells are recorded as
boundaries (their owner joins ``bounding_players``) except the starting cell,
which is always expanded so a just-occupied head can be explored from.
"""

from __future__ import annotations

import math
from collections import deque
from dataclasses import dataclass, field

from lightcycle.config.constants import BOUNDING_EXPONENT, COMPACTNESS_DECAY, HEAD_COUNT_OFFSET
from lightcycle.domain.geometry import Position, neighbors
from lightcycle.domain.grid import FREE, GridModel, PlayerId


@dataclass
class Region:
    """Summary of the free area reachable from one cell."""

    size: int = 0
    head_distances: list[tuple[int, PlayerId]] = field(default_factory=list)
    bounding_players: set[PlayerId] = field(default_factory=set)
    compactness: float = 0.0

    @property
    def head_count(self) -> int:
        return len(self.head_distances)

    @property
    def nearest_head_distance(self) -> int | None:
        """Hop distance to the closest reachable opponent head, or None."""
        if not self.head_distances:
            return None
        return min(dist for dist, _ in self.head_distances)


def explore_region(
    grid: GridModel, start: Position, compactness_decay: float = COMPACTNESS_DECAY
) -> Region:
    """Flood-fill from *start* and summarise the reachable free region.

    Opponent heads met on the way are recorded with their hop distance; heads
    owned by the agent are never counted.
    """
    occupation = grid.occupation.tolist()
    opponent_heads = {pos: player for player, pos in grid.opponent_heads().items()}
    region = Region()

    visited = {start}
    queue: deque[tuple[int, Position]] = deque([(0, start)])
    while queue:
        dist, pos = queue.popleft()
        head_owner = opponent_heads.get(pos)
        if head_owner is not None:
            region.head_distances.append((dist, head_owner))

        owner = occupation[pos.y][pos.x]
        if owner == FREE:
            region.size += 1
            region.compactness += compactness_decay**dist
        elif pos != start:
            region.bounding_players.add(owner)
            continue

        for nxt in neighbors(pos, grid.width, grid.height):
            if nxt not in visited:
                visited.add(nxt)
                queue.append((dist + 1, nxt))
    return region


def evaluate_region(
    region: Region,
    head_count_offset: float = HEAD_COUNT_OFFSET,
    bounding_exponent: float = BOUNDING_EXPONENT,
) -> float:
    """Signed region quality; more negative means a larger, less contested region.

    A region without reachable opponent heads divides by ``sqrt(offset)``, so it
    scores as a large uncontested area rather than an infinite one.
    """
    bounding = max(len(region.bounding_players), 1) ** bounding_exponent
    return -region.size * bounding / math.sqrt(region.head_count + head_count_offset)
