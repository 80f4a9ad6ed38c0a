"""Move ranking: lexicographic scoring of candidate directions.

Each legal direction gets a ``DirectionRanking``; rankings sort ascending on
``sort_key()`` and the first one is the move to play. Key order:

1. adjacency to a live opponent head (False first)
2. one-ply lookahead region score
3. wall-following flag (False first)
4. direct evaluation score
5. uniform random tie-break
"""

from __future__ import annotations

import math
from dataclasses import dataclass
from random import Random

from lightcycle.config.types import EngineConfig
from lightcycle.domain.geometry import Direction, Position
from lightcycle.domain.grid import GridModel
from lightcycle.search.region import Region, evaluate_region, explore_region
from lightcycle.search.territory import TerritoryField

SortableFloat = tuple[int, float]


def total_order(value: float) -> SortableFloat:
    """Sort key for a float that places NaN after every other value."""
    if math.isnan(value):
        return (1, 0.0)
    return (0, value)


@dataclass(frozen=True)
class DirectionRanking:
    """Ranking key of one candidate direction, lower is better."""

    direction: Direction
    has_neighbour_head: bool
    lookahead_score: float
    hugs_wall: bool
    direction_score: float
    tie_break: float

    def sort_key(self) -> tuple[bool, SortableFloat, bool, SortableFloat, SortableFloat]:
        return (
            self.has_neighbour_head,
            total_order(self.lookahead_score),
            self.hugs_wall,
            total_order(self.direction_score),
            total_order(self.tie_break),
        )


def score_region(region: Region, config: EngineConfig) -> float:
    return evaluate_region(region, config.head_count_offset, config.bounding_exponent)


def lookahead_score(grid: GridModel, destination: Position, config: EngineConfig) -> float:
    """Best follow-up region score after moving to *destination*.

    The move is simulated on a copy of *grid*. The score is the minimum (most
    favourable) region score over the legal follow-up moves, or ``0.0`` when
    the simulated position is a dead end.
    """
    simulated = grid.simulate_step(destination)
    scores = [
        score_region(
            explore_region(simulated, simulated.step(destination, d), config.compactness_decay),
            config,
        )
        for d in simulated.legal_directions(destination)
    ]
    return min(scores, default=0.0)


def direction_score(
    grid: GridModel,
    destination: Position,
    region: Region,
    territory: TerritoryField,
    config: EngineConfig,
) -> float:
    """Inverse distance to the nearest reachable head, lower is better.

    Claimable territory and the compactness of the region behind
    *destination* are subtracted, so wide uncontested regions score lowest.
    """
    nearest = region.nearest_head_distance
    proximity = 0.0 if nearest is None else 1.0 / max(nearest, 1)
    claimable = territory.integrate(grid, destination, config.field_distance_decay)
    return (
        proximity
        - config.territory_weight * claimable
        - config.compactness_weight * region.compactness
    )


def rank_direction(
    grid: GridModel,
    direction: Direction,
    territory: TerritoryField,
    rng: Random,
    config: EngineConfig,
) -> DirectionRanking:
    destination = grid.step(grid.my_position, direction)
    region = explore_region(grid, destination, config.compactness_decay)
    nearest = region.nearest_head_distance

    contested = (
        territory.near_head(destination) and len(grid.heads) >= config.head_avoidance_min_players
    )
    hugs_wall = (
        territory.hugs_wall(destination)
        and nearest is not None
        and nearest <= config.wall_follow_threshold
    )
    return DirectionRanking(
        direction=direction,
        has_neighbour_head=contested,
        lookahead_score=lookahead_score(grid, destination, config),
        hugs_wall=hugs_wall,
        direction_score=direction_score(grid, destination, region, territory, config),
        tie_break=rng.random(),
    )


def rank_directions(
    grid: GridModel,
    directions: list[Direction],
    territory: TerritoryField,
    rng: Random,
    config: EngineConfig | None = None,
) -> list[DirectionRanking]:
    """Rank the legal *directions*, best first.

    Occupied destinations are dropped, so an illegal move is never ranked.
    Random draws happen in the order of *directions*, which keeps the result
    reproducible for a seeded *rng*.
    """
    cfg = config or EngineConfig()
    rankings = [
        rank_direction(grid, d, territory, rng, cfg)
        for d in directions
        if not grid.is_occupied(grid.step(grid.my_position, d))
    ]
    return sorted(rankings, key=DirectionRanking.sort_key)
