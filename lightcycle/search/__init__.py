"""Search layer: region exploration, territory field and move ranking."""

from lightcycle.search.ranking import (
    DirectionRanking,
    lookahead_score,
    rank_directions,
    total_order,
)
from lightcycle.search.region import Region, evaluate_region, explore_region
from lightcycle.search.territory import TerritoryField, compute_territory_field, hop_distances

__all__ = [
    "DirectionRanking",
    "Region",
    "TerritoryField",
    "compute_territory_field",
    "evaluate_region",
    "explore_region",
    "hop_distances",
    "lookahead_score",
    "rank_directions",
    "total_order",
]
