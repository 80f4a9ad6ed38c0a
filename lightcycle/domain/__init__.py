"""Domain layer: toroidal geometry and the observed game grid."""

from lightcycle.domain.geometry import (
    DIRECTIONS,
    Direction,
    Position,
    move_by_direction,
    neighbors,
    toroidal_distance,
)
from lightcycle.domain.grid import FREE, GridModel, PlayerId

__all__ = [
    "DIRECTIONS",
    "Direction",
    "FREE",
    "GridModel",
    "PlayerId",
    "Position",
    "move_by_direction",
    "neighbors",
    "toroidal_distance",
]
