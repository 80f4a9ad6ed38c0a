"""Decision entry point and the per-connection engine session.

``decide_move`` is read-only with respect to the grid it is given: the
one-ply lookahead works on copies. It abstains (returns None) before the
first game start and when every neighbour cell is occupied.
"""

from __future__ import annotations

import logging
from random import Random

from lightcycle.config.types import EngineConfig
from lightcycle.domain.geometry import Direction, toroidal_distance
from lightcycle.domain.grid import GridModel
from lightcycle.io.protocol import Answer, Command, Die, Game, Move, Pos, Tick
from lightcycle.search.ranking import DirectionRanking, rank_directions
from lightcycle.search.territory import compute_territory_field

logger = logging.getLogger(__name__)


def _log_nearest_opponent(grid: GridModel) -> None:
    opponents = grid.opponent_heads()
    if not opponents:
        return
    player, head = min(
        opponents.items(),
        key=lambda item: toroidal_distance(grid.my_position, item[1], grid.width, grid.height),
    )
    distance = toroidal_distance(grid.my_position, head, grid.width, grid.height)
    logger.debug("Nearest opponent %d at %s, distance %.2f", player, head, distance)


def _explain(rankings: list[DirectionRanking]) -> None:
    """Log which ranking key separated the winner from the runner-up."""
    best, second = rankings[0], rankings[1]
    if best.has_neighbour_head != second.has_neighbour_head:
        logger.info("Avoiding other head")
    elif best.lookahead_score != second.lookahead_score:
        logger.info(
            "Room score different: %s: %s, %s: %s",
            best.direction.value,
            best.lookahead_score,
            second.direction.value,
            second.lookahead_score,
        )
    elif best.hugs_wall != second.hugs_wall:
        logger.info("Leaving wall while a head is near")
    elif best.direction_score != second.direction_score:
        logger.info(
            "Better direction: %s: %s, %s: %s",
            best.direction.value,
            best.direction_score,
            second.direction.value,
            second.direction_score,
        )
    else:
        logger.info("Using random direction")


def decide_move(
    grid: GridModel, rng: Random, config: EngineConfig | None = None
) -> Direction | None:
    """Pick the move for the current tick, or None if there is nothing to do."""
    if not grid.is_initialized():
        return None

    legal = grid.legal_directions()
    if not legal:
        logger.warning("No step possible.")
        return None
    if len(legal) == 1:
        logger.info("Only one step possible.")
        return legal[0]

    _log_nearest_opponent(grid)
    cfg = config or EngineConfig()
    territory = compute_territory_field(grid, cfg)
    rankings = rank_directions(grid, legal, territory, rng, cfg)
    logger.debug("Rankings: %s", rankings)
    _explain(rankings)
    return rankings[0].direction


class DecisionEngine:
    """Owns the grid model for one connection and turns answers into commands."""

    def __init__(
        self,
        config: EngineConfig | None = None,
        rng: Random | None = None,
        seed: int | None = None,
    ) -> None:
        self.config = config or EngineConfig()
        self.rng = rng if rng is not None else Random(seed)
        self.grid = GridModel()

    def apply(self, answer: Answer) -> None:
        """Fold a state-changing answer into the grid; other answers are ignored."""
        if isinstance(answer, Pos):
            self.grid.apply_position_update(answer.player, answer.position)
        elif isinstance(answer, Game):
            self.grid.apply_game_start(answer.width, answer.height, answer.player)
        elif isinstance(answer, Die):
            self.grid.apply_deaths(answer.players)

    def decide(self) -> Direction | None:
        return decide_move(self.grid, self.rng, self.config)

    def handle(self, answer: Answer) -> Command | None:
        """Process one answer; returns the move to send on a tick, if any."""
        command: Command | None = None
        if isinstance(answer, Tick):
            direction = self.decide()
            if direction is not None:
                command = Move(direction)
                logger.info("Command: %s", command)
        self.apply(answer)
        return command
