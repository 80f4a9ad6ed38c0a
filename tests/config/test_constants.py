from lightcycle.config.constants import (
    BACKOFF_FACTOR,
    BOUNDING_EXPONENT,
    COMPACTNESS_DECAY,
    COMPACTNESS_WEIGHT,
    FIELD_ALPHA,
    FIELD_DECAY_BASE,
    FIELD_DISTANCE_DECAY,
    FIELD_MAX_SCORE,
    HEAD_AVOIDANCE_MIN_PLAYERS,
    HEAD_COUNT_OFFSET,
    NEIGHBOUR_HEAD_PENALTY,
    RECONNECT_DELAY,
    RECONNECT_MAX_DELAY,
    TERRITORY_WEIGHT,
    WALL_FOLLOW_THRESHOLD,
    WALL_PENALTY,
)
from lightcycle.config.types import EngineConfig


def test_decay_bases_in_open_unit_interval() -> None:
    assert 0.0 < COMPACTNESS_DECAY < 1.0
    assert 0.0 < FIELD_DECAY_BASE < 1.0


def test_field_max_score_in_unit_interval() -> None:
    assert 0.0 < FIELD_MAX_SCORE <= 1.0


def test_penalties_only_shrink_values() -> None:
    assert 0.0 < WALL_PENALTY <= 1.0
    assert 0.0 < NEIGHBOUR_HEAD_PENALTY <= 1.0
    assert 0.0 < FIELD_DISTANCE_DECAY <= 1.0


def test_head_count_offset_avoids_division_by_zero() -> None:
    assert HEAD_COUNT_OFFSET > 0.0


def test_exponents_positive() -> None:
    assert FIELD_ALPHA > 0.0
    assert BOUNDING_EXPONENT >= 0.0
    assert TERRITORY_WEIGHT >= 0.0
    assert COMPACTNESS_WEIGHT >= 0.0


def test_thresholds_are_small_ints() -> None:
    assert isinstance(WALL_FOLLOW_THRESHOLD, int) and WALL_FOLLOW_THRESHOLD >= 0
    assert isinstance(HEAD_AVOIDANCE_MIN_PLAYERS, int) and HEAD_AVOIDANCE_MIN_PLAYERS >= 1


def test_backoff_bounds() -> None:
    assert 0.0 <= RECONNECT_DELAY <= RECONNECT_MAX_DELAY
    assert BACKOFF_FACTOR >= 1.0


def test_engine_config_defaults_validate() -> None:
    # Defaults come straight from the constants module and must pass validation.
    config = EngineConfig()
    assert config.compactness_decay == COMPACTNESS_DECAY
    assert config.wall_follow_threshold == WALL_FOLLOW_THRESHOLD
