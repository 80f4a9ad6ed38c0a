"""Configuration layer: tuning constants, typed config dataclasses and loader."""

from lightcycle.config.constants import (
    BACKOFF_FACTOR,
    COMPACTNESS_DECAY,
    DEFAULT_CONFIG_PATH,
    FIELD_ALPHA,
    FIELD_DECAY_BASE,
    FIELD_MAX_SCORE,
    RECONNECT_DELAY,
    RECONNECT_MAX_DELAY,
    WALL_FOLLOW_THRESHOLD,
)
from lightcycle.config.types import (
    AgentConfig,
    ClientConfig,
    EngineConfig,
    ServerConfig,
    UserConfig,
    load_config,
    parse_config,
)

__all__ = [
    "AgentConfig",
    "BACKOFF_FACTOR",
    "COMPACTNESS_DECAY",
    "ClientConfig",
    "DEFAULT_CONFIG_PATH",
    "EngineConfig",
    "FIELD_ALPHA",
    "FIELD_DECAY_BASE",
    "FIELD_MAX_SCORE",
    "RECONNECT_DELAY",
    "RECONNECT_MAX_DELAY",
    "ServerConfig",
    "UserConfig",
    "WALL_FOLLOW_THRESHOLD",
    "load_config",
    "parse_config",
]
