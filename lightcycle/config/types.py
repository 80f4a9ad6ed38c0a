"""Configuration dataclasses and the TOML config loader.

All frozen dataclasses that parameterise the engine, the server session and
the reconnect loop live here.
"""

from __future__ import annotations

import tomllib
from dataclasses import dataclass, field, fields
from pathlib import Path
from typing import Any

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

__all__ = [
    "AgentConfig",
    "ClientConfig",
    "EngineConfig",
    "ServerConfig",
    "UserConfig",
    "load_config",
    "parse_config",
]

# ---------------------------------------------------------------------------
# Config dataclasses
# ---------------------------------------------------------------------------


def _require_open_unit(name: str, value: float) -> None:
    if not 0.0 < value < 1.0:
        raise ValueError(f"{name} must be in (0.0, 1.0)")


def _require_half_open_unit(name: str, value: float) -> None:
    if not 0.0 < value <= 1.0:
        raise ValueError(f"{name} must be in (0.0, 1.0]")


@dataclass(frozen=True)
class EngineConfig:
    """Tunable constants of the region, territory and ranking heuristics."""

    compactness_decay: float = COMPACTNESS_DECAY
    head_count_offset: float = HEAD_COUNT_OFFSET
    bounding_exponent: float = BOUNDING_EXPONENT
    field_max_score: float = FIELD_MAX_SCORE
    field_decay_base: float = FIELD_DECAY_BASE
    field_alpha: float = FIELD_ALPHA
    field_distance_decay: float = FIELD_DISTANCE_DECAY
    wall_penalty: float = WALL_PENALTY
    neighbour_head_penalty: float = NEIGHBOUR_HEAD_PENALTY
    territory_weight: float = TERRITORY_WEIGHT
    compactness_weight: float = COMPACTNESS_WEIGHT
    wall_follow_threshold: int = WALL_FOLLOW_THRESHOLD
    head_avoidance_min_players: int = HEAD_AVOIDANCE_MIN_PLAYERS

    def __post_init__(self) -> None:
        _require_open_unit("compactness_decay", self.compactness_decay)
        _require_open_unit("field_decay_base", self.field_decay_base)
        _require_half_open_unit("field_max_score", self.field_max_score)
        _require_half_open_unit("field_distance_decay", self.field_distance_decay)
        _require_half_open_unit("wall_penalty", self.wall_penalty)
        _require_half_open_unit("neighbour_head_penalty", self.neighbour_head_penalty)
        if self.head_count_offset <= 0.0:
            raise ValueError("head_count_offset must be > 0")
        if self.bounding_exponent < 0.0:
            raise ValueError("bounding_exponent must be >= 0")
        if self.field_alpha <= 0.0:
            raise ValueError("field_alpha must be > 0")
        if self.territory_weight < 0.0:
            raise ValueError("territory_weight must be >= 0")
        if self.compactness_weight < 0.0:
            raise ValueError("compactness_weight must be >= 0")
        if self.wall_follow_threshold < 0:
            raise ValueError("wall_follow_threshold must be >= 0")
        if self.head_avoidance_min_players < 1:
            raise ValueError("head_avoidance_min_players must be >= 1")


@dataclass(frozen=True)
class ServerConfig:
    """Game server endpoint formatted as ``host:port``.

    IPv6 literals are written in brackets, e.g. ``[::1]:4000``.
    """

    address: str

    def __post_init__(self) -> None:
        host, sep, port = self.address.rpartition(":")
        if not sep or not host:
            raise ValueError("address must be formatted as host:port")
        if host.startswith("[") != host.endswith("]") or host == "[]":
            raise ValueError("address has a malformed bracketed IPv6 host")
        if not port.isdigit() or not 0 < int(port) < 65536:
            raise ValueError("address port must be an integer in [1, 65535]")

    @property
    def host(self) -> str:
        host = self.address.rpartition(":")[0]
        if host.startswith("[") and host.endswith("]"):
            return host[1:-1]
        return host

    @property
    def port(self) -> int:
        return int(self.address.rpartition(":")[2])


@dataclass(frozen=True)
class UserConfig:
    """Credentials sent with the ``join`` command."""

    user: str
    password: str

    def __post_init__(self) -> None:
        if not self.user:
            raise ValueError("user must not be empty")
        if "|" in self.user or "|" in self.password:
            raise ValueError("user and password must not contain '|'")


@dataclass(frozen=True)
class ClientConfig:
    """Reconnect backoff and RNG seeding for the session loop."""

    reconnect_delay: float = RECONNECT_DELAY
    reconnect_max_delay: float = RECONNECT_MAX_DELAY
    backoff_factor: float = BACKOFF_FACTOR
    seed: int | None = None

    def __post_init__(self) -> None:
        if self.reconnect_delay < 0.0:
            raise ValueError("reconnect_delay must be >= 0")
        if self.reconnect_max_delay < self.reconnect_delay:
            raise ValueError("reconnect_max_delay must be >= reconnect_delay")
        if self.backoff_factor < 1.0:
            raise ValueError("backoff_factor must be >= 1")


@dataclass(frozen=True)
class AgentConfig:
    """Everything ``lightcycle run`` needs: endpoint, credentials and tuning."""

    server: ServerConfig
    user: UserConfig
    engine: EngineConfig = field(default_factory=EngineConfig)
    client: ClientConfig = field(default_factory=ClientConfig)


# ---------------------------------------------------------------------------
# Loader
# ---------------------------------------------------------------------------


def _build_section(cls: type, section: str, raw: Any) -> Any:
    """Instantiate *cls* from a TOML table, rejecting unknown keys."""
    if not isinstance(raw, dict):
        raise ValueError(f"[{section}] must be a table")
    known = {f.name for f in fields(cls)}
    unknown = sorted(set(raw) - known)
    if unknown:
        raise ValueError(f"unknown keys in [{section}]: {', '.join(unknown)}")
    try:
        return cls(**raw)
    except TypeError as exc:
        raise ValueError(f"invalid [{section}] section: {exc}") from exc


def parse_config(data: dict[str, Any]) -> AgentConfig:
    """Build an ``AgentConfig`` from an already-parsed TOML document."""
    for required in ("server", "user"):
        if required not in data:
            raise ValueError(f"missing [{required}] section")
    return AgentConfig(
        server=_build_section(ServerConfig, "server", data["server"]),
        user=_build_section(UserConfig, "user", data["user"]),
        engine=_build_section(EngineConfig, "engine", data.get("engine", {})),
        client=_build_section(ClientConfig, "client", data.get("client", {})),
    )


def load_config(path: Path) -> AgentConfig:
    """Read and validate the TOML config file at *path*."""
    with Path(path).open("rb") as fh:
        data = tomllib.load(fh)
    return parse_config(data)
