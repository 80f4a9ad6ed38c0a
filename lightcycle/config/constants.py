"""Centralized tuning constants for the decision engine and client.

All magic numbers used by the search and ranking modules are defined here.
``EngineConfig`` takes its defaults from this module, so consuming modules
should read values from a config instance rather than importing these
literals directly.
"""

from __future__ import annotations

COMPACTNESS_DECAY = 0.75
"""Per-hop geometric decay for the region compactness score."""

HEAD_COUNT_OFFSET = 1.0
"""Added to the opponent-head count before the square root in region quality."""

BOUNDING_EXPONENT = 0.25
"""Exponent applied to the number of distinct players bounding a region."""

FIELD_MAX_SCORE = 1.0
"""Initial (uncontested) territory field value of every cell."""

FIELD_DECAY_BASE = 0.4
"""Base of the per-opponent attenuation term ``1 - base ** (alpha * hops)``."""

FIELD_ALPHA = 0.8
"""Exponent scale of the territory attenuation term."""

FIELD_DISTANCE_DECAY = 0.9
"""Per-hop weight decay when integrating field values from a candidate cell."""

WALL_PENALTY = 0.9
"""Field multiplier for cells adjacent to an opponent trail."""

NEIGHBOUR_HEAD_PENALTY = 0.7
"""Field multiplier for cells adjacent to an opponent head."""

TERRITORY_WEIGHT = 0.05
"""Weight of the integrated territory score inside the direction score."""

COMPACTNESS_WEIGHT = 0.05
"""Weight of the region compactness subtracted from the direction score."""

WALL_FOLLOW_THRESHOLD = 4
"""Hugging a wall is discouraged while an opponent head is at most this many hops away."""

HEAD_AVOIDANCE_MIN_PLAYERS = 2
"""Minimum live heads (self included) before head adjacency is ranked first."""

RECONNECT_DELAY = 0.2
"""Initial delay in seconds before reconnecting after a failure."""

RECONNECT_MAX_DELAY = 5.0
"""Upper bound in seconds for the reconnect backoff."""

BACKOFF_FACTOR = 2.0
"""Multiplier applied to the reconnect delay after each consecutive failure."""

DEFAULT_CONFIG_PATH = "config.toml"
"""Config file read by ``lightcycle run`` when no path is given."""
