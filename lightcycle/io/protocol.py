"""Line-oriented wire protocol: ``|``-delimited UTF-8 messages, one per line.

Server answers are parsed leniently: missing or malformed numeric fields
read as ``0`` and unknown tags are logged and skipped. Only an empty line is
fatal, since the server never sends one on a live connection.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import TypeAlias

from lightcycle.domain.geometry import Direction, Position
from lightcycle.domain.grid import PlayerId

logger = logging.getLogger(__name__)


class ProtocolError(ConnectionError):
    """The server sent an empty line or closed the stream."""


# ---------------------------------------------------------------------------
# Server -> client
# ---------------------------------------------------------------------------


@dataclass(frozen=True)
class Motd:
    message: str


@dataclass(frozen=True)
class Error:
    message: str

    @property
    def kicked(self) -> bool:
        return "kicked" in self.message


@dataclass(frozen=True)
class Pos:
    player: PlayerId
    position: Position


@dataclass(frozen=True)
class Win:
    wins: int
    losses: int


@dataclass(frozen=True)
class Lose:
    wins: int
    losses: int


@dataclass(frozen=True)
class Game:
    width: int
    height: int
    player: PlayerId


@dataclass(frozen=True)
class Tick:
    pass


@dataclass(frozen=True)
class Die:
    players: tuple[PlayerId, ...]


@dataclass(frozen=True)
class Message:
    player: PlayerId
    text: str


@dataclass(frozen=True)
class Player:
    player: PlayerId
    name: str


Answer: TypeAlias = Motd | Error | Pos | Win | Lose | Game | Tick | Die | Message | Player

# ---------------------------------------------------------------------------
# Client -> server
# ---------------------------------------------------------------------------


@dataclass(frozen=True)
class Join:
    user: str
    password: str


@dataclass(frozen=True)
class Move:
    direction: Direction


@dataclass(frozen=True)
class Chat:
    text: str


Command: TypeAlias = Join | Move | Chat

# ---------------------------------------------------------------------------
# Codec
# ---------------------------------------------------------------------------


def _int_field(fields: list[str], index: int) -> int:
    try:
        return int(fields[index])
    except (IndexError, ValueError):
        return 0


def _text_field(fields: list[str], index: int) -> str:
    """Return the remainder of the line from *index*, keeping embedded pipes."""
    return "|".join(fields[index:])


def parse_answer(line: str) -> Answer | None:
    """Parse one server line; returns None for tags the client does not know."""
    fields = line.rstrip("\r\n").split("|")
    tag = fields[0]
    if tag == "":
        raise ProtocolError("Empty answer from server.")
    if tag == "motd":
        return Motd(_text_field(fields, 1))
    if tag == "error":
        return Error(_text_field(fields, 1))
    if tag == "pos":
        return Pos(_int_field(fields, 1), Position(_int_field(fields, 2), _int_field(fields, 3)))
    if tag == "win":
        return Win(_int_field(fields, 1), _int_field(fields, 2))
    if tag == "lose":
        return Lose(_int_field(fields, 1), _int_field(fields, 2))
    if tag == "game":
        return Game(_int_field(fields, 1), _int_field(fields, 2), _int_field(fields, 3))
    if tag == "tick":
        return Tick()
    if tag == "die":
        return Die(tuple(_int_field(fields, i) for i in range(1, len(fields))))
    if tag == "message":
        return Message(_int_field(fields, 1), _text_field(fields, 2))
    if tag == "player":
        return Player(_int_field(fields, 1), _text_field(fields, 2))
    logger.warning("Unknown message from server: %s", tag)
    return None


def encode_command(command: Command) -> str:
    """Serialise *command* to a newline-terminated wire line."""
    if isinstance(command, Join):
        return f"join|{command.user}|{command.password}\n"
    if isinstance(command, Move):
        return f"move|{command.direction.value}\n"
    if isinstance(command, Chat):
        return f"chat|{command.text}\n"
    raise TypeError(f"not a command: {command!r}")
