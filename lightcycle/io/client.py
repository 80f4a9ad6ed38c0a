"""TCP session loop: join, answer ticks with moves, reconnect on failure."""

from __future__ import annotations

import logging
import socket
import time
from collections.abc import Callable
from random import Random
from typing import TextIO

from lightcycle.config.types import AgentConfig, ClientConfig, ServerConfig, UserConfig
from lightcycle.engine import DecisionEngine
from lightcycle.io.protocol import (
    Answer,
    Command,
    Error,
    Join,
    Lose,
    Motd,
    ProtocolError,
    Win,
    encode_command,
    parse_answer,
)

logger = logging.getLogger(__name__)

ConnectFn = Callable[[tuple[str, int]], socket.socket]
SleepFn = Callable[[float], None]


class SessionTerminated(ConnectionError):
    """The server kicked this client."""


class Backoff:
    """Exponential reconnect delay, reset after a successful connect."""

    def __init__(self, config: ClientConfig) -> None:
        self._config = config
        self._delay = config.reconnect_delay

    def next_delay(self) -> float:
        delay = self._delay
        self._delay = min(self._delay * self._config.backoff_factor, self._config.reconnect_max_delay)
        return delay

    def reset(self) -> None:
        self._delay = self._config.reconnect_delay


def read_answer(reader: TextIO) -> Answer | None:
    """Read and parse one line; EOF and empty lines raise ``ProtocolError``."""
    line = reader.readline()
    logger.debug("Received answer: %s", line.strip())
    if not line.strip():
        raise ProtocolError("Empty answer from server.")
    return parse_answer(line)


def send_command(writer: TextIO, command: Command) -> None:
    data = encode_command(command)
    logger.debug("Sending command: %s", data.strip())
    writer.write(data)
    writer.flush()


def play_session(
    user: UserConfig, reader: TextIO, writer: TextIO, engine: DecisionEngine
) -> None:
    """Join and play until the connection fails.

    Never returns normally: ends with ``ProtocolError`` when the stream dies or
    ``SessionTerminated`` when the server kicks the client.
    """
    logger.info("Joining game as %s", user.user)
    send_command(writer, Join(user.user, user.password))
    logger.info("Starting game loop.")
    while True:
        answer = read_answer(reader)
        if answer is None:
            continue
        if isinstance(answer, Motd):
            logger.warning("Message of the day: %s", answer.message)
        elif isinstance(answer, Error):
            logger.warning("Error from server: %s", answer.message)
            if answer.kicked:
                raise SessionTerminated(answer.message)
        elif isinstance(answer, Win):
            logger.warning("We won! (%d wins, %d losses)", answer.wins, answer.losses)
        elif isinstance(answer, Lose):
            logger.warning("We lost! (%d wins, %d losses)", answer.wins, answer.losses)
        command = engine.handle(answer)
        if command is not None:
            send_command(writer, command)


def connect(
    server: ServerConfig,
    backoff: Backoff,
    connect_fn: ConnectFn = socket.create_connection,
    sleep: SleepFn = time.sleep,
) -> socket.socket:
    """Connect to *server*, retrying with backoff until it succeeds."""
    while True:
        try:
            sock = connect_fn((server.host, server.port))
        except OSError as exc:
            logger.error("Could not connect: %s", exc)
            sleep(backoff.next_delay())
            continue
        backoff.reset()
        return sock


def run_forever(
    config: AgentConfig,
    connect_fn: ConnectFn = socket.create_connection,
    sleep: SleepFn = time.sleep,
    max_sessions: int | None = None,
) -> None:
    """Play session after session; each I/O failure triggers a reconnect.

    ``max_sessions`` bounds the number of sessions, mainly for tests.
    """
    rng = Random(config.client.seed)
    backoff = Backoff(config.client)
    sessions = 0
    while max_sessions is None or sessions < max_sessions:
        sock = connect(config.server, backoff, connect_fn=connect_fn, sleep=sleep)
        sessions += 1
        with (
            sock,
            sock.makefile("r", encoding="utf-8", newline="\n") as reader,
            sock.makefile("w", encoding="utf-8", newline="\n") as writer,
        ):
            engine = DecisionEngine(config.engine, rng=rng)
            try:
                play_session(config.user, reader, writer, engine)
            except OSError as exc:
                logger.error("IO error: %s", exc)
        sleep(backoff.next_delay())
