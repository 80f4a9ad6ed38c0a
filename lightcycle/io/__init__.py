"""I/O layer: wire protocol codec and the TCP session loop."""

from lightcycle.io.protocol import (
    Answer,
    Command,
    ProtocolError,
    encode_command,
    parse_answer,
)

__all__ = [
    "Answer",
    "Command",
    "ProtocolError",
    "encode_command",
    "parse_answer",
]
