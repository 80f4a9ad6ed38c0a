"""CLI entrypoint: play against a server or replay a recorded transcript.

- ``lightcycle run [CONFIG]``   connect, join and play until interrupted
- ``lightcycle replay FILE``    feed recorded server lines through the engine
"""

from __future__ import annotations

import argparse
import json
import logging
from collections import Counter
from pathlib import Path
from typing import Any

from lightcycle.config.constants import DEFAULT_CONFIG_PATH
from lightcycle.config.types import EngineConfig, load_config
from lightcycle.engine import DecisionEngine
from lightcycle.io.client import run_forever
from lightcycle.io.protocol import Move, Tick, parse_answer
from lightcycle.search.territory import compute_territory_field

logger = logging.getLogger(__name__)

LOG_LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR")


def replay_transcript(
    transcript: Path,
    seed: int | None = None,
    config: EngineConfig | None = None,
) -> tuple[dict[str, Any], DecisionEngine]:
    """Run every line of *transcript* through a fresh engine.

    Blank lines are skipped. Returns a JSON-serialisable summary and the
    engine so callers can inspect the final grid.
    """
    engine = DecisionEngine(config, seed=seed)
    moves: Counter[str] = Counter()
    ticks = 0
    abstained = 0
    with Path(transcript).open(encoding="utf-8") as fh:
        for line in fh:
            if not line.strip():
                continue
            answer = parse_answer(line)
            if answer is None:
                continue
            command = engine.handle(answer)
            if isinstance(answer, Tick):
                ticks += 1
                if isinstance(command, Move):
                    moves[command.direction.value] += 1
                else:
                    abstained += 1

    position = engine.grid.my_position
    summary = {
        "ticks": ticks,
        "moves": dict(sorted(moves.items())),
        "abstained": abstained,
        "final_position": [position.x, position.y],
    }
    return summary, engine


def _build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog="lightcycle", description=__doc__)
    parser.add_argument("--log-level", choices=LOG_LEVELS, default="INFO")
    sub = parser.add_subparsers(dest="command")

    run = sub.add_parser("run", help="Connect to the configured server and play")
    run.add_argument("config", type=Path, nargs="?", default=Path(DEFAULT_CONFIG_PATH))

    replay = sub.add_parser("replay", help="Replay a recorded server transcript offline")
    replay.add_argument("transcript", type=Path)
    replay.add_argument("--seed", type=int, default=None)
    replay.add_argument(
        "--config", type=Path, default=None, help="Take [engine] settings from this file"
    )
    replay.add_argument("--render", type=Path, default=None, help="Write final board as PNG")
    return parser


def _handle_run(args: argparse.Namespace) -> None:
    config = load_config(args.config)
    try:
        run_forever(config)
    except KeyboardInterrupt:
        logger.info("Interrupted, shutting down.")


def _handle_replay(args: argparse.Namespace) -> None:
    engine_config = load_config(args.config).engine if args.config is not None else None
    summary, engine = replay_transcript(args.transcript, seed=args.seed, config=engine_config)
    if args.render is not None:
        from lightcycle.viz.render import render_board

        territory = compute_territory_field(engine.grid, engine.config)
        summary["render"] = str(render_board(engine.grid, territory, args.render))
    print(json.dumps(summary, ensure_ascii=False, indent=2))


def main() -> None:
    parser = _build_parser()
    args = parser.parse_args()
    logging.basicConfig(
        level=getattr(logging, args.log_level),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )
    if args.command == "run":
        _handle_run(args)
    elif args.command == "replay":
        _handle_replay(args)
    else:
        parser.print_help()
        raise SystemExit(2)


if __name__ == "__main__":
    main()
