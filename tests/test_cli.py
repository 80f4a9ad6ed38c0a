"""Tests for lightcycle.cli: argument parsing, replay and subcommand dispatch."""

from __future__ import annotations

import json
import sys
from pathlib import Path
from unittest.mock import patch

import pytest

from lightcycle.cli import main, replay_transcript

TRANSCRIPT = """motd|welcome
tick
game|5|5|1
player|1|alice
player|2|bob
pos|1|2|2
pos|2|0|0
tick
pos|1|2|1
pos|2|0|1

tick
die|2
tick
lose|0|1
"""

CONFIG_TOML = """
[server]
address = "localhost:4000"

[user]
user = "alice"
password = "s3cret"
"""


def _write(tmp_path: Path, name: str, text: str) -> Path:
    path = tmp_path / name
    path.write_text(text, encoding="utf-8")
    return path


class TestReplayTranscript:
    def test_counts_ticks_and_moves(self, tmp_path: Path) -> None:
        summary, engine = replay_transcript(_write(tmp_path, "game.log", TRANSCRIPT), seed=0)
        assert summary["ticks"] == 4
        assert summary["abstained"] == 1
        assert sum(summary["moves"].values()) == 3
        assert summary["final_position"] == [2, 1]
        assert 2 not in engine.grid.heads

    def test_same_seed_same_summary(self, tmp_path: Path) -> None:
        path = _write(tmp_path, "game.log", TRANSCRIPT)
        assert replay_transcript(path, seed=3)[0] == replay_transcript(path, seed=3)[0]


class TestMain:
    def test_no_subcommand_exits(self) -> None:
        with patch.object(sys, "argv", ["lightcycle"]):
            with pytest.raises(SystemExit):
                main()

    def test_replay_prints_summary(
        self, tmp_path: Path, capsys: pytest.CaptureFixture[str]
    ) -> None:
        path = _write(tmp_path, "game.log", TRANSCRIPT)
        with patch.object(sys, "argv", ["lightcycle", "replay", str(path), "--seed", "1"]):
            main()
        summary = json.loads(capsys.readouterr().out)
        assert summary["ticks"] == 4

    def test_replay_render(self, tmp_path: Path, capsys: pytest.CaptureFixture[str]) -> None:
        path = _write(tmp_path, "game.log", TRANSCRIPT)
        image = tmp_path / "final.png"
        argv = ["lightcycle", "replay", str(path), "--render", str(image)]
        with patch.object(sys, "argv", argv):
            main()
        summary = json.loads(capsys.readouterr().out)
        assert summary["render"] == str(image)
        assert image.exists()

    def test_replay_uses_engine_section_of_config(
        self, tmp_path: Path, capsys: pytest.CaptureFixture[str]
    ) -> None:
        transcript = _write(tmp_path, "game.log", TRANSCRIPT)
        config = _write(tmp_path, "config.toml", CONFIG_TOML + "\n[engine]\nterritory_weight = 0.0\n")
        argv = ["lightcycle", "replay", str(transcript), "--config", str(config)]
        with patch.object(sys, "argv", argv):
            main()
        assert json.loads(capsys.readouterr().out)["ticks"] == 4

    def test_run_dispatches_with_loaded_config(self, tmp_path: Path) -> None:
        config = _write(tmp_path, "config.toml", CONFIG_TOML)
        with patch.object(sys, "argv", ["lightcycle", "run", str(config)]):
            with patch("lightcycle.cli.run_forever") as mock_run:
                main()
        mock_run.assert_called_once()
        loaded = mock_run.call_args.args[0]
        assert loaded.server.port == 4000
        assert loaded.user.user == "alice"

    def test_run_stops_on_keyboard_interrupt(self, tmp_path: Path) -> None:
        config = _write(tmp_path, "config.toml", CONFIG_TOML)
        with patch.object(sys, "argv", ["lightcycle", "run", str(config)]):
            with patch("lightcycle.cli.run_forever", side_effect=KeyboardInterrupt):
                main()
