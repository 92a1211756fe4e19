"""Tests for the single-user command line."""

import json

import pytest

from fut_evolucao.cli import build_parser, format_state, main
from fut_evolucao.models.game_state import GameState


@pytest.fixture
def state_file(tmp_path):
    return tmp_path / "state.json"


def _run(state_file, *args: str) -> int:
    return main(["--state-file", str(state_file), "--seed", "7", *args])


class TestParser:
    def test_split_default(self):
        args = build_parser().parse_args(["split"])
        assert args.per_team == 5

    def test_winner_side_choices(self):
        with pytest.raises(SystemExit):
            build_parser().parse_args(["winner", "C"])


class TestCommands:
    def test_add_persists_player(self, state_file, capsys):
        assert _run(state_file, "add", "Ana", "--rating", "4.5") == 0

        saved = json.loads(state_file.read_text())
        assert saved["players"][0]["name"] == "Ana"
        assert saved["players"][0]["rating"] == 4.5
        assert "Ana" in capsys.readouterr().out

    def test_round_of_matches(self, state_file, capsys):
        for i in range(6):
            assert _run(state_file, "add", f"Player{i}") == 0
        assert _run(state_file, "split", "--per-team", "2") == 0
        assert _run(state_file, "winner", "B") == 0
        assert _run(state_file, "next") == 0

        saved = json.loads(state_file.read_text())
        assert len(saved["teamA"]) == 2
        assert len(saved["teamB"]) == 2
        assert len(saved["bench"]) == 2
        assert len(saved["matchHistory"]) == 1
        assert saved["matchHistory"][0]["winner"] == "B"
        assert saved["currentMatch"]["winner"] is None
        capsys.readouterr()

        assert _run(state_file, "show") == 0
        out = capsys.readouterr().out
        assert "Current match (in progress)" in out
        assert "Team B won" in out

    def test_failed_operation_exits_nonzero(self, state_file, capsys):
        _run(state_file, "add", "Solo")

        assert _run(state_file, "split") == 1
        assert "Not enough players" in capsys.readouterr().err

        saved = json.loads(state_file.read_text())
        assert saved["currentMatch"] is None

    def test_reset_and_clear(self, state_file):
        for i in range(4):
            _run(state_file, "add", f"Player{i}")
        _run(state_file, "split", "--per-team", "2")

        assert _run(state_file, "reset") == 0
        saved = json.loads(state_file.read_text())
        assert len(saved["players"]) == 4
        assert saved["currentMatch"] is None

        assert _run(state_file, "clear") == 0
        assert not state_file.exists()

        assert _run(state_file, "show") == 0
        assert not state_file.exists()


class TestFormatState:
    def test_empty_state(self):
        text = format_state(GameState())
        assert "Players (0):" in text
        assert "No match in progress." in text
