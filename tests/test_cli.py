"""Tests for the command-line interface."""

import pytest

from gomoku.interfaces import cli
from gomoku.interfaces.cli import MOVE, QUIT, RESTART, UNDO, SimpleCLI, describe_result, parse_input
from gomoku.utils import Move, MoveOutcome, MoveResult, Player, parse_position


@pytest.mark.parametrize("text,expected", [
    ("q", (QUIT, None)),
    (" U ", (UNDO, None)),
    ("restart", (RESTART, None)),
    ("3 4", (MOVE, (3, 4))),
    ("3,4", (MOVE, (3, 4))),
    ("9 9", (MOVE, (9, 9))),
    ("three four", (None, None)),
    ("3", (None, None)),
    ("", (None, None)),
])
def test_parse_input(text, expected):
    assert parse_input(text) == expected


def test_describe_result():
    move = Move(1, 2, Player.O)
    assert describe_result(MoveResult(MoveOutcome.WON, move, [(1, 2)])) == "O Wins!"
    assert describe_result(MoveResult(MoveOutcome.DRAWN, move)) == "It's a draw!"
    assert describe_result(MoveResult(MoveOutcome.REJECTED)) == "Invalid move."
    assert describe_result(MoveResult(MoveOutcome.APPLIED, move)) == "O played (1, 2)."


def feed_input(monkeypatch, lines):
    it = iter(lines)
    monkeypatch.setattr("builtins.input", lambda prompt="": next(it))


def test_play_against_opponent(monkeypatch, capsys):
    feed_input(monkeypatch, ["0 0", "0 0", "u", "q"])
    code = SimpleCLI().run(["--debug-level", "error", "play", "--mode", "ai", "--delay", "0"])
    out = capsys.readouterr().out

    assert code == 0
    assert "O played (3, 3)." in out
    assert "Invalid move: (0, 0)" in out
    assert "Move undone." in out
    assert "Quitting game." in out


def test_play_ends_on_end_of_input(monkeypatch, capsys):
    def no_input(prompt=""):
        raise EOFError

    monkeypatch.setattr("builtins.input", no_input)
    assert SimpleCLI().run(["--debug-level", "error", "play", "--mode", "twoPlayers"]) == 0


def test_play_rejects_unknown_mode(capsys):
    assert SimpleCLI().run(["--debug-level", "error", "play", "--mode", "online"]) == 1


def test_analyze_reports_opponent_choice(capsys):
    position = "X....../......./......./......./......./......./......."
    assert SimpleCLI().run(["--debug-level", "error", "analyze", "--position", position]) == 0
    out = capsys.readouterr().out
    assert "No five in a row on the board" in out
    assert "O would play (3, 3) (center)" in out


def test_analyze_reports_five_in_a_row(capsys):
    position = "XXXXX../OOOO.../......./......./......./......./......."
    SimpleCLI().run(["--debug-level", "error", "analyze", "--position", position])
    out = capsys.readouterr().out
    assert "Five in a row for X: [(0, 0), (0, 1), (0, 2), (0, 3), (0, 4)]" in out


def test_analyze_rejects_bad_position(capsys):
    assert SimpleCLI().run(["--debug-level", "error", "analyze", "--position", "XO"]) == 1
    assert "Error parsing position" in capsys.readouterr().out


def test_benchmark_runs(capsys):
    assert SimpleCLI().run(["--debug-level", "error", "benchmark", "--iterations", "20"]) == 0
    assert "Played" in capsys.readouterr().out


def test_no_command(capsys):
    assert cli.main(["--debug-level", "error"]) == 1


def test_analyze_reports_overline_once(capsys):
    position = "XXXXXX./OOOO.../......./......./......./......./......."
    SimpleCLI().run(["--debug-level", "error", "analyze", "--position", position])
    out = capsys.readouterr().out
    assert out.count("Five in a row for X") == 1
    assert "Five in a row for X: [(0, 0), (0, 1), (0, 2), (0, 3), (0, 4)]" in out


def test_analyze_reports_each_player_run(capsys):
    position = "XXXXX../......./......./......./......./......./OOOOOOO"
    SimpleCLI().run(["--debug-level", "error", "analyze", "--position", position])
    out = capsys.readouterr().out
    assert out.count("Five in a row for X") == 1
    assert out.count("Five in a row for O") == 1


def test_full_run_extends_window_to_whole_overline():
    grid = parse_position("......./.XXXXXX/......./......./......./......./.......")
    run = cli.full_run(grid, [(1, 2), (1, 3), (1, 4), (1, 5), (1, 6)])
    assert run == tuple((1, col) for col in range(1, 7))


def test_play_announces_game_over_once(monkeypatch, capsys):
    moves = ["0 0", "1 0", "0 1", "1 1", "0 2", "1 2", "0 3", "1 3", "0 4"]
    feed_input(monkeypatch, moves + ["5 5", "q"])
    assert SimpleCLI().run(["--debug-level", "error", "play", "--mode", "twoPlayers"]) == 0
    out = capsys.readouterr().out

    assert "X Wins!" in out
    assert out.count("Game over!") == 1
    assert "Invalid move: (5, 5)" in out
