"""Tests for the heuristic opponent's strategy cascade."""

import numpy as np
import pytest

from gomoku.ai import heuristic
from gomoku.ai.heuristic import (HeuristicPlayer, choose_move, find_blocking_move,
                                 find_center_move, find_offensive_move,
                                 find_strategic_move, find_winning_move)
from gomoku.game.board import Board
from gomoku.utils import Player

EMPTY_ROW = "......."


def test_empty_board_takes_center():
    board = Board()
    board.make_move(0, 0)
    assert HeuristicPlayer(Player.O).get_move(board) == (3, 3)


def test_immediate_win_beats_block(grid):
    g = grid(EMPTY_ROW, EMPTY_ROW, "..XXXX.", EMPTY_ROW, "OOOO...", EMPTY_ROW, EMPTY_ROW)
    assert choose_move(g, Player.O) == ((4, 4), "win")


def test_block_scans_row_major_and_finds_left_end_first(grid):
    g = grid(EMPTY_ROW, EMPTY_ROW, "..XXXX.", EMPTY_ROW, EMPTY_ROW, EMPTY_ROW, EMPTY_ROW)
    assert find_blocking_move(g, Player.O) == (2, 1)
    assert choose_move(g, Player.O) == ((2, 1), "block")


def test_block_finds_gap_in_broken_four(grid):
    g = grid(EMPTY_ROW, "X......", "X......", EMPTY_ROW, "X......", "X......", EMPTY_ROW)
    assert choose_move(g, Player.O) == ((3, 0), "block")


def test_winning_move_returns_none_without_threat(grid):
    g = grid("XXX....", EMPTY_ROW, EMPTY_ROW, EMPTY_ROW, EMPTY_ROW, EMPTY_ROW, EMPTY_ROW)
    assert find_winning_move(g, Player.X) is None


def test_center_neighbours_in_fixed_order(grid):
    g = grid(EMPTY_ROW, EMPTY_ROW, EMPTY_ROW, "...X...", EMPTY_ROW, EMPTY_ROW, EMPTY_ROW)
    assert choose_move(g, Player.O) == ((2, 3), "center")

    g = grid(EMPTY_ROW, EMPTY_ROW, "...O...", "...X...", EMPTY_ROW, EMPTY_ROW, EMPTY_ROW)
    assert find_center_move(g, Player.O) == (4, 3)

    g = grid(EMPTY_ROW, EMPTY_ROW, "...O...", "..OXX..", "...X...", EMPTY_ROW, EMPTY_ROW)
    assert find_center_move(g, Player.O) is None


def test_offensive_move_extends_to_four(grid):
    g = grid(EMPTY_ROW, EMPTY_ROW, "...O...", "..OXX..", "...X...", EMPTY_ROW, "OOO....")
    assert choose_move(g, Player.O) == ((6, 3), "offense")


def test_offensive_move_none_without_three(grid):
    g = grid(EMPTY_ROW, EMPTY_ROW, "...O...", "..OXX..", "...X...", EMPTY_ROW, EMPTY_ROW)
    assert find_offensive_move(g, Player.O) is None


def test_fallback_takes_first_empty_cell(grid):
    g = grid("X......", EMPTY_ROW, "...O...", "..OXX..", "...X...", EMPTY_ROW, EMPTY_ROW)
    assert choose_move(g, Player.O) == ((0, 1), "fallback")


def test_fallback_prefers_center(grid):
    g = grid("X......", EMPTY_ROW, EMPTY_ROW, EMPTY_ROW, EMPTY_ROW, EMPTY_ROW, EMPTY_ROW)
    assert find_strategic_move(g, Player.O) == (3, 3)


def test_full_board_has_no_move(drawn_grid):
    assert choose_move(drawn_grid, Player.O) == (None, None)
    assert find_strategic_move(drawn_grid, Player.O) is None


@pytest.mark.parametrize("rows", [
    (EMPTY_ROW, EMPTY_ROW, "..XXXX.", EMPTY_ROW, "OOOO...", EMPTY_ROW, EMPTY_ROW),
    (EMPTY_ROW, EMPTY_ROW, "...O...", "..OXX..", "...X...", EMPTY_ROW, "OOO...."),
    ("X......", EMPTY_ROW, "...O...", "..OXX..", "...X...", EMPTY_ROW, EMPTY_ROW),
])
def test_choosing_a_move_leaves_grid_untouched(grid, rows):
    g = grid(*rows)
    before = g.copy()
    choose_move(g, Player.O)
    choose_move(g, Player.X)
    assert np.array_equal(g, before)


def test_get_move_leaves_board_untouched():
    board = Board()
    for cell in [(2, 2), (3, 3), (2, 3), (4, 4), (2, 4), (5, 5), (2, 5)]:
        board.make_move(*cell)
    before = board.get_state()
    history = list(board.moves_made)

    player = HeuristicPlayer(Player.O)
    cell = player.get_move(board)

    assert cell == (2, 1)
    assert player.last_strategy == "block"
    assert np.array_equal(board.grid, before)
    assert board.moves_made == history


def test_probe_clears_cell_even_when_test_raises():
    g = np.zeros((7, 7), dtype=int)

    def explode(grid, row, col):
        raise RuntimeError("boom")

    with pytest.raises(RuntimeError):
        heuristic._probe(g, 1, 1, Player.O, explode)
    assert g[1, 1] == Player.EMPTY.value


def test_strategies_are_in_priority_order():
    assert [name for name, _ in heuristic.STRATEGIES] == ["win", "block", "center", "offense", "fallback"]
