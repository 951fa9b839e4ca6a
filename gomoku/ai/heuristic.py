"""
heuristic.py - Scripted heuristic opponent for gomoku

The opponent does no search. It walks a fixed list of strategies and plays
the first cell any of them proposes:

1. Win immediately if a single stone completes five in a row
2. Block the other player's immediate win
3. Take the center, or the first free cell orthogonally next to it
4. Extend to a run of four
5. Fall back to the center, then the first empty cell in row-major order

Strategies are plain functions taking a grid and the player to move for and
returning a (row, col) pair or None. Any stone placed to test a cell is
placed on a scratch copy and removed again before the function returns.
"""

from typing import TYPE_CHECKING, Callable, List, Optional, Tuple

import numpy as np

from gomoku.debug import debug
from gomoku.utils import (GRID_SIZE, OFFENSIVE_RUN, Coord, Player,
                          check_win_at_position, max_run)

if TYPE_CHECKING:
    from gomoku.game.board import Board

Strategy = Callable[[np.ndarray, Player], Optional[Coord]]

CENTER = (GRID_SIZE // 2, GRID_SIZE // 2)


def _empty_cells(grid: np.ndarray):
    """Yield empty cells in row-major order."""
    for row in range(GRID_SIZE):
        for col in range(GRID_SIZE):
            if grid[row, col] == Player.EMPTY.value:
                yield row, col


def _probe(grid: np.ndarray, row: int, col: int, player: Player,
           test: Callable[[np.ndarray, int, int], bool]) -> bool:
    """Place `player` at (row, col), evaluate `test`, and always clear the cell again."""
    grid[row, col] = player.value
    try:
        return test(grid, row, col)
    finally:
        grid[row, col] = Player.EMPTY.value


def _first_probe_hit(grid: np.ndarray, player: Player,
                     test: Callable[[np.ndarray, int, int], bool]) -> Optional[Coord]:
    scratch = grid.copy()
    for row, col in _empty_cells(scratch):
        if _probe(scratch, row, col, player, test):
            return row, col
    return None


def _wins(grid: np.ndarray, row: int, col: int) -> bool:
    return check_win_at_position(grid, row, col) is not None


def find_winning_move(grid: np.ndarray, player: Player) -> Optional[Coord]:
    """
    Find the first empty cell where `player` would complete five in a row.

    Args:
        grid: The game board (not modified)
        player: Player to test stones for

    Returns:
        (row, col) of the first winning cell in row-major order, or None
    """
    return _first_probe_hit(grid, player, _wins)


def find_blocking_move(grid: np.ndarray, player: Player) -> Optional[Coord]:
    """Find the first cell where the other player would win next turn."""
    return find_winning_move(grid, player.other())


def find_center_move(grid: np.ndarray, player: Player) -> Optional[Coord]:
    """Take the center, otherwise the first empty of the cells above, below, left and right of it."""
    row, col = CENTER
    if grid[row, col] == Player.EMPTY.value:
        return CENTER

    for r, c in ((row - 1, col), (row + 1, col), (row, col - 1), (row, col + 1)):
        if 0 <= r < GRID_SIZE and 0 <= c < GRID_SIZE and grid[r, c] == Player.EMPTY.value:
            return r, c

    return None


def find_offensive_move(grid: np.ndarray, player: Player) -> Optional[Coord]:
    """
    Find the first empty cell where `player` would have a run of four or more.

    This does not check whether the move gives the other player a winning
    reply; it only looks at the runs it builds.
    """
    return _first_probe_hit(
        grid, player,
        lambda g, r, c: max_run(g, r, c, player) >= OFFENSIVE_RUN)


def find_strategic_move(grid: np.ndarray, player: Player) -> Optional[Coord]:
    """Center if empty, otherwise the first empty cell; None on a full board."""
    if grid[CENTER] == Player.EMPTY.value:
        return CENTER

    for cell in _empty_cells(grid):
        return cell

    return None


# Tried in order; the first strategy returning a cell decides the move
STRATEGIES: List[Tuple[str, Strategy]] = [
    ("win", find_winning_move),
    ("block", find_blocking_move),
    ("center", find_center_move),
    ("offense", find_offensive_move),
    ("fallback", find_strategic_move),
]


def choose_move(grid: np.ndarray, player: Player) -> Tuple[Optional[Coord], Optional[str]]:
    """
    Run the strategy cascade for `player`.

    Returns:
        The chosen (row, col) and the name of the strategy that chose it,
        or (None, None) when the board has no empty cell
    """
    for name, strategy in STRATEGIES:
        cell = strategy(grid, player)
        if cell is not None:
            debug.debug(f"Strategy '{name}' chose {cell} for {player.name}", "ai")
            return cell, name

    debug.debug(f"No move available for {player.name}", "ai")
    return None, None


class HeuristicPlayer:
    """
    A gomoku player that follows the fixed strategy cascade.

    The player only reads the board; the caller applies the returned move.
    """

    def __init__(self, player: Player = Player.O):
        """
        Initialize the heuristic player.

        Args:
            player: The side this player moves for
        """
        self.player = player
        self.last_strategy: Optional[str] = None

    def get_move(self, board: "Board") -> Optional[Coord]:
        """
        Pick the next move for this player.

        Args:
            board: The current game board

        Returns:
            (row, col) to play, or None if the board is full
        """
        debug.start_timer("ai_decision")
        cell, self.last_strategy = choose_move(board.get_state(), self.player)
        debug.end_timer("ai_decision", "ai")
        return cell
