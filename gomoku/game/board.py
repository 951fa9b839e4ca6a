"""
board.py - Board representation and core rules for gomoku

This module implements the Board class which holds the 7x7 grid, whose turn
it is, the move history used for undo, and the game result. Every move goes
through make_move, which validates it, places the stone and checks for a win
or a draw.
"""

import numpy as np
from typing import Iterable, List, Optional

from gomoku.debug import debug
from gomoku.utils import (Coord, Player, GameResult, Move, MoveOutcome,
                          MoveResult, check_win_at_position, empty_grid,
                          is_integer_coordinate, is_valid_position, render_board_ascii)


class Board:
    """
    Represents a gomoku board and the turn state played on it.

    Illegal requests never raise; they return a REJECTED MoveResult and
    leave the board untouched.
    """

    def __init__(self):
        """Initialize an empty board with X to move."""
        debug.debug("Initializing new Board", "board")
        self.reset()

    def reset(self):
        """Reset the board to an empty state."""
        debug.debug("Resetting board", "board")
        self.grid = empty_grid()
        self.moves_made: List[Move] = []
        self.current_player = Player.X
        self.game_result = GameResult.IN_PROGRESS
        self.last_move: Optional[Move] = None
        self.win_line: List[Coord] = []

    @classmethod
    def from_moves(cls, moves: Iterable[Move]) -> 'Board':
        """
        Build a board by replaying moves from an empty grid.

        Raises:
            ValueError: If any move in the sequence is rejected
        """
        board = cls()
        for move in moves:
            if not board.make_move(move.row, move.col, move.player):
                raise ValueError(f"Cannot replay {move!r}")
        return board

    def copy(self) -> 'Board':
        """
        Create a deep copy of the current board.

        Returns:
            A new Board instance with the same state
        """
        debug.trace("Creating board copy", "board")
        new_board = Board()
        new_board.grid = self.grid.copy()
        new_board.moves_made = self.moves_made.copy()
        new_board.current_player = self.current_player
        new_board.game_result = self.game_result
        new_board.last_move = self.last_move
        new_board.win_line = list(self.win_line)
        return new_board

    def is_valid_move(self, row: int, col: int, player: Optional[Player] = None) -> bool:
        """
        Check if a move is valid.

        Args:
            row: Target row (0-indexed)
            col: Target column (0-indexed)
            player: Player making the move; defaults to the current player

        Returns:
            True if the move is valid, False otherwise
        """
        if self.game_result.is_game_over():
            debug.debug(f"Invalid move: game is over (result: {self.game_result.name})", "board")
            return False

        if player is not None and player != self.current_player:
            debug.debug(f"Invalid move: it is {self.current_player.name}'s turn, not {player.name}'s", "board")
            return False

        if not (is_integer_coordinate(row) and is_integer_coordinate(col)):
            debug.debug(f"Invalid move: non-integer coordinates ({row!r}, {col!r})", "board")
            return False

        if not is_valid_position(row, col):
            debug.debug(f"Invalid move: ({row}, {col}) out of bounds", "board")
            return False

        if self.grid[row, col] != Player.EMPTY.value:
            debug.debug(f"Invalid move: ({row}, {col}) is occupied", "board")
            return False

        return True

    def get_valid_moves(self) -> List[Coord]:
        """
        Get the empty cells in row-major order.

        Returns:
            List of (row, col) pairs, empty once the game is over
        """
        if self.game_result.is_game_over():
            return []

        rows, cols = np.nonzero(self.grid == Player.EMPTY.value)
        return [(int(r), int(c)) for r, c in zip(rows, cols)]

    def is_full(self) -> bool:
        return not np.any(self.grid == Player.EMPTY.value)

    def make_move(self, row: int, col: int, player: Optional[Player] = None) -> MoveResult:
        """
        Place a stone for the player whose turn it is.

        Args:
            row: Target row (0-indexed)
            col: Target column (0-indexed)
            player: Expected mover; a mismatch with the current player is rejected

        Returns:
            MoveResult with outcome APPLIED, WON, DRAWN or REJECTED
        """
        mover = self.current_player if player is None else player
        debug.debug(f"Attempting move at ({row}, {col}) for player {mover.name}", "board")

        if not self.is_valid_move(row, col, mover):
            return MoveResult(MoveOutcome.REJECTED)

        move = Move(row, col, mover)
        self.grid[row, col] = mover.value
        self.moves_made.append(move)
        self.last_move = move

        debug.start_timer("win_check")
        win_line = self.check_win(row, col)
        debug.end_timer("win_check", "board")

        if win_line:
            self.game_result = GameResult.win_for(mover)
            self.win_line = win_line
            debug.info(f"Player {mover.name} wins after move at ({row}, {col})", "board")
            return MoveResult(MoveOutcome.WON, move, win_line)

        if self.is_full():
            self.game_result = GameResult.DRAW
            debug.info("Game ends in a draw", "board")
            return MoveResult(MoveOutcome.DRAWN, move)

        self.current_player = mover.other()
        debug.debug(f"Switching to player {self.current_player.name}", "board")
        return MoveResult(MoveOutcome.APPLIED, move)

    def declare_draw(self):
        """Mark an in-progress game as drawn (no legal move is left)."""
        if not self.game_result.is_game_over():
            self.game_result = GameResult.DRAW
            debug.info("Game declared a draw: no moves left", "board")

    def undo_move(self) -> bool:
        """
        Undo the last move and hand the turn back to whoever made it.

        Returns:
            True if a move was undone, False if there was nothing to undo
            or the game is already over
        """
        if self.game_result.is_game_over():
            debug.debug("Cannot undo: game is over", "board")
            return False

        if not self.moves_made:
            debug.debug("No moves to undo", "board")
            return False

        move = self.moves_made.pop()
        debug.debug(f"Undoing move at ({move.row}, {move.col})", "board")
        self.grid[move.row, move.col] = Player.EMPTY.value
        self.current_player = move.player
        self.last_move = self.moves_made[-1] if self.moves_made else None
        return True

    def check_win(self, row: int, col: int) -> Optional[List[Coord]]:
        """
        Check if the stone at (row, col) completes five in a row.

        Returns:
            The five-cell winning line, or None
        """
        return check_win_at_position(self.grid, row, col)

    def get_winning_line(self) -> List[Coord]:
        """
        Get the positions of the winning line if the game is won.

        Returns:
            List of five (row, col) positions, or empty list if no win
        """
        if self.game_result in (GameResult.X_WIN, GameResult.O_WIN):
            return list(self.win_line)
        return []

    def get_winner(self) -> Optional[Player]:
        if self.game_result == GameResult.X_WIN:
            return Player.X
        if self.game_result == GameResult.O_WIN:
            return Player.O
        return None

    def get_state(self) -> np.ndarray:
        """
        Get the current board state as a numpy array.

        Returns:
            Copy of the 7x7 grid (0 empty, 1 X, 2 O)
        """
        return self.grid.copy()

    def render(self) -> str:
        """
        Render the board as a string.

        Returns:
            String representation of the board, winning line bracketed
        """
        return render_board_ascii(self.grid, self.get_winning_line())

    def __str__(self) -> str:
        """String representation of the board."""
        return self.render()

    def __len__(self) -> int:
        return len(self.moves_made)

