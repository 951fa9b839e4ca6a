"""
utils.py - Constants, enumerations and line-scanning helpers for gomoku

This module provides the fixed game constants, the player/result enums, the
small value types passed between the engine and its callers, and the
run-counting helpers shared by win detection and the heuristic opponent.
"""

import numbers
from enum import Enum, auto
from typing import List, Optional, Tuple

import numpy as np

from gomoku.debug import debug

# Game constants
GRID_SIZE = 7
WIN_LENGTH = 5      # Number of stones in a row to win
SCAN_RADIUS = 4     # Cells examined each way from a stone when counting runs
OFFENSIVE_RUN = 4   # Run length the opponent tries to build when it cannot win or block

# Pause before the opponent answers, so the human's move is shown first
AI_MOVE_DELAY = 0.5

Coord = Tuple[int, int]


class Player(Enum):
    """Enumeration representing players and cell states."""
    EMPTY = 0
    X = 1    # Moves first; the human in opponent mode
    O = 2    # The heuristic opponent in opponent mode

    def other(self) -> 'Player':
        """Get the other player."""
        if self == Player.X:
            return Player.O
        elif self == Player.O:
            return Player.X
        return Player.EMPTY

    def __str__(self):
        if self == Player.EMPTY:
            return "."
        return self.name


class GameResult(Enum):
    """Enumeration representing the game outcome."""
    IN_PROGRESS = auto()
    X_WIN = auto()
    O_WIN = auto()
    DRAW = auto()

    def is_game_over(self) -> bool:
        """Check if the game is over."""
        return self != GameResult.IN_PROGRESS

    @staticmethod
    def win_for(player: Player) -> 'GameResult':
        return GameResult.X_WIN if player == Player.X else GameResult.O_WIN


class GameMode(Enum):
    """Who plays O: another human or the heuristic opponent."""
    AI = "ai"
    TWO_PLAYERS = "twoPlayers"

    @classmethod
    def from_string(cls, value: str) -> 'GameMode':
        """Parse a mode name such as 'ai' or 'twoPlayers' (case-insensitive)."""
        normalized = value.strip().lower().replace("-", "").replace("_", "")
        for mode in cls:
            if mode.value.lower() == normalized or mode.name.lower().replace("_", "") == normalized:
                return mode
        raise ValueError(f"Unknown game mode: {value!r}")


class MoveOutcome(Enum):
    """What happened to a move request."""
    APPLIED = auto()    # Placed, game continues
    REJECTED = auto()   # Illegal; nothing changed
    WON = auto()        # Placed and completed five in a row
    DRAWN = auto()      # Placed (or no move left) and the board is full


class Direction(Enum):
    """Enumeration representing the axes checked for runs."""
    HORIZONTAL = auto()
    VERTICAL = auto()
    DIAGONAL_DOWN = auto()  # top-left to bottom-right
    DIAGONAL_UP = auto()    # bottom-left to top-right


# Direction vectors (row, col), in the order axes are checked
DIRECTION_VECTORS = {
    Direction.HORIZONTAL: (0, 1),
    Direction.VERTICAL: (1, 0),
    Direction.DIAGONAL_DOWN: (1, 1),
    Direction.DIAGONAL_UP: (-1, 1),
}


class Move:
    """A stone placed by a player at (row, col)."""

    __slots__ = ('row', 'col', 'player')

    def __init__(self, row: int, col: int, player: Player):
        self.row = row
        self.col = col
        self.player = player

    @property
    def position(self) -> Coord:
        return (self.row, self.col)

    def __eq__(self, other):
        if not isinstance(other, Move):
            return NotImplemented
        return (self.row, self.col, self.player) == (other.row, other.col, other.player)

    def __hash__(self):
        return hash((self.row, self.col, self.player))

    def __repr__(self):
        return f"Move({self.row}, {self.col}, {self.player.name})"


class MoveResult:
    """
    Outcome of a move request.

    A result is truthy when the move was accepted, so callers can keep
    writing ``if board.make_move(r, c): ...``.
    """

    __slots__ = ('outcome', 'move', 'win_line')

    def __init__(self, outcome: MoveOutcome, move: Optional[Move] = None,
                 win_line: Optional[List[Coord]] = None):
        self.outcome = outcome
        self.move = move
        self.win_line = win_line or []

    @property
    def accepted(self) -> bool:
        return self.outcome != MoveOutcome.REJECTED

    @property
    def is_game_over(self) -> bool:
        return self.outcome in (MoveOutcome.WON, MoveOutcome.DRAWN)

    def __bool__(self):
        return self.accepted

    def __repr__(self):
        return f"MoveResult({self.outcome.name}, move={self.move!r}, win_line={self.win_line})"


def is_integer_coordinate(value) -> bool:
    """True for ints and numpy integers; bools, floats, strings and None are not coordinates."""
    return isinstance(value, numbers.Integral) and not isinstance(value, bool)


def is_valid_position(row: int, col: int) -> bool:
    """
    Check if a position is a pair of integers within the board boundaries.

    Args:
        row: Row index
        col: Column index

    Returns:
        True if position is valid, False otherwise
    """
    if not (is_integer_coordinate(row) and is_integer_coordinate(col)):
        return False
    return 0 <= row < GRID_SIZE and 0 <= col < GRID_SIZE


def empty_grid() -> np.ndarray:
    return np.zeros((GRID_SIZE, GRID_SIZE), dtype=int)


def _walk(grid: np.ndarray, row: int, col: int, player_value: int,
          dr: int, dc: int, radius: int) -> List[Coord]:
    """Cells of player_value contiguous with (row, col) along (dr, dc), nearest first."""
    cells = []
    for step in range(1, radius + 1):
        r, c = row + step * dr, col + step * dc
        if not is_valid_position(r, c) or grid[r, c] != player_value:
            break
        cells.append((r, c))
    return cells


def count_run(grid: np.ndarray, row: int, col: int, player: Player,
              dr: int, dc: int, radius: int = SCAN_RADIUS) -> int:
    """
    Count the run of `player` through (row, col) along one axis.

    The cell itself counts as one whatever it holds; each direction adds
    contiguous matching cells up to `radius` steps away.

    Args:
        grid: The game board
        row: Row index of the anchor cell
        col: Column index of the anchor cell
        player: Player whose stones are counted
        dr, dc: Axis direction vector
        radius: Maximum steps examined in each direction

    Returns:
        Run length, between 1 and 2 * radius + 1
    """
    forward = _walk(grid, row, col, player.value, dr, dc, radius)
    backward = _walk(grid, row, col, player.value, -dr, -dc, radius)
    return 1 + len(forward) + len(backward)


def max_run(grid: np.ndarray, row: int, col: int, player: Player,
            radius: int = SCAN_RADIUS) -> int:
    """Longest run of `player` through (row, col) over all four axes."""
    return max(count_run(grid, row, col, player, dr, dc, radius)
               for dr, dc in DIRECTION_VECTORS.values())


def check_win_at_position(grid: np.ndarray, row: int, col: int) -> Optional[List[Coord]]:
    """
    Check whether the stone at (row, col) is part of five in a row.

    Axes are tried in DIRECTION_VECTORS order and the first qualifying one
    is reported. Runs longer than five are wins; the returned line is the
    five-cell window of the run that starts nearest the played cell.

    Args:
        grid: The game board
        row: Row index of the stone just placed
        col: Column index of the stone just placed

    Returns:
        The winning line as five (row, col) pairs ordered along the axis,
        or None if there is no win
    """
    player_value = grid[row, col]
    if player_value == Player.EMPTY.value:
        return None

    for direction, (dr, dc) in DIRECTION_VECTORS.items():
        forward = _walk(grid, row, col, player_value, dr, dc, SCAN_RADIUS)
        backward = _walk(grid, row, col, player_value, -dr, -dc, SCAN_RADIUS)

        if 1 + len(forward) + len(backward) >= WIN_LENGTH:
            line = backward[::-1] + [(row, col)] + forward
            played = len(backward)
            start = min(played, len(line) - WIN_LENGTH)
            debug.trace(f"Win along {direction.name} through ({row}, {col})", "board")
            return line[start:start + WIN_LENGTH]

    return None


def parse_position(text: str) -> np.ndarray:
    """
    Parse a board written as 49 cells of '.', 'X' or 'O'.

    Whitespace and '/' row separators are ignored, and '-' or '_' may be
    used for empty cells.

    Raises:
        ValueError: If the text does not describe exactly 49 valid cells
    """
    symbols = {'.': Player.EMPTY, '-': Player.EMPTY, '_': Player.EMPTY,
               'X': Player.X, 'O': Player.O}
    cells = [ch for ch in text.upper() if not ch.isspace() and ch != '/']

    if len(cells) != GRID_SIZE * GRID_SIZE:
        raise ValueError(f"Position must have {GRID_SIZE * GRID_SIZE} cells, got {len(cells)}")

    grid = empty_grid()
    for index, ch in enumerate(cells):
        if ch not in symbols:
            raise ValueError(f"Invalid cell {ch!r} at index {index}")
        grid[index // GRID_SIZE, index % GRID_SIZE] = symbols[ch].value
    return grid


def render_board_ascii(grid: np.ndarray, highlight: Optional[List[Coord]] = None) -> str:
    """
    Render the board as ASCII art.

    Args:
        grid: The game board
        highlight: Cells to mark (e.g. the winning line); shown in brackets

    Returns:
        ASCII representation of the board with row and column numbers
    """
    marked = set(highlight or [])
    header = "   " + " ".join(f" {c} " for c in range(GRID_SIZE))
    lines = [header]

    for row in range(GRID_SIZE):
        cells = []
        for col in range(GRID_SIZE):
            symbol = str(Player(int(grid[row, col])))
            cells.append(f"[{symbol}]" if (row, col) in marked else f" {symbol} ")
        lines.append(f"{row}  " + " ".join(cells))

    return "\n".join(lines)
