"""
Shared pytest fixtures for the gomoku tests.

Game fixtures are function-scoped so every test starts from a fresh session.
Positions are written with gomoku.utils.parse_position: seven rows of '.',
'X' or 'O' separated by '/'.
"""

import pytest

from gomoku.debug import debug, DebugLevel
from gomoku.game.board import Board
from gomoku.game.rules import GomokuGame
from gomoku.utils import GameMode, parse_position

# Full board with no five in a row in any direction (25 X, 24 O)
DRAWN_POSITION = "/".join([
    "XXOOXXO",
    "OOXXOOX",
    "XXOOXXO",
    "OOXXOOX",
    "XXOOXXO",
    "OOXXOOX",
    "XXOOXXO",
])

# The same board with (6, 4) still empty, X to move
NEARLY_DRAWN_POSITION = DRAWN_POSITION[:-3] + "." + DRAWN_POSITION[-2:]


@pytest.fixture(autouse=True, scope="session")
def quiet_logging():
    """Keep test output free of engine debug chatter."""
    debug.configure(level=DebugLevel.WARNING)
    yield


@pytest.fixture
def board() -> Board:
    return Board()


@pytest.fixture
def game() -> GomokuGame:
    return GomokuGame(GameMode.TWO_PLAYERS)


@pytest.fixture
def ai_game() -> GomokuGame:
    return GomokuGame(GameMode.AI)


@pytest.fixture
def grid():
    """Factory: build a grid from seven row strings."""
    def _make(*rows):
        return parse_position("/".join(rows))
    return _make


@pytest.fixture
def drawn_grid():
    return parse_position(DRAWN_POSITION)


@pytest.fixture
def nearly_drawn_grid():
    return parse_position(NEARLY_DRAWN_POSITION)
