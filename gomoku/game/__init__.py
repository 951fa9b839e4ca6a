"""
gomoku.game - Core game mechanics for gomoku

This package contains the board representation, the rules applied to every
move, and the game session that drives turns between the players.
"""

from gomoku.game.board import Board
from gomoku.game.rules import GomokuGame, GomokuEnv

__all__ = ['Board', 'GomokuGame', 'GomokuEnv']
