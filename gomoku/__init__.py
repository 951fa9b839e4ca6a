"""
gomoku - Five-in-a-row on a fixed 7x7 grid

This package provides the rules engine for the game (board state, turn order,
win detection, undo and restart), a scripted heuristic opponent, a terminal
interface and a Gymnasium environment wrapping the game.
"""

# Version number
__version__ = '0.1.0'
