"""
gomoku/ai/__init__.py - Computer opponent for gomoku

This module provides the scripted heuristic opponent: an ordered list of
strategy functions and the HeuristicPlayer that runs them.
"""

from gomoku.ai.heuristic import HeuristicPlayer, STRATEGIES, choose_move

__all__ = ['HeuristicPlayer', 'STRATEGIES', 'choose_move']
