"""
gomoku.interfaces - User interfaces for gomoku

This package contains the presentation layers that draw the board and turn
user input into move requests for the game session.
"""

# Don't import anything here to avoid circular imports
__all__ = []
