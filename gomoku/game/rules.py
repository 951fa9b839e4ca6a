"""
rules.py - Game session management and Gymnasium environment for gomoku

This module provides:
1. GomokuGame, the single live game session: board, turn order, undo and
   restart, and the hand-off to the heuristic opponent
2. GomokuEnv, a gymnasium-compatible environment around the same session
"""

import numpy as np
import gymnasium as gym
from gymnasium import spaces
from typing import Dict, List, Optional, Tuple, Union

from gomoku.debug import debug
from gomoku.utils import (GRID_SIZE, Coord, GameMode, GameResult, MoveOutcome,
                          MoveResult, Player)
from gomoku.game.board import Board
from gomoku.ai.heuristic import HeuristicPlayer


class GomokuGame:
    """
    High-level gomoku game session.

    Moves from the presentation layer come in through make_move (or
    play_turn, which also lets the opponent answer). In AI mode the human
    plays X and the heuristic opponent plays O; while the opponent's reply
    is pending, human moves are rejected.
    """

    def __init__(self, mode: GameMode = GameMode.TWO_PLAYERS):
        """
        Initialize a new game session.

        Args:
            mode: TWO_PLAYERS for human vs human, AI for human vs opponent
        """
        debug.debug(f"Initializing GomokuGame ({mode.value})", "game")
        self.mode = mode
        self.reset()

    @property
    def opponent_enabled(self) -> bool:
        return self.opponent is not None

    def reset(self) -> None:
        """Restart: every part of the session goes back to its initial state."""
        debug.debug("Resetting game", "game")
        self.opponent = HeuristicPlayer(Player.O) if self.mode == GameMode.AI else None
        self.board = Board()
        self._opponent_pending = False

    restart = reset

    def awaiting_opponent(self) -> bool:
        """True when a human move has been applied and the opponent should answer."""
        return self._opponent_pending

    def make_move(self, row: int, col: int) -> MoveResult:
        """
        Apply a move request from the presentation layer.

        Args:
            row: Target row (0-indexed)
            col: Target column (0-indexed)

        Returns:
            The MoveResult; REJECTED while the opponent's reply is pending
        """
        debug.debug(f"Game: Making move at ({row}, {col})", "game")

        if self._opponent_pending:
            debug.debug("Move rejected: waiting for the opponent", "game")
            return MoveResult(MoveOutcome.REJECTED)

        result = self.board.make_move(row, col)
        if (result.outcome == MoveOutcome.APPLIED and self.opponent_enabled
                and self.board.current_player == self.opponent.player):
            self._opponent_pending = True
        return result

    def opponent_move(self) -> MoveResult:
        """
        Let the heuristic opponent choose and apply its move.

        Returns:
            The MoveResult of the opponent's move; DRAWN if it has no cell
            left to play, REJECTED if it is not the opponent's turn
        """
        if (not self.opponent_enabled or self.is_game_over()
                or self.board.current_player != self.opponent.player):
            debug.debug("Opponent move requested out of turn", "game")
            return MoveResult(MoveOutcome.REJECTED)

        self._opponent_pending = False
        cell = self.opponent.get_move(self.board)
        if cell is None:
            self.board.declare_draw()
            return MoveResult(MoveOutcome.DRAWN)

        row, col = cell
        debug.info(f"Opponent plays ({row}, {col}) via '{self.opponent.last_strategy}'", "game")
        return self.board.make_move(row, col, self.opponent.player)

    def play_turn(self, row: int, col: int) -> Tuple[MoveResult, Optional[MoveResult]]:
        """
        Apply a human move and, when due, the opponent's answer.

        Returns:
            (human result, opponent result or None if the opponent did not move)
        """
        result = self.make_move(row, col)
        if not self.awaiting_opponent():
            return result, None
        return result, self.opponent_move()

    def undo_move(self) -> bool:
        """
        Undo the last move; the player who made it is to move again.

        Returns:
            True if a move was undone, False otherwise
        """
        if not self.board.undo_move():
            return False

        debug.debug("Undid last move", "game")
        self._opponent_pending = False
        return True

    undo = undo_move

    def undo_turn(self) -> bool:
        """
        Undo back to the human's turn.

        In AI mode this takes back the opponent's reply and the human move
        before it; in two-player mode it is the same as undo_move.

        Returns:
            True if at least one move was undone
        """
        if not self.undo_move():
            return False

        if self.opponent_enabled:
            while self.board.current_player == self.opponent.player:
                if not self.undo_move():
                    break
        return True

    def get_state(self) -> np.ndarray:
        """Read-only snapshot of the grid."""
        return self.board.get_state()

    def get_current_player(self) -> Player:
        return self.board.current_player

    def get_move_history(self):
        return list(self.board.moves_made)

    def is_game_over(self) -> bool:
        return self.board.game_result.is_game_over()

    def get_result(self) -> GameResult:
        return self.board.game_result

    def get_winner(self) -> Optional[Player]:
        """
        Get the winner of the game.

        Returns:
            The winning player, or None if no winner yet or draw
        """
        return self.board.get_winner()

    def get_winning_line(self) -> List[Coord]:
        return self.board.get_winning_line()

    def get_valid_moves(self) -> List[Coord]:
        return self.board.get_valid_moves()

    def render(self) -> str:
        """
        Render the game as a string.

        Returns:
            String representation of the board
        """
        return self.board.render()


class GomokuEnv(gym.Env):
    """
    Gomoku environment following the Gymnasium interface.

    The agent plays X. Actions index cells row-major (action = row * 7 + col).
    With opponent=True the heuristic opponent answers as O inside step();
    otherwise the agent plays both sides in turn.
    """

    metadata = {'render_modes': ['ascii', 'human'], 'render_fps': 4}

    def __init__(self, render_mode: Optional[str] = None, opponent: bool = True):
        """
        Initialize the gomoku environment.

        Args:
            render_mode: Mode for rendering the environment
            opponent: Whether the heuristic opponent plays O
        """
        debug.debug("Initializing GomokuEnv", "env")

        self.action_space = spaces.Discrete(GRID_SIZE * GRID_SIZE)
        # 7x7 board with values 0 (empty), 1 (X) and 2 (O)
        self.observation_space = spaces.Box(
            low=0, high=2, shape=(GRID_SIZE, GRID_SIZE), dtype=np.int8
        )

        self.game = GomokuGame(GameMode.AI if opponent else GameMode.TWO_PLAYERS)
        self.render_mode = render_mode

        self.reward_win = 1.0
        self.reward_lose = -1.0
        self.reward_draw = 0.1
        self.reward_invalid_move = -0.5
        self.reward_step = -0.01

    @staticmethod
    def action_to_cell(action: int) -> Coord:
        return int(action) // GRID_SIZE, int(action) % GRID_SIZE

    @staticmethod
    def cell_to_action(row: int, col: int) -> int:
        return row * GRID_SIZE + col

    def reset(self, seed: Optional[int] = None, options: Optional[Dict] = None) -> Tuple[np.ndarray, Dict]:
        """
        Reset the environment to initial state.

        Returns:
            Initial observation and info dictionary
        """
        debug.debug("Resetting environment", "env")
        super().reset(seed=seed)
        self.game.reset()

        if self.render_mode == "human":
            self.render()

        return self._get_observation(), self._get_info()

    def step(self, action: int) -> Tuple[np.ndarray, float, bool, bool, Dict]:
        """
        Play the agent's stone and, if enabled, the opponent's reply.

        Stepping a finished episode changes nothing: it returns the final
        observation with reward 0.0 and terminated=True until reset() is called.

        Returns:
            Tuple of (observation, reward, terminated, truncated, info)
        """
        if self.game.is_game_over():
            debug.debug(f"Step after the episode ended (result: {self.game.get_result().name})", "env")
            return self._get_observation(), 0.0, True, False, self._get_info()

        row, col = self.action_to_cell(action)
        debug.debug(f"Environment step with action {action} -> ({row}, {col})", "env")

        mover = self.game.get_current_player()
        agent_result, opponent_result = self.game.play_turn(row, col)

        if not agent_result:
            debug.warning(f"Invalid action: {action}", "env")
            info = self._get_info()
            info['invalid_move'] = True
            return self._get_observation(), self.reward_invalid_move, False, True, info

        reward = self.reward_step
        terminated = self.game.is_game_over()
        if terminated:
            winner = self.game.get_winner()
            if winner is None:
                reward = self.reward_draw
            elif winner == mover:
                reward = self.reward_win
            else:
                reward = self.reward_lose
            debug.info(f"Game over: {self.game.get_result().name}", "env")

        info = self._get_info()
        if opponent_result is not None and opponent_result.move is not None:
            info['opponent_move'] = opponent_result.move.position

        if self.render_mode == "human":
            self.render()

        return self._get_observation(), reward, terminated, False, info

    def action_masks(self) -> np.ndarray:
        """Boolean mask over actions: True where the cell is free."""
        mask = np.zeros(GRID_SIZE * GRID_SIZE, dtype=bool)
        for row, col in self.game.get_valid_moves():
            mask[self.cell_to_action(row, col)] = True
        return mask

    def render(self) -> Optional[Union[str, np.ndarray]]:
        """
        Render the current state of the environment.

        Returns:
            The board as text for 'ascii', None otherwise
        """
        if self.render_mode == "ascii":
            return self.game.render()

        if self.render_mode == "human":
            print(self.game.render())

        return None

    def _get_observation(self) -> np.ndarray:
        return self.game.get_state().astype(np.int8)

    def _get_info(self) -> Dict:
        """
        Get additional information about the current state.

        Returns:
            Dictionary with info about the current state
        """
        valid_moves = self.game.get_valid_moves()
        last_move = self.game.board.last_move

        return {
            'valid_moves': [self.cell_to_action(r, c) for r, c in valid_moves],
            'num_valid_moves': len(valid_moves),
            'current_player': self.game.get_current_player().value,
            'game_result': self.game.get_result().name,
            'moves_made': len(self.game.board),
            'winning_line': self.game.get_winning_line(),
            'last_move': last_move.position if last_move else None,
        }
