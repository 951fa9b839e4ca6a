"""
cli.py - Command-line interface for gomoku

This module provides a terminal front end for the game: interactive play
against another human or the heuristic opponent, analysis of a given
position, and a small benchmark of the engine.
"""

import argparse
import random
import sys
import time
from typing import List, Optional, Tuple

from gomoku.debug import debug, DebugLevel
from gomoku.utils import (AI_MOVE_DELAY, GRID_SIZE, Coord, GameMode, MoveOutcome,
                          MoveResult, Player, check_win_at_position, is_valid_position,
                          parse_position, render_board_ascii)
from gomoku.game.board import Board
from gomoku.game.rules import GomokuGame
from gomoku.ai.heuristic import choose_move

QUIT = 'quit'
UNDO = 'undo'
RESTART = 'restart'
MOVE = 'move'


def parse_input(user_input: str) -> Tuple[Optional[str], Optional[Coord]]:
    """
    Parse one line typed by the player.

    Accepts 'q', 'u', 'r' or a move written as "row col" or "row,col".

    Returns:
        (command, cell) where cell is only set for MOVE; (None, None) if the
        input could not be understood
    """
    text = user_input.strip().lower()
    commands = {'q': QUIT, 'quit': QUIT, 'u': UNDO, 'undo': UNDO, 'r': RESTART, 'restart': RESTART}
    if text in commands:
        return commands[text], None

    parts = text.replace(',', ' ').split()
    if len(parts) != 2:
        return None, None

    try:
        row, col = int(parts[0]), int(parts[1])
    except ValueError:
        return None, None

    return MOVE, (row, col)


def describe_result(result: MoveResult) -> str:
    """One-line status message for a move result."""
    if result.outcome == MoveOutcome.WON:
        return f"{result.move.player.name} Wins!"
    if result.outcome == MoveOutcome.DRAWN:
        return "It's a draw!"
    if result.outcome == MoveOutcome.REJECTED:
        return "Invalid move."
    return f"{result.move.player.name} played ({result.move.row}, {result.move.col})."


def full_run(grid, line: List[Coord]) -> Tuple[Coord, ...]:
    """
    Extend a five-cell winning line to the whole run of same-colour stones
    along its axis, so an overline is one run rather than several windows.
    """
    (r0, c0), (r1, c1) = line[0], line[1]
    dr, dc = r1 - r0, c1 - c0
    stone = grid[r0, c0]

    while is_valid_position(r0 - dr, c0 - dc) and grid[r0 - dr, c0 - dc] == stone:
        r0, c0 = r0 - dr, c0 - dc

    cells = []
    row, col = r0, c0
    while is_valid_position(row, col) and grid[row, col] == stone:
        cells.append((row, col))
        row, col = row + dr, col + dc
    return tuple(cells)


class SimpleCLI:
    """Simple command-line interface for gomoku."""

    def __init__(self):
        """Initialize the CLI."""
        self.game: Optional[GomokuGame] = None
        self.args = None

    def build_parser(self) -> argparse.ArgumentParser:
        parser = argparse.ArgumentParser(description='Gomoku (five in a row on a 7x7 grid)')
        parser.add_argument('--debug-level', default='info',
                            choices=[level.name.lower() for level in DebugLevel],
                            help='Logging verbosity')
        parser.add_argument('--log-file', default=None, help='Also write logs to this file')

        subparsers = parser.add_subparsers(dest='command', help='Command to run')

        play_parser = subparsers.add_parser('play', help='Play a game interactively')
        play_parser.add_argument('--debug', action='store_true', help='Enable debug mode')
        play_parser.add_argument('--mode', default=GameMode.AI.value,
                                 help="'ai' to play against the computer, 'twoPlayers' for two humans")
        play_parser.add_argument('--delay', type=float, default=AI_MOVE_DELAY,
                                 help='Seconds to wait before the computer answers')

        analyze_parser = subparsers.add_parser('analyze', help='Analyze a board position')
        analyze_parser.add_argument('--position', type=str, required=True,
                                    help="49 cells of '.', 'X' or 'O' (row-major, '/' between rows allowed)")
        analyze_parser.add_argument('--player', choices=['X', 'O'], default='O',
                                    help='Side to choose a move for')

        benchmark_parser = subparsers.add_parser('benchmark', help='Benchmark performance')
        benchmark_parser.add_argument('--iterations', type=int, default=1000,
                                      help='Number of iterations for benchmarking')

        return parser

    def parse_args(self, argv: Optional[List[str]] = None) -> None:
        """Parse command-line arguments and configure logging."""
        self.args = self.build_parser().parse_args(argv)

        if getattr(self.args, 'debug', False):
            debug.configure(level=DebugLevel.DEBUG)
        else:
            debug.set_from_string(self.args.debug_level)

        if self.args.log_file:
            debug.configure(log_file=self.args.log_file)

    def run(self, argv: Optional[List[str]] = None) -> int:
        """Run the CLI based on the parsed arguments."""
        if not self.args:
            self.parse_args(argv)

        if self.args.command == 'play':
            return self.play_game()
        elif self.args.command == 'analyze':
            return self.analyze_position()
        elif self.args.command == 'benchmark':
            return self.benchmark()

        print("Please specify a command. Use --help for options.")
        return 1

    def play_game(self) -> int:
        """Play a game interactively."""
        try:
            mode = GameMode.from_string(self.args.mode)
        except ValueError as e:
            print(e)
            return 1

        self.game = GomokuGame(mode)
        print("Starting a new gomoku game! Get five in a row to win.")
        print(f"Enter a move as 'row col' (0-{GRID_SIZE - 1}).")
        print("Other commands: 'q' to quit, 'u' to undo, 'r' to restart.")
        print(self.game.render())

        while True:
            command, cell = self.get_human_input()
            if command is None:
                continue
            if command == QUIT:
                print("Quitting game.")
                return 0
            if command == RESTART:
                self.game.restart()
                print("Game restarted.")
                print(self.game.render())
                continue
            if command == UNDO:
                if self.game.undo_turn():
                    print("Move undone.")
                    print(self.game.render())
                else:
                    print("Nothing to undo.")
                continue

            result = self.game.make_move(*cell)
            if not result:
                print(f"Invalid move: {cell}")
                continue

            print(self.game.render())
            print(describe_result(result))

            if self.game.awaiting_opponent():
                print("AI is thinking...")
                time.sleep(max(0.0, self.args.delay))
                result = self.game.opponent_move()
                print(self.game.render())
                print(describe_result(result))

            if result.is_game_over:
                print("Game over! Type 'r' to restart or 'q' to quit.")

    def get_human_input(self) -> Tuple[Optional[str], Optional[Coord]]:
        """
        Read one command from the player.

        Returns:
            Parsed (command, cell); (QUIT, None) on end of input
        """
        prompt = f"Player {self.game.get_current_player().name} (row col, q/u/r): "
        try:
            user_input = input(prompt)
        except EOFError:
            return QUIT, None

        command, cell = parse_input(user_input)
        if command is None:
            print("Invalid input. Enter 'row col' or a command.")
        return command, cell

    def analyze_position(self) -> int:
        """Show a position, any five in a row on it, and the opponent's choice."""
        try:
            grid = parse_position(self.args.position)
        except ValueError as e:
            print(f"Error parsing position: {e}")
            return 1

        print("Loaded position:")
        print(render_board_ascii(grid))

        runs = []
        for row in range(GRID_SIZE):
            for col in range(GRID_SIZE):
                line = check_win_at_position(grid, row, col)
                if not line:
                    continue
                run = full_run(grid, line)
                if run in runs:
                    continue
                runs.append(run)
                print(f"Five in a row for {Player(int(grid[row, col])).name}: {line}")
        if not runs:
            print("No five in a row on the board")

        player = Player[self.args.player]
        cell, strategy = choose_move(grid, player)
        if cell is None:
            print("Board is full: draw")
        else:
            print(f"{player.name} would play {cell} ({strategy})")
        return 0

    def benchmark(self) -> int:
        """Benchmark the engine and the heuristic opponent."""
        iterations = max(1, self.args.iterations)
        print(f"Running benchmark with {iterations} iterations...")
        cells = [(r, c) for r in range(GRID_SIZE) for c in range(GRID_SIZE)]

        debug.start_timer("board_init")
        for _ in range(iterations):
            Board()
        board_init_time = debug.end_timer("board_init")
        print(f"Board initialization: {board_init_time:.6f} seconds total, "
              f"{board_init_time / iterations * 1000:.6f} ms per board")

        board = Board()
        moves_made = 0
        debug.start_timer("moves")
        for _ in range(iterations):
            if board.make_move(*random.choice(cells)):
                moves_made += 1
            if board.game_result.is_game_over():
                board.reset()
        moves_time = debug.end_timer("moves")
        print(f"Making {moves_made} moves: {moves_time:.6f} seconds total, "
              f"{moves_time / max(1, moves_made) * 1000:.6f} ms per move")

        decisions = 0
        debug.start_timer("decisions")
        for _ in range(max(1, iterations // 10)):
            game = GomokuGame(GameMode.AI)
            while not game.is_game_over():
                game.play_turn(*random.choice(game.get_valid_moves()))
                decisions += 1
        decision_time = debug.end_timer("decisions")
        print(f"Played {decisions} turns against the heuristic opponent: "
              f"{decision_time:.6f} seconds total, "
              f"{decision_time / max(1, decisions) * 1000:.6f} ms per turn")
        return 0


def main(argv: Optional[List[str]] = None) -> int:
    """Main entry point for the CLI."""
    cli = SimpleCLI()
    return cli.run(argv)


if __name__ == "__main__":
    sys.exit(main())
