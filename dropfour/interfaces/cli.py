"""
cli.py - Command-line interface for the Connect Four engine

This module provides a terminal front end: a hot-seat game for two people,
a position checker, random self-play through the gymnasium environment and
a small benchmark of the win checks.
"""

import argparse
import random
import sys
from collections import Counter
from typing import Dict, List, Optional, Union

import numpy as np

from dropfour.debug import debug, DebugLevel
from dropfour.exceptions import ConnectFourError
from dropfour.game.board import Board
from dropfour.game.env import ConnectFourEnv
from dropfour.game.rules import (ConnectFourGame, check_tie, check_win, check_win_at,
                                 drop_piece, get_winning_line, new_game)
from dropfour.utils import HEIGHT, WIDTH, GameResult, Player

QUIT = 'q'
RESTART = 'r'

Command = Union[int, str, None]

EPILOG = """
    Examples:

    # Play a two-player game in the terminal
    python run.py play

    # Play on a larger board with debug logging
    python run.py play --height 7 --width 9 --debug

    # Analyse a position (42 values, top row first)
    python run.py check --position 0,0,0,0,0,0,0,0,0,0,0,0,0,0,0,0,0,0,0,0,0,0,0,0,0,0,0,0,0,0,0,0,0,0,0,1,1,1,1,2,2,2

    # Play 500 random games headlessly
    python run.py simulate --games 500 --seed 7

    # Benchmark performance with 5000 iterations
    python run.py benchmark --iterations 5000
    """


class SimpleCLI:
    """Simple command-line interface for Connect Four."""

    def __init__(self):
        self.game: Optional[ConnectFourGame] = None
        self.args = None

    def build_parser(self) -> argparse.ArgumentParser:
        common = argparse.ArgumentParser(add_help=False)
        common.add_argument('--height', type=int, default=HEIGHT,
                            help=f'Number of rows (default: {HEIGHT})')
        common.add_argument('--width', type=int, default=WIDTH,
                            help=f'Number of columns (default: {WIDTH})')
        common.add_argument('--debug', action='store_true',
                            help='Enable debug mode (same as --debug-level debug)')
        common.add_argument('--debug-level',
                            choices=['none', 'error', 'warning', 'info', 'debug', 'trace'],
                            default='warning', help='Logging verbosity')

        parser = argparse.ArgumentParser(
            description='Connect Four CLI',
            formatter_class=argparse.RawDescriptionHelpFormatter,
            epilog=EPILOG)
        subparsers = parser.add_subparsers(dest='command', help='Command to run')

        subparsers.add_parser('play', parents=[common],
                              help='Play a two-player game in the terminal')

        check_parser = subparsers.add_parser('check', parents=[common],
                                             help='Analyse a board position')
        check_parser.add_argument('--position', type=str, required=True,
                                  help='Comma-separated cell values (0 empty, 1, 2), '
                                       'top row first')

        simulate_parser = subparsers.add_parser('simulate', parents=[common],
                                                help='Play random games headlessly')
        simulate_parser.add_argument('--games', type=int, default=100,
                                     help='Number of games to play')
        simulate_parser.add_argument('--seed', type=int, default=None,
                                     help='Seed for the move generator')

        benchmark_parser = subparsers.add_parser('benchmark', parents=[common],
                                                 help='Benchmark performance')
        benchmark_parser.add_argument('--iterations', type=int, default=1000,
                                      help='Number of iterations for benchmarking')

        return parser

    def parse_args(self, argv: Optional[List[str]] = None) -> None:
        """Parse command-line arguments and apply the logging options."""
        self.args = self.build_parser().parse_args(argv)

        if getattr(self.args, 'debug', False):
            debug.configure(level=DebugLevel.DEBUG)
        elif getattr(self.args, 'debug_level', None):
            debug.set_from_string(self.args.debug_level)

    def run(self, argv: Optional[List[str]] = None) -> int:
        """
        Run the command selected on the command line.

        Returns:
            Process exit status
        """
        if not self.args:
            self.parse_args(argv)

        handlers = {
            'play': self.play_game,
            'check': self.check_position,
            'simulate': self.simulate,
            'benchmark': self.benchmark,
        }
        handler = handlers.get(self.args.command)
        if handler is None:
            print("Please specify a command. Use --help for options.")
            return 1

        try:
            handler()
        except ConnectFourError as e:
            debug.error(str(e), "cli")
            print(f"Error: {e}")
            return 2
        return 0

    # --- play ---

    def play_game(self) -> None:
        """Run hot-seat games until the players quit."""
        self.game = ConnectFourGame(self.args.height, self.args.width)
        print("Connect Four: drop pieces until someone gets four in a row.")
        print(f"Enter a column number (0-{self.game.width - 1}) to make a move.")
        print("Other commands: 'q' to quit, 'r' to restart.")

        while self.wait_for_start():
            if not self.play_round():
                print("Quitting game.")
                return
        print("Goodbye.")

    def wait_for_start(self) -> bool:
        """Show the start prompt; False when the players want to leave."""
        try:
            answer = input("Press Enter to START (q to quit): ").strip().lower()
        except EOFError:
            return False
        return answer != QUIT

    def play_round(self) -> bool:
        """
        Play one game from an empty board.

        Returns:
            True when the game ended normally, False if a player quit
        """
        self.game.reset()
        print(self.game.render())

        while not self.game.is_game_over():
            player = self.game.get_current_player()
            print(f"{player.label}'s turn ({player})")

            move = self.get_human_move()
            if move is None:
                continue
            if move == QUIT:
                return False
            if move == RESTART:
                self.game.reset()
                print("Game restarted.")
                print(self.game.render())
                continue

            result = self.game.make_move(move)
            if result.column_full:
                print(f"Column {move} is full, pick another.")
                continue
            print(self.game.render())

        self.end_game()
        return True

    def end_game(self) -> None:
        """Announce the result of the finished game."""
        print(self.end_message(self.game.get_result()))
        line = self.game.winning_line()
        if line:
            print("Winning line: " + ", ".join(f"({r}, {c})" for r, c in line))

    @staticmethod
    def end_message(result: GameResult) -> str:
        if result.winner is not None:
            return f"{result.winner.label} won!"
        return "Tie. No players win."

    def get_human_move(self) -> Command:
        """
        Read one command from the current player.

        Returns:
            A column index, QUIT, RESTART, or None if the input was invalid
        """
        width = self.game.width
        try:
            user_input = input(f"Column (0-{width - 1}, q/r): ").strip().lower()
        except EOFError:
            return QUIT

        if user_input in (QUIT, RESTART):
            return user_input

        try:
            move = int(user_input)
        except ValueError:
            print("Invalid input. Please enter a column number or command.")
            return None

        if not 0 <= move < width:
            print(f"Column must be between 0 and {width - 1}.")
            return None
        return move

    # --- check ---

    def load_position(self, position: str) -> Board:
        """
        Build a board from a comma-separated list of cell values.

        Raises:
            ValueError: If the list has the wrong length or bad values
        """
        height, width = self.args.height, self.args.width
        values = [int(v) for v in position.split(',')]
        if len(values) != height * width:
            raise ValueError(f"Position string must have {height * width} values, "
                             f"got {len(values)}")
        if any(v not in (p.value for p in Player) for v in values):
            raise ValueError("Cell values must be 0, 1 or 2")

        board = Board(height, width)
        board.grid = np.array(values, dtype=int).reshape(height, width)
        return board

    def check_position(self) -> None:
        """Report wins, tie and landing rows for a given position."""
        try:
            board = self.load_position(self.args.position)
        except ValueError as e:
            print(f"Error parsing position: {e}")
            return

        print("Loaded position:")
        print(board.render())

        winners = []
        for player in (Player.ONE, Player.TWO):
            line = get_winning_line(board, player)
            if line:
                winners.append(player)
                print(f"Win for {player.label}: {line}")
        if not winners:
            print("No win detected for any player")

        if check_tie(board) and not winners:
            print("Board is full: tie")
        else:
            print(f"Empty cells: {board.height * board.width - board.count_pieces()}")

        for col in range(board.width):
            row = board.find_landing_row(col)
            print(f"  Column {col}: {'full' if row is None else f'lands on row {row}'}")

    # --- simulate ---

    def simulate(self) -> Dict[str, int]:
        """
        Play random games through ConnectFourEnv and print a tally.

        Returns:
            Count of each GameResult name
        """
        env = ConnectFourEnv(height=self.args.height, width=self.args.width)
        rng = np.random.default_rng(self.args.seed)
        tally: Counter = Counter()
        total_moves = 0

        for episode in range(self.args.games):
            _, info = env.reset(seed=None if self.args.seed is None else self.args.seed + episode)
            done = False
            while not done:
                action = int(rng.choice(info['valid_moves']))
                _, _, terminated, truncated, info = env.step(action)
                done = terminated or truncated
            tally[info['game_result']] += 1
            total_moves += info['moves_made']
        env.close()

        games = max(self.args.games, 1)
        print(f"Played {self.args.games} games, {total_moves / games:.1f} moves per game")
        for result in (GameResult.PLAYER_ONE_WIN, GameResult.PLAYER_TWO_WIN, GameResult.TIE):
            print(f"  {result.name}: {tally[result.name]}")
        return dict(tally)

    # --- benchmark ---

    def benchmark(self) -> None:
        """Time board setup, full-board and targeted win checks, and whole games."""
        iterations = self.args.iterations
        height, width = self.args.height, self.args.width
        print(f"Running benchmark with {iterations} iterations...")

        debug.start_timer("board_init")
        for _ in range(iterations):
            new_game(height, width)
        elapsed = debug.end_timer("board_init", "cli")
        print(f"New game: {elapsed / iterations * 1000:.6f} ms per game")

        # Random positions reached through legal play
        positions = []
        for _ in range(iterations):
            state = new_game(height, width)
            for _ in range(random.randint(7, 20)):
                columns = state.board.valid_columns()
                if state.is_game_over() or not columns:
                    break
                state = drop_piece(state, random.choice(columns)).state
            if state.last_move is not None:
                positions.append(state)

        debug.start_timer("win_check_full")
        for state in positions:
            row, col = state.last_move
            check_win(state.board, Player(int(state.board.grid[row, col])))
        full_time = debug.end_timer("win_check_full", "cli")

        debug.start_timer("win_check_targeted")
        for state in positions:
            check_win_at(state.board, *state.last_move)
        targeted_time = debug.end_timer("win_check_targeted", "cli")

        count = max(len(positions), 1)
        print(f"Full-board win check: {full_time / count * 1000:.6f} ms per check")
        print(f"Targeted win check:   {targeted_time / count * 1000:.6f} ms per check")

        debug.start_timer("game_simulation")
        games_played = 0
        total_moves = 0
        for _ in range(max(iterations // 10, 1)):
            game = ConnectFourGame(height, width)
            while not game.is_game_over():
                game.make_move(random.choice(game.get_valid_moves()))
                total_moves += 1
            games_played += 1
        simulation_time = debug.end_timer("game_simulation", "cli")
        print(f"Played {games_played} games with {total_moves} moves: "
              f"{simulation_time / games_played * 1000:.6f} ms per game")


def main(argv: Optional[List[str]] = None) -> int:
    """Main entry point for the CLI."""
    cli = SimpleCLI()
    return cli.run(argv)


if __name__ == "__main__":
    sys.exit(main())
