"""
rules.py - Win detection and turn progression for Connect Four

This module provides:
1. Win and tie detection over a Board
2. GameState, an explicit value holding one game, and drop_piece, the only
   operation that advances it
3. ConnectFourGame, a small holder that a presentation loop can drive
"""

from dataclasses import dataclass
from enum import Enum
from typing import List, Optional, Tuple

from dropfour.debug import debug
from dropfour.game.board import Board
from dropfour.utils import (CONNECT_N, DIRECTION_VECTORS, HEIGHT, WIDTH,
                            GameResult, Player)

Position = Tuple[int, int]


def _line_from(row: int, column: int,
               dr: int, dc: int) -> List[Position]:
    return [(row + dr * i, column + dc * i) for i in range(CONNECT_N)]


def _is_winning_line(board: Board, line: List[Position], player: Player) -> bool:
    return all(board.is_valid_position(r, c) and board.grid[r, c] == player.value
               for r, c in line)


def get_winning_line(board: Board, player: Player) -> List[Position]:
    """
    Find a line of CONNECT_N cells owned by player.

    Every cell is tried as the anchor of a horizontal, vertical,
    down-right and down-left line.

    Args:
        board: The board to scan
        player: The player to look for

    Returns:
        The (row, column) cells of the first winning line, or an empty list
    """
    if player == Player.EMPTY:
        return []

    for row in range(board.height):
        for column in range(board.width):
            for direction, (dr, dc) in DIRECTION_VECTORS.items():
                line = _line_from(row, column, dr, dc)
                if _is_winning_line(board, line, player):
                    debug.trace(f"{direction.name} line for {player.label} "
                                f"anchored at ({row}, {column})", "rules")
                    return line
    return []


def check_win(board: Board, player: Player) -> bool:
    """Check the whole board for a line owned by player."""
    return bool(get_winning_line(board, player))


def check_win_at(board: Board, row: int, column: int) -> bool:
    """
    Check if the piece at (row, column) is part of a winning line.

    Only lines through this cell are examined. After a legal move this
    gives the same answer as check_win for the player who moved.

    Args:
        board: The game board
        row: Row of the piece just placed
        column: Column of the piece just placed

    Returns:
        True if the piece completes a line of CONNECT_N or more
    """
    player_value = board.grid[row, column]
    if player_value == Player.EMPTY.value:
        return False

    for dr, dc in DIRECTION_VECTORS.values():
        count = 1

        r, c = row + dr, column + dc
        while board.is_valid_position(r, c) and board.grid[r, c] == player_value:
            count += 1
            r += dr
            c += dc

        r, c = row - dr, column - dc
        while board.is_valid_position(r, c) and board.grid[r, c] == player_value:
            count += 1
            r -= dr
            c -= dc

        if count >= CONNECT_N:
            return True

    return False


def check_tie(board: Board) -> bool:
    """
    Check if the board is full.

    Only call this once check_win has failed for the current move; a full
    board with a line on it is a win.
    """
    return board.is_full()


class MoveRejection(Enum):
    """Why drop_piece left the game unchanged."""
    COLUMN_FULL = "column_full"
    GAME_OVER = "game_over"


class GameState:
    """
    One game of Connect Four: the board, whose turn it is and the result.

    States are treated as values. drop_piece returns a new GameState and
    never modifies the one it is given.
    """

    def __init__(self, board: Board = None):
        self.board = board if board is not None else Board()
        self.current_player = Player.ONE
        self.result = GameResult.IN_PROGRESS
        self.last_move: Optional[Position] = None

    def copy(self) -> 'GameState':
        new_state = GameState(self.board.copy())
        new_state.current_player = self.current_player
        new_state.result = self.result
        new_state.last_move = self.last_move
        return new_state

    @property
    def height(self) -> int:
        return self.board.height

    @property
    def width(self) -> int:
        return self.board.width

    def is_game_over(self) -> bool:
        return self.result.is_game_over()

    def __repr__(self) -> str:
        return (f"GameState({self.height}x{self.width}, "
                f"player={self.current_player.name}, result={self.result.name})")


@dataclass
class MoveResult:
    """Outcome of a single drop_piece call."""
    state: GameState
    result: GameResult
    landing_row: Optional[int] = None
    rejection: Optional[MoveRejection] = None

    @property
    def accepted(self) -> bool:
        return self.rejection is None

    @property
    def column_full(self) -> bool:
        return self.rejection == MoveRejection.COLUMN_FULL


def new_game(height: int = HEIGHT, width: int = WIDTH) -> GameState:
    """
    Start a game on an empty board with player one to move.

    Raises:
        ConfigurationError: If the board is too small to ever hold a win
    """
    debug.debug(f"Starting new {height}x{width} game", "rules")
    return GameState(Board(height, width))


def drop_piece(state: GameState, column: int) -> MoveResult:
    """
    Drop the current player's piece into column.

    The piece lands on the lowest empty row. The result is decided for the
    player who moved before the turn passes; the turn only passes when the
    game is still in progress.

    Args:
        state: The game to move in (left untouched)
        column: Column index

    Returns:
        MoveResult with the new state, or with the same state and a
        rejection when the column is full or the game is over

    Raises:
        OutOfBoundsError: If column is outside the board
    """
    landing_row = state.board.find_landing_row(column)

    if state.is_game_over():
        debug.debug(f"Move in column {column} rejected: game is over "
                    f"({state.result.name})", "rules")
        return MoveResult(state, state.result, rejection=MoveRejection.GAME_OVER)

    if landing_row is None:
        debug.debug(f"Move in column {column} rejected: column is full", "rules")
        return MoveResult(state, state.result, rejection=MoveRejection.COLUMN_FULL)

    new_state = state.copy()
    mover = new_state.current_player
    new_state.board.place(landing_row, column, mover)
    new_state.last_move = (landing_row, column)
    debug.debug(f"{mover.label} dropped into column {column}, "
                f"landed on row {landing_row}", "rules")

    if check_win_at(new_state.board, landing_row, column):
        new_state.result = GameResult.win_for(mover)
        debug.info(f"{mover.label} wins with move at {new_state.last_move}", "rules")
    elif check_tie(new_state.board):
        new_state.result = GameResult.TIE
        debug.info("Game ends in a tie", "rules")
    else:
        new_state.current_player = mover.other()

    return MoveResult(new_state, new_state.result, landing_row=landing_row)


def current_player(state: GameState) -> Player:
    return state.current_player


def outcome(state: GameState) -> GameResult:
    return state.result


def cell_at(state: GameState, row: int, column: int) -> Player:
    return state.board.cell_at(row, column)


class ConnectFourGame:
    """
    High-level Connect Four game manager.

    Holds the current GameState for a presentation loop so it does not
    have to thread states through itself.
    """

    def __init__(self, height: int = HEIGHT, width: int = WIDTH):
        """Initialize a new Connect Four game."""
        self.height = height
        self.width = width
        self.state = new_game(height, width)

    def reset(self) -> None:
        """Throw away the board and start over with player one."""
        debug.debug("Resetting game", "rules")
        self.state = new_game(self.height, self.width)

    def make_move(self, column: int) -> MoveResult:
        """
        Make a move in the game.

        Args:
            column: Column to drop a piece into (0-indexed)

        Returns:
            The MoveResult; the held state only changes when it was accepted
        """
        result = drop_piece(self.state, column)
        self.state = result.state
        return result

    def is_game_over(self) -> bool:
        return self.state.is_game_over()

    def get_winner(self) -> Optional[Player]:
        """
        Get the winner of the game.

        Returns:
            The winning player, or None while in progress or after a tie
        """
        return self.state.result.winner

    def get_result(self) -> GameResult:
        return self.state.result

    def get_current_player(self) -> Player:
        return self.state.current_player

    def get_valid_moves(self) -> List[int]:
        """Columns that would accept a piece right now."""
        if self.is_game_over():
            return []
        return self.state.board.valid_columns()

    def winning_line(self) -> List[Position]:
        winner = self.get_winner()
        if winner is None:
            return []
        return get_winning_line(self.state.board, winner)

    def render(self) -> str:
        return self.state.board.render()


if __name__ == "__main__":
    from dropfour.debug import DebugLevel

    debug.configure(level=DebugLevel.DEBUG)

    game = ConnectFourGame()
    for col in [3, 2, 4, 2, 5, 2, 6]:
        result = game.make_move(col)
        print(f"\nColumn {col}: landed on row {result.landing_row}")
        print(game.render())

    print(f"\nResult: {game.get_result().name}")
    print(f"Winning line: {game.winning_line()}")
    print(f"Move after the end: {game.make_move(0).rejection}")
