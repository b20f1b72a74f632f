"""
utils.py - Constants, enumerations and helpers for the Connect Four engine

This module provides the board constants, the player and result
enumerations, the line directions used by win detection and the ASCII
renderer shared by the interfaces.
"""

from enum import Enum, auto
from typing import Optional

import numpy as np

# Board constants
HEIGHT = 6
WIDTH = 7
CONNECT_N = 4  # Number of pieces in a line to win


class Player(Enum):
    """Enumeration of players; EMPTY doubles as the empty cell value."""
    EMPTY = 0
    ONE = 1    # Moves first
    TWO = 2

    def other(self) -> 'Player':
        """Get the opposing player."""
        if self == Player.ONE:
            return Player.TWO
        elif self == Player.TWO:
            return Player.ONE
        return Player.EMPTY

    @property
    def label(self) -> str:
        if self == Player.EMPTY:
            return "Empty"
        return f"Player {self.value}"

    def __str__(self):
        if self == Player.EMPTY:
            return " "
        elif self == Player.ONE:
            return "X"
        else:
            return "O"


class GameResult(Enum):
    """Enumeration representing the game outcome."""
    IN_PROGRESS = auto()
    PLAYER_ONE_WIN = auto()
    PLAYER_TWO_WIN = auto()
    TIE = auto()

    def is_game_over(self) -> bool:
        """Check if the game is over."""
        return self != GameResult.IN_PROGRESS

    @property
    def winner(self) -> Optional[Player]:
        if self == GameResult.PLAYER_ONE_WIN:
            return Player.ONE
        elif self == GameResult.PLAYER_TWO_WIN:
            return Player.TWO
        return None

    @classmethod
    def win_for(cls, player: Player) -> 'GameResult':
        """Result for a win by player."""
        if player == Player.ONE:
            return cls.PLAYER_ONE_WIN
        elif player == Player.TWO:
            return cls.PLAYER_TWO_WIN
        raise ValueError(f"{player!r} cannot win a game")


class Direction(Enum):
    """The four directions a line can run in, read from its anchor cell."""
    HORIZONTAL = auto()
    VERTICAL = auto()
    DIAGONAL_DOWN_RIGHT = auto()
    DIAGONAL_DOWN_LEFT = auto()


# (row, col) step for each direction; row 0 is the top of the board
DIRECTION_VECTORS = {
    Direction.HORIZONTAL: (0, 1),
    Direction.VERTICAL: (1, 0),
    Direction.DIAGONAL_DOWN_RIGHT: (1, 1),
    Direction.DIAGONAL_DOWN_LEFT: (1, -1),
}


def render_board_ascii(grid: np.ndarray) -> str:
    """
    Render a grid as ASCII art.

    Args:
        grid: 2D array of Player values

    Returns:
        ASCII representation with a column-number footer
    """
    height, width = grid.shape
    border = "|" + "-" * (width * 2 - 1) + "|"

    lines = [border]
    for row in range(height):
        cells = [str(Player(int(value))) for value in grid[row]]
        lines.append("|" + " ".join(cells) + "|")
    lines.append(border)

    # Column numbers wrap after 9 so wide boards stay aligned
    lines.append("|" + " ".join(str(col % 10) for col in range(width)) + "|")

    return "\n".join(lines)
