"""
board.py - Grid representation for Connect Four

This module implements the Board class, a fixed-size grid of cells indexed
grid[row, column] with row 0 at the top. Pieces fall to the lowest empty
row of a column and, once placed, are never moved or removed.
"""

from typing import List, Optional

import numpy as np

from dropfour.debug import debug
from dropfour.exceptions import CellOccupiedError, ConfigurationError, OutOfBoundsError
from dropfour.utils import CONNECT_N, HEIGHT, WIDTH, Player, render_board_ascii


class Board:
    """
    Represents a Connect Four grid.

    The board only knows about cells. Turn order and outcomes live in
    dropfour.game.rules.
    """

    def __init__(self, height: int = HEIGHT, width: int = WIDTH):
        """
        Create an empty grid.

        Args:
            height: Number of rows
            width: Number of columns

        Raises:
            ConfigurationError: If either dimension is below CONNECT_N
        """
        if height < CONNECT_N or width < CONNECT_N:
            raise ConfigurationError(
                f"Board must be at least {CONNECT_N}x{CONNECT_N}, got {height}x{width}")

        debug.debug(f"Creating {height}x{width} board", "board")
        self.grid = np.zeros((height, width), dtype=int)

    @property
    def height(self) -> int:
        return self.grid.shape[0]

    @property
    def width(self) -> int:
        return self.grid.shape[1]

    def copy(self) -> 'Board':
        """
        Create an independent copy of the board.

        Returns:
            A new Board with the same cells
        """
        debug.trace("Creating board copy", "board")
        new_board = Board.__new__(Board)
        new_board.grid = self.grid.copy()
        return new_board

    def is_valid_position(self, row: int, column: int) -> bool:
        """Check if (row, column) lies inside the grid."""
        return 0 <= row < self.height and 0 <= column < self.width

    def _check_column(self, column: int) -> None:
        if not (0 <= column < self.width):
            raise OutOfBoundsError(
                f"Column {column} out of bounds (0-{self.width - 1})", column=column)

    def _check_position(self, row: int, column: int) -> None:
        if not self.is_valid_position(row, column):
            raise OutOfBoundsError(
                f"Position ({row}, {column}) out of bounds for "
                f"{self.height}x{self.width} board", row=row, column=column)

    def cell_at(self, row: int, column: int) -> Player:
        """
        Get the contents of a cell.

        Args:
            row: Row index, 0 is the top
            column: Column index

        Returns:
            Player.EMPTY or the player occupying the cell

        Raises:
            OutOfBoundsError: If the position is outside the grid
        """
        self._check_position(row, column)
        return Player(int(self.grid[row, column]))

    def is_full(self) -> bool:
        """Check if every cell is occupied."""
        return bool(np.all(self.grid != Player.EMPTY.value))

    def find_landing_row(self, column: int) -> Optional[int]:
        """
        Find the row a piece dropped into column would occupy.

        Args:
            column: Column index

        Returns:
            The lowest empty row, or None if the column is full

        Raises:
            OutOfBoundsError: If the column is outside the grid
        """
        self._check_column(column)

        for row in range(self.height - 1, -1, -1):
            if self.grid[row, column] == Player.EMPTY.value:
                return row
        return None

    def place(self, row: int, column: int, player: Player) -> None:
        """
        Write a piece into a cell.

        This does not apply gravity; use find_landing_row to pick the row.

        Raises:
            OutOfBoundsError: If the position is outside the grid
            CellOccupiedError: If the cell already holds a piece
        """
        self._check_position(row, column)
        if player == Player.EMPTY:
            raise ValueError("Cannot place an empty piece")
        if self.grid[row, column] != Player.EMPTY.value:
            raise CellOccupiedError(f"Cell ({row}, {column}) is already occupied")

        debug.trace(f"Placing {player.label} at ({row}, {column})", "board")
        self.grid[row, column] = player.value

    def valid_columns(self) -> List[int]:
        """Get the columns that still have room for a piece."""
        return [col for col in range(self.width)
                if self.grid[0, col] == Player.EMPTY.value]

    def count_pieces(self, player: Player = None) -> int:
        """Count occupied cells, or the cells held by one player."""
        if player is None:
            return int(np.count_nonzero(self.grid))
        return int(np.count_nonzero(self.grid == player.value))

    def get_state(self) -> np.ndarray:
        """
        Get the grid as a numpy array.

        Returns:
            A copy of the 2D grid
        """
        return self.grid.copy()

    def render(self) -> str:
        return render_board_ascii(self.grid)

    def __str__(self) -> str:
        return self.render()
