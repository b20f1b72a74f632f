"""Tests for Board."""

import numpy as np
import pytest

from dropfour.exceptions import CellOccupiedError, ConfigurationError, OutOfBoundsError
from dropfour.game.board import Board
from dropfour.utils import HEIGHT, WIDTH, Player


class TestBoardCreation:
    def test_default_dimensions(self) -> None:
        board = Board()
        assert board.height == HEIGHT == 6
        assert board.width == WIDTH == 7
        assert board.grid.shape == (6, 7)

    def test_every_cell_empty(self, board: Board) -> None:
        for row in range(board.height):
            for col in range(board.width):
                assert board.cell_at(row, col) == Player.EMPTY

    def test_new_board_not_full(self, board: Board) -> None:
        assert not board.is_full()
        assert board.count_pieces() == 0

    def test_custom_dimensions(self) -> None:
        board = Board(4, 9)
        assert (board.height, board.width) == (4, 9)

    @pytest.mark.parametrize("height,width", [(3, 7), (6, 3), (0, 0), (-1, 7)])
    def test_too_small_rejected(self, height: int, width: int) -> None:
        with pytest.raises(ConfigurationError):
            Board(height, width)

    def test_configuration_error_is_value_error(self) -> None:
        with pytest.raises(ValueError):
            Board(2, 2)


class TestCellAccess:
    @pytest.mark.parametrize("row,col", [(-1, 0), (0, -1), (HEIGHT, 0), (0, WIDTH), (200, 200)])
    def test_cell_at_out_of_bounds(self, board: Board, row: int, col: int) -> None:
        with pytest.raises(OutOfBoundsError):
            board.cell_at(row, col)

    def test_out_of_bounds_is_index_error(self, board: Board) -> None:
        with pytest.raises(IndexError):
            board.cell_at(-1, -1)

    def test_place_and_read(self, board: Board) -> None:
        board.place(5, 3, Player.TWO)
        assert board.cell_at(5, 3) == Player.TWO
        assert board.count_pieces() == 1
        assert board.count_pieces(Player.TWO) == 1
        assert board.count_pieces(Player.ONE) == 0

    def test_occupied_cell_cannot_change(self, board: Board) -> None:
        board.place(5, 0, Player.ONE)
        with pytest.raises(CellOccupiedError):
            board.place(5, 0, Player.TWO)
        assert board.cell_at(5, 0) == Player.ONE

    def test_place_empty_rejected(self, board: Board) -> None:
        with pytest.raises(ValueError):
            board.place(5, 0, Player.EMPTY)

    def test_place_out_of_bounds(self, board: Board) -> None:
        with pytest.raises(OutOfBoundsError):
            board.place(6, 0, Player.ONE)


class TestLandingRow:
    def test_empty_board_lands_on_bottom(self, board: Board) -> None:
        for col in range(WIDTH):
            assert board.find_landing_row(col) == 5

    def test_stacks_upward(self, board: Board) -> None:
        board.place(5, 2, Player.ONE)
        board.place(4, 2, Player.TWO)
        assert board.find_landing_row(2) == 3

    def test_full_column_returns_none(self, board: Board) -> None:
        for row in range(HEIGHT):
            board.place(row, 0, Player.TWO)
        assert board.find_landing_row(0) is None
        assert 0 not in board.valid_columns()

    @pytest.mark.parametrize("col", [-1, WIDTH, 100])
    def test_bad_column_raises(self, board: Board, col: int) -> None:
        with pytest.raises(OutOfBoundsError) as excinfo:
            board.find_landing_row(col)
        assert excinfo.value.column == col


class TestBoardState:
    def test_is_full(self, board: Board) -> None:
        board.grid[:, :] = Player.TWO.value
        assert board.is_full()
        assert board.valid_columns() == []

    def test_partially_full(self, board: Board) -> None:
        board.grid[HEIGHT - 1, :] = Player.ONE.value
        assert not board.is_full()

    def test_copy_independence(self, board: Board) -> None:
        board.place(5, 0, Player.ONE)
        clone = board.copy()
        clone.place(4, 0, Player.TWO)
        assert board.cell_at(4, 0) == Player.EMPTY
        assert clone.cell_at(5, 0) == Player.ONE

    def test_get_state_is_copy(self, board: Board) -> None:
        snapshot = board.get_state()
        snapshot[5, 5] = Player.ONE.value
        assert board.cell_at(5, 5) == Player.EMPTY
        assert isinstance(snapshot, np.ndarray)

    def test_render(self, board: Board) -> None:
        board.place(5, 0, Player.ONE)
        board.place(5, 1, Player.TWO)
        lines = board.render().splitlines()
        assert len(lines) == HEIGHT + 3
        assert lines[HEIGHT] == "|X O          |"
        assert lines[-1] == "|0 1 2 3 4 5 6|"
        assert str(board) == board.render()
