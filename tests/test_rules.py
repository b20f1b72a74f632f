"""Tests for win and tie detection."""

import random

import pytest

from dropfour.game.board import Board
from dropfour.game.rules import (check_tie, check_win, check_win_at, drop_piece,
                                 get_winning_line, new_game)
from dropfour.utils import HEIGHT, WIDTH, Player

BASE = HEIGHT - 1


def tie_pattern(row: int, col: int) -> Player:
    return Player.ONE if (col // 2 + row) % 2 == 0 else Player.TWO


class TestHorizontalWin:
    def test_bottom_row(self, board: Board, fill) -> None:
        fill(board, [(BASE, col) for col in range(4)])
        assert check_win(board, Player.ONE)
        assert not check_win(board, Player.TWO)

    def test_middle_row_player_two(self, board: Board, fill) -> None:
        fill(board, [(BASE - 2, col) for col in range(2, 6)], Player.TWO)
        assert check_win(board, Player.TWO)

    def test_right_edge(self, board: Board, fill) -> None:
        fill(board, [(0, col) for col in range(WIDTH - 4, WIDTH)])
        assert check_win(board, Player.ONE)

    def test_three_in_a_row(self, board: Board, fill) -> None:
        fill(board, [(BASE, col) for col in range(3)])
        assert not check_win(board, Player.ONE)

    def test_broken_sequence(self, board: Board, fill) -> None:
        fill(board, [(BASE, col) for col in range(5) if col != 2])
        assert not check_win(board, Player.ONE)


class TestVerticalWin:
    def test_left_column(self, board: Board, fill) -> None:
        fill(board, [(row, 0) for row in range(2, 6)])
        assert check_win(board, Player.ONE)

    def test_top_of_column(self, board: Board, fill) -> None:
        fill(board, [(row, 6) for row in range(4)], Player.TWO)
        assert check_win(board, Player.TWO)

    def test_three_high(self, board: Board, fill) -> None:
        fill(board, [(row, 3) for row in range(3, 6)])
        assert not check_win(board, Player.ONE)


class TestDiagonalWin:
    def test_ascending(self, board: Board, fill) -> None:
        fill(board, [(5, 0), (4, 1), (3, 2), (2, 3)])
        assert check_win(board, Player.ONE)

    def test_descending(self, board: Board, fill) -> None:
        fill(board, [(BASE - 3 + i, i) for i in range(4)])
        assert check_win(board, Player.ONE)

    def test_descending_from_top_left(self, board: Board, fill) -> None:
        fill(board, [(i, i) for i in range(4)], Player.TWO)
        assert check_win(board, Player.TWO)

    def test_ascending_at_right_edge(self, board: Board, fill) -> None:
        fill(board, [(5, 3), (4, 4), (3, 5), (2, 6)], Player.TWO)
        assert check_win(board, Player.TWO)

    def test_broken_diagonal(self, board: Board, fill) -> None:
        fill(board, [(BASE - i, i) for i in range(5) if i != 2])
        assert not check_win(board, Player.ONE)

    def test_no_wrap_around_edges(self, board: Board, fill) -> None:
        # Would be a down-left line if columns wrapped from 0 to WIDTH-1
        fill(board, [(0, 1), (1, 0), (2, WIDTH - 1), (3, WIDTH - 2)])
        assert not check_win(board, Player.ONE)


class TestNoWin:
    def test_empty_board(self, board: Board) -> None:
        assert not check_win(board, Player.ONE)
        assert not check_win(board, Player.TWO)

    def test_mixed_owners(self, board: Board, fill) -> None:
        fill(board, [(BASE, 0), (BASE, 1)], Player.ONE)
        fill(board, [(BASE, 2), (BASE, 3)], Player.TWO)
        assert not check_win(board, Player.ONE)
        assert not check_win(board, Player.TWO)

    def test_empty_player_never_wins(self, board: Board) -> None:
        assert not check_win(board, Player.EMPTY)
        assert get_winning_line(board, Player.EMPTY) == []


class TestWinningLine:
    def test_returns_four_cells(self, board: Board, fill) -> None:
        cells = [(BASE, col) for col in range(1, 5)]
        fill(board, cells)
        assert get_winning_line(board, Player.ONE) == cells

    def test_longer_run(self, board: Board, fill) -> None:
        fill(board, [(BASE, col) for col in range(6)])
        line = get_winning_line(board, Player.ONE)
        assert len(line) == 4
        assert all(board.cell_at(r, c) == Player.ONE for r, c in line)


class TestTie:
    def test_full_board_without_line(self, board: Board) -> None:
        for row in range(HEIGHT):
            for col in range(WIDTH):
                board.place(row, col, tie_pattern(row, col))
        assert check_tie(board)
        assert not check_win(board, Player.ONE)
        assert not check_win(board, Player.TWO)

    def test_empty_board(self, board: Board) -> None:
        assert not check_tie(board)

    def test_one_space_left(self, board: Board) -> None:
        for row in range(HEIGHT):
            for col in range(WIDTH):
                if (row, col) != (0, 3):
                    board.place(row, col, tie_pattern(row, col))
        assert not check_tie(board)

    def test_bottom_row_only(self, board: Board) -> None:
        board.grid[BASE, :] = Player.ONE.value
        assert not check_tie(board)


class TestTargetedCheck:
    def test_empty_cell(self, board: Board) -> None:
        assert not check_win_at(board, 5, 0)

    @pytest.mark.parametrize("cells,last", [
        ([(5, 0), (5, 1), (5, 2), (5, 3)], (5, 1)),
        ([(2, 4), (3, 4), (4, 4), (5, 4)], (2, 4)),
        ([(5, 0), (4, 1), (3, 2), (2, 3)], (3, 2)),
        ([(2, 0), (3, 1), (4, 2), (5, 3)], (5, 3)),
    ])
    def test_finds_line_through_cell(self, board: Board, fill, cells, last) -> None:
        fill(board, cells)
        assert check_win_at(board, *last)

    def test_cell_outside_line(self, board: Board, fill) -> None:
        fill(board, [(5, 0), (5, 1), (5, 2), (5, 3)])
        board.place(4, 6, Player.ONE)
        assert not check_win_at(board, 4, 6)

    @pytest.mark.parametrize("seed", range(25))
    def test_matches_full_scan_over_random_games(self, seed: int) -> None:
        rng = random.Random(seed)
        state = new_game()
        while not state.is_game_over():
            mover = state.current_player
            result = drop_piece(state, rng.choice(state.board.valid_columns()))
            state = result.state
            row, col = state.last_move
            assert check_win_at(state.board, row, col) == check_win(state.board, mover)
