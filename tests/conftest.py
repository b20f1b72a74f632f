"""Shared pytest fixtures used across the test suite."""

from typing import Callable, Iterable, Iterator, List

import pytest

from dropfour.debug import debug, DebugLevel
from dropfour.game.board import Board
from dropfour.game.rules import GameState, MoveResult, drop_piece, new_game
from dropfour.utils import Player

# Fills a 6x7 board with no four in a row anywhere; the last move is player two's.
# Final layout: cell (row, col) belongs to player one iff (col // 2 + row) is even.
TIE_MOVES = [2] * 5 + [0] * 6 + [1] * 6 + [4] * 6 + [5] * 6 + [2] + [3] * 6 + [6] * 6


@pytest.fixture(autouse=True)
def _quiet_debug() -> Iterator[None]:
    """Keep logging at its default between tests."""
    debug.configure(level=DebugLevel.WARNING, enabled=True, components=[])
    yield
    debug.configure(level=DebugLevel.WARNING, enabled=True, components=[])


@pytest.fixture
def state() -> GameState:
    return new_game()


@pytest.fixture
def board() -> Board:
    return Board()


@pytest.fixture
def tie_moves() -> List[int]:
    return list(TIE_MOVES)


@pytest.fixture
def play() -> Callable[[GameState, Iterable[int]], MoveResult]:
    """Return a helper that applies columns in order and returns the last result."""

    def _play(start: GameState, columns: Iterable[int]) -> MoveResult:
        result = None
        current = start
        for column in columns:
            result = drop_piece(current, column)
            assert result.accepted, f"move in column {column} was rejected"
            current = result.state
        return result

    return _play


@pytest.fixture
def fill() -> Callable[[Board, Iterable], Board]:
    """Return a helper that writes (row, col) cells for one player."""

    def _fill(target: Board, cells: Iterable, player: Player = Player.ONE) -> Board:
        for row, col in cells:
            target.place(row, col, player)
        return target

    return _fill
