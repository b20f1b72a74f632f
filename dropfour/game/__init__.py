"""
dropfour.game - Core game mechanics for Connect Four

This package contains the grid, the rules that advance a game and a
gymnasium environment that drives them headlessly.
"""

from dropfour.game.board import Board
from dropfour.game.rules import (ConnectFourGame, GameState, MoveRejection, MoveResult,
                                 cell_at, check_tie, check_win, check_win_at,
                                 current_player, drop_piece, get_winning_line,
                                 new_game, outcome)

__all__ = ['Board', 'ConnectFourGame', 'GameState', 'MoveRejection', 'MoveResult',
           'cell_at', 'check_tie', 'check_win', 'check_win_at', 'current_player',
           'drop_piece', 'get_winning_line', 'new_game', 'outcome']
