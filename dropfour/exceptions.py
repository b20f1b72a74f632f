"""
exceptions.py - Error types raised by the Connect Four engine

Only caller misuse is raised. A full column or a finished game is a normal
outcome and comes back on the MoveResult instead.
"""


class ConnectFourError(Exception):
    """Base class for engine errors."""


class OutOfBoundsError(ConnectFourError, IndexError):
    """Raised when a row or column lies outside the grid."""

    def __init__(self, message: str, row: int = None, column: int = None):
        super().__init__(message)
        self.row = row
        self.column = column


class ConfigurationError(ConnectFourError, ValueError):
    """Raised when grid dimensions can never produce a win."""


class CellOccupiedError(ConnectFourError, ValueError):
    """Raised when writing to a cell that already holds a piece."""
