"""
Error types for the Minesweeper engine.

All errors derive from MinesweeperError and also from the builtin
exception that best describes them, so callers can catch either.
"""


class MinesweeperError(Exception):
    """Base class for all engine errors."""


class InvalidDimension(MinesweeperError, ValueError):
    """Board width or height is not a positive integer."""


class InvalidConfiguration(MinesweeperError, ValueError):
    """Mine count does not fit the board."""


class TooManyMines(InvalidConfiguration):
    """Not enough free cells outside the safe set to place every mine."""


class OutOfBounds(MinesweeperError, IndexError):
    """Direct cell access with a position outside the board."""


class SessionNotConfigured(MinesweeperError, RuntimeError):
    """A game action was issued before the session was configured."""
