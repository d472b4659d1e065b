"""
Minesweeper engine.

Provides board state, mine placement, reveal rules and the game
session that orchestrates them.
"""
from .errors import (
    MinesweeperError,
    InvalidDimension,
    InvalidConfiguration,
    TooManyMines,
    OutOfBounds,
    SessionNotConfigured,
)
from .cell import Cell, CellState, Position
from .board import Board, BoardConfig
from .generator import MineGenerator
from .events import CellChanged, FlagBudgetChanged, GameEnded
from .reveal import RevealEngine, RevealReport
from .session import GameSession, SessionState, Outcome
from .environment import MinesweeperEnv

__all__ = [
    "MinesweeperError",
    "InvalidDimension",
    "InvalidConfiguration",
    "TooManyMines",
    "OutOfBounds",
    "SessionNotConfigured",
    "Cell",
    "CellState",
    "Position",
    "Board",
    "BoardConfig",
    "MineGenerator",
    "CellChanged",
    "FlagBudgetChanged",
    "GameEnded",
    "RevealEngine",
    "RevealReport",
    "GameSession",
    "SessionState",
    "Outcome",
    "MinesweeperEnv",
]
