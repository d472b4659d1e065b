"""
State-change notifications emitted by a game session.

These records are for the rendering layer; the engine never reads
them back.
"""
from dataclasses import dataclass
from typing import Callable, Union

from .cell import Cell, CellState


@dataclass(frozen=True)
class CellChanged:
    """A cell changed its visual state."""

    x: int
    y: int
    state: CellState
    adjacent_mines: int = 0

    @classmethod
    def from_cell(cls, cell: Cell) -> "CellChanged":
        x, y = cell.position
        count = cell.adjacent_mines if cell.state == CellState.REVEALED else 0
        return cls(x, y, cell.state, count)


@dataclass(frozen=True)
class FlagBudgetChanged:
    """The remaining-flag counter changed."""

    value: int


@dataclass(frozen=True)
class GameEnded:
    """The game reached a terminal state."""

    won: bool


GameEvent = Union[CellChanged, FlagBudgetChanged, GameEnded]
Listener = Callable[[GameEvent], None]
