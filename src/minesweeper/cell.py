"""
Cell module for Minesweeper game.

Represents individual cells on the game board with their position,
visibility state and content (mine/number).
"""
from enum import Enum, auto
from dataclasses import dataclass
from typing import Tuple


Position = Tuple[int, int]


# ============================================================================
# Constants
# ============================================================================

class CellState(Enum):
    """Possible visual states of a cell."""

    HIDDEN = auto()
    FLAGGED = auto()
    REVEALED = auto()
    MINE = auto()
    MINE_EXPLODED = auto()


# Observation codes shared by the board snapshot and the environment
OBS_HIDDEN = -1
OBS_FLAGGED = -2
OBS_MINE = 9
OBS_EXPLODED = 10


# ============================================================================
# Cell Data Class
# ============================================================================

@dataclass
class Cell:
    """
    Represents a single cell in the Minesweeper grid.

    Attributes:
        position: (x, y) coordinate of the cell.
        is_mine: Whether this cell contains a mine.
        state: Current visual state.
        adjacent_mines: Mine count shown once the cell is revealed (0-8).
    """

    position: Position = (0, 0)
    is_mine: bool = False
    state: CellState = CellState.HIDDEN
    adjacent_mines: int = 0

    @property
    def is_hidden(self) -> bool:
        """Check if cell is hidden."""
        return self.state == CellState.HIDDEN

    @property
    def is_flagged(self) -> bool:
        """Check if cell is flagged."""
        return self.state == CellState.FLAGGED

    @property
    def is_revealed(self) -> bool:
        """Check if cell shows a number."""
        return self.state == CellState.REVEALED

    @property
    def is_opened(self) -> bool:
        """Check if cell is no longer covered (neither hidden nor flagged)."""
        return self.state not in (CellState.HIDDEN, CellState.FLAGGED)

    @property
    def is_number(self) -> bool:
        """Check if cell is revealed with at least one adjacent mine."""
        return self.is_revealed and self.adjacent_mines > 0

    def to_observation(self) -> int:
        """
        Convert cell to observation value.

        Returns:
            -1: Hidden cell
            -2: Flagged cell
            0-8: Revealed cell with adjacent mine count
            9: Mine shown at game end
            10: Mine that was hit
        """
        if self.state == CellState.HIDDEN:
            return OBS_HIDDEN
        if self.state == CellState.FLAGGED:
            return OBS_FLAGGED
        if self.state == CellState.MINE:
            return OBS_MINE
        if self.state == CellState.MINE_EXPLODED:
            return OBS_EXPLODED
        return self.adjacent_mines
