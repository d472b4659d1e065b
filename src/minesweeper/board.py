"""
Board module for Minesweeper game.

Implements the dense cell grid with bounds-checked access and
toroidal adjacency. Holds no game rules.
"""
from dataclasses import dataclass, field
from typing import Iterator, List, Optional

import numpy as np

from .cell import Cell, CellState, Position, OBS_HIDDEN, OBS_FLAGGED, OBS_MINE, OBS_EXPLODED
from .errors import InvalidConfiguration, InvalidDimension, OutOfBounds


# ============================================================================
# Constants
# ============================================================================

# The first click opens a 3x3 block, so at least nine cells stay mine-free
SAFE_AREA_SIZE = 9

_RENDER_SYMBOLS = {
    OBS_HIDDEN: ".",
    OBS_FLAGGED: "F",
    OBS_MINE: "*",
    OBS_EXPLODED: "X",
    0: " ",
}


@dataclass
class BoardConfig:
    """
    Configuration for a Minesweeper board.

    Attributes:
        width: Number of columns.
        height: Number of rows.
        num_mines: Total mines to place.
    """

    width: int = 9
    height: int = 9
    num_mines: int = 10

    def __post_init__(self) -> None:
        """Validate configuration after initialization."""
        self._validate()

    def _validate(self) -> None:
        """Ensure configuration values are valid."""
        _check_dimensions(self.width, self.height)
        if self.num_mines < 0:
            raise InvalidConfiguration("Number of mines cannot be negative")
        max_mines = self.max_mines
        if self.num_mines > max_mines:
            raise InvalidConfiguration(
                f"Too many mines for a {self.width}x{self.height} board "
                f"(max {max_mines})"
            )

    @property
    def max_mines(self) -> int:
        """Largest mine count that still leaves the first-click area free."""
        return self.width * self.height - SAFE_AREA_SIZE

    @property
    def safe_cells(self) -> int:
        """Number of cells without a mine."""
        return self.width * self.height - self.num_mines


def _check_dimensions(width: int, height: int) -> None:
    if width <= 0 or height <= 0:
        raise InvalidDimension(
            f"Board dimensions must be positive, got {width}x{height}"
        )


# ============================================================================
# Board Class
# ============================================================================

@dataclass
class Board:
    """
    Minesweeper game board.

    Owns a fixed-size grid of cells. Positions are (x, y) with x the
    column and y the row; the grid is stored row-major.
    """

    width: int
    height: int
    _grid: List[List[Cell]] = field(default_factory=list, repr=False)

    def __post_init__(self) -> None:
        """Initialize the grid after dataclass creation."""
        _check_dimensions(self.width, self.height)
        self._init_grid()

    @classmethod
    def create(cls, width: int, height: int) -> "Board":
        """Create an all-hidden board without mines."""
        return cls(width, height)

    @classmethod
    def from_config(cls, config: BoardConfig) -> "Board":
        """Create an empty board sized by a configuration."""
        return cls(config.width, config.height)

    # ========================================================================
    # Grid Initialization (Low-level)
    # ========================================================================

    def _init_grid(self) -> None:
        """Create empty grid of cells."""
        self._grid = [
            [Cell(position=(x, y)) for x in range(self.width)]
            for y in range(self.height)
        ]

    # ========================================================================
    # Neighbor Utilities (Low-level)
    # ========================================================================

    def is_valid_position(self, x: int, y: int) -> bool:
        """Check if position is within board bounds."""
        return 0 <= x < self.width and 0 <= y < self.height

    def neighbors(
        self, pos: Position, include_self: bool = False
    ) -> List[Position]:
        """
        Get the neighbor positions of a cell.

        Edges wrap around: the cell left of column 0 is the last column,
        and likewise for rows. The result always has 8 entries (9 with
        include_self), which may repeat on boards narrower than 3.

        Args:
            pos: (x, y) of the center cell.
            include_self: Whether the center itself is part of the result.

        Returns:
            List of (x, y) tuples in offset-square scan order.
        """
        x, y = pos
        result = []
        for delta_x in (-1, 0, 1):
            for delta_y in (-1, 0, 1):
                if not include_self and delta_x == 0 and delta_y == 0:
                    continue
                result.append(
                    ((x + delta_x) % self.width, (y + delta_y) % self.height)
                )
        return result

    def count_adjacent_mines(self, pos: Position) -> int:
        """Count mines among the neighbor slots of a cell."""
        return sum(
            1 for neighbor in self.neighbors(pos) if self.cell_at(neighbor).is_mine
        )

    # ========================================================================
    # Cell Access (Mid-level)
    # ========================================================================

    def cell_at(self, pos: Position) -> Cell:
        """Get cell at position, raising OutOfBounds if invalid."""
        x, y = pos
        if not self.is_valid_position(x, y):
            raise OutOfBounds(f"Position {pos} is outside a {self.width}x{self.height} board")
        return self._grid[y][x]

    def get_cell(self, x: int, y: int) -> Optional[Cell]:
        """Get cell at position, or None if invalid."""
        if not self.is_valid_position(x, y):
            return None
        return self._grid[y][x]

    def set_state(
        self, pos: Position, state: CellState, adjacent_mines: int = 0
    ) -> Cell:
        """
        Change the visibility of a cell.

        Args:
            pos: (x, y) of the cell.
            state: New visual state.
            adjacent_mines: Count shown for REVEALED cells, ignored otherwise.

        Returns:
            The updated cell.
        """
        cell = self.cell_at(pos)
        cell.state = state
        if state == CellState.REVEALED:
            cell.adjacent_mines = adjacent_mines
        return cell

    def positions(self) -> Iterator[Position]:
        """Iterate over every position, row by row."""
        for y in range(self.height):
            for x in range(self.width):
                yield (x, y)

    def cells(self) -> Iterator[Cell]:
        """Iterate over every cell, row by row."""
        for row in self._grid:
            yield from row

    def mine_positions(self) -> List[Position]:
        """Positions of all mines, row by row."""
        return [cell.position for cell in self.cells() if cell.is_mine]

    @property
    def mine_count(self) -> int:
        """Number of mines currently on the board."""
        return sum(1 for cell in self.cells() if cell.is_mine)

    @property
    def size(self) -> int:
        """Total number of cells."""
        return self.width * self.height

    # ========================================================================
    # Snapshots (High-level)
    # ========================================================================

    def get_observation(self) -> np.ndarray:
        """
        Get board state as numpy array.

        Returns:
            2D int8 array of shape (height, width), indexed [y, x], where:
                -1 = hidden
                -2 = flagged
                0-8 = revealed with adjacent count
                9 = mine
                10 = exploded mine
        """
        obs = np.zeros((self.height, self.width), dtype=np.int8)
        for y in range(self.height):
            for x in range(self.width):
                obs[y, x] = self._grid[y][x].to_observation()
        return obs

    def render(self) -> str:
        """Render board as ASCII string."""
        lines = []
        obs = self.get_observation()

        for y in range(self.height):
            row_str = ""
            for x in range(self.width):
                val = int(obs[y, x])
                row_str += _RENDER_SYMBOLS.get(val, str(val))
                row_str += " "
            lines.append(row_str)

        return "\n".join(lines)
