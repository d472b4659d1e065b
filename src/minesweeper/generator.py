"""
Mine placement for Minesweeper boards.

Mines are placed once, right after the first click, so the generator
takes a set of positions that must stay mine-free.
"""
import logging
import random
from typing import Iterable, List, Optional

from .board import Board
from .cell import Position
from .errors import TooManyMines


logger = logging.getLogger(__name__)


# ============================================================================
# Mine Generator
# ============================================================================

class MineGenerator:
    """
    Places mines on a board from a random start with a linear scan.

    Each mine starts at a uniformly random cell. If that cell is taken
    or protected, the scan moves right, wrapping to the next row and
    from the last row back to the first, until a free cell is found.
    """

    def __init__(self, rng: Optional[random.Random] = None) -> None:
        """
        Initialize the generator.

        Args:
            rng: Source of randomness with a randrange method.
                Defaults to a fresh random.Random().
        """
        self.rng = rng if rng is not None else random.Random()

    def place(
        self,
        board: Board,
        num_mines: int,
        safe_set: Iterable[Position],
    ) -> List[Position]:
        """
        Place mines on the board, avoiding the safe set.

        Args:
            board: Board whose cells receive the mines.
            num_mines: Number of mines to place.
            safe_set: Positions that must not hold a mine.

        Returns:
            Mine positions in placement order.

        Raises:
            TooManyMines: If the free cells outside the safe set cannot
                hold num_mines mines.
        """
        safe = set(safe_set)
        free_slots = sum(
            1 for cell in board.cells()
            if not cell.is_mine and cell.position not in safe
        )
        if num_mines > free_slots:
            raise TooManyMines(
                f"Cannot place {num_mines} mines in {free_slots} free cells"
            )

        placed = []
        for _ in range(num_mines):
            x = self.rng.randrange(board.width)
            y = self.rng.randrange(board.height)
            x, y = self._next_free(board, x, y, safe)
            board.cell_at((x, y)).is_mine = True
            placed.append((x, y))

        logger.debug("Placed %d mines on %dx%d board", len(placed), board.width, board.height)
        return placed

    @staticmethod
    def _next_free(board: Board, x: int, y: int, safe: set) -> Position:
        """Scan forward from (x, y) to the first cell that can hold a mine."""
        while board.cell_at((x, y)).is_mine or (x, y) in safe:
            x += 1
            if x >= board.width:
                x = 0
                y += 1
            if y >= board.height:
                y = 0
        return x, y
