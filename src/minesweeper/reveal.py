"""
Reveal rules for Minesweeper.

Every change of a cell's visibility goes through RevealEngine: plain
reveals, flood fill from empty cells, chord reveals around numbers
and flag toggling. Counters live in the session; the engine reports
what it did and the session applies it.
"""
import logging
from collections import deque
from dataclasses import dataclass, field
from typing import Iterable, List, Optional, Set

from .board import Board
from .cell import Cell, CellState, Position
from .events import CellChanged


logger = logging.getLogger(__name__)


# ============================================================================
# Reveal Report
# ============================================================================

@dataclass
class RevealReport:
    """
    Result of one engine operation.

    Attributes:
        changed: One event per mutated cell, in mutation order.
        safe_revealed: Non-mine cells that became REVEALED.
        flags_freed: Flagged cells opened by a flood.
        flag_delta: Net change to the flag budget.
        exploded: Position of the mine that was hit, if any.
    """

    changed: List[CellChanged] = field(default_factory=list)
    safe_revealed: int = 0
    flags_freed: int = 0
    flag_delta: int = 0
    exploded: Optional[Position] = None

    def merge(self, other: "RevealReport") -> "RevealReport":
        """Fold another report into this one."""
        self.changed.extend(other.changed)
        self.safe_revealed += other.safe_revealed
        self.flags_freed += other.flags_freed
        self.flag_delta += other.flag_delta
        if self.exploded is None:
            self.exploded = other.exploded
        return self


# ============================================================================
# Reveal Engine
# ============================================================================

class RevealEngine:
    """Applies visibility transitions to a board."""

    def __init__(self, board: Board) -> None:
        self.board = board

    # ========================================================================
    # Cell Transitions (Low-level)
    # ========================================================================

    def _set(
        self,
        report: RevealReport,
        cell: Cell,
        state: CellState,
        adjacent_mines: int = 0,
    ) -> None:
        """Change a cell's state and record the event."""
        if cell.is_flagged and state not in (CellState.HIDDEN, CellState.FLAGGED):
            report.flags_freed += 1
            report.flag_delta += 1
        self.board.set_state(cell.position, state, adjacent_mines)
        report.changed.append(CellChanged.from_cell(cell))

    def _open(self, report: RevealReport, cell: Cell) -> None:
        """Open one covered cell, exploding it if it holds a mine."""
        if cell.is_mine:
            # Only the first mine of a cascade explodes; the rest are
            # shown when the game ends
            if report.exploded is None:
                self._set(report, cell, CellState.MINE_EXPLODED)
                report.exploded = cell.position
            return
        count = self.board.count_adjacent_mines(cell.position)
        self._set(report, cell, CellState.REVEALED, count)
        report.safe_revealed += 1

    def _cascade(
        self, report: RevealReport, start: Iterable[Position]
    ) -> RevealReport:
        """
        Open cells from a work-list, spreading from every empty cell.

        Args:
            report: Report that collects the changes.
            start: Positions to open first. Each is opened only if it
                is still covered when its turn comes.

        Returns:
            The same report.
        """
        queue = deque()
        scheduled: Set[Position] = set()
        for pos in start:
            if pos not in scheduled:
                scheduled.add(pos)
                queue.append(pos)

        while queue:
            pos = queue.popleft()
            cell = self.board.cell_at(pos)
            if cell.is_opened:
                continue
            self._open(report, cell)
            if cell.is_revealed and cell.adjacent_mines == 0:
                for neighbor in self.board.neighbors(pos):
                    if neighbor in scheduled:
                        continue
                    if self.board.cell_at(neighbor).is_opened:
                        continue
                    scheduled.add(neighbor)
                    queue.append(neighbor)

        return report

    # ========================================================================
    # Game Actions (Mid-level)
    # ========================================================================

    def reveal(self, pos: Position) -> RevealReport:
        """
        Reveal a hidden cell.

        Flagged and already opened cells are left alone. A cell with
        no adjacent mines floods its neighbors, flags included.

        Args:
            pos: (x, y) to reveal.

        Returns:
            Report of everything that changed.
        """
        report = RevealReport()
        cell = self.board.get_cell(*pos)
        if cell is None or not cell.is_hidden:
            return report
        self._cascade(report, [pos])
        logger.debug("Reveal at %s opened %d cells", pos, len(report.changed))
        return report

    def force_open(self, pos: Position) -> RevealReport:
        """Show a cell as empty without checking for a mine."""
        report = RevealReport()
        cell = self.board.cell_at(pos)
        self._set(report, cell, CellState.REVEALED, 0)
        report.safe_revealed += 1
        return report

    def flood(self, pos: Position, override_flags: bool = True) -> RevealReport:
        """
        Open the covered neighbors of a cell and cascade from them.

        Args:
            pos: (x, y) of the center cell.
            override_flags: Whether flagged neighbors are opened too.
                Cells reached further down the cascade from an empty
                cell are opened even if flagged.

        Returns:
            Report of everything that changed.
        """
        report = RevealReport()
        targets = []
        for neighbor in self.board.neighbors(pos):
            cell = self.board.cell_at(neighbor)
            if cell.is_hidden or (override_flags and cell.is_flagged):
                targets.append(neighbor)
        self._cascade(report, targets)
        logger.debug("Flood at %s opened %d cells", pos, len(report.changed))
        return report

    def count_adjacent_flags(self, pos: Position) -> int:
        """Count flagged cells among the neighbor slots of a cell."""
        return sum(
            1 for neighbor in self.board.neighbors(pos)
            if self.board.cell_at(neighbor).is_flagged
        )

    def chord_reveal(self, pos: Position) -> RevealReport:
        """
        Chord action: open hidden neighbors of a number whose flags match.

        Only applies to a revealed cell with a nonzero count. Flagged
        neighbors stay flagged.

        Args:
            pos: (x, y) of the numbered cell.

        Returns:
            Report of everything that changed, empty if not applicable.
        """
        cell = self.board.get_cell(*pos)
        if cell is None or not cell.is_number:
            return RevealReport()
        if self.count_adjacent_flags(pos) != cell.adjacent_mines:
            return RevealReport()
        return self.flood(pos, override_flags=False)

    def toggle_flag(self, pos: Position) -> RevealReport:
        """
        Toggle flag on a cell.

        Args:
            pos: (x, y) to flag or unflag.

        Returns:
            Report with the flag delta, empty if the cell is opened.
        """
        report = RevealReport()
        cell = self.board.get_cell(*pos)
        if cell is None:
            return report
        if cell.is_hidden:
            self._set(report, cell, CellState.FLAGGED)
            report.flag_delta -= 1
        elif cell.is_flagged:
            self._set(report, cell, CellState.HIDDEN)
            report.flag_delta += 1
        return report

    # ========================================================================
    # End of Game (High-level)
    # ========================================================================

    def show_mines(self) -> RevealReport:
        """Uncover every mine that has not exploded."""
        report = RevealReport()
        for cell in self.board.cells():
            if cell.is_mine and cell.state != CellState.MINE_EXPLODED:
                self._set(report, cell, CellState.MINE)
        return report

    def flag_mines(self) -> RevealReport:
        """Flag every mine that is still hidden."""
        report = RevealReport()
        for cell in self.board.cells():
            if cell.is_mine and cell.is_hidden:
                self._set(report, cell, CellState.FLAGGED)
                report.flag_delta -= 1
        return report
