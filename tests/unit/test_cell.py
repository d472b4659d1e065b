"""
Unit tests for Cell class.

Tests default values, state predicates and observation conversion.
"""
import pytest
from minesweeper import Cell, CellState


# ============================================================================
# Cell Initialization Tests
# ============================================================================

class TestCellInitialization:
    """Test cell creation and default values."""

    def test_default_cell_is_not_mine(self) -> None:
        """New cell should not be a mine by default."""
        cell = Cell()
        assert cell.is_mine is False

    def test_default_cell_is_hidden(self) -> None:
        """New cell should be hidden by default."""
        cell = Cell()
        assert cell.state == CellState.HIDDEN
        assert cell.is_hidden is True

    def test_default_cell_has_zero_adjacent_mines(self) -> None:
        """New cell should have 0 adjacent mines by default."""
        cell = Cell()
        assert cell.adjacent_mines == 0

    def test_cell_keeps_position(self) -> None:
        """Cell should remember its (x, y) position."""
        cell = Cell(position=(3, 7))
        assert cell.position == (3, 7)


# ============================================================================
# State Predicate Tests
# ============================================================================

class TestCellPredicates:
    """Test the state helper properties."""

    def test_flagged_cell_is_not_opened(self) -> None:
        """Flagged cells still count as covered."""
        cell = Cell(state=CellState.FLAGGED)
        assert cell.is_flagged is True
        assert cell.is_opened is False

    @pytest.mark.parametrize(
        "state",
        [CellState.REVEALED, CellState.MINE, CellState.MINE_EXPLODED],
    )
    def test_uncovered_states_are_opened(self, state: CellState) -> None:
        """Revealed and mine states count as opened."""
        assert Cell(state=state).is_opened is True

    def test_revealed_zero_is_not_number(self) -> None:
        """An empty revealed cell is not a number."""
        cell = Cell(state=CellState.REVEALED, adjacent_mines=0)
        assert cell.is_revealed is True
        assert cell.is_number is False

    def test_revealed_count_is_number(self) -> None:
        """A revealed cell with adjacent mines is a number."""
        cell = Cell(state=CellState.REVEALED, adjacent_mines=2)
        assert cell.is_number is True

    def test_hidden_cell_with_count_is_not_number(self) -> None:
        """Counts only matter once the cell is revealed."""
        cell = Cell(adjacent_mines=2)
        assert cell.is_number is False


# ============================================================================
# Observation Tests
# ============================================================================

class TestCellObservation:
    """Test observation value conversion."""

    def test_hidden_cell_observation(self, hidden_cell: Cell) -> None:
        """Hidden cell should return -1."""
        assert hidden_cell.to_observation() == -1

    def test_hidden_mine_observation(self, mine_cell: Cell) -> None:
        """Hidden mine should not leak its content."""
        assert mine_cell.to_observation() == -1

    def test_flagged_cell_observation(self) -> None:
        """Flagged cell should return -2."""
        cell = Cell(is_mine=True, state=CellState.FLAGGED)
        assert cell.to_observation() == -2

    def test_revealed_cell_observation(self) -> None:
        """Revealed cell should return its adjacent mine count."""
        cell = Cell(state=CellState.REVEALED, adjacent_mines=4)
        assert cell.to_observation() == 4

    def test_mine_observation(self) -> None:
        """Mine shown at game end should return 9."""
        cell = Cell(is_mine=True, state=CellState.MINE)
        assert cell.to_observation() == 9

    def test_exploded_mine_observation(self) -> None:
        """Exploded mine should return 10."""
        cell = Cell(is_mine=True, state=CellState.MINE_EXPLODED)
        assert cell.to_observation() == 10
