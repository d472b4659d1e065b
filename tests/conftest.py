"""
Pytest configuration and shared fixtures.
"""
import pytest
import sys
from pathlib import Path
from typing import Iterable, List, Tuple

# Add src to path for imports
sys.path.insert(0, str(Path(__file__).parent.parent / "src"))

from minesweeper import Board, BoardConfig, Cell, GameSession


# ============================================================================
# Scripted Randomness
# ============================================================================

class ScriptedRandom:
    """Stand-in for random.Random that returns a fixed sequence."""

    def __init__(self, values: Iterable[int]) -> None:
        self.values = list(values)
        self.calls: List[int] = []

    def randrange(self, stop: int) -> int:
        self.calls.append(stop)
        value = self.values.pop(0)
        assert 0 <= value < stop
        return value


def scripted_mines(positions: Iterable[Tuple[int, int]]) -> ScriptedRandom:
    """Random source that draws the given (x, y) positions in order."""
    values: List[int] = []
    for x, y in positions:
        values.extend((x, y))
    return ScriptedRandom(values)


# Two vertical mine walls on a 10x10 board at columns 5 and 7.
# A first click at (1, 1) opens everything except column 6, whose
# cells touch six mines each and are never reached by a flood.
WALL_MINES = [(5, y) for y in range(10)] + [(7, y) for y in range(10)]


class Clock:
    """Manually advanced time source."""

    def __init__(self) -> None:
        self.now = 100.0

    def __call__(self) -> float:
        return self.now


# ============================================================================
# Board Fixtures
# ============================================================================

@pytest.fixture
def default_board() -> Board:
    """Create a default 9x9 board."""
    return Board.create(9, 9)


@pytest.fixture
def small_board() -> Board:
    """Create a 4x4 board, the smallest that fits a first click plus mines."""
    return Board.create(4, 4)


# ============================================================================
# Cell Fixtures
# ============================================================================

@pytest.fixture
def hidden_cell() -> Cell:
    """Create a hidden cell."""
    return Cell()


@pytest.fixture
def mine_cell() -> Cell:
    """Create a cell containing a mine."""
    return Cell(is_mine=True)


# ============================================================================
# Session Fixtures
# ============================================================================

@pytest.fixture
def clock() -> Clock:
    """Create a manual clock starting at t=100."""
    return Clock()


@pytest.fixture
def wall_session(clock: Clock) -> GameSession:
    """10x10 session with the two mine walls, not yet clicked."""
    return GameSession(
        BoardConfig(10, 10, len(WALL_MINES)),
        rng=scripted_mines(WALL_MINES),
        clock=clock,
    )


@pytest.fixture
def started_wall_session(wall_session: GameSession) -> GameSession:
    """Wall session after the first click at (1, 1)."""
    wall_session.handle_reveal(1, 1)
    return wall_session


@pytest.fixture
def empty_session() -> GameSession:
    """4x4 session without mines."""
    return GameSession(BoardConfig(4, 4, 0))


# ============================================================================
# Configuration Fixtures
# ============================================================================

@pytest.fixture
def valid_config() -> BoardConfig:
    """Create a valid board configuration."""
    return BoardConfig(9, 9, 10)
