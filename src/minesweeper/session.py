"""
Game session for Minesweeper.

Ties board, mine generator and reveal engine together over the
lifetime of one game: configuration, the first click, counters,
win/loss detection and change notifications.
"""
import logging
import random
import time
from enum import Enum, auto
from typing import Callable, List, Optional

import numpy as np

from .board import Board, BoardConfig
from .cell import Position
from .errors import SessionNotConfigured
from .events import CellChanged, FlagBudgetChanged, GameEnded, GameEvent, Listener
from .generator import MineGenerator
from .reveal import RevealEngine, RevealReport


logger = logging.getLogger(__name__)


# ============================================================================
# Constants
# ============================================================================

class SessionState(Enum):
    """Lifecycle of a session."""

    NOT_STARTED = auto()
    AWAITING_FIRST_CLICK = auto()
    PLAYING = auto()
    WON = auto()
    LOST = auto()


class Outcome(Enum):
    """Result of the current game."""

    IN_PROGRESS = auto()
    WON = auto()
    LOST = auto()


_TERMINAL_STATES = (SessionState.WON, SessionState.LOST)


# ============================================================================
# Game Session
# ============================================================================

class GameSession:
    """
    One game of Minesweeper at a time.

    Mines are placed on the first reveal so the clicked cell and its
    neighbors are always safe. Each action returns the cell changes it
    caused; every change is also broadcast to subscribed listeners.
    """

    def __init__(
        self,
        config: Optional[BoardConfig] = None,
        rng: Optional[random.Random] = None,
        clock: Callable[[], float] = time.monotonic,
    ) -> None:
        """
        Initialize the session.

        Args:
            config: Board configuration. Without one, the session waits
                for configure().
            rng: Random source for mine placement.
            clock: Time source in seconds, used for the game timer.
        """
        self.generator = MineGenerator(rng)
        self._clock = clock
        self._listeners: List[Listener] = []

        self._config: Optional[BoardConfig] = None
        self._board: Optional[Board] = None
        self._engine: Optional[RevealEngine] = None
        self._state = SessionState.NOT_STARTED
        self._remaining_safe_cells = 0
        self._flag_budget = 0
        self._started_at: Optional[float] = None
        self._ended_at: Optional[float] = None

        if config is not None:
            self._start(config)

    # ========================================================================
    # Configuration
    # ========================================================================

    def configure(self, width: int, height: int, mine_count: int) -> None:
        """
        Start a new game with new dimensions.

        Args:
            width: Number of columns.
            height: Number of rows.
            mine_count: Number of mines.

        Raises:
            InvalidDimension: If width or height is not positive.
            InvalidConfiguration: If the mines do not fit the board.
        """
        self._start(BoardConfig(width, height, mine_count))

    def reset(self) -> None:
        """Start a new game with the current configuration."""
        self._start(self._require_config())

    def _start(self, config: BoardConfig) -> None:
        self._config = config
        self._board = Board.from_config(config)
        self._engine = RevealEngine(self._board)
        self._state = SessionState.AWAITING_FIRST_CLICK
        self._remaining_safe_cells = config.safe_cells
        self._flag_budget = config.num_mines
        self._started_at = None
        self._ended_at = None
        logger.info(
            "New game: %dx%d with %d mines",
            config.width, config.height, config.num_mines,
        )
        self._emit(FlagBudgetChanged(self._flag_budget))

    def _require_config(self) -> BoardConfig:
        if self._config is None:
            raise SessionNotConfigured("Call configure() before playing")
        return self._config

    # ========================================================================
    # Observers
    # ========================================================================

    def subscribe(self, listener: Listener) -> Callable[[], None]:
        """
        Register a listener for every game event.

        Returns:
            Function that removes the listener again.
        """
        self._listeners.append(listener)

        def unsubscribe() -> None:
            if listener in self._listeners:
                self._listeners.remove(listener)

        return unsubscribe

    def _emit(self, event: GameEvent) -> None:
        for listener in list(self._listeners):
            listener(event)

    # ========================================================================
    # Player Actions
    # ========================================================================

    def handle_reveal(self, x: int, y: int) -> List[CellChanged]:
        """
        Reveal a cell, or chord on it if it already shows a number.

        Args:
            x: Column of the clicked cell.
            y: Row of the clicked cell.

        Returns:
            Every cell change caused by the click, in order.
        """
        self._require_config()
        if self.is_game_over or not self._board.is_valid_position(x, y):
            return []

        pos = (x, y)
        if self._state == SessionState.AWAITING_FIRST_CLICK:
            report = self._first_click(pos)
        elif self._board.cell_at(pos).is_number:
            report = self._engine.chord_reveal(pos)
        else:
            report = self._engine.reveal(pos)

        return self._apply(report)

    def handle_flag_toggle(self, x: int, y: int) -> List[CellChanged]:
        """
        Flag or unflag a hidden cell.

        Allowed before the first click. Ignored once the game is over.
        """
        self._require_config()
        if self.is_game_over or not self._board.is_valid_position(x, y):
            return []
        return self._apply(self._engine.toggle_flag((x, y)))

    def _first_click(self, pos: Position) -> RevealReport:
        """Open the clicked cell as empty, then place mines around it."""
        report = self._engine.force_open(pos)
        safe_set = self._board.neighbors(pos, include_self=True)
        self.generator.place(self._board, self._config.num_mines, safe_set)
        report.merge(self._engine.flood(pos, override_flags=True))

        self._state = SessionState.PLAYING
        self._started_at = self._clock()
        logger.info("First click at %s, %d mines placed", pos, self._config.num_mines)
        return report

    # ========================================================================
    # Outcome Handling
    # ========================================================================

    def _apply(self, report: RevealReport) -> List[CellChanged]:
        """Update counters from a report and finish the game if needed."""
        self._remaining_safe_cells -= report.safe_revealed

        if report.exploded is not None:
            report.merge(self._engine.show_mines())
            self._finish(SessionState.LOST)
        elif self._remaining_safe_cells == 0:
            report.merge(self._engine.flag_mines())
            self._finish(SessionState.WON)

        for event in report.changed:
            self._emit(event)

        if report.flag_delta:
            self._flag_budget += report.flag_delta
            self._emit(FlagBudgetChanged(self._flag_budget))

        if self.is_game_over:
            self._emit(GameEnded(won=self._state == SessionState.WON))

        return report.changed

    def _finish(self, state: SessionState) -> None:
        self._state = state
        self._ended_at = self._clock()
        logger.info(
            "Game %s with %d safe cells left",
            "won" if state == SessionState.WON else "lost",
            self._remaining_safe_cells,
        )

    # ========================================================================
    # State Accessors
    # ========================================================================

    @property
    def config(self) -> Optional[BoardConfig]:
        """Current configuration, or None before configure()."""
        return self._config

    @property
    def board(self) -> Board:
        """Board of the current game."""
        self._require_config()
        return self._board

    @property
    def state(self) -> SessionState:
        """Current lifecycle state."""
        return self._state

    @property
    def outcome(self) -> Outcome:
        """Won, lost or still in progress."""
        if self._state == SessionState.WON:
            return Outcome.WON
        if self._state == SessionState.LOST:
            return Outcome.LOST
        return Outcome.IN_PROGRESS

    @property
    def remaining_safe_cells(self) -> int:
        """Non-mine cells still to reveal."""
        return self._remaining_safe_cells

    @property
    def flag_budget(self) -> int:
        """Mines minus flags placed; negative when over-flagged."""
        return self._flag_budget

    @property
    def first_click_happened(self) -> bool:
        """Check if mines have been placed."""
        return self._state in (SessionState.PLAYING,) + _TERMINAL_STATES

    @property
    def is_game_over(self) -> bool:
        """Check if the game was won or lost."""
        return self._state in _TERMINAL_STATES

    @property
    def has_won(self) -> bool:
        """Check if the game was won."""
        return self._state == SessionState.WON

    @property
    def elapsed(self) -> float:
        """Seconds since the first click, frozen once the game ends."""
        if self._started_at is None:
            return 0.0
        end = self._ended_at if self._ended_at is not None else self._clock()
        return end - self._started_at

    def get_observation(self) -> np.ndarray:
        """Get board state as numpy array."""
        return self.board.get_observation()

    def render(self) -> str:
        """Render board as ASCII string."""
        return self.board.render()
