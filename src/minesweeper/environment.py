"""
Gymnasium environment wrapper for Minesweeper.

Provides a standard RL interface over a GameSession.
"""
import random
from typing import Any, Dict, Optional, Tuple, SupportsFloat

import gymnasium as gym
import numpy as np
from gymnasium import spaces

from .board import BoardConfig
from .cell import OBS_FLAGGED, OBS_EXPLODED
from .session import GameSession


# ============================================================================
# Minesweeper Environment
# ============================================================================

class MinesweeperEnv(gym.Env):
    """
    Gymnasium environment for Minesweeper.

    Observation:
        2D array of shape (height, width) where:
        - -1 = hidden cell
        - -2 = flagged cell
        - 0-8 = revealed cell with adjacent mine count
        - 9 = mine shown after a loss
        - 10 = mine that was hit

    Actions:
        Discrete action space of size 2 * width * height.
        Action i < width * height reveals cell (i % width, i // width);
        the upper half toggles a flag on the same cells.

    Rewards:
        - +1 for revealing safe cells
        - +10 for winning the game
        - -10 for hitting a mine
        - -0.1 for an action that changes nothing
        - 0 for toggling a flag
    """

    metadata = {"render_modes": ["human", "ansi"], "render_fps": 4}

    def __init__(
        self,
        config: Optional[BoardConfig] = None,
        render_mode: Optional[str] = None,
    ) -> None:
        """
        Initialize the Minesweeper environment.

        Args:
            config: Board configuration (default: 9x9 with 10 mines).
            render_mode: How to render the environment.
        """
        super().__init__()

        self.config = config or BoardConfig()
        self.session = GameSession(self.config)
        self.render_mode = render_mode

        self._num_cells = self.config.width * self.config.height

        self.observation_space = spaces.Box(
            low=OBS_FLAGGED,
            high=OBS_EXPLODED,
            shape=(self.config.height, self.config.width),
            dtype=np.int8,
        )
        self.action_space = spaces.Discrete(2 * self._num_cells)

        self._steps = 0

    def reset(
        self,
        *,
        seed: Optional[int] = None,
        options: Optional[Dict[str, Any]] = None,
    ) -> Tuple[np.ndarray, Dict[str, Any]]:
        """
        Reset the environment for a new episode.

        Args:
            seed: Random seed for reproducibility.
            options: Additional options (unused).

        Returns:
            Tuple of (observation, info dict).
        """
        super().reset(seed=seed)
        if seed is not None:
            self.session.generator.rng = random.Random(seed)
        self.session.reset()
        self._steps = 0

        return self.session.get_observation(), self._get_info()

    def step(
        self, action: int
    ) -> Tuple[np.ndarray, SupportsFloat, bool, bool, Dict[str, Any]]:
        """
        Execute one action in the environment.

        Args:
            action: Cell index to reveal, or cell index plus
                width * height to toggle a flag.

        Returns:
            Tuple of (observation, reward, terminated, truncated, info).
        """
        flag = action >= self._num_cells
        x, y = self._action_to_position(action % self._num_cells)
        self._steps += 1

        if flag:
            changes = self.session.handle_flag_toggle(x, y)
            reward = 0.0 if changes else -0.1
        else:
            reward = self._calculate_reward(x, y)

        observation = self.session.get_observation()
        terminated = self.session.is_game_over
        truncated = False

        if self.render_mode == "human":
            self.render()

        return observation, reward, terminated, truncated, self._get_info()

    def _action_to_position(self, action: int) -> Tuple[int, int]:
        """Convert flat cell index to (x, y) position."""
        return action % self.config.width, action // self.config.width

    def _calculate_reward(self, x: int, y: int) -> float:
        """Reveal a cell and score the result."""
        changes = self.session.handle_reveal(x, y)

        if not changes:
            return -0.1
        if self.session.has_won:
            return 10.0
        if self.session.is_game_over:
            return -10.0
        return 1.0

    def _get_info(self) -> Dict[str, Any]:
        """Get info dictionary for current state."""
        return {
            "steps": self._steps,
            "remaining_safe": self.session.remaining_safe_cells,
            "total_safe": self.config.safe_cells,
            "flag_budget": self.session.flag_budget,
            "game_state": self.session.state.name,
        }

    def render(self) -> Optional[str]:
        """Render the current board state."""
        if self.render_mode == "ansi":
            return self.session.render()
        if self.render_mode == "human":
            print(self.session.render())
        return None

    def get_action_mask(self) -> np.ndarray:
        """
        Get mask of valid actions.

        Returns:
            Boolean array where True = reveal of a hidden cell or
            toggle of a covered cell.
        """
        mask = np.zeros(self.action_space.n, dtype=bool)
        if self.session.is_game_over:
            return mask
        for cell in self.session.board.cells():
            x, y = cell.position
            index = y * self.config.width + x
            if cell.is_hidden:
                mask[index] = True
            if cell.is_hidden or cell.is_flagged:
                mask[self._num_cells + index] = True
        return mask
