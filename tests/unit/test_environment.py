"""
Unit tests for the Gymnasium environment wrapper.
"""
import numpy as np
from minesweeper import BoardConfig, MinesweeperEnv


# ============================================================================
# Space Tests
# ============================================================================

class TestSpaces:
    """Test observation and action spaces."""

    def test_action_space_covers_reveal_and_flag(self) -> None:
        """Two actions per cell: reveal and flag."""
        env = MinesweeperEnv(BoardConfig(5, 4, 3))
        assert env.action_space.n == 40

    def test_observation_space_shape(self) -> None:
        """Observation is height by width."""
        env = MinesweeperEnv(BoardConfig(5, 4, 3))
        assert env.observation_space.shape == (4, 5)

    def test_reset_observation_all_hidden(self) -> None:
        """A fresh episode shows only hidden cells."""
        env = MinesweeperEnv()
        obs, info = env.reset(seed=1)
        assert obs.shape == (9, 9)
        assert np.all(obs == -1)
        assert info["game_state"] == "AWAITING_FIRST_CLICK"
        assert env.observation_space.contains(obs)


# ============================================================================
# Step Tests
# ============================================================================

class TestStep:
    """Test stepping through a game."""

    def test_first_reveal_is_rewarded(self) -> None:
        """The first click is always safe."""
        env = MinesweeperEnv()
        env.reset(seed=3)
        obs, reward, terminated, truncated, info = env.step(40)
        assert reward in (1.0, 10.0)
        assert obs[4, 4] == 0
        assert truncated is False
        assert info["remaining_safe"] < info["total_safe"]

    def test_flag_action(self) -> None:
        """Upper half of the action space toggles flags."""
        env = MinesweeperEnv(BoardConfig(5, 4, 3))
        env.reset(seed=0)
        obs, reward, terminated, _, info = env.step(20 + 7)
        assert reward == 0.0
        assert obs[1, 2] == -2
        assert info["flag_budget"] == 2
        assert terminated is False

    def test_repeated_reveal_is_penalized(self) -> None:
        """An action that changes nothing costs a little."""
        env = MinesweeperEnv(BoardConfig(5, 4, 3))
        env.reset(seed=0)
        env.step(7)
        _, reward, _, _, _ = env.step(7)
        assert reward == -0.1

    def test_empty_board_terminates_with_win(self) -> None:
        """Clearing the board ends the episode with the win reward."""
        env = MinesweeperEnv(BoardConfig(4, 4, 0))
        env.reset()
        _, reward, terminated, _, info = env.step(5)
        assert reward == 10.0
        assert terminated is True
        assert info["game_state"] == "WON"

    def test_seeded_resets_are_reproducible(self) -> None:
        """The same seed gives the same mines."""
        first = MinesweeperEnv()
        second = MinesweeperEnv()
        first.reset(seed=42)
        second.reset(seed=42)
        first.step(0)
        second.step(0)
        assert (
            first.session.board.mine_positions()
            == second.session.board.mine_positions()
        )


# ============================================================================
# Mask and Render Tests
# ============================================================================

class TestMaskAndRender:
    """Test action masks and rendering."""

    def test_mask_excludes_revealed_cells(self) -> None:
        """Revealed cells cannot be revealed or flagged again."""
        env = MinesweeperEnv()
        env.reset(seed=5)
        env.step(40)
        mask = env.get_action_mask()
        assert mask.shape == (162,)
        assert not mask[40]
        assert not mask[81 + 40]

    def test_mask_empty_after_game_over(self) -> None:
        """Finished games have no valid actions."""
        env = MinesweeperEnv(BoardConfig(4, 4, 0))
        env.reset()
        env.step(0)
        assert not env.get_action_mask().any()

    def test_ansi_render(self) -> None:
        """ANSI mode returns one line per row."""
        env = MinesweeperEnv(BoardConfig(5, 4, 3), render_mode="ansi")
        env.reset(seed=0)
        text = env.render()
        assert text.split("\n") == [". . . . . "] * 4
