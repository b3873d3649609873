"""
Unit tests for the Gymnasium environment and text rendering.
"""
from typing import Tuple

import numpy as np
import pytest
from pandaquest import Board, PandaQuestEnv, render_board


def action_for(env: PandaQuestEnv, row: int, col: int) -> int:
    """Flat action index for a tile."""
    return row * env.cols + col


def find_bamboo(env: PandaQuestEnv) -> int:
    """Action index of the first bamboo tile."""
    board = env.game.board
    for row in range(board.rows):
        for col in range(board.cols):
            if board.get_tile(row, col).has_bamboo:
                return action_for(env, row, col)
    raise AssertionError("board has no bamboo")


def numbered_safe_tile(env: PandaQuestEnv) -> Tuple[int, int]:
    """A safe tile with bamboo next to it, so revealing it never floods."""
    board = env.game.board
    return next(
        (row, col)
        for row in range(board.rows)
        for col in range(board.cols)
        if not board.get_tile(row, col).has_bamboo
        and board.get_tile(row, col).adjacent_bamboo > 0
    )


@pytest.fixture
def env() -> PandaQuestEnv:
    """Level 1 environment reset with a fixed seed."""
    environment = PandaQuestEnv(level=1, render_mode="ansi")
    environment.reset(seed=3)
    return environment


# ============================================================================
# Space Tests
# ============================================================================

class TestSpaces:
    """Test observation and action spaces."""

    def test_action_space_covers_every_tile(self, env: PandaQuestEnv) -> None:
        """One discrete action per tile."""
        assert env.action_space.n == 36

    def test_observation_in_space(self, env: PandaQuestEnv) -> None:
        """Reset observation belongs to the observation space."""
        obs, _ = env.reset(seed=3)
        assert obs.shape == (6, 6)
        assert env.observation_space.contains(obs)

    def test_larger_level_has_larger_spaces(self) -> None:
        """Higher levels expose bigger boards."""
        environment = PandaQuestEnv(level=3)
        assert environment.action_space.n == 64
        assert environment.observation_space.shape == (8, 8)


# ============================================================================
# Step Tests
# ============================================================================

class TestStep:
    """Test rewards and termination."""

    def test_safe_step_rewards_positive(self, env: PandaQuestEnv) -> None:
        """Revealing a safe tile gives a positive reward."""
        row, col = env.game.board.hidden_safe_positions()[0]
        _, reward, terminated, truncated, info = env.step(
            action_for(env, row, col)
        )
        assert reward > 0
        assert truncated is False
        assert info["steps"] == 1
        assert info["revealed"] >= 1
        assert terminated is (info["game_state"] == "LEVEL_COMPLETE")

    def test_bamboo_step_costs_life(self, env: PandaQuestEnv) -> None:
        """Hitting bamboo is penalised and keeps the episode going."""
        _, reward, terminated, _, info = env.step(find_bamboo(env))
        assert reward == -10.0
        assert terminated is False
        assert info["lives"] == 2

    def test_repeated_step_is_penalised(self, env: PandaQuestEnv) -> None:
        """Selecting a revealed tile gives a small penalty."""
        row, col = numbered_safe_tile(env)
        env.step(action_for(env, row, col))
        _, reward, _, _, _ = env.step(action_for(env, row, col))
        assert reward == pytest.approx(-0.1)

    def test_losing_all_lives_terminates(self, env: PandaQuestEnv) -> None:
        """The episode ends when the lives run out."""
        terminated = False
        for _ in range(3):
            _, _, terminated, _, info = env.step(find_bamboo(env))
        assert terminated is True
        assert info["game_state"] == "GAME_OVER"

    def test_clearing_level_terminates(self, env: PandaQuestEnv) -> None:
        """The episode ends with a bonus when the level is cleared."""
        reward = 0.0
        terminated = False
        while env.game.board.hidden_safe_positions():
            row, col = env.game.board.hidden_safe_positions()[0]
            _, reward, terminated, _, _ = env.step(action_for(env, row, col))
        assert reward == 10.0
        assert terminated is True

    def test_action_mask_matches_hidden_tiles(
        self, env: PandaQuestEnv
    ) -> None:
        """Mask marks exactly the hidden tiles."""
        row, col = env.game.board.hidden_safe_positions()[0]
        env.step(action_for(env, row, col))
        mask = env.get_action_mask()
        assert mask.dtype == bool
        assert not mask[action_for(env, row, col)]
        assert mask.sum() == len(env.game.board.get_valid_actions())


# ============================================================================
# Rendering Tests
# ============================================================================

class TestRender:
    """Test text rendering."""

    def test_render_hidden_board(self) -> None:
        """Hidden tiles render as # under the column header."""
        board = Board.from_layout(2, 3, [(0, 0)])
        lines = render_board(board).splitlines()
        assert lines[0] == "     0  1  2"
        assert lines[2] == " 0|  #  #  #"
        assert lines[3] == " 1|  #  #  #"

    def test_render_revealed_board(self) -> None:
        """Revealed tiles show counts, blanks and bamboo."""
        board = Board.from_layout(2, 3, [(0, 0)])
        board.reveal_tile(1, 2)
        board.reveal_tile(0, 0)
        lines = render_board(board).splitlines()
        assert lines[2] == " 0|  B  1   "
        assert lines[3] == " 1|  #  1   "

    def test_env_render_ansi_returns_text(self, env: PandaQuestEnv) -> None:
        """ANSI render mode returns the board text."""
        assert env.render() == render_board(env.game.board)

    def test_observation_matches_board(self, env: PandaQuestEnv) -> None:
        """Step observation equals the board observation."""
        row, col = env.game.board.hidden_safe_positions()[0]
        obs, _, _, _, _ = env.step(action_for(env, row, col))
        assert np.array_equal(obs, env.game.board.get_observation())
