"""
Gymnasium environment wrapper for PandaQuest.

Exposes a single level of the game through the standard Env interface
so scripts and evaluation harnesses can drive it.
"""
from typing import Any, Dict, Optional, SupportsFloat, Tuple

import gymnasium as gym
import numpy as np
from gymnasium import spaces

from .board import Board
from .game import Game, GameConfig, level_layout
from .tile import HIDDEN, HIDDEN_POWER_UP, REVEALED_BAMBOO


# ============================================================================
# Text Rendering
# ============================================================================

def render_board(board: Board) -> str:
    """
    Render a board as text with row and column headers.

    Hidden tiles show as ``#``, hidden power-ups as ``*``, revealed
    bamboo as ``B`` and empty tiles as blanks.
    """
    obs = board.get_observation()
    header = "   " + "".join(f"{col:>3}" for col in range(board.cols))
    lines = [header, "   " + "---" * board.cols]

    for row in range(board.rows):
        row_str = f"{row:>2}|"
        for col in range(board.cols):
            val = obs[row, col]
            if val == HIDDEN:
                row_str += "  #"
            elif val == HIDDEN_POWER_UP:
                row_str += "  *"
            elif val == REVEALED_BAMBOO:
                row_str += "  B"
            elif val == 0:
                row_str += "   "
            else:
                row_str += f"{int(val):>3}"
        lines.append(row_str)

    return "\n".join(lines)


# ============================================================================
# PandaQuest Environment
# ============================================================================

class PandaQuestEnv(gym.Env):
    """
    Gymnasium environment for one PandaQuest level.

    Observation:
        2D array where:
        - -1 = hidden tile
        - -3 = hidden tile with a power-up
        - 0-8 = revealed tile with adjacent bamboo count
        - 9 = revealed bamboo

    Actions:
        Discrete action space of size rows * cols.
        Action i corresponds to tile (i // cols, i % cols).

    Rewards:
        - +1 for revealing a safe tile
        - +10 for completing the level
        - -10 for hitting bamboo
        - -0.1 for a rejected selection (already revealed)

    The episode ends when the level is complete or the lives run out.
    Hitting bamboo with lives left restarts the level on a fresh board of
    the same size.
    """

    metadata = {"render_modes": ["human", "ansi"], "render_fps": 4}

    def __init__(
        self,
        level: int = 1,
        lives: int = 3,
        render_mode: Optional[str] = None,
    ) -> None:
        """
        Initialize the PandaQuest environment.

        Args:
            level: Level to play (sets board size and bamboo count).
            lives: Lives available per episode.
            render_mode: How to render the environment.
        """
        super().__init__()

        self.game = Game(GameConfig(starting_lives=lives, starting_level=level))
        self.render_mode = render_mode

        board_config, _ = level_layout(level)
        self.rows = board_config.rows
        self.cols = board_config.cols

        self.observation_space = spaces.Box(
            low=HIDDEN_POWER_UP,
            high=REVEALED_BAMBOO,
            shape=(self.rows, self.cols),
            dtype=np.int8,
        )

        # One action per tile
        self.action_space = spaces.Discrete(self.rows * self.cols)

        self._steps = 0
        self._total_safe_tiles = board_config.safe_tiles

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
        self.game.reset(seed)
        self._steps = 0

        return self.game.board.get_observation(), self._get_info()

    def step(
        self, action: int
    ) -> Tuple[np.ndarray, SupportsFloat, bool, bool, Dict[str, Any]]:
        """
        Execute one action in the environment.

        Args:
            action: Tile index to select (row * cols + col).

        Returns:
            Tuple of (observation, reward, terminated, truncated, info).
        """
        row, col = self._action_to_position(action)
        self._steps += 1

        reward = self._calculate_reward(row, col)
        observation = self.game.board.get_observation()
        terminated = self.game.is_game_over or self.game.is_level_complete

        return observation, reward, terminated, False, self._get_info()

    def _action_to_position(self, action: int) -> Tuple[int, int]:
        """Convert flat action index to (row, col) position."""
        return int(action) // self.cols, int(action) % self.cols

    def _calculate_reward(self, row: int, col: int) -> float:
        """
        Select a tile and score the outcome.

        Args:
            row: Row index.
            col: Column index.

        Returns:
            Reward value.
        """
        lives_before = self.game.lives
        if not self.game.select_tile(row, col):
            return -0.1

        if self.game.lives < lives_before:
            return -10.0
        if self.game.is_level_complete:
            return 10.0
        return 1.0

    def _get_info(self) -> Dict[str, Any]:
        """Get info dictionary for current state."""
        board = self.game.board
        return {
            "steps": self._steps,
            "level": self.game.current_level,
            "lives": self.game.lives,
            "revealed": board.revealed_count,
            "total_safe": self._total_safe_tiles,
            "game_state": self.game.state.name,
            "valid_actions": len(board.get_valid_actions()),
        }

    def render(self) -> Optional[str]:
        """Render the current board state."""
        if self.render_mode == "ansi":
            return render_board(self.game.board)
        if self.render_mode == "human":
            print(render_board(self.game.board))
        return None

    def get_action_mask(self) -> np.ndarray:
        """
        Get mask of valid actions.

        Returns:
            Boolean array where True = hidden tile.
        """
        mask = np.zeros(self.action_space.n, dtype=bool)
        for row, col in self.game.board.get_valid_actions():
            mask[row * self.cols + col] = True
        return mask
