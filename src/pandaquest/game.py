"""
Game module for PandaQuest.

Owns the current board together with level progression, lives and
the win/lose flags, and applies power-up effects.
"""
import logging
import random
from dataclasses import dataclass
from enum import Enum, auto
from typing import Optional, Tuple

from .board import Board, BoardConfig
from .powerup import PowerUp


logger = logging.getLogger(__name__)


# ============================================================================
# Constants
# ============================================================================

BASE_BOARD_SIZE = 5
BASE_BAMBOO = 3
BAMBOO_PER_LEVEL = 2
MAX_POWER_UPS = 2
LEVELS_PER_POWER_UP = 3


class GameState(Enum):
    """Possible states of a play-through."""

    PLAYING = auto()
    LEVEL_COMPLETE = auto()
    GAME_OVER = auto()


@dataclass
class GameConfig:
    """
    Configuration for a play-through.

    Attributes:
        starting_lives: Lives granted on construction and reset.
        starting_level: Level played first after construction and reset.
    """

    starting_lives: int = 3
    starting_level: int = 1

    def __post_init__(self) -> None:
        """Validate configuration after initialization."""
        if self.starting_lives < 1:
            raise ValueError("Starting lives must be positive")
        if self.starting_level < 1:
            raise ValueError("Starting level must be at least 1")


def level_layout(level: int) -> Tuple[BoardConfig, int]:
    """
    Compute the board for a level.

    Boards grow by one row and column per level and gain two bamboo;
    power-ups start at one and rise to two from level 3.

    Args:
        level: Level number (1-based).

    Returns:
        Tuple of (board configuration, power-up count).
    """
    size = BASE_BOARD_SIZE + level
    num_bamboo = BASE_BAMBOO + BAMBOO_PER_LEVEL * level
    power_ups = min(MAX_POWER_UPS, 1 + level // LEVELS_PER_POWER_UP)
    return BoardConfig(size, size, num_bamboo), power_ups


# ============================================================================
# Game Class
# ============================================================================

class Game:
    """
    A PandaQuest play-through.

    The player reveals tiles one at a time. Bamboo costs a life and
    restarts the level on a fresh board; revealing every safe tile
    completes the level. Running out of lives ends the game until
    ``reset`` is called.
    """

    def __init__(
        self,
        config: Optional[GameConfig] = None,
        seed: Optional[int] = None,
    ) -> None:
        """
        Initialize a game at the starting level.

        Args:
            config: Game configuration (default: level 1, 3 lives).
            seed: Random seed for reproducible boards.
        """
        self.config = config or GameConfig()
        self._rng = random.Random(seed)
        self._current_level = self.config.starting_level
        self._lives = self.config.starting_lives
        self._game_over = False
        self._level_complete = False
        self._board: Board
        self.initialize_level()

    # ========================================================================
    # Level Management
    # ========================================================================

    def initialize_level(self) -> None:
        """Build a fresh board for the current level."""
        board_config, power_ups = level_layout(self._current_level)
        self._board = Board(board_config, self._rng)
        self._board.place_power_ups(power_ups)
        self._level_complete = False
        logger.info(
            "Level %d: %dx%d board, %d bamboo",
            self._current_level,
            board_config.rows,
            board_config.cols,
            board_config.num_bamboo,
        )

    def next_level(self) -> None:
        """Advance to the next level once the current one is complete."""
        if not self._level_complete:
            return
        self._current_level += 1
        self.initialize_level()

    def reset(self, seed: Optional[int] = None) -> None:
        """
        Restart the play-through from the starting level.

        Args:
            seed: Optional seed to reseed the board generator.
        """
        if seed is not None:
            self._rng.seed(seed)
        self._current_level = self.config.starting_level
        self._lives = self.config.starting_lives
        self._game_over = False
        self._level_complete = False
        logger.info("Game reset")
        self.initialize_level()

    # ========================================================================
    # Player Actions
    # ========================================================================

    def select_tile(self, row: int, col: int) -> bool:
        """
        Handle the player's tile selection.

        Any power-up on the tile is collected and applied after the tile
        itself is revealed.

        Args:
            row: Row index.
            col: Column index.

        Returns:
            True if the selection was processed, False if it was rejected
            (game finished, invalid position or tile already revealed).
        """
        if self._game_over or self._level_complete:
            return False

        tile = self._board.get_tile(row, col)
        if tile is None or tile.is_revealed:
            return False

        power_up = tile.take_power_up()
        hit_bamboo = self._board.reveal_tile(row, col)
        if power_up is not None:
            self.apply_power_up(power_up, row, col)

        if hit_bamboo:
            self._lose_life()
        else:
            self._check_level_complete()

        return True

    def _lose_life(self) -> None:
        """Take a life and restart the level or end the game."""
        self._lives -= 1
        if self._lives <= 0:
            self._game_over = True
            logger.info("Game over at level %d", self._current_level)
        else:
            logger.info("Hit bamboo, %d lives left", self._lives)
            self.initialize_level()

    def apply_power_up(self, kind: PowerUp, row: int, col: int) -> None:
        """
        Apply a power-up effect.

        Revealing power-ups that uncover the last safe tile complete the
        level, whether collected through a selection or applied directly.

        Args:
            kind: The power-up collected.
            row: Row where the power-up was collected.
            col: Column where the power-up was collected.
        """
        logger.debug("Applying %s at (%d, %d)", kind.name, row, col)
        if kind is PowerUp.EXTRA_LIFE:
            self._lives += 1
        elif kind is PowerUp.REVEAL_SAFE:
            self._reveal_random_safe_tile()
        elif kind is PowerUp.REVEAL_ADJACENT:
            self._reveal_adjacent_safe_tiles(row, col)

        if not self._game_over:
            self._check_level_complete()

    def _check_level_complete(self) -> None:
        """Flag the level complete once every safe tile is revealed."""
        if not self._level_complete and self._board.is_cleared():
            self._level_complete = True
            logger.info("Level %d complete", self._current_level)

    def _reveal_random_safe_tile(self) -> None:
        """Reveal one random hidden safe tile, if any remain."""
        candidates = self._board.hidden_safe_positions()
        if candidates:
            self._board.reveal_tile(*self._rng.choice(candidates))

    def _reveal_adjacent_safe_tiles(self, row: int, col: int) -> None:
        """Reveal the hidden safe neighbors of a tile."""
        for neighbor_row, neighbor_col in self._board.get_neighbors(row, col):
            tile = self._board.get_tile(neighbor_row, neighbor_col)
            if not tile.is_revealed and not tile.has_bamboo:
                self._board.reveal_tile(neighbor_row, neighbor_col)

    # ========================================================================
    # State Accessors
    # ========================================================================

    @property
    def board(self) -> Board:
        """Get the current board."""
        return self._board

    @property
    def current_level(self) -> int:
        """Get the current level number."""
        return self._current_level

    @property
    def lives(self) -> int:
        """Get the remaining lives."""
        return self._lives

    @property
    def is_game_over(self) -> bool:
        """Check if the game is over."""
        return self._game_over

    @property
    def is_level_complete(self) -> bool:
        """Check if the current level is complete."""
        return self._level_complete

    @property
    def state(self) -> GameState:
        """Get current game state."""
        if self._game_over:
            return GameState.GAME_OVER
        if self._level_complete:
            return GameState.LEVEL_COMPLETE
        return GameState.PLAYING
