"""
Board module for PandaQuest.

Implements the tile grid with bamboo placement, adjacency counting,
flood revealing and power-up placement.
"""
import logging
import random
from dataclasses import InitVar, dataclass, field
from typing import Iterable, List, Optional, Tuple

import numpy as np

from .powerup import PowerUp
from .tile import Tile


logger = logging.getLogger(__name__)

Position = Tuple[int, int]

# Random draws allowed per tile before placement stops rejection sampling
PLACEMENT_ATTEMPTS_PER_TILE = 3


# ============================================================================
# Configuration
# ============================================================================

@dataclass
class BoardConfig:
    """
    Configuration for a PandaQuest board.

    Attributes:
        rows: Number of rows.
        cols: Number of columns.
        num_bamboo: Total bamboo to hide.
    """

    rows: int = 6
    cols: int = 6
    num_bamboo: int = 5

    def __post_init__(self) -> None:
        """Validate configuration after initialization."""
        self._validate()

    def _validate(self) -> None:
        """Ensure configuration values are valid."""
        if self.rows < 1 or self.cols < 1:
            raise ValueError("Board dimensions must be positive")
        if self.num_bamboo < 0:
            raise ValueError("Number of bamboo cannot be negative")
        max_bamboo = self.rows * self.cols - 1
        if self.num_bamboo > max_bamboo:
            raise ValueError(f"Too much bamboo (max {max_bamboo})")

    @property
    def total_tiles(self) -> int:
        """Number of tiles on the board."""
        return self.rows * self.cols

    @property
    def safe_tiles(self) -> int:
        """Number of tiles without bamboo."""
        return self.total_tiles - self.num_bamboo


# ============================================================================
# Board Class
# ============================================================================

@dataclass
class Board:
    """
    PandaQuest game board.

    Bamboo is placed and adjacency computed as soon as the board is
    created. Pass ``layout`` to put bamboo at fixed positions instead of
    drawing them from ``rng``.
    """

    config: BoardConfig = field(default_factory=BoardConfig)
    rng: random.Random = field(default_factory=random.Random, repr=False)
    layout: InitVar[Optional[Iterable[Position]]] = None
    _grid: List[List[Tile]] = field(default_factory=list, init=False, repr=False)

    def __post_init__(self, layout: Optional[Iterable[Position]]) -> None:
        """Generate the grid after dataclass creation."""
        self._init_grid()
        if layout is None:
            self._place_bamboo()
        else:
            self._place_bamboo_at(layout)
        self._calculate_adjacent_bamboo()
        logger.debug(
            "Generated %dx%d board with %d bamboo",
            self.rows, self.cols, self.bamboo_count,
        )

    @classmethod
    def generate(
        cls,
        rows: int,
        cols: int,
        num_bamboo: int,
        rng: Optional[random.Random] = None,
    ) -> "Board":
        """Build a randomly generated board."""
        return cls(BoardConfig(rows, cols, num_bamboo), rng or random.Random())

    @classmethod
    def from_layout(
        cls, rows: int, cols: int, bamboo_positions: Iterable[Position]
    ) -> "Board":
        """
        Build a board with bamboo at fixed positions.

        Args:
            rows: Number of rows.
            cols: Number of columns.
            bamboo_positions: (row, col) tuples holding bamboo.

        Raises:
            ValueError: If a position is out of range or repeated.
        """
        positions = list(bamboo_positions)
        config = BoardConfig(rows, cols, len(positions))
        return cls(config, layout=positions)

    # ========================================================================
    # Grid Generation (Low-level)
    # ========================================================================

    def _init_grid(self) -> None:
        """Create empty grid of tiles."""
        self._grid = [
            [Tile() for _ in range(self.config.cols)]
            for _ in range(self.config.rows)
        ]

    def _place_bamboo(self) -> None:
        """
        Hide bamboo on distinct random tiles.

        Draws random positions and rejects tiles that already hold
        bamboo. If the attempt budget runs out, the remainder is sampled
        without replacement from the free tiles.
        """
        placed = 0
        attempts = 0
        max_attempts = self.config.total_tiles * PLACEMENT_ATTEMPTS_PER_TILE
        while placed < self.config.num_bamboo and attempts < max_attempts:
            attempts += 1
            row = self.rng.randrange(self.config.rows)
            col = self.rng.randrange(self.config.cols)
            tile = self._grid[row][col]
            if not tile.has_bamboo:
                tile.has_bamboo = True
                placed += 1

        remaining = self.config.num_bamboo - placed
        if remaining > 0:
            free = [
                (row, col) for row, col in self._all_positions()
                if not self._grid[row][col].has_bamboo
            ]
            for row, col in self.rng.sample(free, remaining):
                self._grid[row][col].has_bamboo = True

    def _place_bamboo_at(self, positions: Iterable[Position]) -> None:
        """Hide bamboo at the given positions."""
        for row, col in positions:
            if not self._is_valid_position(row, col):
                raise ValueError(f"Bamboo position out of range: ({row}, {col})")
            tile = self._grid[row][col]
            if tile.has_bamboo:
                raise ValueError(f"Duplicate bamboo position: ({row}, {col})")
            tile.has_bamboo = True

    def _calculate_adjacent_bamboo(self) -> None:
        """Calculate adjacent bamboo counts for all safe tiles."""
        for row, col in self._all_positions():
            tile = self._grid[row][col]
            if not tile.has_bamboo:
                tile.adjacent_bamboo = self._count_adjacent_bamboo(row, col)

    def _count_adjacent_bamboo(self, row: int, col: int) -> int:
        """Count bamboo adjacent to a specific tile."""
        count = 0
        for neighbor_row, neighbor_col in self.get_neighbors(row, col):
            if self._grid[neighbor_row][neighbor_col].has_bamboo:
                count += 1
        return count

    # ========================================================================
    # Neighbor Utilities (Low-level)
    # ========================================================================

    def get_neighbors(self, row: int, col: int) -> List[Position]:
        """
        Get valid neighboring tile positions.

        Args:
            row: Row index of center tile.
            col: Column index of center tile.

        Returns:
            List of (row, col) tuples for the up-to-8 neighbors.
        """
        neighbors = []
        for delta_row in (-1, 0, 1):
            for delta_col in (-1, 0, 1):
                if delta_row == 0 and delta_col == 0:
                    continue
                new_row = row + delta_row
                new_col = col + delta_col
                if self._is_valid_position(new_row, new_col):
                    neighbors.append((new_row, new_col))
        return neighbors

    def _is_valid_position(self, row: int, col: int) -> bool:
        """Check if position is within board bounds."""
        return 0 <= row < self.config.rows and 0 <= col < self.config.cols

    def _all_positions(self) -> List[Position]:
        """All positions in row-major order."""
        return [
            (row, col)
            for row in range(self.config.rows)
            for col in range(self.config.cols)
        ]

    # ========================================================================
    # Power-ups (Mid-level)
    # ========================================================================

    def place_power_ups(
        self, count: int, rng: Optional[random.Random] = None
    ) -> int:
        """
        Place power-ups on random safe tiles.

        The request is capped to the number of eligible tiles, and
        placement gives up after three draws per eligible tile.

        Args:
            count: Number of power-ups wanted.
            rng: Random source (defaults to the board's).

        Returns:
            Number of power-ups actually placed.
        """
        rng = rng or self.rng
        kinds = list(PowerUp)
        eligible = sum(
            1 for row, col in self._all_positions()
            if not self._grid[row][col].has_bamboo
            and not self._grid[row][col].has_power_up
        )
        target = min(count, eligible)
        max_attempts = eligible * PLACEMENT_ATTEMPTS_PER_TILE

        placed = 0
        attempts = 0
        while placed < target and attempts < max_attempts:
            attempts += 1
            row = rng.randrange(self.config.rows)
            col = rng.randrange(self.config.cols)
            tile = self._grid[row][col]
            if not tile.has_bamboo and not tile.has_power_up:
                tile.power_up = rng.choice(kinds)
                placed += 1

        if placed < count:
            logger.debug("Placed %d of %d requested power-ups", placed, count)
        return placed

    # ========================================================================
    # Revealing (Mid-level)
    # ========================================================================

    def reveal_tile(self, row: int, col: int) -> bool:
        """
        Reveal a tile at the given position.

        An empty tile (0 adjacent bamboo) floods outwards, revealing every
        connected safe tile up to and including the numbered border.

        Args:
            row: Row index to reveal.
            col: Column index to reveal.

        Returns:
            True if bamboo was revealed (costs a life), False otherwise,
            including when the position is invalid or already revealed.
        """
        tile = self.get_tile(row, col)
        if tile is None or not tile.reveal():
            return False

        if tile.has_bamboo:
            return True

        if tile.adjacent_bamboo == 0:
            self._flood_reveal(row, col)
        return False

    def _flood_reveal(self, row: int, col: int) -> None:
        """Reveal the safe region around an empty tile."""
        stack = [(row, col)]
        while stack:
            current_row, current_col = stack.pop()
            for neighbor_row, neighbor_col in self.get_neighbors(
                current_row, current_col
            ):
                neighbor = self._grid[neighbor_row][neighbor_col]
                if neighbor.has_bamboo or not neighbor.reveal():
                    continue
                if neighbor.adjacent_bamboo == 0:
                    stack.append((neighbor_row, neighbor_col))

    def is_cleared(self) -> bool:
        """Check if every safe tile has been revealed."""
        for row in self._grid:
            for tile in row:
                if not tile.has_bamboo and not tile.is_revealed:
                    return False
        return True

    # ========================================================================
    # State Accessors (High-level)
    # ========================================================================

    @property
    def rows(self) -> int:
        """Get number of rows."""
        return self.config.rows

    @property
    def cols(self) -> int:
        """Get number of columns."""
        return self.config.cols

    @property
    def bamboo_count(self) -> int:
        """Get number of bamboo tiles."""
        return self.config.num_bamboo

    @property
    def revealed_count(self) -> int:
        """Number of revealed tiles, bamboo included."""
        return sum(1 for row in self._grid for tile in row if tile.is_revealed)

    def get_tile(self, row: int, col: int) -> Optional[Tile]:
        """Get tile at position, or None if invalid."""
        if not self._is_valid_position(row, col):
            return None
        return self._grid[row][col]

    def hidden_safe_positions(self) -> List[Position]:
        """Positions of safe tiles that are still hidden."""
        return [
            (row, col) for row, col in self._all_positions()
            if not self._grid[row][col].has_bamboo
            and not self._grid[row][col].is_revealed
        ]

    def get_valid_actions(self) -> List[Position]:
        """
        Get list of tiles that can still be selected.

        Returns:
            List of (row, col) positions of hidden tiles.
        """
        return [
            (row, col) for row, col in self._all_positions()
            if self._grid[row][col].is_hidden
        ]

    def get_observation(self) -> np.ndarray:
        """
        Get board state as a numpy array.

        Returns:
            2D int8 array where:
                -1 = hidden
                -3 = hidden with a power-up
                0-8 = revealed with adjacent bamboo count
                9 = revealed bamboo
        """
        obs = np.zeros((self.config.rows, self.config.cols), dtype=np.int8)
        for row, col in self._all_positions():
            obs[row, col] = self._grid[row][col].to_observation()
        return obs
