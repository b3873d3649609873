"""
Tile module for PandaQuest.

Represents individual tiles on the game board with their content
(bamboo/number), reveal state and optional power-up.
"""
from dataclasses import dataclass
from typing import Optional

from .powerup import PowerUp


# ============================================================================
# Observation Values
# ============================================================================

HIDDEN = -1
HIDDEN_POWER_UP = -3
REVEALED_BAMBOO = 9


# ============================================================================
# Tile Data Class
# ============================================================================

@dataclass
class Tile:
    """
    Represents a single tile in the PandaQuest grid.

    Attributes:
        has_bamboo: Whether this tile hides bamboo.
        is_revealed: Whether the player has uncovered this tile.
        adjacent_bamboo: Count of bamboo in neighboring tiles (0-8).
        power_up: Bonus effect collected when the tile is revealed.
    """

    has_bamboo: bool = False
    is_revealed: bool = False
    adjacent_bamboo: int = 0
    power_up: Optional[PowerUp] = None

    def reveal(self) -> bool:
        """
        Reveal this tile.

        Returns:
            True if tile was revealed, False if it already was.
        """
        if self.is_revealed:
            return False
        self.is_revealed = True
        return True

    @property
    def is_hidden(self) -> bool:
        """Check if tile is still hidden."""
        return not self.is_revealed

    @property
    def has_power_up(self) -> bool:
        """Check if tile carries a power-up."""
        return self.power_up is not None

    def take_power_up(self) -> Optional[PowerUp]:
        """Detach and return the power-up, if any."""
        power_up = self.power_up
        self.power_up = None
        return power_up

    def to_observation(self) -> int:
        """
        Convert tile to an observation value.

        Returns:
            -1: Hidden tile
            -3: Hidden tile showing a power-up
            0-8: Revealed tile with adjacent bamboo count
            9: Revealed bamboo
        """
        if not self.is_revealed:
            return HIDDEN_POWER_UP if self.has_power_up else HIDDEN
        if self.has_bamboo:
            return REVEALED_BAMBOO
        return self.adjacent_bamboo
