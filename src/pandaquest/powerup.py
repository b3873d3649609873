"""
Power-up module for PandaQuest.

Defines the closed set of one-shot bonus effects that can sit on a
hidden safe tile.
"""
from enum import Enum, auto


class PowerUp(Enum):
    """Bonus effect granted when its tile is revealed."""

    # Reveals one random safe tile
    REVEAL_SAFE = auto()
    # Grants one extra life
    EXTRA_LIFE = auto()
    # Reveals the safe neighbours of the collected tile
    REVEAL_ADJACENT = auto()
