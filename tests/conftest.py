"""
Pytest configuration and shared fixtures.
"""
import random
import sys
from pathlib import Path

import pytest

# Add src and the project root (for main.py) to path for imports
sys.path.insert(0, str(Path(__file__).parent.parent))
sys.path.insert(0, str(Path(__file__).parent.parent / "src"))

from pandaquest import Board, BoardConfig, Game, GameConfig, PowerUp, Tile


# ============================================================================
# Board Fixtures
# ============================================================================

@pytest.fixture
def rng() -> random.Random:
    """Seeded random source for reproducible boards."""
    return random.Random(1234)


@pytest.fixture
def default_board(rng: random.Random) -> Board:
    """Create a seeded 6x6 board with 5 bamboo."""
    return Board(BoardConfig(6, 6, 5), rng)


@pytest.fixture
def small_board(rng: random.Random) -> Board:
    """Create a seeded 5x5 board with 5 bamboo."""
    return Board.generate(5, 5, 5, rng)


@pytest.fixture
def empty_board() -> Board:
    """Create a board with no bamboo for flood testing."""
    return Board.from_layout(5, 5, [])


@pytest.fixture
def corner_board() -> Board:
    """
    Create a 5x5 board with bamboo in the bottom-right corner block.

    Layout (B = bamboo):
        . . . . .
        . . . . .
        . . . . .
        . . . B B
        . . . B .
    """
    return Board.from_layout(5, 5, [(3, 3), (3, 4), (4, 3)])


# ============================================================================
# Tile Fixtures
# ============================================================================

@pytest.fixture
def hidden_tile() -> Tile:
    """Create a hidden tile."""
    return Tile()


@pytest.fixture
def bamboo_tile() -> Tile:
    """Create a tile hiding bamboo."""
    return Tile(has_bamboo=True)


@pytest.fixture
def power_up_tile() -> Tile:
    """Create a hidden tile carrying an extra life."""
    return Tile(power_up=PowerUp.EXTRA_LIFE)


# ============================================================================
# Game Fixtures
# ============================================================================

@pytest.fixture
def game() -> Game:
    """Create a seeded game at level 1."""
    return Game(seed=42)


@pytest.fixture
def last_life_game() -> Game:
    """Create a seeded game with a single life."""
    return Game(GameConfig(starting_lives=1), seed=42)
