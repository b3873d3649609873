"""
PandaQuest game module.

Provides the core game logic: tiles, board generation and revealing,
and the level/lives state machine.
"""
from .powerup import PowerUp
from .tile import Tile
from .board import Board, BoardConfig
from .game import Game, GameConfig, GameState, level_layout
from .environment import PandaQuestEnv, render_board

__all__ = [
    "PowerUp",
    "Tile",
    "Board",
    "BoardConfig",
    "Game",
    "GameConfig",
    "GameState",
    "level_layout",
    "PandaQuestEnv",
    "render_board",
]
