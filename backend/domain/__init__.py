"""
Domain entities for the Happy Snake game engine.

This module contains the core game entities that are independent of
infrastructure concerns (database, HTTP, timers, etc.).
"""

from .constants import (
    UP, DOWN, LEFT, RIGHT, VALID_MOVES, GRID_SIZE,
    WALL_COLLISION, SELF_COLLISION, STALEMATE,
)
from .errors import ConfigurationError, InvalidTransition
from .snake import Snake
from .food import Food, FoodSpawner, food_pool
from .game_state import GameState
from .settings import GameSettings, DEFAULT_SETTINGS
from .engine import Advanced, Terminal, TickResult, new_game, tick
from .phase import Phase, PhaseMachine
from .input_mapper import InputMapper, direction_for_key, is_pause_key

__all__ = [
    'UP', 'DOWN', 'LEFT', 'RIGHT', 'VALID_MOVES', 'GRID_SIZE',
    'WALL_COLLISION', 'SELF_COLLISION', 'STALEMATE',
    'ConfigurationError', 'InvalidTransition',
    'Snake',
    'Food', 'FoodSpawner', 'food_pool',
    'GameState',
    'GameSettings', 'DEFAULT_SETTINGS',
    'Advanced', 'Terminal', 'TickResult', 'new_game', 'tick',
    'Phase', 'PhaseMachine',
    'InputMapper', 'direction_for_key', 'is_pause_key',
]
