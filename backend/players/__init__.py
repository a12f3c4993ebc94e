"""
Player implementations for Happy Snake.

Players stand in for the keyboard when a game runs headless.
"""

from .base import Player
from .random_player import RandomPlayer

__all__ = [
    'Player',
    'RandomPlayer',
]
