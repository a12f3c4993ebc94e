"""
Random player implementation - picks random safe moves.
"""

import random
from typing import List, Optional

from domain import board
from domain.constants import VALID_MOVES
from domain.game_state import GameState
from domain.settings import GameSettings
from .base import Player


class RandomPlayer(Player):
    """
    A random autopilot that picks a direction avoiding walls and its own body.
    """

    def __init__(self, rng: Optional[random.Random] = None):
        self.rng = rng or random.Random()

    def get_move(self, game_state: GameState, settings: GameSettings) -> str:
        snake_positions = game_state.snake.positions
        size = game_state.grid_size

        # Filter out moves that:
        # 1. Reverse into the neck
        # 2. Hit walls (unless teleporting)
        # 3. Hit own body, tail included (collisions use the pre-move body)
        valid_moves: List[str] = []
        for move in sorted(VALID_MOVES):
            if board.is_opposite(game_state.direction, move):
                continue

            new_head = board.step(game_state.snake.head, move)
            if settings.teleportEnabled:
                new_head = board.wrap_cell(new_head, size)
            elif not board.in_bounds(new_head, size):
                continue

            if new_head in snake_positions:
                continue

            valid_moves.append(move)

        # No safe move: keep going and let the engine decide
        if not valid_moves:
            return game_state.direction

        return self.rng.choice(valid_moves)
