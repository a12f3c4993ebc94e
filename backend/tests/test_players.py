"""
Tests for the random autopilot.
"""

import random

import pytest

from domain.constants import DOWN, LEFT, RIGHT, UP
from domain.engine import tick
from domain.food import Food, FoodSpawner
from domain.game_state import GameState
from domain.settings import GameSettings
from domain.snake import Snake
from players import RandomPlayer

WALLS = GameSettings(teleportEnabled=False)
WRAP = GameSettings(teleportEnabled=True)


def state_with(positions, direction, grid_size=20):
    return GameState(
        snake=Snake(positions),
        direction=direction,
        food=Food(cell=(0, grid_size - 1), kind="🍎"),
        grid_size=grid_size,
    )


class TestRandomPlayer:

    def test_never_reverses(self):
        player = RandomPlayer(random.Random(0))
        state = state_with([(10, 10), (10, 11), (10, 12)], UP)
        for _ in range(50):
            assert player.get_move(state, WALLS) != DOWN

    def test_avoids_walls(self):
        """Heading UP in the top-left corner only RIGHT is safe."""
        player = RandomPlayer(random.Random(1))
        state = state_with([(0, 0), (0, 1), (0, 2)], UP)
        for _ in range(20):
            assert player.get_move(state, WALLS) == RIGHT

    def test_wraps_when_teleporting(self):
        player = RandomPlayer(random.Random(2))
        state = state_with([(0, 0), (0, 1), (0, 2)], UP)
        moves = {player.get_move(state, WRAP) for _ in range(50)}
        assert moves == {UP, LEFT, RIGHT}

    def test_avoids_whole_body_including_tail(self):
        # Head at (1,1) heading LEFT; (1,0) is body, (0,1) is the tail.
        positions = [(1, 1), (2, 1), (2, 0), (1, 0), (0, 0), (0, 1)]
        player = RandomPlayer(random.Random(3))
        state = state_with(positions, LEFT)
        moves = {player.get_move(state, WALLS) for _ in range(50)}
        assert moves == {DOWN}

    @pytest.mark.parametrize("seed", range(20))
    def test_chosen_move_never_ends_the_game(self, seed):
        """Against the wall with the tail below the head, only UP survives."""
        state = state_with([(0, 5), (1, 5), (1, 6), (0, 6)], LEFT)
        player = RandomPlayer(random.Random(seed))

        move = player.get_move(state, WALLS)
        result = tick(state, move, WALLS, FoodSpawner(random.Random(seed)))

        assert move == UP
        assert not result.terminal

    def test_no_safe_move_keeps_direction(self):
        # Boxed in against the corner by its own body.
        positions = [(0, 0), (1, 0), (1, 1), (0, 1), (0, 2)]
        player = RandomPlayer(random.Random(4))
        state = state_with(positions, LEFT)
        assert player.get_move(state, WALLS) == LEFT
