"""
Tests for the smaller domain pieces: board geometry, food, settings,
snake/state entities, phases and input.
"""

import random

import pytest

from domain import board
from domain.constants import DOWN, FRUITS, INSECTS, LEFT, RIGHT, UP
from domain.errors import ConfigurationError, InvalidTransition
from domain.food import Food, FoodSpawner, food_pool
from domain.game_state import GameState
from domain.input_mapper import InputMapper, direction_for_key, is_pause_key
from domain.phase import Phase, PhaseMachine
from domain.settings import DEFAULT_SETTINGS, GameSettings
from domain.snake import Snake


class TestBoard:

    @pytest.mark.parametrize("coord,expected", [(-1, 19), (0, 0), (19, 19), (20, 0), (-21, 19)])
    def test_wrap(self, coord, expected):
        assert board.wrap(coord) == expected

    def test_wrap_cell(self):
        assert board.wrap_cell((-1, 20)) == (19, 0)

    def test_in_bounds(self):
        assert board.in_bounds((0, 0))
        assert board.in_bounds((19, 19))
        assert not board.in_bounds((20, 0))
        assert not board.in_bounds((0, -1))

    def test_step_uses_screen_coordinates(self):
        assert board.step((5, 5), UP) == (5, 4)
        assert board.step((5, 5), DOWN) == (5, 6)
        assert board.step((5, 5), LEFT) == (4, 5)
        assert board.step((5, 5), RIGHT) == (6, 5)

    def test_is_opposite(self):
        assert board.is_opposite(UP, DOWN)
        assert board.is_opposite(LEFT, RIGHT)
        assert not board.is_opposite(UP, LEFT)
        assert not board.is_opposite(UP, UP)

    def test_all_cells(self):
        cells = list(board.all_cells(3))
        assert len(cells) == 9
        assert len(set(cells)) == 9


class TestFood:

    def test_food_pool(self):
        assert food_pool("fruits") == FRUITS
        assert food_pool("insects") == INSECTS
        assert food_pool("both") == FRUITS + INSECTS

    def test_unknown_food_type(self):
        with pytest.raises(ConfigurationError):
            food_pool("vegetables")

    def test_spawn_never_on_occupied_cell(self):
        spawner = FoodSpawner(random.Random(7), grid_size=4)
        occupied = {(x, y) for x in range(4) for y in range(4)} - {(2, 3)}

        for _ in range(20):
            food = spawner.spawn(occupied, FRUITS)
            assert food.cell == (2, 3)
            assert food.kind in FRUITS

    def test_spawn_is_reproducible_with_seed(self):
        a = FoodSpawner(random.Random(42)).spawn({(10, 10)}, FRUITS)
        b = FoodSpawner(random.Random(42)).spawn({(10, 10)}, FRUITS)
        assert a == b

    def test_full_board_returns_none(self):
        spawner = FoodSpawner(random.Random(0), grid_size=2)
        assert spawner.spawn([(0, 0), (0, 1), (1, 0), (1, 1)], FRUITS) is None

    def test_empty_pool_is_a_configuration_error(self, spawner):
        with pytest.raises(ConfigurationError):
            spawner.spawn([], [])


class TestSettings:

    def test_defaults(self):
        assert DEFAULT_SETTINGS.language == "en"
        assert DEFAULT_SETTINGS.teleportEnabled is True
        assert DEFAULT_SETTINGS.speed == 3
        assert DEFAULT_SETTINGS.tick_interval_ms == 150

    @pytest.mark.parametrize("speed,ms", [(1, 250), (2, 200), (3, 150), (4, 100), (5, 60)])
    def test_tick_interval(self, speed, ms):
        assert GameSettings(speed=speed).tick_interval_ms == ms

    def test_from_dict_fills_defaults_and_ignores_unknown(self):
        settings = GameSettings.from_dict({"speed": 5, "language": "pt-BR", "theme": "dark"})
        assert settings.speed == 5
        assert settings.language == "pt-BR"
        assert settings.foodType == "both"

    def test_round_trip(self):
        settings = GameSettings(volume=0, foodType="fruits", autoRestart=False)
        assert GameSettings.from_dict(settings.to_dict()) == settings

    @pytest.mark.parametrize("changes", [
        {"speed": 0},
        {"speed": 6},
        {"speed": True},
        {"volume": 9},
        {"volume": -1},
        {"foodType": "pizza"},
        {"language": "fr"},
        {"teleportEnabled": "yes"},
    ])
    def test_invalid_values(self, changes):
        with pytest.raises(ConfigurationError):
            DEFAULT_SETTINGS.merged(**changes)

    def test_merged_rejects_unknown_keys(self):
        with pytest.raises(ConfigurationError):
            DEFAULT_SETTINGS.merged(difficulty="hard")

    def test_merged_returns_copy(self):
        updated = DEFAULT_SETTINGS.merged(speed=5)
        assert updated.speed == 5
        assert DEFAULT_SETTINGS.speed == 3


class TestSnakeAndState:

    def test_snake_requires_a_segment(self):
        with pytest.raises(ValueError):
            Snake([])

    def test_snake_accessors(self):
        snake = Snake([(5, 5), (5, 6), (5, 7)])
        assert snake.head == (5, 5)
        assert snake.tail == (5, 7)
        assert len(snake) == 3
        assert (5, 6) in snake
        assert snake.index_of((5, 7)) == 2
        assert snake.index_of((0, 0)) is None

    def test_snake_value_equality(self):
        assert Snake([(1, 1), (1, 2)]) == Snake([[1, 1], [1, 2]])

    def test_print_board(self):
        state = GameState(
            snake=Snake([(1, 0), (0, 0)]),
            direction=RIGHT,
            food=Food(cell=(2, 2), kind="🍎"),
            grid_size=3,
        )
        lines = state.print_board().split("\n")
        assert lines[0] == " 0 o H ."
        assert lines[2] == " 2 . . F"
        assert lines[3] == "   0 1 2"

    def test_repr(self):
        state = GameState(snake=Snake([(1, 1)]), direction=UP, food=None, score=4)
        assert "score=4" in repr(state)


class TestPhaseMachine:

    def test_starts_in_start(self):
        assert PhaseMachine().current == Phase.START

    @pytest.mark.parametrize("path", [
        [Phase.PLAYING, Phase.PAUSED, Phase.PLAYING, Phase.GAME_OVER, Phase.PLAYING],
        [Phase.PLAYING, Phase.PLAYING],
    ])
    def test_allowed_paths(self, path):
        machine = PhaseMachine()
        for phase in path:
            machine.transition(phase)
        assert machine.current == path[-1]

    @pytest.mark.parametrize("setup,target", [
        ([], Phase.PAUSED),
        ([], Phase.GAME_OVER),
        ([Phase.PLAYING, Phase.PAUSED], Phase.GAME_OVER),
        ([Phase.PLAYING, Phase.PAUSED], Phase.PAUSED),
        ([Phase.PLAYING, Phase.GAME_OVER], Phase.PAUSED),
        ([Phase.PLAYING], Phase.START),
    ])
    def test_rejected_transitions(self, setup, target):
        machine = PhaseMachine()
        for phase in setup:
            machine.transition(phase)
        with pytest.raises(InvalidTransition):
            machine.transition(target)


class TestInputMapper:

    def test_accepts_turn(self):
        mapper = InputMapper(UP)
        assert mapper.submit(LEFT, applied=UP) is True
        assert mapper.pending == LEFT

    def test_reversal_leaves_pending_unchanged(self):
        mapper = InputMapper(UP)
        assert mapper.submit(DOWN, applied=UP) is False
        assert mapper.pending == UP

    def test_guard_uses_applied_not_pending(self):
        """LEFT then RIGHT before a tick: RIGHT is fine because UP is what's applied."""
        mapper = InputMapper(UP)
        mapper.submit(LEFT, applied=UP)
        assert mapper.submit(RIGHT, applied=UP) is True
        assert mapper.pending == RIGHT

        assert mapper.submit(DOWN, applied=UP) is False
        assert mapper.pending == RIGHT

    def test_unknown_direction(self):
        with pytest.raises(ValueError):
            InputMapper().submit("NORTH", applied=UP)

    def test_reset(self):
        mapper = InputMapper(UP)
        mapper.submit(LEFT, applied=UP)
        mapper.reset()
        assert mapper.pending == UP

    @pytest.mark.parametrize("key,direction", [
        ("ArrowUp", UP), ("ArrowDown", DOWN), ("ArrowLeft", LEFT), ("ArrowRight", RIGHT),
        ("w", UP), ("S", DOWN), ("a", LEFT), ("d", RIGHT),
    ])
    def test_direction_for_key(self, key, direction):
        assert direction_for_key(key) == direction

    def test_unmapped_keys(self):
        assert direction_for_key("Enter") is None
        assert direction_for_key("x") is None

    def test_pause_key(self):
        assert is_pause_key(" ")
        assert not is_pause_key("p")
