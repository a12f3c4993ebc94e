"""
The per-tick transition function.

`tick` takes the current GameState and the player's pending direction and
returns either an Advanced result holding the next state or a Terminal
result naming why the game ended. Apart from drawing from the spawner's
random source it has no side effects, so the controller decides what a
result means for phases, scores and sounds.
"""

from dataclasses import dataclass
from typing import Optional, Sequence, Union

from . import board
from .constants import (
    INITIAL_DIRECTION,
    INITIAL_SNAKE,
    SELF_COLLISION,
    STALEMATE,
    WALL_COLLISION,
)
from .errors import ConfigurationError
from .food import FoodSpawner, food_pool
from .game_state import GameState
from .settings import GameSettings
from .snake import Snake


@dataclass(frozen=True)
class Advanced:
    """The snake moved. `ate` is True when food was eaten this tick."""

    state: GameState
    ate: bool = False
    shrunk_by: int = 0

    terminal = False


@dataclass(frozen=True)
class Terminal:
    """
    The game ended this tick.

    For collisions `state` is the unchanged pre-tick state. For a stalemate
    it is the state after the final bite, with no room left for food.
    """

    reason: str
    state: GameState

    terminal = True


TickResult = Union[Advanced, Terminal]


def new_game(
    settings: GameSettings,
    spawner: FoodSpawner,
    initial_snake: Optional[Sequence] = None,
    direction: str = INITIAL_DIRECTION,
) -> GameState:
    """
    Build the opening state: initial snake heading `direction`, fresh food, score 0.

    Raises:
        ConfigurationError: if the food pool is empty or the snake does not fit the board
    """
    grid_size = spawner.grid_size
    snake = Snake(initial_snake if initial_snake is not None else INITIAL_SNAKE)

    if len(snake) >= grid_size * grid_size:
        raise ConfigurationError(
            f"Board of {grid_size}x{grid_size} is too small for a snake of length {len(snake)}"
        )
    for cell in snake:
        if not board.in_bounds(cell, grid_size):
            raise ConfigurationError(f"Initial snake segment {cell} is off the board")

    food = spawner.spawn(snake.positions, food_pool(settings.foodType))
    return GameState(snake=snake, direction=direction, food=food, score=0, grid_size=grid_size)


def resolve_direction(current: str, pending: str) -> str:
    """The direction applied this tick: `pending` unless it would reverse the snake."""
    if board.is_opposite(current, pending):
        return current
    return pending


def tick(
    state: GameState,
    pending_direction: str,
    settings: GameSettings,
    spawner: FoodSpawner,
) -> TickResult:
    """Advance the game by one cell."""
    size = state.grid_size
    direction = resolve_direction(state.direction, pending_direction)
    old_body = state.snake.positions

    head = board.step(state.snake.head, direction)
    if settings.teleportEnabled:
        head = board.wrap_cell(head, size)
    elif not board.in_bounds(head, size):
        return Terminal(reason=WALL_COLLISION, state=state)

    # Collisions are checked against the body before it moves, tail included.
    hit_index = state.snake.index_of(head)
    if hit_index is not None:
        if settings.selfCollisionEnabled:
            return Terminal(reason=SELF_COLLISION, state=state)

        new_snake = Snake((head,) + old_body[:hit_index])
        lost = len(old_body) - len(new_snake)
        return Advanced(
            state=state.evolve(
                snake=new_snake,
                direction=direction,
                score=max(0, state.score - lost),
            ),
            shrunk_by=lost,
        )

    grown = (head,) + old_body

    if state.food is not None and head == state.food.cell:
        new_snake = Snake(grown)
        food = spawner.spawn(new_snake.positions, food_pool(settings.foodType))
        next_state = state.evolve(
            snake=new_snake,
            direction=direction,
            food=food,
            score=state.score + 1,
        )
        if food is None:
            return Terminal(reason=STALEMATE, state=next_state)
        return Advanced(state=next_state, ate=True)

    return Advanced(state=state.evolve(snake=Snake(grown[:-1]), direction=direction))
