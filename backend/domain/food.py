"""
Food placement for the game engine.
"""

import random
from dataclasses import dataclass
from typing import Iterable, Optional, Sequence

from .board import Cell
from .constants import FOOD_TYPES, FRUITS, GRID_SIZE, INSECTS
from .errors import ConfigurationError


@dataclass(frozen=True)
class Food:
    """A food item on the board: where it is and which emoji to draw."""

    cell: Cell
    kind: str


def food_pool(food_type: str) -> Sequence[str]:
    """Resolve a foodType setting to the list of kinds it draws from."""
    if food_type == "fruits":
        return FRUITS
    if food_type == "insects":
        return INSECTS
    if food_type == "both":
        return FRUITS + INSECTS
    raise ConfigurationError(
        f"Unknown food type '{food_type}' (expected one of {', '.join(FOOD_TYPES)})"
    )


class FoodSpawner:
    """
    Picks a free cell and a food kind.

    Attributes:
        rng: random source; inject a seeded random.Random for reproducible games
        grid_size: side length of the square board
    """

    def __init__(self, rng: Optional[random.Random] = None, grid_size: int = GRID_SIZE):
        self.rng = rng or random.Random()
        self.grid_size = grid_size

    @property
    def capacity(self) -> int:
        return self.grid_size * self.grid_size

    def spawn(self, occupied: Iterable[Cell], pool: Sequence[str]) -> Optional[Food]:
        """
        Return a Food on a cell not in `occupied`, or None when the board is full.

        Cells are rejection-sampled uniformly over the whole board, so the
        expected number of draws stays small while the snake is short.
        """
        if not pool:
            raise ConfigurationError("Food pool is empty")

        taken = set(occupied)
        if len(taken) >= self.capacity:
            return None

        while True:
            cell = (
                self.rng.randrange(self.grid_size),
                self.rng.randrange(self.grid_size),
            )
            if cell not in taken:
                break

        kind = pool[self.rng.randrange(len(pool))]
        return Food(cell=cell, kind=kind)
