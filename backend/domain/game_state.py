"""
GameState entity - a snapshot of the game at a point in time.
"""

from dataclasses import dataclass, replace
from typing import Optional

from .constants import GRID_SIZE
from .food import Food
from .snake import Snake


@dataclass(frozen=True)
class GameState:
    """
    A snapshot of the game at a specific point in time.

    Attributes:
        snake: the snake body, head first
        direction: the direction applied on the last tick
        food: the food on the board (None only once the board is full)
        score: current score, never negative
        grid_size: side length of the board
    """

    snake: Snake
    direction: str
    food: Optional[Food]
    score: int = 0
    grid_size: int = GRID_SIZE

    def evolve(self, **changes) -> "GameState":
        return replace(self, **changes)

    def print_board(self) -> str:
        """
        Returns a string representation of the board with:
        . = empty space
        F = food
        H = snake head
        o = snake body
        Rows are printed top to bottom, matching screen coordinates.
        """
        board = [['.' for _ in range(self.grid_size)] for _ in range(self.grid_size)]

        if self.food is not None:
            fx, fy = self.food.cell
            board[fy][fx] = 'F'

        for pos_idx, (x, y) in enumerate(self.snake):
            board[y][x] = 'H' if pos_idx == 0 else 'o'

        result = [f"{y:2d} {' '.join(board[y])}" for y in range(self.grid_size)]
        result.append("   " + " ".join(str(i % 10) for i in range(self.grid_size)))
        return "\n".join(result)

    def __repr__(self):
        return (
            f"<GameState score={self.score}, direction={self.direction}, "
            f"length={len(self.snake)}, food={self.food}>"
        )
