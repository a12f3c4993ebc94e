"""
Snake entity for the game engine.
"""

from typing import Iterable, Iterator, Optional, Tuple

from .board import Cell


class Snake:
    """
    Represents the snake's body on the board.

    Attributes:
        positions: tuple of (x, y) from head at index 0 to tail at the end

    Snakes are never mutated; every tick builds a new one.
    """

    __slots__ = ("positions",)

    def __init__(self, positions: Iterable[Cell]):
        positions = tuple(tuple(cell) for cell in positions)
        if not positions:
            raise ValueError("A snake needs at least one segment")
        self.positions: Tuple[Cell, ...] = positions

    @property
    def head(self) -> Cell:
        """Return the head position (first element)."""
        return self.positions[0]

    @property
    def tail(self) -> Cell:
        return self.positions[-1]

    def index_of(self, cell: Cell) -> Optional[int]:
        """Index of the first segment at `cell`, or None."""
        try:
            return self.positions.index(cell)
        except ValueError:
            return None

    def __len__(self) -> int:
        return len(self.positions)

    def __iter__(self) -> Iterator[Cell]:
        return iter(self.positions)

    def __contains__(self, cell) -> bool:
        return cell in self.positions

    def __eq__(self, other) -> bool:
        if isinstance(other, Snake):
            return self.positions == other.positions
        return NotImplemented

    def __hash__(self) -> int:
        return hash(self.positions)

    def __repr__(self):
        return f"<Snake length={len(self)} head={self.head}>"
