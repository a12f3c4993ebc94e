"""
Board geometry helpers.

Cells are plain (x, y) tuples so they hash and compare by value.
"""

from typing import Iterator, Tuple

from .constants import DIRECTION_VECTORS, GRID_SIZE, OPPOSITES

Cell = Tuple[int, int]


def wrap(coord: int, size: int = GRID_SIZE) -> int:
    """Wrap a single coordinate into [0, size)."""
    return coord % size


def wrap_cell(cell: Cell, size: int = GRID_SIZE) -> Cell:
    x, y = cell
    return (wrap(x, size), wrap(y, size))


def in_bounds(cell: Cell, size: int = GRID_SIZE) -> bool:
    x, y = cell
    return 0 <= x < size and 0 <= y < size


def step(cell: Cell, direction: str) -> Cell:
    """Advance a cell by one unit in the given direction (no wrapping)."""
    dx, dy = DIRECTION_VECTORS[direction]
    return (cell[0] + dx, cell[1] + dy)


def is_opposite(a: str, b: str) -> bool:
    return OPPOSITES[a] == b


def all_cells(size: int = GRID_SIZE) -> Iterator[Cell]:
    for y in range(size):
        for x in range(size):
            yield (x, y)
