"""
Keyboard input handling: turns key events into a pending direction.
"""

from typing import Optional

from .board import is_opposite
from .constants import DOWN, LEFT, RIGHT, UP, VALID_MOVES

KEY_DIRECTIONS = {
    "ArrowUp": UP,
    "ArrowDown": DOWN,
    "ArrowLeft": LEFT,
    "ArrowRight": RIGHT,
    "w": UP,
    "s": DOWN,
    "a": LEFT,
    "d": RIGHT,
}

PAUSE_KEYS = {" ", "Space", "Spacebar"}


def direction_for_key(key: str) -> Optional[str]:
    """Map a browser KeyboardEvent.key value to a direction, or None."""
    if key in KEY_DIRECTIONS:
        return KEY_DIRECTIONS[key]
    return KEY_DIRECTIONS.get(key.lower()) if len(key) == 1 else None


def is_pause_key(key: str) -> bool:
    return key in PAUSE_KEYS


class InputMapper:
    """
    Buffers the next direction between ticks.

    The reversal guard compares against the direction the engine last
    applied, not the pending one, so two quick presses (e.g. LEFT then
    DOWN while moving UP) cannot sneak a reversal in before the next tick.
    """

    def __init__(self, initial_direction: str = UP):
        self.pending = initial_direction

    def submit(self, direction: str, applied: str) -> bool:
        """Queue `direction` unless it reverses `applied`. Returns True if accepted."""
        if direction not in VALID_MOVES:
            raise ValueError(f"Unknown direction '{direction}'")
        if is_opposite(applied, direction):
            return False
        self.pending = direction
        return True

    def reset(self, direction: str = UP) -> None:
        self.pending = direction
