"""
Base player interface for the game engine.
"""

from domain.game_state import GameState
from domain.settings import GameSettings


class Player:
    """
    Base class/interface for player logic.

    A player stands in for the keyboard: each tick it is asked which
    direction to press given the current game state.
    """

    def get_move(self, game_state: GameState, settings: GameSettings) -> str:
        """
        Return a move direction given the current game state.

        Args:
            game_state: Current state of the game
            settings: Active rules (teleport, self collision)

        Returns:
            One of: "UP", "DOWN", "LEFT", "RIGHT"
        """
        raise NotImplementedError
