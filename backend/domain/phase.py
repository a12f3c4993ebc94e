"""
Game phases and the transitions allowed between them.
"""

from enum import Enum
from typing import Dict, FrozenSet

from .errors import InvalidTransition


class Phase(str, Enum):
    START = "START"
    PLAYING = "PLAYING"
    PAUSED = "PAUSED"
    GAME_OVER = "GAME_OVER"


TRANSITIONS: Dict[Phase, FrozenSet[Phase]] = {
    Phase.START: frozenset({Phase.PLAYING}),
    # PLAYING -> PLAYING is an explicit restart mid-game
    Phase.PLAYING: frozenset({Phase.PLAYING, Phase.PAUSED, Phase.GAME_OVER}),
    Phase.PAUSED: frozenset({Phase.PLAYING}),
    Phase.GAME_OVER: frozenset({Phase.PLAYING}),
}


class PhaseMachine:
    """Holds the current phase and rejects moves not listed in TRANSITIONS."""

    def __init__(self, initial: Phase = Phase.START):
        self.current = initial

    def can_transition(self, target: Phase) -> bool:
        return target in TRANSITIONS[self.current]

    def transition(self, target: Phase) -> Phase:
        if not self.can_transition(target):
            raise InvalidTransition(self.current, target)
        previous = self.current
        self.current = target
        return previous

    def __repr__(self):
        return f"<PhaseMachine {self.current.value}>"
