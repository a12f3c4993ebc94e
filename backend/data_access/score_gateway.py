"""
High score tracking backed by a key-value store.
"""

import logging
from dataclasses import dataclass

from domain.constants import HIGH_SCORE_KEY

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class ScoreRecord:
    updated: bool
    high_score: int


class ScoreGateway:
    """
    Compares scores against the stored high score and persists new records.

    The stored value is read once, at construction. Only the game
    controller talks to the gateway.
    """

    def __init__(self, store):
        self.store = store
        self.high_score = self._read_high_score()

    def _read_high_score(self) -> int:
        raw = self.store.get(HIGH_SCORE_KEY)
        if raw is None:
            return 0
        try:
            return max(0, int(raw))
        except (TypeError, ValueError):
            logger.warning(f"Ignoring unreadable high score {raw!r}")
            return 0

    def record_score(self, current: int) -> ScoreRecord:
        """
        Persist `current` if it beats the high score.

        Returns:
            ScoreRecord with updated=True when a new high score was set
        """
        if current <= self.high_score:
            return ScoreRecord(updated=False, high_score=self.high_score)

        self.high_score = current
        try:
            self.store.set(HIGH_SCORE_KEY, str(current))
        except Exception as e:
            # Keep the new record in memory even if the write fails
            logger.error(f"Failed to persist high score {current}: {e}")
        else:
            logger.info(f"New high score: {current}")
        return ScoreRecord(updated=True, high_score=current)
