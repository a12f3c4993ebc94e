"""
Audio cue service.

The engine only emits semantic events. This service turns them into small
cue descriptors (waveform, frequency sweep, duration, gain) that the browser
plays with the Web Audio API. Nothing here synthesises sound.
"""

import logging
import threading
from collections import deque
from dataclasses import asdict, dataclass
from typing import Any, Callable, Deque, Dict, List

from domain.constants import EVENT_EATEN, EVENT_GAME_OVER
from domain.settings import GameSettings

logger = logging.getLogger(__name__)

MAX_GAIN = 0.2

# Cues nobody has polled for are dropped oldest first
MAX_QUEUED_CUES = 8


@dataclass(frozen=True)
class AudioCue:
    name: str
    wave: str
    start_hz: float
    end_hz: float
    duration_s: float
    gain: float

    def to_dict(self) -> Dict[str, Any]:
        return asdict(self)


# event -> (cue name, wave, start_hz, end_hz, duration_s)
CUES = {
    EVENT_EATEN: ("eat", "sine", 440.0, 880.0, 0.1),
    EVENT_GAME_OVER: ("game_over", "square", 220.0, 55.0, 0.5),
}


def gain_for_volume(volume: int) -> float:
    return (volume / 5) * MAX_GAIN


class AudioService:
    """
    Listens to game events and queues cues while sound is enabled.

    Register it with SnakeGame.add_listener(); the HTTP host drains the
    queue into each snapshot response.
    """

    def __init__(self, settings_provider: Callable[[], GameSettings]):
        self._settings_provider = settings_provider
        self._queue: Deque[AudioCue] = deque(maxlen=MAX_QUEUED_CUES)
        self._lock = threading.Lock()

    def __call__(self, event: str, payload: Dict[str, Any]) -> None:
        self.handle_event(event, payload)

    def handle_event(self, event: str, payload: Dict[str, Any]) -> None:
        definition = CUES.get(event)
        if definition is None:
            return

        settings = self._settings_provider()
        if not settings.soundEnabled or settings.volume == 0:
            return

        name, wave, start_hz, end_hz, duration_s = definition
        cue = AudioCue(name, wave, start_hz, end_hz, duration_s, gain_for_volume(settings.volume))
        with self._lock:
            self._queue.append(cue)
        logger.debug(f"Queued audio cue {name} for event {event}")

    def drain(self) -> List[AudioCue]:
        """Return queued cues and clear the queue."""
        with self._lock:
            cues = list(self._queue)
            self._queue.clear()
        return cues
