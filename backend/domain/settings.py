"""
Player-facing game settings.

Keys use the camelCase names the browser front end stores, so a saved
settings blob can be passed straight to GameSettings.from_dict().
"""

from dataclasses import asdict, dataclass, fields, replace
from typing import Any, Dict

from .constants import FOOD_TYPES, LANGUAGES, SPEED_MAP
from .errors import ConfigurationError


@dataclass(frozen=True)
class GameSettings:
    language: str = "en"
    teleportEnabled: bool = True
    soundEnabled: bool = True
    volume: int = 3
    speed: int = 3
    foodType: str = "both"
    autoRestart: bool = True
    selfCollisionEnabled: bool = True

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "GameSettings":
        """Build settings from a (possibly partial) dict, ignoring unknown keys."""
        known = {f.name for f in fields(cls)}
        settings = cls(**{k: v for k, v in data.items() if k in known})
        settings.validate()
        return settings

    def to_dict(self) -> Dict[str, Any]:
        return asdict(self)

    def merged(self, **changes: Any) -> "GameSettings":
        """Return a copy with `changes` applied; raises ConfigurationError if invalid."""
        known = {f.name for f in fields(self)}
        unknown = set(changes) - known
        if unknown:
            raise ConfigurationError(f"Unknown setting(s): {', '.join(sorted(unknown))}")
        updated = replace(self, **changes)
        updated.validate()
        return updated

    def validate(self) -> None:
        for flag in ("teleportEnabled", "soundEnabled", "autoRestart", "selfCollisionEnabled"):
            if not isinstance(getattr(self, flag), bool):
                raise ConfigurationError(f"{flag} must be a boolean")
        if self.language not in LANGUAGES:
            raise ConfigurationError(f"Unsupported language '{self.language}'")
        if self.foodType not in FOOD_TYPES:
            raise ConfigurationError(f"Unknown food type '{self.foodType}'")
        if isinstance(self.volume, bool) or not isinstance(self.volume, int) or not 0 <= self.volume <= 5:
            raise ConfigurationError("volume must be an integer between 0 and 5")
        if isinstance(self.speed, bool) or not isinstance(self.speed, int) or self.speed not in SPEED_MAP:
            raise ConfigurationError("speed must be an integer between 1 and 5")

    @property
    def tick_interval_ms(self) -> int:
        return SPEED_MAP[self.speed]


DEFAULT_SETTINGS = GameSettings()
