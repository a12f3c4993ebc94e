"""
Load and save GameSettings through a key-value store.
"""

import json
import logging

from domain.constants import SETTINGS_KEY
from domain.errors import ConfigurationError
from domain.settings import DEFAULT_SETTINGS, GameSettings

logger = logging.getLogger(__name__)


def load_settings(store) -> GameSettings:
    """
    Read saved settings, falling back to defaults.

    A missing key, corrupt JSON or invalid values all yield DEFAULT_SETTINGS;
    the last two are logged since they mean the stored blob is unusable.
    """
    raw = store.get(SETTINGS_KEY)
    if raw is None:
        return DEFAULT_SETTINGS

    try:
        data = json.loads(raw)
    except json.JSONDecodeError as e:
        logger.warning(f"Ignoring corrupt saved settings: {e}")
        return DEFAULT_SETTINGS

    if not isinstance(data, dict):
        logger.warning("Ignoring saved settings: expected a JSON object")
        return DEFAULT_SETTINGS

    try:
        return GameSettings.from_dict(data)
    except (ConfigurationError, TypeError) as e:
        logger.warning(f"Ignoring invalid saved settings: {e}")
        return DEFAULT_SETTINGS


def save_settings(store, settings: GameSettings) -> bool:
    """
    Persist settings. Fire and forget: storage errors are logged, not raised.

    Returns:
        True if the write succeeded
    """
    try:
        store.set(SETTINGS_KEY, json.dumps(settings.to_dict()))
        return True
    except Exception as e:
        logger.error(f"Failed to save settings: {e}")
        return False
