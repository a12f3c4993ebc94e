"""
Data access layer for Happy Snake persistence.

Settings and the high score live in a key-value store: SQLite through
KeyValueRepository in normal runs, InMemoryKeyValueStore in tests.
"""

from .memory_store import InMemoryKeyValueStore
from .repositories import KeyValueRepository
from .score_gateway import ScoreGateway, ScoreRecord
from .settings_store import load_settings, save_settings

__all__ = [
    'InMemoryKeyValueStore',
    'KeyValueRepository',
    'ScoreGateway',
    'ScoreRecord',
    'load_settings',
    'save_settings',
]
