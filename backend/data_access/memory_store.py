"""
In-memory key-value store with the same interface as KeyValueRepository.

Used by tests and by ephemeral runs (SNAKE_IN_MEMORY=1, the headless CLI).
"""

from typing import Dict, Optional


class InMemoryKeyValueStore:
    def __init__(self, initial: Optional[Dict[str, str]] = None):
        self._data: Dict[str, str] = dict(initial or {})

    def get(self, key: str, default: Optional[str] = None) -> Optional[str]:
        return self._data.get(key, default)

    def set(self, key: str, value: str) -> None:
        self._data[key] = value

    def delete(self, key: str) -> bool:
        return self._data.pop(key, None) is not None

    def __repr__(self):
        return f"<InMemoryKeyValueStore keys={sorted(self._data)}>"
