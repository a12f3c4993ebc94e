"""
Shared fixtures for the Happy Snake test suite.
"""

import os
import random
import sys

import pytest

# Add backend to path for imports
sys.path.insert(0, os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

from data_access.memory_store import InMemoryKeyValueStore  # noqa: E402
from domain.food import Food, FoodSpawner  # noqa: E402
from domain.settings import GameSettings  # noqa: E402
from services.scheduler import ManualScheduler  # noqa: E402


class ScriptedSpawner(FoodSpawner):
    """Spawner that places food on a fixed list of cells before going random."""

    def __init__(self, cells, rng=None, grid_size=20):
        super().__init__(rng or random.Random(0), grid_size)
        self.cells = list(cells)
        self.calls = []

    def spawn(self, occupied, pool):
        occupied = set(occupied)
        self.calls.append(occupied)
        if self.cells:
            cell = self.cells.pop(0)
            return Food(cell=cell, kind=pool[0])
        return super().spawn(occupied, pool)


@pytest.fixture
def rng():
    return random.Random(1234)


@pytest.fixture
def spawner(rng):
    return FoodSpawner(rng)


@pytest.fixture
def store():
    return InMemoryKeyValueStore()


@pytest.fixture
def scheduler():
    return ManualScheduler()


@pytest.fixture
def walls():
    """Classic rules: walls kill, biting yourself kills."""
    return GameSettings(teleportEnabled=False, selfCollisionEnabled=True, autoRestart=False)


@pytest.fixture
def scripted_spawner():
    return ScriptedSpawner
