"""
Tests for data_access layer.

The SQLite repository runs against a temporary database file; the gateway
and settings store run against the in-memory store or a mock.
"""

import json
import os
from unittest.mock import MagicMock, patch

import pytest

from data_access.memory_store import InMemoryKeyValueStore
from data_access.repositories.kv_repository import KeyValueRepository
from data_access.score_gateway import ScoreGateway
from data_access.settings_store import load_settings, save_settings
from domain.constants import HIGH_SCORE_KEY, SETTINGS_KEY
from domain.settings import DEFAULT_SETTINGS, GameSettings


class TestKeyValueRepository:

    def test_get_missing_returns_default(self, tmp_path):
        repo = KeyValueRepository(str(tmp_path / "snake.db"))
        assert repo.get("missing") is None
        assert repo.get("missing", "fallback") == "fallback"

    def test_set_then_get(self, tmp_path):
        repo = KeyValueRepository(str(tmp_path / "snake.db"))
        repo.set("snake_highscore", "12")
        assert repo.get("snake_highscore") == "12"

    def test_set_overwrites(self, tmp_path):
        repo = KeyValueRepository(str(tmp_path / "snake.db"))
        repo.set("k", "1")
        repo.set("k", "2")
        assert repo.get("k") == "2"

    def test_values_survive_new_repository(self, tmp_path):
        path = str(tmp_path / "snake.db")
        KeyValueRepository(path).set("k", "v")
        assert KeyValueRepository(path).get("k") == "v"

    def test_delete(self, tmp_path):
        repo = KeyValueRepository(str(tmp_path / "snake.db"))
        repo.set("k", "v")
        assert repo.delete("k") is True
        assert repo.delete("k") is False
        assert repo.get("k") is None

    def test_env_path_is_used(self, tmp_path, monkeypatch):
        path = str(tmp_path / "nested" / "env.db")
        monkeypatch.setenv("SNAKE_DB_PATH", path)
        KeyValueRepository().set("k", "v")
        assert os.path.exists(path)

    @patch('data_access.repositories.base.get_connection')
    def test_failed_write_rolls_back_and_closes(self, mock_get_conn):
        mock_cursor = MagicMock()
        mock_cursor.execute.side_effect = RuntimeError("disk full")
        mock_conn = MagicMock()
        mock_conn.cursor.return_value = mock_cursor
        mock_get_conn.return_value = mock_conn

        repo = KeyValueRepository("unused.db", create_schema=False)
        with pytest.raises(RuntimeError):
            repo.set("k", "v")

        mock_conn.rollback.assert_called_once()
        mock_conn.commit.assert_not_called()
        mock_conn.close.assert_called_once()


class TestScoreGateway:

    def test_starts_at_zero(self, store):
        assert ScoreGateway(store).high_score == 0

    def test_reads_stored_high_score(self):
        store = InMemoryKeyValueStore({HIGH_SCORE_KEY: "17"})
        assert ScoreGateway(store).high_score == 17

    def test_unreadable_high_score_is_zero(self):
        store = InMemoryKeyValueStore({HIGH_SCORE_KEY: "lots"})
        assert ScoreGateway(store).high_score == 0

    def test_record_new_high_score(self, store):
        gateway = ScoreGateway(store)
        record = gateway.record_score(5)

        assert record.updated is True
        assert record.high_score == 5
        assert store.get(HIGH_SCORE_KEY) == "5"

    def test_lower_or_equal_score_is_a_no_op(self):
        store = MagicMock()
        store.get.return_value = "8"
        gateway = ScoreGateway(store)

        assert gateway.record_score(8).updated is False
        assert gateway.record_score(3).high_score == 8
        store.set.assert_not_called()

    def test_storage_failure_keeps_record_in_memory(self):
        store = MagicMock()
        store.get.return_value = None
        store.set.side_effect = OSError("read-only")
        gateway = ScoreGateway(store)

        record = gateway.record_score(4)
        assert record.updated is True
        assert gateway.high_score == 4


class TestSettingsStore:

    def test_missing_settings_are_defaults(self, store):
        assert load_settings(store) == DEFAULT_SETTINGS

    def test_save_and_load(self, store):
        settings = GameSettings(speed=5, language="pt-BR", teleportEnabled=False)
        assert save_settings(store, settings) is True
        assert json.loads(store.get(SETTINGS_KEY))["speed"] == 5
        assert load_settings(store) == settings

    def test_partial_blob_keeps_other_defaults(self):
        store = InMemoryKeyValueStore({SETTINGS_KEY: json.dumps({"volume": 0})})
        settings = load_settings(store)
        assert settings.volume == 0
        assert settings.speed == DEFAULT_SETTINGS.speed

    @pytest.mark.parametrize("raw", ["{not json", "[1, 2]", json.dumps({"speed": 42})])
    def test_bad_blob_falls_back_to_defaults(self, raw):
        store = InMemoryKeyValueStore({SETTINGS_KEY: raw})
        assert load_settings(store) == DEFAULT_SETTINGS

    def test_save_failure_is_swallowed(self):
        store = MagicMock()
        store.set.side_effect = OSError("quota exceeded")
        assert save_settings(store, DEFAULT_SETTINGS) is False
