"""Tests for the CLI cache commands."""

from __future__ import annotations

from unittest.mock import patch

import pytest
from typer.testing import CliRunner

from driftjson.cache.manager import CacheManager, cache_key
from driftjson.cli.app import app
from driftjson.db import InMemoryStore
from driftjson.models import Configuration

runner = CliRunner()


@pytest.fixture
def populated_store() -> InMemoryStore:
    store = InMemoryStore()
    manager = CacheManager(Configuration(), store, clock=lambda: 1_700_000_000.0)
    manager.persist({"token": "abc", "ids": [1, 2]}, "session")
    manager.persist({"theme": "dark"}, "prefs")
    return store


class TestCacheList:
    def test_lists_entries(self, populated_store: InMemoryStore) -> None:
        with patch("driftjson.cli.cache._get_store", return_value=populated_store):
            result = runner.invoke(app, ["cache", "list"])

        assert result.exit_code == 0
        assert "session" in result.output
        assert "prefs" in result.output
        assert "1700000000.0" in result.output
        assert "(2 rows)" in result.output

    def test_empty_store(self) -> None:
        with patch("driftjson.cli.cache._get_store", return_value=InMemoryStore()):
            result = runner.invoke(app, ["cache", "list"])

        assert result.exit_code == 0
        assert "(0 rows)" in result.output


class TestCacheShow:
    def test_shows_values(self, populated_store: InMemoryStore) -> None:
        with patch("driftjson.cli.cache._get_store", return_value=populated_store):
            result = runner.invoke(app, ["cache", "show", "session"])

        assert result.exit_code == 0
        assert "'abc'" in result.output
        assert "[1, 2]" in result.output

    def test_unknown_model(self, populated_store: InMemoryStore) -> None:
        with patch("driftjson.cli.cache._get_store", return_value=populated_store):
            result = runner.invoke(app, ["cache", "show", "nope"])

        assert result.exit_code == 1
        assert "No cache entry for" in result.output


class TestCacheClear:
    def test_clear_one(self, populated_store: InMemoryStore) -> None:
        with patch("driftjson.cli.cache._get_store", return_value=populated_store):
            result = runner.invoke(app, ["cache", "clear", "session"])

        assert result.exit_code == 0
        assert "Cleared cache entry for session." in result.output
        assert populated_store.get(cache_key("session")) is None
        assert populated_store.get(cache_key("prefs")) == {"theme": "dark"}

    def test_clear_all(self, populated_store: InMemoryStore) -> None:
        with patch("driftjson.cli.cache._get_store", return_value=populated_store):
            result = runner.invoke(app, ["cache", "clear"])

        assert result.exit_code == 0
        assert "Cleared all cache entries." in result.output
        assert populated_store.keys() == []
