"""Shared fixtures and helpers for tests."""

from pathlib import Path

import pytest

from driftjson.cache.manager import CacheManager
from driftjson.core.registry import Registry
from driftjson.db import InMemoryStore
from driftjson.models import CachePolicy, Configuration

_REPO_ROOT = Path(__file__).parent.parent


# ---------------------------------------------------------------------------
# Auto-marker: tag tests as "unit" or "integration" based on directory
# ---------------------------------------------------------------------------


def pytest_collection_modifyitems(items: list[pytest.Item]) -> None:
    for item in items:
        test_path = Path(str(item.fspath))
        rel = test_path.relative_to(_REPO_ROOT / "tests")
        parts = rel.parts
        if parts and parts[0] == "integration":
            item.add_marker(pytest.mark.integration)
        else:
            item.add_marker(pytest.mark.unit)


# ---------------------------------------------------------------------------
# Shared unit-test fixtures
# ---------------------------------------------------------------------------


class FakeClock:
    """Manually advanced replacement for ``time.time``."""

    def __init__(self, start: float = 1_700_000_000.0) -> None:
        self.now = start

    def __call__(self) -> float:
        return self.now

    def advance(self, seconds: float) -> None:
        self.now += seconds


@pytest.fixture
def clock() -> FakeClock:
    return FakeClock()


@pytest.fixture
def memory_store() -> InMemoryStore:
    return InMemoryStore()


@pytest.fixture
def cache(memory_store: InMemoryStore) -> CacheManager:
    return CacheManager(Configuration(), memory_store)


@pytest.fixture
def registry(memory_store: InMemoryStore) -> Registry:
    return Registry(Configuration(cache_policy=CachePolicy.until_next_write()), memory_store)
