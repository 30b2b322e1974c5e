"""Fixtures for tests against a real cache database."""

import os
from collections.abc import Generator

import pytest

from driftjson.cache.manager import KEY_PREFIX
from driftjson.db import SqlStore, get_engine


@pytest.fixture(scope="session")
def test_cache_url() -> str:
    """Database URL from DRIFTJSON_TEST_CACHE_URL; skips the session's tests when unset."""
    url = os.getenv("DRIFTJSON_TEST_CACHE_URL")
    if not url:
        pytest.skip("DRIFTJSON_TEST_CACHE_URL is not set")
    return url


@pytest.fixture
def sql_store(test_cache_url: str) -> Generator[SqlStore, None, None]:
    store = SqlStore(get_engine(test_cache_url))
    yield store
    for key in store.keys(KEY_PREFIX):
        store.delete(key)
    store.dispose()
