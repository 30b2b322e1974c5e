from driftjson.db.engine import DEFAULT_CACHE_URL, get_engine
from driftjson.db.memory import InMemoryStore
from driftjson.db.sql import TABLE_NAME, SqlStore

__all__ = [
    "DEFAULT_CACHE_URL",
    "TABLE_NAME",
    "InMemoryStore",
    "SqlStore",
    "get_engine",
]
