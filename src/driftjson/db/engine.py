import os

from sqlalchemy import Engine, create_engine

DEFAULT_CACHE_URL = "sqlite:///driftjson-cache.db"


def get_engine(url: str | None = None) -> Engine:
    db_url = url or os.getenv("DRIFTJSON_CACHE_URL", DEFAULT_CACHE_URL)
    return create_engine(db_url)
