import json
import logging
from typing import Any

from sqlalchemy import Engine, text

logger = logging.getLogger(__name__)

TABLE_NAME = "driftjson_cache"


def _ensure_table(engine: Engine) -> None:
    ddl = f"CREATE TABLE IF NOT EXISTS {TABLE_NAME} (key TEXT PRIMARY KEY, value TEXT NOT NULL)"
    with engine.begin() as conn:
        conn.execute(text(ddl))


def _escape_like(prefix: str) -> str:
    return prefix.replace("\\", "\\\\").replace("%", "\\%").replace("_", "\\_")


class SqlStore:
    """``KeyValueStore`` over a single SQL table, values kept as JSON text."""

    def __init__(self, engine: Engine) -> None:
        self._engine = engine
        self._ready = False

    def ensure_ready(self) -> None:
        if not self._ready:
            _ensure_table(self._engine)
            self._ready = True

    def get(self, key: str) -> Any | None:
        self.ensure_ready()
        with self._engine.begin() as conn:
            result = conn.execute(
                text(f"SELECT value FROM {TABLE_NAME} WHERE key = :key"),
                {"key": key},
            )
            raw = result.scalar_one_or_none()
        if raw is None:
            return None
        return json.loads(raw)

    def set(self, key: str, value: Any) -> None:
        self.ensure_ready()
        payload = json.dumps(value)
        with self._engine.begin() as conn:
            conn.execute(
                text(
                    f"""
                    INSERT INTO {TABLE_NAME} (key, value) VALUES (:key, :value)
                    ON CONFLICT (key) DO UPDATE SET value = excluded.value
                    """
                ),
                {"key": key, "value": payload},
            )

    def delete(self, key: str) -> None:
        self.ensure_ready()
        with self._engine.begin() as conn:
            conn.execute(text(f"DELETE FROM {TABLE_NAME} WHERE key = :key"), {"key": key})

    def keys(self, prefix: str = "") -> list[str]:
        self.ensure_ready()
        with self._engine.begin() as conn:
            result = conn.execute(
                text(f"SELECT key FROM {TABLE_NAME} WHERE key LIKE :pattern ESCAPE '\\' ORDER BY key"),
                {"pattern": _escape_like(prefix) + "%"},
            )
            return [str(row[0]) for row in result.fetchall()]

    def ping(self) -> bool:
        try:
            with self._engine.connect() as conn:
                conn.execute(text("SELECT 1"))
            return True
        except Exception:
            logger.debug("Cache store ping failed", exc_info=True)
            return False

    def dispose(self) -> None:
        self._engine.dispose()
