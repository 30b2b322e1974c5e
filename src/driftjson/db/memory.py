import copy
from typing import Any


class InMemoryStore:
    """Dict-backed ``KeyValueStore`` that lives as long as the process."""

    def __init__(self) -> None:
        self.entries: dict[str, Any] = {}

    def get(self, key: str) -> Any | None:
        value = self.entries.get(key)
        return copy.deepcopy(value)

    def set(self, key: str, value: Any) -> None:
        self.entries[key] = copy.deepcopy(value)

    def delete(self, key: str) -> None:
        self.entries.pop(key, None)

    def keys(self, prefix: str = "") -> list[str]:
        return sorted(k for k in self.entries if k.startswith(prefix))

    def dispose(self) -> None:
        pass
