"""Value spaces at the decode boundary and inside model storage."""

from __future__ import annotations

from decimal import Decimal
from typing import TYPE_CHECKING, Final, TypeAlias

if TYPE_CHECKING:
    from driftjson.core.instance import ModelInstance

JSONScalar: TypeAlias = str | int | float | bool | None
JSONValue: TypeAlias = JSONScalar | list["JSONValue"] | dict[str, "JSONValue"]
JSONObject: TypeAlias = dict[str, JSONValue]
JSONArray: TypeAlias = list[JSONValue]

# Decimal stands in for numbers decoded with a non-float number type
StoredScalar: TypeAlias = str | int | float | bool | Decimal | None
StoredValue: TypeAlias = "StoredScalar | ModelInstance | list[StoredValue]"


class _Absent:
    """Marks a key or index that was never set, as opposed to an explicit null."""

    _instance: _Absent | None = None

    def __new__(cls) -> _Absent:
        if cls._instance is None:
            cls._instance = super().__new__(cls)
        return cls._instance

    def __bool__(self) -> bool:
        return False

    def __repr__(self) -> str:
        return "ABSENT"

    def __reduce__(self) -> str:
        return "ABSENT"


ABSENT: Final = _Absent()
