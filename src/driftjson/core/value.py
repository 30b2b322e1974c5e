"""Read-only wrapper around one stored value.

A ``NavigableValue`` is what every model read returns. Its typed accessors go
through :mod:`driftjson.core.coerce`, so they never raise, and member access
forwards into nested models, so chains of any depth terminate in an absent
value instead of an error::

    model.data.order.customer.address.city.string
    model.data.order.items[0].discount.value.float
"""

from __future__ import annotations

from collections.abc import Iterable, Iterator
from typing import TYPE_CHECKING, Any

from driftjson.core import coerce
from driftjson.json_types import ABSENT

if TYPE_CHECKING:
    from driftjson.core.instance import ModelInstance


def _is_model(raw: Any) -> bool:
    from driftjson.core.instance import ModelInstance

    return isinstance(raw, ModelInstance)


class NavigableValue:
    """Truthy when it holds a non-null value; ``len`` is the array length.

    Attribute sugar only reaches members whose names do not collide with the
    properties and methods below (``key``, ``path``, ``exists``, ``int``,
    ``array``, ``index``, ...). Use ``member("key")`` or ``value["key"]`` for
    those.
    """

    __slots__ = ("_raw", "_key", "_owner")

    def __init__(self, raw: Any = ABSENT, key: str = "", owner: str = "") -> None:
        self._raw = raw
        self._key = key
        self._owner = owner

    @property
    def raw_value(self) -> Any:
        """The stored value as-is; ``None`` for both null and absent."""
        return None if self._raw is ABSENT else self._raw

    @property
    def key(self) -> str:
        return self._key

    @property
    def path(self) -> str:
        if not self._owner:
            return self._key
        return f"{self._owner}.{self._key}"

    # -- presence ------------------------------------------------------------

    @property
    def exists(self) -> bool:
        return self._raw is not ABSENT

    @property
    def is_null(self) -> bool:
        """True for an explicit null and for a missing value alike."""
        return self._raw is None or self._raw is ABSENT

    # -- coercions -----------------------------------------------------------

    @property
    def string(self) -> str:
        return coerce.to_string(self._raw)

    @property
    def int(self) -> int:
        return coerce.to_int(self._raw)

    @property
    def float(self) -> float:
        return coerce.to_float(self._raw)

    double = float

    @property
    def bool(self) -> bool:
        return coerce.to_bool(self._raw)

    @property
    def optional_string(self) -> str | None:
        return None if self.is_null else self.string

    @property
    def optional_int(self) -> int | None:
        return None if self.is_null else self.int

    @property
    def optional_float(self) -> float | None:
        return None if self.is_null else self.float

    @property
    def optional_bool(self) -> bool | None:
        return None if self.is_null else self.bool

    # -- arrays --------------------------------------------------------------

    @property
    def is_array(self) -> bool:
        return isinstance(self._raw, list)

    def array(self) -> NavigableArray:
        if not isinstance(self._raw, list):
            return NavigableArray(key=self._key, owner=self._owner)
        return NavigableArray(
            (
                NavigableValue(element, key=f"{self._key}[{index}]", owner=self._owner)
                for index, element in enumerate(self._raw)
            ),
            key=self._key,
            owner=self._owner,
        )

    def index(self, position: int) -> NavigableValue:
        if isinstance(self._raw, list) and 0 <= position < len(self._raw):
            return NavigableValue(self._raw[position], key=f"{self._key}[{position}]", owner=self._owner)
        return NavigableValue(ABSENT, key=f"{self._key}[{position}]", owner=self._owner)

    # -- nested models -------------------------------------------------------

    @property
    def is_model(self) -> bool:
        return _is_model(self._raw)

    def as_model(self) -> ModelInstance:
        """The wrapped model, or a detached empty one named ``<path>_empty``."""
        from driftjson.core.instance import ModelInstance

        if isinstance(self._raw, ModelInstance):
            return self._raw
        return ModelInstance(f"{self.path}_empty")

    def member(self, name: str) -> NavigableValue:
        if _is_model(self._raw):
            return self._raw.get(name)
        return NavigableValue(ABSENT, key=name, owner=self.path)

    # -- python sugar --------------------------------------------------------

    def __getattr__(self, name: str) -> NavigableValue:
        if name.startswith("_"):
            raise AttributeError(name)
        return self.member(name)

    def __getitem__(self, item: int | str) -> NavigableValue:
        if isinstance(item, str):
            return self.member(item)
        if isinstance(item, int) and not isinstance(item, bool):
            return self.index(item)
        return NavigableValue(ABSENT, key=f"{self._key}[{item!r}]", owner=self._owner)

    def __iter__(self) -> Iterator[NavigableValue]:
        return iter(self.array())

    def __len__(self) -> int:
        return len(self._raw) if isinstance(self._raw, list) else 0

    def __bool__(self) -> bool:
        return self.exists and self._raw is not None

    def __str__(self) -> str:
        return self.string

    def __repr__(self) -> str:
        if self._raw is ABSENT:
            return f"NavigableValue(ABSENT) [{self.path}]"
        return f"NavigableValue({self._raw!r}) [{self.path}] -> {self.string!r}"

    # Loose on purpose: values compare by their string coercion, so 1, "1"
    # and 1.0 differ ("1" vs "1.0") while null, absent and "" are all equal.
    # Use same_as() for a comparison of the stored values themselves.
    def __eq__(self, other: object) -> bool:
        if isinstance(other, NavigableValue):
            return self.string == other.string
        if isinstance(other, str):
            return self.string == other
        return NotImplemented

    def __hash__(self) -> int:
        return hash(self.string)

    def same_as(self, other: NavigableValue) -> bool:
        if self._raw is ABSENT or other._raw is ABSENT:
            return self._raw is other._raw
        if _is_model(self._raw) or _is_model(other._raw):
            return self._raw is other._raw
        return type(self._raw) is type(other._raw) and self._raw == other._raw


class NavigableArray(list):
    """Elements of an array value; out-of-range positions read as absent."""

    def __init__(self, elements: Iterable[NavigableValue] = (), key: str = "", owner: str = "") -> None:
        super().__init__(elements)
        self.key = key
        self.owner = owner

    def __getitem__(self, position: Any) -> Any:
        if isinstance(position, int) and not 0 <= position < len(self):
            return NavigableValue(ABSENT, key=f"{self.key}[{position}]", owner=self.owner)
        return super().__getitem__(position)
