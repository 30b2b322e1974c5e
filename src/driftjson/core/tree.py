from __future__ import annotations

from collections.abc import Callable, Mapping, Sequence
from typing import TYPE_CHECKING, Any

from driftjson.core.keys import normalize_key
from driftjson.models import KeyCodingStyle

if TYPE_CHECKING:
    from driftjson.core.instance import ModelInstance
    from driftjson.json_types import StoredValue

ChildFactory = Callable[[str], "ModelInstance"]

# (decoded source, owner name, key, target). Objects fill a dict target,
# arrays fill a list target.
_Task = tuple[Any, str, str, "dict[str, StoredValue] | list[StoredValue]"]


def child_name(owner: str, key: str, index: int | None = None) -> str:
    if index is None:
        return f"{owner}.{key}"
    return f"{owner}.{key}[{index}]"


def _resolve(
    value: Any,
    owner: str,
    key: str,
    index: int | None,
    make_child: ChildFactory,
    pending: list[_Task],
) -> StoredValue:
    if isinstance(value, Mapping):
        child = make_child(child_name(owner, key, index))
        storage: dict[str, StoredValue] = {}
        # filled from the work stack before the caller publishes the result
        child.assign_storage(storage)
        pending.append((value, child.name, "", storage))
        return child
    if isinstance(value, (list, tuple)):
        items: list[StoredValue] = []
        element_key = key if index is None else f"{key}[{index}]"
        pending.append((value, owner, element_key, items))
        return items
    return value


def _drain(pending: list[_Task], make_child: ChildFactory, style: KeyCodingStyle) -> None:
    while pending:
        source, owner, key, target = pending.pop()
        if isinstance(target, dict):
            for raw_key, value in source.items():
                canonical = normalize_key(str(raw_key), style)
                target[canonical] = _resolve(value, owner, canonical, None, make_child, pending)
        else:
            elements: Sequence[Any] = source
            for index, element in enumerate(elements):
                target.append(_resolve(element, owner, key, index, make_child, pending))


def resolve_value(
    value: Any,
    owner: str,
    key: str,
    make_child: ChildFactory,
    style: KeyCodingStyle = KeyCodingStyle.CAMEL_CASE,
) -> StoredValue:
    """Turn one decoded JSON value into what a model instance stores.

    - object       -> child instance named ``owner.key``
    - array        -> list; object elements become children named ``owner.key[i]``,
                      nested arrays are resolved the same way, everything else
                      passes through in place
    - null         -> ``None`` (kept, so it stays distinguishable from a missing key)
    - other values -> unchanged

    Nesting depth is bounded only by memory: the tree is walked with an
    explicit stack.
    """
    pending: list[_Task] = []
    resolved = _resolve(value, owner, key, None, make_child, pending)
    _drain(pending, make_child, style)
    return resolved


def build_storage(
    json: Mapping[str, Any],
    owner: str,
    make_child: ChildFactory,
    style: KeyCodingStyle = KeyCodingStyle.CAMEL_CASE,
) -> dict[str, StoredValue]:
    storage: dict[str, StoredValue] = {}
    _drain([(json, owner, "", storage)], make_child, style)
    return storage
