"""Inspection helpers for models during development and in tests."""

from __future__ import annotations

from decimal import Decimal
from typing import TYPE_CHECKING, Any

from rich.table import Table

from driftjson.core.instance import ModelInstance
from driftjson.json_types import ABSENT

if TYPE_CHECKING:
    from driftjson.core.registry import Registry


def type_label(raw: Any) -> str:
    if raw is ABSENT:
        return "nil"
    if raw is None:
        return "null"
    if isinstance(raw, bool):
        return "Bool"
    if isinstance(raw, int):
        return "Int"
    if isinstance(raw, (float, Decimal)):
        return "Float"
    if isinstance(raw, str):
        return "String"
    if isinstance(raw, ModelInstance):
        return "NestedModel"
    if isinstance(raw, list):
        return "Array"
    return type(raw).__name__


def snapshot(model: ModelInstance) -> dict[str, str]:
    """Key -> string-coerced value, handy for assertions."""
    return {key: model.get(key).string for key in model.all_keys()}


def render_model(model: ModelInstance) -> Table:
    table = Table(title=f"driftjson: {model.name}", show_lines=False)
    table.add_column("key")
    table.add_column("value")
    table.add_column("type")
    storage = model.storage_snapshot()
    if not storage:
        table.add_row("(empty)", "", "")
        return table
    for key in sorted(storage):
        raw = storage[key]
        table.add_row(key, model.get(key).string, type_label(raw))
    return table


def render_registry(registry: Registry) -> list[Table]:
    return [render_model(registry.instance_for(name)) for name in sorted(registry.names())]
