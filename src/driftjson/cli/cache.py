"""Commands for the SQL-backed model cache."""

from __future__ import annotations

from typing import Annotated

import typer
from rich.console import Console
from rich.table import Table

from driftjson.cache.manager import CacheManager, cache_key, timestamp_key
from driftjson.core.ports.store import KeyValueStore
from driftjson.models import Configuration

cache_app = typer.Typer(help="Inspect and clear cached models.")
console = Console()


def _get_store() -> KeyValueStore:
    from driftjson.db.engine import get_engine
    from driftjson.db.sql import SqlStore

    return SqlStore(get_engine())


def _manager(store: KeyValueStore) -> CacheManager:
    return CacheManager(Configuration(), store)


@cache_app.command("list")
def list_entries() -> None:
    """List cached model names."""
    store = _get_store()
    try:
        names = _manager(store).entries()
        table = Table(show_lines=False)
        table.add_column("model")
        table.add_column("written at")
        for name in names:
            written = store.get(timestamp_key(name))
            table.add_row(name, str(written) if written is not None else "-")
        console.print(table)
        console.print(f"({len(names)} rows)")
    finally:
        store.dispose()


@cache_app.command("show")
def show(
    name: Annotated[str, typer.Argument(help="Model name.")],
) -> None:
    """Print the cached values of one model."""
    store = _get_store()
    try:
        stored = store.get(cache_key(name))
        if not isinstance(stored, dict):
            console.print(f"No cache entry for [yellow]{name}[/yellow].")
            raise typer.Exit(1)
        table = Table(title=name, show_lines=False)
        table.add_column("key")
        table.add_column("value")
        for key in sorted(stored):
            table.add_row(key, repr(stored[key]))
        console.print(table)
    finally:
        store.dispose()


@cache_app.command("clear")
def clear(
    name: Annotated[str | None, typer.Argument(help="Model name. Clears every entry when omitted.")] = None,
) -> None:
    """Remove one cached model, or all of them."""
    store = _get_store()
    try:
        manager = _manager(store)
        if name is None:
            manager.clear_all()
            console.print("[green]Cleared all cache entries.[/green]")
        else:
            manager.clear(name)
            console.print(f"[green]Cleared cache entry for {name}.[/green]")
    finally:
        store.dispose()
