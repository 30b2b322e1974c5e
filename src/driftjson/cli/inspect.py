import json
from pathlib import Path
from typing import Annotated

import typer
from rich.console import Console

from driftjson.core.debug import render_model, type_label
from driftjson.core.registry import Registry
from driftjson.core.value import NavigableValue
from driftjson.models import CachePolicy, Configuration, KeyCodingStyle, LogLevel

console = Console()


def navigate(value: NavigableValue, dotted_path: str) -> NavigableValue:
    """Follow ``a.b[0].c`` style paths from ``value``."""
    current = value
    for part in dotted_path.split("."):
        name, _, rest = part.partition("[")
        if name:
            current = current.member(name)
        while rest:
            index_text, _, rest = rest.partition("]")
            try:
                current = current.index(int(index_text))
            except ValueError:
                current = current.member(index_text)
            rest = rest.lstrip("[")
    return current


def inspect(
    ctx: typer.Context,
    path: Annotated[Path, typer.Argument(help="JSON file to map.", exists=True, dir_okay=False)],
    name: Annotated[str, typer.Option(help="Model name to map into.")] = "inspectModel",
    key_style: Annotated[KeyCodingStyle, typer.Option(help="Key coding style.")] = KeyCodingStyle.CAMEL_CASE,
    at: Annotated[
        str | None, typer.Option("--path", help="Dotted path to one value, e.g. data.items[0].name")
    ] = None,
) -> None:
    """Map a JSON file into a model and print what it holds."""
    try:
        payload = json.loads(path.read_text(encoding="utf-8"))
    except (json.JSONDecodeError, UnicodeDecodeError) as exc:
        console.print(f"[red]Could not parse {path}:[/red] {exc}")
        raise typer.Exit(1) from exc

    configuration = Configuration(
        cache_policy=CachePolicy.in_memory_only(), key_coding_style=key_style, log_level=ctx.obj or LogLevel.WARNING
    )
    with Registry(configuration) as registry:
        model = registry.instance_for(name)
        model.map(payload)

        if at is None:
            console.print(render_model(model))
            return

        value = navigate(NavigableValue(model, key=name), at)
        if not value.exists:
            console.print(f"[yellow]{value.path}[/yellow]: absent")
            raise typer.Exit(1)
        if value.is_model:
            console.print(render_model(value.as_model()))
            return
        console.print(f"{value.path}: {value.string} ({type_label(value.raw_value)})")
