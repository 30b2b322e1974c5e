import asyncio
from typing import Annotated

import typer
from rich.console import Console

from driftjson.core.debug import render_model
from driftjson.core.registry import Registry
from driftjson.models import CachePolicy, Configuration, LogLevel
from driftjson.transport.http import HTTPMethod, ModelRequest, RequestFailure

console = Console()


def _parse_headers(values: list[str]) -> dict[str, str]:
    headers: dict[str, str] = {}
    for item in values:
        key, sep, value = item.partition(":")
        if not sep or not key.strip():
            raise typer.BadParameter(f"expected 'Name: value', got {item!r}", param_hint="--header")
        headers[key.strip()] = value.strip()
    return headers


def _get_request(configuration: Configuration) -> ModelRequest:
    return ModelRequest(configuration)


def fetch(
    ctx: typer.Context,
    url: Annotated[str, typer.Argument(help="URL returning a JSON object or array.")],
    name: Annotated[str, typer.Option(help="Model name to map into.")] = "responseModel",
    method: Annotated[HTTPMethod, typer.Option(help="HTTP method.")] = HTTPMethod.GET,
    header: Annotated[list[str] | None, typer.Option(help="Extra header as 'Name: value'. Repeatable.")] = None,
    timeout: Annotated[float, typer.Option(help="Request timeout in seconds.")] = 30.0,
) -> None:
    """Request a URL and print the mapped model."""
    headers = _parse_headers(header or [])
    configuration = Configuration(
        cache_policy=CachePolicy.in_memory_only(),
        request_timeout=timeout,
        log_level=ctx.obj or LogLevel.WARNING,
    )
    request = _get_request(configuration)

    with Registry(configuration) as registry:
        model = registry.instance_for(name)
        result = asyncio.run(request.execute(method, url, headers=headers, model=model))
        if isinstance(result, RequestFailure):
            console.print(f"[red]{result.error}[/red]")
            raise typer.Exit(1)
        console.print(render_model(model))
