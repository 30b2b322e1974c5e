import logging
from typing import Annotated

import typer
from rich.logging import RichHandler

from driftjson.cli.cache import cache_app
from driftjson.cli.fetch import fetch
from driftjson.cli.inspect import inspect
from driftjson.models import LogLevel

app = typer.Typer(
    name="driftjson",
    help="driftjson CLI: map JSON into dynamic models and inspect the cache.",
    no_args_is_help=True,
    context_settings={"help_option_names": ["-h", "--help"]},
)


@app.callback()
def _configure(
    ctx: typer.Context,
    verbose: Annotated[bool, typer.Option("--verbose", "-v", help="Show debug logs.")] = False,
) -> None:
    ctx.obj = LogLevel.DEBUG if verbose else LogLevel.WARNING
    if verbose:
        logging.basicConfig(level=logging.DEBUG, format="%(message)s", handlers=[RichHandler(show_path=False)])


app.command("inspect")(inspect)
app.command("fetch")(fetch)
app.add_typer(cache_app, name="cache")


def main() -> None:
    app()
