"""
Module that contains the command line app.

Seeds, clears and checks collections of the configured store from the shell,
with the same directives and fixture files the test suite uses::

    mongofix load users fixtures/users_init.json --clear
    mongofix check users fixtures/users_check.json --ignore _id --ignore lastname
"""

import logging
import os
from contextlib import contextmanager
from typing import List, Optional

import typer
from rich import print
from typing_extensions import Annotated

from mongofix.adapters.gateway import build_gateway
from mongofix.config import Config
from mongofix.directives import Check, Clear, Init, coerce_ignored_fields
from mongofix.exceptions import CollectionMismatch, MongofixException
from mongofix.fixtures import FixtureLoader
from mongofix.orchestrator import FixtureOrchestrator
from mongofix.utils.logging import configure_logging

logger = logging.getLogger(__name__)

# Create the Typer app
#   `no_args_is_help=True` will show the help message when no arguments are passed
app = typer.Typer(no_args_is_help=True)

ConfigOption = Annotated[
    str, typer.Option(help="Directory or file where configuration lookup starts")
]


def version_callback(value: bool):
    if value:
        from mongofix.utils import get_version

        typer.echo(f"mongofix {get_version()}")
        raise typer.Exit()


@app.callback()
def main(
    ctx: typer.Context,
    version: Annotated[
        bool, typer.Option(help="Show version information", callback=version_callback)
    ] = False,
    log_level: Annotated[Optional[str], typer.Option(help="Logging level")] = None,
):
    """
    mongofix CLI
    """
    ctx.obj = {"log_level": log_level}
    configure_logging(log_level)


@contextmanager
def _session(ctx: typer.Context, config: str):
    """Yield settings, an orchestrator and a fixture loader for one command

    A `--log-level` given on the command line wins over `log_level` in the
    configuration file.
    """
    try:
        settings = Config.load(config)
        if settings["log_level"] and not (ctx.obj or {}).get("log_level"):
            configure_logging(settings["log_level"])
        gateway = build_gateway(settings["gateway"])
    except MongofixException as exc:
        msg = f"Error loading mongofix configuration: {exc.args[0]}"
        print(msg)  # Required for tests to capture output
        logger.error(msg)
        raise typer.Abort()

    base_dir = config if os.path.isdir(config) else os.path.dirname(config) or "."
    loader = FixtureLoader(
        [os.getcwd(), os.path.join(base_dir, settings["fixtures_dir"])]
    )

    try:
        yield settings, FixtureOrchestrator(gateway), loader
    except CollectionMismatch as exc:
        print(f"[red]Check failed:[/red] {exc}")
        raise typer.Exit(code=1)
    except MongofixException as exc:
        msg = f"Error: {exc.args[0]}"
        print(msg)
        logger.error(msg)
        raise typer.Abort()
    finally:
        gateway.close()


def _noop():
    pass


@app.command()
def clear(
    ctx: typer.Context,
    collection: Annotated[str, typer.Argument(help="Collection to clear")],
    config: ConfigOption = ".",
):
    """Remove every document from a collection"""
    with _session(ctx, config) as (_, orchestrator, _loader):
        orchestrator.run([Clear(collection)], _noop)

    print(f"[green]Collection '{collection}' cleared[/green]")


@app.command()
def load(
    ctx: typer.Context,
    collection: Annotated[str, typer.Argument(help="Collection to seed")],
    file: Annotated[str, typer.Argument(help="JSON fixture file")],
    clear_first: Annotated[
        bool, typer.Option("--clear", help="Clear the collection before seeding")
    ] = False,
    config: ConfigOption = ".",
):
    """Seed a collection with the documents of a fixture file"""
    with _session(ctx, config) as (_, orchestrator, loader):
        fixture = loader.load(file)

        directives = [Init(collection, fixture)]
        if clear_first:
            directives.append(Clear(collection))

        orchestrator.run(directives, _noop)

    print(f"[green]{len(fixture)} documents loaded into '{collection}'[/green]")


@app.command()
def check(
    ctx: typer.Context,
    collection: Annotated[str, typer.Argument(help="Collection to verify")],
    file: Annotated[str, typer.Argument(help="JSON fixture file")],
    ignore: Annotated[
        Optional[List[str]],
        typer.Option(help="Field to leave out of the comparison (repeatable)"),
    ] = None,
    config: ConfigOption = ".",
):
    """Compare a collection with the documents of a fixture file"""
    with _session(ctx, config) as (settings, orchestrator, loader):
        ignored_fields = coerce_ignored_fields(ignore or settings["ignored_fields"])
        orchestrator.run(
            [Check(collection, loader.load(file), ignored_fields)], _noop
        )

    print(f"[green]Collection '{collection}' matches '{file}'[/green]")
