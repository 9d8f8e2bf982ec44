"""Command line entry points."""

from __future__ import annotations

from pathlib import Path

import typer

from cmdloop.commands.builtin import register_builtin_commands
from cmdloop.commands.registry import CommandRegistry
from cmdloop.config import Settings, get_settings
from cmdloop.core.types import FromArgv
from cmdloop.logging_utils import configure_logging
from cmdloop.runtime.session import Session

from .render import Renderer

app = typer.Typer(
    name="cmdloop",
    help="Interactive command shell with fuzzy dispatch and scripted input.",
    add_completion=False,
)


def build_session(registry: CommandRegistry | None = None, settings: Settings | None = None) -> Session:
    """Create a session with the builtin commands plus anything already in ``registry``."""

    settings = settings or get_settings()
    configure_logging(profile="repl", level=settings.log_level)
    registry = registry or CommandRegistry()
    register_builtin_commands(registry)
    return Session(registry, renderer=Renderer(), settings=settings)


@app.callback(invoke_without_command=True)
def main_callback(ctx: typer.Context) -> None:
    if ctx.invoked_subcommand is None:
        repl()


@app.command()
def repl() -> None:
    """Start the interactive shell."""

    build_session().run()


@app.command(context_settings={"allow_extra_args": True, "ignore_unknown_options": True})
def run(args: list[str] = typer.Argument(None, help="Command name followed by its arguments")) -> None:  # noqa: B008
    """Run a single command and exit."""

    session = build_session()
    outcome = session.evaluate(FromArgv(list(args or [])))
    session.print(outcome)
    if outcome.error is not None:
        raise typer.Exit(1)


@app.command()
def script(file: Path = typer.Argument(..., help="Path to script file containing commands")) -> None:  # noqa: B008
    """Run commands from a script file."""

    session = build_session()
    outcome = session.evaluate(FromArgv(["cli.script", str(file)]))
    session.print(outcome)
    if outcome.error is not None:
        raise typer.Exit(1)
