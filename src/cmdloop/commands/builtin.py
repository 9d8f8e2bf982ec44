"""Builtin commands shipped with every session."""

from __future__ import annotations

from cmdloop import __version__
from cmdloop.commands.registry import NO_OUTPUT, CommandContext, CommandRegistry, NoOutput
from cmdloop.core.tokenizer import tokenize
from cmdloop.errors import ScriptFileError
from cmdloop.script.runner import run_script


def register_builtin_commands(registry: CommandRegistry) -> None:
    """Register builtin commands on the given registry."""

    @registry.register(name="about", about="Show information about this shell.")
    def about(ctx: CommandContext) -> str:
        return f"{ctx.settings.intro}\nversion {__version__}"

    @registry.register(name="history", about="Show a history of recent commands.")
    def history(ctx: CommandContext) -> str | NoOutput:
        entries = ctx.session.history.all()
        if not entries:
            return NO_OUTPUT
        width = len(str(entries[-1][0]))
        return "\n".join(f"{index:0{width}d}: {command}" for index, command in entries)

    @registry.register(name="redo", about="Redo a previous command from the history.", usage="redo INDEX")
    def redo(ctx: CommandContext) -> NoOutput:
        positional = ctx.args.positional
        if not positional:
            raise ValueError("missing command index")
        try:
            index = int(positional[0])
        except ValueError:
            raise ValueError(f"invalid command index: {positional[0]}") from None
        command = ctx.session.history.get(index)
        ctx.session.print(ctx.session.eval_for_redo(command))
        return NO_OUTPUT

    @registry.register(name="flush", about="Flush the command history.")
    def flush(ctx: CommandContext) -> str:
        ctx.session.history.flush()
        return "History flushed."

    @registry.register(name="cli.script", about="Run commands from a script file.", usage="cli.script FILE")
    def cli_script(ctx: CommandContext) -> str | NoOutput:
        positional = ctx.args.positional
        if len(positional) != 1:
            raise ValueError("expected exactly one script file path")
        try:
            run_script(ctx.session, positional[0])
        except ScriptFileError as exc:
            return str(exc)
        return NO_OUTPUT

    @registry.register(name="cli.status", about="Show the session status.")
    def cli_status(ctx: CommandContext) -> list[str]:
        session = ctx.session
        return [
            f"history length: {session.history.length()}",
            f"last input: {session.last_input or '-'}",
            f"repl mode: {'on' if session.repl_mode else 'off'}",
        ]

    @registry.register(name="dbg.tokens", about="Show how the last input line was tokenized.")
    def dbg_tokens(ctx: CommandContext) -> str:
        tokens = tokenize(ctx.session.last_input or "")
        return "\n".join(f"{index}: {token!r}" for index, token in enumerate(tokens))

    @registry.register(name="dbg.echo", about="Echo the arguments back.")
    def dbg_echo(ctx: CommandContext) -> str:
        return " ".join(ctx.tokens)
