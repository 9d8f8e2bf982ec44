"""Interactive read-eval-print session."""

from __future__ import annotations

from collections.abc import Iterable
from dataclasses import dataclass
from typing import Any

from loguru import logger

from cmdloop.cli.render import Renderer
from cmdloop.commands.registry import CommandContext, CommandRegistry
from cmdloop.config import Settings, get_settings
from cmdloop.core.matcher import format_multiple_matches, resolve
from cmdloop.core.tokenizer import tokenize
from cmdloop.core.types import (
    Command,
    CommandWithStdin,
    FromArgv,
    FromTerminal,
    MultipleMatches,
    NoMatch,
    ReplInput,
    ScriptDirective,
)
from cmdloop.errors import CommandNotFoundError, VirtualInputError, format_error
from cmdloop.runtime.history import History, should_record
from cmdloop.runtime.virtual_input import active_input, virtual_input

QUIT_COMMANDS = frozenset({"quit", "q!"})
HELP_COMMANDS = frozenset({"help", "?"})
REPL_COMMAND = "repl"
LIST_COMMAND = "tab"
COMMANDS_PER_ROW = 4


@dataclass(frozen=True)
class EvalOutcome:
    """Result of evaluating one input."""

    output: Any = None
    error: str | None = None
    quit: bool = False


class Session:
    """Tokenize, resolve and dispatch input against a command registry."""

    def __init__(
        self,
        registry: CommandRegistry,
        *,
        renderer: Renderer | None = None,
        history: History | None = None,
        settings: Settings | None = None,
    ) -> None:
        self.registry = registry
        self.settings = settings or get_settings()
        self.renderer = renderer or Renderer()
        self.history = history or History(self.settings.history_size)
        self.last_input: str | None = None
        self.repl_mode = False

    def run(self) -> None:
        """Loop until quit or end-of-input."""
        self.repl_mode = True
        self.renderer.info(self.settings.intro)
        try:
            while True:
                line = self.read()
                if line is None:
                    break
                try:
                    outcome = self.evaluate(FromTerminal(line))
                except Exception as exc:
                    logger.exception("session.loop.error")
                    outcome = EvalOutcome(error=format_error(None, exc))
                try:
                    self.print(outcome)
                except Exception as exc:
                    logger.exception("session.print.error")
                    self.renderer.error(format_error(None, exc))
                if outcome.quit:
                    break
        finally:
            self.repl_mode = False
        self.renderer.info("Goodbye!")

    def prompt_text(self) -> str:
        return f"\n{self.settings.prompt_symbol} {self.history.length()} > "

    def read(self) -> str | None:
        """Read one line, or None once input is exhausted."""
        source = active_input()
        if source is not None:
            line = source.prompt(self.prompt_text())
        else:
            try:
                line = self.renderer.get_user_input(self.prompt_text())
            except (KeyboardInterrupt, EOFError):
                line = None
        return line

    def evaluate(self, source: ReplInput) -> EvalOutcome:
        if isinstance(source, FromArgv):
            return self._evaluate_argv(source.argv)
        return self._evaluate_line(source.line)

    def eval_for_redo(self, line: str) -> EvalOutcome:
        """Evaluate a stored line exactly as if it had been typed."""
        return self.evaluate(FromTerminal(line))

    def execute_directive(self, directive: ScriptDirective) -> EvalOutcome:
        """Run one script directive, with scripted stdin for heredoc commands."""
        if isinstance(directive, CommandWithStdin):
            try:
                with virtual_input(directive.lines, sink=self.renderer.console.file):
                    return self.eval_for_redo(directive.text)
            except VirtualInputError as exc:
                return self._failure(directive.text, exc)
        if isinstance(directive, Command):
            return self.eval_for_redo(directive.text)
        raise TypeError(f"unsupported directive: {directive!r}")

    def print(self, outcome: EvalOutcome) -> None:
        if outcome.error is not None:
            self.renderer.error(outcome.error)
            return
        self.renderer.print_result(outcome.output)

    def help_text(self) -> str:
        rows = [(descriptor.name, descriptor.about) for descriptor in self.registry.descriptors()]
        rows.extend([("help", "Show this help."), ("quit", "Leave the session.")])
        width = max(len(name) for name, _ in rows)
        lines = [
            "USAGE:",
            f"    {self.settings.prompt_symbol} <command> [args...]",
            "",
            "COMMANDS:",
        ]
        lines.extend(f"    {name.ljust(width)}  {about}".rstrip() for name, about in rows)
        return "\n".join(lines)

    def _evaluate_line(self, line: str) -> EvalOutcome:
        stripped = line.strip()
        if not stripped:
            return EvalOutcome()
        self.last_input = stripped
        if stripped in QUIT_COMMANDS:
            return EvalOutcome(quit=True)
        if stripped in HELP_COMMANDS:
            return EvalOutcome(output=self.help_text())
        if stripped == REPL_COMMAND:
            return EvalOutcome(output="The repl is already running.")
        if stripped == LIST_COMMAND:
            return EvalOutcome(output=self._command_listing())

        namespace = self._namespace_commands(stripped)
        if namespace:
            return EvalOutcome(output=self._namespace_listing(stripped, namespace))

        if should_record(stripped):
            self.history.append(stripped)
        return self._dispatch(tokenize(stripped))

    def _evaluate_argv(self, argv: list[str]) -> EvalOutcome:
        if not argv:
            return EvalOutcome(output=self.help_text())
        if should_record(" ".join(argv)):
            self.history.append(" ".join(argv))
        return self._dispatch(list(argv))

    def _dispatch(self, tokens: list[str]) -> EvalOutcome:
        requested, args = tokens[0], tokens[1:]
        descriptor = self.registry.get(requested)
        if descriptor is None:
            match = resolve(requested, self.registry.all_names())
            if isinstance(match, MultipleMatches):
                return EvalOutcome(output=format_multiple_matches(match.names))
            if isinstance(match, NoMatch):
                return self._failure(requested, CommandNotFoundError(requested))
            logger.info("command.resolved input={} name={}", requested, match.name)
            descriptor = self.registry.get(match.name)
            if descriptor is None:
                return self._failure(requested, CommandNotFoundError(requested))

        context = CommandContext(name=descriptor.name, tokens=args, session=self)
        try:
            result = self.registry.execute(descriptor.name, context)
        except Exception as exc:
            return self._failure(descriptor.name, exc)
        return EvalOutcome(output=result)

    def _failure(self, name: str, exc: Exception) -> EvalOutcome:
        reason = str(exc) or type(exc).__name__
        if self.settings.debug:
            reason = f"{reason} ({type(exc).__name__})"
        return EvalOutcome(error=format_error(name, reason))

    def _namespace_commands(self, text: str) -> list[str]:
        if "." in text or " " in text or self.registry.has(text):
            return []
        prefix = f"{text}."
        return sorted(name for name in self.registry.all_names() if name.startswith(prefix))

    @staticmethod
    def _namespace_listing(namespace: str, commands: Iterable[str]) -> str:
        return "\n".join([
            f"{namespace} is a command namespace. Available commands:",
            ", ".join(commands),
            f"Try '{namespace}.<command>' to run a specific command in this namespace.",
        ])

    def _command_listing(self) -> str:
        names = sorted(self.registry.all_names())
        rows = [names[index : index + COMMANDS_PER_ROW] for index in range(0, len(names), COMMANDS_PER_ROW)]
        return "\n".join(["Available commands:", *("  " + "  ".join(row) for row in rows)])
