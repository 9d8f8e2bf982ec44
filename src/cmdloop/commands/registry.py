"""Command registry and invocation context."""

from __future__ import annotations

import builtins
import time
from collections.abc import Callable
from dataclasses import dataclass
from typing import TYPE_CHECKING, Any

from loguru import logger

from cmdloop.config import Settings
from cmdloop.core.commands import ParsedArgs, parse_kv_arguments
from cmdloop.runtime.virtual_input import LineSource, active_input

if TYPE_CHECKING:
    from cmdloop.runtime.session import Session


class NoOutput:
    """Marker returned by commands that already printed everything they had to say."""

    def __repr__(self) -> str:
        return "NO_OUTPUT"


NO_OUTPUT = NoOutput()

Handler = Callable[["CommandContext"], Any]


@dataclass
class CommandContext:
    """Everything a handler needs for one invocation."""

    name: str
    tokens: list[str]
    session: Session

    @property
    def args(self) -> ParsedArgs:
        return parse_kv_arguments(self.tokens)

    @property
    def settings(self) -> Settings:
        return self.session.settings

    @property
    def stdin(self) -> LineSource:
        """Scripted input while a heredoc command runs, the terminal otherwise."""
        source = active_input()
        if source is not None:
            return source
        return self.session.renderer

    def prompt(self, text: str = "") -> str | None:
        return self.stdin.prompt(text)

    def echo(self, text: str) -> None:
        self.session.renderer.echo(text)


@dataclass(frozen=True)
class CommandDescriptor:
    """Command metadata and handler."""

    name: str
    about: str
    handler: Handler
    usage: str = ""
    hidden: bool = False


class CommandRegistry:
    """Maps unique command names to handlers."""

    def __init__(self) -> None:
        self._commands: dict[str, CommandDescriptor] = {}

    def register(
        self,
        *,
        name: str,
        about: str = "",
        usage: str = "",
        hidden: bool = False,
    ) -> Callable[[Handler], Handler]:
        def decorator(handler: Handler) -> Handler:
            self.add(CommandDescriptor(name=name, about=about, handler=handler, usage=usage, hidden=hidden))
            return handler

        return decorator

    def add(self, descriptor: CommandDescriptor) -> None:
        if descriptor.name in self._commands:
            raise ValueError(f"Duplicate command name: {descriptor.name}")
        self._commands[descriptor.name] = descriptor

    def has(self, name: str) -> bool:
        return name in self._commands

    def get(self, name: str) -> CommandDescriptor | None:
        return self._commands.get(name)

    def lookup(self, name: str) -> Handler | None:
        descriptor = self.get(name)
        return descriptor.handler if descriptor is not None else None

    def all_names(self) -> set[str]:
        return {name for name, descriptor in self._commands.items() if not descriptor.hidden}

    def descriptors(self, *, include_hidden: bool = False) -> builtins.list[CommandDescriptor]:
        items = [item for item in self._commands.values() if include_hidden or not item.hidden]
        return sorted(items, key=lambda item: item.name)

    def execute(self, name: str, context: CommandContext) -> Any:
        descriptor = self.get(name)
        if descriptor is None:
            raise KeyError(name)

        logger.info("command.start name={} args={}", name, len(context.tokens))
        start = time.monotonic()
        try:
            return descriptor.handler(context)
        except Exception:
            logger.opt(exception=True).debug("command.error name={}", name)
            raise
        finally:
            duration = time.monotonic() - start
            logger.info("command.end name={} duration={:.3f}ms", name, duration * 1000)
