from __future__ import annotations

import io
from dataclasses import dataclass, field

import pytest
from rich.console import Console

from cmdloop.cli.render import Renderer
from cmdloop.commands.builtin import register_builtin_commands
from cmdloop.commands.registry import CommandContext, CommandRegistry
from cmdloop.config import Settings
from cmdloop.runtime.session import Session


@dataclass
class Harness:
    session: Session
    buffer: io.StringIO
    calls: list[str] = field(default_factory=list)

    @property
    def output(self) -> str:
        return self.buffer.getvalue()


def build_harness(**overrides: object) -> Harness:
    buffer = io.StringIO()
    renderer = Renderer(Console(file=buffer, width=200, color_system=None))
    registry = CommandRegistry()
    register_builtin_commands(registry)
    harness = Harness(
        session=Session(registry, renderer=renderer, settings=Settings(**overrides)),  # type: ignore[arg-type]
        buffer=buffer,
    )

    @registry.register(name="greet", about="Greet someone.")
    def greet(ctx: CommandContext) -> str:
        harness.calls.append("greet")
        name = ctx.prompt("Name: ")
        return f"Hello, {name}!" if name else "Hello, stranger!"

    @registry.register(name="ask", about="Ask for two values with input().")
    def ask(ctx: CommandContext) -> str:
        harness.calls.append("ask")
        answers: list[str] = []
        try:
            answers.append(input("first: "))
            answers.append(input("second: "))
        except EOFError:
            answers.append("<eof>")
        return ",".join(answers)

    @registry.register(name="boom", about="Always fails.")
    def boom(ctx: CommandContext) -> str:
        harness.calls.append("boom")
        raise RuntimeError("bad")

    for name in ("ll.agent.engage", "ll.agent.create", "ll.agent.list"):
        registry.register(name=name, about=f"{name} command")(_recorder(harness, name))

    registry.register(name="secret", about="Hidden command.", hidden=True)(_recorder(harness, "secret"))
    return harness


def _recorder(harness: Harness, name: str):
    def handler(ctx: CommandContext) -> str:
        harness.calls.append(name)
        return f"{name} {' '.join(ctx.tokens)}".strip()

    return handler


@pytest.fixture
def harness() -> Harness:
    return build_harness()


@pytest.fixture
def make_harness():
    return build_harness
