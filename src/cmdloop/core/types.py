"""Shared core dataclasses."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Union


@dataclass(frozen=True)
class SingleMatch:
    """Input resolved to exactly one command."""

    name: str


@dataclass(frozen=True)
class MultipleMatches:
    """Input resolved to several commands, sorted by name."""

    names: list[str]


@dataclass(frozen=True)
class NoMatch:
    """Input did not resolve to any command."""


MatchResult = Union[SingleMatch, MultipleMatches, NoMatch]


@dataclass(frozen=True)
class Command:
    """Plain script command line."""

    text: str


@dataclass(frozen=True)
class CommandWithStdin:
    """Script command with inline heredoc input."""

    text: str
    marker: str
    lines: list[str] = field(default_factory=list)


ScriptDirective = Union[Command, CommandWithStdin]


@dataclass(frozen=True)
class FromTerminal:
    """One raw line typed at the prompt or replayed from history or a script."""

    line: str


@dataclass(frozen=True)
class FromArgv:
    """Pre-split arguments from the process command line."""

    argv: list[str]


ReplInput = Union[FromTerminal, FromArgv]
