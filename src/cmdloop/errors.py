"""Application-level exception types for cmdloop."""

from __future__ import annotations


class CmdloopError(Exception):
    """Base exception for cmdloop."""


class CommandNotFoundError(CmdloopError):
    """Raised when a command name cannot be resolved to a registered command."""

    def __init__(self, name: str) -> None:
        super().__init__(f"unknown command: {name}")
        self.name = name


class AmbiguousCommandError(CmdloopError):
    """Raised when a partial command name resolves to several commands."""

    def __init__(self, name: str, candidates: list[str]) -> None:
        super().__init__(f"ambiguous command: {name} ({', '.join(candidates)})")
        self.name = name
        self.candidates = candidates


class ScriptError(CmdloopError):
    """Base exception for script loading and parsing errors."""


class UnclosedHeredocError(ScriptError):
    """Raised when a script ends while a heredoc is still open."""

    def __init__(self, marker: str, line: int) -> None:
        super().__init__(f"Unclosed heredoc '<<{marker}' starting at line {line}")
        self.marker = marker
        self.line = line


class ScriptFileError(ScriptError):
    """Raised when a script file cannot be read."""

    def __init__(self, path: str, cause: BaseException) -> None:
        super().__init__(f"Error reading script file: {path}: {cause}")
        self.path = path
        self.cause = cause


class VirtualInputError(CmdloopError):
    """Raised when a virtual input source is installed while another one is active."""


def format_error(command: str | None, reason: object) -> str:
    """Render an error as the single user-facing line printed by the session."""

    text = reason if isinstance(reason, str) else str(reason)
    if command:
        return f"error: {command}: {text}".strip()
    return f"error: {text}".strip()
