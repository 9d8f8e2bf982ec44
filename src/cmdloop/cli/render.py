"""CLI renderer for cmdloop."""

from __future__ import annotations

import sys
import threading
from collections.abc import Callable
from typing import Any

from prompt_toolkit import PromptSession
from prompt_toolkit.patch_stdout import patch_stdout
from rich.console import Console

from cmdloop.commands.registry import NoOutput

HELP_MARKER = "USAGE:"

Formatter = Callable[[str], str]


class Renderer:
    """Terminal input and output using prompt_toolkit and Rich."""

    def __init__(self, console: Console | None = None) -> None:
        self.console: Console = console or Console()
        self._formatters: list[Formatter] = []
        self._prompt_session: PromptSession[str] | None = None
        self._print_lock = threading.Lock()

    def add_formatter(self, formatter: Formatter) -> None:
        """Register an output hook applied to every non-help result."""
        self._formatters.append(formatter)

    @staticmethod
    def render(result: Any) -> str:
        """Turn a command result into printable text."""
        if result is None or isinstance(result, NoOutput):
            return ""
        if isinstance(result, str):
            return result
        if isinstance(result, (list, tuple)):
            return "\n".join(str(item) for item in result)
        return str(result)

    @staticmethod
    def is_help_shaped(text: str) -> bool:
        return HELP_MARKER in text

    def print_result(self, result: Any) -> None:
        text = self.render(result)
        if not text:
            return
        if self.is_help_shaped(text):
            self._print(text)
            return
        for formatter in self._formatters:
            text = formatter(text)
        lines = [line for line in text.splitlines() if line.strip()]
        if lines:
            self._print("\n".join(lines))

    def echo(self, text: str) -> None:
        """Print text verbatim, without filtering or formatting."""
        self._print(text)

    def info(self, message: str) -> None:
        if message:
            self._print(message, style="bold blue")

    def error(self, message: str) -> None:
        self._print(message, style="red")

    def get_user_input(self, prompt: str) -> str:
        """Read one line from the terminal; raises EOFError at end-of-input."""
        if not sys.stdin.isatty():
            self.console.file.write(prompt)
            self.console.file.flush()
            line = sys.stdin.readline()
            if not line:
                raise EOFError
            return line.rstrip("\n")
        if self._prompt_session is None:
            self._prompt_session = PromptSession()
        with patch_stdout(raw=True):
            return self._prompt_session.prompt(prompt)

    def prompt(self, text: str = "") -> str | None:
        try:
            return self.get_user_input(text)
        except EOFError:
            return None

    def _print(self, message: str, *, style: str | None = None) -> None:
        with self._print_lock:
            self.console.print(message, style=style, markup=False, highlight=False, soft_wrap=True)
