"""Scripted standard input for one command execution.

The actor owns the scripted lines on a worker thread and answers read and
write requests sent through a queue. ``virtual_input`` installs it as the
active line source and as ``sys.stdin`` for exactly one execution, so prompts
issued by deeply nested code are answered from the script without that code
knowing about it.
"""

from __future__ import annotations

import contextlib
import io
import queue
import sys
import threading
from collections.abc import Generator, Sequence
from contextvars import ContextVar
from dataclasses import dataclass, field
from typing import Protocol, TextIO

from loguru import logger

from cmdloop.errors import VirtualInputError


class LineSource(Protocol):
    """Anything a command can prompt for one line of input."""

    def prompt(self, text: str = "") -> str | None:
        """Show ``text`` and return the next line without its newline, or None at end-of-input."""
        ...


@dataclass
class _Request:
    kind: str
    count: int = 0
    data: str = ""
    reply: queue.Queue[str | None] = field(default_factory=lambda: queue.Queue(maxsize=1))


class InputActor:
    """Worker that replays scripted lines in response to IO requests."""

    def __init__(self, lines: Sequence[str], sink: TextIO) -> None:
        self._lines = list(lines)
        self._cursor = 0
        self._pending: str | None = None
        self._sink = sink
        self._requests: queue.Queue[_Request | None] = queue.Queue()
        self._stopped = threading.Event()
        self._worker = threading.Thread(target=self._run, name="cmdloop-virtual-input", daemon=True)

    @property
    def exhausted(self) -> bool:
        return self._cursor >= len(self._lines)

    def start(self) -> None:
        if not self._worker.is_alive():
            self._worker.start()

    def stop(self) -> None:
        if self._stopped.is_set():
            return
        self._stopped.set()
        self._requests.put(None)
        if self._worker.is_alive():
            self._worker.join()

    def get_line(self) -> str | None:
        return self._call(_Request("get_line"))

    def get_chars(self, count: int) -> str | None:
        return self._call(_Request("get_chars", count=count))

    def put_chars(self, data: str) -> None:
        self._call(_Request("put_chars", data=data))

    def _call(self, request: _Request) -> str | None:
        if self._stopped.is_set():
            return None
        self._requests.put(request)
        return request.reply.get()

    def _run(self) -> None:
        while True:
            request = self._requests.get()
            if request is None:
                return
            try:
                reply = self._handle(request)
            except Exception:
                logger.exception("virtual_input.request.error kind={}", request.kind)
                reply = None
            request.reply.put(reply)

    def _handle(self, request: _Request) -> str | None:
        logger.debug("virtual_input.request kind={} cursor={}", request.kind, self._cursor)
        if request.kind == "get_line":
            return self._next_line()
        if request.kind == "get_chars":
            return self._next_chars(request.count)
        if request.kind == "put_chars":
            self._sink.write(request.data)
            self._sink.flush()
            return ""
        logger.debug("virtual_input.request.unsupported kind={}", request.kind)
        return None

    def _current(self) -> str:
        return self._pending if self._pending is not None else self._lines[self._cursor]

    def _advance(self) -> None:
        self._cursor += 1
        self._pending = None

    def _next_line(self) -> str | None:
        if self.exhausted:
            return None
        line = self._current()
        self._advance()
        return line + "\n"

    def _next_chars(self, count: int) -> str | None:
        if self.exhausted:
            return None
        if count <= 0:
            return ""
        current = self._current()
        chunk, remainder = current[:count], current[count:]
        if remainder:
            self._pending = remainder
            return chunk
        self._advance()
        return chunk + "\n"


class VirtualStdin(io.TextIOBase):
    """Text stream facade over an ``InputActor``.

    End-of-input reads as ``""``, which makes ``input()`` raise ``EOFError``
    instead of waiting on a prompt the script never answers.
    """

    def __init__(self, actor: InputActor) -> None:
        super().__init__()
        self._actor = actor

    def readable(self) -> bool:
        return True

    def writable(self) -> bool:
        return True

    def isatty(self) -> bool:
        return False

    def readline(self, size: int | None = -1) -> str:  # type: ignore[override]
        if size is not None and size >= 0:
            return self._actor.get_chars(size) or ""
        return self._actor.get_line() or ""

    def read(self, size: int | None = -1) -> str:
        if size is not None and size >= 0:
            return self._actor.get_chars(size) or ""
        chunks: list[str] = []
        while (line := self._actor.get_line()) is not None:
            chunks.append(line)
        return "".join(chunks)

    def write(self, data: str) -> int:  # type: ignore[override]
        self._actor.put_chars(data)
        return len(data)

    def prompt(self, text: str = "") -> str | None:
        if text:
            self._actor.put_chars(text)
        line = self._actor.get_line()
        if line is None:
            return None
        return line[:-1]


_active_input: ContextVar[LineSource] = ContextVar("active_input")
_install_lock = threading.Lock()


def active_input() -> LineSource | None:
    """Return the installed virtual line source, if any."""

    return _active_input.get(None)


@contextlib.contextmanager
def virtual_input(lines: Sequence[str], sink: TextIO | None = None) -> Generator[VirtualStdin, None, None]:
    """Serve ``lines`` as standard input for the duration of the block.

    Raises:
        VirtualInputError: another virtual input source is already installed.
    """

    if not _install_lock.acquire(blocking=False):
        raise VirtualInputError("virtual input is already installed")

    actor = InputActor(lines, sink if sink is not None else sys.stdout)
    previous_stdin = sys.stdin
    reset_token = None
    try:
        actor.start()
        stream = VirtualStdin(actor)
        reset_token = _active_input.set(stream)
        sys.stdin = stream
        logger.debug("virtual_input.install lines={}", len(lines))
        yield stream
    finally:
        sys.stdin = previous_stdin
        if reset_token is not None:
            _active_input.reset(reset_token)
        actor.stop()
        _install_lock.release()
        logger.debug("virtual_input.uninstall")
