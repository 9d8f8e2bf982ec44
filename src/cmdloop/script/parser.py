"""Script file parsing.

A script is UTF-8 text with one command per line. Blank lines and lines
starting with ``#`` are skipped. A line ``COMMAND <<MARKER`` opens a heredoc:
the following lines are collected verbatim until a line containing only
``MARKER`` and are fed to the command as standard input.
"""

from __future__ import annotations

import re
from dataclasses import dataclass, field

from cmdloop.core.types import Command, CommandWithStdin, ScriptDirective
from cmdloop.errors import UnclosedHeredocError

COMMENT_PREFIX = "#"
LINE_SPLIT_RE = re.compile(r"\r?\n")
HEREDOC_RE = re.compile(r"^(?P<command>.+?)\s+<<\s*(?P<marker>\w+)$")


@dataclass
class _OpenHeredoc:
    command: str
    marker: str
    start_line: int
    lines: list[str] = field(default_factory=list)


def parse_script(text: str) -> list[ScriptDirective]:
    """Parse script text into ordered directives.

    Raises:
        UnclosedHeredocError: the text ended inside a heredoc. Nothing is
            returned in that case so a malformed script never runs partially.
    """

    directives: list[ScriptDirective] = []
    heredoc: _OpenHeredoc | None = None

    for number, line in enumerate(LINE_SPLIT_RE.split(text), start=1):
        if heredoc is not None:
            if line.strip() == heredoc.marker:
                directives.append(CommandWithStdin(heredoc.command, heredoc.marker, heredoc.lines))
                heredoc = None
            else:
                heredoc.lines.append(line)
            continue

        stripped = line.strip()
        if not stripped or stripped.startswith(COMMENT_PREFIX):
            continue

        opener = HEREDOC_RE.match(stripped)
        if opener is not None:
            heredoc = _OpenHeredoc(
                command=opener.group("command").strip(),
                marker=opener.group("marker"),
                start_line=number,
            )
            continue

        directives.append(Command(stripped))

    if heredoc is not None:
        raise UnclosedHeredocError(heredoc.marker, heredoc.start_line)
    return directives


def echo_lines(directive: ScriptDirective, prefix: str = "script> ") -> list[str]:
    """Lines echoed before a directive runs, mirroring how it was written."""

    if isinstance(directive, CommandWithStdin):
        return [f"{prefix}{directive.text} <<{directive.marker}", *directive.lines, directive.marker]
    return [f"{prefix}{directive.text}"]
