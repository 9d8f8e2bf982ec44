"""Script execution."""

from __future__ import annotations

from pathlib import Path
from typing import TYPE_CHECKING

from loguru import logger

from cmdloop.errors import ScriptFileError
from cmdloop.script.parser import echo_lines, parse_script

if TYPE_CHECKING:
    from cmdloop.runtime.session import Session


def read_script(path: str | Path) -> str:
    """Read a script file as UTF-8 text.

    Raises:
        ScriptFileError: the file is missing, unreadable or not UTF-8.
    """

    try:
        return Path(path).read_text(encoding="utf-8")
    except (OSError, UnicodeDecodeError) as exc:
        raise ScriptFileError(str(path), exc) from exc


def run_script(session: Session, path: str | Path) -> None:
    """Parse the whole script, then replay each directive through the session.

    Raises:
        ScriptFileError: the script could not be read.
        UnclosedHeredocError: the script is malformed; nothing was executed.
    """

    directives = parse_script(read_script(path))
    logger.info("script.start path={} directives={}", path, len(directives))

    prefix = session.settings.script_echo_prefix
    for directive in directives:
        session.renderer.echo("")
        for line in echo_lines(directive, prefix):
            session.renderer.echo(line)
        session.print(session.execute_directive(directive))

    logger.info("script.finish path={}", path)
