"""cmdloop - interactive command shell with fuzzy dispatch and scripted input."""

__version__ = "0.1.0"

from .commands import NO_OUTPUT, CommandContext, CommandRegistry  # noqa: E402
from .core import resolve, tokenize  # noqa: E402
from .runtime.session import EvalOutcome, Session  # noqa: E402
from .script import parse_script  # noqa: E402

__all__ = [
    "NO_OUTPUT",
    "CommandContext",
    "CommandRegistry",
    "EvalOutcome",
    "Session",
    "parse_script",
    "resolve",
    "tokenize",
]
