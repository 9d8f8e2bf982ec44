"""Pure command-processing building blocks."""

from .matcher import format_multiple_matches, resolve, score
from .tokenizer import tokenize
from .types import (
    Command,
    CommandWithStdin,
    FromArgv,
    FromTerminal,
    MatchResult,
    MultipleMatches,
    NoMatch,
    ReplInput,
    ScriptDirective,
    SingleMatch,
)

__all__ = [
    "Command",
    "CommandWithStdin",
    "FromArgv",
    "FromTerminal",
    "MatchResult",
    "MultipleMatches",
    "NoMatch",
    "ReplInput",
    "ScriptDirective",
    "SingleMatch",
    "format_multiple_matches",
    "resolve",
    "score",
    "tokenize",
]
