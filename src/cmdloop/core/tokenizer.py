"""Command line tokenizer."""

from __future__ import annotations

import re

QUOTE = '"'
OPTION_VALUE_RE = re.compile(r'^(-{1,2}[^=]+)=(".+")$')


def tokenize(line: str) -> list[str]:
    """Split one input line into argument tokens, keeping quoted segments intact.

    Whitespace inside double quotes is preserved. ``--name="a b"`` collapses to
    ``--name=a b`` and tokens fully wrapped in quotes lose the wrapping quotes.
    An unterminated quote swallows the rest of the line into the open token.
    """

    trimmed = line.strip()
    if not trimmed:
        return []
    return [_unquote(token) for token in _split(trimmed)]


def _split(text: str) -> list[str]:
    # Dotted command names without quotes need no quote tracking.
    if "." in text and QUOTE not in text:
        return text.split()

    tokens: list[str] = []
    current: list[str] = []
    in_quotes = False
    for char in text:
        if char == QUOTE:
            in_quotes = not in_quotes
            current.append(char)
        elif char.isspace() and not in_quotes:
            if current:
                tokens.append("".join(current))
                current = []
        else:
            current.append(char)
    if current:
        tokens.append("".join(current))
    return tokens


def _unquote(token: str) -> str:
    option = OPTION_VALUE_RE.match(token)
    if option is not None:
        name, value = option.groups()
        return f"{name}={value.strip(QUOTE)}"
    if token.startswith(QUOTE) and token.endswith(QUOTE):
        return token.strip(QUOTE)
    return token
