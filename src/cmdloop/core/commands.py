"""Command argument helpers."""

from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True)
class ParsedArgs:
    """Arguments split into options and positionals."""

    kwargs: dict[str, object]
    positional: list[str]


def parse_kv_arguments(tokens: list[str]) -> ParsedArgs:
    """Split argument tokens into ``--key=value``/``--flag`` options and positionals."""

    kwargs: dict[str, object] = {}
    positional: list[str] = []
    idx = 0
    while idx < len(tokens):
        token = tokens[idx]

        if token.startswith("--") and len(token) > 2:
            key = token[2:]
            if "=" in key:
                name, value = key.split("=", 1)
                kwargs[name] = value
                idx += 1
                continue

            if idx + 1 < len(tokens) and not tokens[idx + 1].startswith("-"):
                kwargs[key] = tokens[idx + 1]
                idx += 2
                continue

            kwargs[key] = True
            idx += 1
            continue

        positional.append(token)
        idx += 1

    return ParsedArgs(kwargs=kwargs, positional=positional)
