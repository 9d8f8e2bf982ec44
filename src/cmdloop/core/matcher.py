"""Fuzzy command name resolution.

Partial or misspelled command names are scored against every known command:

- suffix match: ``engage`` -> ``ll.agent.engage``
- partial namespace: ``agent.create`` -> ``ll.agent.create``
- abbreviation: ``llm.conf`` -> ``ll.llm.config``
- typo correction through a capped edit distance
"""

from __future__ import annotations

from collections.abc import Iterable

from loguru import logger
from rapidfuzz.distance import Levenshtein

from cmdloop.core.types import MatchResult, MultipleMatches, NoMatch, SingleMatch

SEGMENT_SEPARATOR = "."
RELATIVE_THRESHOLD = 0.8
MAX_EDIT_DISTANCE = 3
MAX_EDIT_SCORE = 0.5

SCORE_EXACT = 1.0
SCORE_SUFFIX = 0.95
SCORE_SEGMENT = 0.9
SCORE_NAMESPACE = 0.85
SCORE_PREFIX = 0.8
SCORE_SUBSTRING = 0.7
SCORE_ABBREVIATION = 0.6


def resolve(text: str, commands: Iterable[str]) -> MatchResult:
    """Resolve user input against the known command names."""

    candidate = text.strip()
    if not candidate:
        return NoMatch()

    known = list(commands)
    if candidate in known:
        return SingleMatch(candidate)

    matches = find_matches(candidate, known)
    if not matches:
        logger.debug("command.resolve input={} result=none", candidate)
        return NoMatch()
    if len(matches) == 1:
        logger.debug("command.resolve input={} result={}", candidate, matches[0])
        return SingleMatch(matches[0])
    logger.debug("command.resolve input={} candidates={}", candidate, len(matches))
    return MultipleMatches(sorted(matches))


def find_matches(text: str, commands: Iterable[str]) -> list[str]:
    """Return the commands scoring within the relative threshold of the best score."""

    scored = [(command, score(text, command)) for command in commands]
    scored = [(command, value) for command, value in scored if value > 0]
    if not scored:
        return []

    best = max(value for _, value in scored)
    threshold = best * RELATIVE_THRESHOLD
    return [command for command, value in scored if value >= threshold]


def score(text: str, command: str) -> float:
    """Score how well a command matches the input, from 0.0 to 1.0."""

    text = text.lower()
    command = command.lower()

    if command == text:
        return SCORE_EXACT
    if command.endswith(SEGMENT_SEPARATOR + text):
        return SCORE_SUFFIX
    if f"{SEGMENT_SEPARATOR}{text}{SEGMENT_SEPARATOR}" in command:
        return SCORE_SEGMENT
    if partial_namespace_match(text, command):
        return SCORE_NAMESPACE
    if command.startswith(text):
        return SCORE_PREFIX
    if text in command:
        return SCORE_SUBSTRING
    if abbreviation_match(text, command):
        return SCORE_ABBREVIATION
    return edit_distance_score(text, command)


def partial_namespace_match(text: str, command: str) -> bool:
    """Check whether the input segments are a trailing run of the command segments."""

    text_parts = text.split(SEGMENT_SEPARATOR)
    command_parts = command.split(SEGMENT_SEPARATOR)
    if len(text_parts) >= len(command_parts):
        return False
    return command_parts[len(command_parts) - len(text_parts) :] == text_parts


def abbreviation_match(text: str, command: str) -> bool:
    """Check whether each input segment prefixes an aligned run of command segments."""

    text_parts = text.split(SEGMENT_SEPARATOR)
    command_parts = command.split(SEGMENT_SEPARATOR)
    if len(text_parts) > len(command_parts):
        return False

    width = len(text_parts)
    for start in range(len(command_parts) - width + 1):
        window = command_parts[start : start + width]
        if all(part.startswith(prefix) for prefix, part in zip(text_parts, window)):
            return True
    return False


def edit_distance_score(left: str, right: str) -> float:
    """Similarity score in [0.0, 0.5] for strings at most three edits apart."""

    if not left or not right:
        return 0.0
    distance = Levenshtein.distance(left, right)
    if distance > MAX_EDIT_DISTANCE:
        return 0.0
    similarity = 1.0 - distance / max(len(left), len(right))
    return min(similarity * MAX_EDIT_SCORE, MAX_EDIT_SCORE)


def format_multiple_matches(matches: list[str]) -> str:
    """Render the numbered disambiguation list shown for ambiguous input."""

    rows = "\n".join(f"  {index}. {name}" for index, name in enumerate(matches, start=1))
    return f"? Did you mean:\n{rows}"
