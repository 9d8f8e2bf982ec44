import pytest

from cmdloop.core.tokenizer import tokenize


def test_quoted_segments_and_option_values() -> None:
    assert tokenize('cmd "a b" --opt="c d"') == ["cmd", "a b", "--opt=c d"]


def test_empty_and_blank_input() -> None:
    assert tokenize("") == []
    assert tokenize("   \t ") == []


def test_whitespace_runs_collapse() -> None:
    assert tokenize("  greet   Alice\tBob  ") == ["greet", "Alice", "Bob"]


def test_short_option_with_quoted_value() -> None:
    assert tokenize('run -n="two words"') == ["run", "-n=two words"]


def test_quotes_inside_token_are_kept() -> None:
    assert tokenize('say x"a b"') == ["say", 'x"a b"']


def test_unterminated_quote_swallows_rest_of_line() -> None:
    assert tokenize('say "hello world   and more') == ["say", '"hello world   and more']


@pytest.mark.parametrize(
    "line",
    [
        "sys.info",
        "ll.agent.engage --name=bob   extra",
        "  dev.deps  a.b  c ",
        "cli.script ./scripts/setup.cli",
    ],
)
def test_dotted_fast_path_matches_general_splitting(line: str) -> None:
    assert tokenize(line) == line.split()


def test_dotted_input_with_quotes_uses_quote_handling() -> None:
    assert tokenize('ll.agent.create --desc="a new agent"') == ["ll.agent.create", "--desc=a new agent"]
