import pytest

from cmdloop.commands.registry import NO_OUTPUT
from cmdloop.core.types import FromArgv, FromTerminal


def _feed(monkeypatch: pytest.MonkeyPatch, harness, lines: list[str]) -> None:
    pending = iter(lines)

    def fake_input(prompt: str) -> str:
        try:
            return next(pending)
        except StopIteration:
            raise EOFError from None

    monkeypatch.setattr(harness.session.renderer, "get_user_input", fake_input)


def test_exact_name_dispatches(harness) -> None:
    outcome = harness.session.evaluate(FromTerminal('ll.agent.list --all "two words"'))
    assert outcome.error is None
    assert outcome.output == "ll.agent.list --all two words"


def test_partial_name_resolving_to_one_command_dispatches(harness) -> None:
    outcome = harness.session.evaluate(FromTerminal("engage now"))
    assert outcome.output == "ll.agent.engage now"
    assert harness.calls == ["ll.agent.engage"]


def test_ambiguous_name_lists_candidates_and_runs_nothing(harness) -> None:
    outcome = harness.session.evaluate(FromTerminal("agent"))
    assert outcome.error is None
    assert outcome.output == (
        "? Did you mean:\n  1. ll.agent.create\n  2. ll.agent.engage\n  3. ll.agent.list"
    )
    assert harness.calls == []


def test_unknown_name_reports_not_found(harness) -> None:
    outcome = harness.session.evaluate(FromTerminal("nonexistent"))
    assert outcome.error == "error: nonexistent: unknown command: nonexistent"


def test_hidden_commands_run_by_exact_name_only(harness) -> None:
    assert harness.session.evaluate(FromTerminal("secret")).output == "secret"
    assert harness.session.evaluate(FromTerminal("secrets")).error is not None


def test_failure_is_formatted(harness) -> None:
    outcome = harness.session.evaluate(FromTerminal("boom"))
    assert outcome.error == "error: boom: bad"


def test_debug_mode_adds_exception_type(make_harness) -> None:
    harness = make_harness(debug=True)
    outcome = harness.session.evaluate(FromTerminal("boom"))
    assert outcome.error == "error: boom: bad (RuntimeError)"


def test_session_verbs(harness) -> None:
    session = harness.session
    assert session.evaluate(FromTerminal("quit")).quit is True
    assert session.evaluate(FromTerminal("q!")).quit is True
    assert session.evaluate(FromTerminal("repl")).output == "The repl is already running."
    assert "USAGE:" in session.evaluate(FromTerminal("help")).output
    assert "USAGE:" in session.evaluate(FromTerminal("?")).output
    assert session.evaluate(FromTerminal("   ")).output is None


def test_tab_lists_visible_commands(harness) -> None:
    output = harness.session.evaluate(FromTerminal("tab")).output
    assert output.startswith("Available commands:")
    assert "ll.agent.engage" in output
    assert "secret" not in output


def test_bare_namespace_lists_its_commands(harness) -> None:
    output = harness.session.evaluate(FromTerminal("ll"))
    assert output.output.splitlines()[0] == "ll is a command namespace. Available commands:"
    assert "ll.agent.create, ll.agent.engage, ll.agent.list" in output.output
    assert harness.calls == []


def test_history_skips_meta_commands(harness) -> None:
    session = harness.session
    for line in ["dbg.echo one", "help", "history", "engage", "flush"]:
        session.evaluate(FromTerminal(line))
    assert session.history.all() == []
    for line in ["dbg.echo two", "history", "engage"]:
        session.evaluate(FromTerminal(line))
    assert session.history.all() == [(0, "dbg.echo two"), (1, "engage")]


def test_history_command_lists_entries(harness) -> None:
    session = harness.session
    session.evaluate(FromTerminal("dbg.echo one"))
    session.evaluate(FromTerminal("dbg.echo two"))
    assert session.evaluate(FromTerminal("history")).output == "0: dbg.echo one\n1: dbg.echo two"


def test_redo_replays_history_entry(harness) -> None:
    session = harness.session
    session.evaluate(FromTerminal("ll.agent.list first"))
    outcome = session.evaluate(FromTerminal("redo 0"))
    assert outcome.output is NO_OUTPUT
    assert harness.calls == ["ll.agent.list", "ll.agent.list"]
    assert "ll.agent.list first" in harness.output
    assert session.history.all() == [(0, "ll.agent.list first"), (1, "ll.agent.list first")]


def test_redo_rejects_bad_index(harness) -> None:
    assert harness.session.evaluate(FromTerminal("redo 5")).error == "error: redo: invalid command index: 5"
    assert harness.session.evaluate(FromTerminal("redo x")).error == "error: redo: invalid command index: x"


def test_flush_clears_history(harness) -> None:
    session = harness.session
    session.evaluate(FromTerminal("dbg.echo one"))
    assert session.evaluate(FromTerminal("flush")).output == "History flushed."
    assert session.history.length() == 0


def test_argv_input_dispatches_without_tokenizing(harness) -> None:
    outcome = harness.session.evaluate(FromArgv(["dbg.echo", "a b", "c"]))
    assert outcome.output == "a b c"
    assert harness.session.history.all() == [(0, "dbg.echo a b c")]


def test_empty_argv_shows_help(harness) -> None:
    assert "USAGE:" in harness.session.evaluate(FromArgv([])).output


def test_dbg_tokens_shows_last_line(harness) -> None:
    output = harness.session.evaluate(FromTerminal('dbg.tokens "a b" --x="y z"')).output
    assert output == "0: 'dbg.tokens'\n1: 'a b'\n2: '--x=y z'"


def test_help_bypasses_formatters(harness) -> None:
    session = harness.session
    session.renderer.add_formatter(str.upper)
    session.print(session.evaluate(FromTerminal("help")))
    session.print(session.evaluate(FromTerminal("dbg.echo quiet")))
    assert "Show this help." in harness.output
    assert "QUIET" in harness.output


def test_prompt_shows_history_length(harness) -> None:
    harness.session.evaluate(FromTerminal("dbg.echo one"))
    assert harness.session.prompt_text() == "\ncmdloop 1 > "


def test_run_survives_failures_until_quit(monkeypatch: pytest.MonkeyPatch, harness) -> None:
    _feed(monkeypatch, harness, ["boom", "dbg.echo still here", "quit", "dbg.echo never"])

    harness.session.run()

    assert "error: boom: bad" in harness.output
    assert "still here" in harness.output
    assert "never" not in harness.output
    assert harness.output.rstrip().endswith("Goodbye!")
    assert harness.session.repl_mode is False


def test_run_stops_at_end_of_input(monkeypatch: pytest.MonkeyPatch, harness) -> None:
    _feed(monkeypatch, harness, ["dbg.echo only"])

    harness.session.run()

    assert "only" in harness.output
    assert "Goodbye!" in harness.output


def test_status_reports_session_state(monkeypatch: pytest.MonkeyPatch, harness) -> None:
    _feed(monkeypatch, harness, ["dbg.echo x", "cli.status"])

    harness.session.run()

    assert "history length: 2" in harness.output
    assert "last input: cli.status" in harness.output
    assert "repl mode: on" in harness.output


def test_about_shows_intro_and_version(harness) -> None:
    outcome = harness.session.evaluate(FromTerminal("about"))
    assert outcome.output.startswith(harness.session.settings.intro)
    assert "version 0.1.0" in outcome.output


def test_help_keeps_blank_lines(harness) -> None:
    harness.session.print(harness.session.evaluate(FromTerminal("help")))
    assert "USAGE:\n    cmdloop <command> [args...]\n\nCOMMANDS:" in harness.output


def test_run_survives_failing_formatter(monkeypatch: pytest.MonkeyPatch, harness) -> None:
    def explode(text: str) -> str:
        raise RuntimeError("fmt")

    harness.session.renderer.add_formatter(explode)
    _feed(monkeypatch, harness, ["dbg.echo a", "dbg.echo b", "quit"])

    harness.session.run()

    assert harness.output.count("error: fmt") == 2
    assert harness.session.history.all() == [(0, "dbg.echo a"), (1, "dbg.echo b")]
    assert harness.output.rstrip().endswith("Goodbye!")
