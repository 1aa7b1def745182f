import pytest

from classbracket.console import (
    COMMANDS,
    ConsoleContext,
    create_completer,
    execute_line,
)
from classbracket.console.__main__ import main
from classbracket.store import InMemoryStore


@pytest.fixture
def context():
    return ConsoleContext(store=InMemoryStore())


def _run(context, *lines):
    for line in lines:
        assert execute_line(context, line)


def test_completer_offers_both_command_forms():
    options = create_completer().options

    for command in COMMANDS:
        assert command in options
        assert f"/{command}" in options


def test_exit_commands_stop_the_loop(context):
    for line in ["exit", "quit", "q", "/exit"]:
        assert execute_line(context, line) is False


def test_blank_and_help_lines_keep_running(context, capsys):
    _run(context, "", "help", "/help record")

    output = capsys.readouterr().out
    assert "Available Commands" in output
    assert "Command: record" in output


def test_import_and_list_students(context, capsys):
    _run(context, 'import Alice Bob "Carol King"', "students")

    output = capsys.readouterr().out
    assert "Successfully imported 3 students" in output
    assert "Carol King" in output
    assert [s.name for s in context.store.list_students()] == [
        "Alice",
        "Bob",
        "Carol King",
    ]


def test_record_and_show_bracket(context, capsys):
    _run(
        context,
        "import Alice Bob Carol Dave",
        "record Alice Bob --winner player1",
        "/record Carol Dave --winner player1",
        "record alice carol --winner player1",
        "bracket",
    )

    output = capsys.readouterr().out
    assert "Alice won" in output
    assert "4 Students • 3 Matches" in output
    assert "Bob -> Alice  (Beat Bob)" in output
    assert "Carol -> Alice  (Beat Carol)" in output
    assert "CHAMPION" in output


def test_play_records_tie(context, capsys):
    _run(context, "import Alice Bob", "play Alice rock Bob rock", "matches")

    output = capsys.readouterr().out
    assert "It's a tie!" in output
    assert "Alice vs Bob: tie" in output
    assert not any(s.eliminated for s in context.store.list_students())


def test_errors_are_reported_and_shell_keeps_running(context, capsys):
    _run(
        context,
        "import Alice Bob",
        "record Alice Bob --winner player1",
        "record Alice Bob --winner player2",
        "record Alice Nobody --winner player1",
        "record Alice",
        "launch rockets",
    )

    output = capsys.readouterr().out
    assert "have already played" in output
    assert "Student not found: Nobody" in output
    assert "Unknown command: launch" in output
    assert len(context.store.list_matches()) == 1


def test_delete_reactivates_loser(context, capsys):
    _run(context, "import Alice Bob", "record Alice Bob --winner player1")
    match = context.store.list_matches()[0]

    _run(context, f"delete {match.id}")

    assert context.store.list_matches() == []
    assert not any(s.eliminated for s in context.store.list_students())


def test_leaderboard_and_stats(context, capsys):
    _run(
        context,
        "import Alice Bob Carol",
        "play Alice paper Bob rock",
        "leaderboard",
        "stats",
    )

    output = capsys.readouterr().out
    assert "Alice" in output and "1 wins (1 matches)" in output
    assert "Eliminated: 1" in output
    assert "Participation: 66.7%" in output


def test_one_shot_commands_share_a_store_file(tmp_path, monkeypatch, capsys):
    monkeypatch.delenv("CLASSBRACKET_CONFIG", raising=False)
    store_path = str(tmp_path / "class.json")

    assert main(["--store", store_path, "import", "Alice", "Bob"]) == 0
    record = ["record", "Alice", "Bob", "--winner", "player2"]
    assert main(["--store", store_path, *record]) == 0
    assert main(["--store", store_path, "bracket"]) == 0

    output = capsys.readouterr().out
    assert "Alice -> Bob  (Beat Alice)" in output


def test_one_shot_command_reports_failure(tmp_path, monkeypatch):
    monkeypatch.delenv("CLASSBRACKET_CONFIG", raising=False)
    store_path = str(tmp_path / "class.json")

    assert main(["--store", store_path, "delete", "missing"]) == 1


def _listed_names(output, names):
    lines = output.splitlines()

    def first_line(name):
        return next(i for i, line in enumerate(lines) if name in line)

    return sorted(names, key=first_line)


def test_students_sorted_by_matches_and_status(context, capsys):
    _run(context, "import Alice Bob Carol", "record Carol Alice --winner player1")
    capsys.readouterr()

    _run(context, "students --sort matches --desc")
    output = capsys.readouterr().out
    assert _listed_names(output, ["Alice", "Bob", "Carol"]) == ["Alice", "Carol", "Bob"]
    assert "1 matches" in output

    _run(context, "students --sort status")
    output = capsys.readouterr().out
    assert _listed_names(output, ["Alice", "Bob", "Carol"]) == ["Bob", "Carol", "Alice"]
