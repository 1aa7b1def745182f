import pytest

from classbracket.controllers import MatchRecorder, RosterManager
from classbracket.controllers.roster import filter_students
from classbracket.exceptions import (
    InvalidStudentDataException,
    StudentNotFoundException,
)
from classbracket.store import InMemoryStore


def _roster(text="Alice\nBob\nCarol"):
    store = InMemoryStore()
    manager = RosterManager(store)
    manager.import_students(text)
    return store, manager


def test_import_trims_and_skips_blank_lines():
    store = InMemoryStore()

    created = RosterManager(store).import_students("  Alice \n\n   \nBob  Smith\n")

    assert [s.name for s in created] == ["Alice", "Bob Smith"]
    assert len(store.list_students()) == 2
    assert all(not s.eliminated for s in created)


def test_import_skips_invalid_lines():
    store = InMemoryStore()

    created = RosterManager(store).import_students("Alice\n" + "x" * 101)

    assert [s.name for s in created] == ["Alice"]


def test_import_without_names_fails():
    with pytest.raises(InvalidStudentDataException):
        RosterManager(InMemoryStore()).import_students("\n  \n")


def test_search_is_case_insensitive_substring():
    _, manager = _roster("Alice\nMalik\nBob")

    assert [s.name for s in manager.search_students("ALI")] == ["Alice", "Malik"]
    assert manager.search_students("zzz") == []


def test_active_only_search():
    store, manager = _roster("Alice\nAlina\nBob")
    alice, alina = manager.resolve("Alice"), manager.resolve("Alina")
    MatchRecorder(store).record_match_with_winner(alice.id, alina.id, "player1")

    active_matches = manager.search_students("al", active_only=True)
    assert [s.name for s in active_matches] == ["Alice"]
    assert [s.name for s in manager.active_students()] == ["Alice", "Bob"]



def test_filter_students_works_on_a_snapshot():
    store, manager = _roster("Alice\nAlina\nBob")
    alice, alina = manager.resolve("Alice"), manager.resolve("Alina")
    MatchRecorder(store).record_match_with_winner(alice.id, alina.id, "player2")
    students = store.list_students()

    assert filter_students(students) == students
    assert [s.name for s in filter_students(students, " AL ")] == ["Alice", "Alina"]
    assert [s.name for s in filter_students(students, active_only=True)] == [
        "Alina",
        "Bob",
    ]


def test_resolve_by_id_or_name():
    _, manager = _roster()
    bob = manager.resolve("bob")

    assert bob.name == "Bob"
    assert manager.resolve(bob.id).name == "Bob"
    with pytest.raises(StudentNotFoundException):
        manager.resolve("nobody")


def test_resolve_refuses_ambiguous_names():
    _, manager = _roster("Sam\nSam")

    with pytest.raises(StudentNotFoundException):
        manager.resolve("Sam")
