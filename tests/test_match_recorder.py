import pytest

from classbracket.controllers import MatchRecorder, determine_game_result
from classbracket.exceptions import (
    EliminatedStudentException,
    FileSaveException,
    InvalidMatchException,
    MatchNotFoundException,
    RepeatMatchException,
    StudentNotFoundException,
)
from classbracket.store import InMemoryStore


class _ReadOnlyStudentsStore(InMemoryStore):
    """Store whose student updates can never be saved."""

    def update_student(self, student):
        raise FileSaveException("disk full")


def _setup(*names):
    store = InMemoryStore()
    students = [store.add_student(name) for name in names]
    return store, MatchRecorder(store), students


@pytest.mark.parametrize(
    "choice1, choice2, expected",
    [
        ("rock", "scissors", ("win", "player1")),
        ("paper", "rock", ("win", "player1")),
        ("scissors", "paper", ("win", "player1")),
        ("scissors", "rock", ("win", "player2")),
        ("rock", "paper", ("win", "player2")),
        ("paper", "paper", ("tie", None)),
    ],
)
def test_determine_game_result(choice1, choice2, expected):
    assert determine_game_result(choice1, choice2) == expected


def test_determine_game_result_rejects_unknown_moves():
    with pytest.raises(InvalidMatchException):
        determine_game_result("rock", "lizard")


def test_record_with_winner_eliminates_loser():
    store, recorder, (alice, bob) = _setup("Alice", "Bob")

    match = recorder.record_match_with_winner(alice.id, bob.id, "player2")

    assert match.winner == "Bob"
    assert match.match_result == "player2"
    assert match.result == "win"
    assert store.get_student(alice.id).eliminated
    assert store.get_student(alice.id).eliminated_at is not None
    assert not store.get_student(bob.id).eliminated
    assert recorder.has_played(bob.id, alice.id)


def test_rematch_is_refused_in_either_order():
    _, recorder, (alice, bob) = _setup("Alice", "Bob")
    recorder.record_match_with_winner(alice.id, bob.id, "player1")

    with pytest.raises(RepeatMatchException):
        recorder.record_match_with_winner(bob.id, alice.id, "player1")


def test_eliminated_student_cannot_play():
    _, recorder, (alice, bob, carol) = _setup("Alice", "Bob", "Carol")
    recorder.record_match_with_winner(alice.id, bob.id, "player1")

    with pytest.raises(EliminatedStudentException):
        recorder.record_match_with_winner(bob.id, carol.id, "player2")


def test_student_cannot_play_themselves():
    _, recorder, (alice,) = _setup("Alice")

    with pytest.raises(InvalidMatchException):
        recorder.record_match_with_winner(alice.id, alice.id, "player1")


def test_unknown_student_and_bad_slot():
    _, recorder, (alice, bob) = _setup("Alice", "Bob")

    with pytest.raises(StudentNotFoundException):
        recorder.record_match_with_winner(alice.id, "ghost", "player1")
    with pytest.raises(InvalidMatchException):
        recorder.record_match_with_winner(alice.id, bob.id, "player3")


def test_choice_match_decides_winner():
    store, recorder, (alice, bob) = _setup("Alice", "Bob")

    match = recorder.record_choice_match(alice.id, "rock", bob.id, "paper")

    assert match.winner == "Bob"
    assert match.player1_choice == "rock"
    assert match.player2_choice == "paper"
    assert store.get_student(alice.id).eliminated


def test_choice_tie_eliminates_nobody():
    store, recorder, (alice, bob) = _setup("Alice", "Bob")

    match = recorder.record_choice_match(alice.id, "rock", bob.id, "rock")

    assert match.is_tie
    assert match.winner is None
    assert not any(s.eliminated for s in store.list_students())


def test_delete_match_reactivates_loser():
    store, recorder, (alice, bob) = _setup("Alice", "Bob")
    match = recorder.record_match_with_winner(alice.id, bob.id, "player1")

    recorder.delete_match(match.id)

    assert store.list_matches() == []
    restored = store.get_student(bob.id)
    assert not restored.eliminated
    assert restored.eliminated_at is None
    assert not recorder.has_played(alice.id, bob.id)


def test_delete_legacy_match_uses_winner_name():
    store, recorder, (alice, bob) = _setup("Alice", "Bob")
    match = recorder.record_choice_match(alice.id, "scissors", bob.id, "paper")

    recorder.delete_match(match.id)

    assert not store.get_student(bob.id).eliminated


def test_delete_tie_leaves_students_alone():
    store, recorder, (alice, bob) = _setup("Alice", "Bob")
    match = recorder.record_choice_match(alice.id, "rock", bob.id, "rock")

    recorder.delete_match(match.id)

    assert store.list_matches() == []
    assert not any(s.eliminated for s in store.list_students())


def test_delete_match_when_loser_left_the_roster():
    store, recorder, (alice, bob) = _setup("Alice", "Bob")
    match = recorder.record_match_with_winner(alice.id, bob.id, "player1")
    store.delete_student(bob.id)

    recorder.delete_match(match.id)

    assert store.list_matches() == []


def test_delete_unknown_match():
    _, recorder, _ = _setup("Alice")

    with pytest.raises(MatchNotFoundException):
        recorder.delete_match("missing")


@pytest.mark.parametrize("flow", ["winner", "choices"])
def test_match_is_removed_when_loser_cannot_be_eliminated(flow):
    store = _ReadOnlyStudentsStore()
    alice = store.add_student("Alice")
    bob = store.add_student("Bob")
    recorder = MatchRecorder(store)

    with pytest.raises(FileSaveException):
        if flow == "winner":
            recorder.record_match_with_winner(alice.id, bob.id, "player1")
        else:
            recorder.record_choice_match(alice.id, "rock", bob.id, "scissors")

    assert store.list_matches() == []
    assert not store.get_student(bob.id).eliminated
    assert not recorder.has_played(alice.id, bob.id)
