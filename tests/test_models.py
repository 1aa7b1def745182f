from datetime import datetime, timezone

import pytest

from classbracket.exceptions import InvalidMatchException, InvalidStudentDataException
from classbracket.models import Match, Student
from classbracket.utils.validation import (
    parse_roster_text,
    validate_student_name,
    validate_student_name_strict,
)


def _match(**kwargs):
    data = {
        "player1_id": "a",
        "player1_name": "Alice",
        "player2_id": "b",
        "player2_name": "Bob",
    }
    data.update(kwargs)
    return Match(**data)


def test_new_student_is_active():
    student = Student(name="Alice")

    assert student.is_active
    assert student.eliminated_at is None
    assert student.id.startswith("student_")
    assert student.created_at.tzinfo is not None


def test_eliminated_flag_and_timestamp_go_together():
    with pytest.raises(InvalidStudentDataException):
        Student(name="Alice", eliminated=True)
    with pytest.raises(InvalidStudentDataException):
        Student(name="Alice", eliminated_at=datetime.now(timezone.utc))


def test_eliminate_and_reactivate():
    student = Student(name="Alice")

    student.eliminate()
    assert student.eliminated and student.eliminated_at is not None

    student.reactivate()
    assert not student.eliminated and student.eliminated_at is None


def test_student_from_dict_treats_naive_timestamps_as_utc():
    student = Student.from_dict(
        {"id": "s1", "name": "Alice", "created_at": "2025-03-01T09:30:00"}
    )

    assert student.created_at == datetime(2025, 3, 1, 9, 30, tzinfo=timezone.utc)


def test_student_from_dict_rejects_bad_data():
    with pytest.raises(InvalidStudentDataException):
        Student.from_dict({"name": "No Id"})
    with pytest.raises(InvalidStudentDataException):
        Student.from_dict({"id": "s1", "name": "Alice", "created_at": "yesterday"})


def test_student_dict_round_trip():
    student = Student(name="Alice")
    student.eliminate()

    assert Student.from_dict(student.to_dict()) == student


def test_winner_slot_prefers_winner_name():
    match = _match(winner="Bob", match_result="player1")

    assert match.winner_slot == "player2"
    assert match.winner_id == "b"
    assert match.loser_id == "a"


def test_winner_slot_falls_back_to_match_result():
    match = _match(winner="Robert", match_result="player2")

    assert match.winner_slot == "player2"


def test_tie_has_no_winner():
    match = _match(result="tie")

    assert match.is_tie
    assert match.winner_slot is None
    assert match.winner_id is None
    assert match.loser_id is None


def test_is_between_ignores_order():
    match = _match(winner="Alice")

    assert match.is_between("b", "a")


@pytest.mark.parametrize(
    "kwargs",
    [
        {"result": "draw"},
        {"match_result": "player3"},
        {"player1_choice": "lizard"},
    ],
)
def test_invalid_match_values(kwargs):
    with pytest.raises(InvalidMatchException):
        _match(**kwargs)


def test_match_from_dict_requires_players():
    with pytest.raises(InvalidMatchException):
        Match.from_dict({"id": "m1", "player1_id": "a"})


def test_validate_student_name():
    assert validate_student_name("  Ada   Lovelace ").sanitized_value == "Ada Lovelace"
    assert not validate_student_name("")
    assert not validate_student_name(None)
    assert not validate_student_name("x" * 101)
    assert validate_student_name("x" * 100)


def test_validate_student_name_strict():
    assert validate_student_name_strict(" Bob ") == "Bob"
    with pytest.raises(InvalidStudentDataException):
        validate_student_name_strict("   ")


def test_parse_roster_text():
    assert parse_roster_text("Alice\r\n\n  Bob  \n") == ["Alice", "Bob"]
    assert parse_roster_text("") == []
    assert parse_roster_text(None) == []
