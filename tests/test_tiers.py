from classbracket.bracket import classify_win_tiers
from classbracket.bracket.tiers import count_wins
from classbracket.models import Match, Student


def _student(name):
    return Student(name=name, id=name.lower())


def _win(winner, loser):
    return Match(
        player1_id=winner.id,
        player1_name=winner.name,
        player2_id=loser.id,
        player2_name=loser.name,
        match_result="player1",
        winner=winner.name,
    )


def _tie(a, b):
    return Match(
        player1_id=a.id,
        player1_name=a.name,
        player2_id=b.id,
        player2_name=b.name,
        result="tie",
    )


def test_every_student_lands_in_exactly_one_tier():
    alice, bob, carol, dave, erin = (
        _student(n) for n in ["Alice", "Bob", "Carol", "Dave", "Erin"]
    )
    students = [alice, bob, carol, dave, erin]
    matches = [_win(alice, bob), _win(carol, dave), _win(alice, carol)]

    tiers = classify_win_tiers(students, matches)

    placed = [s.id for tier in tiers.tiers.values() for s in tier]
    assert sorted(placed) == sorted(s.id for s in students)
    assert len(placed) == len(set(placed))


def test_tiers_group_by_win_count():
    alice, bob, carol, dave = (_student(n) for n in ["Alice", "Bob", "Carol", "Dave"])
    matches = [_win(alice, bob), _win(carol, dave), _win(alice, carol)]

    tiers = classify_win_tiers([alice, bob, carol, dave], matches)

    assert tiers.max_wins == 2
    assert [s.name for s in tiers.tier(0)] == ["Bob", "Dave"]
    assert [s.name for s in tiers.tier(1)] == ["Carol"]
    assert [s.name for s in tiers.tier(2)] == ["Alice"]
    assert tiers.win_counts == {"alice": 2, "bob": 0, "carol": 1, "dave": 0}


def test_students_without_matches_are_in_tier_zero():
    alice, bob = _student("Alice"), _student("Bob")

    tiers = classify_win_tiers([alice, bob], [])

    assert tiers.max_wins == 0
    assert tiers.tier(0) == [alice, bob]
    assert tiers.tier(1) == []


def test_ties_add_no_wins():
    alice, bob = _student("Alice"), _student("Bob")

    assert count_wins([alice, bob], [_tie(alice, bob)]) == {"alice": 0, "bob": 0}


def test_wins_are_counted_by_winner_name():
    alice, bob = _student("Alice"), _student("Bob")
    match = _win(alice, bob)
    match.winner = "Someone Else"

    assert count_wins([alice, bob], [match]) == {"alice": 0, "bob": 0}


def test_empty_roster():
    tiers = classify_win_tiers([], [])

    assert tiers.tiers == {}
    assert tiers.max_wins == 0


def test_tie_carrying_a_winner_name_adds_no_win():
    alice, bob = _student("Alice"), _student("Bob")
    odd_tie = _tie(alice, bob)
    odd_tie.winner = alice.name

    assert count_wins([alice, bob], [odd_tie]) == {"alice": 0, "bob": 0}
