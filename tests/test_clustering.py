from classbracket.bracket import order_tier_by_opponents
from classbracket.bracket.clustering import build_opponent_map
from classbracket.models import Match, Student


def _students(*names):
    return [Student(name=name, id=name.lower()) for name in names]


def _tie(a, b):
    return Match(
        player1_id=a.id,
        player1_name=a.name,
        player2_id=b.id,
        player2_name=b.name,
        result="tie",
    )


def _names(students):
    return [s.name for s in students]


def test_empty_and_single_tiers_are_returned_as_is():
    (alice,) = _students("Alice")

    assert order_tier_by_opponents([], []) == []
    assert order_tier_by_opponents([alice], []) == [alice]


def test_tier_without_internal_matches_keeps_roster_order():
    students = _students("Alice", "Bob", "Carol")

    assert order_tier_by_opponents(students, []) == students


def test_opponents_are_placed_next_to_each_other():
    alice, bob, carol, dave = _students("Alice", "Bob", "Carol", "Dave")
    matches = [_tie(alice, carol), _tie(bob, dave)]

    ordered = order_tier_by_opponents([alice, bob, carol, dave], matches)

    assert _names(ordered) == ["Alice", "Carol", "Bob", "Dave"]


def test_most_connected_student_is_placed_first():
    alice, bob, carol = _students("Alice", "Bob", "Carol")
    matches = [_tie(bob, alice), _tie(bob, carol)]

    ordered = order_tier_by_opponents([alice, bob, carol], matches)

    assert _names(ordered) == ["Bob", "Alice", "Carol"]


def test_result_is_a_permutation_of_the_tier():
    students = _students("A", "B", "C", "D", "E", "F")
    a, b, c, d, e, f = students
    matches = [_tie(a, b), _tie(b, c), _tie(c, a), _tie(e, f), _tie(d, f)]

    ordered = order_tier_by_opponents(students, matches)

    assert sorted(s.id for s in ordered) == sorted(s.id for s in students)
    assert len(ordered) == len(students)


def test_matches_outside_the_tier_are_ignored():
    alice, bob, carol = _students("Alice", "Bob", "Carol")
    (outsider,) = _students("Zed")
    matches = [_tie(carol, outsider), _tie(carol, outsider)]

    ordered = order_tier_by_opponents([alice, bob, carol], matches)

    assert _names(ordered) == ["Alice", "Bob", "Carol"]


def test_repeated_matches_count_twice_in_the_opponent_map():
    alice, bob = _students("Alice", "Bob")

    matches = [_tie(alice, bob), _tie(bob, alice)]

    opponents = build_opponent_map(["alice", "bob"], matches)

    assert opponents == {"alice": ["bob", "bob"], "bob": ["alice", "alice"]}


def test_clustering_is_deterministic():
    students = _students("A", "B", "C", "D", "E")
    a, b, c, d, e = students
    matches = [_tie(a, d), _tie(b, e), _tie(c, e)]

    first = order_tier_by_opponents(students, matches)
    second = order_tier_by_opponents(students, matches)

    assert _names(first) == _names(second)


def test_walk_jumps_to_most_connected_unplaced_student():
    alice, bob, carol, dave, erin = _students("Alice", "Bob", "Carol", "Dave", "Erin")
    matches = [_tie(alice, bob), _tie(dave, erin)]

    ordered = order_tier_by_opponents([alice, bob, carol, dave, erin], matches)

    # Carol comes before Dave in the roster but has no opponents left.
    assert _names(ordered) == ["Alice", "Bob", "Dave", "Erin", "Carol"]
