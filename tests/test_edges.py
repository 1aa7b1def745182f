from classbracket.bracket import build_progression_edges
from classbracket.bracket.tiers import count_wins
from classbracket.models import Match, Student


def _student(name):
    return Student(name=name, id=name.lower())


def _win(winner, loser, **kwargs):
    return Match(
        id=kwargs.pop("id", f"{winner.id}-{loser.id}"),
        player1_id=winner.id,
        player1_name=winner.name,
        player2_id=loser.id,
        player2_name=loser.name,
        match_result="player1",
        winner=winner.name,
        **kwargs,
    )


def _edges(students, matches):
    return build_progression_edges(students, matches, count_wins(students, matches))


def test_edge_runs_from_loser_to_winner():
    alice, bob = _student("Alice"), _student("Bob")

    (edge,) = _edges([alice, bob], [_win(alice, bob)])

    assert edge.source_student_id == "bob"
    assert edge.target_student_id == "alice"
    assert edge.label == "Beat Bob"
    assert edge.edge_id == "match-alice-bob-progression"
    assert edge.source_node_id == "player-bob"
    assert edge.target_node_id == "player-alice"


def test_no_edge_between_equal_tiers():
    alice, bob, carol = _student("Alice"), _student("Bob"), _student("Carol")
    # Alice 1 win, Bob 1 win, Carol 0 wins
    matches = [_win(alice, bob), _win(bob, carol)]

    edges = _edges([alice, bob, carol], matches)

    assert [(e.source_student_id, e.target_student_id) for e in edges] == [
        ("carol", "bob")
    ]


def test_ties_produce_no_edge():
    alice, bob = _student("Alice"), _student("Bob")
    tie = Match(
        player1_id=alice.id,
        player1_name=alice.name,
        player2_id=bob.id,
        player2_name=bob.name,
        result="tie",
    )

    assert _edges([alice, bob], [tie]) == []


def test_matches_with_unknown_students_are_skipped():
    alice, bob = _student("Alice"), _student("Bob")
    ghost = _student("Ghost")

    edges = _edges([alice, bob], [_win(ghost, bob), _win(alice, bob)])

    assert [e.match_id for e in edges] == ["alice-bob"]


def test_winner_falls_back_to_recorded_slot():
    alice, bob = _student("Alice"), _student("Bob")
    match = _win(alice, bob)
    # Alice was renamed after the match was recorded
    alice.name = "Alicia"
    match.winner = "Alicia"
    match.match_result = "player1"

    win_counts = {"alice": 1, "bob": 0}
    (edge,) = build_progression_edges([alice, bob], [match], win_counts)

    assert edge.target_student_id == "alice"


def test_unresolvable_winner_produces_no_edge():
    alice, bob = _student("Alice"), _student("Bob")
    match = _win(alice, bob)
    match.winner = "Nobody"
    match.match_result = None

    assert build_progression_edges([alice, bob], [match], {"alice": 1, "bob": 0}) == []


def test_edges_follow_match_order():
    alice, bob, carol, dave = (_student(n) for n in ["Alice", "Bob", "Carol", "Dave"])
    matches = [_win(alice, carol), _win(alice, bob), _win(dave, carol)]

    edges = _edges([alice, bob, carol, dave], matches)

    assert [e.match_id for e in edges] == ["alice-carol", "alice-bob", "dave-carol"]
