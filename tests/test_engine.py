import pytest

from classbracket.bracket import compute_bracket
from classbracket.config import LayoutConfig
from classbracket.models import Match, Student
from classbracket.utils import utc_now


def _student(name, eliminated=False):
    return Student(
        name=name,
        id=name.lower(),
        eliminated=eliminated,
        eliminated_at=utc_now() if eliminated else None,
    )


def _win(winner, loser):
    return Match(
        id=f"{winner.id}-{loser.id}",
        player1_id=winner.id,
        player1_name=winner.name,
        player2_id=loser.id,
        player2_name=loser.name,
        match_result="player1",
        winner=winner.name,
    )


def _four_player_tournament():
    students = [
        _student("Alice"),
        _student("Bob", eliminated=True),
        _student("Carol", eliminated=True),
        _student("Dave", eliminated=True),
    ]
    alice, bob, carol, dave = students
    matches = [_win(alice, bob), _win(carol, dave), _win(alice, carol)]
    return students, matches


def test_empty_roster_gives_empty_layout():
    layout = compute_bracket([], [])

    assert layout.is_empty
    assert layout.edges == ()
    assert layout.tiers == {}


def test_four_player_tournament_tiers_and_edges():
    students, matches = _four_player_tournament()

    layout = compute_bracket(students, matches)

    assert layout.max_wins == 2
    assert layout.tiers == {0: ("bob", "dave"), 1: ("carol",), 2: ("alice",)}
    assert [(e.source_student_id, e.target_student_id) for e in layout.edges] == [
        ("bob", "alice"),
        ("dave", "carol"),
        ("carol", "alice"),
    ]
    assert [node.name for node in layout.champions] == ["Alice"]


def test_four_player_tournament_rings():
    students, matches = _four_player_tournament()

    layout = compute_bracket(students, matches)

    radius = {node.name: node.radius for node in layout.nodes}
    assert radius["Alice"] < radius["Carol"] < radius["Bob"] == radius["Dave"]

    alice = layout.node_for("alice")
    assert alice.position.x == pytest.approx(550)
    assert alice.position.y == pytest.approx(350 - 1500)
    assert (alice.win_count, alice.loss_count) == (2, 0)

    carol = layout.node_for("carol")
    assert (carol.win_count, carol.loss_count) == (1, 1)
    assert carol.status == "ELIMINATED"


def test_nodes_are_ordered_by_ascending_tier():
    students, matches = _four_player_tournament()

    layout = compute_bracket(students, matches)

    assert [node.name for node in layout.nodes] == ["Bob", "Dave", "Carol", "Alice"]


def test_single_student_without_matches():
    layout = compute_bracket([_student("Ada")], [])

    (node,) = layout.nodes
    assert layout.tiers == {0: ("ada",)}
    assert layout.edges == ()
    assert node.is_champion
    assert node.radius == LayoutConfig().base_radius


def test_tie_adds_no_wins_and_no_edges():
    alice, bob = _student("Alice"), _student("Bob")
    tie = Match(
        player1_id=alice.id,
        player1_name=alice.name,
        player2_id=bob.id,
        player2_name=bob.name,
        result="tie",
    )

    layout = compute_bracket([alice, bob], [tie])

    assert layout.tiers == {0: ("alice", "bob")}
    assert layout.edges == ()
    assert [node.tie_count for node in layout.nodes] == [1, 1]
    assert all(node.is_champion for node in layout.nodes)


def test_layout_is_deterministic():
    students, matches = _four_player_tournament()

    assert compute_bracket(students, matches) == compute_bracket(students, matches)


def test_match_order_does_not_change_tiers():
    students, matches = _four_player_tournament()

    forward = compute_bracket(students, matches)
    backward = compute_bracket(students, list(reversed(matches)))

    assert forward.tiers == backward.tiers
    assert {n.student_id: n.position for n in forward.nodes} == {
        n.student_id: n.position for n in backward.nodes
    }


def test_custom_geometry():
    students, matches = _four_player_tournament()
    config = LayoutConfig(center_x=0, center_y=0, base_radius=10, radius_step=5)

    layout = compute_bracket(students, matches, config)

    assert {node.name: node.radius for node in layout.nodes} == {
        "Alice": 10,
        "Carol": 15,
        "Bob": 20,
        "Dave": 20,
    }
