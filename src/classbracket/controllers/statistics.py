"""Tournament statistics and standings.

This module derives the figures shown on the leaderboard and statistics
views and the player list. Everything here is a pure function of a
(students, matches) snapshot.
"""

# Class Bracket
# Copyright (C) 2025  Class Bracket developers
#
# This program is free software: you can redistribute it and/or modify
# it under the terms of the GNU General Public License as published by
# the Free Software Foundation, either version 3 of the License, or
# (at your option) any later version.
#
# This program is distributed in the hope that it will be useful,
# but WITHOUT ANY WARRANTY; without even the implied warranty of
# MERCHANTABILITY or FITNESS FOR A PARTICULAR PURPOSE.  See the
# GNU General Public License for more details.
#
# You should have received a copy of the GNU General Public License
# along with this program.  If not, see <http://www.gnu.org/licenses/>.

from collections import Counter
from dataclasses import dataclass, field
from typing import Callable, Dict, Iterable, List, Optional

from classbracket.bracket.tiers import count_wins
from classbracket.constants import CHOICES
from classbracket.models import Match, Student


@dataclass
class TournamentStatus:
    """Overall progress of the tournament.

    Attributes:
        total_students: Size of the roster
        active_students: Students not yet eliminated
        eliminated_students: Students knocked out
        winner: The last student standing, when exactly one remains
        is_complete: At most one student left out of a roster of two or more
    """

    total_students: int
    active_students: int
    eliminated_students: int
    winner: Optional[Student] = None
    is_complete: bool = False


@dataclass
class StudentStanding:
    """A student with their match and win counts."""

    student: Student
    match_count: int
    win_count: int


@dataclass
class ChoiceStatistics:
    """Wins, losses and ties per move across legacy rock/paper/scissors matches."""

    wins: Dict[str, int] = field(default_factory=lambda: dict.fromkeys(CHOICES, 0))
    losses: Dict[str, int] = field(default_factory=lambda: dict.fromkeys(CHOICES, 0))
    ties: Dict[str, int] = field(default_factory=lambda: dict.fromkeys(CHOICES, 0))


def tournament_status(students: List[Student]) -> TournamentStatus:
    active = [s for s in students if not s.eliminated]
    return TournamentStatus(
        total_students=len(students),
        active_students=len(active),
        eliminated_students=len(students) - len(active),
        winner=active[0] if len(active) == 1 else None,
        is_complete=len(active) <= 1 and len(students) > 1,
    )


def match_counts(matches: List[Match]) -> Counter:
    """Number of matches per student id."""
    counts: Counter = Counter()
    for match in matches:
        counts[match.player1_id] += 1
        counts[match.player2_id] += 1
    return counts


def students_with_match_counts(
    students: List[Student], matches: List[Match], active_only: bool = False
) -> List[StudentStanding]:
    """Standings rows in roster order."""
    counts = match_counts(matches)
    wins = count_wins(students, matches)
    return [
        StudentStanding(
            student=student,
            match_count=counts.get(student.id, 0),
            win_count=wins[student.id],
        )
        for student in students
        if not (active_only and student.eliminated)
    ]


SORT_NAME = "name"
SORT_MATCHES = "matches"
SORT_STATUS = "status"

_SORT_KEYS: Dict[str, Callable[[StudentStanding], object]] = {
    SORT_NAME: lambda row: row.student.name.lower(),
    SORT_MATCHES: lambda row: row.match_count,
    SORT_STATUS: lambda row: (row.student.eliminated, row.student.name.lower()),
}
SORT_KEYS = tuple(_SORT_KEYS)


def sort_standings(
    rows: Iterable[StudentStanding], key: str = SORT_NAME, descending: bool = False
) -> List[StudentStanding]:
    """Order rows of the player list.

    ``name`` sorts case-insensitively, ``matches`` by match count and
    ``status`` puts active students first, then sorts by name. Rows that
    compare equal keep their order in either direction.

    Raises:
        ValueError: If ``key`` is not one of SORT_KEYS
    """
    if key not in _SORT_KEYS:
        raise ValueError(f"Unknown sort key: {key!r}")
    return sorted(rows, key=_SORT_KEYS[key], reverse=descending)


def leaderboard(students: List[Student], matches: List[Match]) -> List[StudentStanding]:
    """Active students ranked by wins, most first.

    Students with equal wins keep roster order.
    """
    standings = students_with_match_counts(students, matches, active_only=True)
    return sorted(standings, key=lambda row: row.win_count, reverse=True)


def participation_percentage(students: List[Student], matches: List[Match]) -> float:
    """Share of the roster that has played at least one match."""
    if not students:
        return 0.0
    counts = match_counts(matches)
    played = sum(1 for s in students if counts.get(s.id, 0) >= 1)
    return played / len(students) * 100


def choice_statistics(matches: List[Match]) -> ChoiceStatistics:
    """Tally moves of legacy matches.

    A tie counts player 1's move once. Matches without moves are ignored.
    """
    stats = ChoiceStatistics()
    for match in matches:
        if match.is_tie:
            if match.player1_choice:
                stats.ties[match.player1_choice] += 1
            continue

        if match.winner == match.player1_name:
            winner_choice, loser_choice = match.player1_choice, match.player2_choice
        else:
            winner_choice, loser_choice = match.player2_choice, match.player1_choice
        if winner_choice:
            stats.wins[winner_choice] += 1
        if loser_choice:
            stats.losses[loser_choice] += 1
    return stats
