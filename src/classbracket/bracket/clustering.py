"""Intra-tier opponent clustering.

Orders the students of one tier so that students who played each other sit
next to each other, which puts them at neighbouring angles on the ring.

The ordering is a greedy walk over the "played against" graph restricted to
the tier:

1. Start from the student with the most opponents inside the tier.
2. From the current student, step to the first unplaced opponent (in tier
   order).
3. With no unplaced opponent left, jump to the unplaced student with the most
   connections to other unplaced students.

Ties always go to the student seen first, so the result is deterministic for
a given input order. The walk is O(n^2) per tier, which is fine for class
sized rosters.
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

from typing import Dict, Iterable, List, Optional, Set

from classbracket.models import Match, Student
from classbracket.utils import setup_logger

logger = setup_logger(__name__)

OpponentMap = Dict[str, List[str]]


def build_opponent_map(
    tier_ids: Iterable[str], matches: Iterable[Match]
) -> OpponentMap:
    """Adjacency list of the tier's played-against graph.

    Only matches with both players in the tier contribute. Repeated matches
    produce repeated entries.
    """
    opponents: OpponentMap = {student_id: [] for student_id in tier_ids}
    for match in matches:
        if match.player1_id in opponents and match.player2_id in opponents:
            opponents[match.player1_id].append(match.player2_id)
            opponents[match.player2_id].append(match.player1_id)
    return opponents


def _open_connections(
    student_id: str, opponents: OpponentMap, placed: Set[str]
) -> int:
    """Count adjacency entries pointing at students not yet placed."""
    return sum(1 for opp_id in opponents[student_id] if opp_id not in placed)


def _most_connected(
    candidates: List[Student], opponents: OpponentMap, placed: Set[str]
) -> Student:
    """Pick the candidate with the most open connections.

    Uses strict greater-than so the first candidate wins ties.
    """
    best = candidates[0]
    best_connections = _open_connections(best.id, opponents, placed)
    for candidate in candidates[1:]:
        connections = _open_connections(candidate.id, opponents, placed)
        if connections > best_connections:
            best, best_connections = candidate, connections
    return best


def _next_opponent(
    current: Student,
    tier_students: List[Student],
    opponents: OpponentMap,
    placed: Set[str],
) -> Optional[Student]:
    """First unplaced opponent of the current student, in tier order."""
    current_opponents = set(opponents[current.id])
    for student in tier_students:
        if student.id not in placed and student.id in current_opponents:
            return student
    return None


def order_tier_by_opponents(
    tier_students: List[Student], matches: Iterable[Match]
) -> List[Student]:
    """Reorder one tier so that opponents are adjacent.

    Args:
        tier_students: Students sharing a win count, in roster order
        matches: Full match history (matches outside the tier are ignored)

    Returns:
        The same students in clustered order
    """
    if len(tier_students) <= 1:
        return list(tier_students)

    opponents = build_opponent_map((s.id for s in tier_students), matches)
    placed: Set[str] = set()
    ordered: List[Student] = []

    current = _most_connected(tier_students, opponents, placed)
    while len(ordered) < len(tier_students):
        if current.id not in placed:
            ordered.append(current)
            placed.add(current.id)

        next_student = _next_opponent(current, tier_students, opponents, placed)
        if next_student is None:
            remaining = [s for s in tier_students if s.id not in placed]
            if not remaining:
                break
            # Candidates are all unplaced, so each pass places someone.
            next_student = _most_connected(remaining, opponents, placed)
        current = next_student

    logger.debug(
        f"Clustered tier of {len(tier_students)}: "
        f"{', '.join(student.name for student in ordered)}"
    )
    return ordered
