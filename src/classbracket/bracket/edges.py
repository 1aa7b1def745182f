"""Progression edges between defeated students and the students who beat them."""

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

from typing import Iterable, List

from classbracket.bracket.models import BracketEdge
from classbracket.constants import EDGE_LABEL_TEMPLATE
from classbracket.models import Match, Student
from classbracket.type_hints import WinCounts
from classbracket.utils import setup_logger

logger = setup_logger(__name__)


def build_progression_edges(
    students: Iterable[Student], matches: Iterable[Match], win_counts: WinCounts
) -> List[BracketEdge]:
    """Build one loser -> winner edge per decisive match.

    An edge is only drawn when the winner sits in a strictly higher tier than
    the loser, so edges always point inward on the bracket. Ties, matches
    without a resolvable winner and matches naming students missing from the
    roster contribute nothing.

    Args:
        students: Full roster
        matches: Full match history
        win_counts: Student id -> wins, as computed for the same roster

    Returns:
        Edges in match order
    """
    roster = {student.id: student for student in students}
    edges: List[BracketEdge] = []

    for match in matches:
        winner_id = match.winner_id
        loser_id = match.loser_id
        if winner_id is None or loser_id is None:
            continue

        winner = roster.get(winner_id)
        loser = roster.get(loser_id)
        if winner is None or loser is None:
            logger.debug(f"Match {match.id} references a student not on the roster")
            continue

        if win_counts.get(winner.id, 0) <= win_counts.get(loser.id, 0):
            continue

        edges.append(
            BracketEdge(
                match_id=match.id,
                source_student_id=loser.id,
                target_student_id=winner.id,
                label=EDGE_LABEL_TEMPLATE.format(name=loser.name),
            )
        )

    return edges
