"""Win-tier classification.

A student's tier is the number of matches they won, where a win is a match
whose ``winner`` equals the student's name. Ties count for nobody.
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
from typing import Dict, Iterable, List

from classbracket.models import Match, Student
from classbracket.type_hints import WinCounts


@dataclass
class WinTiers:
    """Students grouped by number of wins.

    Attributes:
        win_counts: Student id -> number of wins
        tiers: Number of wins -> students, in roster order
        max_wins: Highest win count (0 if there are no students)
    """

    win_counts: WinCounts = field(default_factory=dict)
    tiers: Dict[int, List[Student]] = field(default_factory=dict)
    max_wins: int = 0

    def tier(self, wins: int) -> List[Student]:
        return self.tiers.get(wins, [])


def count_wins(students: Iterable[Student], matches: Iterable[Match]) -> WinCounts:
    """Number of wins per student id, by winner name."""
    wins_by_name = Counter(
        match.winner for match in matches if match.winner and not match.is_tie
    )
    return {student.id: wins_by_name.get(student.name, 0) for student in students}


def classify_win_tiers(students: List[Student], matches: List[Match]) -> WinTiers:
    """Place every student in exactly one tier.

    Students without any match land in tier 0.

    Args:
        students: Full roster
        matches: Full match history, in any order

    Returns:
        WinTiers for the roster
    """
    win_counts = count_wins(students, matches)
    tiers: Dict[int, List[Student]] = {}
    for student in students:
        tiers.setdefault(win_counts[student.id], []).append(student)

    max_wins = max(win_counts.values(), default=0)
    return WinTiers(win_counts=win_counts, tiers=tiers, max_wins=max_wins)
