"""Bracket engine: roster and match history in, positioned nodes and edges out."""

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

from typing import Dict, List, Optional, Sequence, Tuple

from classbracket.bracket.clustering import order_tier_by_opponents
from classbracket.bracket.edges import build_progression_edges
from classbracket.bracket.layout import layout_tier, student_records
from classbracket.bracket.models import BracketLayout, BracketNode
from classbracket.bracket.tiers import classify_win_tiers
from classbracket.config import LayoutConfig
from classbracket.models import Match, Student
from classbracket.utils import setup_logger

logger = setup_logger(__name__)


def compute_bracket(
    students: Sequence[Student],
    matches: Sequence[Match],
    config: Optional[LayoutConfig] = None,
) -> BracketLayout:
    """Lay out the whole tournament.

    Pure and synchronous: the same snapshot always gives the same layout.

    Args:
        students: Full roster
        matches: Full match history, in any order
        config: Ring geometry; defaults to LayoutConfig()

    Returns:
        The new BracketLayout (empty when there are no students)
    """
    if not students:
        return BracketLayout()

    config = config or LayoutConfig()
    students = list(students)
    matches = list(matches)

    win_tiers = classify_win_tiers(students, matches)
    records = student_records(students, matches)

    nodes: List[BracketNode] = []
    tiers: Dict[int, Tuple[str, ...]] = {}
    for wins in range(win_tiers.max_wins + 1):
        tier_students = win_tiers.tier(wins)
        if not tier_students:
            continue
        ordered = order_tier_by_opponents(tier_students, matches)
        tiers[wins] = tuple(student.id for student in ordered)
        nodes.extend(
            layout_tier(ordered, wins, win_tiers.max_wins, records, config)
        )

    edges = build_progression_edges(students, matches, win_tiers.win_counts)

    logger.debug(
        f"Bracket computed: {len(nodes)} nodes on {len(tiers)} rings, "
        f"{len(edges)} edges"
    )
    return BracketLayout(
        nodes=tuple(nodes),
        edges=tuple(edges),
        tiers=tiers,
        max_wins=win_tiers.max_wins,
    )
