"""Radial layout of win tiers.

Each tier gets its own ring around a shared center. Tier 0 sits on the
outermost ring and the tier holding the most wins on the innermost one.
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

import math
from dataclasses import dataclass
from typing import Dict, Iterable, List, Tuple

from classbracket.bracket.models import BracketNode, Point
from classbracket.config import LayoutConfig
from classbracket.models import Match, Student


@dataclass(frozen=True)
class StudentRecord:
    """Loss and tie counts for one student."""

    losses: int = 0
    ties: int = 0


def ring_radius(wins: int, max_wins: int, config: LayoutConfig) -> float:
    """Radius of the ring for a tier."""
    return config.base_radius + (max_wins - wins) * config.radius_step


def ring_angles(count: int, config: LayoutConfig) -> List[float]:
    """Evenly spaced angles for ``count`` students, starting straight up."""
    if count <= 0:
        return []
    step = 2 * math.pi / count
    return [config.start_angle + index * step for index in range(count)]


def point_on_ring(radius: float, angle: float, config: LayoutConfig) -> Point:
    return Point(
        x=config.center_x + radius * math.cos(angle),
        y=config.center_y + radius * math.sin(angle),
    )


def student_records(
    students: Iterable[Student], matches: Iterable[Match]
) -> Dict[str, StudentRecord]:
    """Losses and ties per student id.

    A loss is any of the student's matches whose winner is somebody else.
    """
    names = {student.id: student.name for student in students}
    losses = dict.fromkeys(names, 0)
    ties = dict.fromkeys(names, 0)

    for match in matches:
        # A student matched against themselves is counted once.
        for student_id in {match.player1_id, match.player2_id}:
            if student_id not in names:
                continue
            if match.is_tie:
                ties[student_id] += 1
            elif match.winner and match.winner != names[student_id]:
                losses[student_id] += 1

    return {
        student_id: StudentRecord(losses=losses[student_id], ties=ties[student_id])
        for student_id in names
    }


def layout_tier(
    ordered_students: List[Student],
    wins: int,
    max_wins: int,
    records: Dict[str, StudentRecord],
    config: LayoutConfig,
) -> Tuple[BracketNode, ...]:
    """Place one tier's students, already in clustered order, on its ring.

    An empty tier yields no nodes.
    """
    radius = ring_radius(wins, max_wins, config)
    nodes = []
    for index, (student, angle) in enumerate(
        zip(ordered_students, ring_angles(len(ordered_students), config))
    ):
        record = records.get(student.id, StudentRecord())
        nodes.append(
            BracketNode(
                student_id=student.id,
                name=student.name,
                win_count=wins,
                loss_count=record.losses,
                tie_count=record.ties,
                angular_index=index,
                position=point_on_ring(radius, angle, config),
                radius=radius,
                angle=angle,
                is_eliminated=student.eliminated,
                is_champion=wins == max_wins and not student.eliminated,
            )
        )
    return tuple(nodes)
