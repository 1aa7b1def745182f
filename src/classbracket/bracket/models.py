"""Derived value types produced by the bracket layout engine.

Nothing here is persisted: every layout pass builds fresh, frozen values.
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

from dataclasses import dataclass, field
from typing import Dict, Optional, Tuple

from classbracket.constants import (
    EDGE_ID_TEMPLATE,
    NODE_ID_PREFIX,
    STATUS_ACTIVE,
    STATUS_CHAMPION,
    STATUS_ELIMINATED,
)


def node_id_for(student_id: str) -> str:
    return f"{NODE_ID_PREFIX}{student_id}"


@dataclass(frozen=True)
class Point:
    x: float
    y: float


@dataclass(frozen=True)
class BracketNode:
    """A student placed on the radial bracket.

    Attributes:
        student_id: Id of the student this node draws
        name: Student's display name
        win_count: Matches won; also the student's tier
        loss_count: Matches lost
        tie_count: Matches drawn
        angular_index: Position within the tier's clustered ordering
        position: Coordinates on the shared canvas
        radius: Radius of the tier's ring
        angle: Angle on the ring, in radians
        is_eliminated: Whether the student has been knocked out
        is_champion: At the maximum win count and not eliminated
    """

    student_id: str
    name: str
    win_count: int
    loss_count: int
    tie_count: int
    angular_index: int
    position: Point
    radius: float
    angle: float
    is_eliminated: bool
    is_champion: bool

    @property
    def node_id(self) -> str:
        return node_id_for(self.student_id)

    @property
    def status(self) -> str:
        """Status label shown on the node."""
        if self.is_eliminated:
            return STATUS_ELIMINATED
        if self.is_champion:
            return STATUS_CHAMPION
        return STATUS_ACTIVE


@dataclass(frozen=True)
class BracketEdge:
    """A progression link from a defeated student to the student who beat them."""

    match_id: str
    source_student_id: str
    target_student_id: str
    label: str

    @property
    def edge_id(self) -> str:
        return EDGE_ID_TEMPLATE.format(match_id=self.match_id)

    @property
    def source_node_id(self) -> str:
        return node_id_for(self.source_student_id)

    @property
    def target_node_id(self) -> str:
        return node_id_for(self.target_student_id)


@dataclass(frozen=True)
class BracketLayout:
    """Complete output of one layout pass.

    Attributes:
        nodes: Nodes ordered by tier, then by clustered position
        edges: Progression edges in match order
        tiers: Win count -> student ids in clustered order
        max_wins: Highest win count observed (0 with no students)
    """

    nodes: Tuple[BracketNode, ...] = ()
    edges: Tuple[BracketEdge, ...] = ()
    tiers: Dict[int, Tuple[str, ...]] = field(default_factory=dict)
    max_wins: int = 0

    @property
    def is_empty(self) -> bool:
        return not self.nodes

    def node_for(self, student_id: str) -> Optional[BracketNode]:
        for node in self.nodes:
            if node.student_id == student_id:
                return node
        return None

    @property
    def champions(self) -> Tuple[BracketNode, ...]:
        return tuple(node for node in self.nodes if node.is_champion)
