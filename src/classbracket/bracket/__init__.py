"""Tournament bracket layout engine.

This package turns a roster and its match history into a radial bracket:
students grouped into win tiers, clustered by opponent within each tier,
placed on concentric rings, and linked by progression edges.
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

from classbracket.bracket.clustering import order_tier_by_opponents
from classbracket.bracket.edges import build_progression_edges
from classbracket.bracket.engine import compute_bracket
from classbracket.bracket.layout import ring_angles, ring_radius
from classbracket.bracket.models import BracketEdge, BracketLayout, BracketNode, Point
from classbracket.bracket.tiers import WinTiers, classify_win_tiers

__all__ = [
    "compute_bracket",
    "BracketLayout",
    "BracketNode",
    "BracketEdge",
    "Point",
    "WinTiers",
    "classify_win_tiers",
    "order_tier_by_opponents",
    "ring_radius",
    "ring_angles",
    "build_progression_edges",
]
