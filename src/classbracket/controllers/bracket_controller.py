"""Keeps a bracket layout in step with the store.

Every snapshot from the store triggers a full recomputation; the listener
always receives a brand new BracketLayout and never a patched one.
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

from typing import Callable, List, Optional

from classbracket.bracket import BracketLayout, compute_bracket
from classbracket.config import LayoutConfig
from classbracket.models import Match, Student
from classbracket.store.base import TournamentStore
from classbracket.type_hints import Disposer
from classbracket.utils import setup_logger

logger = setup_logger(__name__)

LayoutListener = Callable[[BracketLayout, List[Student], List[Match]], None]


class BracketController:
    """Subscribes to a store and pushes fresh layouts to a listener."""

    def __init__(
        self,
        store: TournamentStore,
        listener: LayoutListener,
        config: Optional[LayoutConfig] = None,
    ) -> None:
        self.store = store
        self.listener = listener
        self.config = config or LayoutConfig()
        self.layout = BracketLayout()
        self._dispose: Optional[Disposer] = None

    @property
    def is_running(self) -> bool:
        return self._dispose is not None

    def start(self) -> None:
        """Subscribe to the store; the first layout is delivered at once."""
        if self._dispose is not None:
            return
        self._dispose = self.store.subscribe(self._on_snapshot)

    def stop(self) -> None:
        """Unsubscribe. Safe to call any number of times."""
        dispose, self._dispose = self._dispose, None
        if dispose is not None:
            dispose()

    def refresh(self) -> BracketLayout:
        """Recompute from an explicit read of the store."""
        students = self.store.list_students()
        matches = self.store.list_matches()
        self._on_snapshot(students, matches)
        return self.layout

    def _on_snapshot(self, students: List[Student], matches: List[Match]) -> None:
        self.layout = compute_bracket(students, matches, self.config)
        logger.debug(
            f"Bracket refreshed: {len(students)} students, {len(matches)} matches"
        )
        self.listener(self.layout, students, matches)
