"""Roster/match store contract.

A store holds students and matches and notifies subscribers whenever either
collection changes.
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

from abc import ABC, abstractmethod
from typing import Dict, List, Optional

from classbracket.models import Match, Student
from classbracket.type_hints import Disposer, SnapshotCallback
from classbracket.utils import setup_logger

logger = setup_logger(__name__)


class TournamentStore(ABC):
    """Abstract roster/match store.

    Subclasses implement the CRUD operations and call ``_notify()`` after
    every successful write. Reads return copies, so callers cannot change
    stored state by mutating what they get back.
    """

    def __init__(self) -> None:
        self._subscribers: Dict[int, SnapshotCallback] = {}
        self._next_token = 0

    # ----- Students -----

    @abstractmethod
    def list_students(self) -> List[Student]:
        """All students, ordered by name."""

    @abstractmethod
    def get_student(self, student_id: str) -> Student:
        """Student by id.

        Raises:
            StudentNotFoundException: If no such student exists
        """

    @abstractmethod
    def add_student(self, name: str) -> Student:
        """Create a new, active student."""

    @abstractmethod
    def update_student(self, student: Student) -> Student:
        """Replace a stored student with the given one (matched by id)."""

    @abstractmethod
    def delete_student(self, student_id: str) -> None:
        """Remove a student; their matches are left untouched."""

    # ----- Matches -----

    @abstractmethod
    def list_matches(self) -> List[Match]:
        """All matches, newest first."""

    @abstractmethod
    def get_match(self, match_id: str) -> Match:
        """Match by id.

        Raises:
            MatchNotFoundException: If no such match exists
        """

    @abstractmethod
    def add_match(self, match: Match) -> Match:
        """Store a new match."""

    @abstractmethod
    def delete_match(self, match_id: str) -> None:
        """Remove a match."""

    def find_match_between(self, student_a: str, student_b: str) -> Optional[Match]:
        """The match between two students in either order, if any."""
        for match in self.list_matches():
            if match.is_between(student_a, student_b):
                return match
        return None

    # ----- Change subscription -----

    def subscribe(self, callback: SnapshotCallback) -> Disposer:
        """Register a callback for ``(students, matches)`` snapshots.

        The callback is invoked once immediately and again after every
        change. The returned disposer unsubscribes; calling it more than
        once is harmless.
        """
        token = self._next_token
        self._next_token += 1
        self._subscribers[token] = callback
        self._deliver(callback, self.list_students(), self.list_matches())

        def dispose() -> None:
            self._subscribers.pop(token, None)

        return dispose

    @property
    def subscriber_count(self) -> int:
        return len(self._subscribers)

    def _notify(self) -> None:
        """Push a fresh snapshot to every subscriber."""
        if not self._subscribers:
            return
        students = self.list_students()
        matches = self.list_matches()
        # Copy: a callback may dispose its own subscription.
        for callback in list(self._subscribers.values()):
            self._deliver(callback, list(students), list(matches))

    @staticmethod
    def _deliver(
        callback: SnapshotCallback, students: List[Student], matches: List[Match]
    ) -> None:
        try:
            callback(students, matches)
        except Exception:
            logger.exception("Error in store subscription callback:")
