"""In-memory roster/match store."""

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

from dataclasses import replace
from typing import Dict, Iterable, List, Optional, Tuple

from classbracket.exceptions import (
    FileSaveException,
    MatchNotFoundException,
    StudentNotFoundException,
)
from classbracket.models import Match, Student
from classbracket.store.base import TournamentStore
from classbracket.utils import setup_logger
from classbracket.utils.validation import validate_student_name_strict

logger = setup_logger(__name__)

Snapshot = Tuple[Dict[str, Student], Dict[str, Match]]


class InMemoryStore(TournamentStore):
    """Store keeping students and matches in dictionaries keyed by id."""

    def __init__(
        self,
        students: Optional[Iterable[Student]] = None,
        matches: Optional[Iterable[Match]] = None,
    ) -> None:
        super().__init__()
        self._students: Dict[str, Student] = {s.id: replace(s) for s in students or []}
        self._matches: Dict[str, Match] = {m.id: replace(m) for m in matches or []}

    # ----- Students -----

    def list_students(self) -> List[Student]:
        return sorted(
            (replace(s) for s in self._students.values()), key=lambda s: s.name
        )

    def get_student(self, student_id: str) -> Student:
        student = self._students.get(student_id)
        if student is None:
            raise StudentNotFoundException(f"Student not found: {student_id}")
        return replace(student)

    def add_student(self, name: str) -> Student:
        student = Student(name=validate_student_name_strict(name))
        snapshot = self._snapshot()
        self._students[student.id] = student
        self._commit(snapshot)
        logger.info(f"Added student {student.name}")
        return replace(student)

    def update_student(self, student: Student) -> Student:
        if student.id not in self._students:
            raise StudentNotFoundException(f"Student not found: {student.id}")
        snapshot = self._snapshot()
        self._students[student.id] = replace(student)
        self._commit(snapshot)
        logger.debug(f"Updated student {student.name}")
        return replace(student)

    def delete_student(self, student_id: str) -> None:
        snapshot = self._snapshot()
        student = self._students.pop(student_id, None)
        if student is None:
            raise StudentNotFoundException(f"Student not found: {student_id}")
        self._commit(snapshot)
        logger.info(f"Removed student {student.name}")

    # ----- Matches -----

    def list_matches(self) -> List[Match]:
        return sorted(
            (replace(m) for m in self._matches.values()),
            key=lambda m: m.created_at,
            reverse=True,
        )

    def get_match(self, match_id: str) -> Match:
        match = self._matches.get(match_id)
        if match is None:
            raise MatchNotFoundException(f"Match not found: {match_id}")
        return replace(match)

    def add_match(self, match: Match) -> Match:
        snapshot = self._snapshot()
        self._matches[match.id] = replace(match)
        self._commit(snapshot)
        logger.debug(
            f"Stored match {match.player1_name} vs {match.player2_name} ({match.id})"
        )
        return replace(match)

    def delete_match(self, match_id: str) -> None:
        snapshot = self._snapshot()
        if self._matches.pop(match_id, None) is None:
            raise MatchNotFoundException(f"Match not found: {match_id}")
        self._commit(snapshot)
        logger.debug(f"Deleted match {match_id}")

    # ----- Writes -----

    def _snapshot(self) -> Snapshot:
        return dict(self._students), dict(self._matches)

    def _commit(self, snapshot: Snapshot) -> None:
        """Persist a write and notify subscribers.

        If persisting fails the store goes back to ``snapshot`` and nobody
        is notified.
        """
        try:
            self._persist()
        except FileSaveException:
            self._students, self._matches = snapshot
            logger.error("Write could not be saved, changes rolled back")
            raise
        self._notify()

    def _persist(self) -> None:
        """Hook run after every write, before subscribers hear about it."""
