"""Roster management: bulk import and search."""

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

from classbracket.exceptions import (
    InvalidStudentDataException,
    StudentNotFoundException,
)
from classbracket.models import Student
from classbracket.store.base import TournamentStore
from classbracket.utils import setup_logger
from classbracket.utils.validation import parse_roster_text, validate_student_name

logger = setup_logger(__name__)


def filter_students(
    students: Iterable[Student], term: str = "", active_only: bool = False
) -> List[Student]:
    """Students whose name contains ``term``, ignoring case."""
    needle = term.strip().lower()
    return [
        s
        for s in students
        if needle in s.name.lower() and not (active_only and s.eliminated)
    ]


class RosterManager:
    """Adds students to the store and looks them up."""

    def __init__(self, store: TournamentStore) -> None:
        self.store = store

    def import_students(self, text: str) -> List[Student]:
        """Add one student per non-blank line of ``text``.

        Returns:
            The created students, in input order

        Raises:
            InvalidStudentDataException: If no line holds a valid name
        """
        names = []
        for line in parse_roster_text(text):
            result = validate_student_name(line)
            if result:
                names.append(result.sanitized_value)
            else:
                logger.warning(f"Skipping roster line {line!r}: {result.error_message}")

        if not names:
            raise InvalidStudentDataException("No valid student names found")

        created = [self.store.add_student(name) for name in names]
        logger.info(f"Imported {len(created)} students")
        return created

    def active_students(self) -> List[Student]:
        return [s for s in self.store.list_students() if not s.eliminated]

    def search_students(self, term: str, active_only: bool = False) -> List[Student]:
        """Case-insensitive substring search on names."""
        return filter_students(self.store.list_students(), term, active_only)

    def resolve(self, reference: str) -> Student:
        """Find a student by id, or by exact (case-insensitive) name.

        Raises:
            StudentNotFoundException: No match, or the name is ambiguous
        """
        students = self.store.list_students()
        for student in students:
            if student.id == reference:
                return student

        wanted = reference.strip().lower()
        named = [s for s in students if s.name.lower() == wanted]
        if len(named) == 1:
            return named[0]
        if len(named) > 1:
            raise StudentNotFoundException(
                f"Several students are called {reference!r}; use an id instead"
            )
        raise StudentNotFoundException(f"Student not found: {reference}")
