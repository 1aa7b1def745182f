"""JSON file backed roster/match store.

The file holds a single object::

    {"students": [...], "matches": [...]}

and is rewritten after every change.
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

import json
import os
from pathlib import Path
from typing import Any, Dict, Iterable, Optional, Union

from classbracket.exceptions import (
    ClassBracketException,
    FileLoadException,
    FileSaveException,
)
from classbracket.models import Match, Student
from classbracket.store.memory import InMemoryStore
from classbracket.utils import setup_logger

logger = setup_logger(__name__)


class JsonFileStore(InMemoryStore):
    """In-memory store persisted to a JSON file.

    A missing file starts an empty tournament; the file is created on the
    first write. Passing students or matches writes them to ``path`` at once,
    replacing whatever the file held.
    """

    def __init__(
        self,
        path: Union[str, Path],
        students: Optional[Iterable[Student]] = None,
        matches: Optional[Iterable[Match]] = None,
    ) -> None:
        super().__init__(students, matches)
        self.path = Path(path)
        if students is not None or matches is not None:
            self.save()
        elif self.path.exists():
            self._load()
        else:
            logger.info(f"No store file at {self.path}, starting empty")

    def _load(self) -> None:
        try:
            with open(self.path, "r", encoding="utf-8") as f:
                data = json.load(f)
            students = [Student.from_dict(s) for s in data.get("students", [])]
            matches = [Match.from_dict(m) for m in data.get("matches", [])]
        except (OSError, json.JSONDecodeError, AttributeError) as e:
            raise FileLoadException(f"Could not load {self.path}: {e}") from e
        except ClassBracketException as e:
            raise FileLoadException(f"Invalid data in {self.path}: {e}") from e

        self._students = {s.id: s for s in students}
        self._matches = {m.id: m for m in matches}
        logger.info(
            f"Loaded {len(students)} students and {len(matches)} matches "
            f"from {self.path}"
        )

    def to_dict(self) -> Dict[str, Any]:
        """Serialize the whole store to dictionary."""
        return {
            "students": [s.to_dict() for s in self.list_students()],
            "matches": [m.to_dict() for m in self.list_matches()],
        }

    def save(self) -> None:
        """Write the store to disk, replacing the file in one step."""
        tmp_path = self.path.with_name(self.path.name + ".tmp")
        try:
            self.path.parent.mkdir(parents=True, exist_ok=True)
            with open(tmp_path, "w", encoding="utf-8") as f:
                json.dump(self.to_dict(), f, indent=2)
            os.replace(tmp_path, self.path)
        except OSError as e:
            raise FileSaveException(f"Could not save {self.path}: {e}") from e
        logger.debug(f"Saved store to {self.path}")

    def _persist(self) -> None:
        self.save()
