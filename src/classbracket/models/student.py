"""Student data class."""

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
from datetime import datetime, timezone
from typing import Any, Dict, Optional, Union

from dateutil import parser as date_parser

from classbracket.exceptions import InvalidStudentDataException
from classbracket.utils import generate_id, utc_now


def as_utc(value: Optional[datetime]) -> Optional[datetime]:
    """Treat naive timestamps as UTC."""
    if value is not None and value.tzinfo is None:
        return value.replace(tzinfo=timezone.utc)
    return value


def parse_timestamp(value: Union[str, datetime, None]) -> Optional[datetime]:
    """Parse a stored timestamp (ISO-8601 string or datetime)."""
    if value is None or value == "":
        return None
    if isinstance(value, datetime):
        return as_utc(value)
    try:
        return as_utc(date_parser.isoparse(value))
    except (TypeError, ValueError) as e:
        raise InvalidStudentDataException(f"Invalid timestamp: {value!r}") from e


def format_timestamp(value: Optional[datetime]) -> Optional[str]:
    """Serialize a timestamp as ISO-8601, or None."""
    return value.isoformat() if value is not None else None


@dataclass
class Student:
    """A student entered in the tournament.

    Attributes
    ----------
    name : str
        Display name
    id : str
        Opaque stable identifier
    created_at : datetime
        When the student was added to the roster
    eliminated : bool
        Whether the student has lost a match
    eliminated_at : datetime, optional
        When the student was eliminated; set if and only if ``eliminated``
    """

    name: str
    id: str = field(default_factory=lambda: generate_id("Student"))
    created_at: datetime = field(default_factory=utc_now)
    eliminated: bool = False
    eliminated_at: Optional[datetime] = None

    def __post_init__(self) -> None:
        self.created_at = as_utc(self.created_at)
        self.eliminated_at = as_utc(self.eliminated_at)
        if self.eliminated != (self.eliminated_at is not None):
            raise InvalidStudentDataException(
                f"Student {self.name!r}: eliminated_at must be set "
                "if and only if the student is eliminated"
            )

    @property
    def is_active(self) -> bool:
        return not self.eliminated

    def eliminate(self, at: Optional[datetime] = None) -> None:
        """Mark the student as eliminated."""
        self.eliminated = True
        self.eliminated_at = at or utc_now()

    def reactivate(self) -> None:
        """Return an eliminated student to play."""
        self.eliminated = False
        self.eliminated_at = None

    def to_dict(self) -> Dict[str, Any]:
        """Serialize student to dictionary."""
        return {
            "id": self.id,
            "name": self.name,
            "created_at": format_timestamp(self.created_at),
            "eliminated": self.eliminated,
            "eliminated_at": format_timestamp(self.eliminated_at),
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "Student":
        """Deserialize student from dictionary."""
        try:
            return cls(
                id=data["id"],
                name=data["name"],
                created_at=parse_timestamp(data.get("created_at")) or utc_now(),
                eliminated=bool(data.get("eliminated", False)),
                eliminated_at=parse_timestamp(data.get("eliminated_at")),
            )
        except KeyError as e:
            raise InvalidStudentDataException(f"Missing student field: {e}") from e
