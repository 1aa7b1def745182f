"""Match data class."""

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
from datetime import datetime
from typing import Any, Dict, Optional

from classbracket.constants import (
    CHOICES,
    RESULT_TIE,
    RESULT_WIN,
    SLOT_PLAYER1,
    SLOT_PLAYER2,
)
from classbracket.exceptions import InvalidMatchException
from classbracket.models.student import as_utc, format_timestamp, parse_timestamp
from classbracket.type_hints import GameChoice, GameResult, MatchSlot
from classbracket.utils import generate_id, utc_now


@dataclass
class Match:
    """A recorded match between two students.

    Player names are denormalized copies taken when the match was recorded.
    ``winner`` holds the winning student's name and is None on a tie.

    Attributes
    ----------
    player1_id, player2_id : str
        Ids of the two students; order is arbitrary but fixed
    player1_name, player2_name : str
        Display names at recording time
    result : str
        ``"win"`` or ``"tie"``
    match_result : str, optional
        Winning slot (``"player1"`` or ``"player2"``) from the winner-selection flow
    winner : str, optional
        Name of the winning student
    player1_choice, player2_choice : str, optional
        Moves of a legacy rock/paper/scissors match
    """

    player1_id: str
    player1_name: str
    player2_id: str
    player2_name: str
    result: GameResult = RESULT_WIN
    match_result: Optional[MatchSlot] = None
    winner: Optional[str] = None
    player1_choice: Optional[GameChoice] = None
    player2_choice: Optional[GameChoice] = None
    id: str = field(default_factory=lambda: generate_id("Match"))
    created_at: datetime = field(default_factory=utc_now)

    def __post_init__(self) -> None:
        self.created_at = as_utc(self.created_at)
        if self.result not in (RESULT_WIN, RESULT_TIE):
            raise InvalidMatchException(f"Invalid match result: {self.result!r}")
        if self.match_result not in (None, SLOT_PLAYER1, SLOT_PLAYER2):
            raise InvalidMatchException(f"Invalid winning slot: {self.match_result!r}")
        for choice in (self.player1_choice, self.player2_choice):
            if choice is not None and choice not in CHOICES:
                raise InvalidMatchException(f"Invalid choice: {choice!r}")

    @property
    def is_tie(self) -> bool:
        return self.result == RESULT_TIE

    @property
    def winner_slot(self) -> Optional[MatchSlot]:
        """Which slot won, or None for a tie or an unresolvable winner.

        The winner's name decides first; ``match_result`` is only consulted
        when the name matches neither slot.
        """
        if self.is_tie or not self.winner:
            return None
        if self.winner == self.player1_name:
            return SLOT_PLAYER1
        if self.winner == self.player2_name:
            return SLOT_PLAYER2
        return self.match_result

    @property
    def winner_id(self) -> Optional[str]:
        slot = self.winner_slot
        if slot == SLOT_PLAYER1:
            return self.player1_id
        if slot == SLOT_PLAYER2:
            return self.player2_id
        return None

    @property
    def loser_id(self) -> Optional[str]:
        slot = self.winner_slot
        if slot == SLOT_PLAYER1:
            return self.player2_id
        if slot == SLOT_PLAYER2:
            return self.player1_id
        return None

    def is_between(self, student_a: str, student_b: str) -> bool:
        """Check if this match is between two students in either order."""
        return {self.player1_id, self.player2_id} == {student_a, student_b}

    def to_dict(self) -> Dict[str, Any]:
        """Serialize match to dictionary."""
        return {
            "id": self.id,
            "player1_id": self.player1_id,
            "player1_name": self.player1_name,
            "player1_choice": self.player1_choice,
            "player2_id": self.player2_id,
            "player2_name": self.player2_name,
            "player2_choice": self.player2_choice,
            "result": self.result,
            "match_result": self.match_result,
            "winner": self.winner,
            "created_at": format_timestamp(self.created_at),
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "Match":
        """Deserialize match from dictionary."""
        try:
            return cls(
                id=data["id"],
                player1_id=data["player1_id"],
                player1_name=data["player1_name"],
                player2_id=data["player2_id"],
                player2_name=data["player2_name"],
                result=data.get("result", RESULT_WIN),
                match_result=data.get("match_result"),
                winner=data.get("winner"),
                player1_choice=data.get("player1_choice"),
                player2_choice=data.get("player2_choice"),
                created_at=parse_timestamp(data.get("created_at")) or utc_now(),
            )
        except KeyError as e:
            raise InvalidMatchException(f"Missing match field: {e}") from e
