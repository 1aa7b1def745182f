"""Match recording and the elimination state machine.

This module handles recording match results with proper validation and error
checking. Losing a match eliminates a student; deleting the match brings them
back.
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

from typing import Optional, Tuple

from classbracket.constants import (
    CHOICES,
    RESULT_TIE,
    RESULT_WIN,
    SLOT_PLAYER1,
    SLOT_PLAYER2,
    WIN_CONDITIONS,
)
from classbracket.exceptions import (
    ClassBracketException,
    EliminatedStudentException,
    InvalidMatchException,
    RepeatMatchException,
    StudentNotFoundException,
)
from classbracket.models import Match, Student
from classbracket.store.base import TournamentStore
from classbracket.type_hints import GameChoice, GameResult, MatchSlot
from classbracket.utils import setup_logger

logger = setup_logger(__name__)


def determine_game_result(
    player1_choice: GameChoice, player2_choice: GameChoice
) -> Tuple[GameResult, Optional[MatchSlot]]:
    """Decide a rock/paper/scissors game.

    Returns:
        Tuple of (result, winning slot); the slot is None on a tie
    """
    for choice in (player1_choice, player2_choice):
        if choice not in CHOICES:
            raise InvalidMatchException(f"Invalid choice: {choice!r}")

    if player1_choice == player2_choice:
        return RESULT_TIE, None
    if WIN_CONDITIONS[player1_choice] == player2_choice:
        return RESULT_WIN, SLOT_PLAYER1
    return RESULT_WIN, SLOT_PLAYER2


class MatchRecorder:
    """Records matches and keeps elimination status in step.

    This class is responsible for:
    - Refusing rematches, self-matches and matches with eliminated students
    - Recording winner-selection and legacy rock/paper/scissors matches
    - Eliminating the loser of a decisive match
    - Reactivating the loser when a match is deleted
    """

    def __init__(self, store: TournamentStore) -> None:
        self.store = store

    def has_played(self, student_a: str, student_b: str) -> bool:
        """Check if two students already have a match on record."""
        return self.store.find_match_between(student_a, student_b) is not None

    def record_match_with_winner(
        self, player1_id: str, player2_id: str, match_result: MatchSlot
    ) -> Match:
        """Record a match where the organiser picks the winning slot.

        Args:
            player1_id: Student in the first slot
            player2_id: Student in the second slot
            match_result: ``"player1"`` or ``"player2"``

        Returns:
            The stored match

        Raises:
            InvalidMatchException: Same student twice or bad slot
            StudentNotFoundException: Unknown student id
            RepeatMatchException: The two students have already played
            EliminatedStudentException: Either student is eliminated
        """
        if match_result not in (SLOT_PLAYER1, SLOT_PLAYER2):
            raise InvalidMatchException(f"Invalid winning slot: {match_result!r}")

        player1, player2 = self._validate_pairing(player1_id, player2_id)
        winner = player1 if match_result == SLOT_PLAYER1 else player2

        match = self.store.add_match(
            Match(
                player1_id=player1.id,
                player1_name=player1.name,
                player2_id=player2.id,
                player2_name=player2.name,
                result=RESULT_WIN,
                match_result=match_result,
                winner=winner.name,
            )
        )
        logger.info(f"Recorded: {player1.name} vs {player2.name}, {winner.name} won")

        self._eliminate_loser(match, player2 if winner is player1 else player1)
        return match

    def record_choice_match(
        self,
        player1_id: str,
        player1_choice: GameChoice,
        player2_id: str,
        player2_choice: GameChoice,
    ) -> Match:
        """Record a legacy match decided by rock/paper/scissors moves.

        A tie eliminates nobody.

        Returns:
            The stored match
        """
        result, slot = determine_game_result(player1_choice, player2_choice)
        player1, player2 = self._validate_pairing(player1_id, player2_id)

        winner: Optional[Student] = None
        if slot == SLOT_PLAYER1:
            winner = player1
        elif slot == SLOT_PLAYER2:
            winner = player2

        match = self.store.add_match(
            Match(
                player1_id=player1.id,
                player1_name=player1.name,
                player1_choice=player1_choice,
                player2_id=player2.id,
                player2_name=player2.name,
                player2_choice=player2_choice,
                result=result,
                winner=winner.name if winner else None,
            )
        )

        if winner is None:
            logger.info(
                f"Recorded tie: {player1.name} ({player1_choice}) vs "
                f"{player2.name} ({player2_choice})"
            )
        else:
            logger.info(
                f"Recorded: {player1.name} ({player1_choice}) vs "
                f"{player2.name} ({player2_choice}), {winner.name} won"
            )
            self._eliminate_loser(match, player2 if winner is player1 else player1)
        return match

    def delete_match(self, match_id: str) -> None:
        """Delete a match and reactivate the student it eliminated.

        Raises:
            MatchNotFoundException: Unknown match id
        """
        match = self.store.get_match(match_id)

        loser_id = self._eliminated_by(match)
        if loser_id is not None:
            try:
                self._reactivate(loser_id)
            except StudentNotFoundException:
                logger.warning(
                    f"Eliminated student {loser_id} is no longer on the roster"
                )

        self.store.delete_match(match_id)
        logger.info(f"Deleted match {match.player1_name} vs {match.player2_name}")

    def _validate_pairing(
        self, player1_id: str, player2_id: str
    ) -> Tuple[Student, Student]:
        """Check that two students may play each other.

        Returns:
            The two students, fetched from the store
        """
        if player1_id == player2_id:
            raise InvalidMatchException("Please select two different players")

        player1 = self.store.get_student(player1_id)
        player2 = self.store.get_student(player2_id)

        if self.has_played(player1.id, player2.id):
            logger.warning(f"Rejected rematch: {player1.name} vs {player2.name}")
            raise RepeatMatchException(
                f"{player1.name} and {player2.name} have already played against each other."
            )
        for student in (player1, player2):
            if student.eliminated:
                logger.warning(f"Rejected match with eliminated student {student.name}")
                raise EliminatedStudentException(
                    f"{student.name} has already been eliminated from the tournament."
                )
        return player1, player2

    @staticmethod
    def _eliminated_by(match: Match) -> Optional[str]:
        """Id of the student a match eliminated, if any.

        The recorded winning slot decides; older matches without one fall
        back to the winner's name.
        """
        if match.is_tie or not match.winner:
            return None
        if match.match_result == SLOT_PLAYER1:
            return match.player2_id
        if match.match_result == SLOT_PLAYER2:
            return match.player1_id
        if match.winner == match.player1_name:
            return match.player2_id
        return match.player1_id

    def _eliminate_loser(self, match: Match, loser: Student) -> None:
        """Eliminate the loser of a stored match, removing the match if that fails."""
        try:
            self._eliminate(loser)
        except ClassBracketException:
            logger.error(f"Could not eliminate {loser.name}, removing match {match.id}")
            self.store.delete_match(match.id)
            raise

    def _eliminate(self, student: Student) -> None:
        student.eliminate()
        self.store.update_student(student)
        logger.info(f"{student.name} eliminated")

    def _reactivate(self, student_id: str) -> None:
        student = self.store.get_student(student_id)
        student.reactivate()
        self.store.update_student(student)
        logger.info(f"{student.name} reactivated")
