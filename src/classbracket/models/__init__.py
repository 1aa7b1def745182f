"""Roster and match history models."""

from classbracket.models.match import Match
from classbracket.models.student import Student

__all__ = ["Match", "Student"]
