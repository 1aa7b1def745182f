"""Controllers sitting between the store and the user interfaces."""

from classbracket.controllers.bracket_controller import BracketController
from classbracket.controllers.match_recorder import MatchRecorder, determine_game_result
from classbracket.controllers.roster import RosterManager

__all__ = [
    "BracketController",
    "MatchRecorder",
    "RosterManager",
    "determine_game_result",
]
