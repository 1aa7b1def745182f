"""Type hints used in Class Bracket."""

from typing import Callable, Dict, List, Literal, Tuple

# Result of a recorded match
GameResult = Literal["win", "tie"]

# Which slot of a match won
MatchSlot = Literal["player1", "player2"]

# Legacy move-based matches
GameChoice = Literal["rock", "paper", "scissors"]

# List of students
Students = List["Student"]
# List of matches
Matches = List["Match"]
# Student id -> number of wins
WinCounts = Dict[str, int]
# Snapshot pushed to store subscribers
Snapshot = Tuple[Students, Matches]
SnapshotCallback = Callable[[Students, Matches], None]
# Returned by subscribe(), cancels the subscription
Disposer = Callable[[], None]
