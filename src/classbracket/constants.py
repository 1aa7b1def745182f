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

import math

# --- Constants ---
SAVE_FILE_EXTENSION = ".json"
SAVE_FILE_FILTER = f"Class Bracket Files (*{SAVE_FILE_EXTENSION});;All Files (*)"
CONFIG_ENV_VAR = "CLASSBRACKET_CONFIG"
DEFAULT_LOG_LEVEL = "INFO"

# Match result values
RESULT_WIN = "win"
RESULT_TIE = "tie"

# Winning slot values
SLOT_PLAYER1 = "player1"
SLOT_PLAYER2 = "player2"

# Legacy move-based matches
CHOICE_ROCK = "rock"
CHOICE_PAPER = "paper"
CHOICE_SCISSORS = "scissors"
CHOICES = (CHOICE_ROCK, CHOICE_PAPER, CHOICE_SCISSORS)

# Each choice maps to the choice it beats
WIN_CONDITIONS = {
    CHOICE_ROCK: CHOICE_SCISSORS,
    CHOICE_PAPER: CHOICE_ROCK,
    CHOICE_SCISSORS: CHOICE_PAPER,
}

# Node status labels
STATUS_ACTIVE = "ACTIVE"
STATUS_ELIMINATED = "ELIMINATED"
STATUS_CHAMPION = "CHAMPION"

# Id prefixes used by the rendering layer
NODE_ID_PREFIX = "player-"
EDGE_ID_TEMPLATE = "match-{match_id}-progression"
EDGE_LABEL_TEMPLATE = "Beat {name}"

# Radial layout defaults. The chart is 700 units tall and the center sits
# 200 units right of the chart's half height.
CHART_HEIGHT = 700
DEFAULT_CENTER_X = CHART_HEIGHT / 2 + 200
DEFAULT_CENTER_Y = CHART_HEIGHT / 2
DEFAULT_BASE_RADIUS = 1500.0  # innermost ring
DEFAULT_RADIUS_STEP = 200.0  # gap between rings
DEFAULT_START_ANGLE = -math.pi / 2  # straight up on screen

# Node colours (background, border)
NODE_COLOURS = {
    STATUS_ACTIVE: ("#dcfce7", "#16a34a"),
    STATUS_ELIMINATED: ("#f3f4f6", "#9ca3af"),
    STATUS_CHAMPION: ("#fef3c7", "#f59e0b"),
}
EDGE_COLOUR = "#22c55e"
