# Court Planner
# Copyright (C) 2025  Court Planner developers
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

from datetime import date

# --- Constants ---
STORE_FILE_EXTENSION = ".json"
DATE_FORMAT = "%Y-%m-%d"

# Match types
MATCH_SINGLE = "single"
MATCH_DOUBLE = "double"

# Match categories
CATEGORY_TRAINING = "training"
CATEGORY_COMPETITIVE = "wedstrijd"

# Seats per match type
PLAYERS_PER_MATCH = {
    MATCH_SINGLE: 2,
    MATCH_DOUBLE: 4,
}

# Category given to matches created by the planner
PLANNED_CATEGORY = {
    MATCH_SINGLE: CATEGORY_COMPETITIVE,
    MATCH_DOUBLE: CATEGORY_TRAINING,
}

# Season layout
DEFAULT_SEASON_NAME = "Season 2025-2026"
DEFAULT_SEASON_START = date(2025, 9, 28)
DEFAULT_NUM_WEEKS = 20
DEFAULT_TIME_SLOTS = ("18u30-19u30", "19u30-20u30")
DEFAULT_NUM_COURTS = 3
DEFAULT_ADMIN = "Mattias"

# Court group sizes per slot: 4 = doubles, 2 = singles.
# Even slot indexes use the first pattern, odd ones the second.
DEFAULT_GROUP_PATTERNS = ((4, 4, 2), (4, 2, 2))

# Cost weights for the slot assignment engine
SINGLES_SKILL_WEIGHT = 12
SINGLES_HISTORY_WEIGHT = 60
DOUBLES_SKILL_WEIGHT = 15
DOUBLES_HISTORY_WEIGHT = 1
DEFAULT_JITTER = 0.5

# Club roster: player -> skill score
DEFAULT_PLAYER_SCORES = {
    "Mattias": 55,
    "Ruben": 70,
    "Seppe": 55,
    "Tibo": 60,
    "Aaron": 50,
    "Koenraad": 10,
    "Brent": 5,
    "Nicolas": 15,
    "Remi": 20,
    "SanderD": 25,
    "Gilles": 10,
    "Thomas": 35,
    "Wout": 20,
    "SanderB": 75,
}
