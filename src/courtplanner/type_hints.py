"""Type hints used in Court Planner."""

from datetime import date
from typing import FrozenSet, Tuple

# Unordered pair of players
PairKey = FrozenSet[str]
# Two players playing on the same side
Team = Tuple[str, str]
# (teamA, teamB) for one doubles match
TeamSplit = Tuple[Team, Team]
Quadruple = Tuple[str, str, str, str]
# (date, time slot)
SlotKey = Tuple[date, str]
# Seats per court for one slot, e.g. (4, 4, 2)
GroupSizes = Tuple[int, ...]
