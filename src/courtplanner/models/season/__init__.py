"""Season data models."""

from .availability import Availability
from .match import EMPTY_SEAT, Match, MatchResult, MatchType
from .opponent_history import OpponentHistory
from .roster import Roster
from .season_config import SeasonConfig

__all__ = [
    "Availability",
    "EMPTY_SEAT",
    "Match",
    "MatchResult",
    "MatchType",
    "OpponentHistory",
    "Roster",
    "SeasonConfig",
]
