"""Match (reservation) data classes."""

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

from dataclasses import dataclass, replace
from datetime import date
from enum import Enum
from typing import Any, Dict, List, Optional, Tuple

from courtplanner.constants import (
    CATEGORY_COMPETITIVE,
    CATEGORY_TRAINING,
    MATCH_DOUBLE,
    MATCH_SINGLE,
    PLANNED_CATEGORY,
    PLAYERS_PER_MATCH,
)
from courtplanner.exceptions import InvalidReservationException, InvalidResultException
from courtplanner.type_hints import PairKey, Team
from courtplanner.utils import format_date, parse_date

# Placeholder for a seat nobody has joined yet
EMPTY_SEAT = ""

CATEGORIES = (CATEGORY_TRAINING, CATEGORY_COMPETITIVE)


class MatchType(Enum):
    """Singles (two seats) or doubles (two teams of two)."""

    SINGLE = MATCH_SINGLE
    DOUBLE = MATCH_DOUBLE

    @property
    def seats(self) -> int:
        return PLAYERS_PER_MATCH[self.value]

    @property
    def planned_category(self) -> str:
        """Category the planner tags new matches of this type with."""
        return PLANNED_CATEGORY[self.value]

    @classmethod
    def for_group_size(cls, size: int) -> "MatchType":
        for match_type in cls:
            if match_type.seats == size:
                return match_type
        raise ValueError(f"No match type seats {size} players")


@dataclass(frozen=True)
class MatchResult:
    """Outcome of a competitive match.

    Singles carry one winner and one loser, doubles the two players of the
    winning and of the losing team.

    Attributes
    ----------
    winners : tuple of str
        Winning player or team.
    losers : tuple of str
        Losing player or team.
    """

    winners: Tuple[str, ...]
    losers: Tuple[str, ...]

    def __post_init__(self) -> None:
        object.__setattr__(self, "winners", tuple(self.winners))
        object.__setattr__(self, "losers", tuple(self.losers))
        if len(self.winners) not in (1, 2) or len(self.winners) != len(self.losers):
            raise InvalidResultException(
                f"A result needs one or two winners and as many losers, got "
                f"{list(self.winners)} against {list(self.losers)}"
            )

    @classmethod
    def single(cls, winner: str, loser: str) -> "MatchResult":
        return cls((winner,), (loser,))

    @classmethod
    def double(cls, winners: Team, losers: Team) -> "MatchResult":
        return cls(tuple(winners), tuple(losers))

    @property
    def is_double(self) -> bool:
        return len(self.winners) == 2

    @property
    def winner(self) -> str:
        """Winner of a singles match."""
        return self.winners[0]

    @property
    def loser(self) -> str:
        """Loser of a singles match."""
        return self.losers[0]

    def describe(self) -> str:
        return " & ".join(self.winners)

    def to_dict(self) -> Dict[str, Any]:
        """Serialize match result to dictionary."""
        if self.is_double:
            return {"winners": list(self.winners), "losers": list(self.losers)}
        return {"winner": self.winner, "loser": self.loser}

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "MatchResult":
        """Deserialize match result from dictionary.

        Doubles results are stored as ``winners``/``losers`` lists.
        """
        if "winners" in data:
            return cls(tuple(data["winners"]), tuple(data["losers"]))
        return cls.single(data["winner"], data["loser"])


@dataclass(frozen=True)
class Match:
    """One court booked for one time slot.

    ``players`` always has exactly ``match_type.seats`` entries. For doubles
    the first two form side A and the last two side B. Seats that are still
    open hold ``EMPTY_SEAT``; the planner never produces those.

    Attributes
    ----------
    date : datetime.date
        Calendar day of the match.
    time_slot : str
        Identifier of the evening slot.
    court : int
        Court number, starting at 1.
    match_type : MatchType
        Singles or doubles.
    category : str
        ``"training"`` or ``"wedstrijd"`` (competitive).
    players : tuple of str
        Seated players, in side order.
    result : MatchResult or None
        Recorded outcome, set after the match was played.
    """

    date: date
    time_slot: str
    court: int
    match_type: MatchType
    category: str
    players: Tuple[str, ...]
    result: Optional[MatchResult] = None

    def __post_init__(self) -> None:
        object.__setattr__(self, "players", tuple(self.players))
        if len(self.players) != self.match_type.seats:
            raise InvalidReservationException(
                f"A {self.match_type.value} match needs {self.match_type.seats} "
                f"seats, got {len(self.players)}"
            )
        seated = self.seated_players
        if len(set(seated)) != len(seated):
            raise InvalidReservationException(
                f"Duplicate player in match {self.describe()}: {list(seated)}"
            )
        if self.court < 1:
            raise InvalidReservationException(f"Invalid court number {self.court}")
        if self.category not in CATEGORIES:
            raise InvalidReservationException(f"Unknown category '{self.category}'")
        result_size = self.match_type.seats // 2
        if self.result is not None and len(self.result.winners) != result_size:
            raise InvalidReservationException(
                f"A {self.match_type.value} match cannot hold result "
                f"{self.result.to_dict()}"
            )

    # ========== Constructors ==========

    @classmethod
    def single(
        cls,
        match_date: date,
        time_slot: str,
        court: int,
        player_a: str,
        player_b: str,
        category: str = CATEGORY_COMPETITIVE,
    ) -> "Match":
        return cls(
            match_date, time_slot, court, MatchType.SINGLE, category, (player_a, player_b)
        )

    @classmethod
    def double(
        cls,
        match_date: date,
        time_slot: str,
        court: int,
        team_a: Team,
        team_b: Team,
        category: str = CATEGORY_TRAINING,
    ) -> "Match":
        return cls(
            match_date,
            time_slot,
            court,
            MatchType.DOUBLE,
            category,
            (team_a[0], team_a[1], team_b[0], team_b[1]),
        )

    # ========== Properties ==========

    @property
    def key(self) -> Tuple[date, str, int]:
        """Unique (date, time slot, court) key."""
        return (self.date, self.time_slot, self.court)

    @property
    def seated_players(self) -> Tuple[str, ...]:
        """Players actually seated, open seats left out."""
        return tuple(p for p in self.players if p != EMPTY_SEAT)

    @property
    def is_complete(self) -> bool:
        return EMPTY_SEAT not in self.players

    @property
    def side_a(self) -> Tuple[str, ...]:
        half = self.match_type.seats // 2
        return self.players[:half]

    @property
    def side_b(self) -> Tuple[str, ...]:
        half = self.match_type.seats // 2
        return self.players[half:]

    def opponent_pairs(self) -> List[PairKey]:
        """Unordered pairs of players who face each other in this match.

        Teammates are not opponents. Incomplete matches have no opponent pairs.
        """
        if not self.is_complete:
            return []
        return [frozenset({a, b}) for a in self.side_a for b in self.side_b]

    def has_player(self, player: str) -> bool:
        return player != EMPTY_SEAT and player in self.players

    def with_result(self, result: Optional[MatchResult]) -> "Match":
        return replace(self, result=result)

    def describe(self) -> str:
        return f"{format_date(self.date)} {self.time_slot} court {self.court}"

    # ========== Serialization ==========

    def to_dict(self) -> Dict[str, Any]:
        """Serialize match to dictionary."""
        return {
            "date": format_date(self.date),
            "timeSlot": self.time_slot,
            "court": self.court,
            "matchType": self.match_type.value,
            "category": self.category,
            "players": list(self.players),
            "result": self.result.to_dict() if self.result else None,
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "Match":
        """Deserialize match from dictionary.

        Short player lists from older records are padded with open seats.

        Raises:
            InvalidReservationException: If the record cannot form a valid match
        """
        try:
            match_type = MatchType(data.get("matchType", MATCH_SINGLE))
            players = [p or EMPTY_SEAT for p in data.get("players", [])]
            players += [EMPTY_SEAT] * (match_type.seats - len(players))
            result = data.get("result")
            return cls(
                date=parse_date(data["date"]),
                time_slot=data.get("timeSlot") or data["time_slot"],
                court=int(data["court"]),
                match_type=match_type,
                category=data.get("category", CATEGORY_TRAINING),
                players=tuple(players),
                result=MatchResult.from_dict(result) if result else None,
            )
        except (KeyError, TypeError, ValueError, InvalidResultException) as e:
            raise InvalidReservationException(f"Invalid match record {data!r}: {e}") from e
