"""Result recording for competitive matches."""

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
from typing import Callable, Optional, Sequence

from courtplanner.constants import CATEGORY_COMPETITIVE
from courtplanner.exceptions import (
    InvalidResultException,
    PermissionDeniedException,
    ReservationNotFoundException,
)
from courtplanner.models.season import Match, MatchResult, MatchType, SeasonConfig
from courtplanner.storage import StateStore, StoreSnapshot
from courtplanner.utils import format_date, setup_logger

logger = setup_logger(__name__)


class ResultRecorder:
    """Handles recording and validating match results.

    This class is responsible for:
    - Checking that the acting player may set the result
    - Accepting results for competitive matches only
    - Deriving the losing player or team from the winner
    """

    def __init__(self, config: SeasonConfig, store: StateStore):
        self.config = config
        self.store = store

    def mark_winner(
        self,
        acting_player: Optional[str],
        day: date,
        time_slot: str,
        court: int,
        winner: str,
    ) -> Match:
        """Record the winner of a singles match.

        Args:
            acting_player: Player entering the result
            day: Date of the match
            time_slot: Time slot of the match
            court: Court of the match
            winner: Player who won

        Returns:
            The match with its result set

        Raises:
            ReservationNotFoundException: No match at that place
            PermissionDeniedException: Not the admin and not a participant
            InvalidResultException: Not a competitive singles or winner did not play
        """

        def decide(match: Match) -> MatchResult:
            if match.match_type is not MatchType.SINGLE:
                raise InvalidResultException(
                    f"{match.describe()} is a doubles match, name the winning team"
                )
            if winner not in match.players:
                raise InvalidResultException(
                    f"{winner} did not play on {match.describe()}"
                )
            loser = next(p for p in match.players if p != winner)
            return MatchResult.single(winner, loser)

        return self._record(acting_player, day, time_slot, court, decide)

    def mark_winning_team(
        self,
        acting_player: Optional[str],
        day: date,
        time_slot: str,
        court: int,
        winners: Sequence[str],
    ) -> Match:
        """Record the winning team of a doubles match.

        ``winners`` must be the two players of one side, in any order; the
        other side becomes the losing team.

        Raises:
            ReservationNotFoundException: No match at that place
            PermissionDeniedException: Not the admin and not a participant
            InvalidResultException: Not a competitive doubles or not one of its teams
        """

        def decide(match: Match) -> MatchResult:
            if match.match_type is not MatchType.DOUBLE:
                raise InvalidResultException(
                    f"{match.describe()} is a singles match, name one winner"
                )
            team = set(winners)
            if len(winners) != 2 or len(team) != 2:
                raise InvalidResultException("A winning team has two different players")
            if team == set(match.side_a):
                return MatchResult.double(match.side_a, match.side_b)
            if team == set(match.side_b):
                return MatchResult.double(match.side_b, match.side_a)
            raise InvalidResultException(
                f"{' & '.join(winners)} is not a team on {match.describe()}"
            )

        return self._record(acting_player, day, time_slot, court, decide)

    def clear_result(
        self, acting_player: Optional[str], day: date, time_slot: str, court: int
    ) -> Match:
        """Remove a recorded result."""

        def clear(state: StoreSnapshot) -> Match:
            match = self._get(state, day, time_slot, court)
            self._check_permission(acting_player, match)
            updated = match.with_result(None)
            state.put(updated)
            return updated

        updated = self.store.transaction(clear)
        logger.info(f"{updated.describe()}: result cleared")
        return updated

    def _record(
        self,
        acting_player: Optional[str],
        day: date,
        time_slot: str,
        court: int,
        decide: Callable[[Match], MatchResult],
    ) -> Match:
        def record(state: StoreSnapshot) -> Match:
            match = self._get(state, day, time_slot, court)
            self._check_permission(acting_player, match)
            if match.category != CATEGORY_COMPETITIVE:
                raise InvalidResultException(
                    "A winner can only be set for competitive matches"
                )
            if not match.is_complete:
                raise InvalidResultException(f"{match.describe()} is not fully booked")
            updated = match.with_result(decide(match))
            state.put(updated)
            return updated

        updated = self.store.transaction(record)
        result = updated.result
        losers = " & ".join(result.losers)
        logger.info(f"{updated.describe()}: {result.describe()} beat {losers}")
        return updated

    def _check_permission(self, acting_player: Optional[str], match: Match) -> None:
        if acting_player is None:
            raise PermissionDeniedException("Log in to enter results")
        if acting_player != self.config.admin and not match.has_player(acting_player):
            raise PermissionDeniedException(
                "Only the admin or the players of a match can set its winner"
            )

    @staticmethod
    def _get(state: StoreSnapshot, day: date, time_slot: str, court: int) -> Match:
        match = state.find(day, time_slot, court)
        if match is None:
            raise ReservationNotFoundException(
                f"No match on {format_date(day)} {time_slot} court {court}"
            )
        return match
