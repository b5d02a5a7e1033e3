"""Manual reservations.

Players book courts themselves, either with a full line-up or seat by seat.
Every change goes through the same checks the planner guarantees by
construction: roster membership, availability and no double booking.
"""

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

from dataclasses import replace
from datetime import date
from typing import Optional, Sequence, Set

from courtplanner.constants import CATEGORY_TRAINING
from courtplanner.exceptions import (
    DateOutsideSeasonException,
    DoubleBookingException,
    InvalidReservationException,
    PermissionDeniedException,
    PlayerUnavailableException,
    ReservationNotFoundException,
)
from courtplanner.models.season import EMPTY_SEAT, Match, MatchType, Roster, SeasonConfig
from courtplanner.storage import StateStore, StoreSnapshot
from courtplanner.utils import format_date, setup_logger

logger = setup_logger(__name__)


def players_in_slot(
    snapshot: StoreSnapshot, day: date, time_slot: str, exclude_court: Optional[int] = None
) -> Set[str]:
    """Players booked on any court of a slot."""
    booked: Set[str] = set()
    for match in snapshot.matches_on(day, time_slot):
        if match.court != exclude_court:
            booked.update(match.seated_players)
    return booked


class ReservationManager:
    """Handles manual booking, joining, leaving and removal of matches."""

    def __init__(self, config: SeasonConfig, roster: Roster, store: StateStore):
        self.config = config
        self.roster = roster
        self.store = store

    def is_admin(self, player: Optional[str]) -> bool:
        return player is not None and player == self.config.admin

    def can_modify(self, acting_player: Optional[str], match: Match) -> bool:
        """Admin may edit everything, players only matches they play in."""
        if acting_player is None:
            return False
        return self.is_admin(acting_player) or match.has_player(acting_player)

    def require_admin(self, acting_player: Optional[str], action: str) -> None:
        if not self.is_admin(acting_player):
            raise PermissionDeniedException(f"Only the admin can {action}")

    # ========== Booking ==========

    def reserve(
        self,
        acting_player: str,
        day: date,
        time_slot: str,
        court: int,
        match_type: MatchType,
        players: Sequence[str],
        category: str = CATEGORY_TRAINING,
    ) -> Match:
        """Book a court with a complete line-up, overwriting what was there.

        Raises:
            InvalidReservationException: Wrong number of players or bad slot
            PlayerNotFoundException: A player is not on the roster
            PlayerUnavailableException: A player opted out of the slot
            DoubleBookingException: A player already plays on another court
        """
        if not acting_player:
            raise PermissionDeniedException("Log in to reserve a court")
        self._check_slot(day, time_slot, court)
        players = [p for p in players if p]
        if len(players) != match_type.seats:
            raise InvalidReservationException(
                f"Select all {match_type.seats} players for this court"
            )
        match = Match(day, time_slot, court, match_type, category, tuple(players))

        def book(state: StoreSnapshot) -> None:
            existing = state.find(day, time_slot, court)
            if existing is not None and not self.can_modify(acting_player, existing):
                raise PermissionDeniedException(
                    f"{acting_player} cannot overwrite the match on "
                    f"{existing.describe()}"
                )
            self._check_players(state, match, players)
            state.put(match)

        self.store.transaction(book)
        logger.info(f"{acting_player} reserved {match.describe()}: {', '.join(players)}")
        return match

    def join(
        self,
        player: str,
        day: date,
        time_slot: str,
        court: int,
        match_type: MatchType = MatchType.SINGLE,
        seat: Optional[int] = None,
        category: str = CATEGORY_TRAINING,
    ) -> Match:
        """Take a seat on a court, opening a new match if the court is free.

        ``match_type`` and ``category`` only apply when a new match is opened.
        Without ``seat`` the first open seat is taken.
        """
        self._check_slot(day, time_slot, court)

        def take_seat(state: StoreSnapshot) -> Match:
            match = state.find(day, time_slot, court)
            if match is None:
                match = Match(
                    day,
                    time_slot,
                    court,
                    match_type,
                    category,
                    (EMPTY_SEAT,) * match_type.seats,
                )
            if match.has_player(player):
                return match

            open_seats = [i for i, p in enumerate(match.players) if p == EMPTY_SEAT]
            chosen = seat
            if chosen is None:
                if not open_seats:
                    raise InvalidReservationException(f"{match.describe()} is full")
                chosen = open_seats[0]
            elif chosen not in open_seats:
                raise InvalidReservationException(
                    f"Seat {chosen} on {match.describe()} is not free"
                )

            seated = list(match.players)
            seated[chosen] = player
            updated = replace(match, players=tuple(seated), result=None)
            self._check_players(state, updated, [player])
            state.put(updated)
            logger.info(f"{player} joined {updated.describe()} (seat {chosen})")
            return updated

        return self.store.transaction(take_seat)

    def leave(
        self, acting_player: str, player: str, day: date, time_slot: str, court: int
    ) -> Optional[Match]:
        """Free a player's seat. A match left without players is removed.

        Returns:
            The updated match, or None when it was removed
        """
        if acting_player != player and not self.is_admin(acting_player):
            raise PermissionDeniedException(f"{acting_player} cannot remove {player}")

        def free_seat(state: StoreSnapshot) -> Optional[Match]:
            match = self._get(state, day, time_slot, court)
            if not match.has_player(player):
                raise InvalidReservationException(
                    f"{player} does not play on {match.describe()}"
                )

            seated = tuple(EMPTY_SEAT if p == player else p for p in match.players)
            if not any(seated):
                state.remove(day, time_slot, court)
                logger.info(f"{player} left {match.describe()}, court is free again")
                return None

            updated = replace(match, players=seated, result=None)
            state.put(updated)
            logger.info(f"{player} left {match.describe()}")
            return updated

        return self.store.transaction(free_seat)

    # ========== Removal ==========

    def remove(self, acting_player: str, day: date, time_slot: str, court: int) -> Match:
        """Delete a reservation.

        Raises:
            ReservationNotFoundException: Nothing is booked there
            PermissionDeniedException: Not the admin and not a participant
        """

        def drop(state: StoreSnapshot) -> Match:
            match = self._get(state, day, time_slot, court)
            if not self.can_modify(acting_player, match):
                raise PermissionDeniedException(
                    "You can only remove your own matches (or be the admin)"
                )
            state.remove(day, time_slot, court)
            return match

        match = self.store.transaction(drop)
        logger.info(f"{acting_player} removed {match.describe()}")
        return match

    def clear_season(self, acting_player: str) -> int:
        """Remove every match of the season. Admin only.

        Returns:
            Number of removed matches
        """
        self.require_admin(acting_player, "clear the season")
        removed = self.store.replace_scope([], self.config.dates())
        logger.info(f"Cleared {removed} matches from '{self.config.name}'")
        return removed

    # ========== Availability ==========

    def toggle_availability(
        self, acting_player: str, player: str, day: date, time_slot: str
    ) -> bool:
        """Flip a player's availability for a slot and return the new value."""
        if not acting_player:
            raise PermissionDeniedException("Log in to change availability")
        if acting_player != player and not self.is_admin(acting_player):
            raise PermissionDeniedException(
                f"{acting_player} cannot change availability of {player}"
            )
        self.roster.require([player])
        self._check_slot(day, time_slot)
        available = self.store.transaction(
            lambda state: state.availability.toggle(player, day, time_slot)
        )
        logger.info(
            f"{player} is {'available' if available else 'unavailable'} on "
            f"{format_date(day)} {time_slot}"
        )
        return available

    # ========== Helpers ==========

    @staticmethod
    def _get(state: StoreSnapshot, day: date, time_slot: str, court: int) -> Match:
        match = state.find(day, time_slot, court)
        if match is None:
            raise ReservationNotFoundException(
                f"No reservation on {format_date(day)} {time_slot} court {court}"
            )
        return match

    def _check_slot(self, day: date, time_slot: str, court: Optional[int] = None) -> None:
        if not self.config.contains(day):
            raise DateOutsideSeasonException(
                f"{format_date(day)} is not a playing day of '{self.config.name}'"
            )
        if time_slot not in self.config.time_slots:
            raise InvalidReservationException(f"Unknown time slot '{time_slot}'")
        if court is not None and not self.config.is_valid_court(court):
            raise InvalidReservationException(
                f"Court must be between 1 and {self.config.courts}, got {court}"
            )

    def _check_players(
        self, snapshot: StoreSnapshot, match: Match, players: Sequence[str]
    ) -> None:
        self.roster.require(players)
        unavailable = [
            p
            for p in players
            if not snapshot.availability.is_available(p, match.date, match.time_slot)
        ]
        if unavailable:
            raise PlayerUnavailableException(
                f"Not available on {format_date(match.date)} {match.time_slot}: "
                f"{', '.join(unavailable)}"
            )
        booked = players_in_slot(snapshot, match.date, match.time_slot, match.court)
        clashes = [p for p in players if p in booked]
        if clashes:
            raise DoubleBookingException(
                f"Already playing in {match.time_slot}: {', '.join(clashes)}"
            )
