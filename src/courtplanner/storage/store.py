"""State store interface and in-memory implementation.

The planner reads one consistent snapshot and hands back a replacement set
for a scope of dates. Stores commit that replacement as a single step so a
half-written schedule is never visible.
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

import threading
from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from datetime import date
from typing import Callable, Dict, Iterable, List, Optional, Tuple, TypeVar

from courtplanner.models.season import Availability, Match
from courtplanner.utils import setup_logger

logger = setup_logger(__name__)

MatchKey = Tuple[date, str, int]
T = TypeVar("T")


@dataclass
class StoreSnapshot:
    """State of the store at one point in time.

    Snapshots returned by ``StateStore.snapshot`` are copies; changing them
    does not touch the store. Inside ``StateStore.transaction`` the snapshot
    is the working copy that gets committed.

    Attributes
    ----------
    matches : list of Match
        Every stored match.
    availability : Availability
        Explicit availability records.
    """

    matches: List[Match] = field(default_factory=list)
    availability: Availability = field(default_factory=Availability)

    def find(self, day: date, time_slot: str, court: int) -> Optional[Match]:
        for match in self.matches:
            if match.key == (day, time_slot, court):
                return match
        return None

    def matches_on(self, day: date, time_slot: Optional[str] = None) -> List[Match]:
        return [
            m
            for m in self.matches
            if m.date == day and (time_slot is None or m.time_slot == time_slot)
        ]

    def copy(self) -> "StoreSnapshot":
        return StoreSnapshot(list(self.matches), self.availability.copy())

    # ========== Changes ==========

    def put(self, match: Match) -> None:
        """Insert or overwrite the match at its (date, slot, court)."""
        self.matches = [m for m in self.matches if m.key != match.key]
        self.matches.append(match)
        self.matches.sort(key=lambda m: m.key)

    def remove(self, day: date, time_slot: str, court: int) -> Optional[Match]:
        """Drop the match at a place and return it, None if there was none."""
        match = self.find(day, time_slot, court)
        if match is not None:
            self.matches.remove(match)
        return match

    def replace(self, matches: Iterable[Match], dates: Optional[Iterable[date]]) -> int:
        """Drop the matches on ``dates`` (every match for None), then add ``matches``.

        Returns:
            Number of dropped matches
        """
        scope = None if dates is None else set(dates)
        kept = [m for m in self.matches if scope is not None and m.date not in scope]
        removed = len(self.matches) - len(kept)
        self.matches = kept
        for match in matches:
            self.put(match)
        return removed


class StateStore(ABC):
    """Durable home of matches and availability.

    All changes go through ``transaction``: checks and writes made by one
    change see the same state and no other writer can slip in between.
    """

    @abstractmethod
    def snapshot(self) -> StoreSnapshot:
        """Return a consistent copy of the stored state."""

    @abstractmethod
    def transaction(self, change: Callable[[StoreSnapshot], T]) -> T:
        """Apply ``change`` to a working copy and commit it as one step.

        If ``change`` raises, or the commit fails, the stored state stays as
        it was and the exception propagates.

        Returns:
            Whatever ``change`` returned
        """

    def replace_scope(self, matches: Iterable[Match], dates: Iterable[date]) -> int:
        """Delete every match on the given dates, then insert ``matches``.

        Matches on other dates are left untouched.
        """
        new_matches = list(matches)
        scope = set(dates)
        removed = self.transaction(lambda state: state.replace(new_matches, scope))
        logger.info(
            f"Replaced {removed} matches with {len(new_matches)} on {len(scope)} dates"
        )
        return removed

    def upsert_match(self, match: Match) -> None:
        """Insert or overwrite the match at its (date, slot, court)."""
        self.transaction(lambda state: state.put(match))

    def delete_match(self, day: date, time_slot: str, court: int) -> bool:
        """Delete a match; returns False if there was none."""
        removed = self.transaction(lambda state: state.remove(day, time_slot, court))
        return removed is not None

    def set_availability(
        self, player: str, day: date, time_slot: str, available: bool
    ) -> None:
        """Write one availability flag."""
        self.transaction(
            lambda state: state.availability.set_available(
                player, day, time_slot, available
            )
        )


class MemoryStore(StateStore):
    """In-process store. A lock serialises writers."""

    def __init__(
        self,
        matches: Optional[Iterable[Match]] = None,
        availability: Optional[Availability] = None,
    ) -> None:
        self._lock = threading.Lock()
        by_key: Dict[MatchKey, Match] = {m.key: m for m in matches or []}
        self._state = StoreSnapshot(
            matches=sorted(by_key.values(), key=lambda m: m.key),
            availability=availability.copy() if availability else Availability(),
        )

    def snapshot(self) -> StoreSnapshot:
        with self._lock:
            return self._state.copy()

    def transaction(self, change: Callable[[StoreSnapshot], T]) -> T:
        with self._lock:
            working = self._state.copy()
            result = change(working)
            self._commit(working)
            self._state = working
            return result

    def _commit(self, state: StoreSnapshot) -> None:
        """Persist ``state`` before it becomes current. Raising aborts the change."""
