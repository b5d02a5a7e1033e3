"""Player availability per time slot."""

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

from dataclasses import dataclass, field
from datetime import date
from typing import Any, Dict, Iterable, List, Tuple

from courtplanner.utils import format_date, parse_date

from .roster import Roster

AvailabilityKey = Tuple[date, str, str]


@dataclass
class Availability:
    """Opt-out availability records.

    Players are available unless a record says otherwise, so only the
    ``False`` entries matter. ``True`` entries are kept when they were
    written explicitly (e.g. a toggle back), they behave like no record.

    Attributes
    ----------
    records : dict of (date, time slot, player) to bool
        Explicit availability flags.
    """

    records: Dict[AvailabilityKey, bool] = field(default_factory=dict)

    def is_available(self, player: str, day: date, time_slot: str) -> bool:
        return self.records.get((day, time_slot, player)) is not False

    def available_players(self, roster: Roster, day: date, time_slot: str) -> List[str]:
        """Roster players who can play in the slot, in roster order."""
        return [p for p in roster if self.is_available(p, day, time_slot)]

    def set_available(
        self, player: str, day: date, time_slot: str, available: bool
    ) -> None:
        self.records[(day, time_slot, player)] = available

    def toggle(self, player: str, day: date, time_slot: str) -> bool:
        """Flip a player's flag for the slot and return the new value.

        An explicit ``False`` becomes available again; anything else becomes
        unavailable.
        """
        available = not self.is_available(player, day, time_slot)
        self.set_available(player, day, time_slot, available)
        return available

    def copy(self) -> "Availability":
        return Availability(dict(self.records))

    def to_list(self) -> List[Dict[str, Any]]:
        """Serialize availability to a list of records."""
        return [
            {
                "date": format_date(day),
                "timeSlot": slot,
                "player": player,
                "available": available,
            }
            for (day, slot, player), available in sorted(self.records.items())
        ]

    @classmethod
    def from_list(cls, data: Iterable[Dict[str, Any]]) -> "Availability":
        """Deserialize availability from a list of records."""
        records = {}
        for item in data:
            key = (parse_date(item["date"]), item["timeSlot"], item["player"])
            records[key] = bool(item.get("available", True))
        return cls(records)
