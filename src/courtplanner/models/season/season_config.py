"""SeasonConfig data class."""

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

from dataclasses import dataclass
from datetime import date
from typing import Any, Dict, List, Tuple

from dateutil.relativedelta import relativedelta

from courtplanner.constants import (
    DEFAULT_ADMIN,
    DEFAULT_NUM_COURTS,
    DEFAULT_NUM_WEEKS,
    DEFAULT_SEASON_NAME,
    DEFAULT_SEASON_START,
    DEFAULT_TIME_SLOTS,
)
from courtplanner.exceptions import InvalidConfigurationException
from courtplanner.type_hints import SlotKey
from courtplanner.utils import parse_date


@dataclass(frozen=True)
class SeasonConfig:
    """Season configuration settings.

    Attributes
    ----------
    name : str
        Season name.
    start_date : datetime.date
        First playing day. Every following playing day is one week later.
    num_weeks : int
        Number of playing days in the season.
    time_slots : tuple of str
        Named evening slots, in playing order.
    courts : int
        Number of courts available in every slot.
    admin : str
        Player allowed to plan the season and edit any reservation.
    """

    name: str = DEFAULT_SEASON_NAME
    start_date: date = DEFAULT_SEASON_START
    num_weeks: int = DEFAULT_NUM_WEEKS
    time_slots: Tuple[str, ...] = DEFAULT_TIME_SLOTS
    courts: int = DEFAULT_NUM_COURTS
    admin: str = DEFAULT_ADMIN

    def __post_init__(self) -> None:
        object.__setattr__(self, "time_slots", tuple(self.time_slots))
        if self.num_weeks < 1:
            raise InvalidConfigurationException("A season needs at least one week")
        if self.courts < 1:
            raise InvalidConfigurationException("A season needs at least one court")
        if not self.time_slots:
            raise InvalidConfigurationException("A season needs at least one time slot")
        if len(set(self.time_slots)) != len(self.time_slots):
            raise InvalidConfigurationException(
                f"Duplicate time slot in {list(self.time_slots)}"
            )

    def dates(self) -> List[date]:
        """All playing days of the season, one per week."""
        return [
            self.start_date + relativedelta(weeks=+week)
            for week in range(self.num_weeks)
        ]

    @property
    def end_date(self) -> date:
        return self.start_date + relativedelta(weeks=+(self.num_weeks - 1))

    def contains(self, day: date) -> bool:
        return day in self.dates()

    def slots(self) -> List[SlotKey]:
        """Every (date, time slot) of the season in playing order."""
        return [(day, slot) for day in self.dates() for slot in self.time_slots]

    def is_valid_court(self, court: int) -> bool:
        return 1 <= court <= self.courts

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "SeasonConfig":
        """Deserialize configuration from dictionary.

        Raises:
            InvalidConfigurationException: If a value has the wrong type
        """
        try:
            return cls(
                name=data.get("name", DEFAULT_SEASON_NAME),
                start_date=parse_date(data.get("start_date", DEFAULT_SEASON_START)),
                num_weeks=int(data.get("num_weeks", DEFAULT_NUM_WEEKS)),
                time_slots=tuple(data.get("time_slots", DEFAULT_TIME_SLOTS)),
                courts=int(data.get("courts", DEFAULT_NUM_COURTS)),
                admin=data.get("admin", DEFAULT_ADMIN),
            )
        except (TypeError, ValueError) as e:
            raise InvalidConfigurationException(f"Invalid season configuration: {e}") from e
