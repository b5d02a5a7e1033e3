"""Season and week planning.

This module drives the slot assignment engine over every slot of a scope
(the whole season or one playing day) and produces the replacement set of
matches for that scope.
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

import random
from datetime import date
from typing import List, Optional, Sequence, Tuple

from courtplanner.constants import DEFAULT_GROUP_PATTERNS
from courtplanner.exceptions import DateOutsideSeasonException
from courtplanner.models.season import Match, OpponentHistory, Roster, SeasonConfig
from courtplanner.pairing import DEFAULT_WEIGHTS, ScoringWeights, assign_slot, group_sizes_for
from courtplanner.storage import StoreSnapshot
from courtplanner.type_hints import GroupSizes
from courtplanner.utils import format_date, setup_logger

logger = setup_logger(__name__)


class SeasonPlanner:
    """Builds balanced schedules for a season.

    This class is responsible for:
    - Fixing the opponent history before a run starts
    - Walking the slots of the requested scope in playing order
    - Choosing the court layout of every slot
    - Collecting the matches the assignment engine produces

    The planner never writes; callers commit the returned set through
    ``StateStore.transaction``.
    """

    def __init__(
        self,
        config: SeasonConfig,
        roster: Roster,
        weights: ScoringWeights = DEFAULT_WEIGHTS,
        rng: Optional[random.Random] = None,
        group_patterns: Sequence[GroupSizes] = DEFAULT_GROUP_PATTERNS,
    ):
        """Initialize the planner.

        Args:
            config: Season layout (dates, time slots, courts)
            roster: Players and their skill scores
            weights: Cost weights for the assignment engine
            rng: Random source for tie-break jitter; seed it for repeatable runs
            group_patterns: Court layouts rotated over the slot index
        """
        if not group_patterns:
            raise ValueError("At least one court group pattern is required")
        self.config = config
        self.roster = roster
        self.weights = weights
        self.rng = rng or random.Random()
        self.group_patterns = tuple(tuple(p) for p in group_patterns)

    def group_sizes(self, slot_index: int) -> GroupSizes:
        """Court layout for a slot, cut to the number of courts in the season."""
        return group_sizes_for(slot_index, self.group_patterns)[: self.config.courts]

    def plan_all(self, snapshot: StoreSnapshot) -> List[Match]:
        """Plan every slot of the season.

        History comes from every stored match. The result replaces every
        stored match.
        """
        history = OpponentHistory.from_matches(snapshot.matches)
        slots = list(enumerate(self.config.slots()))
        matches = self._plan_slots(slots, snapshot, history)
        first, last = self.config.start_date, self.config.end_date
        logger.info(
            f"Planned season '{self.config.name}' "
            f"({format_date(first)} to {format_date(last)}): "
            f"{len(matches)} matches over {len(slots)} slots"
        )
        return matches

    def plan_week(self, snapshot: StoreSnapshot, day: date) -> List[Match]:
        """Plan the slots of one playing day.

        History leaves out the day's own stored matches so that a re-plan is
        not biased by the schedule it replaces. The result replaces matches
        on ``day`` only.

        Raises:
            DateOutsideSeasonException: If ``day`` is not a playing day
        """
        if not self.config.contains(day):
            raise DateOutsideSeasonException(
                f"{format_date(day)} is not a playing day of '{self.config.name}'"
            )
        history = OpponentHistory.from_matches(snapshot.matches, exclude_date=day)
        slots = [
            (index, slot)
            for index, slot in enumerate(self.config.slots())
            if slot[0] == day
        ]
        matches = self._plan_slots(slots, snapshot, history)
        logger.info(f"Planned {format_date(day)}: {len(matches)} matches")
        return matches

    def _plan_slots(
        self,
        slots: List[Tuple[int, Tuple[date, str]]],
        snapshot: StoreSnapshot,
        history: OpponentHistory,
    ) -> List[Match]:
        matches: List[Match] = []
        for slot_index, (day, time_slot) in slots:
            available = snapshot.availability.available_players(
                self.roster, day, time_slot
            )
            slot_matches = assign_slot(
                day,
                time_slot,
                self.group_sizes(slot_index),
                available,
                self.roster,
                history,
                self.weights,
                self.rng,
            )
            logger.debug(
                f"{format_date(day)} {time_slot}: {len(available)} available, "
                f"{len(slot_matches)} matches"
            )
            matches.extend(slot_matches)
        return matches
