"""Main Club class - orchestrates all season operations.

This is the primary interface for the club's season, coordinating the
planner, reservations and results over one state store.
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

import json
import random
from datetime import date
from pathlib import Path
from typing import List, Optional, Tuple, Union

from courtplanner.controllers.season import (
    LadderEntry,
    ReservationManager,
    ResultRecorder,
    SeasonPlanner,
    compute_doubles_ladder,
    compute_ladder,
)
from courtplanner.exceptions import FileLoadException, InvalidConfigurationException
from courtplanner.models.season import Match, Roster, SeasonConfig
from courtplanner.pairing import DEFAULT_WEIGHTS, ScoringWeights
from courtplanner.storage import StateStore, StoreSnapshot
from courtplanner.utils import format_date, setup_logger

logger = setup_logger(__name__)


def load_club_file(path: Union[str, Path]) -> Tuple[SeasonConfig, Roster]:
    """Read season settings and roster from a JSON club file.

    The file may hold a ``season`` object (see ``SeasonConfig.from_dict``) and a
    ``roster`` object mapping player to score. Missing sections use defaults.

    Raises:
        FileLoadException: If the file cannot be read or parsed
        InvalidConfigurationException: If a section has the wrong shape
    """
    try:
        with open(path, "r", encoding="utf-8") as f:
            data = json.load(f)
    except (OSError, json.JSONDecodeError) as e:
        raise FileLoadException(f"Cannot load club file {path}: {e}") from e

    if not isinstance(data, dict):
        raise InvalidConfigurationException(f"Club file {path} must hold an object")
    season = data.get("season", {})
    roster = data.get("roster")
    if not isinstance(season, dict):
        raise InvalidConfigurationException("'season' must be an object")
    if roster is not None and not isinstance(roster, dict):
        raise InvalidConfigurationException("'roster' must map players to scores")

    config = SeasonConfig.from_dict(season)
    return config, Roster.from_dict(roster) if roster is not None else Roster.default()


class Club:
    """Season management for one club.

    This class coordinates all operations through specialized managers:
    - SeasonPlanner: builds balanced schedules
    - ReservationManager: manual bookings and availability
    - ResultRecorder: winners of competitive matches

    Planning reads the store and commits its result in one store transaction.
    """

    def __init__(
        self,
        store: StateStore,
        config: Optional[SeasonConfig] = None,
        roster: Optional[Roster] = None,
        weights: ScoringWeights = DEFAULT_WEIGHTS,
        rng: Optional[random.Random] = None,
    ) -> None:
        self.store = store
        self.config = config or SeasonConfig()
        self.roster = roster or Roster.default()

        self.planner = SeasonPlanner(self.config, self.roster, weights, rng)
        self.reservations = ReservationManager(self.config, self.roster, store)
        self.results = ResultRecorder(self.config, store)

    # ========== Planning ==========

    def plan_all(self, acting_player: str) -> List[Match]:
        """Replace every stored match with a freshly planned season. Admin only."""
        self.reservations.require_admin(acting_player, "plan the season")

        def replan(state: StoreSnapshot) -> List[Match]:
            matches = self.planner.plan_all(state)
            removed = state.replace(matches, None)
            logger.info(
                f"{acting_player} re-planned the season, {removed} matches dropped"
            )
            return matches

        return self.store.transaction(replan)

    def plan_week(self, acting_player: str, day: date) -> List[Match]:
        """Replace one playing day with a freshly planned schedule. Admin only."""
        self.reservations.require_admin(acting_player, "plan a week")

        def replan(state: StoreSnapshot) -> List[Match]:
            matches = self.planner.plan_week(state, day)
            state.replace(matches, [day])
            logger.info(f"{acting_player} re-planned {format_date(day)}")
            return matches

        return self.store.transaction(replan)

    # ========== Queries ==========

    def schedule(self, day: Optional[date] = None) -> List[Match]:
        """Stored matches, optionally for one day, ordered by slot and court."""
        matches = self.store.snapshot().matches
        if day is not None:
            matches = [m for m in matches if m.date == day]
        slot_order = {slot: i for i, slot in enumerate(self.config.time_slots)}
        return sorted(
            matches,
            key=lambda m: (m.date, slot_order.get(m.time_slot, len(slot_order)), m.court),
        )

    def ladder(self, doubles: bool = False) -> List[LadderEntry]:
        """Singles standings, or the doubles ladder with ``doubles``."""
        compute = compute_doubles_ladder if doubles else compute_ladder
        return compute(self.store.snapshot().matches, self.roster)
