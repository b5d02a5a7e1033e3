"""Balanced match assignment for a single time slot.

Courts are filled one after the other. For every court the cheapest
combination of still unused, available players is chosen, where cost is
dominated by skill difference and secondarily by how often the players
have already met. Chosen players are then taken out of the pool for the
remaining courts of the slot.
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

import math
import random
from dataclasses import dataclass
from datetime import date
from typing import Iterable, List, Optional, Sequence, Set, Tuple

from courtplanner.constants import (
    DEFAULT_GROUP_PATTERNS,
    DEFAULT_JITTER,
    DOUBLES_HISTORY_WEIGHT,
    DOUBLES_SKILL_WEIGHT,
    SINGLES_HISTORY_WEIGHT,
    SINGLES_SKILL_WEIGHT,
)
from courtplanner.models.season import Match, MatchType, OpponentHistory, Roster
from courtplanner.type_hints import GroupSizes, TeamSplit
from courtplanner.utils import setup_logger

from .candidates import all_pairs, all_quadruples, team_splits

logger = setup_logger(__name__)


@dataclass(frozen=True)
class ScoringWeights:
    """Cost weights of the assignment engine.

    Attributes
    ----------
    singles_skill : float
        Cost per point of score difference between two singles players.
    singles_history : float
        Cost per previous meeting of two singles players.
    doubles_skill : float
        Cost per point of difference between the two team score sums.
    doubles_history : float
        Cost per previous meeting of each cross-team pair.
    jitter : float
        Upper bound of the random tie-break added to every cost.
    """

    singles_skill: float = SINGLES_SKILL_WEIGHT
    singles_history: float = SINGLES_HISTORY_WEIGHT
    doubles_skill: float = DOUBLES_SKILL_WEIGHT
    doubles_history: float = DOUBLES_HISTORY_WEIGHT
    jitter: float = DEFAULT_JITTER


DEFAULT_WEIGHTS = ScoringWeights()


def group_sizes_for(
    slot_index: int, patterns: Sequence[GroupSizes] = DEFAULT_GROUP_PATTERNS
) -> GroupSizes:
    """Court group sizes for the n-th slot of a planning run.

    Patterns rotate with the slot index; with the default two patterns even
    slots get (4, 4, 2) and odd slots (4, 2, 2).
    """
    return tuple(patterns[slot_index % len(patterns)])


def _jitter(rng: random.Random, weights: ScoringWeights) -> float:
    if weights.jitter <= 0:
        return 0.0
    return rng.random() * weights.jitter


def singles_cost(
    player_a: str,
    player_b: str,
    roster: Roster,
    history: OpponentHistory,
    weights: ScoringWeights = DEFAULT_WEIGHTS,
) -> float:
    """Cost of a singles pairing, without jitter."""
    diff = abs(roster.score_of(player_a) - roster.score_of(player_b))
    seen = history.count(player_a, player_b)
    return diff * weights.singles_skill + seen * weights.singles_history


def doubles_cost(
    split: TeamSplit,
    roster: Roster,
    history: OpponentHistory,
    weights: ScoringWeights = DEFAULT_WEIGHTS,
) -> float:
    """Cost of a doubles team split, without jitter."""
    (x1, x2), (y1, y2) = split
    sum_a = roster.score_of(x1) + roster.score_of(x2)
    sum_b = roster.score_of(y1) + roster.score_of(y2)
    seen = history(x1, y1) + history(x1, y2) + history(x2, y1) + history(x2, y2)
    return abs(sum_a - sum_b) * weights.doubles_skill + seen * weights.doubles_history


def pick_singles(
    candidates: Sequence[str],
    roster: Roster,
    history: OpponentHistory,
    weights: ScoringWeights = DEFAULT_WEIGHTS,
    rng: Optional[random.Random] = None,
) -> Optional[Tuple[str, str]]:
    """Cheapest pair of candidates, or None when fewer than two remain."""
    if len(candidates) < 2:
        return None
    rng = rng or random.Random()

    # Sorted by score so equal-cost pairs are met in a stable order
    ordered = sorted(candidates, key=roster.score_of)
    best: Optional[Tuple[str, str]] = None
    best_cost = math.inf
    for a, b in all_pairs(ordered):
        cost = singles_cost(a, b, roster, history, weights) + _jitter(rng, weights)
        if cost < best_cost:
            best_cost = cost
            best = (a, b)
    return best


def pick_doubles(
    candidates: Sequence[str],
    roster: Roster,
    history: OpponentHistory,
    weights: ScoringWeights = DEFAULT_WEIGHTS,
    rng: Optional[random.Random] = None,
) -> Optional[TeamSplit]:
    """Cheapest team split over every group of four, or None when fewer than four remain."""
    if len(candidates) < 4:
        return None
    rng = rng or random.Random()

    best: Optional[TeamSplit] = None
    best_cost = math.inf
    for quad in all_quadruples(candidates):
        for split in team_splits(quad):
            cost = doubles_cost(split, roster, history, weights) + _jitter(rng, weights)
            if cost < best_cost:
                best_cost = cost
                best = split
    return best


def assign_slot(
    day: date,
    time_slot: str,
    group_sizes: Iterable[int],
    available: Iterable[str],
    roster: Roster,
    history: OpponentHistory,
    weights: ScoringWeights = DEFAULT_WEIGHTS,
    rng: Optional[random.Random] = None,
) -> List[Match]:
    """Fill the courts of one time slot.

    Args:
        day: Date of the slot
        time_slot: Slot identifier
        group_sizes: Seats per court, court 1 first (4 = doubles, 2 = singles)
        available: Players who can play in this slot
        roster: Club roster with skill scores
        history: Opponent history fixed for the whole planning run
        weights: Cost weights
        rng: Random source for the tie-break jitter

    Returns:
        Fully staffed matches. Courts without enough candidates get no match.
    """
    rng = rng or random.Random()
    available_set = set(available)
    used: Set[str] = set()
    matches: List[Match] = []

    for court, size in enumerate(group_sizes, start=1):
        # Roster order keeps enumeration independent of how ``available`` was built
        candidates = [p for p in roster if p in available_set and p not in used]
        match_type = MatchType.for_group_size(size)

        if match_type is MatchType.SINGLE:
            pair = pick_singles(candidates, roster, history, weights, rng)
            if pair is None:
                logger.debug(
                    f"{day} {time_slot} court {court}: {len(candidates)} candidates, "
                    "no singles match"
                )
                continue
            match = Match.single(
                day, time_slot, court, pair[0], pair[1], match_type.planned_category
            )
        else:
            split = pick_doubles(candidates, roster, history, weights, rng)
            if split is None:
                logger.debug(
                    f"{day} {time_slot} court {court}: {len(candidates)} candidates, "
                    "no doubles match"
                )
                continue
            match = Match.double(
                day, time_slot, court, split[0], split[1], match_type.planned_category
            )

        used.update(match.players)
        matches.append(match)

    return matches
