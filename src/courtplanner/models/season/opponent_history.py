"""Opponent history: how often two players have faced each other."""

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

from collections import Counter
from dataclasses import dataclass, field
from datetime import date
from typing import Iterable, Optional

from .match import Match


@dataclass
class OpponentHistory:
    """
    Counts prior meetings per unordered pair of players.

    Only opposing players count; teammates in a doubles match are not
    opponents. Category does not matter, training matches count as well.

    Attributes
    ----------
    pair_counts : Counter of frozenset of str
        Number of matches in which the two players were on opposite sides.
    """

    pair_counts: Counter = field(default_factory=Counter)

    def add_match(self, match: Match) -> None:
        """Record every opposing pair of a match. Incomplete matches add nothing."""
        for pair in match.opponent_pairs():
            self.pair_counts[pair] += 1

    def count(self, player1: str, player2: str) -> int:
        """How many times two players have faced each other."""
        return self.pair_counts.get(frozenset({player1, player2}), 0)

    def __call__(self, player1: str, player2: str) -> int:
        return self.count(player1, player2)

    @classmethod
    def from_matches(
        cls, matches: Iterable[Match], exclude_date: Optional[date] = None
    ) -> "OpponentHistory":
        """Build the history from stored matches.

        Args:
            matches: Previously recorded matches
            exclude_date: Leave out matches on this day (used when re-planning it)
        """
        history = cls()
        for match in matches:
            if exclude_date is not None and match.date == exclude_date:
                continue
            history.add_match(match)
        return history
