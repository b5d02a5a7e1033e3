"""Ladder standings.

The singles ladder counts competitive singles with a recorded winner. The
doubles ladder counts every competitive doubles match a player sits in;
both players of a winning team get the win.
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

from dataclasses import dataclass
from typing import Dict, Iterable, List

from courtplanner.constants import CATEGORY_COMPETITIVE
from courtplanner.models.season import Match, MatchType, Roster


@dataclass
class LadderEntry:
    """Standing of one player.

    Attributes
    ----------
    player : str
        Player name.
    wins : int
        Matches won.
    matches : int
        Matches counted for the ladder.
    """

    player: str
    wins: int = 0
    matches: int = 0

    @property
    def losses(self) -> int:
        """Counted matches not won."""
        return self.matches - self.wins

    @property
    def win_percentage(self) -> int:
        """Rounded share of matches won, 0 without matches."""
        if not self.matches:
            return 0
        return round(self.wins / self.matches * 100)


def counts_for_ladder(match: Match, match_type: MatchType = MatchType.SINGLE) -> bool:
    return match.category == CATEGORY_COMPETITIVE and match.match_type is match_type


def _ranked(entries: Dict[str, LadderEntry]) -> List[LadderEntry]:
    return sorted(entries.values(), key=lambda e: (-e.wins, -e.matches, e.player))


def compute_ladder(matches: Iterable[Match], roster: Roster) -> List[LadderEntry]:
    """Singles standings of every roster player.

    Sorted by wins, then matches played (both descending), then name.
    Results naming a player outside the roster are ignored.
    """
    entries: Dict[str, LadderEntry] = {p: LadderEntry(p) for p in roster}
    for match in matches:
        if not counts_for_ladder(match) or match.result is None:
            continue
        winner, loser = match.result.winner, match.result.loser
        if winner not in entries or loser not in entries:
            continue
        entries[winner].wins += 1
        entries[winner].matches += 1
        entries[loser].matches += 1

    return _ranked(entries)


def compute_doubles_ladder(
    matches: Iterable[Match], roster: Roster
) -> List[LadderEntry]:
    """Doubles standings of every roster player.

    Every seated roster player of a competitive doubles match is credited
    with a match, decided or not. Both players of the winning team get a
    win. Sorted like the singles ladder.
    """
    entries: Dict[str, LadderEntry] = {p: LadderEntry(p) for p in roster}
    for match in matches:
        if not counts_for_ladder(match, MatchType.DOUBLE):
            continue
        for player in match.seated_players:
            if player in entries:
                entries[player].matches += 1
        if match.result is not None:
            for player in match.result.winners:
                if player in entries:
                    entries[player].wins += 1

    return _ranked(entries)
