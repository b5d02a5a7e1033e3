"""Club roster: the fixed set of players and their skill scores."""

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
from types import MappingProxyType
from typing import Any, Iterable, Iterator, List, Mapping

from courtplanner.constants import DEFAULT_PLAYER_SCORES
from courtplanner.exceptions import PlayerNotFoundException
from courtplanner.utils import setup_logger

logger = setup_logger(__name__)


@dataclass(frozen=True)
class Roster:
    """Immutable mapping of player name to skill score.

    Player order is the configured order; the planner enumerates candidates
    in this order.

    Attributes
    ----------
    scores : mapping of str to int
        Skill score per player. Values are kept as given so that a broken
        entry degrades to a zero score instead of failing the load.
    """

    scores: Mapping[str, Any] = field(default_factory=dict)

    def __post_init__(self) -> None:
        object.__setattr__(self, "scores", MappingProxyType(dict(self.scores)))

    def __contains__(self, player: object) -> bool:
        return player in self.scores

    def __iter__(self) -> Iterator[str]:
        return iter(self.scores)

    def __len__(self) -> int:
        return len(self.scores)

    @property
    def players(self) -> List[str]:
        return list(self.scores)

    def score_of(self, player: str) -> int:
        """Skill score of a player, 0 when unknown or not a valid number."""
        raw = self.scores.get(player)
        if isinstance(raw, bool):
            raw = None
        try:
            return int(raw)
        except (TypeError, ValueError, OverflowError):
            logger.debug(f"No valid score for {player!r} ({raw!r}), using 0")
            return 0

    def require(self, players: Iterable[str]) -> None:
        """Check that every player is on the roster.

        Raises:
            PlayerNotFoundException: For the first unknown player
        """
        for player in players:
            if player not in self.scores:
                raise PlayerNotFoundException(f"'{player}' is not on the club roster")

    @classmethod
    def default(cls) -> "Roster":
        return cls(DEFAULT_PLAYER_SCORES)

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> "Roster":
        return cls(dict(data))
