"""Candidate enumeration for doubles matches."""

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

from itertools import combinations
from typing import Iterator, List, Sequence, Tuple

from courtplanner.type_hints import Quadruple, TeamSplit


def all_pairs(pool: Sequence[str]) -> Iterator[Tuple[str, str]]:
    """Every unordered pair of the pool, in pool order."""
    return combinations(pool, 2)


def all_quadruples(pool: Sequence[str]) -> List[Quadruple]:
    """
    Every 4-subset of the pool.

    Combinations, not permutations: each group of four shows up once, in
    pool order, so a team split is never scored twice.
    """
    return list(combinations(pool, 4))


def team_splits(quad: Quadruple) -> Tuple[TeamSplit, TeamSplit, TeamSplit]:
    """The three ways to split four players into two teams of two.

    For ``(a, b, c, d)`` these are ab|cd, ac|bd and ad|bc.
    """
    a, b, c, d = quad
    return (
        ((a, b), (c, d)),
        ((a, c), (b, d)),
        ((a, d), (b, c)),
    )
