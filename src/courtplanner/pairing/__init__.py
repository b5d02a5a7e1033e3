"""Match assignment algorithms."""

from .candidates import all_pairs, all_quadruples, team_splits
from .slot_assignment import (
    DEFAULT_WEIGHTS,
    ScoringWeights,
    assign_slot,
    doubles_cost,
    group_sizes_for,
    pick_doubles,
    pick_singles,
    singles_cost,
)

__all__ = [
    "DEFAULT_WEIGHTS",
    "ScoringWeights",
    "all_pairs",
    "all_quadruples",
    "assign_slot",
    "doubles_cost",
    "group_sizes_for",
    "pick_doubles",
    "pick_singles",
    "singles_cost",
    "team_splits",
]
