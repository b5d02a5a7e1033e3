"""Season controllers: planning, reservations, results and ladder."""

from .ladder import LadderEntry, compute_doubles_ladder, compute_ladder
from .planner import SeasonPlanner
from .reservation_manager import ReservationManager, players_in_slot
from .result_recorder import ResultRecorder

__all__ = [
    "LadderEntry",
    "ReservationManager",
    "ResultRecorder",
    "SeasonPlanner",
    "compute_doubles_ladder",
    "compute_ladder",
    "players_in_slot",
]
