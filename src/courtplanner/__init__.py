"""Court Planner: season scheduling and reservations for a tennis club."""

__version__ = "0.1.0"
