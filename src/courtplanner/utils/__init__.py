"""Shared helpers for Court Planner."""

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

import logging
from datetime import date, datetime
from typing import Union

from dateutil import parser as date_parser

from courtplanner.constants import DATE_FORMAT

LOG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"


def setup_logger(name: str, level: int = logging.NOTSET) -> logging.Logger:
    """Return a module logger that reports through the ``courtplanner`` root.

    A single stream handler is attached to the package logger the first time
    this is called; child loggers propagate to it.
    """
    root = logging.getLogger("courtplanner")
    if not root.handlers:
        handler = logging.StreamHandler()
        handler.setFormatter(logging.Formatter(LOG_FORMAT))
        root.addHandler(handler)
        root.setLevel(logging.WARNING)

    logger = logging.getLogger(name)
    if level:
        logger.setLevel(level)
    return logger


def set_log_level(level: int) -> None:
    """Change the level of the package logger (used by the CLI)."""
    logging.getLogger("courtplanner").setLevel(level)


def parse_date(value: Union[str, date]) -> date:
    """Parse an ISO calendar date (``yyyy-mm-dd``).

    Raises:
        ValueError: If the value is not a date
    """
    if isinstance(value, datetime):
        return value.date()
    if isinstance(value, date):
        return value
    return date_parser.isoparse(value.strip()).date()


def format_date(value: date) -> str:
    return value.strftime(DATE_FORMAT)
