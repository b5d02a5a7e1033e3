"""Exceptions for use in Court Planner"""

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


# ========== Base Application Exception ==========


class CourtPlannerException(Exception):
    """Base exception for all Court Planner errors.

    All custom exceptions in the application should inherit from this class.
    This enables catching all application-specific errors with a single except clause.
    """

    pass


# ========== Reservation Exceptions ==========


class ReservationException(CourtPlannerException):
    """Base exception for reservation-related errors."""

    pass


class InvalidReservationException(ReservationException):
    """Raised when a match record is malformed (wrong seat count, duplicates, bad court)."""

    pass


class PlayerUnavailableException(ReservationException):
    """Raised when a player marked unavailable is booked for a slot."""

    pass


class DoubleBookingException(ReservationException):
    """Raised when a player is already booked on another court in the same slot."""

    pass


class DateOutsideSeasonException(ReservationException):
    """Raised when a date is not one of the season's playing days."""

    pass


class ReservationNotFoundException(ReservationException):
    """Raised when no match exists at the requested date, slot and court."""

    pass


class PermissionDeniedException(ReservationException):
    """Raised when a player edits a match they are not part of (and is not the admin)."""

    pass


# ========== Result Exceptions ==========


class ResultException(CourtPlannerException):
    """Base exception for result recording errors."""

    pass


class InvalidResultException(ResultException):
    """Raised when a result is invalid (e.g., winner did not play the match)."""

    pass


# ========== Player Exceptions ==========


class PlayerException(CourtPlannerException):
    """Base exception for player-related errors."""

    pass


class PlayerNotFoundException(PlayerException):
    """Raised when a player is not on the club roster."""

    pass


# ========== Configuration Exceptions ==========


class ConfigurationException(CourtPlannerException):
    """Base exception for configuration errors."""

    pass


class InvalidConfigurationException(ConfigurationException):
    """Raised when configuration data is invalid."""

    pass


# ========== Storage Exceptions ==========


class StorageException(CourtPlannerException):
    """Base exception for state store errors."""

    pass


class FileLoadException(StorageException):
    """Raised when a file cannot be loaded."""

    pass


class FileSaveException(StorageException):
    """Raised when a file cannot be saved."""

    pass
