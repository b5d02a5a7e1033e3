"""JSON file backed state store."""

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

import json
import os
import tempfile
from pathlib import Path
from typing import Any, Dict, Union

from courtplanner.exceptions import (
    FileLoadException,
    FileSaveException,
    InvalidReservationException,
)
from courtplanner.models.season import Availability, Match
from courtplanner.utils import setup_logger

from .store import MemoryStore, StoreSnapshot

logger = setup_logger(__name__)


class JsonFileStore(MemoryStore):
    """Store kept in a single JSON file.

    The file holds ``{"matches": [...], "availability": [...]}``. Every write
    rewrites the whole file through a temporary file and ``os.replace``, so
    readers see either the old or the new state. The in-memory state only
    changes once the file was written.
    """

    def __init__(self, path: Union[str, Path]) -> None:
        self.path = Path(path)
        data = self._load()
        super().__init__(
            matches=data["matches"],
            availability=data["availability"],
        )

    def _load(self) -> Dict[str, Any]:
        if not self.path.exists():
            logger.info(f"Store {self.path} does not exist yet, starting empty")
            return {"matches": [], "availability": Availability()}
        try:
            with open(self.path, "r", encoding="utf-8") as f:
                data = json.load(f)
            return {
                "matches": [Match.from_dict(m) for m in data.get("matches", [])],
                "availability": Availability.from_list(data.get("availability", [])),
            }
        except (OSError, json.JSONDecodeError, InvalidReservationException) as e:
            raise FileLoadException(f"Cannot load store {self.path}: {e}") from e
        except (KeyError, TypeError, ValueError) as e:
            raise FileLoadException(f"Malformed store {self.path}: {e}") from e

    def _commit(self, state: StoreSnapshot) -> None:
        data = {
            "matches": [m.to_dict() for m in state.matches],
            "availability": state.availability.to_list(),
        }
        directory = self.path.parent
        try:
            directory.mkdir(parents=True, exist_ok=True)
            fd, tmp_name = tempfile.mkstemp(
                prefix=f".{self.path.name}.", suffix=".tmp", dir=directory
            )
            try:
                with os.fdopen(fd, "w", encoding="utf-8") as f:
                    json.dump(data, f, indent=4)
                os.replace(tmp_name, self.path)
            except BaseException:
                Path(tmp_name).unlink(missing_ok=True)
                raise
        except OSError as e:
            raise FileSaveException(f"Cannot save store {self.path}: {e}") from e
        logger.debug(f"Saved {len(state.matches)} matches to {self.path}")
