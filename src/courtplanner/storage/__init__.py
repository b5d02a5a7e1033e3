"""State stores for matches and availability."""

from .json_store import JsonFileStore
from .store import MemoryStore, StateStore, StoreSnapshot

__all__ = ["JsonFileStore", "MemoryStore", "StateStore", "StoreSnapshot"]
