"""
Cached answer to "are the display settings currently stored?".
"""

from __future__ import annotations

from enum import Enum

from .registry_store import RegistryStore


class StoredState(Enum):
    UNKNOWN = "Unknown"
    PRESENT = "Present"
    ABSENT = "Absent"


class StatusCache:
    """Memoizes the presence of the status value; cleared by every write it issues."""

    def __init__(self, store: RegistryStore, key: str) -> None:
        self._store = store
        self.key = key
        self.state = StoredState.UNKNOWN

    def is_stored(self) -> bool:
        if self.state is StoredState.UNKNOWN:
            found = self._store.query(self.key) is not None
            self.state = StoredState.PRESENT if found else StoredState.ABSENT
        return self.state is StoredState.PRESENT

    def mark_stored(self) -> None:
        try:
            self._store.add(self.key, "")
        finally:
            self.invalidate()

    def mark_unstored(self) -> None:
        try:
            self._store.delete(self.key)
        finally:
            self.invalidate()

    def invalidate(self) -> None:
        self.state = StoredState.UNKNOWN
