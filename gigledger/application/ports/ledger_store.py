from __future__ import annotations

from abc import ABC, abstractmethod
from typing import Any, Callable

Records = list[dict[str, Any]]

BOOKINGS = "bookings"
PAYMENTS = "payments"
EXPENSES = "expenses"
USERS = "users"
SESSIONS = "sessions"

COLLECTION_KEYS = (BOOKINGS, PAYMENTS, EXPENSES, USERS, SESSIONS)


class LedgerStorePort(ABC):
    @abstractmethod
    def read_collection(self, key: str) -> Records:
        """
        Read the whole collection stored under key.
        Returns [] when nothing is stored; raises CorruptCollectionError when the stored
        value is not a JSON array.
        """
        raise NotImplementedError

    @abstractmethod
    def write_collection(self, key: str, records: Records) -> None:
        """Replace the whole collection stored under key."""
        raise NotImplementedError

    @abstractmethod
    def update_collection(self, key: str, fn: Callable[[Records], Records]) -> Records:
        """
        Read, transform with fn and write back while holding the key's lock.
        If fn returns the very list it was given, nothing is written.
        Returns the resulting collection.
        """
        raise NotImplementedError

    @abstractmethod
    def keys(self) -> list[str]:
        raise NotImplementedError
