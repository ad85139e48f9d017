from __future__ import annotations

import json
import logging
import threading
from typing import Callable

from gigledger.application.exceptions import CorruptCollectionError
from gigledger.application.ports.ledger_store import LedgerStorePort, Records


class MemoryLedgerStore(LedgerStorePort):
    """Keeps each collection as a serialized JSON string, like browser local storage."""

    def __init__(self, initial: dict[str, str] | None = None) -> None:
        self._blobs: dict[str, str] = dict(initial or {})
        self._locks: dict[str, threading.Lock] = {}
        self._lock_lock = threading.Lock()
        self._logger = logging.getLogger(__name__)

    def _get_lock(self, key: str) -> threading.Lock:
        with self._lock_lock:
            if key not in self._locks:
                self._locks[key] = threading.Lock()
            return self._locks[key]

    def read_collection(self, key: str) -> Records:
        return _decode(key, self._blobs.get(key))

    def write_collection(self, key: str, records: Records) -> None:
        with self._get_lock(key):
            self._blobs[key] = json.dumps(list(records), ensure_ascii=False)

    def update_collection(self, key: str, fn: Callable[[Records], Records]) -> Records:
        with self._get_lock(key):
            current = _decode(key, self._blobs.get(key))
            updated = fn(current)
            if updated is not current:
                self._blobs[key] = json.dumps(list(updated), ensure_ascii=False)
            return list(updated)

    def keys(self) -> list[str]:
        return sorted(self._blobs)

    def raw(self, key: str) -> str | None:
        """Stored text for key, as written."""
        return self._blobs.get(key)


def _decode(key: str, blob: str | None) -> Records:
    if blob is None or not blob.strip():
        return []
    try:
        data = json.loads(blob)
    except json.JSONDecodeError as e:
        raise CorruptCollectionError(key, str(e)) from e
    if not isinstance(data, list):
        raise CorruptCollectionError(key, f"expected a JSON array, got {type(data).__name__}")
    return [item for item in data if isinstance(item, dict)]
