from __future__ import annotations

import json
import logging
import threading
from pathlib import Path
from typing import Any, Callable

from gigledger.application.exceptions import CorruptCollectionError
from gigledger.application.ports.ledger_store import LedgerStorePort, Records


class JsonLedgerStore(LedgerStorePort):
    def __init__(self, data_dir: str = "./data/ledger") -> None:
        self._data_dir = Path(data_dir)
        self._data_dir.mkdir(parents=True, exist_ok=True)
        self._locks: dict[str, threading.Lock] = {}
        self._lock_lock = threading.Lock()  # Lock for managing locks dict
        self._logger = logging.getLogger(__name__)

    def _get_lock(self, key: str) -> threading.Lock:
        """Get or create a lock for a collection key."""
        with self._lock_lock:
            if key not in self._locks:
                self._locks[key] = threading.Lock()
            return self._locks[key]

    def _get_file_path(self, key: str) -> Path:
        if not key or "/" in key or "\\" in key or key.startswith("."):
            raise ValueError(f"Invalid collection key: {key!r}")
        return self._data_dir / f"{key}.json"

    def _load(self, key: str) -> Records:
        """Load a collection from its JSON file, [] if the file is missing."""
        file_path = self._get_file_path(key)
        if not file_path.exists():
            return []

        try:
            with open(file_path, "r", encoding="utf-8") as f:
                text = f.read()
        except OSError as e:
            raise CorruptCollectionError(key, str(e)) from e

        if not text.strip():
            return []
        try:
            data: Any = json.loads(text)
        except json.JSONDecodeError as e:
            self._logger.error("Stored collection is not valid JSON", extra={"collection": key, "reason": str(e)})
            raise CorruptCollectionError(key, str(e)) from e
        if not isinstance(data, list):
            self._logger.error("Stored collection is not an array", extra={"collection": key})
            raise CorruptCollectionError(key, f"expected a JSON array, got {type(data).__name__}")

        records = [item for item in data if isinstance(item, dict)]
        if len(records) != len(data):
            self._logger.warning(
                "Skipped non-object entries in collection",
                extra={"collection": key, "reason": f"{len(data) - len(records)} skipped"},
            )
        return records

    def _save(self, key: str, records: Records) -> None:
        """Save a collection to its JSON file atomically."""
        file_path = self._get_file_path(key)
        temp_path = file_path.with_suffix(".json.tmp")

        try:
            with open(temp_path, "w", encoding="utf-8") as f:
                json.dump(list(records), f, indent=2, ensure_ascii=False)
            # Atomic rename
            temp_path.replace(file_path)
        except Exception:
            if temp_path.exists():
                temp_path.unlink()
            raise

    def read_collection(self, key: str) -> Records:
        with self._get_lock(key):
            return self._load(key)

    def write_collection(self, key: str, records: Records) -> None:
        with self._get_lock(key):
            self._save(key, records)

    def update_collection(self, key: str, fn: Callable[[Records], Records]) -> Records:
        with self._get_lock(key):
            current = self._load(key)
            updated = fn(current)
            if updated is not current:
                self._save(key, updated)
            return list(updated)

    def keys(self) -> list[str]:
        return sorted(p.stem for p in self._data_dir.glob("*.json"))
