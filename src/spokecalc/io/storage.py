"""
Durable key-value storage and the saved-calculation collection.

The saved collection is stored as one JSON array under a single key. Every
change rewrites the whole array; there is no incremental update and no
merging, so writes are serialized behind a lock.
"""

import copy
import json
import logging
import os
import tempfile
import threading
import time
from datetime import datetime
from pathlib import Path
from typing import Dict, List, Optional, Tuple, Union

from pydantic import ValidationError as PydanticValidationError

from ..constants import SAVED_CALCULATIONS_KEY
from ..errors import FormatError, ValidationError
from .loaders import CalculationInputs, CalculationResult, SavedCalculation

logger = logging.getLogger(__name__)


class KeyValueStore:
    """String-keyed storage of string values (the browser's localStorage model)."""

    def get(self, key: str) -> Optional[str]:
        raise NotImplementedError

    def set(self, key: str, value: str) -> None:
        raise NotImplementedError


class MemoryStore(KeyValueStore):
    """Non-durable store, for tests and one-shot sessions."""

    def __init__(self, initial: Optional[Dict[str, str]] = None):
        self._data: Dict[str, str] = dict(initial or {})

    def get(self, key: str) -> Optional[str]:
        return self._data.get(key)

    def set(self, key: str, value: str) -> None:
        self._data[key] = value


class JsonFileStore(KeyValueStore):
    """
    Key-value store persisted as a single JSON object on disk.

    Each ``set`` writes a temporary file beside the target and renames it
    into place, so a reader never sees a half-written file.
    """

    def __init__(self, filepath: Union[str, Path]):
        self.filepath = Path(filepath).expanduser()

    def _read(self) -> Dict[str, str]:
        if not self.filepath.exists():
            return {}
        try:
            with open(self.filepath, 'rb') as f:
                data = json.load(f)
        except (json.JSONDecodeError, UnicodeDecodeError) as e:
            raise FormatError(f"Storage file {self.filepath} is not valid JSON: {e}") from e
        if not isinstance(data, dict):
            raise FormatError(f"Storage file {self.filepath} does not contain a JSON object")
        return data

    def get(self, key: str) -> Optional[str]:
        return self._read().get(key)

    def set(self, key: str, value: str) -> None:
        data = self._read()
        data[key] = value

        self.filepath.parent.mkdir(parents=True, exist_ok=True)
        fd, tmp_name = tempfile.mkstemp(
            dir=self.filepath.parent, prefix=self.filepath.name, suffix=".tmp"
        )
        try:
            with os.fdopen(fd, 'w') as f:
                json.dump(data, f, indent=2)
            os.replace(tmp_name, self.filepath)
        except BaseException:
            os.unlink(tmp_name)
            raise


def local_timestamp(now: Optional[datetime] = None) -> str:
    """Human-readable local time for saved entries, e.g. 2024/05/01 18:30:00."""
    now = now or datetime.now()
    return now.strftime("%Y/%m/%d %H:%M:%S")


class SavedCalculationStore:
    """
    The user's named calculations, in insertion order.

    Records are never mutated in place: ``save`` appends a new record,
    ``delete`` removes one, and ``load`` hands out deep copies.
    """

    def __init__(self, storage: KeyValueStore, key: str = SAVED_CALCULATIONS_KEY):
        self.storage = storage
        self.key = key
        self._lock = threading.RLock()
        self._items: List[SavedCalculation] = self._read()

    def _read(self) -> List[SavedCalculation]:
        raw = self.storage.get(self.key)
        if not raw:
            return []

        # Corrupt data is reported, never overwritten
        try:
            items = json.loads(raw)
        except json.JSONDecodeError as e:
            raise FormatError(f"Saved calculations under '{self.key}' are not valid JSON: {e}") from e
        if not isinstance(items, list):
            raise FormatError(f"Saved calculations under '{self.key}' must be a JSON array")

        try:
            return [SavedCalculation.model_validate(item) for item in items]
        except PydanticValidationError as e:
            raise FormatError(
                f"Saved calculations under '{self.key}' contain {e.error_count()} malformed value(s)"
            ) from e

    def _write(self, items: List[SavedCalculation]) -> None:
        payload = json.dumps([item.model_dump(mode='json', by_alias=True) for item in items])
        self.storage.set(self.key, payload)
        self._items = items
        logger.info(f"Persisted {len(items)} saved calculation(s)")

    def all(self) -> List[SavedCalculation]:
        """Snapshot of the collection (copies; edits do not reach the store)."""
        with self._lock:
            return [item.model_copy(deep=True) for item in self._items]

    def get(self, calculation_id: int) -> Optional[SavedCalculation]:
        with self._lock:
            for item in self._items:
                if item.id == calculation_id:
                    return item.model_copy(deep=True)
        return None

    def __len__(self) -> int:
        return len(self._items)

    def _next_id(self) -> int:
        candidate = int(time.time() * 1000)
        if self._items:
            candidate = max(candidate, max(item.id for item in self._items) + 1)
        return candidate

    def save(
        self,
        name: str,
        inputs: CalculationInputs,
        results: CalculationResult,
        now: Optional[datetime] = None
    ) -> SavedCalculation:
        """
        Append a named calculation and persist the collection.

        Raises:
            ValidationError: If the name is blank or the result is incomplete
        """
        if not name or not name.strip():
            raise ValidationError("Enter a calculation name")
        if not results.is_complete:
            raise ValidationError("Perform a calculation before saving")

        with self._lock:
            record = SavedCalculation(
                id=self._next_id(),
                name=name,
                inputs=inputs.model_copy(deep=True),
                results=results.model_copy(deep=True),
                timestamp=local_timestamp(now),
            )
            self._write(self._items + [record])

        logger.debug(f"Saved calculation {record.id} ({name!r})")
        return record.model_copy(deep=True)

    def delete(self, calculation_id: int) -> bool:
        """
        Remove the entry with this id.

        Returns:
            True if an entry was removed, False if no entry had that id
        """
        with self._lock:
            remaining = [item for item in self._items if item.id != calculation_id]
            if len(remaining) == len(self._items):
                return False
            self._write(remaining)
        return True


def load_calculation(saved: SavedCalculation) -> Tuple[CalculationInputs, CalculationResult]:
    """Independent copies of a saved calculation's inputs and results."""
    return copy.deepcopy(saved.inputs), copy.deepcopy(saved.results)
