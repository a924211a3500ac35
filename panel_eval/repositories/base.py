"""
Base Repository - Panel Evaluation Engine
panel_eval/repositories/base.py

Record store contract plus the process-local implementation.

Every write-write conflict in the engine is resolved by the store:
    upsert           - insert-or-replace keyed by (entity, key)
    compare_and_set  - atomic check-and-set on one field of one record
Application code never takes its own locks.
"""

import copy
import logging
import threading
from abc import ABC, abstractmethod
from datetime import datetime, timezone
from typing import Any, Dict, List, Mapping, Optional

from panel_eval.core.exceptions import RepositoryException

logger = logging.getLogger(__name__)


def _matches(record: Mapping[str, Any], filters: Optional[Mapping[str, Any]]) -> bool:
    if not filters:
        return True
    return all(record.get(field) == value for field, value in filters.items())


class RecordStore(ABC):
    """Generic keyed record store."""

    @abstractmethod
    def get(self, entity: str, key: str) -> Optional[Dict[str, Any]]:
        """Return the record or None."""

    @abstractmethod
    def upsert(self, entity: str, key: str, value: Mapping[str, Any]) -> Dict[str, Any]:
        """Insert or replace the record under key. Atomic per key."""

    @abstractmethod
    def list(self, entity: str, filters: Optional[Mapping[str, Any]] = None) -> List[Dict[str, Any]]:
        """All records of an entity whose fields equal every filter value."""

    @abstractmethod
    def compare_and_set(
        self,
        entity: str,
        key: str,
        field: str,
        expected: Any,
        value: Mapping[str, Any],
    ) -> bool:
        """
        Replace the record with value only if record[field] == expected.

        Returns:
            True if this call won and wrote, False otherwise.

        Raises:
            RepositoryException: record does not exist
        """

    def ping(self) -> bool:
        return True


class BaseRepository:
    """Base repository with shared record helpers."""

    ENTITY: str = ""

    def __init__(self, store: RecordStore):
        self.store = store

    def normalize_timestamp(self, dt: Optional[datetime]) -> Optional[datetime]:
        """Ensure timestamp is UTC-aware."""
        if dt is None:
            return None
        if dt.tzinfo is None:
            return dt.replace(tzinfo=timezone.utc)
        return dt.astimezone(timezone.utc)

    def now(self) -> datetime:
        return datetime.now(timezone.utc)


class InMemoryRecordStore(RecordStore):
    """Thread-safe dict-backed store for development and tests."""

    def __init__(self):
        self._data: Dict[str, Dict[str, Dict[str, Any]]] = {}
        self._lock = threading.Lock()

    def get(self, entity: str, key: str) -> Optional[Dict[str, Any]]:
        with self._lock:
            record = self._data.get(entity, {}).get(key)
            return copy.deepcopy(record) if record is not None else None

    def upsert(self, entity: str, key: str, value: Mapping[str, Any]) -> Dict[str, Any]:
        record = copy.deepcopy(dict(value))
        with self._lock:
            self._data.setdefault(entity, {})[key] = record
        logger.debug("store upsert %s/%s", entity, key)
        return copy.deepcopy(record)

    def list(self, entity: str, filters: Optional[Mapping[str, Any]] = None) -> List[Dict[str, Any]]:
        with self._lock:
            records = list(self._data.get(entity, {}).values())
            return [copy.deepcopy(r) for r in records if _matches(r, filters)]

    def compare_and_set(
        self,
        entity: str,
        key: str,
        field: str,
        expected: Any,
        value: Mapping[str, Any],
    ) -> bool:
        with self._lock:
            current = self._data.get(entity, {}).get(key)
            if current is None:
                raise RepositoryException(f"{entity} record {key} does not exist")
            if current.get(field) != expected:
                return False
            self._data[entity][key] = copy.deepcopy(dict(value))
            return True
