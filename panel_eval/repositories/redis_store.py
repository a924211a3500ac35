"""
Redis Record Store - Panel Evaluation Engine
panel_eval/repositories/redis_store.py

One Redis hash per entity (``{prefix}:{entity}``), one JSON-encoded field per
record key. HSET gives keyed upserts; compare_and_set runs as a WATCH/MULTI
transaction on the entity hash so concurrent writers cannot both win.
"""

import json
import logging
from typing import Any, Dict, List, Mapping, Optional

import redis

from panel_eval.core.exceptions import DatabaseConnectionException, RepositoryException
from panel_eval.repositories.base import RecordStore, _matches

logger = logging.getLogger(__name__)


class RedisRecordStore(RecordStore):
    def __init__(self, url: str, key_prefix: str = "panel_eval", client: Optional[redis.Redis] = None):
        self.key_prefix = key_prefix
        self.client = client if client is not None else redis.from_url(
            url,
            decode_responses=True,
            socket_connect_timeout=5,
        )

    def _hash(self, entity: str) -> str:
        return f"{self.key_prefix}:{entity}"

    @staticmethod
    def _decode(raw: Optional[str]) -> Optional[Dict[str, Any]]:
        if raw is None:
            return None
        return json.loads(raw)

    @staticmethod
    def _encode(value: Mapping[str, Any]) -> str:
        return json.dumps(dict(value), default=str)

    def get(self, entity: str, key: str) -> Optional[Dict[str, Any]]:
        try:
            return self._decode(self.client.hget(self._hash(entity), key))
        except redis.ConnectionError as e:
            raise DatabaseConnectionException(f"Failed to reach Redis: {e}")

    def upsert(self, entity: str, key: str, value: Mapping[str, Any]) -> Dict[str, Any]:
        payload = self._encode(value)
        try:
            self.client.hset(self._hash(entity), key, payload)
        except redis.ConnectionError as e:
            raise DatabaseConnectionException(f"Failed to reach Redis: {e}")
        return json.loads(payload)

    def list(self, entity: str, filters: Optional[Mapping[str, Any]] = None) -> List[Dict[str, Any]]:
        try:
            raw_values = self.client.hvals(self._hash(entity))
        except redis.ConnectionError as e:
            raise DatabaseConnectionException(f"Failed to reach Redis: {e}")
        records = [json.loads(raw) for raw in raw_values]
        return [r for r in records if _matches(r, filters)]

    def compare_and_set(
        self,
        entity: str,
        key: str,
        field: str,
        expected: Any,
        value: Mapping[str, Any],
    ) -> bool:
        hash_name = self._hash(entity)
        payload = self._encode(value)
        outcome = {"won": False}

        def _txn(pipe: redis.client.Pipeline) -> None:
            current = self._decode(pipe.hget(hash_name, key))
            if current is None:
                raise RepositoryException(f"{entity} record {key} does not exist")
            if current.get(field) != expected:
                outcome["won"] = False
                return
            pipe.multi()
            pipe.hset(hash_name, key, payload)
            outcome["won"] = True

        try:
            self.client.transaction(_txn, hash_name)
        except redis.ConnectionError as e:
            raise DatabaseConnectionException(f"Failed to reach Redis: {e}")
        logger.debug("store compare_and_set %s/%s won=%s", entity, key, outcome["won"])
        return outcome["won"]

    def ping(self) -> bool:
        try:
            return bool(self.client.ping())
        except redis.RedisError:
            return False
