"""
Record Store Tests - Panel Evaluation Engine
tests/test_record_store.py

Tests for the in-memory store, the Redis-backed store (mocked client)
and the repositories built on top of them.
"""
import json
import pytest
from unittest.mock import MagicMock

import redis

from panel_eval.core.exceptions import DatabaseConnectionException, RepositoryException
from panel_eval.models.enumerations import EvaluationStatus, FinalDecision
from panel_eval.models.evaluation import Evaluation
from panel_eval.models.feature_settings import FeatureSettings, FeatureSettingsUpdate
from panel_eval.models.vendor import VendorCreate
from panel_eval.repositories.base import InMemoryRecordStore
from panel_eval.repositories.evaluation_repository import EvaluationRepository
from panel_eval.repositories.redis_store import RedisRecordStore
from panel_eval.repositories.settings_repository import FeatureSettingsRepository
from panel_eval.repositories.vendor_repository import VendorRepository


class TestInMemoryRecordStore:
    """Tests for the dict-backed store."""

    def test_upsert_and_get(self, store):
        store.upsert("things", "k1", {"name": "one"})
        assert store.get("things", "k1") == {"name": "one"}
        assert store.get("things", "missing") is None

    def test_upsert_replaces(self, store):
        store.upsert("things", "k1", {"name": "one"})
        store.upsert("things", "k1", {"name": "uno"})
        assert store.list("things") == [{"name": "uno"}]

    def test_list_with_filters(self, store):
        store.upsert("things", "k1", {"kind": "a"})
        store.upsert("things", "k2", {"kind": "b"})
        assert store.list("things", {"kind": "b"}) == [{"kind": "b"}]

    def test_returned_records_are_copies(self, store):
        store.upsert("things", "k1", {"tags": ["x"]})
        record = store.get("things", "k1")
        record["tags"].append("y")
        assert store.get("things", "k1") == {"tags": ["x"]}

    def test_compare_and_set(self, store):
        store.upsert("things", "k1", {"state": "open"})
        assert store.compare_and_set("things", "k1", "state", "open", {"state": "closed"})
        assert not store.compare_and_set("things", "k1", "state", "open", {"state": "reopened"})
        assert store.get("things", "k1") == {"state": "closed"}

    def test_compare_and_set_missing_record(self, store):
        with pytest.raises(RepositoryException):
            store.compare_and_set("things", "nope", "state", "open", {"state": "closed"})


class TestRedisRecordStore:
    """Tests for the Redis store with a mocked client."""

    def _store(self):
        client = MagicMock()
        return RedisRecordStore("redis://unused", key_prefix="test", client=client), client

    def test_upsert_uses_entity_hash(self):
        store, client = self._store()
        store.upsert("vendors", "v1", {"name": "Acme"})
        client.hset.assert_called_once_with("test:vendors", "v1", json.dumps({"name": "Acme"}))

    def test_get_decodes_json(self):
        store, client = self._store()
        client.hget.return_value = json.dumps({"name": "Acme"})
        assert store.get("vendors", "v1") == {"name": "Acme"}
        client.hget.assert_called_once_with("test:vendors", "v1")

    def test_get_miss(self):
        store, client = self._store()
        client.hget.return_value = None
        assert store.get("vendors", "v1") is None

    def test_list_filters(self):
        store, client = self._store()
        client.hvals.return_value = [json.dumps({"kind": "a"}), json.dumps({"kind": "b"})]
        assert store.list("things", {"kind": "a"}) == [{"kind": "a"}]

    def test_compare_and_set_wins(self):
        store, client = self._store()
        pipe = MagicMock()
        pipe.hget.return_value = json.dumps({"final_decision": "PENDING"})
        client.transaction.side_effect = lambda func, *watches: func(pipe)

        won = store.compare_and_set("vendors", "v1", "final_decision", "PENDING", {"final_decision": "ACCEPTED"})

        assert won is True
        client.transaction.assert_called_once()
        assert client.transaction.call_args[0][1] == "test:vendors"
        pipe.multi.assert_called_once()
        pipe.hset.assert_called_once_with("test:vendors", "v1", json.dumps({"final_decision": "ACCEPTED"}))

    def test_compare_and_set_loses(self):
        store, client = self._store()
        pipe = MagicMock()
        pipe.hget.return_value = json.dumps({"final_decision": "REJECTED"})
        client.transaction.side_effect = lambda func, *watches: func(pipe)

        won = store.compare_and_set("vendors", "v1", "final_decision", "PENDING", {"final_decision": "ACCEPTED"})

        assert won is False
        pipe.multi.assert_not_called()
        pipe.hset.assert_not_called()

    def test_connection_error_mapped(self):
        store, client = self._store()
        client.hget.side_effect = redis.ConnectionError("down")
        with pytest.raises(DatabaseConnectionException):
            store.get("vendors", "v1")

    def test_ping_failure_reports_false(self):
        store, client = self._store()
        client.ping.side_effect = redis.ConnectionError("down")
        assert store.ping() is False


class TestRepositories:
    """Tests for repositories over the in-memory store."""

    def test_one_evaluation_per_evaluator(self, evaluation_repo):
        for score in (1.0, 2.0):
            evaluation_repo.save(
                Evaluation(vendor_id="v1", evaluator_id="e1", domain="TEST", scores={"A": score})
            )
        stored = evaluation_repo.list_for_vendor("v1")
        assert len(stored) == 1
        assert stored[0].scores == {"A": 2.0}

    def test_evaluations_scoped_per_vendor(self, evaluation_repo):
        evaluation_repo.save(Evaluation(vendor_id="v1", evaluator_id="e1", domain="TEST"))
        evaluation_repo.save(Evaluation(vendor_id="v2", evaluator_id="e1", domain="TEST"))
        assert len(evaluation_repo.list_for_vendor("v1")) == 1
        assert evaluation_repo.get("v2", "e1").vendor_id == "v2"

    def test_evaluation_round_trip_keeps_status(self, evaluation_repo):
        saved = evaluation_repo.save(
            Evaluation(vendor_id="v1", evaluator_id="e1", domain="TEST", status=EvaluationStatus.SUBMITTED)
        )
        assert saved.is_submitted

    def test_vendor_create_and_list_sorted(self, vendor_repo):
        vendor_repo.create(VendorCreate(name="zeta"))
        vendor_repo.create(VendorCreate(name="Alpha"))
        assert [v.name for v in vendor_repo.list_all()] == ["Alpha", "zeta"]

    def test_record_decision_only_once(self, vendor_repo):
        vendor = vendor_repo.create(VendorCreate(name="Acme"))
        assert vendor_repo.record_decision(vendor, FinalDecision.ACCEPTED, "dana") is not None
        assert vendor_repo.record_decision(vendor, FinalDecision.REJECTED, "eve") is None
        assert vendor_repo.get(vendor.id).decided_by == "dana"

    def test_settings_defaults_and_partial_update(self):
        repo = FeatureSettingsRepository(InMemoryRecordStore(), defaults=FeatureSettings(chat_enabled=False))
        assert repo.get_settings().chat_enabled is False
        updated = repo.set_settings(FeatureSettingsUpdate(print_enabled=False))
        assert updated.chat_enabled is False
        assert updated.print_enabled is False
        assert updated.export_enabled is True
