"""
Repositories Package - Panel Evaluation Engine
panel_eval/repositories/__init__.py

Data access layer over the generic record store.
"""

from panel_eval.repositories.base import BaseRepository, InMemoryRecordStore, RecordStore
from panel_eval.repositories.evaluation_repository import EvaluationRepository
from panel_eval.repositories.redis_store import RedisRecordStore
from panel_eval.repositories.settings_repository import FeatureSettingsRepository
from panel_eval.repositories.vendor_repository import VendorRepository

__all__ = [
    "BaseRepository",
    "RecordStore",
    "InMemoryRecordStore",
    "RedisRecordStore",
    "EvaluationRepository",
    "FeatureSettingsRepository",
    "VendorRepository",
]
