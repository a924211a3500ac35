"""
Dependencies - Panel Evaluation Engine
panel_eval/core/dependencies.py

FastAPI dependency injection for the rubric, record store, repositories and services.
"""

from functools import lru_cache
from typing import Optional

from fastapi import Depends, Header

from panel_eval.config import get_settings
from panel_eval.models.actor import Actor
from panel_eval.models.feature_settings import FeatureSettings
from panel_eval.repositories.base import InMemoryRecordStore, RecordStore
from panel_eval.repositories.evaluation_repository import EvaluationRepository
from panel_eval.repositories.redis_store import RedisRecordStore
from panel_eval.repositories.settings_repository import FeatureSettingsRepository
from panel_eval.repositories.vendor_repository import VendorRepository
from panel_eval.scoring.rubric import Rubric, load_rubric, validate_rubric
from panel_eval.services.actor_resolver import ActorResolver, JwtActorResolver, bearer_credential
from panel_eval.services.decision_service import DecisionService
from panel_eval.services.evaluation_service import EvaluationRecordManager
from panel_eval.services.permission_gate import PermissionGate
from panel_eval.services.report_service import ReportService
from panel_eval.services.vendor_service import VendorService


@lru_cache()
def get_rubric() -> Rubric:
    """Load and validate the rubric once. ConfigurationError propagates."""
    rubric = load_rubric(get_settings().RUBRIC_PATH)
    validate_rubric(rubric)
    return rubric


@lru_cache()
def get_record_store() -> RecordStore:
    """Get cached record store for the configured backend."""
    settings = get_settings()
    if settings.STORE_BACKEND == "redis":
        return RedisRecordStore(settings.REDIS_URL, key_prefix=settings.REDIS_KEY_PREFIX)
    return InMemoryRecordStore()


@lru_cache()
def get_evaluation_repository() -> EvaluationRepository:
    """Get cached EvaluationRepository instance."""
    return EvaluationRepository(get_record_store())


@lru_cache()
def get_vendor_repository() -> VendorRepository:
    """Get cached VendorRepository instance."""
    return VendorRepository(get_record_store())


@lru_cache()
def get_feature_settings_repository() -> FeatureSettingsRepository:
    """Get cached FeatureSettingsRepository seeded with configured defaults."""
    settings = get_settings()
    defaults = FeatureSettings(
        chat_enabled=settings.FEATURE_CHAT_ENABLED,
        direct_decision_enabled=settings.FEATURE_DIRECT_DECISION_ENABLED,
        print_enabled=settings.FEATURE_PRINT_ENABLED,
        export_enabled=settings.FEATURE_EXPORT_ENABLED,
    )
    return FeatureSettingsRepository(get_record_store(), defaults=defaults)


@lru_cache()
def get_permission_gate() -> PermissionGate:
    return PermissionGate()


@lru_cache()
def get_evaluation_manager() -> EvaluationRecordManager:
    return EvaluationRecordManager(
        rubric=get_rubric(),
        evaluations=get_evaluation_repository(),
        vendors=get_vendor_repository(),
        feature_settings=get_feature_settings_repository(),
        gate=get_permission_gate(),
    )


@lru_cache()
def get_decision_service() -> DecisionService:
    return DecisionService(
        vendors=get_vendor_repository(),
        feature_settings=get_feature_settings_repository(),
        gate=get_permission_gate(),
    )


@lru_cache()
def get_report_service() -> ReportService:
    return ReportService(
        rubric=get_rubric(),
        evaluations=get_evaluation_repository(),
        vendors=get_vendor_repository(),
        feature_settings=get_feature_settings_repository(),
        gate=get_permission_gate(),
        top_comments_limit=get_settings().TOP_COMMENTS_LIMIT,
    )


@lru_cache()
def get_vendor_service() -> VendorService:
    return VendorService(
        vendors=get_vendor_repository(),
        feature_settings=get_feature_settings_repository(),
        gate=get_permission_gate(),
    )


@lru_cache()
def get_actor_resolver() -> ActorResolver:
    settings = get_settings()
    secret = settings.JWT_SECRET.get_secret_value() if settings.JWT_SECRET else None
    return JwtActorResolver(secret, algorithm=settings.JWT_ALGORITHM)


def get_current_actor(
    authorization: Optional[str] = Header(default=None),
    resolver: ActorResolver = Depends(get_actor_resolver),
) -> Actor:
    """Resolve the caller from the Authorization header."""
    return resolver.resolve(bearer_credential(authorization))


def reset_dependencies() -> None:
    """Drop every cached provider (tests, settings reload)."""
    for provider in (
        get_rubric,
        get_record_store,
        get_evaluation_repository,
        get_vendor_repository,
        get_feature_settings_repository,
        get_permission_gate,
        get_evaluation_manager,
        get_decision_service,
        get_report_service,
        get_vendor_service,
        get_actor_resolver,
    ):
        provider.cache_clear()
