# tests/conftest.py

"""
Pytest Fixtures - Shared rubrics, stores, services and actors for all tests

RUBRIC REFERENCE:
- cost_rubric:  one category "cost" (100) with criteria A (60) and B (40)
- fractional_rubric: one category (100) with criteria x (9.3), y (2.02), z (88.68)
- media_rubric: the built-in MEDIA rubric, 18 criteria in 6 categories
"""

import pytest
from datetime import datetime, timedelta, timezone

import jwt
from fastapi.testclient import TestClient

from panel_eval.core.dependencies import get_actor_resolver, reset_dependencies
from panel_eval.main import app
from panel_eval.models.actor import Actor, PermissionFlags
from panel_eval.models.enumerations import Role
from panel_eval.models.vendor import VendorCreate
from panel_eval.repositories.base import InMemoryRecordStore
from panel_eval.repositories.evaluation_repository import EvaluationRepository
from panel_eval.repositories.settings_repository import FeatureSettingsRepository
from panel_eval.repositories.vendor_repository import VendorRepository
from panel_eval.scoring.rubric import MEDIA_RUBRIC, Category, Criterion, Rubric
from panel_eval.services.actor_resolver import JwtActorResolver
from panel_eval.services.decision_service import DecisionService
from panel_eval.services.evaluation_service import EvaluationRecordManager
from panel_eval.services.permission_gate import PermissionGate
from panel_eval.services.report_service import ReportService
from panel_eval.services.vendor_service import VendorService

TEST_JWT_SECRET = "panel-eval-test-secret-0123456789abcdef"


# =============================================================================
# RUBRIC FIXTURES
# =============================================================================

@pytest.fixture
def cost_rubric():
    """Two-criterion rubric: A weighs 60, B weighs 40."""
    return Rubric(
        domain="TEST",
        categories=[
            Category(
                key="cost",
                name="Cost",
                weight_percent=100,
                criteria=(
                    Criterion("A", "Criterion A", 60),
                    Criterion("B", "Criterion B", 40),
                ),
            )
        ],
    )


@pytest.fixture
def fractional_rubric():
    """Three criteria weighing 9.3, 2.02 and 88.68: exactly 100, but not as a float sum."""
    return Rubric(
        domain="FRACTIONAL",
        categories=[
            Category(
                key="all",
                name="All",
                weight_percent=100,
                criteria=(
                    Criterion("x", "Criterion X", 9.3),
                    Criterion("y", "Criterion Y", 2.02),
                    Criterion("z", "Criterion Z", 88.68),
                ),
            )
        ],
    )


@pytest.fixture
def media_rubric():
    return MEDIA_RUBRIC


@pytest.fixture
def full_media_scores(media_rubric):
    """A complete MEDIA score set with every criterion at 8."""
    return {key: 8 for key in media_rubric.criteria_keys()}


# =============================================================================
# STORE & REPOSITORY FIXTURES
# =============================================================================

@pytest.fixture
def store():
    return InMemoryRecordStore()


@pytest.fixture
def evaluation_repo(store):
    return EvaluationRepository(store)


@pytest.fixture
def vendor_repo(store):
    return VendorRepository(store)


@pytest.fixture
def settings_repo(store):
    return FeatureSettingsRepository(store)


@pytest.fixture
def gate():
    return PermissionGate()


@pytest.fixture
def vendor(vendor_repo):
    """A registered PENDING vendor."""
    return vendor_repo.create(VendorCreate(name="Acme Media Consulting", scopes=["AI strategy"]))


# =============================================================================
# SERVICE FIXTURES
# =============================================================================

@pytest.fixture
def manager(media_rubric, evaluation_repo, vendor_repo, settings_repo, gate):
    return EvaluationRecordManager(media_rubric, evaluation_repo, vendor_repo, settings_repo, gate)


@pytest.fixture
def cost_manager(cost_rubric, evaluation_repo, vendor_repo, settings_repo, gate):
    return EvaluationRecordManager(cost_rubric, evaluation_repo, vendor_repo, settings_repo, gate)


@pytest.fixture
def fractional_manager(fractional_rubric, evaluation_repo, vendor_repo, settings_repo, gate):
    return EvaluationRecordManager(fractional_rubric, evaluation_repo, vendor_repo, settings_repo, gate)


@pytest.fixture
def decision_service(vendor_repo, settings_repo, gate):
    return DecisionService(vendor_repo, settings_repo, gate)


@pytest.fixture
def report_service(media_rubric, evaluation_repo, vendor_repo, settings_repo, gate):
    return ReportService(media_rubric, evaluation_repo, vendor_repo, settings_repo, gate)


@pytest.fixture
def vendor_service(vendor_repo, settings_repo, gate):
    return VendorService(vendor_repo, settings_repo, gate)


# =============================================================================
# ACTOR FIXTURES
# =============================================================================

@pytest.fixture
def contributor():
    return Actor(actor_id="alice", role=Role.CONTRIBUTOR, name="Alice")


@pytest.fixture
def other_contributor():
    return Actor(actor_id="bob", role=Role.CONTRIBUTOR, name="Bob")


@pytest.fixture
def decision_maker():
    return Actor(actor_id="dana", role=Role.DECISION_MAKER, name="Dana")


@pytest.fixture
def admin():
    return Actor(
        actor_id="root",
        role=Role.ADMIN,
        name="Admin",
        permissions=PermissionFlags(can_access_chat=True, can_print_reports=True, can_export_data=True),
    )


# =============================================================================
# API FIXTURES
# =============================================================================

def make_token(sub, role, expires_in=timedelta(hours=1), secret=TEST_JWT_SECRET, **claims):
    payload = {
        "sub": sub,
        "role": role,
        "exp": datetime.now(timezone.utc) + expires_in,
        **claims,
    }
    return jwt.encode(payload, secret, algorithm="HS256")


@pytest.fixture
def jwt_secret():
    return TEST_JWT_SECRET


@pytest.fixture
def token_factory():
    """Issue signed test tokens."""
    return make_token


@pytest.fixture
def auth_header():
    """Build an Authorization header for an actor."""
    def _header(sub, role, **claims):
        return {"Authorization": f"Bearer {make_token(sub, role, **claims)}"}
    return _header


@pytest.fixture
def client():
    """TestClient on a fresh in-memory store with a known JWT secret."""
    reset_dependencies()
    app.dependency_overrides[get_actor_resolver] = lambda: JwtActorResolver(TEST_JWT_SECRET)
    with TestClient(app) as test_client:
        yield test_client
    app.dependency_overrides.clear()
    reset_dependencies()
