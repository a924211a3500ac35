"""
Health Check Router - Panel Evaluation Engine
panel_eval/routers/health.py

Returns health status of the record store and the configured rubric.
"""
from fastapi import APIRouter, status
from fastapi.responses import JSONResponse
from datetime import datetime, timezone

from panel_eval.config import get_settings
from panel_eval.core.dependencies import get_record_store, get_rubric
from panel_eval.models.responses import HealthResponse

router = APIRouter(tags=["Health"])


#  Dependency Health Checks


def check_store() -> str:
    """Check record store connection health."""
    try:
        get_record_store().ping()
        return f"healthy (backend: {get_settings().STORE_BACKEND})"
    except Exception as e:
        error_msg = str(e)[:100] + "..." if len(str(e)) > 100 else str(e)
        return f"unhealthy: {error_msg}"


def check_rubric() -> str:
    """Check that the rubric loads and its weights are consistent."""
    try:
        rubric = get_rubric()
        return f"healthy (domain: {rubric.domain}, criteria: {len(rubric.criteria_keys())})"
    except Exception as e:
        error_msg = str(e)[:100] + "..." if len(str(e)) > 100 else str(e)
        return f"unhealthy: {error_msg}"


#  Main Health Check Route


@router.get(
    "/health",
    response_model=HealthResponse,
    responses={
        200: {"description": "All dependencies healthy"},
        503: {"description": "One or more dependencies unhealthy"},
    },
    summary="Health check",
    description="Check health of the record store and rubric.",
)
def health_check():
    dependencies = {
        "store": check_store(),
        "rubric": check_rubric(),
    }

    all_healthy = all(v.startswith("healthy") for v in dependencies.values())

    response = HealthResponse(
        status="healthy" if all_healthy else "degraded",
        timestamp=datetime.now(timezone.utc),
        version=get_settings().APP_VERSION,
        dependencies=dependencies,
    )

    if all_healthy:
        return response
    return JSONResponse(
        status_code=status.HTTP_503_SERVICE_UNAVAILABLE,
        content=response.model_dump(mode="json"),
    )
