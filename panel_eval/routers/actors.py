"""
Actors Router - Panel Evaluation Engine
panel_eval/routers/actors.py

Endpoints:
  GET /api/v1/me/capabilities - what the caller may do right now
"""

from fastapi import APIRouter, Depends

from panel_eval.core.dependencies import (
    get_current_actor,
    get_feature_settings_repository,
    get_permission_gate,
)
from panel_eval.models.actor import Actor
from panel_eval.models.responses import CapabilitiesResponse, CapabilityStatus
from panel_eval.repositories.settings_repository import FeatureSettingsRepository
from panel_eval.services.permission_gate import PermissionGate

router = APIRouter(tags=["Actors"])


@router.get(
    "/me/capabilities",
    response_model=CapabilitiesResponse,
    summary="Capabilities of the current actor",
)
def my_capabilities(
    actor: Actor = Depends(get_current_actor),
    gate: PermissionGate = Depends(get_permission_gate),
    feature_settings: FeatureSettingsRepository = Depends(get_feature_settings_repository),
):
    decisions = gate.capabilities_for(actor, feature_settings.get_settings())
    return CapabilitiesResponse(
        actor_id=actor.actor_id,
        role=actor.role,
        capabilities={
            capability: CapabilityStatus(granted=d.granted, reason=d.reason)
            for capability, d in decisions.items()
        },
    )
