"""
Feature Settings Router - Panel Evaluation Engine
panel_eval/routers/features.py

Endpoints:
  GET   /api/v1/settings/features - current global feature switches
  PATCH /api/v1/settings/features - change switches (admin)
"""

from fastapi import APIRouter, Depends

from panel_eval.core.dependencies import get_current_actor, get_vendor_service
from panel_eval.models.actor import Actor
from panel_eval.models.feature_settings import FeatureSettings, FeatureSettingsUpdate
from panel_eval.services.vendor_service import VendorService

router = APIRouter(prefix="/settings", tags=["Settings"])


@router.get("/features", response_model=FeatureSettings, summary="Get feature switches")
def read_features(
    actor: Actor = Depends(get_current_actor),
    service: VendorService = Depends(get_vendor_service),
):
    return service.get_features(actor)


@router.patch("/features", response_model=FeatureSettings, summary="Update feature switches")
def update_features(
    payload: FeatureSettingsUpdate,
    actor: Actor = Depends(get_current_actor),
    service: VendorService = Depends(get_vendor_service),
):
    return service.update_features(actor, payload)
