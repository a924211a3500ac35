"""
Evaluations Router - Panel Evaluation Engine
panel_eval/routers/evaluations.py

Endpoints:
  PUT  /api/v1/vendors/{vendor_id}/evaluations/draft  - save own draft
  POST /api/v1/vendors/{vendor_id}/evaluations        - submit own evaluation
  GET  /api/v1/vendors/{vendor_id}/evaluations/me     - own evaluation + progress
  GET  /api/v1/vendors/{vendor_id}/evaluations        - all evaluations (admin / decision maker)
"""

from typing import List

from fastapi import APIRouter, Depends, status

from panel_eval.core.dependencies import get_current_actor, get_evaluation_manager
from panel_eval.core.exceptions import PermissionNotGranted
from panel_eval.models.actor import Actor
from panel_eval.models.evaluation import (
    Evaluation,
    EvaluationResult,
    EvaluationSubmit,
    EvaluationView,
)
from panel_eval.services.evaluation_service import EvaluationRecordManager

router = APIRouter(prefix="/vendors", tags=["Evaluations"])


def _check_path_vendor(vendor_id: str, payload: EvaluationSubmit) -> None:
    if payload.vendor_id is not None and payload.vendor_id != vendor_id:
        raise PermissionNotGranted()


@router.put(
    "/{vendor_id}/evaluations/draft",
    response_model=Evaluation,
    summary="Save own draft evaluation",
)
def save_draft(
    vendor_id: str,
    payload: EvaluationSubmit,
    actor: Actor = Depends(get_current_actor),
    manager: EvaluationRecordManager = Depends(get_evaluation_manager),
):
    _check_path_vendor(vendor_id, payload)
    return manager.upsert_draft(
        actor,
        vendor_id,
        payload.scores,
        payload.remarks,
        evaluator_id=payload.evaluator_id,
    )


@router.post(
    "/{vendor_id}/evaluations",
    response_model=EvaluationResult,
    status_code=status.HTTP_201_CREATED,
    summary="Submit own evaluation",
)
def submit_evaluation(
    vendor_id: str,
    payload: EvaluationSubmit,
    actor: Actor = Depends(get_current_actor),
    manager: EvaluationRecordManager = Depends(get_evaluation_manager),
):
    _check_path_vendor(vendor_id, payload)
    evaluation = manager.submit(
        actor,
        vendor_id,
        payload.scores,
        payload.remarks,
        evaluator_id=payload.evaluator_id,
    )
    return EvaluationResult(overall_score=evaluation.overall_score, status=evaluation.status)


@router.get(
    "/{vendor_id}/evaluations/me",
    response_model=EvaluationView,
    summary="Own evaluation with weighted category progress",
)
def get_own_evaluation(
    vendor_id: str,
    actor: Actor = Depends(get_current_actor),
    manager: EvaluationRecordManager = Depends(get_evaluation_manager),
):
    return manager.view_own(actor, vendor_id)


@router.get(
    "/{vendor_id}/evaluations",
    response_model=List[Evaluation],
    summary="All evaluations of a vendor",
)
def list_evaluations(
    vendor_id: str,
    actor: Actor = Depends(get_current_actor),
    manager: EvaluationRecordManager = Depends(get_evaluation_manager),
):
    return manager.list_for_vendor(actor, vendor_id)
