"""
Rubric Router - Panel Evaluation Engine
panel_eval/routers/rubric.py

Endpoints:
  GET /api/v1/rubric - active rubric with categories, criteria and weights
"""

from typing import Any, Dict

from fastapi import APIRouter, Depends

from panel_eval.core.dependencies import get_current_actor, get_rubric
from panel_eval.models.actor import Actor
from panel_eval.scoring.rubric import Rubric

router = APIRouter(tags=["Rubric"])


@router.get("/rubric", summary="Active scoring rubric")
def read_rubric(
    actor: Actor = Depends(get_current_actor),
    rubric: Rubric = Depends(get_rubric),
) -> Dict[str, Any]:
    return rubric.to_dict()
