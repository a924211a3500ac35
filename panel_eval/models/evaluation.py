from pydantic import BaseModel, Field
from datetime import datetime, timezone
from typing import Any, Optional, Dict

from panel_eval.models.enumerations import EvaluationStatus


class EvaluationSubmit(BaseModel):
    """
    Score submission payload.

    vendor_id / evaluator_id are optional on the wire: the route supplies the
    vendor and the authenticated actor is the evaluator. When present they
    must match.
    """

    vendor_id: Optional[str] = Field(
        default=None,
        description="Vendor being scored"
    )

    evaluator_id: Optional[str] = Field(
        default=None,
        description="Evaluator submitting the scores"
    )

    # Not coerced here: booleans and numeric strings must reach the
    # record manager and fail as OutOfRangeScore.
    scores: Dict[str, Any] = Field(
        default_factory=dict,
        description="criterion_key → raw score (0-10, fractional allowed)"
    )

    remarks: Dict[str, str] = Field(
        default_factory=dict,
        description="criterion_key → free-text remark"
    )


class Evaluation(BaseModel):
    """
    One evaluator's score set for one vendor.

    Unique per (vendor_id, evaluator_id).
    """

    vendor_id: str = Field(..., min_length=1)
    evaluator_id: str = Field(..., min_length=1)

    domain: str = Field(
        ...,
        description="Rubric variant the scores were given against"
    )

    scores: Dict[str, Optional[float]] = Field(default_factory=dict)
    remarks: Dict[str, str] = Field(default_factory=dict)

    overall_score: Optional[float] = Field(
        default=None,
        ge=0,
        le=100,
        description="Weighted overall score, full precision"
    )

    status: EvaluationStatus = Field(default=EvaluationStatus.DRAFT)

    created_at: datetime = Field(
        default_factory=lambda: datetime.now(timezone.utc),
        description="Record creation timestamp (UTC)"
    )

    updated_at: datetime = Field(
        default_factory=lambda: datetime.now(timezone.utc),
        description="Last write timestamp (UTC)"
    )

    submitted_at: Optional[datetime] = Field(
        default=None,
        description="Timestamp of the latest submission (UTC)"
    )

    @property
    def is_submitted(self) -> bool:
        return self.status == EvaluationStatus.SUBMITTED


class EvaluationResult(BaseModel):
    """Returned by the scoring submission surface."""

    overall_score: float
    status: EvaluationStatus


class EvaluationView(Evaluation):
    """Evaluator's own view: the stored record plus weighted category progress."""

    category_scores: Dict[str, float] = Field(default_factory=dict)
    scored_criteria: int = 0
    total_criteria: int = 0
