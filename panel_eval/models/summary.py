from pydantic import BaseModel, Field
from datetime import datetime, timezone
from typing import Optional, List

from panel_eval.models.evaluation import Evaluation
from panel_eval.models.vendor import Vendor, VoteTally

# overall_average when no evaluation exists. Serialized as null so it can
# never be confused with a computed 0.
NOT_AVAILABLE = None


class CriterionAverage(BaseModel):
    criterion_key: str
    category_key: str
    average: float = Field(..., description="Mean raw score (0-10); 0 when nobody scored it")
    sample_size: int = Field(..., ge=0)


class CategorySubtotal(BaseModel):
    category_key: str
    name: str
    subtotal: float = Field(..., description="Unweighted mean of the category's criterion averages")


class CommentDigestItem(BaseModel):
    evaluator_id: str
    criterion_key: str
    remark: str
    submitted_at: datetime


class VendorSummary(BaseModel):
    """
    Derived roll-up of a vendor's evaluations. Recomputed on every read,
    never stored.
    """

    vendor_id: str
    evaluation_count: int = Field(..., ge=0)
    criterion_averages: List[CriterionAverage] = Field(default_factory=list)
    category_subtotals: List[CategorySubtotal] = Field(default_factory=list)
    overall_average: Optional[float] = Field(
        default=NOT_AVAILABLE,
        description="Mean of per-evaluation overall scores; null when not available"
    )
    top_comments: List[CommentDigestItem] = Field(default_factory=list)
    computed_at: datetime = Field(default_factory=lambda: datetime.now(timezone.utc))

    @property
    def overall_available(self) -> bool:
        return self.overall_average is not NOT_AVAILABLE

    def criterion_average(self, criterion_key: str) -> float:
        for item in self.criterion_averages:
            if item.criterion_key == criterion_key:
                return item.average
        raise KeyError(criterion_key)

    def category_subtotal(self, category_key: str) -> float:
        for item in self.category_subtotals:
            if item.category_key == category_key:
                return item.subtotal
        raise KeyError(category_key)


class EvaluationReportEntry(Evaluation):
    overall_score_display: Optional[float] = Field(
        default=None,
        description="overall_score rounded to 2 decimals for rendering"
    )


class VendorReport(BaseModel):
    """
    Data handed to the external report renderer (screen, print, export).
    """

    vendor: Vendor
    summary: VendorSummary
    overall_average_display: Optional[float] = None
    evaluations: List[EvaluationReportEntry] = Field(default_factory=list)
    voting: VoteTally = Field(default_factory=VoteTally)
    generated_at: datetime = Field(default_factory=lambda: datetime.now(timezone.utc))
