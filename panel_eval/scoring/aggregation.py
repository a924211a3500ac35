"""
Aggregation Engine
-------------------
Folds every evaluation of a vendor into a dashboard summary.

    criterion_average  = mean raw score over evaluations that scored it (0 if none)
    category_subtotal  = unweighted mean of the category's criterion averages
    overall_average    = mean of per-evaluation overall_score (NOT_AVAILABLE if none)
    top_comments       = non-empty remarks, most recent submission first

category_subtotal is intentionally not re-weighted by the criterion weights;
the evaluator's own progress view (ScoreCalculator.calculate) is the weighted one.

The summary is a pure function of the evaluation list it is given. Callers read
the evaluation set once per request, so a summary may miss a submission that
lands mid-read; the next read picks it up.
"""
from datetime import datetime, timezone
from typing import Iterable, List, Optional, Sequence

import structlog

from panel_eval.models.evaluation import Evaluation
from panel_eval.models.summary import (
    NOT_AVAILABLE,
    CategorySubtotal,
    CommentDigestItem,
    CriterionAverage,
    VendorSummary,
)
from panel_eval.scoring.rubric import Rubric
from panel_eval.scoring.score_calculator import weighted_overall_score
from panel_eval.scoring.utils import mean

logger = structlog.get_logger(__name__)

DEFAULT_TOP_COMMENTS = 3

_EPOCH = datetime.min.replace(tzinfo=timezone.utc)


def _recency(evaluation: Evaluation) -> datetime:
    return evaluation.submitted_at or evaluation.updated_at or _EPOCH


def top_comments(evaluations: Iterable[Evaluation], n: int = DEFAULT_TOP_COMMENTS) -> List[CommentDigestItem]:
    """All non-empty remarks flattened, newest submission first, truncated to n."""
    items: List[CommentDigestItem] = []
    for evaluation in evaluations:
        for criterion_key, remark in evaluation.remarks.items():
            if remark is None or not remark.strip():
                continue
            items.append(
                CommentDigestItem(
                    evaluator_id=evaluation.evaluator_id,
                    criterion_key=criterion_key,
                    remark=remark.strip(),
                    submitted_at=_recency(evaluation),
                )
            )
    # stable sort keeps rubric order within one evaluation
    items.sort(key=lambda item: item.submitted_at, reverse=True)
    return items[: max(n, 0)]


class AggregationEngine:
    """Compute VendorSummary from a vendor's evaluations."""

    def __init__(self, rubric: Rubric):
        self.rubric = rubric

    def _overall_of(self, evaluation: Evaluation) -> float:
        if evaluation.overall_score is not None:
            return evaluation.overall_score
        return weighted_overall_score(evaluation.scores, self.rubric)

    def aggregate(
        self,
        vendor_id: str,
        evaluations: Sequence[Evaluation],
        top_n: int = DEFAULT_TOP_COMMENTS,
    ) -> VendorSummary:
        evaluations = list(evaluations)

        criterion_averages: List[CriterionAverage] = []
        averages_by_key = {}
        for key in self.rubric.criteria_keys():
            present = [
                e.scores[key]
                for e in evaluations
                if e.scores.get(key) is not None
            ]
            avg = mean(present)
            averages_by_key[key] = avg
            criterion_averages.append(
                CriterionAverage(
                    criterion_key=key,
                    category_key=self.rubric.category_of(key),
                    average=avg,
                    sample_size=len(present),
                )
            )

        category_subtotals = [
            CategorySubtotal(
                category_key=category.key,
                name=category.name,
                subtotal=mean(averages_by_key[c.key] for c in category.criteria),
            )
            for category in self.rubric.categories
        ]

        overall_average: Optional[float] = NOT_AVAILABLE
        if evaluations:
            overall_average = mean(self._overall_of(e) for e in evaluations)

        summary = VendorSummary(
            vendor_id=vendor_id,
            evaluation_count=len(evaluations),
            criterion_averages=criterion_averages,
            category_subtotals=category_subtotals,
            overall_average=overall_average,
            top_comments=top_comments(evaluations, top_n),
        )

        logger.info(
            "vendor_aggregated",
            vendor_id=vendor_id,
            evaluation_count=len(evaluations),
            overall_average=overall_average,
        )
        return summary
