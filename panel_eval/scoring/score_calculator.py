"""
Score Calculator
-----------------
Maps one evaluator's raw criterion scores (0-10) to a weighted overall score.

Formula:
    contribution_c = (raw_score_c / 10) × weight_percent_c
    overall        = Σ contribution_c over every rubric criterion

A missing score contributes 0: the full rubric weight always applies, so
unscored criteria pull the total down instead of being re-normalized away.
Inputs are assumed validated to [0, 10]. The float sum is clamped to [0, 100];
nothing is rounded here.
"""
import math
from dataclasses import dataclass
from typing import Dict, Mapping, Optional

import structlog

from panel_eval.core.exceptions import ConfigurationError
from panel_eval.scoring.rubric import Rubric

logger = structlog.get_logger(__name__)

MAX_RAW_SCORE = 10.0
MIN_RAW_SCORE = 0.0
WEIGHT_TOLERANCE = 0.01
MIN_OVERALL_SCORE = 0.0
MAX_OVERALL_SCORE = 100.0


@dataclass
class ScoreBreakdown:
    """Output of ScoreCalculator.calculate()."""
    overall_score: float              # [0, 100]
    category_scores: Dict[str, float] # weighted subtotal per category, sums to overall
    scored_criteria: int
    total_criteria: int


def _contribution(raw_score: Optional[float], weight_percent: float) -> float:
    if raw_score is None:
        return 0.0
    return (raw_score / MAX_RAW_SCORE) * weight_percent


def weighted_overall_score(scores: Mapping[str, Optional[float]], rubric: Rubric) -> float:
    """
    Weighted overall score in [0, 100] for one evaluation.

    Args:
        scores: criterion_key → raw score in [0, 10]; absent or None means 0.
        rubric: Rubric supplying the criterion weights.

    Examples:
        Rubric with criteria A (60) and B (40), scores A=10, B=5:
            (10/10)*60 + (5/10)*40 = 80.0
    """
    if abs(rubric.total_weight - 100.0) > WEIGHT_TOLERANCE:
        raise ConfigurationError(
            f"Rubric weights sum to {rubric.total_weight}, expected 100"
        )
    total = math.fsum(
        _contribution(scores.get(key), rubric.weight_of(key))
        for key in rubric.criteria_keys()
    )
    return min(max(total, MIN_OVERALL_SCORE), MAX_OVERALL_SCORE)


class ScoreCalculator:
    """Weighted scoring with a per-category breakdown for the evaluator's own view."""

    def __init__(self, rubric: Rubric):
        self.rubric = rubric

    def calculate(self, scores: Mapping[str, Optional[float]]) -> ScoreBreakdown:
        overall = weighted_overall_score(scores, self.rubric)

        category_scores: Dict[str, float] = {}
        for category in self.rubric.categories:
            category_scores[category.key] = math.fsum(
                _contribution(scores.get(c.key), c.weight_percent)
                for c in category.criteria
            )

        scored = sum(1 for key in self.rubric.criteria_keys() if scores.get(key) is not None)

        logger.debug(
            "overall_score_calculated",
            domain=self.rubric.domain,
            overall_score=overall,
            scored_criteria=scored,
        )

        return ScoreBreakdown(
            overall_score=overall,
            category_scores=category_scores,
            scored_criteria=scored,
            total_criteria=len(self.rubric.criteria_keys()),
        )
