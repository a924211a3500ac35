"""
Evaluation Record Manager
panel_eval/services/evaluation_service.py

Validates and stores evaluator score sets. One record per
(vendor_id, evaluator_id); a later write from the same evaluator replaces the
earlier one. Nothing is written when validation or authorization fails.

Validation order:
    1. every score/remark key is a rubric criterion      → UnknownCriterion
    2. every score is a real number in [0, 10]           → OutOfRangeScore
    3. (submit only) every criterion has a score         → IncompleteScoreSet
"""

from datetime import datetime, timezone
from typing import Dict, List, Mapping, Optional

import structlog

from panel_eval.core.exceptions import (
    AlreadySubmitted,
    EntityNotFoundException,
    OutOfRangeScore,
    IncompleteScoreSet,
    PermissionNotGranted,
    UnknownCriterion,
)
from panel_eval.models.actor import Actor
from panel_eval.models.enumerations import Capability, EvaluationStatus
from panel_eval.models.evaluation import Evaluation, EvaluationView
from panel_eval.repositories.evaluation_repository import EvaluationRepository
from panel_eval.repositories.settings_repository import FeatureSettingsRepository
from panel_eval.repositories.vendor_repository import VendorRepository
from panel_eval.scoring.rubric import Rubric
from panel_eval.scoring.score_calculator import MAX_RAW_SCORE, MIN_RAW_SCORE, ScoreCalculator
from panel_eval.scoring.utils import is_real_number
from panel_eval.services.permission_gate import PermissionGate

logger = structlog.get_logger(__name__)


class EvaluationRecordManager:
    """Create/update semantics for evaluations."""

    def __init__(
        self,
        rubric: Rubric,
        evaluations: EvaluationRepository,
        vendors: VendorRepository,
        feature_settings: FeatureSettingsRepository,
        gate: PermissionGate,
    ):
        self.rubric = rubric
        self.evaluations = evaluations
        self.vendors = vendors
        self.feature_settings = feature_settings
        self.gate = gate
        self.calculator = ScoreCalculator(rubric)

    # ------------------------------------------------------------------
    # validation
    # ------------------------------------------------------------------

    def validate_scores(
        self,
        raw_scores: Mapping[str, object],
        remarks: Mapping[str, object],
        require_complete: bool,
    ) -> Dict[str, float]:
        """
        Check a raw score set against the rubric.

        Returns:
            criterion_key → float for every scored criterion, in rubric order.
            None values mean "not scored yet".
        """
        unknown: List[str] = []
        for key in list(raw_scores) + list(remarks):
            if not self.rubric.has_criterion(key) and key not in unknown:
                unknown.append(key)
        if unknown:
            raise UnknownCriterion(unknown)

        cleaned: Dict[str, float] = {}
        for key in self.rubric.criteria_keys():
            if key not in raw_scores or raw_scores[key] is None:
                continue
            value = raw_scores[key]
            if not is_real_number(value) or not (MIN_RAW_SCORE <= value <= MAX_RAW_SCORE):
                raise OutOfRangeScore(key, value)
            cleaned[key] = float(value)

        if require_complete:
            missing = [key for key in self.rubric.criteria_keys() if key not in cleaned]
            if missing:
                raise IncompleteScoreSet(missing)

        return cleaned

    @staticmethod
    def _clean_remarks(remarks: Mapping[str, object]) -> Dict[str, str]:
        return {key: str(text) for key, text in remarks.items() if text is not None}

    # ------------------------------------------------------------------
    # guards
    # ------------------------------------------------------------------

    def _require(self, actor: Actor, capability: Capability) -> None:
        self.gate.require(actor, capability, self.feature_settings.get_settings())

    @staticmethod
    def _require_self(actor: Actor, evaluator_id: Optional[str]) -> str:
        """Evaluators only ever write their own record."""
        if evaluator_id is not None and evaluator_id != actor.actor_id:
            raise PermissionNotGranted()
        return actor.actor_id

    def _require_vendor(self, vendor_id: str) -> None:
        if self.vendors.get(vendor_id) is None:
            raise EntityNotFoundException("Vendor", vendor_id)

    # ------------------------------------------------------------------
    # operations
    # ------------------------------------------------------------------

    def submit(
        self,
        actor: Actor,
        vendor_id: str,
        raw_scores: Mapping[str, object],
        remarks: Optional[Mapping[str, object]] = None,
        evaluator_id: Optional[str] = None,
    ) -> Evaluation:
        """
        Validate a complete score set, compute its overall score and store it
        as SUBMITTED, replacing any earlier record of the same evaluator.
        """
        remarks = remarks or {}
        self._require(actor, Capability.SUBMIT_EVALUATION)
        evaluator_id = self._require_self(actor, evaluator_id)
        self._require_vendor(vendor_id)
        scores = self.validate_scores(raw_scores, remarks, require_complete=True)

        now = datetime.now(timezone.utc)
        existing = self.evaluations.get(vendor_id, evaluator_id)
        evaluation = Evaluation(
            vendor_id=vendor_id,
            evaluator_id=evaluator_id,
            domain=self.rubric.domain,
            scores=scores,
            remarks=self._clean_remarks(remarks),
            overall_score=self.calculator.calculate(scores).overall_score,
            status=EvaluationStatus.SUBMITTED,
            created_at=existing.created_at if existing else now,
            updated_at=now,
            submitted_at=now,
        )
        saved = self.evaluations.save(evaluation)

        logger.info(
            "evaluation_submitted",
            vendor_id=vendor_id,
            evaluator_id=evaluator_id,
            overall_score=saved.overall_score,
            replaced=existing is not None,
        )
        return saved

    def upsert_draft(
        self,
        actor: Actor,
        vendor_id: str,
        raw_scores: Mapping[str, object],
        remarks: Optional[Mapping[str, object]] = None,
        evaluator_id: Optional[str] = None,
    ) -> Evaluation:
        """
        Save work in progress. Partial score sets are allowed; a SUBMITTED
        record is never downgraded back to DRAFT.
        """
        remarks = remarks or {}
        self._require(actor, Capability.SUBMIT_EVALUATION)
        evaluator_id = self._require_self(actor, evaluator_id)
        self._require_vendor(vendor_id)
        scores = self.validate_scores(raw_scores, remarks, require_complete=False)

        existing = self.evaluations.get(vendor_id, evaluator_id)
        if existing is not None and existing.is_submitted:
            raise AlreadySubmitted(vendor_id, evaluator_id)

        now = datetime.now(timezone.utc)
        draft = Evaluation(
            vendor_id=vendor_id,
            evaluator_id=evaluator_id,
            domain=self.rubric.domain,
            scores=scores,
            remarks=self._clean_remarks(remarks),
            overall_score=self.calculator.calculate(scores).overall_score,
            status=EvaluationStatus.DRAFT,
            created_at=existing.created_at if existing else now,
            updated_at=now,
        )
        saved = self.evaluations.save(draft)

        logger.info(
            "evaluation_draft_saved",
            vendor_id=vendor_id,
            evaluator_id=evaluator_id,
            scored_criteria=len(scores),
        )
        return saved

    def get_own(self, actor: Actor, vendor_id: str) -> Evaluation:
        """
        Raises:
            EntityNotFoundException: the actor has no evaluation for this vendor
        """
        self._require(actor, Capability.VIEW_OWN_EVALUATION)
        evaluation = self.evaluations.get(vendor_id, actor.actor_id)
        if evaluation is None:
            raise EntityNotFoundException("Evaluation", f"{vendor_id}/{actor.actor_id}")
        return evaluation

    def view_own(self, actor: Actor, vendor_id: str) -> EvaluationView:
        """Own evaluation plus the weighted per-category progress."""
        evaluation = self.get_own(actor, vendor_id)
        breakdown = self.calculator.calculate(evaluation.scores)
        return EvaluationView(
            **evaluation.model_dump(),
            category_scores=breakdown.category_scores,
            scored_criteria=breakdown.scored_criteria,
            total_criteria=breakdown.total_criteria,
        )

    def list_for_vendor(self, actor: Actor, vendor_id: str) -> List[Evaluation]:
        """Every evaluation of a vendor (drafts included). ADMIN / DECISION_MAKER only."""
        self._require(actor, Capability.VIEW_ALL_EVALUATIONS)
        self._require_vendor(vendor_id)
        return self.evaluations.list_for_vendor(vendor_id)
