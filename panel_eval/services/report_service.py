"""
Report Service
panel_eval/services/report_service.py

Assembles vendor summaries and report data for the external renderer. The
summary is recomputed from stored evaluations on every call; only SUBMITTED
evaluations count towards it. Report data lists every evaluation with its
status.
"""

import logging
from typing import List

from panel_eval.core.exceptions import EntityNotFoundException
from panel_eval.models.actor import Actor
from panel_eval.models.enumerations import Capability, EvaluationStatus, VoteChoice
from panel_eval.models.summary import EvaluationReportEntry, VendorReport, VendorSummary
from panel_eval.models.vendor import Vendor, VoteTally
from panel_eval.repositories.evaluation_repository import EvaluationRepository
from panel_eval.repositories.settings_repository import FeatureSettingsRepository
from panel_eval.repositories.vendor_repository import VendorRepository
from panel_eval.scoring.aggregation import DEFAULT_TOP_COMMENTS, AggregationEngine
from panel_eval.scoring.rubric import Rubric
from panel_eval.scoring.utils import to_display
from panel_eval.services.permission_gate import PermissionGate

logger = logging.getLogger(__name__)


class ReportService:
    def __init__(
        self,
        rubric: Rubric,
        evaluations: EvaluationRepository,
        vendors: VendorRepository,
        feature_settings: FeatureSettingsRepository,
        gate: PermissionGate,
        top_comments_limit: int = DEFAULT_TOP_COMMENTS,
    ):
        self.engine = AggregationEngine(rubric)
        self.evaluations = evaluations
        self.vendors = vendors
        self.feature_settings = feature_settings
        self.gate = gate
        self.top_comments_limit = top_comments_limit

    def _require(self, actor: Actor, *capabilities: Capability) -> None:
        settings = self.feature_settings.get_settings()
        for capability in capabilities:
            self.gate.require(actor, capability, settings)

    def _vendor(self, vendor_id: str) -> Vendor:
        vendor = self.vendors.get(vendor_id)
        if vendor is None:
            raise EntityNotFoundException("Vendor", vendor_id)
        return vendor

    def _summarize(self, vendor_id: str, evaluations) -> VendorSummary:
        submitted = [e for e in evaluations if e.status == EvaluationStatus.SUBMITTED]
        return self.engine.aggregate(vendor_id, submitted, top_n=self.top_comments_limit)

    def _tally(self, vendor_id: str) -> VoteTally:
        votes = self.vendors.list_votes(vendor_id)
        accept = sum(1 for v in votes if v.choice == VoteChoice.ACCEPT)
        reject = sum(1 for v in votes if v.choice == VoteChoice.REJECT)
        return VoteTally(accept=accept, reject=reject, total=len(votes))

    def _build_report(self, vendor: Vendor) -> VendorReport:
        evaluations = self.evaluations.list_for_vendor(vendor.id)
        summary = self._summarize(vendor.id, evaluations)
        return VendorReport(
            vendor=vendor,
            summary=summary,
            overall_average_display=to_display(summary.overall_average),
            evaluations=[
                EvaluationReportEntry(
                    **e.model_dump(),
                    overall_score_display=to_display(e.overall_score),
                )
                for e in evaluations
            ],
            voting=self._tally(vendor.id),
        )

    def summary(self, actor: Actor, vendor_id: str) -> VendorSummary:
        self._require(actor, Capability.VIEW_AGGREGATE)
        self._vendor(vendor_id)
        return self._summarize(vendor_id, self.evaluations.list_for_vendor(vendor_id))

    def report(self, actor: Actor, vendor_id: str) -> VendorReport:
        self._require(actor, Capability.VIEW_REPORT)
        return self._build_report(self._vendor(vendor_id))

    def print_report(self, actor: Actor, vendor_id: str) -> VendorReport:
        """Report data for printing: print feature check first, then report access."""
        self._require(actor, Capability.PRINT_REPORTS, Capability.VIEW_REPORT)
        report = self._build_report(self._vendor(vendor_id))
        logger.info("print report prepared for vendor %s by %s", vendor_id, actor.actor_id)
        return report

    def export_reports(self, actor: Actor) -> List[VendorReport]:
        """Report data for every vendor, ordered by vendor name."""
        self._require(actor, Capability.EXPORT_DATA, Capability.VIEW_REPORT)
        reports = [self._build_report(vendor) for vendor in self.vendors.list_all()]
        logger.info("export prepared with %d vendor reports for %s", len(reports), actor.actor_id)
        return reports
