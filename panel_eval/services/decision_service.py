"""
Decision Service
panel_eval/services/decision_service.py

Vendor decision state machine:

    PENDING --accept--> ACCEPTED
    PENDING --reject--> REJECTED

ACCEPTED and REJECTED are terminal. The transition is a compare-and-set in the
record store, so of two simultaneous decisions exactly one wins and the other
gets AlreadyDecided. The winning call also records one Vote as evidence.
No quorum of submitted evaluations is required.
"""

import structlog

from panel_eval.core.exceptions import (
    AlreadyDecided,
    EntityNotFoundException,
    RepositoryException,
    VoteNotRecorded,
)
from panel_eval.models.actor import Actor
from panel_eval.models.enumerations import Capability, FinalDecision, VoteChoice
from panel_eval.models.vendor import Vendor, Vote
from panel_eval.repositories.settings_repository import FeatureSettingsRepository
from panel_eval.repositories.vendor_repository import VendorRepository
from panel_eval.services.permission_gate import PermissionGate

logger = structlog.get_logger(__name__)

_VOTE_FOR_DECISION = {
    FinalDecision.ACCEPTED: VoteChoice.ACCEPT,
    FinalDecision.REJECTED: VoteChoice.REJECT,
}


class DecisionService:
    def __init__(
        self,
        vendors: VendorRepository,
        feature_settings: FeatureSettingsRepository,
        gate: PermissionGate,
    ):
        self.vendors = vendors
        self.feature_settings = feature_settings
        self.gate = gate

    def decide(self, actor: Actor, vendor_id: str, decision: FinalDecision) -> Vendor:
        """
        Record the final decision for a vendor.

        Raises:
            ValueError: decision is PENDING
            EntityNotFoundException: unknown vendor
            FeatureDisabled / PermissionNotGranted: gate denied DECIDE
            AlreadyDecided: vendor is no longer PENDING
            VoteNotRecorded: decision stored, Vote write failed
        """
        if decision not in _VOTE_FOR_DECISION:
            raise ValueError("decision must be ACCEPTED or REJECTED")

        vendor = self.vendors.get(vendor_id)
        if vendor is None:
            raise EntityNotFoundException("Vendor", vendor_id)
        self.gate.require(actor, Capability.DECIDE, self.feature_settings.get_settings(), vendor)

        updated = self.vendors.record_decision(vendor, decision, actor.actor_id)
        if updated is None:
            current = self.vendors.get(vendor_id)
            raise AlreadyDecided(vendor_id, current.final_decision.value if current else None)

        vote = Vote(vendor_id=vendor_id, actor_id=actor.actor_id, choice=_VOTE_FOR_DECISION[decision])
        try:
            self.vendors.add_vote(vote)
        except RepositoryException as e:
            # the decision itself stands; only its evidence is missing
            logger.error(
                "decision_vote_not_recorded",
                vendor_id=vendor_id,
                actor_id=actor.actor_id,
                final_decision=decision.value,
                error=str(e),
            )
            raise VoteNotRecorded(vendor_id, decision.value) from e

        logger.info(
            "decision_recorded",
            vendor_id=vendor_id,
            actor_id=actor.actor_id,
            role=actor.role.value,
            final_decision=decision.value,
        )
        return updated

    def accept(self, actor: Actor, vendor_id: str) -> Vendor:
        return self.decide(actor, vendor_id, FinalDecision.ACCEPTED)

    def reject(self, actor: Actor, vendor_id: str) -> Vendor:
        return self.decide(actor, vendor_id, FinalDecision.REJECTED)
