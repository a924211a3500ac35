"""
Vendor Repository - Panel Evaluation Engine
panel_eval/repositories/vendor_repository.py

Vendors, their decision votes, and the atomic PENDING → terminal transition.
"""

import logging
from typing import List, Optional

from panel_eval.models.enumerations import FinalDecision
from panel_eval.models.vendor import Vendor, VendorCreate, Vote
from panel_eval.repositories.base import BaseRepository

logger = logging.getLogger(__name__)


class VendorRepository(BaseRepository):
    """Repository for Vendor and Vote records."""

    ENTITY = "vendors"
    VOTES_ENTITY = "votes"

    def create(self, data: VendorCreate) -> Vendor:
        """
        Register a vendor with final_decision PENDING.

        Args:
            data: Vendor registration payload

        Returns:
            Created vendor
        """
        vendor = Vendor(**data.model_dump())
        row = self.store.upsert(self.ENTITY, vendor.id, vendor.model_dump(mode="json"))
        return Vendor.model_validate(row)

    def get(self, vendor_id: str) -> Optional[Vendor]:
        row = self.store.get(self.ENTITY, vendor_id)
        if not row:
            return None
        return Vendor.model_validate(row)

    def list_all(self) -> List[Vendor]:
        """All vendors ordered by name."""
        vendors = [Vendor.model_validate(r) for r in self.store.list(self.ENTITY)]
        vendors.sort(key=lambda v: (v.name.lower(), v.id))
        return vendors

    def record_decision(
        self,
        vendor: Vendor,
        decision: FinalDecision,
        actor_id: str,
    ) -> Optional[Vendor]:
        """
        Move a vendor from PENDING to a terminal decision.

        Only one concurrent caller can win; the store's compare-and-set on
        final_decision arbitrates.

        Returns:
            Updated vendor, or None if the vendor was no longer PENDING
        """
        updated = vendor.model_copy(
            update={
                "final_decision": decision,
                "decided_by": actor_id,
                "decided_at": self.now(),
            }
        )
        won = self.store.compare_and_set(
            self.ENTITY,
            vendor.id,
            field="final_decision",
            expected=FinalDecision.PENDING.value,
            value=updated.model_dump(mode="json"),
        )
        if not won:
            logger.info("decision for vendor %s lost compare-and-set", vendor.id)
            return None
        return updated

    def add_vote(self, vote: Vote) -> Vote:
        row = self.store.upsert(
            f"{self.VOTES_ENTITY}:{vote.vendor_id}",
            vote.id,
            vote.model_dump(mode="json"),
        )
        return Vote.model_validate(row)

    def list_votes(self, vendor_id: str) -> List[Vote]:
        votes = [Vote.model_validate(r) for r in self.store.list(f"{self.VOTES_ENTITY}:{vendor_id}")]
        votes.sort(key=lambda v: v.created_at)
        return votes
