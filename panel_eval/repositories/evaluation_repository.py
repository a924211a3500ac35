"""
Evaluation Repository - Panel Evaluation Engine
panel_eval/repositories/evaluation_repository.py

Evaluations live under one store entity per vendor (``evaluations:{vendor_id}``)
keyed by evaluator_id, so the store's keyed upsert is what guarantees a single
record per (vendor_id, evaluator_id).
"""

from typing import List, Optional

from panel_eval.models.evaluation import Evaluation
from panel_eval.repositories.base import BaseRepository


class EvaluationRepository(BaseRepository):
    """Repository for Evaluation records."""

    ENTITY = "evaluations"

    def _entity(self, vendor_id: str) -> str:
        return f"{self.ENTITY}:{vendor_id}"

    def get(self, vendor_id: str, evaluator_id: str) -> Optional[Evaluation]:
        """
        Retrieve one evaluator's evaluation of a vendor.

        Returns:
            Evaluation or None if the evaluator has not scored the vendor
        """
        row = self.store.get(self._entity(vendor_id), evaluator_id)
        if not row:
            return None
        return Evaluation.model_validate(row)

    def save(self, evaluation: Evaluation) -> Evaluation:
        """Insert or replace the evaluation keyed by (vendor_id, evaluator_id)."""
        row = self.store.upsert(
            self._entity(evaluation.vendor_id),
            evaluation.evaluator_id,
            evaluation.model_dump(mode="json"),
        )
        return Evaluation.model_validate(row)

    def list_for_vendor(self, vendor_id: str) -> List[Evaluation]:
        """All evaluations of a vendor, oldest first."""
        rows = self.store.list(self._entity(vendor_id))
        evaluations = [Evaluation.model_validate(r) for r in rows]
        evaluations.sort(key=lambda e: (self.normalize_timestamp(e.created_at), e.evaluator_id))
        return evaluations
