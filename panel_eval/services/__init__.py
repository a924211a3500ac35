"""
Services Package - Panel Evaluation Engine
panel_eval/services/__init__.py

Business operations over the repositories, each guarded by the permission gate.
"""

from panel_eval.services.actor_resolver import ActorResolver, JwtActorResolver, bearer_credential
from panel_eval.services.decision_service import DecisionService
from panel_eval.services.evaluation_service import EvaluationRecordManager
from panel_eval.services.permission_gate import AccessDecision, PermissionGate
from panel_eval.services.report_service import ReportService
from panel_eval.services.vendor_service import VendorService

__all__ = [
    "AccessDecision",
    "ActorResolver",
    "DecisionService",
    "EvaluationRecordManager",
    "JwtActorResolver",
    "PermissionGate",
    "ReportService",
    "VendorService",
    "bearer_credential",
]
