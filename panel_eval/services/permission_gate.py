"""
Role & Permission Gate
panel_eval/services/permission_gate.py

Single place that decides what an actor may do. Evaluated on demand at the
moment a capability is used; nothing is cached or polled.

Rules, first match wins:
    0. ACCESS_CHAT / PRINT_REPORTS / EXPORT_DATA (any role):
         global flag off      → Denied(FEATURE_DISABLED)
         actor flag off       → Denied(PERMISSION_NOT_GRANTED)
    1. DECIDE (ADMIN and DECISION_MAKER only): direct_decision_enabled
         required, and a vendor that already left PENDING → Denied(ALREADY_DECIDED)
    2. ADMIN: every read capability and administration granted; scoring denied
    3. DECISION_MAKER: submit/view own, view all evaluations, aggregate,
         report
    4. CONTRIBUTOR: submit/view own only
"""

from dataclasses import dataclass
from typing import Dict, Optional

import structlog

from panel_eval.core.exceptions import (
    AlreadyDecided,
    AuthorizationError,
    FeatureDisabled,
    PermissionNotGranted,
)
from panel_eval.models.actor import Actor
from panel_eval.models.enumerations import Capability, DenialReason, Role
from panel_eval.models.feature_settings import FeatureSettings
from panel_eval.models.vendor import Vendor

logger = structlog.get_logger(__name__)


@dataclass(frozen=True)
class AccessDecision:
    granted: bool
    reason: Optional[DenialReason] = None

    @classmethod
    def grant(cls) -> "AccessDecision":
        return cls(granted=True)

    @classmethod
    def deny(cls, reason: DenialReason) -> "AccessDecision":
        return cls(granted=False, reason=reason)


GRANTED = AccessDecision.grant()

_ADMIN_CAPABILITIES = frozenset({
    Capability.VIEW_OWN_EVALUATION,
    Capability.VIEW_ALL_EVALUATIONS,
    Capability.VIEW_AGGREGATE,
    Capability.VIEW_REPORT,
    Capability.MANAGE_SETTINGS,
    Capability.MANAGE_VENDORS,
})

_DECISION_MAKER_CAPABILITIES = frozenset({
    Capability.SUBMIT_EVALUATION,
    Capability.VIEW_OWN_EVALUATION,
    Capability.VIEW_ALL_EVALUATIONS,
    Capability.VIEW_AGGREGATE,
    Capability.VIEW_REPORT,
})

_CONTRIBUTOR_CAPABILITIES = frozenset({
    Capability.SUBMIT_EVALUATION,
    Capability.VIEW_OWN_EVALUATION,
})

_ROLE_CAPABILITIES = {
    Role.ADMIN: _ADMIN_CAPABILITIES,
    Role.DECISION_MAKER: _DECISION_MAKER_CAPABILITIES,
    Role.CONTRIBUTOR: _CONTRIBUTOR_CAPABILITIES,
}

_DECIDING_ROLES = frozenset({Role.ADMIN, Role.DECISION_MAKER})

_DENIAL_ERRORS = {
    DenialReason.FEATURE_DISABLED: FeatureDisabled,
    DenialReason.PERMISSION_NOT_GRANTED: PermissionNotGranted,
}


def _feature_gate(actor: Actor, capability: Capability, settings: FeatureSettings) -> Optional[AccessDecision]:
    """Global flag AND actor flag for the feature capabilities; None for others."""
    if capability == Capability.ACCESS_CHAT:
        enabled, allowed = settings.chat_enabled, actor.permissions.can_access_chat
    elif capability == Capability.PRINT_REPORTS:
        enabled, allowed = settings.print_enabled, actor.permissions.can_print_reports
    elif capability == Capability.EXPORT_DATA:
        enabled, allowed = settings.export_enabled, actor.permissions.can_export_data
    else:
        return None

    if not enabled:
        return AccessDecision.deny(DenialReason.FEATURE_DISABLED)
    if not allowed:
        return AccessDecision.deny(DenialReason.PERMISSION_NOT_GRANTED)
    return GRANTED


class PermissionGate:
    """Resolve (actor, capability) to Granted or Denied(reason)."""

    def check(
        self,
        actor: Actor,
        capability: Capability,
        settings: FeatureSettings,
        vendor: Optional[Vendor] = None,
    ) -> AccessDecision:
        feature_decision = _feature_gate(actor, capability, settings)
        if feature_decision is not None:
            return feature_decision

        if capability == Capability.DECIDE:
            if actor.role not in _DECIDING_ROLES:
                return AccessDecision.deny(DenialReason.PERMISSION_NOT_GRANTED)
            if not settings.direct_decision_enabled:
                return AccessDecision.deny(DenialReason.FEATURE_DISABLED)
            if vendor is not None and vendor.is_decided:
                return AccessDecision.deny(DenialReason.ALREADY_DECIDED)
            return GRANTED

        if capability in _ROLE_CAPABILITIES[actor.role]:
            return GRANTED
        return AccessDecision.deny(DenialReason.PERMISSION_NOT_GRANTED)

    def require(
        self,
        actor: Actor,
        capability: Capability,
        settings: FeatureSettings,
        vendor: Optional[Vendor] = None,
    ) -> None:
        """
        Raise the matching AuthorizationError unless the capability is granted.

        Raises:
            FeatureDisabled: the feature is switched off globally
            PermissionNotGranted: the actor's role or flag does not allow it
            AlreadyDecided: DECIDE on a vendor that already left PENDING
        """
        decision = self.check(actor, capability, settings, vendor)
        if decision.granted:
            return
        logger.info(
            "capability_denied",
            actor_id=actor.actor_id,
            role=actor.role.value,
            capability=capability.value,
            reason=decision.reason.value,
        )
        if decision.reason == DenialReason.ALREADY_DECIDED:
            raise AlreadyDecided(vendor.id, vendor.final_decision.value)
        raise _DENIAL_ERRORS.get(decision.reason, AuthorizationError)()

    def capabilities_for(self, actor: Actor, settings: FeatureSettings) -> Dict[Capability, AccessDecision]:
        """Every capability with its current decision for this actor."""
        return {capability: self.check(actor, capability, settings) for capability in Capability}
