# tests/test_permission_gate.py

"""
Permission Gate Tests - role capabilities and feature switches
"""

import pytest

from panel_eval.core.exceptions import AlreadyDecided, FeatureDisabled, PermissionNotGranted
from panel_eval.models.actor import Actor, PermissionFlags
from panel_eval.models.enumerations import Capability, DenialReason, FinalDecision, Role
from panel_eval.models.feature_settings import FeatureSettings
from panel_eval.models.vendor import Vendor


ALL_ON = FeatureSettings()


class TestRoleCapabilities:
    """Tests for the role → capability table."""

    @pytest.mark.parametrize("capability", [Capability.SUBMIT_EVALUATION, Capability.VIEW_OWN_EVALUATION])
    def test_contributor_granted(self, gate, contributor, capability):
        assert gate.check(contributor, capability, ALL_ON).granted

    @pytest.mark.parametrize(
        "capability",
        [
            Capability.VIEW_ALL_EVALUATIONS,
            Capability.VIEW_AGGREGATE,
            Capability.VIEW_REPORT,
            Capability.DECIDE,
            Capability.MANAGE_SETTINGS,
            Capability.MANAGE_VENDORS,
        ],
    )
    def test_contributor_denied(self, gate, contributor, capability):
        decision = gate.check(contributor, capability, ALL_ON)
        assert not decision.granted
        assert decision.reason == DenialReason.PERMISSION_NOT_GRANTED

    def test_decision_maker(self, gate, decision_maker):
        for capability in (
            Capability.SUBMIT_EVALUATION,
            Capability.VIEW_ALL_EVALUATIONS,
            Capability.VIEW_AGGREGATE,
            Capability.VIEW_REPORT,
            Capability.DECIDE,
        ):
            assert gate.check(decision_maker, capability, ALL_ON).granted
        assert not gate.check(decision_maker, Capability.MANAGE_SETTINGS, ALL_ON).granted

    def test_admin_observes_but_never_scores(self, gate, admin):
        assert not gate.check(admin, Capability.SUBMIT_EVALUATION, ALL_ON).granted
        for capability in (
            Capability.VIEW_ALL_EVALUATIONS,
            Capability.VIEW_AGGREGATE,
            Capability.VIEW_REPORT,
            Capability.MANAGE_SETTINGS,
            Capability.MANAGE_VENDORS,
            Capability.DECIDE,
        ):
            assert gate.check(admin, capability, ALL_ON).granted

    def test_require_raises_permission_not_granted(self, gate, contributor):
        with pytest.raises(PermissionNotGranted):
            gate.require(contributor, Capability.VIEW_ALL_EVALUATIONS, ALL_ON)


class TestDirectDecision:
    """Tests for the direct_decision_enabled switch."""

    def test_disabled_blocks_decision_maker(self, gate, decision_maker):
        settings = FeatureSettings(direct_decision_enabled=False)
        decision = gate.check(decision_maker, Capability.DECIDE, settings)
        assert decision.reason == DenialReason.FEATURE_DISABLED

    def test_disabled_blocks_admin(self, gate, admin):
        settings = FeatureSettings(direct_decision_enabled=False)
        with pytest.raises(FeatureDisabled):
            gate.require(admin, Capability.DECIDE, settings)

    def test_decided_vendor_denied(self, gate, decision_maker):
        vendor = Vendor(name="Acme", final_decision=FinalDecision.ACCEPTED)
        decision = gate.check(decision_maker, Capability.DECIDE, ALL_ON, vendor)
        assert decision.reason == DenialReason.ALREADY_DECIDED
        with pytest.raises(AlreadyDecided):
            gate.require(decision_maker, Capability.DECIDE, ALL_ON, vendor)

    def test_pending_vendor_granted(self, gate, admin):
        assert gate.check(admin, Capability.DECIDE, ALL_ON, Vendor(name="Acme")).granted

    def test_contributor_denied_by_role_first(self, gate, contributor):
        settings = FeatureSettings(direct_decision_enabled=False)
        decision = gate.check(contributor, Capability.DECIDE, settings)
        assert decision.reason == DenialReason.PERMISSION_NOT_GRANTED


class TestFeatureCapabilities:
    """Chat, print and export need the global switch AND the actor flag."""

    @pytest.mark.parametrize(
        "capability, setting, flag",
        [
            (Capability.ACCESS_CHAT, "chat_enabled", "can_access_chat"),
            (Capability.PRINT_REPORTS, "print_enabled", "can_print_reports"),
            (Capability.EXPORT_DATA, "export_enabled", "can_export_data"),
        ],
    )
    def test_truth_table(self, gate, capability, setting, flag):
        for role in Role:
            for enabled in (True, False):
                for allowed in (True, False):
                    actor = Actor(actor_id="x", role=role, permissions=PermissionFlags(**{flag: allowed}))
                    decision = gate.check(actor, capability, FeatureSettings(**{setting: enabled}))
                    assert decision.granted == (enabled and allowed)
                    if not enabled:
                        assert decision.reason == DenialReason.FEATURE_DISABLED
                    elif not allowed:
                        assert decision.reason == DenialReason.PERMISSION_NOT_GRANTED

    def test_print_disabled_globally_even_for_permitted_actor(self, gate):
        actor = Actor(
            actor_id="p",
            role=Role.DECISION_MAKER,
            permissions=PermissionFlags(can_print_reports=True),
        )
        with pytest.raises(FeatureDisabled):
            gate.require(actor, Capability.PRINT_REPORTS, FeatureSettings(print_enabled=False))

    def test_evaluated_at_use_time(self, gate, admin):
        """No caching: the same actor flips with the settings passed in."""
        assert gate.check(admin, Capability.EXPORT_DATA, ALL_ON).granted
        assert not gate.check(admin, Capability.EXPORT_DATA, FeatureSettings(export_enabled=False)).granted
        assert gate.check(admin, Capability.EXPORT_DATA, ALL_ON).granted


class TestCapabilitiesFor:

    def test_lists_every_capability(self, gate, contributor):
        decisions = gate.capabilities_for(contributor, ALL_ON)
        assert set(decisions) == set(Capability)
        assert decisions[Capability.SUBMIT_EVALUATION].granted
        assert not decisions[Capability.ACCESS_CHAT].granted
