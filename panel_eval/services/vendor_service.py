"""
Vendor & Feature Settings Service
panel_eval/services/vendor_service.py

Administrative operations: vendor registration and global feature switches.
Reading either is open to any authenticated actor.
"""

from typing import List

import structlog

from panel_eval.core.exceptions import EntityNotFoundException
from panel_eval.models.actor import Actor
from panel_eval.models.enumerations import Capability
from panel_eval.models.feature_settings import FeatureSettings, FeatureSettingsUpdate
from panel_eval.models.vendor import Vendor, VendorCreate
from panel_eval.repositories.settings_repository import FeatureSettingsRepository
from panel_eval.repositories.vendor_repository import VendorRepository
from panel_eval.services.permission_gate import PermissionGate

logger = structlog.get_logger(__name__)


class VendorService:
    def __init__(
        self,
        vendors: VendorRepository,
        feature_settings: FeatureSettingsRepository,
        gate: PermissionGate,
    ):
        self.vendors = vendors
        self.feature_settings = feature_settings
        self.gate = gate

    def register(self, actor: Actor, data: VendorCreate) -> Vendor:
        self.gate.require(actor, Capability.MANAGE_VENDORS, self.feature_settings.get_settings())
        vendor = self.vendors.create(data)
        logger.info("vendor_registered", vendor_id=vendor.id, actor_id=actor.actor_id)
        return vendor

    def get(self, actor: Actor, vendor_id: str) -> Vendor:
        vendor = self.vendors.get(vendor_id)
        if vendor is None:
            raise EntityNotFoundException("Vendor", vendor_id)
        return vendor

    def list(self, actor: Actor) -> List[Vendor]:
        return self.vendors.list_all()

    def get_features(self, actor: Actor) -> FeatureSettings:
        return self.feature_settings.get_settings()

    def update_features(self, actor: Actor, update: FeatureSettingsUpdate) -> FeatureSettings:
        self.gate.require(actor, Capability.MANAGE_SETTINGS, self.feature_settings.get_settings())
        updated = self.feature_settings.set_settings(update)
        logger.info(
            "feature_settings_updated",
            actor_id=actor.actor_id,
            changes=update.model_dump(exclude_none=True),
        )
        return updated
