"""
Feature Settings Repository - Panel Evaluation Engine
panel_eval/repositories/settings_repository.py

Single global FeatureSettings record. Who may change it is decided by the
caller (ADMIN-gated in the service layer), not here.
"""

from typing import Optional

from panel_eval.models.feature_settings import FeatureSettings, FeatureSettingsUpdate
from panel_eval.repositories.base import BaseRepository, RecordStore


class FeatureSettingsRepository(BaseRepository):
    ENTITY = "settings"
    KEY = "features"

    def __init__(self, store: RecordStore, defaults: Optional[FeatureSettings] = None):
        super().__init__(store)
        self.defaults = defaults or FeatureSettings()

    def get_settings(self) -> FeatureSettings:
        row = self.store.get(self.ENTITY, self.KEY)
        if not row:
            return self.defaults.model_copy()
        return FeatureSettings.model_validate(row)

    def set_settings(self, update: FeatureSettingsUpdate) -> FeatureSettings:
        """Apply a partial update and return the resulting settings."""
        current = self.get_settings()
        merged = current.model_copy(update=update.model_dump(exclude_none=True))
        row = self.store.upsert(self.ENTITY, self.KEY, merged.model_dump(mode="json"))
        return FeatureSettings.model_validate(row)
