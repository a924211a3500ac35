from pydantic import BaseModel
from typing import Optional


class FeatureSettings(BaseModel):
    """
    Process-wide feature switches. A disabled feature is denied regardless
    of individual permissions.
    """

    chat_enabled: bool = True
    direct_decision_enabled: bool = True
    print_enabled: bool = True
    export_enabled: bool = True


class FeatureSettingsUpdate(BaseModel):
    """
    Partial update; unset fields keep their current value.
    """

    chat_enabled: Optional[bool] = None
    direct_decision_enabled: Optional[bool] = None
    print_enabled: Optional[bool] = None
    export_enabled: Optional[bool] = None
