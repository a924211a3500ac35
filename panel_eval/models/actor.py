from pydantic import BaseModel, Field
from typing import Optional

from panel_eval.models.enumerations import Role


class PermissionFlags(BaseModel):
    """
    Per-actor permission flags. Each one only takes effect when the matching
    global feature flag is also on.
    """

    can_access_chat: bool = False
    can_print_reports: bool = False
    can_export_data: bool = False


class Actor(BaseModel):
    """
    Authenticated caller as resolved from a credential.
    """

    actor_id: str = Field(..., min_length=1)
    role: Role
    name: Optional[str] = None
    permissions: PermissionFlags = Field(default_factory=PermissionFlags)
