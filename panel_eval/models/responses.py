from pydantic import BaseModel, Field
from datetime import datetime
from typing import Optional, Dict

from panel_eval.models.enumerations import Capability, DenialReason, Role


class ErrorResponse(BaseModel):
    """
    Standard error response model.
    """

    error_code: str = Field(..., description="Machine-readable error code")
    message: str = Field(..., description="Human-readable error message")
    details: Optional[dict] = Field(default=None, description="Additional error details")
    timestamp: datetime = Field(..., description="Error occurrence timestamp")


class CapabilityStatus(BaseModel):
    granted: bool
    reason: Optional[DenialReason] = None


class CapabilitiesResponse(BaseModel):
    """
    What the caller may do right now, evaluated at request time.
    """

    actor_id: str
    role: Role
    capabilities: Dict[Capability, CapabilityStatus]


class HealthResponse(BaseModel):
    status: str
    timestamp: datetime
    version: str
    dependencies: Dict[str, str]
