from pydantic import BaseModel, Field, field_validator
from uuid import uuid4
from datetime import datetime, timezone
from typing import Optional, List

from panel_eval.models.enumerations import FinalDecision, VoteChoice


class VendorBase(BaseModel):
    """
    Base Pydantic model for Vendor.
    """

    name: str = Field(
        ...,
        min_length=1,
        max_length=255,
        description="Vendor name"
    )

    scopes: List[str] = Field(
        default_factory=list,
        description="Scopes the vendor responded to"
    )

    rfi_status: Optional[str] = Field(
        default=None,
        max_length=64,
        description="RFI submission status"
    )

    rfi_received_at: Optional[datetime] = Field(
        default=None,
        description="When the RFI response was received"
    )


class VendorCreate(VendorBase):
    """
    Model for registering a vendor.
    """
    pass


class Vendor(VendorBase):
    """
    Stored vendor with its decision state.
    """

    id: str = Field(
        default_factory=lambda: str(uuid4()),
        description="Unique vendor identifier"
    )

    final_decision: FinalDecision = Field(
        default=FinalDecision.PENDING,
        description="Authoritative outcome; leaves PENDING exactly once"
    )

    decided_by: Optional[str] = None
    decided_at: Optional[datetime] = None

    created_at: datetime = Field(
        default_factory=lambda: datetime.now(timezone.utc),
        description="Record creation timestamp (UTC)"
    )

    @property
    def is_decided(self) -> bool:
        return self.final_decision != FinalDecision.PENDING


class Vote(BaseModel):
    """
    Immutable evidence of a decision action.
    """

    id: str = Field(default_factory=lambda: str(uuid4()))
    vendor_id: str
    actor_id: str
    choice: VoteChoice
    created_at: datetime = Field(default_factory=lambda: datetime.now(timezone.utc))


class DecisionRequest(BaseModel):
    """
    Accept/reject request body.
    """

    decision: FinalDecision = Field(
        ...,
        description="ACCEPTED or REJECTED"
    )

    @field_validator("decision")
    @classmethod
    def terminal_only(cls, value: FinalDecision) -> FinalDecision:
        if value == FinalDecision.PENDING:
            raise ValueError("decision must be ACCEPTED or REJECTED")
        return value


class DecisionResponse(BaseModel):
    vendor_id: str
    final_decision: FinalDecision
    decided_by: str
    decided_at: datetime


class VoteTally(BaseModel):
    accept: int = 0
    reject: int = 0
    total: int = 0
