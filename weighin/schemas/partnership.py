"""Partnership schemas."""

from datetime import datetime
from typing import Optional
from uuid import UUID

from pydantic import BaseModel, ConfigDict

from weighin.core.enums import PartnershipResponse, PartnershipStatus
from weighin.schemas.user import UserSummary
from weighin.schemas.weight import WeightPoint


class PartnershipCreate(BaseModel):
    # Optional so a missing id gets the domain message rather than a schema error
    partner_id: Optional[UUID] = None


class PartnershipRespond(BaseModel):
    status: PartnershipResponse


class PartnershipRead(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: UUID
    user_id: UUID
    partner_id: UUID
    status: PartnershipStatus
    created_at: datetime


class PendingRequestRead(PartnershipRead):
    """Incoming request with the requester's identity."""

    user: UserSummary


class PartnerRead(BaseModel):
    """An accepted partnership seen from one side: the other party's identity."""

    id: UUID  # partnership id
    partner_id: UUID
    name: str
    email: str


class PartnersOverview(BaseModel):
    partners: list[PartnerRead] = []
    pending_requests: list[PendingRequestRead] = []


class PartnerWeights(BaseModel):
    partner_id: UUID
    partner_name: str
    weights: list[WeightPoint] = []


class PartnerWeightsRead(BaseModel):
    partner_weights: list[PartnerWeights] = []
