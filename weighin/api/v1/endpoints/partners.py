"""Partnerships: requests, responses, removal, and partner weight comparison."""

from __future__ import annotations

import uuid

from fastapi import APIRouter, Depends
from sqlalchemy.ext.asyncio import AsyncSession

from weighin.api.deps import get_current_user
from weighin.db.session import get_db
from weighin.models.user import User
from weighin.schemas.partnership import (
    PartnerRead,
    PartnershipCreate,
    PartnershipRead,
    PartnershipRespond,
    PartnersOverview,
    PartnerWeights,
    PartnerWeightsRead,
    PendingRequestRead,
)
from weighin.schemas.user import MessageRead
from weighin.schemas.weight import WeightPoint
from weighin.services import partnerships as partnership_service

router = APIRouter()


@router.get("", response_model=PartnersOverview)
async def list_partners(
    current_user: User = Depends(get_current_user),
    db: AsyncSession = Depends(get_db),
):
    """Accepted partners (the other party, whoever asked) and requests waiting on the caller."""
    accepted = await partnership_service.list_accepted(db, current_user.id)
    pending = await partnership_service.list_pending(db, current_user.id)
    return PartnersOverview(
        partners=[
            PartnerRead(id=p.id, partner_id=other.id, name=other.name, email=other.email)
            for p, other in accepted
        ],
        pending_requests=[PendingRequestRead.model_validate(p) for p in pending],
    )


@router.post("", response_model=PartnershipRead)
async def request_partnership(
    payload: PartnershipCreate,
    current_user: User = Depends(get_current_user),
    db: AsyncSession = Depends(get_db),
):
    """Send a partnership request. Any existing link between the two users is a 400."""
    return await partnership_service.request_partnership(db, current_user.id, payload.partner_id)


@router.get("/weights", response_model=PartnerWeightsRead)
async def get_partner_weights(
    current_user: User = Depends(get_current_user),
    db: AsyncSession = Depends(get_db),
):
    """Weight histories of all accepted partners, for the comparison chart."""
    histories = await partnership_service.partner_weights(db, current_user.id)
    return PartnerWeightsRead(
        partner_weights=[
            PartnerWeights(
                partner_id=partner_id,
                partner_name=partner.name or "Unknown",
                weights=[WeightPoint.model_validate(w) for w in weights],
            )
            for partner_id, (partner, weights) in histories.items()
        ]
    )


@router.put("/{partnership_id}")
async def respond_to_request(
    partnership_id: uuid.UUID,
    payload: PartnershipRespond,
    current_user: User = Depends(get_current_user),
    db: AsyncSession = Depends(get_db),
):
    """Accept or reject a pending request addressed to the caller."""
    partnership = await partnership_service.respond_to_partnership(
        db, partnership_id, current_user.id, payload.status
    )
    if partnership is None:
        return {"message": "Partnership request rejected"}
    return PartnershipRead.model_validate(partnership)


@router.post("/{partnership_id}/accept", response_model=PartnershipRead)
async def accept_request(
    partnership_id: uuid.UUID,
    current_user: User = Depends(get_current_user),
    db: AsyncSession = Depends(get_db),
):
    return await partnership_service.accept_partnership(db, partnership_id, current_user.id)


@router.delete("/{partnership_id}", response_model=MessageRead)
async def remove_partner(
    partnership_id: uuid.UUID,
    current_user: User = Depends(get_current_user),
    db: AsyncSession = Depends(get_db),
):
    """Either party can end an accepted partnership."""
    await partnership_service.remove_partnership(db, partnership_id, current_user.id)
    return {"message": "Partnership removed successfully"}
