"""
Partnership lifecycle between two users.

Stored states are PENDING and ACCEPTED. Rejecting a pending request and
removing an accepted partnership both delete the row. Only one row may exist
per unordered pair of users; ``pair_key`` carries a unique constraint so two
concurrent requests (A→B and B→A) cannot both land.
"""

from __future__ import annotations

import logging
import uuid
from typing import Optional

from sqlalchemy import or_, select
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.orm import selectinload

from weighin.core.enums import PartnershipResponse, PartnershipStatus
from weighin.core.exceptions import ConflictError, NotFoundError, ValidationError
from weighin.models.partnership import Partnership, pair_key_for
from weighin.models.user import User
from weighin.models.weight import Weight

logger = logging.getLogger(__name__)


async def _pair_exists(db: AsyncSession, key: str) -> bool:
    """Any record for the unordered pair, in either direction and any status."""
    result = await db.execute(select(Partnership.id).where(Partnership.pair_key == key))
    return result.scalar_one_or_none() is not None


async def request_partnership(
    db: AsyncSession,
    requester_id: uuid.UUID,
    recipient_id: Optional[uuid.UUID],
) -> Partnership:
    if recipient_id is None:
        raise ValidationError("Partner ID is required")
    if recipient_id == requester_id:
        raise ValidationError("You cannot partner with yourself")

    recipient = await db.get(User, recipient_id)
    if recipient is None:
        raise NotFoundError("User not found")

    key = pair_key_for(requester_id, recipient_id)
    if await _pair_exists(db, key):
        raise ConflictError("Partnership already exists")

    partnership = Partnership(
        user_id=requester_id,
        partner_id=recipient_id,
        status=PartnershipStatus.PENDING,
        pair_key=key,
    )
    db.add(partnership)
    try:
        await db.flush()
    except IntegrityError as e:
        raise ConflictError("Partnership already exists") from e
    await db.refresh(partnership)
    logger.info("Partnership %s requested: %s -> %s", partnership.id, requester_id, recipient_id)
    return partnership


async def _pending_for_recipient(
    db: AsyncSession, partnership_id: uuid.UUID, acting_user_id: uuid.UUID
) -> Partnership:
    result = await db.execute(
        select(Partnership).where(
            Partnership.id == partnership_id,
            Partnership.partner_id == acting_user_id,
            Partnership.status == PartnershipStatus.PENDING,
        )
    )
    partnership = result.scalar_one_or_none()
    if not partnership:
        raise NotFoundError("Partnership request not found")
    return partnership


async def accept_partnership(
    db: AsyncSession, partnership_id: uuid.UUID, acting_user_id: uuid.UUID
) -> Partnership:
    """Recipient accepts a pending request."""
    partnership = await _pending_for_recipient(db, partnership_id, acting_user_id)
    partnership.status = PartnershipStatus.ACCEPTED
    await db.flush()
    await db.refresh(partnership)
    logger.info("Partnership %s accepted by %s", partnership_id, acting_user_id)
    return partnership


async def reject_partnership(
    db: AsyncSession, partnership_id: uuid.UUID, acting_user_id: uuid.UUID
) -> None:
    """Recipient rejects a pending request; the request is deleted."""
    partnership = await _pending_for_recipient(db, partnership_id, acting_user_id)
    await db.delete(partnership)
    await db.flush()
    logger.info("Partnership %s rejected by %s", partnership_id, acting_user_id)


async def respond_to_partnership(
    db: AsyncSession,
    partnership_id: uuid.UUID,
    acting_user_id: uuid.UUID,
    response: PartnershipResponse,
) -> Optional[Partnership]:
    """Accept or reject in one call. Returns the partnership when accepted, None when rejected."""
    if response == PartnershipResponse.ACCEPTED:
        return await accept_partnership(db, partnership_id, acting_user_id)
    await reject_partnership(db, partnership_id, acting_user_id)
    return None


async def remove_partnership(
    db: AsyncSession, partnership_id: uuid.UUID, acting_user_id: uuid.UUID
) -> None:
    """Either party ends an accepted partnership."""
    result = await db.execute(
        select(Partnership).where(
            Partnership.id == partnership_id,
            or_(Partnership.user_id == acting_user_id, Partnership.partner_id == acting_user_id),
            Partnership.status == PartnershipStatus.ACCEPTED,
        )
    )
    partnership = result.scalar_one_or_none()
    if not partnership:
        raise NotFoundError("Partnership not found")
    await db.delete(partnership)
    await db.flush()
    logger.info("Partnership %s removed by %s", partnership_id, acting_user_id)


def other_party(partnership: Partnership, user_id: uuid.UUID) -> User:
    """The user on the far side of the partnership, whichever side initiated."""
    return partnership.partner if partnership.user_id == user_id else partnership.user


async def list_accepted(db: AsyncSession, user_id: uuid.UUID) -> list[tuple[Partnership, User]]:
    """Accepted partnerships involving user_id, each paired with the other party."""
    result = await db.execute(
        select(Partnership)
        .options(selectinload(Partnership.user), selectinload(Partnership.partner))
        .where(
            or_(Partnership.user_id == user_id, Partnership.partner_id == user_id),
            Partnership.status == PartnershipStatus.ACCEPTED,
        )
        .order_by(Partnership.created_at)
    )
    return [(p, other_party(p, user_id)) for p in result.scalars().all()]


async def list_pending(db: AsyncSession, user_id: uuid.UUID) -> list[Partnership]:
    """Pending requests addressed to user_id, with the requester loaded."""
    result = await db.execute(
        select(Partnership)
        .options(selectinload(Partnership.user))
        .where(
            Partnership.partner_id == user_id,
            Partnership.status == PartnershipStatus.PENDING,
        )
        .order_by(Partnership.created_at.desc())
    )
    return list(result.scalars().all())


async def partner_weights(
    db: AsyncSession, user_id: uuid.UUID
) -> dict[uuid.UUID, tuple[User, list[Weight]]]:
    """
    Map each accepted partner's id to (partner, weight history newest first).
    Every accepted partner sees the full history; privacy settings are not applied.
    """
    partners = [partner for _, partner in await list_accepted(db, user_id)]
    if not partners:
        return {}
    out: dict[uuid.UUID, tuple[User, list[Weight]]] = {p.id: (p, []) for p in partners}
    result = await db.execute(
        select(Weight)
        .where(Weight.user_id.in_(list(out)))
        .order_by(Weight.user_id, Weight.date.desc())
    )
    for weight in result.scalars().all():
        out[weight.user_id][1].append(weight)
    return out
