"""Weight entries: one per user per calendar day.

Day rule: an aware timestamp is converted to UTC and its date is used; a naive
timestamp or a plain date is taken as given. Only the date is stored, so the
(user_id, date) unique constraint enforces the rule even for concurrent writes.
"""

from __future__ import annotations

import logging
import math
import uuid
from datetime import date, datetime, timezone
from typing import Any

from sqlalchemy import select
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from weighin.core.exceptions import ConflictError, NotFoundError, ValidationError
from weighin.models.weight import Weight

logger = logging.getLogger(__name__)


def entry_day(value: Any) -> date:
    """Reduce a client-supplied date/datetime/ISO string to the stored calendar day."""
    if isinstance(value, str):
        try:
            value = datetime.fromisoformat(value.replace("Z", "+00:00"))
        except ValueError as e:
            raise ValidationError("Invalid date format") from e
    if isinstance(value, datetime):
        if value.tzinfo is not None:
            value = value.astimezone(timezone.utc)
        return value.date()
    if isinstance(value, date):
        return value
    raise ValidationError("Invalid date format")


def validate_weight_value(value: Any) -> float:
    """Weight must be a finite number above zero."""
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        raise ValidationError("Weight must be a number")
    if not math.isfinite(value) or value <= 0:
        raise ValidationError("Weight must be positive")
    return float(value)


def _duplicate_day(day: date) -> ConflictError:
    return ConflictError(f"Weight already recorded for {day.isoformat()}")


async def _entry_on_day(
    db: AsyncSession,
    user_id: uuid.UUID,
    day: date,
    exclude_id: uuid.UUID | None = None,
) -> Weight | None:
    stmt = select(Weight).where(Weight.user_id == user_id, Weight.date == day)
    if exclude_id is not None:
        stmt = stmt.where(Weight.id != exclude_id)
    result = await db.execute(stmt.limit(1))
    return result.scalar_one_or_none()


async def _get_owned(db: AsyncSession, user_id: uuid.UUID, weight_id: uuid.UUID) -> Weight:
    result = await db.execute(
        select(Weight).where(Weight.id == weight_id, Weight.user_id == user_id)
    )
    weight = result.scalar_one_or_none()
    if not weight:
        raise NotFoundError("Weight entry not found")
    return weight


async def _flush_or_conflict(db: AsyncSession, day: date) -> None:
    # A concurrent write for the same day passed the pre-check; the constraint catches it
    try:
        await db.flush()
    except IntegrityError as e:
        raise _duplicate_day(day) from e


async def create_weight(db: AsyncSession, user_id: uuid.UUID, value: Any, on: Any) -> Weight:
    value = validate_weight_value(value)
    day = entry_day(on)

    if await _entry_on_day(db, user_id, day) is not None:
        raise _duplicate_day(day)

    weight = Weight(user_id=user_id, value=value, date=day)
    db.add(weight)
    await _flush_or_conflict(db, day)
    await db.refresh(weight)
    logger.info("Weight %s created for user %s on %s", weight.id, user_id, day)
    return weight


async def update_weight(
    db: AsyncSession,
    user_id: uuid.UUID,
    weight_id: uuid.UUID,
    value: Any,
    on: Any,
) -> Weight:
    """Overwrite value and date of an owned entry. The entry may keep its own day."""
    value = validate_weight_value(value)
    day = entry_day(on)
    weight = await _get_owned(db, user_id, weight_id)

    if await _entry_on_day(db, user_id, day, exclude_id=weight_id) is not None:
        raise _duplicate_day(day)

    weight.value = value
    weight.date = day
    await _flush_or_conflict(db, day)
    await db.refresh(weight)
    return weight


async def delete_weight(db: AsyncSession, user_id: uuid.UUID, weight_id: uuid.UUID) -> None:
    weight = await _get_owned(db, user_id, weight_id)
    await db.delete(weight)
    await db.flush()
    logger.info("Weight %s deleted for user %s", weight_id, user_id)


async def list_weights(db: AsyncSession, user_id: uuid.UUID) -> list[Weight]:
    """All entries for the user, newest day first. Unpaginated."""
    result = await db.execute(
        select(Weight).where(Weight.user_id == user_id).order_by(Weight.date.desc())
    )
    return list(result.scalars().all())


async def latest_weight(db: AsyncSession, user_id: uuid.UUID) -> Weight | None:
    result = await db.execute(
        select(Weight).where(Weight.user_id == user_id).order_by(Weight.date.desc()).limit(1)
    )
    return result.scalar_one_or_none()
