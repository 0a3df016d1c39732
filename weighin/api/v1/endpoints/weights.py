"""Daily weight entries for the signed-in user."""

from __future__ import annotations

import uuid

from fastapi import APIRouter, Depends
from sqlalchemy.ext.asyncio import AsyncSession

from weighin.api.deps import get_current_user
from weighin.db.session import get_db
from weighin.models.user import User
from weighin.schemas.user import MessageRead
from weighin.schemas.weight import WeightRead, WeightWrite
from weighin.services import weights as weight_service

router = APIRouter()


@router.post("", response_model=WeightRead, status_code=201)
async def create_weight(
    payload: WeightWrite,
    current_user: User = Depends(get_current_user),
    db: AsyncSession = Depends(get_db),
):
    """Log a weight. A second entry on the same day is a 400."""
    return await weight_service.create_weight(db, current_user.id, payload.value, payload.date)


@router.get("", response_model=list[WeightRead])
async def list_weights(
    current_user: User = Depends(get_current_user),
    db: AsyncSession = Depends(get_db),
):
    """All of the user's entries, newest day first."""
    return await weight_service.list_weights(db, current_user.id)


@router.put("/{weight_id}", response_model=WeightRead)
async def update_weight(
    weight_id: uuid.UUID,
    payload: WeightWrite,
    current_user: User = Depends(get_current_user),
    db: AsyncSession = Depends(get_db),
):
    return await weight_service.update_weight(
        db, current_user.id, weight_id, payload.value, payload.date
    )


@router.delete("/{weight_id}", response_model=MessageRead)
async def delete_weight(
    weight_id: uuid.UUID,
    current_user: User = Depends(get_current_user),
    db: AsyncSession = Depends(get_db),
):
    await weight_service.delete_weight(db, current_user.id, weight_id)
    return {"message": "Weight entry deleted successfully"}
