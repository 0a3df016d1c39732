"""Weight goals for the signed-in user."""

from __future__ import annotations

import uuid

from fastapi import APIRouter, Depends
from sqlalchemy.ext.asyncio import AsyncSession

from weighin.api.deps import get_current_user
from weighin.db.session import get_db
from weighin.models.user import User
from weighin.schemas.goal import GoalCreate, GoalProgressRead, GoalRead, GoalUpdate
from weighin.schemas.user import MessageRead
from weighin.services import goals as goal_service

router = APIRouter()


@router.post("", response_model=GoalRead, status_code=201)
async def create_goal(
    payload: GoalCreate,
    current_user: User = Depends(get_current_user),
    db: AsyncSession = Depends(get_db),
):
    """Create a goal. Fails with 400 while another goal is still active."""
    return await goal_service.create_goal(
        db,
        current_user.id,
        payload.start_weight,
        payload.target_weight,
        payload.target_date,
    )


@router.get("", response_model=list[GoalRead])
async def list_goals(
    current_user: User = Depends(get_current_user),
    db: AsyncSession = Depends(get_db),
):
    return await goal_service.list_goals(db, current_user.id)


@router.get("/{goal_id}", response_model=GoalRead)
async def get_goal(
    goal_id: uuid.UUID,
    current_user: User = Depends(get_current_user),
    db: AsyncSession = Depends(get_db),
):
    return await goal_service.get_goal(db, current_user.id, goal_id)


@router.patch("/{goal_id}", response_model=GoalRead)
async def update_goal(
    goal_id: uuid.UUID,
    payload: GoalUpdate,
    current_user: User = Depends(get_current_user),
    db: AsyncSession = Depends(get_db),
):
    """Partial update of target_weight / target_date / achieved."""
    return await goal_service.update_goal(
        db, current_user.id, goal_id, payload.model_dump(exclude_unset=True)
    )


@router.delete("/{goal_id}", response_model=MessageRead)
async def delete_goal(
    goal_id: uuid.UUID,
    current_user: User = Depends(get_current_user),
    db: AsyncSession = Depends(get_db),
):
    await goal_service.delete_goal(db, current_user.id, goal_id)
    return {"message": "Goal deleted successfully"}


@router.get("/{goal_id}/progress", response_model=GoalProgressRead)
async def get_goal_progress(
    goal_id: uuid.UUID,
    current_user: User = Depends(get_current_user),
    db: AsyncSession = Depends(get_db),
):
    """Progress toward the goal from the latest weigh-in (0-100)."""
    return await goal_service.goal_progress(db, current_user.id, goal_id)
