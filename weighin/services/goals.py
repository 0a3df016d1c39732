"""Weight goals: at most one active (unachieved) goal per user, plus progress read-model."""

from __future__ import annotations

import logging
import math
import uuid
from datetime import date, datetime, timezone
from typing import Any

from sqlalchemy import select
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from weighin.core.constants import PROGRESS_MAX, PROGRESS_MIN
from weighin.core.exceptions import ConflictError, NotFoundError, ValidationError
from weighin.models.goal import Goal
from weighin.services.weights import latest_weight

logger = logging.getLogger(__name__)

UPDATABLE_FIELDS = ("target_weight", "target_date", "achieved")


def _positive(value: Any, label: str) -> float:
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        raise ValidationError(f"{label} must be a number")
    if not math.isfinite(value) or value <= 0:
        raise ValidationError(f"{label} must be positive")
    return float(value)


def _target_date(value: Any) -> datetime:
    if isinstance(value, str):
        try:
            value = datetime.fromisoformat(value.replace("Z", "+00:00"))
        except ValueError as e:
            raise ValidationError("Invalid target date") from e
    if not isinstance(value, datetime):
        raise ValidationError("Invalid target date")
    return value


def compute_progress(current: float, start: float, target: float) -> int:
    """
    Percent of the way from start to target, clamped to [0, 100].

    Works for both loss and gain goals. When start == target there is no
    distance to cover: 100 if already at target, else 0.
    """
    if start == target:
        return PROGRESS_MAX if current == target else PROGRESS_MIN
    # Halves round up (62.5 -> 63)
    pct = math.floor((current - start) / (target - start) * 100 + 0.5)
    return max(PROGRESS_MIN, min(PROGRESS_MAX, pct))


async def active_goal(db: AsyncSession, user_id: uuid.UUID) -> Goal | None:
    result = await db.execute(
        select(Goal).where(Goal.user_id == user_id, Goal.achieved.is_(False)).limit(1)
    )
    return result.scalar_one_or_none()


async def _flush_or_conflict(db: AsyncSession) -> None:
    try:
        await db.flush()
    except IntegrityError as e:
        raise ConflictError("You already have an active goal") from e


async def create_goal(
    db: AsyncSession,
    user_id: uuid.UUID,
    start_weight: Any,
    target_weight: Any,
    target_date: Any,
) -> Goal:
    start_weight = _positive(start_weight, "Start weight")
    target_weight = _positive(target_weight, "Target weight")
    target_date = _target_date(target_date)

    if await active_goal(db, user_id) is not None:
        raise ConflictError("You already have an active goal")

    goal = Goal(
        user_id=user_id,
        start_weight=start_weight,
        target_weight=target_weight,
        target_date=target_date,
    )
    db.add(goal)
    await _flush_or_conflict(db)
    await db.refresh(goal)
    logger.info("Goal %s created for user %s", goal.id, user_id)
    return goal


async def get_goal(db: AsyncSession, user_id: uuid.UUID, goal_id: uuid.UUID) -> Goal:
    result = await db.execute(select(Goal).where(Goal.id == goal_id, Goal.user_id == user_id))
    goal = result.scalar_one_or_none()
    if not goal:
        raise NotFoundError("Goal not found")
    return goal


async def update_goal(
    db: AsyncSession,
    user_id: uuid.UUID,
    goal_id: uuid.UUID,
    fields: dict[str, Any],
) -> Goal:
    """Apply the supplied subset of target_weight / target_date / achieved."""
    goal = await get_goal(db, user_id, goal_id)
    changes = {k: v for k, v in fields.items() if k in UPDATABLE_FIELDS and v is not None}

    if "target_weight" in changes:
        changes["target_weight"] = _positive(changes["target_weight"], "Target weight")
    if "target_date" in changes:
        changes["target_date"] = _target_date(changes["target_date"])
    if "achieved" in changes:
        changes["achieved"] = bool(changes["achieved"])
        if goal.achieved and not changes["achieved"]:
            # Re-opening: must not create a second active goal
            current = await active_goal(db, user_id)
            if current is not None and current.id != goal.id:
                raise ConflictError("You already have an active goal")

    for k, v in changes.items():
        setattr(goal, k, v)
    await _flush_or_conflict(db)
    await db.refresh(goal)
    if changes.get("achieved"):
        logger.info("Goal %s marked achieved for user %s", goal.id, user_id)
    return goal


async def delete_goal(db: AsyncSession, user_id: uuid.UUID, goal_id: uuid.UUID) -> None:
    goal = await get_goal(db, user_id, goal_id)
    await db.delete(goal)
    await db.flush()


async def list_goals(db: AsyncSession, user_id: uuid.UUID) -> list[Goal]:
    """Newest-created first."""
    result = await db.execute(
        select(Goal).where(Goal.user_id == user_id).order_by(Goal.created_at.desc())
    )
    return list(result.scalars().all())


async def goal_progress(db: AsyncSession, user_id: uuid.UUID, goal_id: uuid.UUID) -> dict[str, Any]:
    """
    Progress of a goal measured against the user's latest weigh-in.
    With no weigh-ins yet the start weight counts as current (0%).
    """
    goal = await get_goal(db, user_id, goal_id)
    latest = await latest_weight(db, user_id)
    current = latest.value if latest else goal.start_weight
    today: date = datetime.now(timezone.utc).date()
    return {
        "goal_id": goal.id,
        "start_weight": goal.start_weight,
        "target_weight": goal.target_weight,
        "current_weight": current,
        "remaining_kg": round(abs(goal.target_weight - current), 1),
        "days_left": (goal.target_date.date() - today).days,
        "progress_pct": compute_progress(current, goal.start_weight, goal.target_weight),
        "achieved": goal.achieved,
    }
