"""Goal schemas."""

from datetime import datetime
from typing import Optional
from uuid import UUID

from pydantic import BaseModel, ConfigDict, Field


class GoalCreate(BaseModel):
    start_weight: float = Field(..., gt=0)
    target_weight: float = Field(..., gt=0)
    target_date: datetime


class GoalUpdate(BaseModel):
    target_weight: Optional[float] = Field(None, gt=0)
    target_date: Optional[datetime] = None
    achieved: Optional[bool] = None


class GoalRead(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: UUID
    user_id: UUID
    start_weight: float
    target_weight: float
    target_date: datetime
    achieved: bool
    created_at: datetime
    updated_at: datetime


class GoalProgressRead(BaseModel):
    goal_id: UUID
    start_weight: float
    target_weight: float
    current_weight: float
    remaining_kg: float
    days_left: int
    progress_pct: int
    achieved: bool
