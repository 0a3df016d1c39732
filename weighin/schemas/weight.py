"""Weight entry schemas."""

import datetime as dt
from uuid import UUID

from pydantic import BaseModel, ConfigDict, Field


class WeightWrite(BaseModel):
    """Body for create (POST) and full replace (PUT).

    ``date`` may be a date (YYYY-MM-DD) or an ISO datetime; it is reduced to a
    calendar day before storage.
    """

    value: float = Field(..., gt=0, description="Body weight in kg")
    date: dt.datetime


class WeightRead(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: UUID
    user_id: UUID
    date: dt.date
    value: float
    created_at: dt.datetime


class WeightPoint(BaseModel):
    """Date/value pair for comparison charts."""

    model_config = ConfigDict(from_attributes=True)

    date: dt.date
    value: float
