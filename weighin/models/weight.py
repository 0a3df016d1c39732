"""Weight model - one entry per user per calendar day."""

from __future__ import annotations

import datetime as dt
import uuid

from sqlalchemy import Date, DateTime, Float, ForeignKey, UniqueConstraint, Uuid
from sqlalchemy.orm import Mapped, mapped_column, relationship

from weighin.db.base import Base


class Weight(Base):
    """A daily weigh-in.

    ``date`` is already reduced to a calendar day (see services.weights.entry_day),
    so the (user_id, date) constraint is the one-entry-per-day rule and also
    serves owner/date-range lookups.
    """

    __tablename__ = "weights"
    __table_args__ = (UniqueConstraint("user_id", "date", name="uq_weights_user_date"),)

    id: Mapped[uuid.UUID] = mapped_column(Uuid, primary_key=True, default=uuid.uuid4)
    user_id: Mapped[uuid.UUID] = mapped_column(
        Uuid, ForeignKey("users.id", ondelete="CASCADE"), nullable=False
    )
    date: Mapped[dt.date] = mapped_column(Date, nullable=False)
    value: Mapped[float] = mapped_column(Float, nullable=False)  # kg
    created_at: Mapped[dt.datetime] = mapped_column(
        DateTime(timezone=True), default=lambda: dt.datetime.now(dt.timezone.utc)
    )

    user: Mapped["User"] = relationship("User", back_populates="weights")
