"""Partnership model - directed request between two users."""

from __future__ import annotations

import uuid
from datetime import datetime, timezone

from sqlalchemy import DateTime, Enum, ForeignKey, Index, String, Uuid
from sqlalchemy.orm import Mapped, mapped_column, relationship

from weighin.core.enums import PartnershipStatus
from weighin.db.base import Base


def pair_key_for(a: uuid.UUID, b: uuid.UUID) -> str:
    """Order-independent key for the pair {a, b}."""
    low, high = sorted((str(a), str(b)))
    return f"{low}:{high}"


class Partnership(Base):
    """user_id requested, partner_id received. Unique per unordered pair via pair_key."""

    __tablename__ = "partnerships"
    __table_args__ = (
        Index("ix_partnerships_user_status", "user_id", "status"),
        Index("ix_partnerships_partner_status", "partner_id", "status"),
    )

    id: Mapped[uuid.UUID] = mapped_column(Uuid, primary_key=True, default=uuid.uuid4)
    user_id: Mapped[uuid.UUID] = mapped_column(
        Uuid, ForeignKey("users.id", ondelete="CASCADE"), nullable=False
    )
    partner_id: Mapped[uuid.UUID] = mapped_column(
        Uuid, ForeignKey("users.id", ondelete="CASCADE"), nullable=False
    )
    status: Mapped[PartnershipStatus] = mapped_column(
        Enum(PartnershipStatus), default=PartnershipStatus.PENDING, nullable=False
    )
    pair_key: Mapped[str] = mapped_column(String(80), nullable=False, unique=True)
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), default=lambda: datetime.now(timezone.utc)
    )
    updated_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        default=lambda: datetime.now(timezone.utc),
        onupdate=lambda: datetime.now(timezone.utc),
    )

    user: Mapped["User"] = relationship("User", foreign_keys=[user_id])
    partner: Mapped["User"] = relationship("User", foreign_keys=[partner_id])
