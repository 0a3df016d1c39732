"""User account and its one-to-one privacy settings."""

from __future__ import annotations

import uuid
from datetime import datetime, timezone

from sqlalchemy import Boolean, DateTime, ForeignKey, String, Uuid
from sqlalchemy.orm import Mapped, mapped_column, relationship

from weighin.db.base import Base


class User(Base):
    """Registered user. Email is stored lower-cased and is unique."""

    __tablename__ = "users"

    id: Mapped[uuid.UUID] = mapped_column(Uuid, primary_key=True, default=uuid.uuid4)
    name: Mapped[str] = mapped_column(String(100), nullable=False, index=True)
    email: Mapped[str] = mapped_column(String(255), nullable=False, unique=True, index=True)
    password_hash: Mapped[str] = mapped_column(String(255), nullable=False)
    is_first_login: Mapped[bool] = mapped_column(Boolean, default=True, nullable=False)
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), default=lambda: datetime.now(timezone.utc)
    )
    updated_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        default=lambda: datetime.now(timezone.utc),
        onupdate=lambda: datetime.now(timezone.utc),
    )

    weights: Mapped[list["Weight"]] = relationship(
        "Weight", back_populates="user", cascade="all, delete-orphan"
    )
    goals: Mapped[list["Goal"]] = relationship(
        "Goal", back_populates="user", cascade="all, delete-orphan"
    )
    privacy_settings: Mapped["PrivacySettings | None"] = relationship(
        "PrivacySettings", back_populates="user", uselist=False, cascade="all, delete-orphan"
    )


class PrivacySettings(Base):
    """Sharing preferences, created with every account (all off)."""

    __tablename__ = "privacy_settings"

    id: Mapped[uuid.UUID] = mapped_column(Uuid, primary_key=True, default=uuid.uuid4)
    user_id: Mapped[uuid.UUID] = mapped_column(
        Uuid, ForeignKey("users.id", ondelete="CASCADE"), nullable=False, unique=True
    )
    share_weight: Mapped[bool] = mapped_column(Boolean, default=False, nullable=False)
    share_goals: Mapped[bool] = mapped_column(Boolean, default=False, nullable=False)
    share_progress: Mapped[bool] = mapped_column(Boolean, default=False, nullable=False)
    public_profile: Mapped[bool] = mapped_column(Boolean, default=False, nullable=False)

    user: Mapped["User"] = relationship("User", back_populates="privacy_settings")
