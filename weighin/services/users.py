"""Accounts: signup, sign-in, profile, and partner discovery."""

from __future__ import annotations

import logging
import uuid

from sqlalchemy import or_, select
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from weighin.core.constants import USER_SEARCH_LIMIT
from weighin.core.enums import PartnershipStatus
from weighin.core.exceptions import ConflictError, NotFoundError, UnauthorizedError
from weighin.core.security import hash_password, verify_password
from weighin.models.partnership import Partnership
from weighin.models.user import PrivacySettings, User

logger = logging.getLogger(__name__)


def normalize_email(email: str) -> str:
    return email.strip().lower()


async def get_user_by_email(db: AsyncSession, email: str) -> User | None:
    result = await db.execute(select(User).where(User.email == normalize_email(email)))
    return result.scalar_one_or_none()


async def register_user(db: AsyncSession, name: str, email: str, password: str) -> User:
    """Create an account with default (all-off) privacy settings."""
    if await get_user_by_email(db, email) is not None:
        raise ConflictError("User with this email already exists")

    user = User(
        name=name.strip(),
        email=normalize_email(email),
        password_hash=hash_password(password),
    )
    user.privacy_settings = PrivacySettings()
    db.add(user)
    try:
        await db.flush()
    except IntegrityError as e:
        raise ConflictError("User with this email already exists") from e
    await db.refresh(user)
    logger.info("User %s registered", user.id)
    return user


async def authenticate(db: AsyncSession, email: str, password: str) -> User:
    user = await get_user_by_email(db, email)
    if user is None or not verify_password(password, user.password_hash):
        raise UnauthorizedError("Invalid email or password")
    return user


async def get_user(db: AsyncSession, user_id: uuid.UUID) -> User:
    user = await db.get(User, user_id)
    if user is None:
        raise NotFoundError("User not found")
    return user


async def update_profile(db: AsyncSession, user_id: uuid.UUID, is_first_login: bool) -> User:
    user = await get_user(db, user_id)
    user.is_first_login = is_first_login
    await db.flush()
    await db.refresh(user)
    return user


async def available_partners(db: AsyncSession, user_id: uuid.UUID) -> list[User]:
    """Everyone except the caller and users already linked by a pending or accepted partnership."""
    linked = await db.execute(
        select(Partnership.user_id, Partnership.partner_id).where(
            or_(Partnership.user_id == user_id, Partnership.partner_id == user_id),
            Partnership.status.in_([PartnershipStatus.PENDING, PartnershipStatus.ACCEPTED]),
        )
    )
    exclude = {user_id}
    for requester, recipient in linked.all():
        exclude.update((requester, recipient))

    result = await db.execute(select(User).where(User.id.not_in(list(exclude))).order_by(User.name))
    return list(result.scalars().all())


async def search_users(db: AsyncSession, user_id: uuid.UUID, query: str | None) -> list[User]:
    """Case-insensitive match on name or email, excluding the caller."""
    if not query or not query.strip():
        return []
    q = query.strip()
    result = await db.execute(
        select(User)
        .where(
            or_(User.name.icontains(q, autoescape=True), User.email.icontains(q, autoescape=True)),
            User.id != user_id,
        )
        .order_by(User.name)
        .limit(USER_SEARCH_LIMIT)
    )
    return list(result.scalars().all())
