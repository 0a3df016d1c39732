"""
Authentication gate.

Resolves the bearer token to a User. Anything missing, malformed, expired or
pointing at a deleted account is a 401.
"""
import uuid
from typing import Optional

from fastapi import Depends
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer
from sqlalchemy.ext.asyncio import AsyncSession

from weighin.core.exceptions import UnauthorizedError
from weighin.core.security import decode_access_token
from weighin.db.session import get_db
from weighin.models.user import User

# auto_error=False so a missing header is our 401, not FastAPI's 403
bearer_scheme = HTTPBearer(auto_error=False)


async def get_current_user(
    credentials: Optional[HTTPAuthorizationCredentials] = Depends(bearer_scheme),
    db: AsyncSession = Depends(get_db),
) -> User:
    if not credentials:
        raise UnauthorizedError()

    payload = decode_access_token(credentials.credentials)
    if not payload or not payload.get("sub"):
        raise UnauthorizedError("Invalid authentication credentials")

    try:
        user_id = uuid.UUID(payload["sub"])
    except (TypeError, ValueError):
        raise UnauthorizedError("Invalid authentication credentials")

    user = await db.get(User, user_id)
    if user is None:
        raise UnauthorizedError("User not found")
    return user
