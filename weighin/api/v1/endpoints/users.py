"""Profile and partner discovery."""

from typing import Optional

from fastapi import APIRouter, Depends, Query
from sqlalchemy.ext.asyncio import AsyncSession

from weighin.api.deps import get_current_user
from weighin.db.session import get_db
from weighin.models.user import User
from weighin.schemas.user import ProfileUpdate, UserRead, UserSearchResults, UserSummary
from weighin.services import users as user_service

router = APIRouter()


@router.get("/user/profile", response_model=UserRead)
async def get_profile(current_user: User = Depends(get_current_user)):
    return current_user


@router.put("/user/profile", response_model=UserRead)
async def update_profile(
    payload: ProfileUpdate,
    current_user: User = Depends(get_current_user),
    db: AsyncSession = Depends(get_db),
):
    """Currently only clears/sets the first-login flag (onboarding done)."""
    return await user_service.update_profile(db, current_user.id, payload.is_first_login)


@router.get("/users", response_model=list[UserSummary])
async def list_available_users(
    current_user: User = Depends(get_current_user),
    db: AsyncSession = Depends(get_db),
):
    """Users the caller could send a partnership request to."""
    return await user_service.available_partners(db, current_user.id)


@router.get("/users/search", response_model=UserSearchResults)
async def search_users(
    q: Optional[str] = Query(None, description="Name or email fragment"),
    current_user: User = Depends(get_current_user),
    db: AsyncSession = Depends(get_db),
):
    users = await user_service.search_users(db, current_user.id, q)
    return {"users": users}
