"""Signup and sign-in."""

from fastapi import APIRouter, Depends
from sqlalchemy.ext.asyncio import AsyncSession

from weighin.core.security import create_access_token
from weighin.db.session import get_db
from weighin.schemas.user import SignInRequest, SignUpRequest, TokenRead, UserRead
from weighin.services import users as user_service

router = APIRouter()


@router.post("/signup", response_model=UserRead, status_code=201)
async def signup(payload: SignUpRequest, db: AsyncSession = Depends(get_db)):
    """Create an account. Duplicate email is a 400."""
    return await user_service.register_user(db, payload.name, payload.email, payload.password)


@router.post("/signin", response_model=TokenRead)
async def signin(payload: SignInRequest, db: AsyncSession = Depends(get_db)):
    """Exchange email + password for a bearer token."""
    user = await user_service.authenticate(db, payload.email, payload.password)
    return TokenRead(access_token=create_access_token(str(user.id)), user=UserRead.model_validate(user))
