"""User, auth and profile schemas."""

from uuid import UUID

from pydantic import BaseModel, ConfigDict, EmailStr, Field

from weighin.core.constants import MIN_NAME_LENGTH, MIN_PASSWORD_LENGTH


class SignUpRequest(BaseModel):
    name: str = Field(..., min_length=MIN_NAME_LENGTH, max_length=100)
    email: EmailStr
    password: str = Field(..., min_length=MIN_PASSWORD_LENGTH, max_length=128)


class SignInRequest(BaseModel):
    email: EmailStr
    password: str = Field(..., min_length=1)


class UserSummary(BaseModel):
    """Public identity of another user (partner lists, search)."""

    model_config = ConfigDict(from_attributes=True)

    id: UUID
    name: str
    email: str


class UserRead(UserSummary):
    is_first_login: bool


class TokenRead(BaseModel):
    access_token: str
    token_type: str = "bearer"
    user: UserRead


class ProfileUpdate(BaseModel):
    is_first_login: bool


class UserSearchResults(BaseModel):
    users: list[UserSummary] = []


class MessageRead(BaseModel):
    message: str
