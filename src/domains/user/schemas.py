from datetime import datetime
from uuid import UUID

from pydantic import Field

from core.schemas import CamelModel


class RegisterRequest(CamelModel):
    username: str
    email: str
    password: str


class LogInRequest(CamelModel):
    email: str
    password: str


class UpdateProfileRequest(CamelModel):
    username: str | None = None
    email: str | None = None


class UserResponse(CamelModel):
    id: UUID
    username: str
    email: str
    created_at: datetime | None = None


class AuthResponse(CamelModel):
    token: str
    user: UserResponse


class ProfileResponse(CamelModel):
    user: UserResponse


class DeleteAccountResponse(CamelModel):
    message: str = Field(default="계정이 삭제되었습니다.")
    deleted_recipe_count: int
    deleted_group_count: int
