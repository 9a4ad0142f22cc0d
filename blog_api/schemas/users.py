"""Request/response schemas for user endpoints."""

from datetime import datetime

from pydantic import BaseModel, Field

from blog_api.models import User


class RegisterRequest(BaseModel):
    """Registration form."""

    name: str = Field(..., min_length=1, max_length=255)
    email: str = Field(..., min_length=1, max_length=320)
    password: str = Field(..., min_length=1, max_length=128)
    password2: str = Field(..., min_length=1, max_length=128, description="Password confirmation")


class LoginRequest(BaseModel):
    """Credentials for login."""

    email: str = Field(..., min_length=1, max_length=320)
    password: str = Field(..., min_length=1, max_length=128)


class LoginResponse(BaseModel):
    """JWT returned after successful login, with the user's id and name."""

    token: str = Field(..., description="JWT; send as 'Authorization: Bearer <token>'")
    id: str
    name: str


class EditUserRequest(BaseModel):
    """Profile update. All fields but confirmNewPassword are required."""

    name: str = Field(..., min_length=1, max_length=255)
    email: str = Field(..., min_length=1, max_length=320)
    currentPassword: str = Field(..., min_length=1, max_length=128)
    newPassword: str = Field(..., min_length=1, max_length=128)
    confirmNewPassword: str | None = None


class UserResponse(BaseModel):
    """Public view of a user; the password hash is never included."""

    id: str
    name: str
    email: str
    avatar: str | None = None
    posts: int = Field(default=0, ge=0, description="Number of posts by this user")
    created_at: datetime | None = None
    updated_at: datetime | None = None

    @classmethod
    def from_user(cls, user: User) -> "UserResponse":
        return cls(
            id=user.id,
            name=user.name,
            email=user.email,
            avatar=user.avatar,
            posts=user.post_count or 0,
            created_at=user.created_at,
            updated_at=user.updated_at,
        )


class CurrentUser(BaseModel):
    """Authenticated caller (from the bearer token) for dependency injection."""

    id: str
    name: str
