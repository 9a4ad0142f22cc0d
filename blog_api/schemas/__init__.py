"""Pydantic request/response schemas."""

from blog_api.schemas.health import HealthResponse
from blog_api.schemas.posts import MessageResponse, PostResponse
from blog_api.schemas.users import (
    CurrentUser,
    EditUserRequest,
    LoginRequest,
    LoginResponse,
    RegisterRequest,
    UserResponse,
)

__all__ = [
    "CurrentUser",
    "EditUserRequest",
    "HealthResponse",
    "LoginRequest",
    "LoginResponse",
    "MessageResponse",
    "PostResponse",
    "RegisterRequest",
    "UserResponse",
]
