"""User endpoints: register, login, profile, avatar and author listing."""

from typing import Annotated

from fastapi import APIRouter, Depends, File, UploadFile
from sqlalchemy.orm import Session

from blog_api.api.deps import get_current_user, get_media_store, read_upload
from blog_api.core.config import get_settings
from blog_api.core.database import get_db
from blog_api.core.security import TokenService, get_token_service
from blog_api.schemas.users import (
    CurrentUser,
    EditUserRequest,
    LoginRequest,
    LoginResponse,
    RegisterRequest,
    UserResponse,
)
from blog_api.services import users as user_service
from blog_api.services.media import MediaStore

router = APIRouter()


@router.post("/register", response_model=UserResponse, status_code=201)
def register(
    body: RegisterRequest,
    db: Annotated[Session, Depends(get_db)],
) -> UserResponse:
    """
    Register a new author.

    Requires name, email, password and password2. The email is lowercased and
    must be unused (409 otherwise); passwords must match and be at least 6
    characters (422 otherwise).
    """
    user = user_service.register_user(db, body)
    return UserResponse.from_user(user)


@router.post("/login", response_model=LoginResponse)
def login(
    body: LoginRequest,
    db: Annotated[Session, Depends(get_db)],
    tokens: Annotated[TokenService, Depends(get_token_service)],
) -> LoginResponse:
    """
    Authenticate with email and password; returns a token valid for one day.
    Include it in the Authorization header as: Bearer <token>
    """
    return user_service.login_user(db, body, tokens)


@router.get("", response_model=list[UserResponse])
def get_authors(db: Annotated[Session, Depends(get_db)]) -> list[UserResponse]:
    """List all authors (without password data)."""
    return [UserResponse.from_user(u) for u in user_service.list_authors(db)]


@router.post("/change-avatar", response_model=UserResponse)
async def change_avatar(
    db: Annotated[Session, Depends(get_db)],
    media: Annotated[MediaStore, Depends(get_media_store)],
    current_user: Annotated[CurrentUser, Depends(get_current_user)],
    avatar: Annotated[UploadFile | None, File()] = None,
) -> UserResponse:
    """
    Replace the caller's avatar with the multipart file field `avatar`.
    Images larger than AVATAR_MAX_BYTES are rejected with 422.
    """
    upload = await read_upload(avatar)
    user = user_service.change_avatar(
        db, media, current_user.id, upload, get_settings().AVATAR_MAX_BYTES
    )
    return UserResponse.from_user(user)


@router.patch("/edit-user", response_model=UserResponse)
def edit_user(
    body: EditUserRequest,
    db: Annotated[Session, Depends(get_db)],
    current_user: Annotated[CurrentUser, Depends(get_current_user)],
) -> UserResponse:
    """Update the caller's name, email and password; the current password is required."""
    user = user_service.edit_user(db, current_user.id, body)
    return UserResponse.from_user(user)


@router.get("/{user_id}", response_model=UserResponse)
def get_user(
    user_id: str,
    db: Annotated[Session, Depends(get_db)],
) -> UserResponse:
    return UserResponse.from_user(user_service.get_user(db, user_id))
