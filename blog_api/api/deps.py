"""Shared route dependencies: bearer-token auth, media store and upload reading."""

from typing import Annotated

from fastapi import Depends, UploadFile
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer

from blog_api.core.config import get_settings
from blog_api.core.security import TokenService, get_token_service
from blog_api.schemas.users import CurrentUser
from blog_api.services.media import MediaStore, MediaUpload

security = HTTPBearer(auto_error=False)


def get_current_user(
    credentials: Annotated[HTTPAuthorizationCredentials | None, Depends(security)],
    tokens: Annotated[TokenService, Depends(get_token_service)],
) -> CurrentUser:
    """
    Dependency: require a valid 'Authorization: Bearer <token>' header.
    Raises Unauthorized (401) before the route body runs if missing or invalid.
    """
    token = credentials.credentials if credentials is not None else None
    identity = tokens.verify(token)
    return CurrentUser(id=identity.id, name=identity.name)


def get_media_store() -> MediaStore:
    """Dependency: media store rooted at UPLOAD_DIR."""
    return MediaStore(get_settings().UPLOAD_DIR)


async def read_upload(file: UploadFile | None) -> MediaUpload | None:
    """Read a multipart file part; an absent or empty-named part counts as no file."""
    if file is None or not file.filename:
        return None
    content = await file.read()
    return MediaUpload(filename=file.filename, content=content)
