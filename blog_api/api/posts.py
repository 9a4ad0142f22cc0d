"""Post endpoints: create, list, read, edit and delete posts with thumbnails."""

from typing import Annotated

from fastapi import APIRouter, Depends, File, Form, UploadFile
from sqlalchemy.orm import Session

from blog_api.api.deps import get_current_user, get_media_store, read_upload
from blog_api.core.config import get_settings
from blog_api.core.database import get_db
from blog_api.schemas.posts import MessageResponse, PostResponse
from blog_api.schemas.users import CurrentUser
from blog_api.services import posts as post_service
from blog_api.services.media import MediaStore

router = APIRouter()


@router.post("", response_model=PostResponse, status_code=201)
async def create_post(
    db: Annotated[Session, Depends(get_db)],
    media: Annotated[MediaStore, Depends(get_media_store)],
    current_user: Annotated[CurrentUser, Depends(get_current_user)],
    title: Annotated[str, Form()],
    category: Annotated[str, Form()],
    description: Annotated[str, Form()],
    thumbnail: Annotated[UploadFile | None, File()] = None,
) -> PostResponse:
    """
    Create a post owned by the caller.

    Send `multipart/form-data` with title, category, description and a
    `thumbnail` file no larger than THUMBNAIL_MAX_BYTES. Unknown categories
    are stored as Uncategorized. Increments the caller's post count.
    """
    upload = await read_upload(thumbnail)
    post = post_service.create_post(
        db,
        media,
        current_user.id,
        title,
        category,
        description,
        upload,
        get_settings().THUMBNAIL_MAX_BYTES,
    )
    return PostResponse.model_validate(post)


@router.get("", response_model=list[PostResponse])
def get_posts(db: Annotated[Session, Depends(get_db)]) -> list[PostResponse]:
    """All posts, most recently updated first."""
    return [PostResponse.model_validate(p) for p in post_service.list_posts(db)]


@router.get("/categories/{category}", response_model=list[PostResponse])
def get_category_posts(
    category: str,
    db: Annotated[Session, Depends(get_db)],
) -> list[PostResponse]:
    """Posts in a category, newest first. Returns an empty list when there are none."""
    posts = post_service.list_posts_by_category(db, category)
    return [PostResponse.model_validate(p) for p in posts]


@router.get("/users/{user_id}", response_model=list[PostResponse])
def get_user_posts(
    user_id: str,
    db: Annotated[Session, Depends(get_db)],
) -> list[PostResponse]:
    """Posts by one author, newest first. Returns 404 when the author has no posts."""
    posts = post_service.list_posts_by_user(db, user_id)
    return [PostResponse.model_validate(p) for p in posts]


@router.get("/{post_id}", response_model=PostResponse)
def get_post(
    post_id: str,
    db: Annotated[Session, Depends(get_db)],
) -> PostResponse:
    return PostResponse.model_validate(post_service.get_post(db, post_id))


@router.patch("/{post_id}", response_model=PostResponse)
async def edit_post(
    post_id: str,
    db: Annotated[Session, Depends(get_db)],
    media: Annotated[MediaStore, Depends(get_media_store)],
    current_user: Annotated[CurrentUser, Depends(get_current_user)],
    title: Annotated[str, Form()] = "",
    category: Annotated[str, Form()] = "",
    description: Annotated[str, Form()] = "",
    thumbnail: Annotated[UploadFile | None, File()] = None,
) -> PostResponse:
    """
    Edit the caller's post. Title, category and a description of at least 12
    characters are required. The thumbnail is only replaced when a new file is sent.
    """
    upload = await read_upload(thumbnail)
    post = post_service.edit_post(
        db,
        media,
        post_id,
        current_user.id,
        title,
        category,
        description,
        upload,
        get_settings().THUMBNAIL_MAX_BYTES,
    )
    return PostResponse.model_validate(post)


@router.delete("/{post_id}", response_model=MessageResponse)
def delete_post(
    post_id: str,
    db: Annotated[Session, Depends(get_db)],
    media: Annotated[MediaStore, Depends(get_media_store)],
    current_user: Annotated[CurrentUser, Depends(get_current_user)],
) -> MessageResponse:
    """Delete the caller's post together with its thumbnail file."""
    post_service.delete_post(db, media, post_id, current_user.id)
    return MessageResponse(message=f"Post {post_id} deleted successfully.")
