"""Post use cases: create, edit, delete and list posts with their thumbnails.

File and record effects are sequenced explicitly: the file effect runs first,
the record effect second, and a failed record effect is compensated by
discarding the newly stored file.
"""

import logging

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from blog_api.core.errors import AppError, Forbidden, NotFound, ValidationFailed
from blog_api.models import Category, Post, User
from blog_api.services.media import MediaStore, MediaUpload

logger = logging.getLogger(__name__)

DESCRIPTION_MIN_LEN = 12

_CATEGORY_BY_KEY = {c.value.lower(): c for c in Category}


def resolve_category(value: str) -> Category:
    """Match a category case-insensitively; unknown values fall back to Uncategorized."""
    category = _CATEGORY_BY_KEY.get((value or "").strip().lower())
    if category is None:
        logger.info("Unknown category %r; using %s", value, Category.UNCATEGORIZED.value)
        return Category.UNCATEGORIZED
    return category


def _increment_post_count(db: Session, user_id: str) -> int:
    """Atomic +1 on the user's counter. Returns the number of rows updated."""
    return (
        db.query(User)
        .filter(User.id == user_id)
        .update({User.post_count: User.post_count + 1}, synchronize_session=False)
    )


def _decrement_post_count(db: Session, user_id: str) -> int:
    """Atomic -1 on the user's counter, never below zero."""
    return (
        db.query(User)
        .filter(User.id == user_id, User.post_count > 0)
        .update({User.post_count: User.post_count - 1}, synchronize_session=False)
    )


def _check_size(upload: MediaUpload, max_size: int) -> None:
    if upload.size > max_size:
        raise ValidationFailed(
            f"Thumbnail is too big. Make it less than {max_size} bytes."
        )


def get_post(db: Session, post_id: str) -> Post:
    post = db.get(Post, post_id)
    if post is None:
        raise NotFound("Post not found")
    return post


def list_posts(db: Session) -> list[Post]:
    """All posts, most recently updated first."""
    return db.query(Post).order_by(Post.updated_at.desc()).all()


def list_posts_by_category(db: Session, category: str) -> list[Post]:
    """
    Posts in a category, newest first. Known categories match case-insensitively;
    an empty list is a valid result.
    """
    known = _CATEGORY_BY_KEY.get((category or "").strip().lower())
    if known is not None:
        category = known.value
    posts = (
        db.query(Post)
        .filter(Post.category == category)
        .order_by(Post.created_at.desc())
        .all()
    )
    if not posts:
        logger.info("No posts found for category %r", category)
    return posts


def list_posts_by_user(db: Session, user_id: str) -> list[Post]:
    """Posts created by a user, newest first. Raises NotFound when there are none."""
    posts = (
        db.query(Post)
        .filter(Post.creator == user_id)
        .order_by(Post.created_at.desc())
        .all()
    )
    if not posts:
        raise NotFound("No posts found for this user.")
    return posts


def create_post(
    db: Session,
    media: MediaStore,
    creator_id: str,
    title: str,
    category: str,
    description: str,
    thumbnail: MediaUpload | None,
    max_size: int,
) -> Post:
    """
    Store the thumbnail, create the post and bump the creator's counter.

    The post insert and the counter update commit together; if they fail the
    stored thumbnail is discarded so no orphan file is left.
    """
    title = (title or "").strip()
    description = (description or "").strip()
    if not title or not (category or "").strip() or not description or thumbnail is None:
        raise ValidationFailed("Please fill in all fields and choose a thumbnail")
    _check_size(thumbnail, max_size)

    if db.get(User, creator_id) is None:
        raise NotFound("User not found")

    filename = media.store(thumbnail, max_size)
    post = Post(
        title=title,
        category=resolve_category(category).value,
        description=description,
        creator=creator_id,
        thumbnail=filename,
    )
    try:
        db.add(post)
        db.flush()
        if _increment_post_count(db, creator_id) != 1:
            raise NotFound("User not found")
        db.commit()
    except (SQLAlchemyError, NotFound) as e:
        db.rollback()
        logger.error("Creating post for user %s failed: %s", creator_id, e)
        media.discard_quietly(filename)
        if isinstance(e, NotFound):
            raise
        raise AppError("Post creation failed") from e
    db.refresh(post)
    logger.info("User %s created post %s", creator_id, post.id)
    return post


def edit_post(
    db: Session,
    media: MediaStore,
    post_id: str,
    caller_id: str,
    title: str,
    category: str,
    description: str,
    thumbnail: MediaUpload | None,
    max_size: int,
) -> Post:
    """
    Update a post's text fields, and its thumbnail when a new file is supplied.
    Without a new file the existing thumbnail name and file are left untouched.
    """
    title = (title or "").strip()
    description = (description or "").strip()
    if not title or not (category or "").strip() or len(description) < DESCRIPTION_MIN_LEN:
        raise ValidationFailed(
            f"Please fill in all fields. The description needs at least {DESCRIPTION_MIN_LEN} characters."
        )

    post = get_post(db, post_id)
    if post.creator != caller_id:
        raise Forbidden("You can only edit your own posts")
    if thumbnail is not None:
        _check_size(thumbnail, max_size)

    post.title = title
    post.category = resolve_category(category).value
    post.description = description

    new_filename: str | None = None
    if thumbnail is not None:
        new_filename = media.replace(post.thumbnail, thumbnail, max_size)
        post.thumbnail = new_filename

    try:
        db.commit()
    except SQLAlchemyError as e:
        db.rollback()
        logger.error("Updating post %s failed: %s", post_id, e)
        if new_filename is not None:
            media.discard_quietly(new_filename)
        raise AppError("Couldn't update post") from e
    db.refresh(post)
    return post


def delete_post(db: Session, media: MediaStore, post_id: str, caller_id: str) -> None:
    """
    Discard the thumbnail, then delete the post and decrement its creator's counter.
    A failed discard aborts before the record is touched.
    """
    post = get_post(db, post_id)
    if post.creator != caller_id:
        raise Forbidden("You can only delete your own posts")

    if post.thumbnail:
        media.discard(post.thumbnail)

    creator_id = post.creator
    try:
        db.delete(post)
        if _decrement_post_count(db, creator_id) == 0:
            logger.info("Creator %s of post %s missing or at zero posts", creator_id, post_id)
        db.commit()
    except SQLAlchemyError as e:
        db.rollback()
        logger.error(
            "Deleting post %s failed after its thumbnail was removed: %s", post_id, e
        )
        raise AppError("Post deletion failed") from e
    logger.info("User %s deleted post %s", caller_id, post_id)
