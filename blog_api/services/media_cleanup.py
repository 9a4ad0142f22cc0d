"""Orphan media cleanup: delete stored files no user avatar or post thumbnail references."""

import logging

from sqlalchemy.orm import Session

from blog_api.core.errors import DeleteFailed
from blog_api.models import Post, User
from blog_api.services.media import MediaStore

logger = logging.getLogger(__name__)


def referenced_filenames(session: Session) -> set[str]:
    """Every media filename currently referenced by a record."""
    avatars = session.query(User.avatar).filter(User.avatar.isnot(None)).all()
    thumbnails = session.query(Post.thumbnail).filter(Post.thumbnail.isnot(None)).all()
    return {name for (name,) in avatars + thumbnails if name}


def find_orphans(session: Session, media: MediaStore) -> list[str]:
    referenced = referenced_filenames(session)
    return [name for name in media.list_files() if name not in referenced]


def run_media_cleanup(
    session: Session, media: MediaStore, dry_run: bool = False
) -> tuple[list[str], list[str]]:
    """
    Discard orphaned media files.

    Returns (removed, failed) filenames. With dry_run nothing is deleted and
    every orphan is reported as removed. Idempotent: safe to run repeatedly.
    """
    orphans = find_orphans(session, media)
    if dry_run:
        logger.info("Media cleanup dry run: %s orphan file(s)", len(orphans))
        return (orphans, [])

    removed: list[str] = []
    failed: list[str] = []
    for name in orphans:
        try:
            media.discard(name)
            removed.append(name)
        except DeleteFailed:
            failed.append(name)

    if removed or failed:
        logger.info(
            "Media cleanup run: removed=%s, failed=%s", len(removed), len(failed)
        )
    return (removed, failed)
