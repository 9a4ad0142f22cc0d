"""Health check endpoint with database and upload directory checks."""

import os

from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from blog_api.api.deps import get_media_store
from blog_api.core.config import settings
from blog_api.core.database import check_db_connected, get_db
from blog_api.schemas.health import HealthResponse
from blog_api.services.media import MediaStore

router = APIRouter()


@router.get("/", response_model=HealthResponse)
def get_health(
    db: Session = Depends(get_db),
    media: MediaStore = Depends(get_media_store),
) -> HealthResponse:
    """
    Return service health status, database connectivity and whether the
    upload directory accepts writes. Used by load balancers and monitoring.
    """
    db_status = "connected" if check_db_connected(db) else "disconnected"
    uploads_ok = media.root.is_dir() and os.access(media.root, os.W_OK)

    return HealthResponse(
        status="ok",
        environment=settings.APP_ENV,
        database=db_status,
        uploads="writable" if uploads_ok else "unavailable",
    )
