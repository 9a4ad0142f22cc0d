"""Response schemas for post endpoints. Post input arrives as multipart form fields."""

from datetime import datetime

from pydantic import BaseModel, ConfigDict


class PostResponse(BaseModel):
    """A post as returned to clients."""

    model_config = ConfigDict(from_attributes=True)

    id: str
    title: str
    category: str
    description: str
    creator: str
    thumbnail: str | None = None
    created_at: datetime
    updated_at: datetime


class MessageResponse(BaseModel):
    message: str
