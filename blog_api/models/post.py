"""ORM model for blog posts."""

import enum

from sqlalchemy import Column, DateTime, String, Text

from blog_api.models.base import Base, new_id, utcnow


class Category(str, enum.Enum):
    """Closed set of post categories."""

    AGRICULTURE = "Agriculture"
    BUSINESS = "Business"
    EDUCATION = "Education"
    ENTERTAINMENT = "Entertainment"
    ART = "Art"
    INVESTMENT = "Investment"
    UNCATEGORIZED = "Uncategorized"
    WEATHER = "Weather"


class Post(Base):
    """
    A blog post.

    creator is a weak reference to users.id (no foreign key): used for display
    and filtering only. thumbnail is the media filename of the post image.
    """

    __tablename__ = "posts"

    id = Column(String(32), primary_key=True, default=new_id)
    title = Column(String(255), nullable=False)
    category = Column(
        String(32), nullable=False, default=Category.UNCATEGORIZED.value, index=True
    )
    description = Column(Text, nullable=False)
    creator = Column(String(32), nullable=False, index=True)
    thumbnail = Column(String(512), nullable=True)
    created_at = Column(
        DateTime(timezone=True), nullable=False, default=utcnow, index=True
    )
    updated_at = Column(
        DateTime(timezone=True), nullable=False, default=utcnow, onupdate=utcnow, index=True
    )
