"""ORM model for registered users (authors)."""

from sqlalchemy import Column, DateTime, Integer, String

from blog_api.models.base import Base, new_id, utcnow


class User(Base):
    """
    Registered author.

    email is unique and always stored lowercase. post_count mirrors the number
    of posts created by this user and is only changed by atomic increments.
    """

    __tablename__ = "users"

    id = Column(String(32), primary_key=True, default=new_id)
    name = Column(String(255), nullable=False)
    email = Column(String(320), nullable=False, unique=True, index=True)
    password_hash = Column(String(255), nullable=False)
    avatar = Column(String(512), nullable=True)
    post_count = Column(Integer, nullable=False, default=0)
    created_at = Column(DateTime(timezone=True), nullable=False, default=utcnow)
    updated_at = Column(
        DateTime(timezone=True), nullable=False, default=utcnow, onupdate=utcnow
    )
