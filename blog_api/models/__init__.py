"""SQLAlchemy ORM models."""

from blog_api.models.base import Base
from blog_api.models.post import Category, Post
from blog_api.models.user import User

__all__ = ["Base", "Category", "Post", "User"]
