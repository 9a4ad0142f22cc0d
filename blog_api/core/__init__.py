"""Core app configuration, database and security."""

from blog_api.core.config import get_settings, settings
from blog_api.core.database import get_db

__all__ = ["get_settings", "settings", "get_db"]
