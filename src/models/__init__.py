"""SQLAlchemy models."""
from models.base import INTEGER_MAX, Base, TimestampMixin
from models.issue import Issue
from models.link import Link
from models.user import User

__all__ = ["INTEGER_MAX", "Base", "Issue", "Link", "TimestampMixin", "User"]
