"""Database models package."""

from flyak.models.base import Base
from flyak.models.user import User

__all__ = [
    "Base",
    "User",
]
