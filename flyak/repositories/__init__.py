"""Database repositories for data access."""
from flyak.repositories.base import CrudRepository
from flyak.repositories.role_repository import RoleRepository

__all__ = [
    "CrudRepository",
    "RoleRepository",
]
