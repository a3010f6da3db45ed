"""Repository for user records, keyed by numeric id."""

from flyak.models.user import User
from flyak.repositories.base import CrudRepository


class RoleRepository(CrudRepository[User, int]):
    """Plain CRUD over ``User``. Despite the name it holds no role queries."""

    model = User
