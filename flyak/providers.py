"""FastAPI dependency providers for repositories.

Kept apart from ``dependencies.py`` so route modules can import the
repository aliases without pulling in engine construction.
"""

from typing import Annotated

from fastapi import Depends

from flyak.dependencies import DBSession
from flyak.repositories.role_repository import RoleRepository


def get_role_repository(db: DBSession) -> RoleRepository:
    return RoleRepository(db)


RoleRepo = Annotated[RoleRepository, Depends(get_role_repository)]
