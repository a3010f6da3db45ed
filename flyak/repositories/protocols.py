"""Protocol definitions for repository interfaces.

These protocols enable type-safe mocking in tests and decouple callers
from the concrete SQLAlchemy implementations.
"""

from collections.abc import Iterable, Sequence
from typing import Protocol, TypeVar, runtime_checkable

ModelT = TypeVar("ModelT")
IdT = TypeVar("IdT", contravariant=True)


@runtime_checkable
class CrudRepositoryProtocol(Protocol[ModelT, IdT]):
    """Interface for create/read/update/delete by id."""

    async def save(self, entity: ModelT) -> ModelT: ...

    async def save_all(self, entities: Iterable[ModelT]) -> list[ModelT]: ...

    async def get_by_id(self, entity_id: IdT) -> ModelT | None: ...

    async def exists_by_id(self, entity_id: IdT) -> bool: ...

    async def get_all(self) -> list[ModelT]: ...

    async def get_all_by_id(self, entity_ids: Sequence[IdT]) -> list[ModelT]: ...

    async def count(self) -> int: ...

    async def delete(self, entity: ModelT) -> None: ...

    async def delete_by_id(self, entity_id: IdT) -> bool: ...

    async def delete_all(self) -> int: ...

