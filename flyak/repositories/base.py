"""Generic async CRUD repository over a single mapped entity."""

from collections.abc import Iterable, Sequence
from typing import Any, ClassVar, Generic, TypeVar

from sqlalchemy import delete, func, inspect, select
from sqlalchemy.ext.asyncio import AsyncSession

from flyak.models.base import Base

ModelT = TypeVar("ModelT", bound=Base)
IdT = TypeVar("IdT")


class CrudRepository(Generic[ModelT, IdT]):
    """Create/read/update/delete by primary key.

    Subclasses bind ``model`` and add nothing else unless they need
    custom queries. Writes call ``session.flush()`` and never commit; the
    request-scoped session dependency owns the unit of work.
    """

    model: ClassVar[type[Any]]

    def __init__(self, session: AsyncSession):
        self.session = session

    @classmethod
    def _pk(cls):
        return inspect(cls.model).primary_key[0]

    async def save(self, entity: ModelT) -> ModelT:
        """Insert a new entity or persist changes to a loaded one."""
        self.session.add(entity)
        await self.session.flush()
        await self.session.refresh(entity)
        return entity

    async def save_all(self, entities: Iterable[ModelT]) -> list[ModelT]:
        items = list(entities)
        self.session.add_all(items)
        await self.session.flush()
        return items

    async def get_by_id(self, entity_id: IdT) -> ModelT | None:
        return await self.session.get(self.model, entity_id)

    async def exists_by_id(self, entity_id: IdT) -> bool:
        query = select(func.count()).select_from(self.model).where(self._pk() == entity_id)
        return (await self.session.scalar(query) or 0) > 0

    async def get_all(self) -> list[ModelT]:
        result = await self.session.execute(select(self.model).order_by(self._pk()))
        return list(result.scalars().all())

    async def get_all_by_id(self, entity_ids: Sequence[IdT]) -> list[ModelT]:
        """Fetch every entity whose id is in *entity_ids*. Unknown ids are skipped."""
        if not entity_ids:
            return []
        query = select(self.model).where(self._pk().in_(entity_ids)).order_by(self._pk())
        result = await self.session.execute(query)
        return list(result.scalars().all())

    async def count(self) -> int:
        return await self.session.scalar(select(func.count()).select_from(self.model)) or 0

    async def delete(self, entity: ModelT) -> None:
        await self.session.delete(entity)
        await self.session.flush()

    async def delete_by_id(self, entity_id: IdT) -> bool:
        """Delete by id. Returns ``False`` if nothing matched."""
        entity = await self.get_by_id(entity_id)
        if entity is None:
            return False
        await self.delete(entity)
        return True

    async def delete_all(self) -> int:
        """Delete every row of the bound entity. Returns the row count."""
        result = await self.session.execute(delete(self.model))
        await self.session.flush()
        return result.rowcount or 0
