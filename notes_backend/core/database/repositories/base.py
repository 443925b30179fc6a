"""
Base repository and query helpers.

``AsyncBaseRepository`` owns the commit cycle shared by every repository:
writes go through ``_persist``, which rolls the session back when the
database rejects the statement so the same session stays usable. Lookups by
primary key, deletion, counting and filtered listing are generic; entity
specific repositories implement ``create`` and ``update`` and choose the
listing order.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import Any, Dict, Generic, List, Optional, Sequence, Type, TypeVar

from sqlalchemy import func
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession
from sqlmodel import SQLModel, select

EntityType = TypeVar("EntityType", bound=SQLModel)


class AsyncBaseRepository(ABC, Generic[EntityType]):
    """Async repository over a single SQLModel table."""

    def __init__(self, session: AsyncSession, model: Type[EntityType]) -> None:
        self.session = session
        self.model = model

    def ordering(self) -> Sequence[Any]:
        """Columns ``list`` sorts by; unordered unless overridden."""
        return ()

    async def _persist(self, entity: EntityType) -> EntityType:
        self.session.add(entity)
        try:
            await self.session.commit()
        except SQLAlchemyError:
            await self.session.rollback()
            raise
        await self.session.refresh(entity)
        return entity

    @abstractmethod
    async def create(self, entity: EntityType) -> EntityType:
        """Insert a new row and return it with generated fields populated."""

    @abstractmethod
    async def update(self, entity: EntityType) -> EntityType:
        """Write back a modified entity."""

    async def get_by_id(self, entity_id: Any) -> Optional[EntityType]:
        return await self.session.get(self.model, entity_id)

    async def delete(self, entity_id: Any) -> bool:
        """Delete by primary key; False when there was nothing to delete."""
        entity = await self.get_by_id(entity_id)
        if entity is None:
            return False
        await self.session.delete(entity)
        await self.session.commit()
        return True

    async def count(self, filters: Optional[Dict[str, Any]] = None) -> int:
        stmt = select(func.count()).select_from(self.model)
        if filters:
            stmt = QueryBuilder.apply_filters(stmt, self.model, filters)
        result = await self.session.execute(stmt)
        return int(result.scalar_one())

    async def list(
        self, limit: Optional[int] = None, offset: Optional[int] = None, filters: Optional[Dict[str, Any]] = None
    ) -> List[EntityType]:
        """List rows in ``ordering()`` order.

        Args:
            limit: Maximum number of rows to return
            offset: Number of rows to skip
            filters: Column equality filters; ``None`` values are ignored

        Returns:
            List of entity instances
        """
        stmt = select(self.model).order_by(*self.ordering())
        if filters:
            stmt = QueryBuilder.apply_filters(stmt, self.model, filters)
        stmt = QueryBuilder.apply_pagination(stmt, limit, offset)

        result = await self.session.execute(stmt)
        return list(result.scalars().all())


class QueryBuilder:
    """Statement helpers shared by the repositories."""

    @staticmethod
    def apply_filters(stmt, model: Type[SQLModel], filters: Dict[str, Any]):
        """Add an equality clause per filter, skipping ``None`` values and unknown columns."""
        for key, value in filters.items():
            if value is not None and hasattr(model, key):
                stmt = stmt.where(getattr(model, key) == value)
        return stmt

    @staticmethod
    def apply_pagination(stmt, limit: Optional[int], offset: Optional[int]):
        if limit is not None:
            stmt = stmt.limit(limit)
        if offset:
            stmt = stmt.offset(offset)
        return stmt

    @staticmethod
    def page_offset(page: int, limit: int) -> int:
        """Row offset of a 1-based ``page``."""
        return (max(page, 1) - 1) * limit
