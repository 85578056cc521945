# autevo/db/repositories/base.py
from typing import Any, Generic, List, Optional, Tuple, Type, TypeVar

from sqlalchemy import func, select
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.sql import Select

from autevo.core.errors import NotFoundError

ModelType = TypeVar("ModelType")


class BaseRepository(Generic[ModelType]):
    """Base repository with common CRUD operations

    Repositories only flush; the calling service owns the transaction and
    decides when to commit.
    """

    def __init__(self, model: Type[ModelType], session: AsyncSession):
        self.model = model
        self.session = session

    async def get(self, id: Any) -> Optional[ModelType]:
        """Get by ID"""
        result = await self.session.execute(
            select(self.model).where(self.model.id == id)
        )
        return result.scalar_one_or_none()

    async def add(self, db_obj: ModelType) -> ModelType:
        self.session.add(db_obj)
        await self.session.flush()
        return db_obj

    async def create(self, obj_in: dict) -> ModelType:
        """Create new record"""
        return await self.add(self.model(**obj_in))

    async def update(self, db_obj: ModelType, obj_in: dict) -> ModelType:
        """Update record in place"""
        for field, value in obj_in.items():
            setattr(db_obj, field, value)
        await self.session.flush()
        return db_obj

    async def delete(self, db_obj: ModelType) -> None:
        """Delete record"""
        await self.session.delete(db_obj)
        await self.session.flush()

    async def count(self, query: Select) -> int:
        result = await self.session.execute(
            select(func.count()).select_from(query.order_by(None).subquery())
        )
        return result.scalar() or 0

    async def paginate(self, query: Select, page: int, limit: int) -> Tuple[List[ModelType], int]:
        """Return one page of `query` and the total row count"""
        total = await self.count(query)
        result = await self.session.execute(query.offset((page - 1) * limit).limit(limit))
        return list(result.scalars().all()), total


class TenantScopedRepository(BaseRepository[ModelType]):
    """
    Repository for rows owned by a tenant.

    Every lookup is filtered by the caller's tenant id, so a row of another
    tenant is indistinguishable from a missing one.
    """

    not_found_message = "Resource not found"

    def scoped(self, tenant_id: str, include_deleted: bool = False) -> Select:
        query = select(self.model).where(self.model.tenant_id == tenant_id)
        if not include_deleted and hasattr(self.model, "deleted_at"):
            query = query.where(self.model.deleted_at.is_(None))
        return query

    async def get_scoped(
        self,
        tenant_id: str,
        id: Any,
        include_deleted: bool = False,
        refresh: bool = False,
    ) -> Optional[ModelType]:
        query = self.scoped(tenant_id, include_deleted).where(self.model.id == id)
        if refresh:
            query = query.execution_options(populate_existing=True)
        result = await self.session.execute(query)
        return result.scalar_one_or_none()

    async def get_scoped_or_raise(self, tenant_id: str, id: Any, **kwargs) -> ModelType:
        db_obj = await self.get_scoped(tenant_id, id, **kwargs)
        if db_obj is None:
            raise NotFoundError(self.not_found_message)
        return db_obj
