# autevo/db/repositories/service_repository.py
from typing import List, Optional, Tuple
from sqlalchemy import select, func, or_
from sqlalchemy.ext.asyncio import AsyncSession

from autevo.db.models.service import Service
from autevo.db.models.service_order import OrderItem
from autevo.db.repositories.base import TenantScopedRepository


class ServiceRepository(TenantScopedRepository[Service]):
    """Repository for service catalog operations"""

    not_found_message = "Service not found"

    def __init__(self, session: AsyncSession):
        super().__init__(Service, session)

    async def list_services(
        self,
        tenant_id: str,
        page: int,
        limit: int,
        search: Optional[str] = None,
        is_active: Optional[bool] = None,
    ) -> Tuple[List[Service], int]:
        query = self.scoped(tenant_id)
        if is_active is not None:
            query = query.where(Service.is_active == is_active)
        if search:
            pattern = f"%{search}%"
            query = query.where(or_(Service.name.ilike(pattern), Service.description.ilike(pattern)))
        return await self.paginate(query.order_by(Service.name), page, limit)

    async def list_active(self, tenant_id: str) -> List[Service]:
        result = await self.session.execute(
            self.scoped(tenant_id).where(Service.is_active.is_(True)).order_by(Service.name)
        )
        return list(result.scalars().all())

    async def count_order_items(self, service_id: str) -> int:
        result = await self.session.execute(
            select(func.count(OrderItem.id)).where(OrderItem.service_id == service_id)
        )
        return result.scalar() or 0
