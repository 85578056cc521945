# autevo/db/repositories/tenant_repository.py
from typing import Dict, List, Optional, Tuple
from sqlalchemy import select, func, or_
from sqlalchemy.ext.asyncio import AsyncSession

from autevo.db.models.tenant import Tenant
from autevo.db.models.user import User
from autevo.db.repositories.base import BaseRepository


class TenantRepository(BaseRepository[Tenant]):
    """Repository for Tenant operations"""

    def __init__(self, session: AsyncSession):
        super().__init__(Tenant, session)

    async def get_by_id(self, tenant_id: str) -> Optional[Tenant]:
        """Get tenant by ID"""
        return await self.get(tenant_id)

    async def get_status(self, tenant_id: str) -> Optional[str]:
        result = await self.session.execute(
            select(Tenant.status).where(Tenant.id == tenant_id)
        )
        return result.scalar_one_or_none()

    async def count_users(self, tenant_id: str) -> int:
        """Count users in tenant"""
        result = await self.session.execute(
            select(func.count(User.id)).where(User.tenant_id == tenant_id)
        )
        return result.scalar() or 0

    async def count_by_status(self) -> Dict[str, int]:
        result = await self.session.execute(
            select(Tenant.status, func.count(Tenant.id)).group_by(Tenant.status)
        )
        return {status: count for status, count in result.all()}

    async def list_tenants(
        self,
        page: int = 1,
        limit: int = 20,
        status: Optional[str] = None,
        search: Optional[str] = None,
    ) -> Tuple[List[Tenant], int]:
        query = select(Tenant)
        if status:
            query = query.where(Tenant.status == status)
        if search:
            pattern = f"%{search}%"
            query = query.where(or_(Tenant.name.ilike(pattern), Tenant.slug.ilike(pattern)))
        query = query.order_by(Tenant.created_at.desc())
        return await self.paginate(query, page, limit)
