# autevo/db/repositories/audit_repository.py
from typing import List
from sqlalchemy.ext.asyncio import AsyncSession

from autevo.db.models.audit_log import AuditLog
from autevo.db.repositories.base import TenantScopedRepository


class AuditLogRepository(TenantScopedRepository[AuditLog]):
    def __init__(self, session: AsyncSession):
        super().__init__(AuditLog, session)

    async def list_recent(self, tenant_id: str, limit: int = 50) -> List[AuditLog]:
        result = await self.session.execute(
            self.scoped(tenant_id).order_by(AuditLog.created_at.desc()).limit(limit)
        )
        return list(result.scalars().all())
