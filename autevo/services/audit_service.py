# autevo/services/audit_service.py
from typing import List

from autevo.db.models.audit_log import AuditLog
from autevo.db.repositories.audit_repository import AuditLogRepository
from autevo.services.base import TenantService


class AuditService(TenantService):
    def __init__(self, session, ctx):
        super().__init__(session, ctx)
        self.entries = AuditLogRepository(session)

    async def list(self, limit: int = 50) -> List[AuditLog]:
        return await self.entries.list_recent(self.tenant_id, limit)
