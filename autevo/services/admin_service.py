# autevo/services/admin_service.py
"""
Platform administration of tenant accounts.

Lifecycle:
    pending_activation -> trial             activate_trial
    trial              -> trial             extend_trial
    any but suspended  -> suspended         suspend_tenant
    suspended          -> active | trial    reactivate_tenant
"""
import logging
from datetime import timedelta
from typing import Any, Dict, Optional

from autevo.core.audit_log import AuditEventType, AuditLogger
from autevo.core.config import settings
from autevo.core.errors import BadRequestError, NotFoundError
from autevo.core.tenant import TenantStatus
from autevo.db.base import utcnow
from autevo.db.models.tenant import Tenant
from autevo.db.repositories.tenant_repository import TenantRepository
from autevo.schemas.common import Pagination
from autevo.services.base import TenantService

logger = logging.getLogger(__name__)


class AdminService(TenantService):
    def __init__(self, session, ctx):
        super().__init__(session, ctx)
        self.tenants = TenantRepository(session)
        self.audit = AuditLogger(session)

    async def dashboard_stats(self) -> Dict[str, int]:
        counts = await self.tenants.count_by_status()
        stats = {status.value: counts.get(status.value, 0) for status in TenantStatus}
        stats["total"] = sum(counts.values())
        return stats

    async def list_tenants(
        self,
        page: int = 1,
        limit: int = 20,
        status: Optional[TenantStatus] = None,
        search: Optional[str] = None,
    ) -> Dict[str, Any]:
        items, total = await self.tenants.list_tenants(
            page, limit, status=status.value if status else None, search=search
        )
        return {"items": items, "pagination": Pagination.build(page, limit, total)}

    async def _get_or_raise(self, tenant_id: str) -> Tenant:
        tenant = await self.tenants.get_by_id(tenant_id)
        if tenant is None:
            raise NotFoundError("Tenant not found")
        return tenant

    async def get_tenant(self, tenant_id: str) -> Dict[str, Any]:
        tenant = await self._get_or_raise(tenant_id)
        data = {column.name: getattr(tenant, column.name) for column in Tenant.__table__.columns}
        data["user_count"] = await self.tenants.count_users(tenant.id)
        return data

    async def _record(self, tenant: Tenant, event_type: AuditEventType, old: dict, new: dict) -> None:
        await self.audit.log_event(
            self.ctx,
            event_type=event_type,
            entity_type="tenant",
            entity_id=tenant.id,
            tenant_id=tenant.id,
            old_value=old,
            new_value=new,
        )
        logger.info(
            f"Tenant {tenant.id}: {event_type.value} {old.get('status')} -> {new.get('status')}",
            extra={**self.log_extra, "operation": event_type.value},
        )

    async def activate_trial(self, tenant_id: str, days: Optional[int] = None) -> Tenant:
        days = days or settings.TRIAL_DAYS
        async with self.transaction():
            tenant = await self._get_or_raise(tenant_id)
            if tenant.status != TenantStatus.PENDING_ACTIVATION.value:
                raise BadRequestError("Only tenants pending activation can start a trial")

            now = utcnow()
            old = {"status": tenant.status}
            await self.tenants.update(tenant, {
                "status": TenantStatus.TRIAL.value,
                "trial_started_at": now,
                "trial_ends_at": now + timedelta(days=days),
            })
            await self._record(tenant, AuditEventType.TENANT_TRIAL_ACTIVATED, old, {
                "status": tenant.status, "trial_ends_at": tenant.trial_ends_at,
            })
        return tenant

    async def extend_trial(self, tenant_id: str, days: int) -> Tenant:
        async with self.transaction():
            tenant = await self._get_or_raise(tenant_id)
            if tenant.status != TenantStatus.TRIAL.value:
                raise BadRequestError("Only tenants in trial can have the trial extended")

            old = {"status": tenant.status, "trial_ends_at": tenant.trial_ends_at}
            base = tenant.trial_ends_at or utcnow()
            await self.tenants.update(tenant, {"trial_ends_at": base + timedelta(days=days)})
            await self._record(tenant, AuditEventType.TENANT_TRIAL_EXTENDED, old, {
                "status": tenant.status, "trial_ends_at": tenant.trial_ends_at,
            })
        return tenant

    async def suspend_tenant(self, tenant_id: str, reason: str) -> Tenant:
        async with self.transaction():
            tenant = await self._get_or_raise(tenant_id)
            if tenant.status == TenantStatus.SUSPENDED.value:
                raise BadRequestError("Tenant is already suspended")

            old = {"status": tenant.status}
            await self.tenants.update(tenant, {
                "status": TenantStatus.SUSPENDED.value,
                "suspended_at": utcnow(),
                "suspend_reason": reason,
            })
            await self._record(tenant, AuditEventType.TENANT_SUSPENDED, old, {
                "status": tenant.status, "reason": reason,
            })
        return tenant

    async def reactivate_tenant(self, tenant_id: str, as_trial: bool = False) -> Tenant:
        async with self.transaction():
            tenant = await self._get_or_raise(tenant_id)
            if tenant.status != TenantStatus.SUSPENDED.value:
                raise BadRequestError("Only suspended tenants can be reactivated")

            old = {"status": tenant.status, "reason": tenant.suspend_reason}
            changes = {"suspended_at": None, "suspend_reason": None}
            if as_trial:
                now = utcnow()
                changes.update(
                    status=TenantStatus.TRIAL.value,
                    trial_started_at=now,
                    trial_ends_at=now + timedelta(days=settings.TRIAL_DAYS),
                )
            else:
                changes["status"] = TenantStatus.ACTIVE.value
            await self.tenants.update(tenant, changes)
            await self._record(tenant, AuditEventType.TENANT_REACTIVATED, old, {"status": tenant.status})
        return tenant
