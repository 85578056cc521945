# autevo/services/tenant_service.py
import logging

from autevo.core.audit_log import AuditEventType, AuditLogger
from autevo.core.errors import NotFoundError
from autevo.db.models.tenant import Tenant
from autevo.db.repositories.tenant_repository import TenantRepository
from autevo.db.repositories.user_repository import UserRepository
from autevo.schemas.tenant import TenantSetupUpdate
from autevo.services.base import TenantService

logger = logging.getLogger(__name__)

PROFILE_FIELDS = ("primary_color", "logo", "email", "phone", "address")


class TenantProfileService(TenantService):
    def __init__(self, session, ctx):
        super().__init__(session, ctx)
        self.tenants = TenantRepository(session)
        self.users = UserRepository(session)
        self.audit = AuditLogger(session)

    async def get(self) -> Tenant:
        tenant = await self.tenants.get_by_id(self.tenant_id)
        if tenant is None:
            raise NotFoundError("Tenant not found")
        return tenant

    async def update_setup(self, data: TenantSetupUpdate) -> Tenant:
        """
        Save the onboarding form.

        The caller's job title and the tenant profile are written in one
        transaction; if either write fails neither is kept.
        """
        async with self.transaction():
            tenant = await self.get()
            user = await self.users.get(self.ctx.user_id)
            if user is None:
                raise NotFoundError("User not found")

            await self.users.update(user, {"job_title": data.job_title})

            changes = {"name": data.tenant_name}
            changes.update({field: getattr(data, field) for field in PROFILE_FIELDS})
            old = {field: getattr(tenant, field) for field in changes}
            await self.tenants.update(tenant, changes)

            await self.audit.log_event(
                self.ctx,
                event_type=AuditEventType.TENANT_SETUP_UPDATED,
                entity_type="tenant",
                entity_id=tenant.id,
                old_value=old,
                new_value={**changes, "job_title": data.job_title},
            )

        logger.info(f"Tenant setup saved: {tenant.id}", extra=self.log_extra)
        return tenant
