# autevo/services/team_service.py
import logging
from typing import List

from autevo.core.audit_log import AuditEventType, AuditLogger
from autevo.core.errors import ConflictError
from autevo.core.guards import guard_deactivation, guard_role_change, parse_assignable_role
from autevo.db.models.user import PendingInvite, User, UserStatus
from autevo.db.repositories.user_repository import InviteRepository, UserRepository
from autevo.schemas.user import InviteCreate
from autevo.services.base import TenantService

logger = logging.getLogger(__name__)


class TeamService(TenantService):
    """Membership and roles inside one tenant"""

    def __init__(self, session, ctx):
        super().__init__(session, ctx)
        self.users = UserRepository(session)
        self.invites = InviteRepository(session)
        self.audit = AuditLogger(session)

    async def list(self, include_inactive: bool = False) -> List[User]:
        return await self.users.list_for_tenant(self.tenant_id, include_inactive)

    async def invite(self, data: InviteCreate) -> PendingInvite:
        tenant_id = self.tenant_id
        role = parse_assignable_role(data.role)
        async with self.transaction():
            if await self.users.get_in_tenant_by_email(tenant_id, data.email):
                raise ConflictError("User is already a member of this team")
            if await self.invites.get_pending(tenant_id, data.email):
                raise ConflictError("An invitation is already pending for this email")

            invite = await self.invites.create({
                "tenant_id": tenant_id,
                "email": data.email.lower(),
                "role": role.value,
                "invited_by_id": self.ctx.user_id,
            })
            await self.audit.log_event(
                self.ctx,
                event_type=AuditEventType.USER_INVITED,
                entity_type="pending_invite",
                entity_id=invite.id,
                new_value={"email": invite.email, "role": invite.role},
            )

        logger.info(f"Invitation sent to {invite.email} as {invite.role}", extra=self.log_extra)
        return invite

    async def update_role(self, user_id: str, role: str) -> User:
        tenant_id = self.tenant_id
        async with self.transaction():
            target = await self.users.get_scoped_or_raise(tenant_id, user_id)
            owners = await self.users.count_active_owners(tenant_id)
            new_role = guard_role_change(self.ctx.user_id, target, role, owners)

            previous = target.role
            await self.users.update(target, {"role": new_role.value})
            await self.audit.log_event(
                self.ctx,
                event_type=AuditEventType.USER_ROLE_CHANGED,
                entity_type="user",
                entity_id=target.id,
                old_value={"role": previous},
                new_value={"role": target.role},
            )

        logger.info(f"Role of user {user_id} changed {previous} -> {target.role}", extra=self.log_extra)
        return target

    async def deactivate(self, user_id: str) -> User:
        tenant_id = self.tenant_id
        async with self.transaction():
            target = await self.users.get_scoped_or_raise(tenant_id, user_id)
            owners = await self.users.count_active_owners(tenant_id)
            guard_deactivation(self.ctx.user_id, target, owners)

            await self.users.update(target, {"status": UserStatus.INACTIVE.value})
            await self.audit.log_event(
                self.ctx,
                event_type=AuditEventType.USER_DEACTIVATED,
                entity_type="user",
                entity_id=target.id,
                old_value={"status": UserStatus.ACTIVE.value},
                new_value={"status": UserStatus.INACTIVE.value},
            )

        logger.info(f"User {user_id} deactivated", extra=self.log_extra)
        return target

    async def reactivate(self, user_id: str) -> User:
        async with self.transaction():
            target = await self.users.get_scoped_or_raise(self.tenant_id, user_id)
            previous = target.status
            await self.users.update(target, {"status": UserStatus.ACTIVE.value})
            await self.audit.log_event(
                self.ctx,
                event_type=AuditEventType.USER_REACTIVATED,
                entity_type="user",
                entity_id=target.id,
                old_value={"status": previous},
                new_value={"status": UserStatus.ACTIVE.value},
            )
        return target
