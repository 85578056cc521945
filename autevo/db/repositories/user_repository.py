# autevo/db/repositories/user_repository.py
from typing import List, Optional
from sqlalchemy import select, func
from sqlalchemy.ext.asyncio import AsyncSession

from autevo.core.rbac import Role
from autevo.db.models.user import User, UserStatus, PendingInvite
from autevo.db.repositories.base import BaseRepository, TenantScopedRepository


class UserRepository(TenantScopedRepository[User]):
    """Repository for User operations"""

    not_found_message = "User not found"

    def __init__(self, session: AsyncSession):
        super().__init__(User, session)

    async def get_by_email(self, email: str) -> Optional[User]:
        """Get user by email"""
        result = await self.session.execute(
            select(User).where(func.lower(User.email) == email.lower())
        )
        return result.scalar_one_or_none()

    async def get_in_tenant_by_email(self, tenant_id: str, email: str) -> Optional[User]:
        result = await self.session.execute(
            self.scoped(tenant_id).where(func.lower(User.email) == email.lower())
        )
        return result.scalar_one_or_none()

    async def list_for_tenant(self, tenant_id: str, include_inactive: bool = False) -> List[User]:
        query = self.scoped(tenant_id)
        if not include_inactive:
            query = query.where(User.status == UserStatus.ACTIVE.value)
        result = await self.session.execute(query.order_by(User.name))
        return list(result.scalars().all())

    async def count_active_owners(self, tenant_id: str) -> int:
        result = await self.session.execute(
            select(func.count(User.id))
            .where(User.tenant_id == tenant_id)
            .where(User.role == Role.OWNER.value)
            .where(User.status == UserStatus.ACTIVE.value)
        )
        return result.scalar() or 0


class InviteRepository(BaseRepository[PendingInvite]):
    """Repository for pending team invitations"""

    def __init__(self, session: AsyncSession):
        super().__init__(PendingInvite, session)

    async def get_pending(self, tenant_id: str, email: str) -> Optional[PendingInvite]:
        result = await self.session.execute(
            select(PendingInvite)
            .where(PendingInvite.tenant_id == tenant_id)
            .where(func.lower(PendingInvite.email) == email.lower())
        )
        return result.scalar_one_or_none()
