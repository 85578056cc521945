"""
Team management and tenant setup
"""
import pytest
from dataclasses import replace
from sqlalchemy import select

from autevo.core.errors import BadRequestError, ConflictError, InvariantViolationError, NotFoundError
from autevo.core.rbac import Role
from autevo.db.models.audit_log import AuditLog
from autevo.db.models.tenant import Tenant
from autevo.db.models.user import User, UserStatus
from autevo.db.repositories.tenant_repository import TenantRepository
from autevo.schemas.tenant import TenantSetupUpdate
from autevo.schemas.user import InviteCreate
from autevo.services.audit_service import AuditService
from autevo.services.team_service import TeamService
from autevo.services.tenant_service import TenantProfileService

from factories import make_user


async def role_of(session, user_id):
    return (await session.execute(select(User.role).where(User.id == user_id))).scalar_one()


@pytest.mark.asyncio
class TestTeamService:

    async def test_list_hides_inactive_by_default(self, db_session, owner_ctx, member_a, tenant_a):
        await make_user(db_session, "gone@brilho.com", Role.MEMBER, tenant_a, status=UserStatus.INACTIVE)
        team = TeamService(db_session, owner_ctx)

        assert len(await team.list()) == 2
        assert len(await team.list(include_inactive=True)) == 3

    async def test_invite(self, db_session, owner_ctx):
        invite = await TeamService(db_session, owner_ctx).invite(
            InviteCreate(email="New.Hire@Brilho.com", role="manager")
        )

        assert invite.email == "new.hire@brilho.com"
        assert invite.role == "manager"
        assert invite.invited_by_id == owner_ctx.user_id

    async def test_invite_existing_member_conflicts(self, db_session, owner_ctx, member_a):
        with pytest.raises(ConflictError):
            await TeamService(db_session, owner_ctx).invite(InviteCreate(email="member@brilho.com"))

    async def test_duplicate_pending_invite_conflicts(self, db_session, owner_ctx):
        team = TeamService(db_session, owner_ctx)
        await team.invite(InviteCreate(email="new@brilho.com"))

        with pytest.raises(ConflictError):
            await team.invite(InviteCreate(email="NEW@brilho.com"))

    async def test_cannot_invite_platform_admin(self, db_session, owner_ctx):
        with pytest.raises(BadRequestError, match="Invalid role"):
            await TeamService(db_session, owner_ctx).invite(
                InviteCreate(email="x@brilho.com", role=Role.PLATFORM_ADMIN)
            )

    async def test_owner_cannot_change_own_role(self, db_session, owner_ctx):
        with pytest.raises(InvariantViolationError, match="own role"):
            await TeamService(db_session, owner_ctx).update_role(owner_ctx.user_id, "member")

    async def test_self_deactivation_checked_before_last_owner(self, db_session, owner_ctx):
        with pytest.raises(InvariantViolationError, match="You cannot deactivate yourself"):
            await TeamService(db_session, owner_ctx).deactivate(owner_ctx.user_id)

    async def test_demote_one_of_two_owners_then_last_owner_is_protected(self, db_session, owner_ctx, tenant_a):
        second = await make_user(db_session, "second@brilho.com", Role.OWNER, tenant_a)
        second_id = second.id

        await TeamService(db_session, owner_ctx).update_role(second_id, "member")
        assert await role_of(db_session, second_id) == "member"

        # Only the original owner is left
        second_ctx = replace(owner_ctx, user_id=second_id)
        with pytest.raises(InvariantViolationError, match="last owner"):
            await TeamService(db_session, second_ctx).update_role(owner_ctx.user_id, "manager")

        assert await role_of(db_session, owner_ctx.user_id) == "owner"

    async def test_last_owner_cannot_be_deactivated(self, db_session, owner_ctx, manager_a):
        manager_ctx = replace(owner_ctx, user_id=manager_a.id)

        with pytest.raises(InvariantViolationError, match="Cannot deactivate the last owner"):
            await TeamService(db_session, manager_ctx).deactivate(owner_ctx.user_id)

    async def test_deactivate_and_reactivate_are_audited(self, db_session, owner_ctx, member_a):
        member_id = member_a.id
        team = TeamService(db_session, owner_ctx)

        user = await team.deactivate(member_id)
        assert user.status == "inactive"
        user = await team.reactivate(member_id)
        assert user.status == "active"

        entries = await AuditService(db_session, owner_ctx).list()
        assert {e.action for e in entries} == {"user.deactivate", "user.reactivate"}
        assert all(e.entity_id == member_id for e in entries)

    async def test_user_of_other_tenant_is_not_found(self, db_session, owner_ctx, owner_b):
        with pytest.raises(NotFoundError, match="User not found"):
            await TeamService(db_session, owner_ctx).update_role(owner_b.id, "member")

    async def test_invalid_role_value(self, db_session, owner_ctx, member_a):
        with pytest.raises(BadRequestError, match="Invalid role"):
            await TeamService(db_session, owner_ctx).update_role(member_a.id, "admin_saas")


@pytest.mark.asyncio
class TestTenantSetup:

    def setup_data(self, **overrides):
        data = {
            "job_title": "Proprietario",
            "tenant_name": "Brilho Auto Premium",
            "primary_color": "#1A2B3C",
            "email": "",
            "phone": "1133334444",
            "address": "Rua A, 100",
        }
        data.update(overrides)
        return TenantSetupUpdate(**data)

    async def test_updates_user_and_tenant_together(self, db_session, owner_ctx):
        tenant = await TenantProfileService(db_session, owner_ctx).update_setup(self.setup_data())

        assert tenant.name == "Brilho Auto Premium"
        assert tenant.primary_color == "#1A2B3C"
        assert tenant.email is None
        job_title = (await db_session.execute(
            select(User.job_title).where(User.id == owner_ctx.user_id)
        )).scalar_one()
        assert job_title == "Proprietario"

        action = (await db_session.execute(
            select(AuditLog.action).where(AuditLog.entity_id == owner_ctx.tenant_id)
        )).scalar_one()
        assert action == "tenant.update_setup"

    async def test_failure_rolls_back_both_writes(self, db_session, owner_ctx, monkeypatch):
        async def broken_update(self, db_obj, obj_in):
            raise RuntimeError("database unavailable")

        monkeypatch.setattr(TenantRepository, "update", broken_update)

        with pytest.raises(RuntimeError):
            await TenantProfileService(db_session, owner_ctx).update_setup(self.setup_data())

        job_title = (await db_session.execute(
            select(User.job_title).where(User.id == owner_ctx.user_id)
        )).scalar_one()
        name = (await db_session.execute(
            select(Tenant.name).where(Tenant.id == owner_ctx.tenant_id)
        )).scalar_one()
        assert job_title is None
        assert name == "Brilho Auto"

    async def test_rejects_bad_color(self):
        with pytest.raises(ValueError):
            self.setup_data(primary_color="blue")
