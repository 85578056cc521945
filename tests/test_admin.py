"""
Platform administration of tenant accounts
"""
import pytest
from datetime import timedelta
from sqlalchemy import select

from autevo.core.config import settings
from autevo.core.errors import BadRequestError, NotFoundError
from autevo.core.rbac import Role
from autevo.core.tenant import TenantStatus
from autevo.db.models.audit_log import AuditLog
from autevo.services.admin_service import AdminService

from factories import make_tenant, make_user


def naive(value):
    return value.replace(tzinfo=None) if value.tzinfo else value


@pytest.mark.asyncio
class TestTenantLifecycle:

    @pytest.fixture
    async def pending(self, db_session):
        return await make_tenant(db_session, "Lava Rapido Sul", "lava-rapido-sul", TenantStatus.PENDING_ACTIVATION)

    async def test_activate_trial(self, db_session, admin_ctx, pending):
        tenant = await AdminService(db_session, admin_ctx).activate_trial(pending.id)

        assert tenant.status == "trial"
        assert tenant.trial_ends_at - tenant.trial_started_at == timedelta(days=settings.TRIAL_DAYS)

    async def test_activate_trial_with_custom_days(self, db_session, admin_ctx, pending):
        tenant = await AdminService(db_session, admin_ctx).activate_trial(pending.id, days=14)

        assert tenant.trial_ends_at - tenant.trial_started_at == timedelta(days=14)

    async def test_activate_trial_only_from_pending(self, db_session, admin_ctx, tenant_a):
        with pytest.raises(BadRequestError):
            await AdminService(db_session, admin_ctx).activate_trial(tenant_a.id)

    async def test_extend_trial(self, db_session, admin_ctx, pending):
        admin = AdminService(db_session, admin_ctx)
        tenant = await admin.activate_trial(pending.id, days=10)
        ends_at = naive(tenant.trial_ends_at)

        tenant = await admin.extend_trial(pending.id, days=5)
        assert naive(tenant.trial_ends_at) - ends_at == timedelta(days=5)

    async def test_extend_trial_only_in_trial(self, db_session, admin_ctx, tenant_a):
        with pytest.raises(BadRequestError):
            await AdminService(db_session, admin_ctx).extend_trial(tenant_a.id, days=5)

    async def test_suspend_and_reactivate(self, db_session, admin_ctx, tenant_a):
        admin = AdminService(db_session, admin_ctx)
        tenant_id = tenant_a.id

        tenant = await admin.suspend_tenant(tenant_id, "Chargeback")
        assert tenant.status == "suspended"
        assert tenant.suspend_reason == "Chargeback"
        assert tenant.suspended_at is not None

        with pytest.raises(BadRequestError, match="already suspended"):
            await admin.suspend_tenant(tenant_id, "Again")

        tenant = await admin.reactivate_tenant(tenant_id)
        assert tenant.status == "active"
        assert tenant.suspended_at is None
        assert tenant.suspend_reason is None

    async def test_reactivate_as_trial(self, db_session, admin_ctx, tenant_a):
        admin = AdminService(db_session, admin_ctx)
        await admin.suspend_tenant(tenant_a.id, "Unpaid")

        tenant = await admin.reactivate_tenant(tenant_a.id, as_trial=True)
        assert tenant.status == "trial"
        assert tenant.trial_ends_at is not None

    async def test_reactivate_only_from_suspended(self, db_session, admin_ctx, tenant_a):
        with pytest.raises(BadRequestError):
            await AdminService(db_session, admin_ctx).reactivate_tenant(tenant_a.id)

    async def test_unknown_tenant(self, db_session, admin_ctx):
        with pytest.raises(NotFoundError, match="Tenant not found"):
            await AdminService(db_session, admin_ctx).suspend_tenant("missing", "x")

    async def test_lifecycle_actions_are_audited(self, db_session, admin_ctx, pending):
        admin = AdminService(db_session, admin_ctx)
        tenant_id = pending.id
        await admin.activate_trial(tenant_id)
        await admin.suspend_tenant(tenant_id, "Fraud review")

        result = await db_session.execute(select(AuditLog).where(AuditLog.tenant_id == tenant_id))
        entries = list(result.scalars().all())
        assert {e.action for e in entries} == {"admin.activate_trial", "admin.suspend_tenant"}
        assert all(e.user_id == admin_ctx.user_id for e in entries)


@pytest.mark.asyncio
class TestAdminQueries:

    async def test_dashboard_stats(self, db_session, admin_ctx, tenant_a, tenant_b):
        await make_tenant(db_session, "Novo", "novo", TenantStatus.PENDING_ACTIVATION)
        await make_tenant(db_session, "Teste", "teste", TenantStatus.TRIAL)

        stats = await AdminService(db_session, admin_ctx).dashboard_stats()

        assert stats == {
            "total": 4,
            "pending_activation": 1,
            "trial": 1,
            "active": 2,
            "suspended": 0,
            "canceled": 0,
        }

    async def test_list_tenants_filters(self, db_session, admin_ctx, tenant_a, tenant_b):
        admin = AdminService(db_session, admin_ctx)

        page = await admin.list_tenants(search="norte")
        assert [t.slug for t in page["items"]] == ["estetica-norte"]

        page = await admin.list_tenants(status=TenantStatus.SUSPENDED)
        assert page["items"] == []
        assert page["pagination"].total == 0

    async def test_get_tenant_counts_users(self, db_session, admin_ctx, tenant_a):
        await make_user(db_session, "a@brilho.com", Role.OWNER, tenant_a)
        await make_user(db_session, "b@brilho.com", Role.MEMBER, tenant_a)

        detail = await AdminService(db_session, admin_ctx).get_tenant(tenant_a.id)
        assert detail["user_count"] == 2
        assert detail["slug"] == "brilho-auto"
