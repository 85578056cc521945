# autevo/api/v1/admin.py
from fastapi import APIRouter, Depends, Query
from sqlalchemy.ext.asyncio import AsyncSession
from typing import Optional

from autevo.api.dependencies import require_operation
from autevo.core.tenant import RequestContext, TenantStatus
from autevo.db.database import get_db
from autevo.schemas.admin import (
    ActivateTrialRequest,
    DashboardStats,
    ExtendTrialRequest,
    ReactivateTenantRequest,
    SuspendTenantRequest,
    TenantAdminDetail,
    TenantList,
)
from autevo.schemas.tenant import Tenant
from autevo.services.admin_service import AdminService

router = APIRouter()


@router.get("/stats", response_model=DashboardStats)
async def dashboard_stats(
    ctx: RequestContext = Depends(require_operation("admin.dashboard_stats")),
    db: AsyncSession = Depends(get_db)
):
    return await AdminService(db, ctx).dashboard_stats()


@router.get("/tenants", response_model=TenantList)
async def list_tenants(
    page: int = Query(1, ge=1),
    limit: int = Query(20, ge=1, le=100),
    status: Optional[TenantStatus] = None,
    search: Optional[str] = None,
    ctx: RequestContext = Depends(require_operation("admin.list_tenants")),
    db: AsyncSession = Depends(get_db)
):
    return await AdminService(db, ctx).list_tenants(page, limit, status, search)


@router.get("/tenants/{tenant_id}", response_model=TenantAdminDetail)
async def get_tenant(
    tenant_id: str,
    ctx: RequestContext = Depends(require_operation("admin.get_tenant")),
    db: AsyncSession = Depends(get_db)
):
    return await AdminService(db, ctx).get_tenant(tenant_id)


@router.post("/tenants/{tenant_id}/activate-trial", response_model=Tenant)
async def activate_trial(
    tenant_id: str,
    data: Optional[ActivateTrialRequest] = None,
    ctx: RequestContext = Depends(require_operation("admin.activate_trial")),
    db: AsyncSession = Depends(get_db)
):
    days = data.days if data else None
    return await AdminService(db, ctx).activate_trial(tenant_id, days)


@router.post("/tenants/{tenant_id}/extend-trial", response_model=Tenant)
async def extend_trial(
    tenant_id: str,
    data: ExtendTrialRequest,
    ctx: RequestContext = Depends(require_operation("admin.extend_trial")),
    db: AsyncSession = Depends(get_db)
):
    return await AdminService(db, ctx).extend_trial(tenant_id, data.days)


@router.post("/tenants/{tenant_id}/suspend", response_model=Tenant)
async def suspend_tenant(
    tenant_id: str,
    data: SuspendTenantRequest,
    ctx: RequestContext = Depends(require_operation("admin.suspend_tenant")),
    db: AsyncSession = Depends(get_db)
):
    return await AdminService(db, ctx).suspend_tenant(tenant_id, data.reason)


@router.post("/tenants/{tenant_id}/reactivate", response_model=Tenant)
async def reactivate_tenant(
    tenant_id: str,
    data: Optional[ReactivateTenantRequest] = None,
    ctx: RequestContext = Depends(require_operation("admin.reactivate_tenant")),
    db: AsyncSession = Depends(get_db)
):
    as_trial = data.as_trial if data else False
    return await AdminService(db, ctx).reactivate_tenant(tenant_id, as_trial)
