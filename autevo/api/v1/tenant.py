# autevo/api/v1/tenant.py
from fastapi import APIRouter, Depends
from sqlalchemy.ext.asyncio import AsyncSession

from autevo.api.dependencies import require_operation
from autevo.core.tenant import RequestContext
from autevo.db.database import get_db
from autevo.schemas.tenant import Tenant, TenantSetupUpdate
from autevo.services.tenant_service import TenantProfileService

router = APIRouter()


@router.get("", response_model=Tenant)
async def get_tenant(
    ctx: RequestContext = Depends(require_operation("tenant.get")),
    db: AsyncSession = Depends(get_db)
):
    """Get current tenant information"""
    return await TenantProfileService(db, ctx).get()


@router.put("/setup", response_model=Tenant)
async def update_setup(
    data: TenantSetupUpdate,
    ctx: RequestContext = Depends(require_operation("tenant.update_setup")),
    db: AsyncSession = Depends(get_db)
):
    return await TenantProfileService(db, ctx).update_setup(data)
