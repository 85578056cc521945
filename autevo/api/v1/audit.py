# autevo/api/v1/audit.py
from fastapi import APIRouter, Depends, Query
from sqlalchemy.ext.asyncio import AsyncSession
from typing import List

from autevo.api.dependencies import require_operation
from autevo.core.tenant import RequestContext
from autevo.db.database import get_db
from autevo.schemas.audit import AuditLogEntry
from autevo.services.audit_service import AuditService

router = APIRouter()


@router.get("", response_model=List[AuditLogEntry])
async def list_audit_log(
    limit: int = Query(50, ge=1, le=200),
    ctx: RequestContext = Depends(require_operation("audit.list")),
    db: AsyncSession = Depends(get_db)
):
    """Most recent audit entries of the current tenant"""
    return await AuditService(db, ctx).list(limit)
