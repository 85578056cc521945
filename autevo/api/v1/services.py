# autevo/api/v1/services.py
from fastapi import APIRouter, Depends, Query, status
from sqlalchemy.ext.asyncio import AsyncSession
from typing import List, Optional

from autevo.api.dependencies import require_operation
from autevo.core.tenant import RequestContext
from autevo.db.database import get_db
from autevo.schemas.service import Service, ServiceCreate, ServiceList, ServiceUpdate
from autevo.services.catalog_service import CatalogService

router = APIRouter()


@router.get("", response_model=ServiceList)
async def list_services(
    page: int = Query(1, ge=1),
    limit: int = Query(20, ge=1, le=100),
    search: Optional[str] = None,
    is_active: Optional[bool] = None,
    ctx: RequestContext = Depends(require_operation("service.list")),
    db: AsyncSession = Depends(get_db)
):
    return await CatalogService(db, ctx).list(page, limit, search, is_active)


@router.get("/active", response_model=List[Service])
async def list_active_services(
    ctx: RequestContext = Depends(require_operation("service.list_active")),
    db: AsyncSession = Depends(get_db)
):
    """Services that can be added to a new order"""
    return await CatalogService(db, ctx).list_active()


@router.post("", response_model=Service, status_code=status.HTTP_201_CREATED)
async def create_service(
    data: ServiceCreate,
    ctx: RequestContext = Depends(require_operation("service.create")),
    db: AsyncSession = Depends(get_db)
):
    return await CatalogService(db, ctx).create(data)


@router.get("/{service_id}", response_model=Service)
async def get_service(
    service_id: str,
    ctx: RequestContext = Depends(require_operation("service.get")),
    db: AsyncSession = Depends(get_db)
):
    return await CatalogService(db, ctx).get(service_id)


@router.put("/{service_id}", response_model=Service)
async def update_service(
    service_id: str,
    data: ServiceUpdate,
    ctx: RequestContext = Depends(require_operation("service.update")),
    db: AsyncSession = Depends(get_db)
):
    return await CatalogService(db, ctx).update(service_id, data)


@router.post("/{service_id}/toggle", response_model=Service)
async def toggle_service(
    service_id: str,
    ctx: RequestContext = Depends(require_operation("service.toggle_active")),
    db: AsyncSession = Depends(get_db)
):
    return await CatalogService(db, ctx).toggle_active(service_id)


@router.delete("/{service_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_service(
    service_id: str,
    ctx: RequestContext = Depends(require_operation("service.delete")),
    db: AsyncSession = Depends(get_db)
):
    await CatalogService(db, ctx).delete(service_id)
