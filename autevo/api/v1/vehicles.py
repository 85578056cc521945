# autevo/api/v1/vehicles.py
from fastapi import APIRouter, Depends, Query, status
from sqlalchemy.ext.asyncio import AsyncSession
from typing import Optional

from autevo.api.dependencies import require_operation
from autevo.core.tenant import RequestContext
from autevo.db.database import get_db
from autevo.schemas.vehicle import Vehicle, VehicleCreate, VehicleList, VehicleUpdate
from autevo.services.vehicle_service import VehicleService

router = APIRouter()


@router.get("", response_model=VehicleList)
async def list_vehicles(
    page: int = Query(1, ge=1),
    limit: int = Query(20, ge=1, le=100),
    search: Optional[str] = None,
    customer_id: Optional[str] = None,
    ctx: RequestContext = Depends(require_operation("vehicle.list")),
    db: AsyncSession = Depends(get_db)
):
    return await VehicleService(db, ctx).list(page, limit, search, customer_id)


@router.post("", response_model=Vehicle, status_code=status.HTTP_201_CREATED)
async def create_vehicle(
    data: VehicleCreate,
    ctx: RequestContext = Depends(require_operation("vehicle.create")),
    db: AsyncSession = Depends(get_db)
):
    return await VehicleService(db, ctx).create(data)


@router.get("/{vehicle_id}", response_model=Vehicle)
async def get_vehicle(
    vehicle_id: str,
    ctx: RequestContext = Depends(require_operation("vehicle.get")),
    db: AsyncSession = Depends(get_db)
):
    return await VehicleService(db, ctx).get(vehicle_id)


@router.put("/{vehicle_id}", response_model=Vehicle)
async def update_vehicle(
    vehicle_id: str,
    data: VehicleUpdate,
    ctx: RequestContext = Depends(require_operation("vehicle.update")),
    db: AsyncSession = Depends(get_db)
):
    return await VehicleService(db, ctx).update(vehicle_id, data)


@router.delete("/{vehicle_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_vehicle(
    vehicle_id: str,
    ctx: RequestContext = Depends(require_operation("vehicle.delete")),
    db: AsyncSession = Depends(get_db)
):
    await VehicleService(db, ctx).delete(vehicle_id)
