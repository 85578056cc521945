# autevo/db/repositories/vehicle_repository.py
from typing import List, Optional, Tuple
from sqlalchemy import select, func, or_
from sqlalchemy.ext.asyncio import AsyncSession

from autevo.db.models.service_order import ServiceOrder
from autevo.db.models.vehicle import Vehicle
from autevo.db.repositories.base import TenantScopedRepository


class VehicleRepository(TenantScopedRepository[Vehicle]):
    """Repository for Vehicle operations"""

    not_found_message = "Vehicle not found"

    def __init__(self, session: AsyncSession):
        super().__init__(Vehicle, session)

    async def list_vehicles(
        self,
        tenant_id: str,
        page: int,
        limit: int,
        search: Optional[str] = None,
        customer_id: Optional[str] = None,
    ) -> Tuple[List[Vehicle], int]:
        query = self.scoped(tenant_id)
        if customer_id:
            query = query.where(Vehicle.customer_id == customer_id)
        if search:
            pattern = f"%{search}%"
            query = query.where(or_(
                Vehicle.plate.ilike(pattern),
                Vehicle.brand.ilike(pattern),
                Vehicle.model.ilike(pattern),
            ))
        query = query.order_by(Vehicle.created_at.desc())
        return await self.paginate(query, page, limit)

    async def find_by_plate(self, tenant_id: str, plate: str, exclude_id: Optional[str] = None) -> Optional[Vehicle]:
        # Soft-deleted vehicles still hold their plate under the unique constraint
        query = self.scoped(tenant_id, include_deleted=True).where(Vehicle.plate == plate)
        if exclude_id:
            query = query.where(Vehicle.id != exclude_id)
        result = await self.session.execute(query.limit(1))
        return result.scalar_one_or_none()

    async def count_orders(self, tenant_id: str, vehicle_id: str) -> int:
        result = await self.session.execute(
            select(func.count(ServiceOrder.id))
            .where(ServiceOrder.tenant_id == tenant_id)
            .where(ServiceOrder.vehicle_id == vehicle_id)
        )
        return result.scalar() or 0
