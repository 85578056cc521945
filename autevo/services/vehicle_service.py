# autevo/services/vehicle_service.py
import logging
from typing import Any, Dict, Optional

from autevo.core.errors import ConflictError, PreconditionFailedError
from autevo.db.base import utcnow
from autevo.db.models.vehicle import Vehicle
from autevo.db.repositories.customer_repository import CustomerRepository
from autevo.db.repositories.vehicle_repository import VehicleRepository
from autevo.schemas.common import Pagination
from autevo.schemas.vehicle import VehicleCreate, VehicleUpdate
from autevo.services.base import TenantService

logger = logging.getLogger(__name__)


class VehicleService(TenantService):
    def __init__(self, session, ctx):
        super().__init__(session, ctx)
        self.vehicles = VehicleRepository(session)
        self.customers = CustomerRepository(session)

    async def list(
        self,
        page: int = 1,
        limit: int = 20,
        search: Optional[str] = None,
        customer_id: Optional[str] = None,
    ) -> Dict[str, Any]:
        items, total = await self.vehicles.list_vehicles(
            self.tenant_id, page, limit, search=search, customer_id=customer_id
        )
        return {"items": items, "pagination": Pagination.build(page, limit, total)}

    async def get(self, vehicle_id: str) -> Vehicle:
        return await self.vehicles.get_scoped_or_raise(self.tenant_id, vehicle_id)

    async def create(self, data: VehicleCreate) -> Vehicle:
        tenant_id = self.tenant_id
        async with self.transaction():
            # Customer of another tenant is reported exactly like a missing one
            await self.customers.get_scoped_or_raise(tenant_id, data.customer_id)
            if await self.vehicles.find_by_plate(tenant_id, data.plate):
                raise ConflictError("A vehicle with this plate already exists")
            vehicle = await self.vehicles.create({"tenant_id": tenant_id, **data.model_dump()})
        return await self.vehicles.get_scoped(tenant_id, vehicle.id, refresh=True)

    async def update(self, vehicle_id: str, data: VehicleUpdate) -> Vehicle:
        tenant_id = self.tenant_id
        async with self.transaction():
            vehicle = await self.vehicles.get_scoped_or_raise(tenant_id, vehicle_id)
            changes = data.model_dump(exclude_unset=True)
            if "plate" in changes and changes["plate"] != vehicle.plate:
                if await self.vehicles.find_by_plate(tenant_id, changes["plate"], exclude_id=vehicle.id):
                    raise ConflictError("A vehicle with this plate already exists")
            await self.vehicles.update(vehicle, changes)
        return vehicle

    async def delete(self, vehicle_id: str) -> None:
        tenant_id = self.tenant_id
        async with self.transaction():
            vehicle = await self.vehicles.get_scoped_or_raise(tenant_id, vehicle_id)
            if await self.vehicles.count_orders(tenant_id, vehicle.id) > 0:
                raise PreconditionFailedError("Cannot delete a vehicle with service orders")
            await self.vehicles.update(vehicle, {"deleted_at": utcnow()})
        logger.info(f"Vehicle deleted: {vehicle_id}", extra=self.log_extra)
