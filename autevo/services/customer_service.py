# autevo/services/customer_service.py
import logging
from typing import Any, Dict, List, Optional

from autevo.core.errors import ConflictError, PreconditionFailedError
from autevo.db.models.customer import Customer
from autevo.db.models.vehicle import Vehicle
from autevo.db.repositories.customer_repository import CustomerRepository
from autevo.db.repositories.vehicle_repository import VehicleRepository
from autevo.schemas.common import Pagination
from autevo.schemas.customer import CustomerCreate, CustomerUpdate
from autevo.services.base import TenantService

logger = logging.getLogger(__name__)


class CustomerService(TenantService):
    def __init__(self, session, ctx):
        super().__init__(session, ctx)
        self.customers = CustomerRepository(session)
        self.vehicles = VehicleRepository(session)

    async def list(
        self,
        page: int = 1,
        limit: int = 20,
        search: Optional[str] = None,
        sort_by: str = "name",
        sort_order: str = "asc",
    ) -> Dict[str, Any]:
        items, total = await self.customers.list_customers(
            self.tenant_id, page, limit, search=search, sort_by=sort_by, sort_order=sort_order
        )
        return {"items": items, "pagination": Pagination.build(page, limit, total)}

    async def list_all(self, search: Optional[str] = None) -> List[Customer]:
        return await self.customers.list_all(self.tenant_id, search)

    async def get(self, customer_id: str) -> Dict[str, Any]:
        customer = await self.customers.get_scoped_or_raise(self.tenant_id, customer_id)
        total_spent = await self.customers.total_spent(self.tenant_id, customer.id)
        return {**_as_dict(customer), "vehicles": customer.vehicles, "total_spent": total_spent}

    async def search(self, term: str) -> List[Customer]:
        if len(term.strip()) < 2:
            return []
        return await self.customers.quick_search(self.tenant_id, term.strip())

    async def create(self, data: CustomerCreate) -> Customer:
        tenant_id = self.tenant_id
        async with self.transaction():
            if await self.customers.find_by_phone(tenant_id, data.phone):
                raise ConflictError("A customer with this phone already exists")

            customer = await self.customers.create({
                "tenant_id": tenant_id,
                **data.model_dump(exclude={"vehicle"}),
            })

            if data.vehicle is not None:
                if await self.vehicles.find_by_plate(tenant_id, data.vehicle.plate):
                    raise ConflictError("A vehicle with this plate already exists")
                await self.vehicles.add(Vehicle(
                    tenant_id=tenant_id,
                    customer_id=customer.id,
                    **data.vehicle.model_dump(),
                ))

        logger.info(f"Customer created: {customer.id}", extra=self.log_extra)
        return await self.customers.get_scoped(tenant_id, customer.id, refresh=True)

    async def update(self, customer_id: str, data: CustomerUpdate) -> Customer:
        tenant_id = self.tenant_id
        async with self.transaction():
            customer = await self.customers.get_scoped_or_raise(tenant_id, customer_id)
            changes = data.model_dump(exclude_unset=True)
            if "phone" in changes and changes["phone"] != customer.phone:
                if await self.customers.find_by_phone(tenant_id, changes["phone"], exclude_id=customer.id):
                    raise ConflictError("A customer with this phone already exists")
            await self.customers.update(customer, changes)
        return customer

    async def delete(self, customer_id: str) -> None:
        tenant_id = self.tenant_id
        async with self.transaction():
            customer = await self.customers.get_scoped_or_raise(tenant_id, customer_id)
            if await self.customers.count_orders(tenant_id, customer.id) > 0:
                raise PreconditionFailedError("Cannot delete a customer with service orders")
            await self.customers.soft_delete(customer)
        logger.info(f"Customer deleted: {customer_id}", extra=self.log_extra)


def _as_dict(customer: Customer) -> Dict[str, Any]:
    return {column.name: getattr(customer, column.name) for column in Customer.__table__.columns}
