# autevo/db/repositories/customer_repository.py
from typing import List, Optional, Tuple
from sqlalchemy import select, func, or_, update
from sqlalchemy.ext.asyncio import AsyncSession

from autevo.core.order_workflow import OrderStatus
from autevo.db.base import utcnow
from autevo.db.models.customer import Customer
from autevo.db.models.service_order import ServiceOrder
from autevo.db.models.vehicle import Vehicle
from autevo.db.repositories.base import TenantScopedRepository

SORTABLE_FIELDS = {"name": Customer.name, "created_at": Customer.created_at, "phone": Customer.phone}


class CustomerRepository(TenantScopedRepository[Customer]):
    """Repository for Customer operations"""

    not_found_message = "Customer not found"

    def __init__(self, session: AsyncSession):
        super().__init__(Customer, session)

    def _search(self, query, search: Optional[str]):
        if search:
            pattern = f"%{search}%"
            query = query.where(or_(
                Customer.name.ilike(pattern),
                Customer.phone.contains(search),
                Customer.email.ilike(pattern),
            ))
        return query

    async def list_customers(
        self,
        tenant_id: str,
        page: int,
        limit: int,
        search: Optional[str] = None,
        sort_by: str = "name",
        sort_order: str = "asc",
    ) -> Tuple[List[Customer], int]:
        column = SORTABLE_FIELDS[sort_by]
        query = self._search(self.scoped(tenant_id), search)
        query = query.order_by(column.desc() if sort_order == "desc" else column.asc())
        return await self.paginate(query, page, limit)

    async def list_all(self, tenant_id: str, search: Optional[str] = None) -> List[Customer]:
        query = self._search(self.scoped(tenant_id), search).order_by(Customer.name)
        result = await self.session.execute(query)
        return list(result.scalars().all())

    async def quick_search(self, tenant_id: str, term: str, limit: int = 10) -> List[Customer]:
        pattern = f"%{term}%"
        query = (
            self.scoped(tenant_id)
            .where(or_(Customer.name.ilike(pattern), Customer.phone.contains(term)))
            .order_by(Customer.name)
            .limit(limit)
        )
        result = await self.session.execute(query)
        return list(result.scalars().all())

    async def find_by_phone(self, tenant_id: str, phone: str, exclude_id: Optional[str] = None) -> Optional[Customer]:
        query = self.scoped(tenant_id).where(Customer.phone == phone)
        if exclude_id:
            query = query.where(Customer.id != exclude_id)
        result = await self.session.execute(query.limit(1))
        return result.scalar_one_or_none()

    async def count_orders(self, tenant_id: str, customer_id: str) -> int:
        result = await self.session.execute(
            select(func.count(ServiceOrder.id))
            .join(Vehicle, Vehicle.id == ServiceOrder.vehicle_id)
            .where(ServiceOrder.tenant_id == tenant_id)
            .where(Vehicle.customer_id == customer_id)
        )
        return result.scalar() or 0

    async def total_spent(self, tenant_id: str, customer_id: str) -> float:
        """Sum of non-canceled order totals across every vehicle the customer owned"""
        result = await self.session.execute(
            select(func.coalesce(func.sum(ServiceOrder.total), 0))
            .join(Vehicle, Vehicle.id == ServiceOrder.vehicle_id)
            .where(ServiceOrder.tenant_id == tenant_id)
            .where(Vehicle.customer_id == customer_id)
            .where(ServiceOrder.status != OrderStatus.CANCELED.value)
        )
        return float(result.scalar() or 0)

    async def soft_delete(self, customer: Customer) -> None:
        """Soft delete the customer together with its vehicles"""
        now = utcnow()
        await self.session.execute(
            update(Vehicle)
            .where(Vehicle.tenant_id == customer.tenant_id)
            .where(Vehicle.customer_id == customer.id)
            .values(deleted_at=now)
        )
        customer.deleted_at = now
        await self.session.flush()
