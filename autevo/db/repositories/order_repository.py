# autevo/db/repositories/order_repository.py
from datetime import datetime
from typing import List, Optional, Sequence, Tuple
from sqlalchemy import or_, select
from sqlalchemy.ext.asyncio import AsyncSession

from autevo.core.order_workflow import OrderStatus
from autevo.db.models.customer import Customer
from autevo.db.models.service_order import ServiceOrder
from autevo.db.models.vehicle import Vehicle
from autevo.db.repositories.base import TenantScopedRepository


class OrderRepository(TenantScopedRepository[ServiceOrder]):
    """Repository for work orders"""

    not_found_message = "Service order not found"

    def __init__(self, session: AsyncSession):
        super().__init__(ServiceOrder, session)

    async def list_orders(
        self,
        tenant_id: str,
        page: int,
        limit: int,
        search: Optional[str] = None,
        statuses: Optional[Sequence[str]] = None,
        assigned_to_id: Optional[str] = None,
        date_from: Optional[datetime] = None,
        date_to: Optional[datetime] = None,
    ) -> Tuple[List[ServiceOrder], int]:
        query = self.scoped(tenant_id)
        if statuses:
            query = query.where(ServiceOrder.status.in_([OrderStatus(s).value for s in statuses]))
        if assigned_to_id:
            query = query.where(ServiceOrder.assigned_to_id == assigned_to_id)
        if date_from and date_to:
            query = query.where(ServiceOrder.scheduled_at.between(date_from, date_to))
        if search:
            pattern = f"%{search}%"
            matching_vehicles = (
                select(Vehicle.id)
                .outerjoin(Customer, Customer.id == Vehicle.customer_id)
                .where(Vehicle.tenant_id == tenant_id)
                .where(or_(Vehicle.plate.ilike(pattern), Customer.name.ilike(pattern)))
            )
            query = query.where(or_(
                ServiceOrder.code.ilike(pattern),
                ServiceOrder.vehicle_id.in_(matching_vehicles),
            ))
        query = query.order_by(ServiceOrder.scheduled_at.desc())
        return await self.paginate(query, page, limit)
