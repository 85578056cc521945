# autevo/services/order_service.py
"""
Work orders: creation, totals, status workflow and payments.
"""
import logging
import random
from datetime import datetime
from typing import Any, Dict, Iterable, Optional, Sequence

from autevo.core.audit_log import AuditEventType, AuditLogger
from autevo.core.errors import BadRequestError
from autevo.core.order_workflow import OrderStatus, apply_transition
from autevo.db.base import utcnow
from autevo.db.models.service_order import DiscountType, OrderItem, Payment, ServiceOrder
from autevo.db.repositories.order_repository import OrderRepository
from autevo.db.repositories.service_repository import ServiceRepository
from autevo.db.repositories.user_repository import UserRepository
from autevo.db.repositories.vehicle_repository import VehicleRepository
from autevo.schemas.common import Pagination
from autevo.schemas.order import OrderCreate, OrderStatusUpdate, OrderUpdate, PaymentCreate
from autevo.services.base import TenantService

logger = logging.getLogger(__name__)


def calculate_totals(
    items: Iterable[Any],
    discount_type: Optional[str] = None,
    discount_value: Optional[float] = None,
) -> Dict[str, float]:
    """
    Compute subtotal and total for a set of order items.

    Items need `price` and `quantity`. A percentage discount is taken from the
    subtotal, a fixed one is subtracted as is. The total never goes below zero.
    """
    subtotal = round(sum(float(item.price) * int(item.quantity or 1) for item in items), 2)

    discount = 0.0
    if discount_type and discount_value:
        if DiscountType(discount_type) == DiscountType.PERCENTAGE:
            discount = subtotal * float(discount_value) / 100
        else:
            discount = float(discount_value)

    total = round(max(subtotal - discount, 0.0), 2)
    return {"subtotal": subtotal, "total": total}


def generate_order_code(now: Optional[datetime] = None) -> str:
    now = now or utcnow()
    return f"OS-{now.year}-{random.randint(1000, 9999)}"


def paid_amount(order: ServiceOrder) -> float:
    return round(sum(float(p.amount) for p in order.payments), 2)


class OrderService(TenantService):
    def __init__(self, session, ctx):
        super().__init__(session, ctx)
        self.orders = OrderRepository(session)
        self.vehicles = VehicleRepository(session)
        self.users = UserRepository(session)
        self.services = ServiceRepository(session)
        self.audit = AuditLogger(session)

    async def list(
        self,
        page: int = 1,
        limit: int = 20,
        search: Optional[str] = None,
        statuses: Optional[Sequence[str]] = None,
        assigned_to_id: Optional[str] = None,
        date_from: Optional[datetime] = None,
        date_to: Optional[datetime] = None,
    ) -> Dict[str, Any]:
        items, total = await self.orders.list_orders(
            self.tenant_id,
            page,
            limit,
            search=search,
            statuses=statuses,
            assigned_to_id=assigned_to_id,
            date_from=date_from,
            date_to=date_to,
        )
        return {"items": items, "pagination": Pagination.build(page, limit, total)}

    async def get(self, order_id: str) -> Dict[str, Any]:
        order = await self.orders.get_scoped_or_raise(self.tenant_id, order_id)
        return self.detail(order)

    def detail(self, order: ServiceOrder) -> Dict[str, Any]:
        paid = paid_amount(order)
        data = {column.name: getattr(order, column.name) for column in ServiceOrder.__table__.columns}
        data.update(
            vehicle=order.vehicle,
            items=order.items,
            payments=order.payments,
            paid_amount=paid,
            balance=round(float(order.total) - paid, 2),
        )
        return data

    async def create(self, data: OrderCreate) -> Dict[str, Any]:
        tenant_id = self.tenant_id
        async with self.transaction():
            vehicle = await self.vehicles.get_scoped_or_raise(tenant_id, data.vehicle_id)
            await self.users.get_scoped_or_raise(tenant_id, data.assigned_to_id)
            for item in data.items:
                if item.service_id:
                    await self.services.get_scoped_or_raise(tenant_id, item.service_id)

            totals = calculate_totals(data.items, data.discount_type, data.discount_value)
            order = ServiceOrder(
                tenant_id=tenant_id,
                code=generate_order_code(),
                status=OrderStatus.SCHEDULED.value,
                scheduled_at=data.scheduled_at,
                vehicle_id=vehicle.id,
                assigned_to_id=data.assigned_to_id,
                created_by_id=self.ctx.user_id,
                discount_type=data.discount_type.value if data.discount_type else None,
                discount_value=data.discount_value,
                items=[OrderItem(**item.model_dump()) for item in data.items],
                payments=[],
                **totals,
            )
            order.vehicle = vehicle
            await self.orders.add(order)

        logger.info(f"Service order created: {order.code}", extra=self.log_extra)
        return self.detail(order)

    async def update(self, order_id: str, data: OrderUpdate) -> Dict[str, Any]:
        tenant_id = self.tenant_id
        async with self.transaction():
            order = await self.orders.get_scoped_or_raise(tenant_id, order_id)
            changes = data.model_dump(exclude_unset=True)
            if changes.get("assigned_to_id"):
                await self.users.get_scoped_or_raise(tenant_id, changes["assigned_to_id"])
            if changes.get("discount_type") is not None:
                changes["discount_type"] = DiscountType(changes["discount_type"]).value

            discount_type = changes.get("discount_type", order.discount_type)
            discount_value = changes.get("discount_value", order.discount_value)
            changes.update(calculate_totals(order.items, discount_type, discount_value))
            await self.orders.update(order, changes)
        return self.detail(order)

    async def update_status(self, order_id: str, data: OrderStatusUpdate) -> Dict[str, Any]:
        async with self.transaction():
            order = await self.orders.get_scoped_or_raise(self.tenant_id, order_id)
            previous = order.status
            apply_transition(order, data.status)
            await self.session.flush()
            await self.audit.log_event(
                self.ctx,
                event_type=AuditEventType.ORDER_STATUS_CHANGED,
                entity_type="service_order",
                entity_id=order.id,
                old_value={"status": previous},
                new_value={"status": order.status},
            )

        logger.info(
            f"Order {order.code} status {previous} -> {order.status}",
            extra={**self.log_extra, "operation": "order.update_status"},
        )
        return self.detail(order)

    async def add_payment(self, order_id: str, data: PaymentCreate) -> Payment:
        async with self.transaction():
            order = await self.orders.get_scoped_or_raise(self.tenant_id, order_id)
            if paid_amount(order) + data.amount > float(order.total) + 0.005:
                raise BadRequestError("Payment exceeds outstanding balance")

            payment = Payment(
                order_id=order.id,
                method=data.method.value,
                amount=data.amount,
                notes=data.notes,
                received_by_id=self.ctx.user_id,
            )
            order.payments.append(payment)
            await self.session.flush()
            await self.audit.log_event(
                self.ctx,
                event_type=AuditEventType.PAYMENT_RECEIVED,
                entity_type="service_order",
                entity_id=order.id,
                new_value={"payment_id": payment.id, "amount": data.amount, "method": data.method},
            )

        logger.info(f"Payment of {data.amount} on order {order.code}", extra=self.log_extra)
        return payment
