# autevo/db/models/service_order.py
from enum import Enum
from sqlalchemy import Column, String, Integer, Numeric, DateTime, ForeignKey, Text
from sqlalchemy.orm import relationship
from autevo.core.order_workflow import OrderStatus
from autevo.db.base import Base, BaseModel, TenantScopedMixin, new_id, utcnow


class DiscountType(str, Enum):
    PERCENTAGE = "percentage"
    FIXED = "fixed"


class PaymentMethod(str, Enum):
    PIX = "pix"
    CREDIT_CARD = "credit_card"
    DEBIT_CARD = "debit_card"
    CASH = "cash"
    TRANSFER = "transfer"


class ServiceOrder(TenantScopedMixin, BaseModel):
    """Work order tracking one vehicle job through its lifecycle"""
    __tablename__ = "service_orders"

    tenant_id = Column(String(36), ForeignKey("tenants.id"), nullable=False, index=True)
    code = Column(String(20), nullable=False, index=True)
    status = Column(String(30), default=OrderStatus.SCHEDULED.value, nullable=False, index=True)

    scheduled_at = Column(DateTime(timezone=True), nullable=False, index=True)
    started_at = Column(DateTime(timezone=True), nullable=True)
    completed_at = Column(DateTime(timezone=True), nullable=True)

    vehicle_id = Column(String(36), ForeignKey("vehicles.id"), nullable=False, index=True)
    assigned_to_id = Column(String(36), ForeignKey("users.id"), nullable=False)
    created_by_id = Column(String(36), ForeignKey("users.id"), nullable=True)

    subtotal = Column(Numeric(12, 2, asdecimal=False), default=0, nullable=False)
    discount_type = Column(String(20), nullable=True)
    discount_value = Column(Numeric(12, 2, asdecimal=False), nullable=True)
    total = Column(Numeric(12, 2, asdecimal=False), default=0, nullable=False)

    vehicle = relationship("Vehicle", lazy="selectin")
    items = relationship("OrderItem", lazy="selectin", cascade="all, delete-orphan")
    payments = relationship(
        "Payment", lazy="selectin", cascade="all, delete-orphan", order_by="Payment.paid_at.desc()"
    )


class OrderItem(Base):
    __tablename__ = "order_items"

    id = Column(String(36), primary_key=True, default=new_id)
    order_id = Column(String(36), ForeignKey("service_orders.id", ondelete="CASCADE"), nullable=False, index=True)
    service_id = Column(String(36), ForeignKey("services.id"), nullable=True, index=True)
    custom_name = Column(String(255), nullable=True)
    price = Column(Numeric(12, 2, asdecimal=False), nullable=False)
    quantity = Column(Integer, default=1, nullable=False)
    notes = Column(Text, nullable=True)


class Payment(Base):
    __tablename__ = "payments"

    id = Column(String(36), primary_key=True, default=new_id)
    order_id = Column(String(36), ForeignKey("service_orders.id", ondelete="CASCADE"), nullable=False, index=True)
    method = Column(String(20), nullable=False)
    amount = Column(Numeric(12, 2, asdecimal=False), nullable=False)
    received_by_id = Column(String(36), ForeignKey("users.id"), nullable=True)
    notes = Column(Text, nullable=True)
    paid_at = Column(DateTime(timezone=True), default=utcnow, nullable=False)
