# autevo/schemas/order.py
from pydantic import BaseModel, ConfigDict, Field, field_validator
from typing import List, Optional
from datetime import datetime

from autevo.core.input_validation import SecureString
from autevo.core.order_workflow import OrderStatus
from autevo.db.models.service_order import DiscountType, PaymentMethod
from autevo.schemas.common import Pagination, reject_null
from autevo.schemas.vehicle import Vehicle


class OrderItemCreate(BaseModel):
    service_id: Optional[str] = None
    custom_name: Optional[SecureString] = None
    price: float = Field(ge=0)
    quantity: int = Field(default=1, ge=1)
    notes: Optional[SecureString] = None


class OrderCreate(BaseModel):
    vehicle_id: str
    scheduled_at: datetime
    assigned_to_id: str
    items: List[OrderItemCreate] = Field(min_length=1)
    discount_type: Optional[DiscountType] = None
    discount_value: Optional[float] = Field(default=None, ge=0)


class OrderUpdate(BaseModel):
    scheduled_at: Optional[datetime] = None
    assigned_to_id: Optional[str] = None
    discount_type: Optional[DiscountType] = None
    discount_value: Optional[float] = Field(default=None, ge=0)

    @field_validator("scheduled_at", "assigned_to_id", mode="before")
    @classmethod
    def not_null(cls, v):
        return reject_null(v)


class OrderStatusUpdate(BaseModel):
    status: OrderStatus


class PaymentCreate(BaseModel):
    method: PaymentMethod
    amount: float = Field(ge=0.01)
    notes: Optional[SecureString] = None


class OrderItem(BaseModel):
    id: str
    service_id: Optional[str] = None
    custom_name: Optional[str] = None
    price: float
    quantity: int
    notes: Optional[str] = None

    model_config = ConfigDict(from_attributes=True)


class Payment(BaseModel):
    id: str
    order_id: str
    method: str
    amount: float
    received_by_id: Optional[str] = None
    notes: Optional[str] = None
    paid_at: datetime

    model_config = ConfigDict(from_attributes=True)


class Order(BaseModel):
    id: str
    code: str
    status: OrderStatus
    scheduled_at: datetime
    started_at: Optional[datetime] = None
    completed_at: Optional[datetime] = None
    vehicle_id: str
    assigned_to_id: str
    created_by_id: Optional[str] = None
    subtotal: float
    discount_type: Optional[str] = None
    discount_value: Optional[float] = None
    total: float
    created_at: datetime

    model_config = ConfigDict(from_attributes=True)


class OrderDetail(Order):
    vehicle: Optional[Vehicle] = None
    items: List[OrderItem] = []
    payments: List[Payment] = []
    paid_amount: float = 0
    balance: float = 0


class OrderList(BaseModel):
    items: List[Order]
    pagination: Pagination
