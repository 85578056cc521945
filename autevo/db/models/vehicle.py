# autevo/db/models/vehicle.py
from sqlalchemy import Column, String, Integer, DateTime, ForeignKey, UniqueConstraint
from sqlalchemy.orm import relationship
from autevo.db.base import BaseModel, TenantScopedMixin


class Vehicle(TenantScopedMixin, BaseModel):
    """Customer vehicle; plates are unique within a tenant"""
    __tablename__ = "vehicles"
    __table_args__ = (UniqueConstraint("tenant_id", "plate", name="uq_vehicles_tenant_plate"),)

    tenant_id = Column(String(36), ForeignKey("tenants.id"), nullable=False, index=True)
    customer_id = Column(String(36), ForeignKey("customers.id"), nullable=False, index=True)
    plate = Column(String(10), nullable=False)
    brand = Column(String(100), nullable=False)
    model = Column(String(100), nullable=False)
    color = Column(String(50), nullable=False)
    year = Column(Integer, nullable=True)
    deleted_at = Column(DateTime(timezone=True), nullable=True)

    customer = relationship("Customer", lazy="selectin")
