# autevo/db/models/customer.py
from sqlalchemy import Column, String, Boolean, Date, DateTime, ForeignKey, Text
from sqlalchemy.orm import relationship
from autevo.db.base import BaseModel, TenantScopedMixin


class Customer(TenantScopedMixin, BaseModel):
    """Customer of a shop"""
    __tablename__ = "customers"

    tenant_id = Column(String(36), ForeignKey("tenants.id"), nullable=False, index=True)
    name = Column(String(255), nullable=False, index=True)
    phone = Column(String(30), nullable=False, index=True)
    email = Column(String(255), nullable=True)
    document = Column(String(30), nullable=True)
    birth_date = Column(Date, nullable=True)
    notes = Column(Text, nullable=True)
    whatsapp_opt_in = Column(Boolean, default=True, nullable=False)
    deleted_at = Column(DateTime(timezone=True), nullable=True)

    vehicles = relationship(
        "Vehicle",
        lazy="selectin",
        order_by="Vehicle.created_at.desc()",
        primaryjoin="and_(Customer.id == Vehicle.customer_id, Vehicle.deleted_at.is_(None))",
        viewonly=True,
    )
