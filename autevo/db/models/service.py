# autevo/db/models/service.py
from sqlalchemy import Column, String, Integer, Numeric, Boolean, ForeignKey, Text
from autevo.db.base import BaseModel, TenantScopedMixin


class Service(TenantScopedMixin, BaseModel):
    """Catalog entry a shop sells (wash, polish, coating, ...)"""
    __tablename__ = "services"

    tenant_id = Column(String(36), ForeignKey("tenants.id"), nullable=False, index=True)
    name = Column(String(255), nullable=False, index=True)
    description = Column(Text, nullable=True)
    base_price = Column(Numeric(12, 2, asdecimal=False), nullable=False)
    estimated_time = Column(Integer, nullable=True)  # minutes
    return_days = Column(Integer, nullable=True)
    is_active = Column(Boolean, default=True, nullable=False)
