# autevo/db/models/tenant.py
from sqlalchemy import Column, String, DateTime, Text
from autevo.core.tenant import TenantStatus
from autevo.db.base import BaseModel


class Tenant(BaseModel):
    """One shop account; the unit of data isolation"""
    __tablename__ = "tenants"

    name = Column(String(255), nullable=False)
    slug = Column(String(100), unique=True, nullable=False, index=True)

    # Lifecycle, changed only by platform administrators
    status = Column(String(30), default=TenantStatus.PENDING_ACTIVATION.value, nullable=False, index=True)
    trial_started_at = Column(DateTime(timezone=True), nullable=True)
    trial_ends_at = Column(DateTime(timezone=True), nullable=True)
    suspended_at = Column(DateTime(timezone=True), nullable=True)
    suspend_reason = Column(Text, nullable=True)

    # Profile / branding
    primary_color = Column(String(7), nullable=True)
    logo = Column(String(500), nullable=True)
    email = Column(String(255), nullable=True)
    phone = Column(String(50), nullable=True)
    address = Column(String(500), nullable=True)
