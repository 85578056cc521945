# autevo/db/models/audit_log.py
from sqlalchemy import Column, String, ForeignKey, JSON, Text
from autevo.db.base import BaseModel


class AuditLog(BaseModel):
    """Audit log for tracking tenant and admin actions"""
    __tablename__ = "audit_logs"

    tenant_id = Column(String(36), ForeignKey("tenants.id"), nullable=True, index=True)
    user_id = Column(String(36), ForeignKey("users.id"), nullable=True, index=True)

    # Action details
    action = Column(String(100), nullable=False, index=True)  # order.update_status, user.deactivate, ...
    entity_type = Column(String(50), nullable=False)
    entity_id = Column(String(36), nullable=True)
    old_value = Column(JSON, nullable=True)
    new_value = Column(JSON, nullable=True)

    # Request details
    ip_address = Column(String(45), nullable=True)
    user_agent = Column(Text, nullable=True)
