# autevo/db/models/user.py
from enum import Enum
from sqlalchemy import Column, String, ForeignKey
from autevo.core.rbac import Role
from autevo.db.base import BaseModel


class UserStatus(str, Enum):
    ACTIVE = "active"
    INACTIVE = "inactive"


class User(BaseModel):
    """Shop staff member, or a platform administrator when tenant_id is empty"""
    __tablename__ = "users"

    email = Column(String(255), unique=True, nullable=False, index=True)
    name = Column(String(255), nullable=False)
    job_title = Column(String(100), nullable=True)
    avatar_url = Column(String(500), nullable=True)

    tenant_id = Column(String(36), ForeignKey("tenants.id"), nullable=True, index=True)
    role = Column(String(30), default=Role.MEMBER.value, nullable=False)
    status = Column(String(20), default=UserStatus.ACTIVE.value, nullable=False)

    @property
    def is_active(self) -> bool:
        return self.status == UserStatus.ACTIVE.value


class PendingInvite(BaseModel):
    """Invitation for an email address to join a tenant"""
    __tablename__ = "pending_invites"

    tenant_id = Column(String(36), ForeignKey("tenants.id"), nullable=False, index=True)
    email = Column(String(255), nullable=False, index=True)
    role = Column(String(30), default=Role.MEMBER.value, nullable=False)
    invited_by_id = Column(String(36), ForeignKey("users.id"), nullable=True)
