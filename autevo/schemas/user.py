# autevo/schemas/user.py
from pydantic import BaseModel, ConfigDict, EmailStr
from typing import Optional
from datetime import datetime

from autevo.core.rbac import Role


class User(BaseModel):
    id: str
    email: str
    name: str
    job_title: Optional[str] = None
    role: str
    status: str
    tenant_id: Optional[str] = None
    created_at: datetime

    model_config = ConfigDict(from_attributes=True)


class InviteCreate(BaseModel):
    email: EmailStr
    role: Role = Role.MEMBER


class Invite(BaseModel):
    id: str
    email: str
    role: str
    tenant_id: str
    created_at: datetime

    model_config = ConfigDict(from_attributes=True)


class RoleUpdate(BaseModel):
    # Validated against the assignable roles by the team service
    role: str
