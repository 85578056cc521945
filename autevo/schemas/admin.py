# autevo/schemas/admin.py
from pydantic import BaseModel, Field
from typing import List, Optional

from autevo.schemas.common import Pagination
from autevo.schemas.tenant import Tenant


class DashboardStats(BaseModel):
    total: int
    pending_activation: int
    trial: int
    active: int
    suspended: int
    canceled: int


class TenantAdminDetail(Tenant):
    user_count: int = 0


class TenantList(BaseModel):
    items: List[Tenant]
    pagination: Pagination


class ActivateTrialRequest(BaseModel):
    days: Optional[int] = Field(default=None, ge=1, le=365)


class ExtendTrialRequest(BaseModel):
    days: int = Field(ge=1, le=365)


class SuspendTenantRequest(BaseModel):
    reason: str = Field(min_length=1, max_length=1000)


class ReactivateTenantRequest(BaseModel):
    as_trial: bool = False
