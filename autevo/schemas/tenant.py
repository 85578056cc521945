# autevo/schemas/tenant.py
from pydantic import BaseModel, ConfigDict, EmailStr, Field, field_validator
from typing import Optional
from datetime import datetime

from autevo.core.input_validation import HEX_COLOR_PATTERN, SecureString, empty_to_none


class TenantSetupUpdate(BaseModel):
    # User details
    job_title: SecureString = Field(min_length=2)

    # Branding
    tenant_name: SecureString = Field(min_length=2)
    primary_color: Optional[str] = Field(default=None, pattern=HEX_COLOR_PATTERN.pattern)
    logo: Optional[str] = None

    # Contact info
    email: Optional[EmailStr] = None
    phone: Optional[str] = None
    address: Optional[SecureString] = None

    @field_validator("email", mode="before")
    @classmethod
    def blank_email(cls, v):
        return empty_to_none(v) if isinstance(v, str) else v


class Tenant(BaseModel):
    id: str
    name: str
    slug: str
    status: str
    trial_started_at: Optional[datetime] = None
    trial_ends_at: Optional[datetime] = None
    suspended_at: Optional[datetime] = None
    suspend_reason: Optional[str] = None
    primary_color: Optional[str] = None
    logo: Optional[str] = None
    email: Optional[str] = None
    phone: Optional[str] = None
    address: Optional[str] = None
    created_at: datetime

    model_config = ConfigDict(from_attributes=True)
