# autevo/schemas/service.py
from pydantic import BaseModel, ConfigDict, Field, field_validator
from typing import List, Optional
from datetime import datetime

from autevo.core.input_validation import SecureString
from autevo.schemas.common import Pagination, reject_null


class ServiceCreate(BaseModel):
    name: SecureString = Field(min_length=2)
    description: Optional[SecureString] = None
    base_price: float = Field(ge=0)
    estimated_time: Optional[int] = Field(default=None, ge=0)
    return_days: Optional[int] = Field(default=None, ge=0)
    is_active: bool = True


class ServiceUpdate(BaseModel):
    name: Optional[SecureString] = Field(default=None, min_length=2)
    description: Optional[SecureString] = None
    base_price: Optional[float] = Field(default=None, ge=0)
    estimated_time: Optional[int] = Field(default=None, ge=0)
    return_days: Optional[int] = Field(default=None, ge=0)
    is_active: Optional[bool] = None

    @field_validator("name", "base_price", "is_active", mode="before")
    @classmethod
    def not_null(cls, v):
        return reject_null(v)


class Service(BaseModel):
    id: str
    name: str
    description: Optional[str] = None
    base_price: float
    estimated_time: Optional[int] = None
    return_days: Optional[int] = None
    is_active: bool
    created_at: datetime

    model_config = ConfigDict(from_attributes=True)


class ServiceList(BaseModel):
    items: List[Service]
    pagination: Pagination
