# autevo/schemas/vehicle.py
from pydantic import BaseModel, ConfigDict, Field, field_validator
from typing import List, Optional
from datetime import datetime

from autevo.core.input_validation import SecureString, normalize_plate
from autevo.schemas.common import Pagination, reject_null


class VehicleFields(BaseModel):
    plate: str = Field(min_length=7, max_length=10)
    brand: SecureString = Field(min_length=2)
    model: SecureString = Field(min_length=2)
    color: SecureString = Field(min_length=2)
    year: Optional[int] = Field(default=None, ge=1900, le=2100)

    @field_validator("plate")
    @classmethod
    def upper_plate(cls, v: str) -> str:
        return normalize_plate(v)


class VehicleCreate(VehicleFields):
    customer_id: str


class VehicleUpdate(BaseModel):
    plate: Optional[str] = Field(default=None, min_length=7, max_length=10)
    brand: Optional[SecureString] = Field(default=None, min_length=2)
    model: Optional[SecureString] = Field(default=None, min_length=2)
    color: Optional[SecureString] = Field(default=None, min_length=2)
    year: Optional[int] = Field(default=None, ge=1900, le=2100)

    @field_validator("plate")
    @classmethod
    def upper_plate(cls, v: Optional[str]) -> Optional[str]:
        return normalize_plate(v) if v is not None else v

    @field_validator("plate", "brand", "model", "color", mode="before")
    @classmethod
    def not_null(cls, v):
        return reject_null(v)


class VehicleSummary(BaseModel):
    id: str
    plate: str
    brand: str
    model: str
    color: str
    year: Optional[int] = None

    model_config = ConfigDict(from_attributes=True)


class CustomerRef(BaseModel):
    id: str
    name: str
    phone: str

    model_config = ConfigDict(from_attributes=True)


class Vehicle(VehicleSummary):
    customer_id: str
    created_at: datetime
    customer: Optional[CustomerRef] = None


class VehicleList(BaseModel):
    items: List[Vehicle]
    pagination: Pagination
