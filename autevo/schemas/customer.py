# autevo/schemas/customer.py
from pydantic import BaseModel, ConfigDict, EmailStr, Field, field_validator
from typing import List, Optional
from datetime import date, datetime

from autevo.core.input_validation import SecureString, empty_to_none
from autevo.schemas.common import Pagination, reject_null
from autevo.schemas.vehicle import VehicleFields, VehicleSummary


class CustomerBase(BaseModel):
    name: SecureString = Field(min_length=2)
    phone: str = Field(min_length=10, max_length=30)
    email: Optional[EmailStr] = None
    document: Optional[str] = None
    birth_date: Optional[date] = None
    notes: Optional[SecureString] = None
    whatsapp_opt_in: bool = True

    @field_validator("email", mode="before")
    @classmethod
    def blank_email(cls, v):
        return empty_to_none(v) if isinstance(v, str) else v


class CustomerCreate(CustomerBase):
    """Customer with an optional vehicle registered in the same request"""
    vehicle: Optional[VehicleFields] = None


class CustomerUpdate(BaseModel):
    name: Optional[SecureString] = Field(default=None, min_length=2)
    phone: Optional[str] = Field(default=None, min_length=10, max_length=30)
    email: Optional[EmailStr] = None
    document: Optional[str] = None
    birth_date: Optional[date] = None
    notes: Optional[SecureString] = None
    whatsapp_opt_in: Optional[bool] = None

    @field_validator("email", mode="before")
    @classmethod
    def blank_email(cls, v):
        return empty_to_none(v) if isinstance(v, str) else v

    @field_validator("name", "phone", "whatsapp_opt_in", mode="before")
    @classmethod
    def not_null(cls, v):
        return reject_null(v)


class Customer(BaseModel):
    id: str
    name: str
    phone: str
    email: Optional[str] = None
    document: Optional[str] = None
    birth_date: Optional[date] = None
    notes: Optional[str] = None
    whatsapp_opt_in: bool
    created_at: datetime

    model_config = ConfigDict(from_attributes=True)


class CustomerDetail(Customer):
    vehicles: List[VehicleSummary] = []
    total_spent: float = 0


class CustomerSearchResult(BaseModel):
    id: str
    name: str
    phone: str
    vehicles: List[VehicleSummary] = []

    model_config = ConfigDict(from_attributes=True)


class CustomerList(BaseModel):
    items: List[Customer]
    pagination: Pagination
