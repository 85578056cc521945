# autevo/api/v1/customers.py
from fastapi import APIRouter, Depends, Query, status
from sqlalchemy.ext.asyncio import AsyncSession
from typing import List, Literal, Optional

from autevo.api.dependencies import require_operation
from autevo.core.tenant import RequestContext
from autevo.db.database import get_db
from autevo.schemas.customer import (
    Customer,
    CustomerCreate,
    CustomerDetail,
    CustomerList,
    CustomerSearchResult,
    CustomerUpdate,
)
from autevo.services.customer_service import CustomerService

router = APIRouter()


@router.get("", response_model=CustomerList)
async def list_customers(
    page: int = Query(1, ge=1),
    limit: int = Query(20, ge=1, le=100),
    search: Optional[str] = None,
    sort_by: Literal["name", "created_at", "phone"] = "name",
    sort_order: Literal["asc", "desc"] = "asc",
    ctx: RequestContext = Depends(require_operation("customer.list")),
    db: AsyncSession = Depends(get_db)
):
    """List customers of the current tenant"""
    return await CustomerService(db, ctx).list(page, limit, search, sort_by, sort_order)


@router.get("/all", response_model=List[Customer])
async def list_all_customers(
    search: Optional[str] = None,
    ctx: RequestContext = Depends(require_operation("customer.list_all")),
    db: AsyncSession = Depends(get_db)
):
    return await CustomerService(db, ctx).list_all(search)


@router.get("/search", response_model=List[CustomerSearchResult])
async def search_customers(
    q: str = Query(..., min_length=2),
    ctx: RequestContext = Depends(require_operation("customer.search")),
    db: AsyncSession = Depends(get_db)
):
    """Quick lookup by name or phone"""
    return await CustomerService(db, ctx).search(q)


@router.post("", response_model=CustomerDetail, status_code=status.HTTP_201_CREATED)
async def create_customer(
    data: CustomerCreate,
    ctx: RequestContext = Depends(require_operation("customer.create")),
    db: AsyncSession = Depends(get_db)
):
    service = CustomerService(db, ctx)
    customer = await service.create(data)
    return await service.get(customer.id)


@router.get("/{customer_id}", response_model=CustomerDetail)
async def get_customer(
    customer_id: str,
    ctx: RequestContext = Depends(require_operation("customer.get")),
    db: AsyncSession = Depends(get_db)
):
    return await CustomerService(db, ctx).get(customer_id)


@router.put("/{customer_id}", response_model=Customer)
async def update_customer(
    customer_id: str,
    data: CustomerUpdate,
    ctx: RequestContext = Depends(require_operation("customer.update")),
    db: AsyncSession = Depends(get_db)
):
    return await CustomerService(db, ctx).update(customer_id, data)


@router.delete("/{customer_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_customer(
    customer_id: str,
    ctx: RequestContext = Depends(require_operation("customer.delete")),
    db: AsyncSession = Depends(get_db)
):
    await CustomerService(db, ctx).delete(customer_id)
