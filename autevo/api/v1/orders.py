# autevo/api/v1/orders.py
from datetime import datetime
from fastapi import APIRouter, Depends, Query, status
from sqlalchemy.ext.asyncio import AsyncSession
from typing import List, Optional

from autevo.api.dependencies import require_operation
from autevo.core.order_workflow import OrderStatus
from autevo.core.tenant import RequestContext
from autevo.db.database import get_db
from autevo.schemas.order import (
    OrderCreate,
    OrderDetail,
    OrderList,
    OrderStatusUpdate,
    OrderUpdate,
    Payment,
    PaymentCreate,
)
from autevo.services.order_service import OrderService

router = APIRouter()


@router.get("", response_model=OrderList)
async def list_orders(
    page: int = Query(1, ge=1),
    limit: int = Query(20, ge=1, le=100),
    search: Optional[str] = None,
    statuses: Optional[List[OrderStatus]] = Query(None, alias="status"),
    assigned_to_id: Optional[str] = None,
    date_from: Optional[datetime] = None,
    date_to: Optional[datetime] = None,
    ctx: RequestContext = Depends(require_operation("order.list")),
    db: AsyncSession = Depends(get_db)
):
    return await OrderService(db, ctx).list(
        page, limit, search, statuses, assigned_to_id, date_from, date_to
    )


@router.post("", response_model=OrderDetail, status_code=status.HTTP_201_CREATED)
async def create_order(
    data: OrderCreate,
    ctx: RequestContext = Depends(require_operation("order.create")),
    db: AsyncSession = Depends(get_db)
):
    return await OrderService(db, ctx).create(data)


@router.get("/{order_id}", response_model=OrderDetail)
async def get_order(
    order_id: str,
    ctx: RequestContext = Depends(require_operation("order.get")),
    db: AsyncSession = Depends(get_db)
):
    return await OrderService(db, ctx).get(order_id)


@router.put("/{order_id}", response_model=OrderDetail)
async def update_order(
    order_id: str,
    data: OrderUpdate,
    ctx: RequestContext = Depends(require_operation("order.update")),
    db: AsyncSession = Depends(get_db)
):
    return await OrderService(db, ctx).update(order_id, data)


@router.patch("/{order_id}/status", response_model=OrderDetail)
async def update_order_status(
    order_id: str,
    data: OrderStatusUpdate,
    ctx: RequestContext = Depends(require_operation("order.update_status")),
    db: AsyncSession = Depends(get_db)
):
    """Move the order along its workflow"""
    return await OrderService(db, ctx).update_status(order_id, data)


@router.post("/{order_id}/payments", response_model=Payment, status_code=status.HTTP_201_CREATED)
async def add_payment(
    order_id: str,
    data: PaymentCreate,
    ctx: RequestContext = Depends(require_operation("order.add_payment")),
    db: AsyncSession = Depends(get_db)
):
    return await OrderService(db, ctx).add_payment(order_id, data)
