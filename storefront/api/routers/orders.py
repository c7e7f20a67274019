# storefront/api/routers/orders.py
from datetime import datetime
from typing import Optional

from fastapi import APIRouter, Depends, Query

from storefront.api.deps import get_order_service
from storefront.data.models import Order, OrderStatus
from storefront.domain.schemas import OrderCreate, OrderStatusUpdate, Page
from storefront.services.order_service import OrderService
from storefront.utils.settings import MAX_PAGE_SIZE, ORDERS_PAGE_SIZE

router = APIRouter(prefix="/orders", tags=["orders"])


@router.get("", response_model=Page[Order])
def list_orders(
    user_id: Optional[str] = Query(None, alias="userId"),
    status: Optional[OrderStatus] = Query(None),
    start_date: Optional[datetime] = Query(None, alias="startDate"),
    end_date: Optional[datetime] = Query(None, alias="endDate"),
    limit: int = Query(ORDERS_PAGE_SIZE, ge=1, le=MAX_PAGE_SIZE),
    offset: int = Query(0, ge=0),
    svc: OrderService = Depends(get_order_service),
):
    return svc.list_orders(
        limit=limit,
        offset=offset,
        user_id=user_id,
        status=status,
        start_date=start_date,
        end_date=end_date,
    )


@router.get("/users/{user_id}", response_model=Page[Order])
def list_user_orders(
    user_id: str,
    limit: int = Query(ORDERS_PAGE_SIZE, ge=1, le=MAX_PAGE_SIZE),
    offset: int = Query(0, ge=0),
    svc: OrderService = Depends(get_order_service),
):
    return svc.list_user_orders(user_id, limit, offset)


@router.post("/users/{user_id}", response_model=Order, status_code=201)
def create_order(user_id: str, payload: OrderCreate, svc: OrderService = Depends(get_order_service)):
    """
    Places an order from the given items, decrements stock
    and empties the user's cart.
    """
    return svc.create_order(user_id, payload.items, payload.shipping_address)


@router.patch("/status/{order_id}", response_model=Order)
def update_status(
    order_id: str,
    payload: OrderStatusUpdate,
    svc: OrderService = Depends(get_order_service),
):
    return svc.update_status(order_id, payload.status)


@router.post("/cancel/{order_id}", response_model=Order)
def cancel_order(order_id: str, svc: OrderService = Depends(get_order_service)):
    """Cancels a pending or processing order and restores stock."""
    return svc.cancel_order(order_id)


@router.get("/{order_id}", response_model=Order)
def get_order(order_id: str, svc: OrderService = Depends(get_order_service)):
    return svc.get_order(order_id)
