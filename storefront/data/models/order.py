from datetime import datetime
from enum import Enum
from typing import Dict, FrozenSet, List

from pydantic import Field

from storefront.data.models.base import CamelModel, Money
from storefront.data.models.user import Address


class OrderStatus(str, Enum):
    PENDING = "pending"
    PROCESSING = "processing"
    SHIPPED = "shipped"
    DELIVERED = "delivered"
    CANCELLED = "cancelled"


ALLOWED_TRANSITIONS: Dict[OrderStatus, FrozenSet[OrderStatus]] = {
    OrderStatus.PENDING: frozenset({OrderStatus.PROCESSING, OrderStatus.CANCELLED}),
    OrderStatus.PROCESSING: frozenset({OrderStatus.SHIPPED, OrderStatus.CANCELLED}),
    OrderStatus.SHIPPED: frozenset({OrderStatus.DELIVERED}),
    OrderStatus.DELIVERED: frozenset(),
    OrderStatus.CANCELLED: frozenset(),
}

CANCELLABLE_STATUSES = frozenset({OrderStatus.PENDING, OrderStatus.PROCESSING})


def can_transition(current: OrderStatus, requested: OrderStatus) -> bool:
    return requested in ALLOWED_TRANSITIONS[current]


class OrderItem(CamelModel):
    """Line snapshot: price and name are frozen when the order is placed."""

    product_id: str
    quantity: int = Field(gt=0)
    price: Money
    product_name: str


class Order(CamelModel):
    id: str
    user_id: str
    items: List[OrderItem]
    total_amount: Money
    status: OrderStatus = OrderStatus.PENDING
    shipping_address: Address
    created_at: datetime
    updated_at: datetime
