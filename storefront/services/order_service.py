# storefront/services/order_service.py
from datetime import datetime, timezone
from decimal import Decimal
from typing import List, Optional

from storefront.data.models import Address, Order, OrderItem, OrderStatus
from storefront.data.models.order import CANCELLABLE_STATUSES, can_transition
from storefront.domain.errors import (
    InsufficientStockError,
    InvalidStateTransitionError,
    NotFoundError,
    ValidationFailedError,
)
from storefront.domain.schemas import OrderItemIn
from storefront.repos.memory_store import MemoryStore
from storefront.utils.ids import new_id, utcnow
from storefront.utils.logging import get_logger
from storefront.utils.pagination import paginate

logger = get_logger(__name__)


def _as_utc(value: Optional[datetime]) -> Optional[datetime]:
    # naive query dates are taken as UTC
    if value is not None and value.tzinfo is None:
        return value.replace(tzinfo=timezone.utc)
    return value


class OrderService:
    """
    Order workflow: placing orders against product stock, cancelling them and
    moving them through the status state machine.

    Each step is its own store call, there is no transaction around the
    whole sequence.
    """

    def __init__(self, store: MemoryStore):
        self.store = store

    # =====================================================
    # QUERY
    # =====================================================
    def list_orders(
        self,
        limit: int,
        offset: int,
        user_id: Optional[str] = None,
        status: Optional[OrderStatus] = None,
        start_date: Optional[datetime] = None,
        end_date: Optional[datetime] = None,
    ):
        start_date, end_date = _as_utc(start_date), _as_utc(end_date)
        orders = self.store.get_orders_by_user_id(user_id) if user_id else self.store.get_orders()

        if status is not None:
            orders = [o for o in orders if o.status == status]
        if start_date is not None:
            orders = [o for o in orders if o.created_at >= start_date]
        if end_date is not None:
            orders = [o for o in orders if o.created_at <= end_date]

        orders.sort(key=lambda o: o.created_at, reverse=True)
        return paginate(orders, limit, offset)

    def list_user_orders(self, user_id: str, limit: int, offset: int):
        orders = self.store.get_orders_by_user_id(user_id)
        orders.sort(key=lambda o: o.created_at, reverse=True)
        return paginate(orders, limit, offset)

    def get_order(self, order_id: str) -> Order:
        order = self.store.get_order(order_id)
        if order is None:
            raise NotFoundError("Order not found")
        return order

    # =====================================================
    # COMMANDS
    # =====================================================
    def create_order(
        self,
        user_id: str,
        items: List[OrderItemIn],
        shipping_address: Optional[Address] = None,
    ) -> Order:
        """
        Use Case: placing an order from an explicit item list.

        1. user must exist
        2. at least one item
        3. per item, in order: product exists, enough stock, decrement stock
           right away, snapshot name and price
        4. order is stored as pending with the frozen total
        5. the user's cart is emptied

        A failure in step 3 leaves the stock of earlier items decremented and
        no order created.
        """
        user = self.store.get_user(user_id)
        if user is None:
            raise NotFoundError("User not found")

        if not items:
            raise ValidationFailedError("No items in order")

        address = shipping_address or user.address
        if address is None:
            raise ValidationFailedError("Shipping address is required")

        total = Decimal("0.00")
        order_items: List[OrderItem] = []

        for item in items:
            product = self.store.get_product(item.product_id)
            if product is None:
                raise NotFoundError(f"Product {item.product_id} not found")

            if product.stock < item.quantity:
                raise InsufficientStockError(
                    f"Insufficient stock for product {product.name}",
                    details={"productId": product.id, "available": product.stock, "requested": item.quantity},
                )

            # check and decrement again as one step, another order may have
            # taken the stock since the read above
            updated = self.store.adjust_stock(product.id, -item.quantity)
            if updated is None:
                raise NotFoundError(f"Product {item.product_id} not found")

            total += updated.price * item.quantity
            order_items.append(
                OrderItem(
                    product_id=updated.id,
                    quantity=item.quantity,
                    price=updated.price,
                    product_name=updated.name,
                )
            )
            logger.info(f"Reserved {item.quantity} x {updated.id}, stock left {updated.stock}")

        now = utcnow()
        order = Order(
            id=new_id(),
            user_id=user_id,
            items=order_items,
            total_amount=total,
            status=OrderStatus.PENDING,
            shipping_address=address,
            created_at=now,
            updated_at=now,
        )
        created = self.store.create_order(order)

        cart = self.store.get_cart_by_user_id(user_id)
        cart.items = []
        cart.updated_at = now
        self.store.update_cart(user_id, cart)

        logger.info(f"Order {created.id} created for user {user_id}, total {total}")
        return created

    def cancel_order(self, order_id: str) -> Order:
        """
        Use Case: cancelling a pending or processing order.
        Stock goes back for every line whose product still exists.

        The status flips first, as a compare-and-set in the store, so of two
        concurrent cancels only one restores stock.
        """
        order = self.get_order(order_id)

        if order.status not in CANCELLABLE_STATUSES:
            raise InvalidStateTransitionError(
                f"Cannot cancel order with status {order.status.value}",
                details={"currentStatus": order.status.value, "requestedStatus": OrderStatus.CANCELLED.value},
            )

        cancelled = self.store.transition_order(order_id, CANCELLABLE_STATUSES, OrderStatus.CANCELLED)
        if cancelled is None:
            raise NotFoundError("Order not found")

        for item in order.items:
            restored = self.store.adjust_stock(item.product_id, item.quantity)
            if restored is None:
                logger.warning(
                    f"Product {item.product_id} no longer exists, "
                    f"stock not restored for order {order_id}"
                )

        logger.info(f"Order {order_id} cancelled")
        return cancelled

    def update_status(self, order_id: str, status: OrderStatus) -> Order:
        order = self.get_order(order_id)

        if not can_transition(order.status, status):
            raise InvalidStateTransitionError(
                f"Cannot transition from {order.status.value} to {status.value}",
                details={"currentStatus": order.status.value, "requestedStatus": status.value},
            )

        if status == OrderStatus.CANCELLED:
            return self.cancel_order(order_id)

        # fails if another request moved the order since it was read
        updated = self.store.transition_order(order_id, {order.status}, status)
        if updated is None:
            raise NotFoundError("Order not found")

        logger.info(f"Order {order_id} moved to {status.value}")
        return updated
