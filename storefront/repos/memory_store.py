# storefront/repos/memory_store.py
from typing import Collection, Dict, List, Optional, TypeVar

from pydantic import BaseModel

from storefront.data.models import Cart, Category, Order, OrderStatus, Product, User, cart_id_for
from storefront.domain.errors import InsufficientStockError, InvalidStateTransitionError
from storefront.utils.ids import utcnow
from storefront.utils.rwlock import ReadWriteLock

E = TypeVar("E", bound=BaseModel)


def _copy(entity: E) -> E:
    return entity.model_copy(deep=True)


class MemoryStore:
    """
    In-memory keyed collections for every entity type.

    One reader/writer lock guards all maps: reads share it, mutations take it
    exclusively. Entities are copied on the way in and out, so callers can
    modify what they get without touching stored state.
    Carts are keyed by user id, everything else by entity id.
    """

    def __init__(self):
        self._lock = ReadWriteLock()
        self._products: Dict[str, Product] = {}
        self._categories: Dict[str, Category] = {}
        self._users: Dict[str, User] = {}
        self._carts: Dict[str, Cart] = {}
        self._orders: Dict[str, Order] = {}

    def reset(self):
        with self._lock.write_lock():
            self._products.clear()
            self._categories.clear()
            self._users.clear()
            self._carts.clear()
            self._orders.clear()

    # generic helpers, callers hold no lock

    def _all(self, table: Dict[str, E]) -> List[E]:
        with self._lock.read_lock():
            return [_copy(e) for e in table.values()]

    def _get(self, table: Dict[str, E], key: str) -> Optional[E]:
        with self._lock.read_lock():
            entity = table.get(key)
            return _copy(entity) if entity is not None else None

    def _put(self, table: Dict[str, E], key: str, entity: E) -> E:
        with self._lock.write_lock():
            table[key] = _copy(entity)
        return entity

    def _pop(self, table: Dict[str, E], key: str) -> Optional[E]:
        with self._lock.write_lock():
            return table.pop(key, None)

    # products

    def get_products(self) -> List[Product]:
        return self._all(self._products)

    def get_product(self, product_id: str) -> Optional[Product]:
        return self._get(self._products, product_id)

    def create_product(self, product: Product) -> Product:
        return self._put(self._products, product.id, product)

    def update_product(self, product_id: str, product: Product) -> Product:
        return self._put(self._products, product_id, product)

    def delete_product(self, product_id: str) -> Optional[Product]:
        return self._pop(self._products, product_id)

    def adjust_stock(self, product_id: str, delta: int) -> Optional[Product]:
        """
        Apply a stock delta as one step under the write lock.

        Returns the updated product, or None if it does not exist. A delta
        that would take stock below zero raises InsufficientStockError and
        changes nothing.
        """
        with self._lock.write_lock():
            product = self._products.get(product_id)
            if product is None:
                return None

            new_stock = product.stock + delta
            if new_stock < 0:
                raise InsufficientStockError(
                    f"Insufficient stock for product {product.name}",
                    details={"productId": product_id, "available": product.stock, "requested": -delta},
                )

            updated = product.model_copy(update={"stock": new_stock, "updated_at": utcnow()})
            self._products[product_id] = updated
            return _copy(updated)

    # categories

    def get_categories(self) -> List[Category]:
        return self._all(self._categories)

    def get_category(self, category_id: str) -> Optional[Category]:
        return self._get(self._categories, category_id)

    def create_category(self, category: Category) -> Category:
        return self._put(self._categories, category.id, category)

    def update_category(self, category_id: str, category: Category) -> Category:
        return self._put(self._categories, category_id, category)

    def delete_category(self, category_id: str) -> Optional[Category]:
        return self._pop(self._categories, category_id)

    # users

    def get_users(self) -> List[User]:
        users = self._all(self._users)
        users.sort(key=lambda u: (u.created_at, u.id))
        return users

    def get_user(self, user_id: str) -> Optional[User]:
        return self._get(self._users, user_id)

    def create_user(self, user: User) -> User:
        return self._put(self._users, user.id, user)

    def update_user(self, user_id: str, user: User) -> User:
        return self._put(self._users, user_id, user)

    def delete_user(self, user_id: str) -> Optional[User]:
        return self._pop(self._users, user_id)

    # carts

    def get_cart_by_user_id(self, user_id: str) -> Cart:
        """
        Never fails. A user without a stored cart gets a fresh empty one,
        which is not persisted until update_cart is called with it.
        """
        cart = self._get(self._carts, user_id)
        if cart is not None:
            return cart

        now = utcnow()
        return Cart(id=cart_id_for(user_id), user_id=user_id, items=[], created_at=now, updated_at=now)

    def has_cart(self, user_id: str) -> bool:
        with self._lock.read_lock():
            return user_id in self._carts

    def update_cart(self, user_id: str, cart: Cart) -> Cart:
        return self._put(self._carts, user_id, cart)

    def delete_cart(self, user_id: str) -> Optional[Cart]:
        return self._pop(self._carts, user_id)

    # orders

    def get_orders(self) -> List[Order]:
        return self._all(self._orders)

    def get_order(self, order_id: str) -> Optional[Order]:
        return self._get(self._orders, order_id)

    def get_orders_by_user_id(self, user_id: str) -> List[Order]:
        with self._lock.read_lock():
            return [_copy(o) for o in self._orders.values() if o.user_id == user_id]

    def create_order(self, order: Order) -> Order:
        return self._put(self._orders, order.id, order)

    def update_order(self, order_id: str, order: Order) -> Order:
        return self._put(self._orders, order_id, order)

    def delete_order(self, order_id: str) -> Optional[Order]:
        return self._pop(self._orders, order_id)

    def transition_order(
        self,
        order_id: str,
        allowed_from: Collection[OrderStatus],
        status: OrderStatus,
    ) -> Optional[Order]:
        """
        Set the order status only if the current one is in allowed_from,
        checked and written under the write lock.

        Returns the updated order, or None if it does not exist. Any other
        current status raises InvalidStateTransitionError and changes nothing.
        """
        with self._lock.write_lock():
            order = self._orders.get(order_id)
            if order is None:
                return None

            if order.status not in allowed_from:
                raise InvalidStateTransitionError(
                    f"Cannot transition from {order.status.value} to {status.value}",
                    details={"currentStatus": order.status.value, "requestedStatus": status.value},
                )

            updated = order.model_copy(update={"status": status, "updated_at": utcnow()})
            self._orders[order_id] = updated
            return _copy(updated)
