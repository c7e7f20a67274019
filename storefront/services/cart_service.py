# storefront/services/cart_service.py
from storefront.data.models import Cart, CartItem, Product
from storefront.domain.errors import InsufficientStockError, NotFoundError
from storefront.repos.memory_store import MemoryStore
from storefront.utils.ids import utcnow
from storefront.utils.logging import get_logger

logger = get_logger(__name__)


def _check_stock(product: Product, quantity: int):
    if product.stock < quantity:
        raise InsufficientStockError(
            "Insufficient stock",
            details={"productId": product.id, "available": product.stock, "requested": quantity},
        )


class CartService:
    """
    Use cases for the cart domain.
    commands (add, update, remove, clear) change the cart
    query (get) only reads
    """

    def __init__(self, store: MemoryStore):
        self.store = store

    #query
    def get_cart(self, user_id: str) -> Cart:
        return self.store.get_cart_by_user_id(user_id)

    #commands
    def add_item(self, user_id: str, product_id: str, quantity: int) -> Cart:
        cart = self.store.get_cart_by_user_id(user_id)

        product = self.store.get_product(product_id)
        if product is None:
            raise NotFoundError("Product not found")

        _check_stock(product, quantity)

        index = cart.find_item(product_id)
        if index >= 0:
            logger.info(
                f"Product {product_id} already in cart of user {user_id}, quantity "
                f"{cart.items[index].quantity} -> {cart.items[index].quantity + quantity}"
            )
            cart.items[index].quantity += quantity
        else:
            logger.info(f"Adding product {product_id} to cart of user {user_id}")
            cart.items.append(CartItem(product_id=product_id, quantity=quantity))

        cart.updated_at = utcnow()
        return self.store.update_cart(user_id, cart)

    def update_item(self, user_id: str, product_id: str, quantity: int) -> Cart:
        cart = self.store.get_cart_by_user_id(user_id)

        index = cart.find_item(product_id)
        if index < 0:
            raise NotFoundError("Item not found in cart")

        product = self.store.get_product(product_id)
        if product is None:
            raise NotFoundError("Product not found")

        _check_stock(product, quantity)

        cart.items[index].quantity = quantity
        cart.updated_at = utcnow()

        logger.info(f"Product {product_id} in cart of user {user_id} set to {quantity}")
        return self.store.update_cart(user_id, cart)

    def remove_item(self, user_id: str, product_id: str) -> Cart:
        cart = self.store.get_cart_by_user_id(user_id)

        index = cart.find_item(product_id)
        if index < 0:
            raise NotFoundError("Item not found in cart")

        del cart.items[index]
        cart.updated_at = utcnow()

        logger.info(f"Product {product_id} removed from cart of user {user_id}")
        return self.store.update_cart(user_id, cart)

    def clear(self, user_id: str) -> Cart:
        cart = self.store.get_cart_by_user_id(user_id)
        cart.items = []
        cart.updated_at = utcnow()

        logger.info(f"Cart of user {user_id} cleared")
        return self.store.update_cart(user_id, cart)
