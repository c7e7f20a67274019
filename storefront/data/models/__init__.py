from storefront.data.models.auth import AuthSession, AuthUser
from storefront.data.models.cart import Cart, CartItem, cart_id_for
from storefront.data.models.category import Category, CategoryNode
from storefront.data.models.order import Order, OrderItem, OrderStatus
from storefront.data.models.product import Product
from storefront.data.models.user import Address, User

__all__ = [
    "Address",
    "AuthSession",
    "AuthUser",
    "Cart",
    "CartItem",
    "Category",
    "CategoryNode",
    "Order",
    "OrderItem",
    "OrderStatus",
    "Product",
    "User",
    "cart_id_for",
]
