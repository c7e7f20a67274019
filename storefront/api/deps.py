# storefront/api/deps.py
from fastapi import Depends, Request

from storefront.data.models import AuthUser
from storefront.domain.errors import UnauthorizedError
from storefront.repos.auth_store import AuthStore
from storefront.repos.memory_store import MemoryStore
from storefront.services.cart_service import CartService
from storefront.services.category_service import CategoryService
from storefront.services.order_service import OrderService
from storefront.services.product_service import ProductService
from storefront.services.user_service import UserService


def get_store(request: Request) -> MemoryStore:
    return request.app.state.store


def get_auth_store(request: Request) -> AuthStore:
    return request.app.state.auth_store


def get_current_user(request: Request) -> AuthUser:
    # set by the auth middleware on protected paths
    user = getattr(request.state, "user", None)
    if user is None:
        raise UnauthorizedError("Authentication required")
    return user


def get_product_service(store: MemoryStore = Depends(get_store)):
    return ProductService(store)


def get_category_service(store: MemoryStore = Depends(get_store)):
    return CategoryService(store)


def get_user_service(store: MemoryStore = Depends(get_store)):
    return UserService(store)


def get_cart_service(store: MemoryStore = Depends(get_store)):
    return CartService(store)


def get_order_service(store: MemoryStore = Depends(get_store)):
    return OrderService(store)
