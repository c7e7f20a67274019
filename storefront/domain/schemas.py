# storefront/domain/schemas.py
from decimal import Decimal
from enum import Enum
from typing import Generic, List, Optional, TypeVar

from pydantic import BaseModel, Field

from storefront.data.models.auth import AuthUser
from storefront.data.models.base import CamelModel, Money
from storefront.data.models.order import OrderStatus
from storefront.data.models.user import Address

T = TypeVar("T")


class Page(BaseModel, Generic[T]):
    """List envelope, total is counted before limit/offset are applied."""

    items: List[T]
    total: int
    limit: int
    offset: int


class MessageOut(BaseModel):
    message: str


# ---- auth ----

class LoginIn(BaseModel):
    email: str = Field(..., min_length=1)
    password: str = Field(..., min_length=1)


class LoginOut(CamelModel):
    access_token: str
    token_type: str = "Bearer"
    expires_in: int
    user: AuthUser


# ---- products ----

class ProductSortField(str, Enum):
    NAME = "name"
    PRICE = "price"
    CREATED_AT = "createdAt"


class SortOrder(str, Enum):
    ASC = "asc"
    DESC = "desc"


class ProductCreate(CamelModel):
    name: str = Field(..., min_length=1, max_length=200)
    description: str = ""
    price: Money
    stock: int = Field(..., ge=0)
    category_id: str = Field(..., min_length=1)
    image_urls: List[str] = Field(default_factory=list)


class ProductUpdate(CamelModel):
    name: Optional[str] = Field(None, min_length=1, max_length=200)
    description: Optional[str] = None
    price: Optional[Decimal] = Field(None, ge=0)
    stock: Optional[int] = Field(None, ge=0)
    category_id: Optional[str] = Field(None, min_length=1)
    image_urls: Optional[List[str]] = None


# ---- categories ----

class CategoryCreate(CamelModel):
    name: str = Field(..., min_length=1, max_length=100)
    parent_id: Optional[str] = None


class CategoryUpdate(CamelModel):
    name: Optional[str] = Field(None, min_length=1, max_length=100)
    parent_id: Optional[str] = None


# ---- users ----

class UserCreate(CamelModel):
    email: str = Field(..., min_length=3, max_length=254, pattern=r"^[^@\s]+@[^@\s]+$")
    name: str = Field(..., min_length=1, max_length=100)
    address: Optional[Address] = None


class UserUpdate(CamelModel):
    email: Optional[str] = Field(None, min_length=3, max_length=254, pattern=r"^[^@\s]+@[^@\s]+$")
    name: Optional[str] = Field(None, min_length=1, max_length=100)
    address: Optional[Address] = None


# ---- carts ----

class CartItemIn(CamelModel):
    product_id: str = Field(..., min_length=1)
    quantity: int = Field(..., gt=0)


class CartItemUpdate(CamelModel):
    quantity: int = Field(..., gt=0)


# ---- orders ----

class OrderItemIn(CamelModel):
    product_id: str = Field(..., min_length=1)
    quantity: int = Field(..., gt=0)


class OrderCreate(CamelModel):
    # emptiness is checked by the workflow, after the user lookup
    items: List[OrderItemIn]
    shipping_address: Optional[Address] = None


class OrderStatusUpdate(CamelModel):
    status: OrderStatus
