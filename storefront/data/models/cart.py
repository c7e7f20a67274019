#storefront/data/models/cart.py
from datetime import datetime
from typing import List

from pydantic import Field

from storefront.data.models.base import CamelModel


def cart_id_for(user_id: str) -> str:
    return f"cart-{user_id}"


class CartItem(CamelModel):
    product_id: str
    quantity: int = Field(gt=0)


class Cart(CamelModel):
    id: str
    user_id: str
    # at most one entry per product_id
    items: List[CartItem] = Field(default_factory=list)
    created_at: datetime
    updated_at: datetime

    def find_item(self, product_id: str) -> int:
        for index, item in enumerate(self.items):
            if item.product_id == product_id:
                return index
        return -1
