from datetime import datetime
from typing import List

from pydantic import Field

from storefront.data.models.base import CamelModel, Money


class Product(CamelModel):
    id: str
    name: str
    description: str = ""
    price: Money
    stock: int = Field(ge=0)
    category_id: str
    image_urls: List[str] = Field(default_factory=list)
    created_at: datetime
    updated_at: datetime
