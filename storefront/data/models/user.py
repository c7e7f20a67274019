from datetime import datetime
from typing import Optional

from storefront.data.models.base import CamelModel


class Address(CamelModel):
    street: str
    city: str
    state: str
    postal_code: str
    country: str


class User(CamelModel):
    id: str
    email: str
    name: str
    address: Optional[Address] = None
    created_at: datetime
    updated_at: datetime
