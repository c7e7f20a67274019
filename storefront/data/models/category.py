from datetime import datetime
from typing import List, Optional

from pydantic import Field

from storefront.data.models.base import CamelModel


class Category(CamelModel):
    id: str
    name: str
    parent_id: Optional[str] = None
    created_at: datetime
    updated_at: datetime


class CategoryNode(Category):
    children: List["CategoryNode"] = Field(default_factory=list)


CategoryNode.model_rebuild()
