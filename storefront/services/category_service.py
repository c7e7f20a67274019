from typing import Dict, List, Optional

from storefront.data.models import Category, CategoryNode
from storefront.domain.errors import NotFoundError, ValidationFailedError
from storefront.domain.schemas import CategoryCreate, CategoryUpdate
from storefront.repos.memory_store import MemoryStore
from storefront.utils.ids import new_id, utcnow
from storefront.utils.logging import get_logger

logger = get_logger(__name__)


class CategoryService:
    def __init__(self, store: MemoryStore):
        self.store = store

    def list_categories(self) -> List[Category]:
        categories = self.store.get_categories()
        categories.sort(key=lambda c: (c.name, c.id))
        return categories

    def get_tree(self) -> List[CategoryNode]:
        """
        Categories nested by parent_id. A category whose parent no longer
        exists is shown as a root.
        """
        nodes: Dict[str, CategoryNode] = {
            c.id: CategoryNode(**c.model_dump()) for c in self.list_categories()
        }

        roots: List[CategoryNode] = []
        for node in nodes.values():
            parent = nodes.get(node.parent_id) if node.parent_id else None
            if parent is None:
                roots.append(node)
            else:
                parent.children.append(node)
        return roots

    def get_category(self, category_id: str) -> Category:
        category = self.store.get_category(category_id)
        if category is None:
            raise NotFoundError("Category not found")
        return category

    def _check_parent(self, category_id: Optional[str], parent_id: str):
        if self.store.get_category(parent_id) is None:
            raise NotFoundError("Parent category not found")

        if category_id is None:
            return

        # walk up from the new parent; meeting the category itself means a cycle
        parents = {c.id: c.parent_id for c in self.store.get_categories()}
        seen = set()
        current: Optional[str] = parent_id
        while current is not None and current not in seen:
            if current == category_id:
                raise ValidationFailedError(
                    "Category cannot be moved under itself or one of its descendants",
                    details={"categoryId": category_id, "parentId": parent_id},
                )
            seen.add(current)
            current = parents.get(current)

    def create_category(self, payload: CategoryCreate) -> Category:
        if payload.parent_id is not None:
            self._check_parent(None, payload.parent_id)

        now = utcnow()
        category = Category(
            id=new_id(),
            name=payload.name,
            parent_id=payload.parent_id,
            created_at=now,
            updated_at=now,
        )
        created = self.store.create_category(category)

        logger.info(f"Category {created.id} created")
        return created

    def update_category(self, category_id: str, payload: CategoryUpdate) -> Category:
        existing = self.get_category(category_id)

        changes = {}
        if "name" in payload.model_fields_set and payload.name is not None:
            changes["name"] = payload.name
        if "parent_id" in payload.model_fields_set:
            # explicit null turns the category into a root
            if payload.parent_id is not None:
                self._check_parent(category_id, payload.parent_id)
            changes["parent_id"] = payload.parent_id

        changes["updated_at"] = utcnow()
        updated = self.store.update_category(category_id, existing.model_copy(update=changes))

        logger.info(f"Category {category_id} updated")
        return updated

    def delete_category(self, category_id: str) -> Category:
        removed = self.store.delete_category(category_id)
        if removed is None:
            raise NotFoundError("Category not found")

        logger.info(f"Category {category_id} deleted")
        return removed
