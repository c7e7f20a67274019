from decimal import Decimal
from typing import Optional

from storefront.data.models import Product
from storefront.domain.errors import NotFoundError
from storefront.domain.schemas import ProductCreate, ProductSortField, ProductUpdate, SortOrder
from storefront.repos.memory_store import MemoryStore
from storefront.utils.ids import new_id, utcnow
from storefront.utils.logging import get_logger
from storefront.utils.pagination import paginate

logger = get_logger(__name__)

_SORT_KEYS = {
    ProductSortField.NAME: lambda p: p.name,
    ProductSortField.PRICE: lambda p: p.price,
    ProductSortField.CREATED_AT: lambda p: p.created_at,
}


class ProductService:
    def __init__(self, store: MemoryStore):
        self.store = store

    def list_products(
        self,
        limit: int,
        offset: int,
        name: Optional[str] = None,
        category_id: Optional[str] = None,
        min_price: Optional[Decimal] = None,
        max_price: Optional[Decimal] = None,
        sort_by: Optional[ProductSortField] = None,
        order: SortOrder = SortOrder.ASC,
    ):
        products = self.store.get_products()

        if name:
            needle = name.lower()
            products = [
                p for p in products
                if needle in p.name.lower() or needle in p.description.lower()
            ]
        if category_id:
            products = [p for p in products if p.category_id == category_id]
        if min_price is not None:
            products = [p for p in products if p.price >= min_price]
        if max_price is not None:
            products = [p for p in products if p.price <= max_price]

        if sort_by is not None:
            products.sort(key=_SORT_KEYS[sort_by], reverse=order == SortOrder.DESC)

        return paginate(products, limit, offset)

    def get_product(self, product_id: str) -> Product:
        product = self.store.get_product(product_id)
        if product is None:
            raise NotFoundError("Product not found")
        return product

    def _require_category(self, category_id: str):
        if self.store.get_category(category_id) is None:
            raise NotFoundError("Category not found")

    def create_product(self, payload: ProductCreate) -> Product:
        self._require_category(payload.category_id)

        now = utcnow()
        product = Product(
            id=new_id(),
            name=payload.name,
            description=payload.description,
            price=payload.price,
            stock=payload.stock,
            category_id=payload.category_id,
            image_urls=list(payload.image_urls),
            created_at=now,
            updated_at=now,
        )
        created = self.store.create_product(product)

        logger.info(f"Product {created.id} created")
        return created

    def update_product(self, product_id: str, payload: ProductUpdate) -> Product:
        existing = self.get_product(product_id)

        changes = {
            field: getattr(payload, field)
            for field in payload.model_fields_set
            if getattr(payload, field) is not None
        }
        if "category_id" in changes and changes["category_id"] != existing.category_id:
            self._require_category(changes["category_id"])

        changes["updated_at"] = utcnow()
        updated = self.store.update_product(product_id, existing.model_copy(update=changes))

        logger.info(f"Product {product_id} updated: {sorted(changes)}")
        return updated

    def delete_product(self, product_id: str) -> Product:
        removed = self.store.delete_product(product_id)
        if removed is None:
            raise NotFoundError("Product not found")

        logger.info(f"Product {product_id} deleted")
        return removed
