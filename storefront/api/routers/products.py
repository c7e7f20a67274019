# storefront/api/routers/products.py
from decimal import Decimal
from typing import Optional

from fastapi import APIRouter, Depends, Query, Response

from storefront.api.deps import get_product_service
from storefront.data.models import Product
from storefront.domain.schemas import Page, ProductCreate, ProductSortField, ProductUpdate, SortOrder
from storefront.services.product_service import ProductService
from storefront.utils.settings import MAX_PAGE_SIZE, PRODUCTS_PAGE_SIZE

router = APIRouter(prefix="/products", tags=["products"])


@router.get("", response_model=Page[Product])
def list_products(
    name: Optional[str] = Query(None),
    category_id: Optional[str] = Query(None, alias="categoryId"),
    min_price: Optional[Decimal] = Query(None, alias="minPrice", ge=0),
    max_price: Optional[Decimal] = Query(None, alias="maxPrice", ge=0),
    sort_by: Optional[ProductSortField] = Query(None, alias="sortBy"),
    order: SortOrder = Query(SortOrder.ASC),
    limit: int = Query(PRODUCTS_PAGE_SIZE, ge=1, le=MAX_PAGE_SIZE),
    offset: int = Query(0, ge=0),
    svc: ProductService = Depends(get_product_service),
):
    return svc.list_products(
        limit=limit,
        offset=offset,
        name=name,
        category_id=category_id,
        min_price=min_price,
        max_price=max_price,
        sort_by=sort_by,
        order=order,
    )


@router.post("", response_model=Product, status_code=201)
def create_product(payload: ProductCreate, svc: ProductService = Depends(get_product_service)):
    return svc.create_product(payload)


@router.get("/{product_id}", response_model=Product)
def get_product(product_id: str, svc: ProductService = Depends(get_product_service)):
    return svc.get_product(product_id)


@router.patch("/{product_id}", response_model=Product)
def update_product(
    product_id: str,
    payload: ProductUpdate,
    svc: ProductService = Depends(get_product_service),
):
    return svc.update_product(product_id, payload)


@router.delete("/{product_id}", status_code=204)
def delete_product(product_id: str, svc: ProductService = Depends(get_product_service)):
    svc.delete_product(product_id)
    return Response(status_code=204)
