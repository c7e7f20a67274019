# storefront/api/routers/categories.py
from typing import List

from fastapi import APIRouter, Depends, Response

from storefront.api.deps import get_category_service
from storefront.data.models import Category, CategoryNode
from storefront.domain.schemas import CategoryCreate, CategoryUpdate
from storefront.services.category_service import CategoryService

router = APIRouter(prefix="/categories", tags=["categories"])


@router.get("", response_model=List[Category])
def list_categories(svc: CategoryService = Depends(get_category_service)):
    return svc.list_categories()


@router.get("/tree", response_model=List[CategoryNode])
def category_tree(svc: CategoryService = Depends(get_category_service)):
    return svc.get_tree()


@router.post("", response_model=Category, status_code=201)
def create_category(payload: CategoryCreate, svc: CategoryService = Depends(get_category_service)):
    return svc.create_category(payload)


@router.get("/{category_id}", response_model=Category)
def get_category(category_id: str, svc: CategoryService = Depends(get_category_service)):
    return svc.get_category(category_id)


@router.patch("/{category_id}", response_model=Category)
def update_category(
    category_id: str,
    payload: CategoryUpdate,
    svc: CategoryService = Depends(get_category_service),
):
    return svc.update_category(category_id, payload)


@router.delete("/{category_id}", status_code=204)
def delete_category(category_id: str, svc: CategoryService = Depends(get_category_service)):
    svc.delete_category(category_id)
    return Response(status_code=204)
