#storefront/api/routers/carts.py
from fastapi import APIRouter, Depends, Response

from storefront.api.deps import get_cart_service
from storefront.data.models import Cart
from storefront.domain.schemas import CartItemIn, CartItemUpdate
from storefront.services.cart_service import CartService

router = APIRouter(prefix="/carts", tags=["carts"])


@router.get("/users/{user_id}", response_model=Cart)
def get_cart(user_id: str, svc: CartService = Depends(get_cart_service)):
    return svc.get_cart(user_id)


@router.post("/users/{user_id}/items", response_model=Cart)
def add_item(user_id: str, payload: CartItemIn, svc: CartService = Depends(get_cart_service)):
    return svc.add_item(user_id, payload.product_id, payload.quantity)


@router.patch("/users/{user_id}/items/{product_id}", response_model=Cart)
def update_item(
    user_id: str,
    product_id: str,
    payload: CartItemUpdate,
    svc: CartService = Depends(get_cart_service),
):
    return svc.update_item(user_id, product_id, payload.quantity)


@router.delete("/users/{user_id}/items/{product_id}", status_code=204)
def remove_item(user_id: str, product_id: str, svc: CartService = Depends(get_cart_service)):
    svc.remove_item(user_id, product_id)
    return Response(status_code=204)


@router.delete("/users/{user_id}/items", status_code=204)
def clear_cart(user_id: str, svc: CartService = Depends(get_cart_service)):
    svc.clear(user_id)
    return Response(status_code=204)
