from fastapi import APIRouter, Depends, Query, Response

from storefront.api.deps import get_user_service
from storefront.data.models import User
from storefront.domain.schemas import Page, UserCreate, UserUpdate
from storefront.services.user_service import UserService
from storefront.utils.settings import MAX_PAGE_SIZE, USERS_PAGE_SIZE

router = APIRouter(prefix="/users", tags=["users"])


@router.get("", response_model=Page[User])
def list_users(
    limit: int = Query(USERS_PAGE_SIZE, ge=1, le=MAX_PAGE_SIZE),
    offset: int = Query(0, ge=0),
    service: UserService = Depends(get_user_service),
):
    return service.list_users(limit, offset)


@router.post("", response_model=User, status_code=201)
def create_user(payload: UserCreate, service: UserService = Depends(get_user_service)):
    return service.create_user(payload)


@router.get("/{user_id}", response_model=User)
def get_user(user_id: str, service: UserService = Depends(get_user_service)):
    return service.get_user(user_id)


@router.patch("/{user_id}", response_model=User)
def update_user(user_id: str, payload: UserUpdate, service: UserService = Depends(get_user_service)):
    return service.update_user(user_id, payload)


@router.delete("/{user_id}", status_code=204)
def delete_user(user_id: str, service: UserService = Depends(get_user_service)):
    service.delete_user(user_id)
    return Response(status_code=204)
