# storefront/api/routers/auth.py
from fastapi import APIRouter, Depends, Request

from storefront.api.deps import get_auth_store, get_current_user
from storefront.data.models import AuthUser
from storefront.domain.schemas import LoginIn, LoginOut, MessageOut
from storefront.repos.auth_store import AuthStore

router = APIRouter(prefix="/auth", tags=["auth"])


@router.post("/login", response_model=LoginOut)
def login(payload: LoginIn, auth_store: AuthStore = Depends(get_auth_store)):
    session = auth_store.login(payload.email, payload.password)
    return LoginOut(
        access_token=session.token,
        token_type="Bearer",
        expires_in=auth_store.ttl_seconds,
        user=session.user,
    )


@router.post("/logout", response_model=MessageOut)
def logout(
    request: Request,
    user: AuthUser = Depends(get_current_user),
    auth_store: AuthStore = Depends(get_auth_store),
):
    auth_store.logout(request.state.token)
    return MessageOut(message="Logged out successfully")


@router.get("/me", response_model=AuthUser)
def me(user: AuthUser = Depends(get_current_user)):
    return user
