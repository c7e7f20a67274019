from datetime import datetime

from storefront.data.models.base import CamelModel


class AuthUser(CamelModel):
    id: str
    email: str
    name: str


class AuthSession(CamelModel):
    token: str
    user: AuthUser
    expires_at: datetime
