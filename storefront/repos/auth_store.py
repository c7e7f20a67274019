# storefront/repos/auth_store.py
import hmac
import uuid
from datetime import datetime, timedelta
from typing import Callable, Dict, NamedTuple

from storefront.data.models import AuthSession, AuthUser
from storefront.domain.errors import NotFoundError, UnauthorizedError
from storefront.repos.session_repo import InMemorySessionRepo
from storefront.utils.ids import utcnow
from storefront.utils.logging import get_logger
from storefront.utils.settings import SESSION_TTL_SECONDS

logger = get_logger(__name__)


class Credential(NamedTuple):
    password: str
    user: AuthUser


# plaintext on purpose, this is a demo login table
DEFAULT_CREDENTIALS: Dict[str, Credential] = {
    "alice@example.com": Credential(
        password="password123",
        user=AuthUser(
            id="550e8400-e29b-41d4-a716-446655440001",
            email="alice@example.com",
            name="Alice Johnson",
        ),
    ),
    "bob@example.com": Credential(
        password="password456",
        user=AuthUser(
            id="550e8400-e29b-41d4-a716-446655440002",
            email="bob@example.com",
            name="Bob Smith",
        ),
    ),
}


class AuthStore:
    """
    Fixed credential table plus bearer-token sessions.

    Sessions have an absolute expiry. Expired ones are removed when they are
    next validated, or by cleanup_expired_tokens (see tasks/expire.py).
    """

    def __init__(
        self,
        credentials: Dict[str, Credential] | None = None,
        sessions=None,
        ttl_seconds: int = SESSION_TTL_SECONDS,
        clock: Callable[[], datetime] = utcnow,
    ):
        self.credentials = dict(DEFAULT_CREDENTIALS if credentials is None else credentials)
        self.sessions = sessions if sessions is not None else InMemorySessionRepo()
        self.ttl_seconds = ttl_seconds
        self.clock = clock

    def login(self, email: str, password: str) -> AuthSession:
        record = self.credentials.get(email)
        # same error whether the email or the password is wrong
        if record is None or not hmac.compare_digest(record.password.encode(), password.encode()):
            logger.info("Login rejected")
            raise UnauthorizedError("Invalid email or password")

        session = AuthSession(
            token=str(uuid.uuid4()),
            user=record.user,
            expires_at=self.clock() + timedelta(seconds=self.ttl_seconds),
        )
        self.sessions.save(session, self.ttl_seconds)

        logger.info(f"User {record.user.id} logged in")
        return session

    def logout(self, token: str):
        self.sessions.delete(token)

    def validate_token(self, token: str) -> AuthUser:
        session = self.sessions.load(token)
        if session is None:
            raise NotFoundError("Session not found")

        if self.clock() > session.expires_at:
            self.sessions.delete(token)
            raise NotFoundError("Session expired")

        return session.user

    def cleanup_expired_tokens(self) -> int:
        return self.sessions.purge_expired(self.clock())
