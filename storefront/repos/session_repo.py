# storefront/repos/session_repo.py
import threading
import zlib
from datetime import datetime
from typing import Dict, List, Optional

import redis

from storefront.data.models import AuthSession
from storefront.utils.logging import get_logger
from storefront.utils.retry import redis_retry
from storefront.utils.settings import REDIS_URL, SESSION_BACKEND

logger = get_logger(__name__)


class InMemorySessionRepo:
    """
    Token -> session map split into shards, each with its own lock, so
    validations for different tokens do not queue behind one lock.
    """

    def __init__(self, shards: int = 16):
        self._shards: List[Dict[str, AuthSession]] = [{} for _ in range(shards)]
        self._locks = [threading.Lock() for _ in range(shards)]

    def _index(self, token: str) -> int:
        return zlib.crc32(token.encode()) % len(self._shards)

    def save(self, session: AuthSession, ttl_seconds: int):
        i = self._index(session.token)
        with self._locks[i]:
            self._shards[i][session.token] = session

    def load(self, token: str) -> Optional[AuthSession]:
        i = self._index(token)
        with self._locks[i]:
            return self._shards[i].get(token)

    def delete(self, token: str):
        i = self._index(token)
        with self._locks[i]:
            self._shards[i].pop(token, None)

    def purge_expired(self, now: datetime) -> int:
        removed = 0
        for shard, lock in zip(self._shards, self._locks):
            with lock:
                expired = [t for t, s in shard.items() if now > s.expires_at]
                for token in expired:
                    del shard[token]
                removed += len(expired)
        return removed

    def __len__(self):
        return sum(len(shard) for shard in self._shards)


class RedisSessionRepo:
    """
    Sessions as JSON strings under session:<token>.
    Keys carry the session TTL, so Redis drops expired sessions itself.
    """

    def __init__(self, url: str | None = None, client: redis.Redis | None = None, prefix: str = "session"):
        self.redis = client or redis.Redis.from_url(
            url or REDIS_URL,
            decode_responses=True,
        )
        self.prefix = prefix

    def _key(self, token: str) -> str:
        return f"{self.prefix}:{token}"

    @redis_retry()
    def save(self, session: AuthSession, ttl_seconds: int):
        #SET session:<token> <json> EX <ttl>
        self.redis.set(
            name=self._key(session.token),
            value=session.model_dump_json(),
            ex=max(ttl_seconds, 1),
        )

    @redis_retry()
    def load(self, token: str) -> Optional[AuthSession]:
        raw = self.redis.get(self._key(token))
        if raw is None:
            return None
        return AuthSession.model_validate_json(raw)

    @redis_retry()
    def delete(self, token: str):
        self.redis.delete(self._key(token))

    def purge_expired(self, now: datetime) -> int:
        # EX on every key already covers this
        return 0


def build_session_repo(backend: str | None = None):
    backend = (backend or SESSION_BACKEND).lower()

    if backend == "memory":
        return InMemorySessionRepo()

    if backend == "redis":
        logger.info(f"Using Redis session backend at {REDIS_URL}")
        return RedisSessionRepo()

    raise ValueError(f"Unknown session backend: {backend}")
