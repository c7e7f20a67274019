# storefront/tasks/expire.py
import asyncio

from storefront.repos.auth_store import AuthStore
from storefront.utils.logging import get_logger

logger = get_logger(__name__)


def expire_sessions_task(auth_store: AuthStore) -> int:
    logger.info("Expire sessions task started")

    removed = auth_store.cleanup_expired_tokens()

    logger.info(f"Removed {removed} expired sessions")
    return removed


async def run_session_sweeper(auth_store: AuthStore, interval_seconds: float):
    """Runs expire_sessions_task every interval until cancelled."""
    while True:
        await asyncio.sleep(interval_seconds)
        try:
            expire_sessions_task(auth_store)
        except Exception as e:
            # keep sweeping, the next run may succeed
            logger.warning(f"Session sweep failed: {e}")
