# storefront/utils/retry.py
from redis.exceptions import RedisError
from tenacity import RetryCallState, retry, retry_if_exception_type, stop_after_attempt, wait_exponential

from storefront.utils.logging import get_logger

logger = get_logger(__name__)

REDIS_ATTEMPTS = 3


def _log_retry(state: RetryCallState):
    name = getattr(state.fn, "__qualname__", "redis call")
    logger.warning(
        f"{name} failed (attempt {state.attempt_number}/{REDIS_ATTEMPTS}): {state.outcome.exception()}"
    )


def redis_retry():
    """Retry a session backend call on Redis errors, re-raising the last one."""
    return retry(
        reraise=True,
        stop=stop_after_attempt(REDIS_ATTEMPTS),
        wait=wait_exponential(multiplier=0.2, min=0.2, max=2),
        retry=retry_if_exception_type(RedisError),
        before_sleep=_log_retry,
    )
