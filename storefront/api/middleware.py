# storefront/api/middleware.py
import time

from fastapi import Request
from fastapi.responses import JSONResponse
from redis.exceptions import RedisError
from starlette.concurrency import run_in_threadpool

from storefront.domain.errors import ApiError, NotFoundError, ServiceUnavailableError, UnauthorizedError
from storefront.utils.logging import get_logger

logger = get_logger(__name__)

PROTECTED_PREFIXES = ("/carts", "/orders", "/users", "/auth/me", "/auth/logout")


def is_protected(path: str) -> bool:
    return any(path == prefix or path.startswith(prefix + "/") for prefix in PROTECTED_PREFIXES)


def extract_bearer_token(header: str | None) -> str | None:
    if not header:
        return None
    parts = header.split(" ")
    if len(parts) != 2 or parts[0] != "Bearer" or not parts[1]:
        return None
    return parts[1]


def _error_response(err: ApiError) -> JSONResponse:
    return JSONResponse(status_code=err.status_code, content=err.to_body())


async def auth_middleware(request: Request, call_next):
    """Bearer token check for protected path prefixes."""
    if not is_protected(request.url.path):
        return await call_next(request)

    header = request.headers.get("Authorization")
    if not header:
        return _error_response(UnauthorizedError("Missing Authorization header"))

    token = extract_bearer_token(header)
    if token is None:
        return _error_response(UnauthorizedError("Invalid Authorization header format"))

    # the session backend may block on network I/O, keep it off the event loop
    try:
        user = await run_in_threadpool(request.app.state.auth_store.validate_token, token)
    except RedisError as e:
        logger.error(f"Session store unavailable: {e}")
        return _error_response(ServiceUnavailableError("Session store unavailable"))
    except NotFoundError:
        return _error_response(UnauthorizedError("Invalid or expired token"))

    request.state.user = user
    request.state.token = token
    return await call_next(request)


async def access_log_middleware(request: Request, call_next):
    started = time.perf_counter()
    response = await call_next(request)
    elapsed_ms = (time.perf_counter() - started) * 1000
    logger.info(f"{request.method} {request.url.path} -> {response.status_code} ({elapsed_ms:.1f} ms)")
    return response
