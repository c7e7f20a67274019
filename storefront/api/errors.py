# storefront/api/errors.py
from fastapi import FastAPI, Request
from fastapi.encoders import jsonable_encoder
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from redis.exceptions import RedisError
from starlette.exceptions import HTTPException as StarletteHTTPException

from storefront.domain.errors import ApiError, BadRequestError, ErrorCode, ServiceUnavailableError, error_body
from storefront.utils.logging import get_logger

logger = get_logger(__name__)

_CODE_BY_STATUS = {
    400: ErrorCode.BAD_REQUEST,
    401: ErrorCode.UNAUTHORIZED,
    403: ErrorCode.FORBIDDEN,
    404: ErrorCode.NOT_FOUND,
    405: ErrorCode.BAD_REQUEST,
    409: ErrorCode.CONFLICT,
    503: ErrorCode.SERVICE_UNAVAILABLE,
}


async def api_error_handler(request: Request, exc: ApiError):
    return JSONResponse(status_code=exc.status_code, content=jsonable_encoder(exc.to_body()))


async def validation_error_handler(request: Request, exc: RequestValidationError):
    errors = exc.errors()

    # body that is not JSON at all
    if any(e.get("type") == "json_invalid" for e in errors):
        err = BadRequestError("Invalid request body")
        return JSONResponse(status_code=err.status_code, content=err.to_body())

    details = [
        {"loc": list(e.get("loc", ())), "msg": e.get("msg"), "type": e.get("type")}
        for e in errors
    ]
    return JSONResponse(
        status_code=400,
        content=jsonable_encoder(error_body(ErrorCode.VALIDATION_ERROR, "Validation failed", details)),
    )


async def http_error_handler(request: Request, exc: StarletteHTTPException):
    code = _CODE_BY_STATUS.get(exc.status_code, ErrorCode.INTERNAL_ERROR)
    return JSONResponse(
        status_code=exc.status_code,
        content=error_body(code, str(exc.detail)),
        headers=getattr(exc, "headers", None),
    )


async def session_store_error_handler(request: Request, exc: RedisError):
    # login and logout reach the session backend from inside a route
    logger.error(f"Session store unavailable on {request.method} {request.url.path}: {exc}")
    err = ServiceUnavailableError("Session store unavailable")
    return JSONResponse(status_code=err.status_code, content=err.to_body())


async def unhandled_error_handler(request: Request, exc: Exception):
    logger.exception(f"Unhandled error on {request.method} {request.url.path}")
    return JSONResponse(
        status_code=500,
        content=error_body(ErrorCode.INTERNAL_ERROR, "An unexpected error occurred"),
    )


def install_error_handlers(app: FastAPI):
    app.add_exception_handler(ApiError, api_error_handler)
    app.add_exception_handler(RequestValidationError, validation_error_handler)
    app.add_exception_handler(StarletteHTTPException, http_error_handler)
    app.add_exception_handler(RedisError, session_store_error_handler)
    app.add_exception_handler(Exception, unhandled_error_handler)
