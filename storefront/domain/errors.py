# storefront/domain/errors.py
from enum import Enum
from typing import Any, Dict


class ErrorCode(str, Enum):
    BAD_REQUEST = "BAD_REQUEST"
    UNAUTHORIZED = "UNAUTHORIZED"
    FORBIDDEN = "FORBIDDEN"
    NOT_FOUND = "NOT_FOUND"
    CONFLICT = "CONFLICT"
    VALIDATION_ERROR = "VALIDATION_ERROR"
    INSUFFICIENT_STOCK = "INSUFFICIENT_STOCK"
    INVALID_STATE_TRANSITION = "INVALID_STATE_TRANSITION"
    INTERNAL_ERROR = "INTERNAL_ERROR"
    SERVICE_UNAVAILABLE = "SERVICE_UNAVAILABLE"


STATUS_BY_CODE: Dict[ErrorCode, int] = {
    ErrorCode.BAD_REQUEST: 400,
    ErrorCode.UNAUTHORIZED: 401,
    ErrorCode.FORBIDDEN: 403,
    ErrorCode.NOT_FOUND: 404,
    ErrorCode.CONFLICT: 409,
    ErrorCode.VALIDATION_ERROR: 400,
    ErrorCode.INSUFFICIENT_STOCK: 400,
    ErrorCode.INVALID_STATE_TRANSITION: 400,
    ErrorCode.INTERNAL_ERROR: 500,
    ErrorCode.SERVICE_UNAVAILABLE: 503,
}


def error_body(code: ErrorCode, message: str, details: Any = None) -> Dict[str, Any]:
    error: Dict[str, Any] = {"code": code.value, "message": message}
    if details is not None:
        error["details"] = details
    return {"error": error}


class ApiError(Exception):
    """Base for every failure that is reported to the caller."""

    code = ErrorCode.INTERNAL_ERROR

    def __init__(self, message: str, details: Any = None):
        super().__init__(message)
        self.message = message
        self.details = details

    @property
    def status_code(self) -> int:
        return STATUS_BY_CODE[self.code]

    def to_body(self) -> Dict[str, Any]:
        return error_body(self.code, self.message, self.details)


class BadRequestError(ApiError):
    code = ErrorCode.BAD_REQUEST


class UnauthorizedError(ApiError):
    code = ErrorCode.UNAUTHORIZED


class NotFoundError(ApiError):
    code = ErrorCode.NOT_FOUND


class ConflictError(ApiError):
    code = ErrorCode.CONFLICT


class ValidationFailedError(ApiError):
    code = ErrorCode.VALIDATION_ERROR


class InsufficientStockError(ApiError):
    code = ErrorCode.INSUFFICIENT_STOCK


class InvalidStateTransitionError(ApiError):
    code = ErrorCode.INVALID_STATE_TRANSITION


class ServiceUnavailableError(ApiError):
    code = ErrorCode.SERVICE_UNAVAILABLE
