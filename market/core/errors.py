# market/core/errors.py
"""Error taxonomy for the marketplace API.

- validation errors (missing or invalid input) -> 400
- not-found (entity absent) -> 404
- infrastructure errors (database / filesystem) -> 500, logged server-side,
  generic message to the client
"""
from typing import Any, Dict

from fastapi import Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse

from market.utils.logger import get_logger

logger = get_logger(__name__)


class MarketError(Exception):
    """Base exception. Rendered as ``{"message", "code"}`` with ``status_code``."""

    def __init__(self, message: str, code: str = "MARKET_ERROR", status_code: int = 500):
        super().__init__(message)
        self.message = message
        self.code = code
        self.status_code = status_code

    def to_dict(self) -> Dict[str, Any]:
        return {"message": self.message, "code": self.code}


class ValidationFailed(MarketError):
    def __init__(self, message: str, code: str = "VALIDATION_ERROR"):
        super().__init__(message, code=code, status_code=400)


class InvalidId(MarketError):
    """Raised when an identifier is not a 32 character hex UUID."""

    def __init__(self, value: str):
        super().__init__(f"Invalid id: {value}", code="INVALID_ID", status_code=400)


class NotFound(MarketError):
    def __init__(self, message: str, code: str = "NOT_FOUND"):
        super().__init__(message, code=code, status_code=404)


class StorageError(MarketError):
    """Filesystem failure while handling an upload."""

    def __init__(self, message: str = "Failed to store image"):
        super().__init__(message, code="STORAGE_ERROR", status_code=500)


# ---------- handlers ----------
async def market_exception_handler(request: Request, exc: MarketError) -> JSONResponse:
    if exc.status_code >= 500:
        logger.error("%s %s failed: %s", request.method, request.url.path, exc.message)
    return JSONResponse(status_code=exc.status_code, content=exc.to_dict())


async def validation_exception_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
    fields = sorted({str(err["loc"][-1]) for err in exc.errors() if err.get("loc")})
    message = "Invalid request"
    if fields:
        message = f"Invalid request: {', '.join(fields)}"
    return JSONResponse(status_code=400, content={"message": message, "code": "VALIDATION_ERROR"})


async def unhandled_exception_handler(request: Request, exc: Exception) -> JSONResponse:
    logger.exception("Unexpected error in %s %s", request.method, request.url.path)
    return JSONResponse(
        status_code=500,
        content={"message": "Internal server error", "code": "INTERNAL_ERROR"},
    )
