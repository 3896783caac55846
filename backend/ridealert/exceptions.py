"""
Error taxonomy for the RideAlert API and the FastAPI handler that renders it.

Every failure reaches the caller as an HTTP status plus ``{"error": message}``;
upstream and storage failures also carry a ``details`` object.
"""

import logging
from typing import Any, Dict, Optional

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse

logger = logging.getLogger(__name__)

UPSTREAM_BODY_LIMIT = 200


class ServiceError(Exception):
    """Base class for errors that map directly onto an HTTP response."""

    status_code = 500

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message

    def details(self) -> Optional[Dict[str, Any]]:
        return None

    def to_dict(self) -> Dict[str, Any]:
        body: Dict[str, Any] = {"error": self.message}
        details = self.details()
        if details:
            body["details"] = details
        return body


class BadRequest(ServiceError):
    """Missing or invalid caller input."""

    status_code = 400


class Unauthorized(ServiceError):
    """Missing or rejected bearer token."""

    status_code = 401


class NotFound(ServiceError):
    """No matching owned row, or no matching agency."""

    status_code = 404


class UpstreamError(ServiceError):
    """Non-success or unparsable response from the transit API."""

    status_code = 502

    def __init__(self, status: Optional[int], body: str, message: Optional[str] = None):
        self.status = status
        self.body = (body or "")[:UPSTREAM_BODY_LIMIT]
        if message is None:
            message = f"UmoIQ error {status}: {self.body}" if status else f"UmoIQ request failed: {self.body}"
        super().__init__(message)

    def details(self) -> Optional[Dict[str, Any]]:
        return {"status": self.status, "body": self.body}


class StorageError(ServiceError):
    """A data-store call failed."""

    status_code = 500

    def __init__(self, message: str, operation: Optional[str] = None):
        super().__init__(message)
        self.operation = operation

    def details(self) -> Optional[Dict[str, Any]]:
        return {"operation": self.operation} if self.operation else None


async def service_error_handler(request: Request, exc: ServiceError) -> JSONResponse:
    if exc.status_code >= 500:
        logger.error(f"{request.method} {request.url.path} failed: {exc.message}")
    else:
        logger.info(f"{request.method} {request.url.path} -> {exc.status_code}: {exc.message}")
    return JSONResponse(status_code=exc.status_code, content=exc.to_dict())


def _describe_validation_error(exc: RequestValidationError) -> str:
    errors = exc.errors()
    if not errors:
        return "Invalid request"
    first = errors[0]
    loc = [str(part) for part in first.get("loc", ())]
    where = loc[0] if loc else "request"
    field = ".".join(loc[1:]) or where
    msg = first.get("msg", "invalid value")
    return f"Invalid {where} parameter '{field}': {msg}"


async def validation_error_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
    """Render request validation failures as BadRequest instead of the framework's 422."""
    return await service_error_handler(request, BadRequest(_describe_validation_error(exc)))


def register_exception_handlers(app: FastAPI) -> None:
    app.add_exception_handler(ServiceError, service_error_handler)
    app.add_exception_handler(RequestValidationError, validation_error_handler)
