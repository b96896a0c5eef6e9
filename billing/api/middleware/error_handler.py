"""
Error responses.

Every failure leaves the API as an ``ErrorResponse`` body: a
machine-readable ``error_code``, a message, a recovery hint and the
request path. Domain errors map to a status by type; the first matching
entry of ``EXCEPTION_STATUS_MAP`` wins, so subclasses come first.
"""

import json
from collections.abc import Awaitable, Callable

from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException
from starlette.middleware.base import BaseHTTPMiddleware
from starlette.responses import Response

from billing.application.dto.responses import ErrorResponse
from billing.config import get_logger
from billing.core.exceptions import (
    BillingError,
    ConfigurationError,
    ExportError,
    InvalidStateError,
    NotFoundError,
    PermissionDeniedError,
    StorageError,
    ValidationError,
)

logger = get_logger(__name__)

EXCEPTION_STATUS_MAP: dict[type[Exception], int] = {
    NotFoundError: status.HTTP_404_NOT_FOUND,
    PermissionDeniedError: status.HTTP_403_FORBIDDEN,
    InvalidStateError: status.HTTP_409_CONFLICT,
    ValidationError: status.HTTP_400_BAD_REQUEST,
    StorageError: status.HTTP_500_INTERNAL_SERVER_ERROR,
    ExportError: status.HTTP_500_INTERNAL_SERVER_ERROR,
    ConfigurationError: status.HTTP_500_INTERNAL_SERVER_ERROR,
    ValueError: status.HTTP_400_BAD_REQUEST,
}

HINTS: dict[str | int, str] = {
    "INVOICE_NOT_FOUND": "Check the invoice ID; GET /api/invoices lists your invoices.",
    "PRODUCT_NOT_FOUND": "Check the product ID; GET /api/products lists your products.",
    "PERMISSION_DENIED": "The resource belongs to another tenant. Check the tenant header.",
    "INVOICE_PAID": "Paid invoices are read-only. Change the status first to correct one.",
    "PRODUCT_IN_USE": "Invoices still reference this product. Deactivate it instead.",
    "DUPLICATE_INVOICE_NUMBER": "Another invoice took this number. Retry the request.",
    "VALIDATION_ERROR": "Check the request body against the API schema.",
    "EXPORT_FAILED": "The document could not be rendered. Check server logs.",
    "DATABASE_ERROR": "A database operation failed. Check server logs.",
    status.HTTP_400_BAD_REQUEST: "Check the request parameters and body.",
    status.HTTP_401_UNAUTHORIZED: "Send the tenant header set by the auth gateway.",
    status.HTTP_403_FORBIDDEN: "You do not have access to this resource.",
    status.HTTP_404_NOT_FOUND: "The requested resource was not found. Verify the ID.",
    status.HTTP_409_CONFLICT: "The resource is not in a state that allows this operation.",
    status.HTTP_413_CONTENT_TOO_LARGE: "Split the upload into smaller files.",
    status.HTTP_422_UNPROCESSABLE_CONTENT: "Check the request fields and types.",
    status.HTTP_500_INTERNAL_SERVER_ERROR: "An internal error occurred. Check server logs.",
}

HTTP_ERROR_CODES: dict[int, str] = {
    400: "BAD_REQUEST",
    401: "UNAUTHORIZED",
    403: "PERMISSION_DENIED",
    404: "NOT_FOUND",
    405: "METHOD_NOT_ALLOWED",
    413: "PAYLOAD_TOO_LARGE",
}


def error_json(
    request: Request,
    status_code: int,
    error_code: str,
    message: str,
    detail: str | None = None,
) -> JSONResponse:
    body = ErrorResponse(
        error_code=error_code,
        message=message,
        hint=HINTS.get(error_code) or HINTS.get(status_code),
        detail=detail,
        path=request.url.path,
    )
    return JSONResponse(status_code=status_code, content=body.model_dump(mode="json"))


def status_for(exc: Exception) -> int:
    return next(
        (code for exc_type, code in EXCEPTION_STATUS_MAP.items() if isinstance(exc, exc_type)),
        status.HTTP_500_INTERNAL_SERVER_ERROR,
    )


def build_error_response(request: Request, exc: Exception) -> JSONResponse:
    """Translate a raised exception into its JSON error response and log it."""
    status_code = status_for(exc)
    if isinstance(exc, BillingError):
        error_code, message = exc.code, exc.message
        detail = json.dumps(exc.details, default=str) if exc.details else None
    else:
        error_code, message, detail = type(exc).__name__, str(exc), None

    if status_code >= 500:
        logger.error(
            "request_error", path=request.url.path, error_code=error_code, exc_info=exc
        )
    else:
        logger.warning(
            "request_rejected",
            path=request.url.path,
            error_code=error_code,
            status=status_code,
        )
    return error_json(request, status_code, error_code, message, detail)


class ErrorHandlerMiddleware(BaseHTTPMiddleware):
    """Last line of defence for exceptions no handler claimed."""

    async def dispatch(
        self,
        request: Request,
        call_next: Callable[[Request], Awaitable[Response]],
    ) -> Response:
        try:
            return await call_next(request)
        except Exception as e:
            return build_error_response(request, e)


async def _on_billing_error(request: Request, exc: BillingError) -> JSONResponse:
    return build_error_response(request, exc)


async def _on_request_validation(request: Request, exc: RequestValidationError) -> JSONResponse:
    problems = [
        f"{'.'.join(str(part) for part in err['loc'])}: {err['msg']}" for err in exc.errors()
    ]
    return error_json(
        request,
        status.HTTP_422_UNPROCESSABLE_CONTENT,
        "REQUEST_INVALID",
        "Request validation failed",
        "; ".join(problems),
    )


async def _on_http_exception(request: Request, exc: HTTPException) -> JSONResponse:
    return error_json(
        request,
        exc.status_code,
        HTTP_ERROR_CODES.get(exc.status_code, "HTTP_ERROR"),
        str(exc.detail) if exc.detail else "An error occurred",
    )


def setup_exception_handlers(app: FastAPI) -> None:
    app.add_exception_handler(BillingError, _on_billing_error)
    app.add_exception_handler(RequestValidationError, _on_request_validation)
    app.add_exception_handler(HTTPException, _on_http_exception)
