"""Data Transfer Objects for API layer.

Request DTOs: Validate and parse incoming API requests.
Response DTOs: Structure and serialize API responses.

These are the ONLY contracts between API handlers and use cases.
"""

from billing.application.dto.requests import (
    InvoiceItemRequest,
    InvoiceRequest,
    ProductRequest,
    UpdateInvoiceStatusRequest,
)
from billing.application.dto.responses import (
    BulkImportResponse,
    ErrorResponse,
    HealthResponse,
    InvoiceItemResponse,
    InvoiceListResponse,
    InvoiceResponse,
    ProductListResponse,
    ProductResponse,
    ReportResponse,
    SkippedRowResponse,
    UnitTypeResponse,
    invoice_to_response,
    product_to_response,
    report_to_response,
    unit_to_response,
)

__all__ = [
    # Requests
    "InvoiceItemRequest",
    "InvoiceRequest",
    "ProductRequest",
    "UpdateInvoiceStatusRequest",
    # Responses
    "BulkImportResponse",
    "ErrorResponse",
    "HealthResponse",
    "InvoiceItemResponse",
    "InvoiceListResponse",
    "InvoiceResponse",
    "ProductListResponse",
    "ProductResponse",
    "ReportResponse",
    "SkippedRowResponse",
    "UnitTypeResponse",
    # Mapping
    "invoice_to_response",
    "product_to_response",
    "report_to_response",
    "unit_to_response",
]
