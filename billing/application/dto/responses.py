"""Response DTOs for API endpoints.

Pydantic v2 models for API response serialization.
These are the ONLY contracts between use cases and API layer.
"""

from datetime import date, datetime
from decimal import Decimal
from typing import Any

from pydantic import BaseModel, Field

from billing.core.entities.invoice import Invoice, InvoiceItem
from billing.core.entities.product import Product, UnitType
from billing.core.entities.report import (
    MonthlyRevenue,
    Report,
    ReportSummary,
    SalesTrendPoint,
    StatusCount,
    TopProduct,
)

# --- Products ---


class UnitTypeResponse(BaseModel):
    """A measurement unit and whether it allows fractional quantities."""

    name: str
    code: str
    display_name: str
    allows_decimal: bool


class ProductResponse(BaseModel):
    """Catalog product response DTO."""

    id: int
    code: str
    name: str
    description: str | None = None
    price: Decimal
    mrp: Decimal | None = None
    quantity: Decimal
    min_stock_level: int
    category: str | None = None
    unit: UnitTypeResponse
    active: bool
    low_stock: bool
    created_at: datetime
    updated_at: datetime


class ProductListResponse(BaseModel):
    products: list[ProductResponse]
    total: int


class SkippedRowResponse(BaseModel):
    line_number: int
    reason: str


class BulkImportResponse(BaseModel):
    """Result of a CSV product import: created products and skipped rows."""

    created: list[ProductResponse] = Field(default_factory=list)
    skipped: list[SkippedRowResponse] = Field(default_factory=list)


# --- Invoices ---


class InvoiceItemResponse(BaseModel):
    """Invoice line item with product snapshot fields."""

    id: int | None = None
    product_id: int
    product_name: str | None = None
    product_code: str | None = None
    product_unit: str | None = None
    product_mrp: Decimal | None = None
    description: str | None = None
    quantity: Decimal
    unit_price: Decimal
    total_price: Decimal
    savings: Decimal


class InvoiceResponse(BaseModel):
    """Fully materialized invoice response DTO."""

    id: int
    invoice_number: str
    invoice_date: date
    due_date: date | None = None
    customer_name: str | None = None
    customer_email: str | None = None
    customer_phone: str | None = None
    customer_address: str | None = None
    subtotal: Decimal
    tax_amount: Decimal
    discount_amount: Decimal
    total_amount: Decimal
    status: str
    notes: str | None = None
    items: list[InvoiceItemResponse]
    created_at: datetime
    updated_at: datetime


class InvoiceListResponse(BaseModel):
    """List of invoices."""

    invoices: list[InvoiceResponse]
    total: int


# --- Reports ---


class ReportResponse(BaseModel):
    """Report view; sections not produced by a report type are empty."""

    report_type: str
    start_date: date | None = None
    end_date: date | None = None
    total_revenue: Decimal
    additional_data: dict[str, Any] = Field(default_factory=dict)
    sales_trend: list[SalesTrendPoint] = Field(default_factory=list)
    status_distribution: list[StatusCount] = Field(default_factory=list)
    top_products: list[TopProduct] = Field(default_factory=list)
    monthly_breakdown: list[MonthlyRevenue] = Field(default_factory=list)
    summary: ReportSummary | None = None


# --- Errors ---


class ErrorResponse(BaseModel):
    """Standardized error response DTO.

    Every error response includes:
    - error_code: machine-readable code (e.g. INVOICE_NOT_FOUND)
    - message: human-readable description
    - hint: suggested recovery action
    - path: request path that triggered the error
    """

    error_code: str = Field(..., description="Machine-readable error code")
    message: str = Field(..., description="Human-readable error description")
    hint: str | None = Field(default=None, description="Suggested recovery action")
    detail: str | None = Field(default=None, description="Additional details")
    path: str | None = Field(default=None, description="Request path")
    timestamp: datetime = Field(default_factory=datetime.now)


class HealthResponse(BaseModel):
    status: str
    version: str
    database: str
    uptime_seconds: float = 0.0


# --- Entity mapping ---


def unit_to_response(unit: UnitType) -> UnitTypeResponse:
    return UnitTypeResponse(
        name=unit.value,
        code=unit.code,
        display_name=unit.display_name,
        allows_decimal=unit.allows_decimal,
    )


def product_to_response(product: Product) -> ProductResponse:
    return ProductResponse(
        id=product.id,  # type: ignore[arg-type]
        code=product.code or "",
        name=product.name,
        description=product.description,
        price=product.price,
        mrp=product.mrp,
        quantity=product.quantity,
        min_stock_level=product.min_stock_level,
        category=product.category,
        unit=unit_to_response(product.unit),
        active=product.active,
        low_stock=product.is_low_stock,
        created_at=product.created_at,
        updated_at=product.updated_at,
    )


def _item_to_response(item: InvoiceItem) -> InvoiceItemResponse:
    return InvoiceItemResponse(
        id=item.id,
        product_id=item.product_id,
        product_name=item.product_name,
        product_code=item.product_code,
        product_unit=item.product_unit.display_name if item.product_unit else None,
        product_mrp=item.product_mrp,
        description=item.description,
        quantity=item.quantity,
        unit_price=item.unit_price,
        total_price=item.total_price,
        savings=item.savings,
    )


def invoice_to_response(invoice: Invoice) -> InvoiceResponse:
    return InvoiceResponse(
        id=invoice.id,  # type: ignore[arg-type]
        invoice_number=invoice.invoice_number or "",
        invoice_date=invoice.invoice_date,
        due_date=invoice.due_date,
        customer_name=invoice.customer_name,
        customer_email=invoice.customer_email,
        customer_phone=invoice.customer_phone,
        customer_address=invoice.customer_address,
        subtotal=invoice.subtotal,
        tax_amount=invoice.tax_amount,
        discount_amount=invoice.discount_amount,
        total_amount=invoice.total_amount,
        status=invoice.status.value,
        notes=invoice.notes,
        items=[_item_to_response(item) for item in invoice.items],
        created_at=invoice.created_at,
        updated_at=invoice.updated_at,
    )


def report_to_response(report: Report) -> ReportResponse:
    return ReportResponse(**report.model_dump())
