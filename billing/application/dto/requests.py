"""Request DTOs for API endpoints.

Pydantic v2 models for API request validation.
These are the ONLY contracts between API and use cases.
"""

from datetime import date
from decimal import Decimal

from pydantic import BaseModel, Field, field_validator

from billing.core.entities.invoice import InvoiceStatus
from billing.core.entities.product import UnitType

# --- Products ---


class ProductRequest(BaseModel):
    """Create or update a catalog product. Codes are assigned by the system."""

    name: str = Field(..., min_length=1, description="Product name")
    description: str | None = Field(default=None, description="Product description")
    price: Decimal = Field(..., gt=0, description="Selling price per unit")
    mrp: Decimal | None = Field(default=None, gt=0, description="Maximum retail price")
    quantity: Decimal = Field(default=Decimal("0"), ge=0, description="Stock on hand")
    min_stock_level: int = Field(default=0, ge=0, description="Low-stock threshold")
    category: str | None = Field(default=None, description="Product category")
    unit: UnitType = Field(default=UnitType.PIECES, description="Measurement unit")
    active: bool = Field(default=True, description="Whether the product is sellable")

    @field_validator("unit", mode="before")
    @classmethod
    def parse_unit(cls, value: object) -> object:
        """Accept unit names, codes ("kg") or display names ("Kilograms")."""
        if isinstance(value, str):
            return UnitType.from_string(value)
        return value


# --- Invoices ---


class InvoiceItemRequest(BaseModel):
    """A single line item of an invoice request."""

    product_id: int = Field(..., description="Catalog product ID")
    quantity: Decimal = Field(..., gt=0, description="Quantity sold")
    unit_price: Decimal = Field(..., gt=0, description="Price per unit at time of invoicing")
    description: str | None = Field(default=None, description="Line description")


class InvoiceRequest(BaseModel):
    """Create or update an invoice; tax and discount are absolute amounts."""

    invoice_date: date | None = Field(
        default=None,
        description="Invoice date (defaults to today)",
    )
    due_date: date | None = Field(default=None, description="Payment due date")
    customer_name: str = Field(..., min_length=1, description="Customer name")
    customer_email: str | None = Field(default=None, description="Customer email")
    customer_phone: str | None = Field(default=None, description="Customer phone")
    customer_address: str | None = Field(default=None, description="Customer address")
    tax_amount: Decimal = Field(default=Decimal("0"), ge=0, description="Tax amount")
    discount_amount: Decimal = Field(default=Decimal("0"), ge=0, description="Discount amount")
    status: InvoiceStatus | None = Field(
        default=None,
        description="Status (DRAFT on create, unchanged on update when omitted)",
    )
    notes: str | None = Field(default=None, description="Additional notes")
    items: list[InvoiceItemRequest] = Field(
        default_factory=list, description="Line items"
    )


class UpdateInvoiceStatusRequest(BaseModel):
    """Overwrite an invoice's status."""

    status: InvoiceStatus = Field(..., description="New status")
