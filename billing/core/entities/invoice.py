"""Invoice domain entities."""

from datetime import UTC, date, datetime
from decimal import Decimal
from enum import Enum

from pydantic import BaseModel, Field, computed_field, model_validator

from billing.core.entities.product import UnitType
from billing.core.exceptions import PaidInvoiceError

ZERO = Decimal("0")


class InvoiceStatus(str, Enum):
    """Invoice lifecycle status.

    Any status may be set from any other; only PAID restricts further
    updates and deletion.
    """

    DRAFT = "DRAFT"
    SENT = "SENT"
    PAID = "PAID"
    OVERDUE = "OVERDUE"
    CANCELLED = "CANCELLED"


class InvoiceItem(BaseModel):
    """A single line item referencing one catalog product."""

    id: int | None = None
    invoice_id: int | None = None
    product_id: int
    quantity: Decimal
    unit_price: Decimal  # snapshot at time of invoicing
    description: str | None = None

    # Denormalized product fields for display
    product_name: str | None = None
    product_code: str | None = None
    product_unit: UnitType | None = None
    product_mrp: Decimal | None = None

    @computed_field  # type: ignore[prop-decorator]
    @property
    def total_price(self) -> Decimal:
        """unit_price x quantity, always derived from the current operands."""
        return self.unit_price * self.quantity

    @property
    def savings(self) -> Decimal:
        """Amount saved against the product's MRP, zero when not discounted."""
        if self.product_mrp is None or self.product_mrp <= self.unit_price:
            return ZERO
        return (self.product_mrp - self.unit_price) * self.quantity


class Invoice(BaseModel):
    """An invoice header with its ordered line items."""

    id: int | None = None
    tenant_id: int
    invoice_number: str | None = None
    invoice_date: date
    due_date: date | None = None
    customer_name: str | None = None
    customer_email: str | None = None
    customer_phone: str | None = None
    customer_address: str | None = None
    subtotal: Decimal = ZERO
    tax_amount: Decimal = ZERO
    discount_amount: Decimal = ZERO
    total_amount: Decimal = ZERO
    status: InvoiceStatus = InvoiceStatus.DRAFT
    notes: str | None = None
    items: list[InvoiceItem] = Field(default_factory=list)
    created_at: datetime = Field(default_factory=lambda: datetime.now(UTC))
    updated_at: datetime = Field(default_factory=lambda: datetime.now(UTC))

    @model_validator(mode="after")
    def compute_totals(self) -> "Invoice":
        """Compute subtotal and total_amount from items on construction."""
        self.calculate_totals()
        return self

    def calculate_totals(self) -> None:
        """subtotal = sum of item totals; total = subtotal + tax - discount."""
        self.subtotal = sum((item.total_price for item in self.items), ZERO)
        self.total_amount = self.subtotal + self.tax_amount - self.discount_amount

    def add_item(self, item: InvoiceItem) -> None:
        item.invoice_id = self.id
        self.items.append(item)
        self.calculate_totals()

    def clear_items(self) -> list[InvoiceItem]:
        """Remove all items, returning the removed ones."""
        removed = self.items
        self.items = []
        self.calculate_totals()
        return removed

    @property
    def is_paid(self) -> bool:
        return self.status == InvoiceStatus.PAID

    def ensure_mutable(self, operation: str) -> None:
        """Raise PaidInvoiceError if the invoice no longer accepts *operation*."""
        if self.is_paid:
            raise PaidInvoiceError(self.id or 0, operation)

    def is_overdue(self, today: date) -> bool:
        """SENT with a due date strictly before *today*."""
        return (
            self.status == InvoiceStatus.SENT
            and self.due_date is not None
            and self.due_date < today
        )

