"""Report view entities produced by the report aggregator."""

from datetime import date
from decimal import Decimal
from typing import Any

from pydantic import BaseModel, Field

ZERO = Decimal("0")


class SalesTrendPoint(BaseModel):
    """Revenue of paid invoices on a single day."""

    date: date
    amount: Decimal = ZERO


class StatusCount(BaseModel):
    """Number of invoices in one status."""

    status: str
    count: int


class TopProduct(BaseModel):
    """Aggregated sales of one product over paid invoices."""

    product_id: int
    product_name: str
    quantity: Decimal = ZERO
    revenue: Decimal = ZERO


class MonthlyRevenue(BaseModel):
    """Revenue of paid invoices within one calendar month."""

    year: int
    month: int
    total: Decimal = ZERO


class ReportSummary(BaseModel):
    """Headline figures shown above the dashboard."""

    total_invoices: int = 0
    total_revenue: Decimal = ZERO
    average_invoice_value: Decimal = ZERO
    pending_invoices: int = 0


class Report(BaseModel):
    """A finished report, ready for display or export."""

    report_type: str
    start_date: date | None = None
    end_date: date | None = None
    total_revenue: Decimal = ZERO
    additional_data: dict[str, Any] = Field(default_factory=dict)
    sales_trend: list[SalesTrendPoint] = Field(default_factory=list)
    status_distribution: list[StatusCount] = Field(default_factory=list)
    top_products: list[TopProduct] = Field(default_factory=list)
    monthly_breakdown: list[MonthlyRevenue] = Field(default_factory=list)
    summary: ReportSummary | None = None
