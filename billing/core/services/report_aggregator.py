"""
Report aggregation over a tenant's invoices.

Pure read-side computation: every method takes already-loaded invoices and
derives revenue, status counts, trends and product rankings. Date ranges
are inclusive on both ends. Only PAID invoices contribute revenue.
"""

from collections import defaultdict
from collections.abc import Iterable, Sequence
from datetime import date
from decimal import ROUND_HALF_UP, Decimal

from billing.core.entities.invoice import Invoice, InvoiceStatus
from billing.core.entities.report import (
    MonthlyRevenue,
    ReportSummary,
    SalesTrendPoint,
    StatusCount,
    TopProduct,
)

ZERO = Decimal("0")
CENTS = Decimal("0.01")


def _in_range(invoice: Invoice, start_date: date, end_date: date) -> bool:
    return start_date <= invoice.invoice_date <= end_date


def _paid(invoices: Iterable[Invoice]) -> list[Invoice]:
    return [inv for inv in invoices if inv.status == InvoiceStatus.PAID]


class ReportAggregator:
    """Derives report figures from invoice data."""

    def revenue(
        self, invoices: Iterable[Invoice], start_date: date, end_date: date
    ) -> Decimal:
        """Sum of total_amount over paid invoices in range; zero when none."""
        return sum(
            (
                inv.total_amount
                for inv in _paid(invoices)
                if _in_range(inv, start_date, end_date)
            ),
            ZERO,
        )

    def status_distribution(
        self, invoices: Iterable[Invoice], start_date: date, end_date: date
    ) -> list[StatusCount]:
        """Count invoices per status within the range, any status."""
        counts: dict[str, int] = defaultdict(int)
        for inv in invoices:
            if _in_range(inv, start_date, end_date):
                counts[inv.status.value] += 1

        order = [s.value for s in InvoiceStatus]
        return [
            StatusCount(status=status, count=counts[status])
            for status in sorted(counts, key=order.index)
        ]

    def daily_sales_trend(
        self, invoices: Iterable[Invoice], start_date: date, end_date: date
    ) -> list[SalesTrendPoint]:
        """One point per day with paid revenue, ascending by date."""
        per_day: dict[date, Decimal] = defaultdict(lambda: ZERO)
        for inv in _paid(invoices):
            if _in_range(inv, start_date, end_date):
                per_day[inv.invoice_date] += inv.total_amount

        return [
            SalesTrendPoint(date=day, amount=per_day[day]) for day in sorted(per_day)
        ]

    def top_products(
        self,
        invoices: Iterable[Invoice],
        start_date: date,
        end_date: date,
        limit: int = 5,
    ) -> list[TopProduct]:
        """Best-selling products by revenue over paid invoices in range."""
        in_range = [inv for inv in invoices if _in_range(inv, start_date, end_date)]
        return self.product_performance(in_range)[:limit]

    def product_performance(self, invoices: Iterable[Invoice]) -> list[TopProduct]:
        """Group paid invoice items by product, ordered by revenue descending."""
        grouped: dict[int, TopProduct] = {}
        for inv in _paid(invoices):
            for item in inv.items:
                entry = grouped.get(item.product_id)
                if entry is None:
                    entry = TopProduct(
                        product_id=item.product_id,
                        product_name=item.product_name or item.description or "",
                    )
                    grouped[item.product_id] = entry
                entry.quantity += item.quantity
                entry.revenue += item.total_price

        return sorted(grouped.values(), key=lambda p: (-p.revenue, p.product_id))

    def monthly_breakdown(
        self, invoices: Iterable[Invoice], year: int
    ) -> list[MonthlyRevenue]:
        """Paid revenue per month of *year*, months without sales omitted."""
        per_month: dict[int, Decimal] = defaultdict(lambda: ZERO)
        for inv in _paid(invoices):
            if inv.invoice_date.year == year:
                per_month[inv.invoice_date.month] += inv.total_amount

        return [
            MonthlyRevenue(year=year, month=month, total=per_month[month])
            for month in sorted(per_month)
        ]

    def summary(
        self,
        status_distribution: Sequence[StatusCount],
        total_revenue: Decimal,
        pending_statuses: Iterable[InvoiceStatus],
    ) -> ReportSummary:
        """
        Headline figures for a range.

        average_invoice_value divides revenue by the count of all invoices in
        range (not only paid ones), rounded half-up to 2 places.
        """
        total_invoices = sum(s.count for s in status_distribution)
        pending_keys = {s.value for s in pending_statuses}
        pending_invoices = sum(
            s.count for s in status_distribution if s.status in pending_keys
        )

        if total_invoices > 0:
            average = (total_revenue / Decimal(total_invoices)).quantize(
                CENTS, rounding=ROUND_HALF_UP
            )
        else:
            average = ZERO

        return ReportSummary(
            total_invoices=total_invoices,
            total_revenue=total_revenue,
            average_invoice_value=average,
            pending_invoices=pending_invoices,
        )
