"""Tests for ReportAggregator."""

from datetime import date
from decimal import Decimal

import pytest
from pydantic import ValidationError

from billing.config.settings import ReportSettings
from billing.core.entities.invoice import InvoiceItem, InvoiceStatus
from billing.core.entities.report import StatusCount
from billing.core.services import ReportAggregator

START = date(2024, 3, 1)
END = date(2024, 3, 31)


@pytest.fixture
def aggregator():
    return ReportAggregator()


def _item(product_id: int, quantity: str, price: str, name: str) -> InvoiceItem:
    return InvoiceItem(
        product_id=product_id,
        quantity=Decimal(quantity),
        unit_price=Decimal(price),
        product_name=name,
    )


@pytest.fixture
def invoices(invoice_factory):
    return [
        invoice_factory(
            1,
            status=InvoiceStatus.PAID,
            invoice_date=date(2024, 3, 1),
            items=[_item(1, "2", "10", "Rice"), _item(2, "1", "50", "Oil")],
        ),
        invoice_factory(
            2,
            status=InvoiceStatus.PAID,
            invoice_date=date(2024, 3, 31),
            items=[_item(1, "1", "10", "Rice")],
        ),
        invoice_factory(
            3,
            status=InvoiceStatus.SENT,
            invoice_date=date(2024, 3, 10),
            items=[_item(2, "5", "50", "Oil")],
        ),
        invoice_factory(
            4,
            status=InvoiceStatus.PAID,
            invoice_date=date(2024, 4, 1),
            items=[_item(3, "1", "999", "Ghee")],
        ),
        invoice_factory(5, status=InvoiceStatus.DRAFT, invoice_date=date(2024, 3, 5), items=[]),
    ]


class TestRevenue:
    def test_only_paid_in_inclusive_range(self, aggregator, invoices):
        assert aggregator.revenue(invoices, START, END) == Decimal("80")

    def test_zero_when_no_invoices(self, aggregator):
        revenue = aggregator.revenue([], START, END)
        assert revenue == Decimal("0")
        assert isinstance(revenue, Decimal)


class TestStatusDistribution:
    def test_counts_all_statuses_in_declaration_order(self, aggregator, invoices):
        result = aggregator.status_distribution(invoices, START, END)
        assert [(s.status, s.count) for s in result] == [
            ("DRAFT", 1),
            ("SENT", 1),
            ("PAID", 2),
        ]


class TestDailySalesTrend:
    def test_paid_per_day_ascending(self, aggregator, invoices):
        trend = aggregator.daily_sales_trend(invoices, START, END)
        assert [(p.date, p.amount) for p in trend] == [
            (date(2024, 3, 1), Decimal("70")),
            (date(2024, 3, 31), Decimal("10")),
        ]


class TestProducts:
    def test_top_products_by_revenue(self, aggregator, invoices):
        top = aggregator.top_products(invoices, START, END)
        assert [(p.product_name, p.quantity, p.revenue) for p in top] == [
            ("Oil", Decimal("1"), Decimal("50")),
            ("Rice", Decimal("3"), Decimal("30")),
        ]

    def test_top_products_limit(self, aggregator, invoices):
        assert len(aggregator.top_products(invoices, START, END, limit=1)) == 1

    def test_product_performance_whole_history(self, aggregator, invoices):
        ranking = aggregator.product_performance(invoices)
        assert [p.product_id for p in ranking] == [3, 2, 1]

    def test_ties_broken_by_product_id(self, aggregator, invoice_factory):
        inv = invoice_factory(
            status=InvoiceStatus.PAID,
            items=[_item(9, "1", "10", "B"), _item(4, "1", "10", "A")],
        )
        assert [p.product_id for p in aggregator.product_performance([inv])] == [4, 9]


class TestMonthlyBreakdown:
    def test_months_with_sales_only(self, aggregator, invoices):
        breakdown = aggregator.monthly_breakdown(invoices, 2024)
        assert [(m.month, m.total) for m in breakdown] == [
            (3, Decimal("80")),
            (4, Decimal("999")),
        ]

    def test_other_years_excluded(self, aggregator, invoices):
        assert aggregator.monthly_breakdown(invoices, 2023) == []


class TestSummary:
    def test_average_over_all_invoices(self, aggregator):
        distribution = [StatusCount(status="PAID", count=2), StatusCount(status="SENT", count=1)]
        summary = aggregator.summary(distribution, Decimal("100"), [InvoiceStatus.SENT])
        assert summary.total_invoices == 3
        assert summary.average_invoice_value == Decimal("33.33")
        assert summary.pending_invoices == 1

    def test_average_rounds_half_up(self, aggregator):
        distribution = [StatusCount(status="PAID", count=8)]
        summary = aggregator.summary(distribution, Decimal("0.20"), [])
        assert summary.average_invoice_value == Decimal("0.03")

    def test_zero_invoices_zero_average(self, aggregator):
        summary = aggregator.summary([], Decimal("0"), [InvoiceStatus.SENT])
        assert summary.total_invoices == 0
        assert summary.average_invoice_value == Decimal("0")
        assert summary.pending_invoices == 0

    def test_configurable_pending_statuses(self, aggregator):
        distribution = [
            StatusCount(status="SENT", count=2),
            StatusCount(status="OVERDUE", count=3),
        ]
        summary = aggregator.summary(
            distribution, Decimal("0"), [InvoiceStatus.SENT, InvoiceStatus.OVERDUE]
        )
        assert summary.pending_invoices == 5


class TestPendingStatusSettings:
    def test_default_pending_statuses_are_declared(self):
        assert ReportSettings().pending_statuses
        assert set(ReportSettings().pending_statuses) <= set(InvoiceStatus)

    def test_undeclared_pending_status_rejected(self):
        with pytest.raises(ValidationError):
            ReportSettings(pending_statuses=["PENDING"])

    def test_default_pending_counted_from_distribution(self, aggregator):
        distribution = [
            StatusCount(status=status.value, count=1) for status in InvoiceStatus
        ]
        summary = aggregator.summary(
            distribution, Decimal("0"), ReportSettings().pending_statuses
        )
        assert summary.pending_invoices == len(ReportSettings().pending_statuses)
