"""Fixtures for document rendering tests."""

import zlib
from datetime import date
from decimal import Decimal

import pytest

from billing.config.settings import PdfSettings
from billing.core.entities.report import (
    MonthlyRevenue,
    Report,
    ReportSummary,
    SalesTrendPoint,
    StatusCount,
    TopProduct,
)


def extract_pdf_text(pdf_bytes: bytes) -> str:
    """Inflate every FlateDecode stream and return the concatenated text."""
    texts = [pdf_bytes.decode("latin-1")]
    idx = 0
    while True:
        start = pdf_bytes.find(b"stream\n", idx)
        if start == -1:
            break
        start += len(b"stream\n")
        end = pdf_bytes.find(b"\nendstream", start)
        if end == -1:
            break
        try:
            texts.append(zlib.decompress(pdf_bytes[start:end]).decode("latin-1", errors="replace"))
        except zlib.error:
            pass
        idx = end
    return "\n".join(texts)


@pytest.fixture
def pdf_text():
    return extract_pdf_text


@pytest.fixture
def pdf_settings() -> PdfSettings:
    return PdfSettings(company_name="Test Mart", currency_symbol="Rs.", logo_path=None)


@pytest.fixture
def dashboard_report() -> Report:
    return Report(
        report_type="Dashboard Report",
        start_date=date(2024, 2, 1),
        end_date=date(2024, 2, 29),
        total_revenue=Decimal("70"),
        status_distribution=[StatusCount(status="PAID", count=2)],
        sales_trend=[SalesTrendPoint(date=date(2024, 2, 10), amount=Decimal("20"))],
        top_products=[
            TopProduct(product_id=1, product_name="Rice", quantity=Decimal("2"), revenue=Decimal("20"))
        ],
        monthly_breakdown=[MonthlyRevenue(year=2024, month=2, total=Decimal("70"))],
        summary=ReportSummary(
            total_invoices=2,
            total_revenue=Decimal("70"),
            average_invoice_value=Decimal("35.00"),
            pending_invoices=0,
        ),
        additional_data={"total_invoices": 2},
    )
