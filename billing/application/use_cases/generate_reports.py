"""
Generate Reports Use Case.

Every report is built from the tenant's invoices loaded for the report's
date range, then summarized by the ReportAggregator. Reads run outside
any write transaction; a report need not be a consistent snapshot.
"""

import calendar
from collections.abc import Callable
from datetime import date, timedelta

from billing.application.services import get_report_aggregator
from billing.application.use_cases.base import BillingUseCase
from billing.config import get_logger, get_settings
from billing.config.settings import ReportSettings
from billing.core.entities.invoice import Invoice, InvoiceStatus
from billing.core.entities.report import Report
from billing.core.entities.tenant import TenantContext
from billing.core.exceptions import ValidationError
from billing.core.interfaces import IInvoiceStore
from billing.core.services import ReportAggregator

logger = get_logger(__name__)


class GenerateReportsUseCase(BillingUseCase):
    """Daily, monthly, yearly, custom, product performance and dashboard reports."""

    def __init__(
        self,
        invoice_store: IInvoiceStore | None = None,
        aggregator: ReportAggregator | None = None,
        report_settings: ReportSettings | None = None,
        today: Callable[[], date] = date.today,
    ):
        super().__init__(invoice_store=invoice_store)
        self._aggregator = aggregator or get_report_aggregator()
        self._report_settings = report_settings or get_settings().report
        self._today = today

    async def _load(
        self, tenant: TenantContext, start_date: date, end_date: date
    ) -> list[Invoice]:
        store = await self._get_invoice_store()
        return await store.list_in_date_range(tenant.tenant_id, start_date, end_date)

    async def _revenue_report(
        self,
        tenant: TenantContext,
        report_type: str,
        start_date: date,
        end_date: date,
    ) -> tuple[Report, list[Invoice]]:
        if start_date > end_date:
            raise ValidationError(
                "start_date", "must not be after end_date", start_date.isoformat()
            )
        invoices = await self._load(tenant, start_date, end_date)
        report = Report(
            report_type=report_type,
            start_date=start_date,
            end_date=end_date,
            total_revenue=self._aggregator.revenue(invoices, start_date, end_date),
        )
        return report, invoices

    async def daily(self, tenant: TenantContext, day: date) -> Report:
        report, _ = await self._revenue_report(tenant, "Daily Sales Report", day, day)
        report.additional_data = {"date": day.isoformat()}
        self._log(tenant, report)
        return report

    async def monthly(self, tenant: TenantContext, year: int, month: int) -> Report:
        if not 1 <= month <= 12:
            raise ValidationError("month", "must be between 1 and 12", month)
        last_day = calendar.monthrange(year, month)[1]
        report, _ = await self._revenue_report(
            tenant,
            "Monthly Sales Report",
            date(year, month, 1),
            date(year, month, last_day),
        )
        report.additional_data = {
            "year": year,
            "month": month,
            "month_name": calendar.month_name[month].upper(),
        }
        self._log(tenant, report)
        return report

    async def yearly(self, tenant: TenantContext, year: int) -> Report:
        """Revenue for the calendar year with a per-month breakdown of that year."""
        report, invoices = await self._revenue_report(
            tenant, "Yearly Sales Report", date(year, 1, 1), date(year, 12, 31)
        )
        report.monthly_breakdown = self._aggregator.monthly_breakdown(invoices, year)
        report.additional_data = {"year": year}
        self._log(tenant, report)
        return report

    async def custom(
        self, tenant: TenantContext, start_date: date, end_date: date
    ) -> Report:
        report, _ = await self._revenue_report(
            tenant, "Custom Date Range Report", start_date, end_date
        )
        self._log(tenant, report)
        return report

    async def product_performance(self, tenant: TenantContext) -> Report:
        """Whole-history paid sales per product; revenue field stays zero."""
        store = await self._get_invoice_store()
        paid = await store.list_by_status(tenant.tenant_id, InvoiceStatus.PAID)
        report = Report(
            report_type="Product Performance Report",
            top_products=self._aggregator.product_performance(paid),
        )
        self._log(tenant, report)
        return report

    async def dashboard(
        self,
        tenant: TenantContext,
        start_date: date | None = None,
        end_date: date | None = None,
        status: str | None = None,
        customer: str | None = None,
    ) -> Report:
        """
        Revenue, status distribution, top products, daily trend and summary.

        Defaults to the last ``dashboard_default_days`` days. The status and
        customer filters are echoed back in additional_data only.
        """
        settings = self._report_settings
        end_date = end_date or self._today()
        start_date = start_date or end_date - timedelta(days=settings.dashboard_default_days)

        report, invoices = await self._revenue_report(
            tenant, "Dashboard Report", start_date, end_date
        )
        agg = self._aggregator
        report.status_distribution = agg.status_distribution(invoices, start_date, end_date)
        report.top_products = agg.top_products(
            invoices, start_date, end_date, limit=settings.top_products_limit
        )
        report.sales_trend = agg.daily_sales_trend(invoices, start_date, end_date)
        report.summary = agg.summary(
            report.status_distribution,
            report.total_revenue,
            settings.pending_statuses,
        )

        additional: dict = {
            "status_counts": {s.status: s.count for s in report.status_distribution},
            "total_invoices": report.summary.total_invoices,
        }
        if customer and customer.strip():
            additional["customer_filter"] = customer
        if status and status.strip():
            additional["status_filter"] = status
        report.additional_data = additional

        self._log(tenant, report)
        return report

    @staticmethod
    def _log(tenant: TenantContext, report: Report) -> None:
        logger.info(
            "report_generated",
            tenant_id=tenant.tenant_id,
            report_type=report.report_type,
            start_date=report.start_date.isoformat() if report.start_date else None,
            end_date=report.end_date.isoformat() if report.end_date else None,
        )
