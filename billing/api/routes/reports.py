"""
Report endpoints.

Every report is returned as JSON by default. Passing ``format=pdf`` or
``format=excel`` downloads the same report rendered to that format.
"""

from datetime import date

from fastapi import APIRouter, Depends, Query
from fastapi.responses import Response

from billing.api.dependencies import (
    get_export_report_use_case,
    get_generate_reports_use_case,
    get_tenant,
)
from billing.application.dto.responses import (
    ErrorResponse,
    ReportResponse,
    report_to_response,
)
from billing.application.use_cases import (
    ExportFormat,
    ExportReportUseCase,
    GenerateReportsUseCase,
)
from billing.core.entities.report import Report
from billing.core.entities.tenant import TenantContext

router = APIRouter(prefix="/api/reports", tags=["reports"])

_FORMAT = Query(default=None, alias="format", description="pdf or excel to download")


def _respond(
    report: Report,
    export_format: ExportFormat | None,
    exporter: ExportReportUseCase,
) -> Response | ReportResponse:
    if export_format is None:
        return report_to_response(report)

    export = exporter.execute(report, export_format)
    return Response(
        content=export.content,
        media_type=export.media_type,
        headers={
            "Content-Disposition": f'attachment; filename="{export.filename}"',
        },
    )


@router.get("/daily", response_model=ReportResponse)
async def daily_report(
    day: date | None = None,
    export_format: ExportFormat | None = _FORMAT,
    tenant: TenantContext = Depends(get_tenant),
    use_case: GenerateReportsUseCase = Depends(get_generate_reports_use_case),
    exporter: ExportReportUseCase = Depends(get_export_report_use_case),
) -> Response | ReportResponse:
    """Paid revenue for one day (today when omitted)."""
    report = await use_case.daily(tenant, day or date.today())
    return _respond(report, export_format, exporter)


@router.get(
    "/monthly",
    response_model=ReportResponse,
    responses={400: {"model": ErrorResponse}},
)
async def monthly_report(
    year: int,
    month: int,
    export_format: ExportFormat | None = _FORMAT,
    tenant: TenantContext = Depends(get_tenant),
    use_case: GenerateReportsUseCase = Depends(get_generate_reports_use_case),
    exporter: ExportReportUseCase = Depends(get_export_report_use_case),
) -> Response | ReportResponse:
    report = await use_case.monthly(tenant, year, month)
    return _respond(report, export_format, exporter)


@router.get("/yearly", response_model=ReportResponse)
async def yearly_report(
    year: int,
    export_format: ExportFormat | None = _FORMAT,
    tenant: TenantContext = Depends(get_tenant),
    use_case: GenerateReportsUseCase = Depends(get_generate_reports_use_case),
    exporter: ExportReportUseCase = Depends(get_export_report_use_case),
) -> Response | ReportResponse:
    """Paid revenue for the year with a per-month breakdown."""
    report = await use_case.yearly(tenant, year)
    return _respond(report, export_format, exporter)


@router.get(
    "/custom",
    response_model=ReportResponse,
    responses={400: {"model": ErrorResponse}},
)
async def custom_report(
    start_date: date,
    end_date: date,
    export_format: ExportFormat | None = _FORMAT,
    tenant: TenantContext = Depends(get_tenant),
    use_case: GenerateReportsUseCase = Depends(get_generate_reports_use_case),
    exporter: ExportReportUseCase = Depends(get_export_report_use_case),
) -> Response | ReportResponse:
    report = await use_case.custom(tenant, start_date, end_date)
    return _respond(report, export_format, exporter)


@router.get("/product-performance", response_model=ReportResponse)
async def product_performance_report(
    export_format: ExportFormat | None = _FORMAT,
    tenant: TenantContext = Depends(get_tenant),
    use_case: GenerateReportsUseCase = Depends(get_generate_reports_use_case),
    exporter: ExportReportUseCase = Depends(get_export_report_use_case),
) -> Response | ReportResponse:
    """Quantity and revenue per product across all paid invoices."""
    report = await use_case.product_performance(tenant)
    return _respond(report, export_format, exporter)


@router.get(
    "/dashboard",
    response_model=ReportResponse,
    responses={400: {"model": ErrorResponse}},
)
async def dashboard_report(
    start_date: date | None = None,
    end_date: date | None = None,
    status: str | None = None,
    customer: str | None = None,
    export_format: ExportFormat | None = _FORMAT,
    tenant: TenantContext = Depends(get_tenant),
    use_case: GenerateReportsUseCase = Depends(get_generate_reports_use_case),
    exporter: ExportReportUseCase = Depends(get_export_report_use_case),
) -> Response | ReportResponse:
    report = await use_case.dashboard(
        tenant,
        start_date=start_date,
        end_date=end_date,
        status=status,
        customer=customer,
    )
    return _respond(report, export_format, exporter)
