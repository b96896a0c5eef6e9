"""
Dependency injection container for FastAPI.

Provides the caller's tenant context and use case instances to route
handlers. Tests replace any of these through ``app.dependency_overrides``.
"""

from functools import lru_cache

from fastapi import HTTPException, Request, status

from billing.application.use_cases import (
    BulkImportProductsUseCase,
    CreateInvoiceUseCase,
    DeleteInvoiceUseCase,
    ExportReportUseCase,
    GenerateInvoicePdfUseCase,
    GenerateReportsUseCase,
    ManageProductsUseCase,
    QueryInvoicesUseCase,
    UpdateInvoiceStatusUseCase,
    UpdateInvoiceUseCase,
)
from billing.config import Settings, get_settings
from billing.core.entities.tenant import TenantContext


@lru_cache
def get_app_settings() -> Settings:
    """Get cached application settings."""
    return get_settings()


def get_tenant(request: Request) -> TenantContext:
    """
    Build the tenant context from the configured tenant header.

    Identity issuance happens upstream; this only reads the result.
    """
    api = get_app_settings().api
    header = api.tenant_header
    raw = request.headers.get(header)
    if not raw:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail=f"Missing {header} header",
        )
    try:
        tenant_id = int(raw)
    except ValueError:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail=f"{header} must be a positive integer",
        ) from None
    if tenant_id <= 0:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail=f"{header} must be a positive integer",
        )
    return TenantContext(tenant_id=tenant_id, username=request.headers.get(api.username_header))


# Use case dependencies
def get_create_invoice_use_case() -> CreateInvoiceUseCase:
    return CreateInvoiceUseCase()


def get_update_invoice_use_case() -> UpdateInvoiceUseCase:
    return UpdateInvoiceUseCase()


def get_delete_invoice_use_case() -> DeleteInvoiceUseCase:
    return DeleteInvoiceUseCase()


def get_update_invoice_status_use_case() -> UpdateInvoiceStatusUseCase:
    return UpdateInvoiceStatusUseCase()


def get_query_invoices_use_case() -> QueryInvoicesUseCase:
    return QueryInvoicesUseCase()


def get_generate_invoice_pdf_use_case() -> GenerateInvoicePdfUseCase:
    return GenerateInvoicePdfUseCase()


def get_manage_products_use_case() -> ManageProductsUseCase:
    return ManageProductsUseCase()


def get_bulk_import_use_case() -> BulkImportProductsUseCase:
    return BulkImportProductsUseCase()


def get_generate_reports_use_case() -> GenerateReportsUseCase:
    return GenerateReportsUseCase()


def get_export_report_use_case() -> ExportReportUseCase:
    return ExportReportUseCase()
