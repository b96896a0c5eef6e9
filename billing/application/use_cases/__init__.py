"""Application use cases."""

from billing.application.use_cases.bulk_import_products import (
    BulkImportProductsUseCase,
    BulkImportResult,
)
from billing.application.use_cases.create_invoice import (
    CreateInvoiceResult,
    CreateInvoiceUseCase,
)
from billing.application.use_cases.delete_invoice import DeleteInvoiceUseCase
from billing.application.use_cases.export_report import (
    ExportFormat,
    ExportReportUseCase,
    ReportExport,
)
from billing.application.use_cases.generate_invoice_pdf import (
    GenerateInvoicePdfUseCase,
    InvoicePdfResult,
)
from billing.application.use_cases.generate_reports import GenerateReportsUseCase
from billing.application.use_cases.manage_products import (
    ManageProductsUseCase,
    generate_product_code,
)
from billing.application.use_cases.query_invoices import QueryInvoicesUseCase
from billing.application.use_cases.update_invoice import (
    UpdateInvoiceResult,
    UpdateInvoiceUseCase,
)
from billing.application.use_cases.update_invoice_status import (
    UpdateInvoiceStatusUseCase,
)

__all__ = [
    "BulkImportProductsUseCase",
    "BulkImportResult",
    "CreateInvoiceUseCase",
    "CreateInvoiceResult",
    "DeleteInvoiceUseCase",
    "ExportFormat",
    "ExportReportUseCase",
    "ReportExport",
    "GenerateInvoicePdfUseCase",
    "InvoicePdfResult",
    "GenerateReportsUseCase",
    "ManageProductsUseCase",
    "generate_product_code",
    "QueryInvoicesUseCase",
    "UpdateInvoiceUseCase",
    "UpdateInvoiceResult",
    "UpdateInvoiceStatusUseCase",
]
