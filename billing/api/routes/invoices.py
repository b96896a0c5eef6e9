"""Invoice endpoints: CRUD, status changes, queries and PDF download."""

from fastapi import APIRouter, Depends, status
from fastapi.responses import Response

from billing.api.dependencies import (
    get_create_invoice_use_case,
    get_delete_invoice_use_case,
    get_generate_invoice_pdf_use_case,
    get_query_invoices_use_case,
    get_tenant,
    get_update_invoice_status_use_case,
    get_update_invoice_use_case,
)
from billing.application.dto.requests import InvoiceRequest, UpdateInvoiceStatusRequest
from billing.application.dto.responses import (
    ErrorResponse,
    InvoiceListResponse,
    InvoiceResponse,
    invoice_to_response,
)
from billing.application.use_cases import (
    CreateInvoiceUseCase,
    DeleteInvoiceUseCase,
    GenerateInvoicePdfUseCase,
    QueryInvoicesUseCase,
    UpdateInvoiceStatusUseCase,
    UpdateInvoiceUseCase,
)
from billing.core.entities.invoice import Invoice, InvoiceStatus
from billing.core.entities.tenant import TenantContext

router = APIRouter(prefix="/api/invoices", tags=["invoices"])

_OWNED = {404: {"model": ErrorResponse}, 403: {"model": ErrorResponse}}


def _list_response(invoices: list[Invoice], total: int | None = None) -> InvoiceListResponse:
    return InvoiceListResponse(
        invoices=[invoice_to_response(inv) for inv in invoices],
        total=len(invoices) if total is None else total,
    )


@router.post(
    "",
    response_model=InvoiceResponse,
    status_code=status.HTTP_201_CREATED,
    responses={**_OWNED, 400: {"model": ErrorResponse}},
)
async def create_invoice(
    request: InvoiceRequest,
    tenant: TenantContext = Depends(get_tenant),
    use_case: CreateInvoiceUseCase = Depends(get_create_invoice_use_case),
) -> InvoiceResponse:
    """Create an invoice, assign its number and deduct stock."""
    result = await use_case.execute(tenant, request)
    return use_case.to_response(result)


@router.get("", response_model=InvoiceListResponse)
async def list_invoices(
    limit: int = 100,
    offset: int = 0,
    tenant: TenantContext = Depends(get_tenant),
    use_case: QueryInvoicesUseCase = Depends(get_query_invoices_use_case),
) -> InvoiceListResponse:
    """List invoices newest first; ``total`` counts all of the tenant's invoices."""
    invoices = await use_case.list_invoices(tenant, limit=limit, offset=offset)
    total = await use_case.count_invoices(tenant)
    return _list_response(invoices, total)


@router.get("/search", response_model=InvoiceListResponse)
async def search_invoices(
    q: str = "",
    limit: int = 100,
    offset: int = 0,
    tenant: TenantContext = Depends(get_tenant),
    use_case: QueryInvoicesUseCase = Depends(get_query_invoices_use_case),
) -> InvoiceListResponse:
    invoices = await use_case.search_invoices(tenant, q, limit=limit, offset=offset)
    return _list_response(invoices)


@router.get("/overdue", response_model=InvoiceListResponse)
async def list_overdue(
    tenant: TenantContext = Depends(get_tenant),
    use_case: QueryInvoicesUseCase = Depends(get_query_invoices_use_case),
) -> InvoiceListResponse:
    invoices = await use_case.list_overdue(tenant)
    return _list_response(invoices)


@router.get("/status/{invoice_status}", response_model=InvoiceListResponse)
async def list_by_status(
    invoice_status: InvoiceStatus,
    tenant: TenantContext = Depends(get_tenant),
    use_case: QueryInvoicesUseCase = Depends(get_query_invoices_use_case),
) -> InvoiceListResponse:
    invoices = await use_case.list_by_status(tenant, invoice_status)
    return _list_response(invoices)


@router.get("/{invoice_id}", response_model=InvoiceResponse, responses=_OWNED)
async def get_invoice(
    invoice_id: int,
    tenant: TenantContext = Depends(get_tenant),
    use_case: QueryInvoicesUseCase = Depends(get_query_invoices_use_case),
) -> InvoiceResponse:
    invoice = await use_case.get_invoice(tenant, invoice_id)
    return invoice_to_response(invoice)


@router.put(
    "/{invoice_id}",
    response_model=InvoiceResponse,
    responses={**_OWNED, 409: {"model": ErrorResponse}},
)
async def update_invoice(
    invoice_id: int,
    request: InvoiceRequest,
    tenant: TenantContext = Depends(get_tenant),
    use_case: UpdateInvoiceUseCase = Depends(get_update_invoice_use_case),
) -> InvoiceResponse:
    """Replace header and items of an unpaid invoice, rebalancing stock."""
    result = await use_case.execute(tenant, invoice_id, request)
    return use_case.to_response(result)


@router.patch("/{invoice_id}/status", response_model=InvoiceResponse, responses=_OWNED)
async def update_invoice_status(
    invoice_id: int,
    request: UpdateInvoiceStatusRequest,
    tenant: TenantContext = Depends(get_tenant),
    use_case: UpdateInvoiceStatusUseCase = Depends(get_update_invoice_status_use_case),
) -> InvoiceResponse:
    invoice = await use_case.execute(tenant, invoice_id, request.status)
    return invoice_to_response(invoice)


@router.delete(
    "/{invoice_id}",
    status_code=status.HTTP_204_NO_CONTENT,
    responses={**_OWNED, 409: {"model": ErrorResponse}},
)
async def delete_invoice(
    invoice_id: int,
    tenant: TenantContext = Depends(get_tenant),
    use_case: DeleteInvoiceUseCase = Depends(get_delete_invoice_use_case),
) -> Response:
    """Delete an unpaid invoice and return its quantities to stock."""
    await use_case.execute(tenant, invoice_id)
    return Response(status_code=status.HTTP_204_NO_CONTENT)


@router.get("/{invoice_id}/pdf", responses=_OWNED)
async def download_invoice_pdf(
    invoice_id: int,
    tenant: TenantContext = Depends(get_tenant),
    use_case: GenerateInvoicePdfUseCase = Depends(get_generate_invoice_pdf_use_case),
) -> Response:
    result = await use_case.execute(tenant, invoice_id)
    return Response(
        content=result.content,
        media_type="application/pdf",
        headers={
            "Content-Disposition": f'attachment; filename="{result.filename}"',
        },
    )
