"""Product catalog endpoints."""

from fastapi import APIRouter, Depends, File, HTTPException, UploadFile, status
from fastapi.responses import Response

from billing.api.dependencies import (
    get_app_settings,
    get_bulk_import_use_case,
    get_manage_products_use_case,
    get_tenant,
)
from billing.application.dto.requests import ProductRequest
from billing.application.dto.responses import (
    BulkImportResponse,
    ErrorResponse,
    ProductListResponse,
    ProductResponse,
    UnitTypeResponse,
    product_to_response,
    unit_to_response,
)
from billing.application.use_cases import BulkImportProductsUseCase, ManageProductsUseCase
from billing.core.entities.product import Product
from billing.core.entities.tenant import TenantContext

router = APIRouter(prefix="/api/products", tags=["products"])


def _list_response(products: list[Product]) -> ProductListResponse:
    return ProductListResponse(
        products=[product_to_response(p) for p in products],
        total=len(products),
    )


@router.post(
    "",
    response_model=ProductResponse,
    status_code=status.HTTP_201_CREATED,
    responses={400: {"model": ErrorResponse}},
)
async def create_product(
    request: ProductRequest,
    tenant: TenantContext = Depends(get_tenant),
    use_case: ManageProductsUseCase = Depends(get_manage_products_use_case),
) -> ProductResponse:
    """Create a product; its code is assigned automatically."""
    product = await use_case.create_product(tenant, request)
    return product_to_response(product)


@router.get("", response_model=ProductListResponse)
async def list_products(
    limit: int = 100,
    offset: int = 0,
    tenant: TenantContext = Depends(get_tenant),
    use_case: ManageProductsUseCase = Depends(get_manage_products_use_case),
) -> ProductListResponse:
    """List the tenant's active products by name."""
    products = await use_case.list_products(tenant, limit=limit, offset=offset)
    return _list_response(products)


@router.get("/search", response_model=ProductListResponse)
async def search_products(
    q: str = "",
    limit: int = 100,
    offset: int = 0,
    tenant: TenantContext = Depends(get_tenant),
    use_case: ManageProductsUseCase = Depends(get_manage_products_use_case),
) -> ProductListResponse:
    """Case-insensitive search over name, code and description."""
    products = await use_case.search_products(tenant, q, limit=limit, offset=offset)
    return _list_response(products)


@router.get("/categories", response_model=list[str])
async def list_categories(
    tenant: TenantContext = Depends(get_tenant),
    use_case: ManageProductsUseCase = Depends(get_manage_products_use_case),
) -> list[str]:
    return await use_case.list_categories(tenant)


@router.get("/category/{category}", response_model=ProductListResponse)
async def list_by_category(
    category: str,
    tenant: TenantContext = Depends(get_tenant),
    use_case: ManageProductsUseCase = Depends(get_manage_products_use_case),
) -> ProductListResponse:
    products = await use_case.list_by_category(tenant, category)
    return _list_response(products)


@router.get("/low-stock", response_model=ProductListResponse)
async def list_low_stock(
    tenant: TenantContext = Depends(get_tenant),
    use_case: ManageProductsUseCase = Depends(get_manage_products_use_case),
) -> ProductListResponse:
    """Active products at or below their minimum stock level."""
    products = await use_case.list_low_stock(tenant)
    return _list_response(products)


@router.get("/units", response_model=list[UnitTypeResponse])
async def list_unit_types() -> list[UnitTypeResponse]:
    return [unit_to_response(u) for u in ManageProductsUseCase.list_unit_types()]


@router.post(
    "/import",
    response_model=BulkImportResponse,
    responses={
        400: {"model": ErrorResponse},
        413: {"model": ErrorResponse},
    },
)
async def import_products(
    file: UploadFile = File(...),
    tenant: TenantContext = Depends(get_tenant),
    use_case: BulkImportProductsUseCase = Depends(get_bulk_import_use_case),
) -> BulkImportResponse:
    """
    Bulk-create products from a CSV upload.

    Rows that fail to parse or to insert are reported with their line
    number; the rest are created.
    """
    filename = file.filename or "upload.csv"
    if not filename.lower().endswith(".csv"):
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail="Unsupported file type. Use: .csv",
        )

    content = await file.read()
    if len(content) > get_app_settings().api.max_upload_size:
        raise HTTPException(
            status_code=status.HTTP_413_CONTENT_TOO_LARGE,
            detail="Upload exceeds the maximum allowed size",
        )

    result = await use_case.execute(tenant, content, filename=filename)
    return use_case.to_response(result)


@router.get(
    "/{product_id}",
    response_model=ProductResponse,
    responses={404: {"model": ErrorResponse}, 403: {"model": ErrorResponse}},
)
async def get_product(
    product_id: int,
    tenant: TenantContext = Depends(get_tenant),
    use_case: ManageProductsUseCase = Depends(get_manage_products_use_case),
) -> ProductResponse:
    product = await use_case.get_product(tenant, product_id)
    return product_to_response(product)


@router.put(
    "/{product_id}",
    response_model=ProductResponse,
    responses={404: {"model": ErrorResponse}, 403: {"model": ErrorResponse}},
)
async def update_product(
    product_id: int,
    request: ProductRequest,
    tenant: TenantContext = Depends(get_tenant),
    use_case: ManageProductsUseCase = Depends(get_manage_products_use_case),
) -> ProductResponse:
    product = await use_case.update_product(tenant, product_id, request)
    return product_to_response(product)


@router.delete(
    "/{product_id}",
    status_code=status.HTTP_204_NO_CONTENT,
    responses={
        404: {"model": ErrorResponse},
        403: {"model": ErrorResponse},
        409: {"model": ErrorResponse},
    },
)
async def delete_product(
    product_id: int,
    tenant: TenantContext = Depends(get_tenant),
    use_case: ManageProductsUseCase = Depends(get_manage_products_use_case),
) -> Response:
    """Delete a product that no invoice item references."""
    await use_case.delete_product(tenant, product_id)
    return Response(status_code=status.HTTP_204_NO_CONTENT)
