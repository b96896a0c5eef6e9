"""
Bulk Import Products Use Case.

Turns an uploaded CSV into catalog products. Each row is created in its
own transaction, so one failing row never undoes the rows before it.
"""

from dataclasses import dataclass, field

from billing.application.dto.responses import (
    BulkImportResponse,
    SkippedRowResponse,
    product_to_response,
)
from billing.application.use_cases.base import BillingUseCase
from billing.application.use_cases.manage_products import ManageProductsUseCase
from billing.config import get_logger
from billing.core.entities.product import Product
from billing.core.entities.tenant import TenantContext
from billing.core.exceptions import BillingError
from billing.core.interfaces import IProductStore, ITransactionManager
from billing.infrastructure.importers import CsvProductReader, SkippedRow

logger = get_logger(__name__)


@dataclass
class BulkImportResult:
    created: list[Product] = field(default_factory=list)
    skipped: list[SkippedRow] = field(default_factory=list)


class BulkImportProductsUseCase(BillingUseCase):
    """Import products from CSV bytes for a tenant."""

    def __init__(
        self,
        product_store: IProductStore | None = None,
        transaction_manager: ITransactionManager | None = None,
        reader: CsvProductReader | None = None,
    ):
        super().__init__(product_store=product_store, transaction_manager=transaction_manager)
        self._reader = reader or CsvProductReader()

    async def execute(
        self, tenant: TenantContext, content: bytes, filename: str = "upload.csv"
    ) -> BulkImportResult:
        logger.info("bulk_import_started", tenant_id=tenant.tenant_id, filename=filename)

        parsed = self._reader.read(content, tenant.tenant_id, filename=filename)
        result = BulkImportResult(skipped=list(parsed.skipped))

        store = await self._get_product_store()
        tx_manager = await self._get_transaction_manager()

        for row in parsed.rows:
            try:
                async with tx_manager.transaction() as tx:
                    created = await ManageProductsUseCase.create_in_transaction(
                        store, row.product, tx
                    )
            except BillingError as e:
                logger.warning(
                    "bulk_import_row_failed",
                    tenant_id=tenant.tenant_id,
                    line=row.line_number,
                    error=e.message,
                )
                result.skipped.append(SkippedRow(line_number=row.line_number, reason=e.message))
                continue
            result.created.append(created)

        logger.info(
            "bulk_import_complete",
            tenant_id=tenant.tenant_id,
            created=len(result.created),
            skipped=len(result.skipped),
        )
        return result

    @staticmethod
    def to_response(result: BulkImportResult) -> BulkImportResponse:
        return BulkImportResponse(
            created=[product_to_response(p) for p in result.created],
            skipped=[
                SkippedRowResponse(line_number=s.line_number, reason=s.reason)
                for s in result.skipped
            ],
        )
