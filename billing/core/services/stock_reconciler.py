"""
Stock reconciliation service.

Keeps each product's stock equal to its starting stock minus the net
quantity of all live invoice items referencing it. Additions consume
stock, removals restore it, and an item-list replacement is always a full
removal followed by a full addition.
"""

from collections.abc import Iterable
from decimal import Decimal

from billing.config import get_logger
from billing.core.entities.invoice import InvoiceItem
from billing.core.exceptions import ProductNotFoundError
from billing.core.interfaces.product_store import IProductStore
from billing.core.interfaces.transaction import Transaction

logger = get_logger(__name__)


class StockReconciler:
    """
    Applies invoice item quantity deltas to product stock.

    Every stock write goes through the product store individually, inside
    the caller's transaction. Stock may go negative; the minimum stock
    level is advisory only.
    """

    def __init__(self, product_store: IProductStore) -> None:
        self._product_store = product_store

    async def consume(
        self, items: Iterable[InvoiceItem], tx: Transaction | None = None
    ) -> None:
        """Subtract each item's quantity from its product's stock."""
        for item in items:
            await self._apply(item.product_id, -item.quantity, tx)

    async def restore(
        self, items: Iterable[InvoiceItem], tx: Transaction | None = None
    ) -> None:
        """Add each item's quantity back to its product's stock."""
        for item in items:
            await self._apply(item.product_id, item.quantity, tx)

    async def replace(
        self,
        old_items: Iterable[InvoiceItem],
        new_items: Iterable[InvoiceItem],
        tx: Transaction | None = None,
    ) -> None:
        """Restore all old items, then consume all new items."""
        await self.restore(old_items, tx)
        await self.consume(new_items, tx)

    async def _apply(
        self, product_id: int, delta: Decimal, tx: Transaction | None
    ) -> None:
        # Re-read per item so repeated products accumulate correctly
        product = await self._product_store.get_product(product_id, tx=tx)
        if product is None:
            raise ProductNotFoundError(product_id)

        new_quantity = product.adjust_stock(delta)
        await self._product_store.update_stock(product_id, new_quantity, tx=tx)

        logger.debug(
            "stock_adjusted",
            product_id=product_id,
            delta=str(delta),
            quantity=str(new_quantity),
        )
