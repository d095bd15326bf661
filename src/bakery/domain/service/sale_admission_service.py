"""Domain service: Sale Admission Control.

Validates and commits a new sale so that no admitted sale can drive a
product's remaining stock below zero, even when many sales for the same
product arrive at once.

The stock check and the ledger append happen inside the same hold of
the product's lock (see ``ProductLocks``).
"""

from __future__ import annotations

import logging

from bakery.domain.exceptions import EntityNotFoundError, InsufficientStockError
from bakery.domain.model.product import Product
from bakery.domain.model.sale import Sale
from bakery.domain.model.stock import StockLevel
from bakery.domain.model.value_objects import Quantity
from bakery.domain.repository.product_repository import ProductRepository
from bakery.domain.repository.sale_repository import SaleRepository
from bakery.domain.service.product_locks import ProductLocks

logger = logging.getLogger(__name__)


class SaleAdmissionService:

    def __init__(
        self,
        product_repo: ProductRepository,
        sale_repo: SaleRepository,
        locks: ProductLocks,
    ) -> None:
        self._product_repo = product_repo
        self._sale_repo = sale_repo
        self._locks = locks

    def admit(self, product_id: str, quantity: int) -> Sale:
        """Record a sale of ``quantity`` units of a product.

        Steps:
        1. Resolve the product (NotFound if missing or soft-deleted).
        2. Validate the quantity.
        3. Under the product lock: re-read the product, sum the ledger,
           reject if the quantity exceeds the remaining stock.
        4. Append the sale with the product's current price.

        A rejected sale leaves the ledger untouched.
        """
        self._active_product(product_id)
        qty = Quantity(quantity)

        with self._locks.hold(product_id):
            product = self._active_product(product_id)
            stock = StockLevel(
                product=product,
                sold_quantity=self._sale_repo.sold_quantity(product_id),
            )
            try:
                stock.ensure_available(qty.value)
            except InsufficientStockError:
                logger.warning(
                    f"Rejected sale of {qty} x {product.name} ({product.id}): "
                    f"{stock.remaining_stock} remaining"
                )
                raise

            sale = Sale.record(product, qty)
            self._sale_repo.append(sale)

        logger.info(
            f"Recorded sale {sale.id}: {qty} x {product.name} at {sale.unit_price}"
        )
        return sale

    def _active_product(self, product_id: str) -> Product:
        product = self._product_repo.get_by_id(product_id)
        if product is None or product.is_deleted:
            raise EntityNotFoundError(f"Product with ID '{product_id}' not found")
        return product
