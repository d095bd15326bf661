"""Application service: Update Product use case.

Applies a partial update. Runs under the product's stock lock so that a
stock resize and a concurrent sale cannot interleave.
"""

from __future__ import annotations

import logging
from dataclasses import replace

from bakery.application.dto import ProductChanges, ProductDTO, product_to_dto
from bakery.domain.exceptions import EntityNotFoundError, ValidationError
from bakery.domain.model.product import Product
from bakery.domain.model.stock import StockLevel
from bakery.domain.model.value_objects import Money
from bakery.domain.repository.product_repository import ProductRepository
from bakery.domain.repository.sale_repository import SaleRepository
from bakery.domain.service.product_locks import ProductLocks

logger = logging.getLogger(__name__)


class UpdateProductHandler:

    def __init__(
        self,
        product_repo: ProductRepository,
        sale_repo: SaleRepository,
        locks: ProductLocks,
    ) -> None:
        self._product_repo = product_repo
        self._sale_repo = sale_repo
        self._locks = locks

    def handle(self, product_id: str, changes: ProductChanges) -> ProductDTO:
        """Update the supplied fields of a product.

        This does NOT affect any existing sales; they captured a
        price snapshot at sale time.
        """
        if changes.is_empty:
            raise ValidationError("At least one field is required")

        self._active_product(product_id)

        with self._locks.hold(product_id):
            current = self._active_product(product_id)

            # Work on a copy so a rejected change leaves the stored row alone.
            product = replace(current)
            sold = self._sale_repo.sold_quantity(product_id)

            if changes.name is not None:
                product.rename(changes.name)
            if changes.price is not None:
                product.reprice(Money.of(changes.price))
            if changes.total_stock is not None:
                product.resize_stock(changes.total_stock, sold_quantity=sold)
            if changes.image_path is not None:
                product.change_image(changes.image_path)

            self._product_repo.save(product)

        logger.info(f"Updated product {product.id} '{product.name}'")
        return product_to_dto(StockLevel(product=product, sold_quantity=sold))

    def _active_product(self, product_id: str) -> Product:
        product = self._product_repo.get_by_id(product_id)
        if product is None or product.is_deleted:
            raise EntityNotFoundError(f"Product with ID '{product_id}' not found")
        return product
