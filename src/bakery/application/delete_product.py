"""Application service: Delete Product use case (soft delete)."""

from __future__ import annotations

import logging
from dataclasses import replace

from bakery.domain.exceptions import EntityNotFoundError
from bakery.domain.model.product import Product
from bakery.domain.repository.product_repository import ProductRepository
from bakery.domain.service.product_locks import ProductLocks

logger = logging.getLogger(__name__)


class DeleteProductHandler:

    def __init__(self, product_repo: ProductRepository, locks: ProductLocks) -> None:
        self._product_repo = product_repo
        self._locks = locks

    def handle(self, product_id: str) -> None:
        """Mark a product deleted. Its sales stay in the ledger."""
        self._active_product(product_id)

        with self._locks.hold(product_id):
            current = self._active_product(product_id)

            product = replace(current)
            product.soft_delete()
            self._product_repo.save(product)

        logger.info(f"Soft-deleted product {product_id} '{product.name}'")

    def _active_product(self, product_id: str) -> Product:
        product = self._product_repo.get_by_id(product_id)
        if product is None or product.is_deleted:
            raise EntityNotFoundError(f"Product with ID '{product_id}' not found")
        return product
