"""Application service: Create Product use case."""

from __future__ import annotations

import logging
from decimal import Decimal

from bakery.application.dto import ProductDTO, product_to_dto
from bakery.domain.model.product import Product
from bakery.domain.model.stock import StockLevel
from bakery.domain.model.value_objects import Money
from bakery.domain.repository.product_repository import ProductRepository

logger = logging.getLogger(__name__)


class CreateProductHandler:

    def __init__(self, product_repo: ProductRepository) -> None:
        self._product_repo = product_repo

    def handle(
        self,
        name: str,
        price: str | int | Decimal,
        total_stock: int,
        image_path: str | None = None,
    ) -> ProductDTO:
        """Add a new product to the catalog."""
        product = Product.create(
            name=name,
            price=Money.of(price),
            total_stock=total_stock,
            image_path=image_path,
        )
        self._product_repo.save(product)
        logger.info(f"Created product {product.id} '{product.name}'")

        # A brand-new product has no sales yet.
        return product_to_dto(StockLevel(product=product, sold_quantity=0))
