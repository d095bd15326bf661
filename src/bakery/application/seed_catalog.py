"""Application service: Seed Catalog use case.

Loads the bakery's starter products. Products whose name already exists
(deleted ones included) are skipped, so running it twice is harmless.
"""

from __future__ import annotations

import logging

from bakery.domain.model.product import Product
from bakery.domain.model.value_objects import Money
from bakery.domain.repository.product_repository import ProductRepository

logger = logging.getLogger(__name__)

# (name, price, total_stock, image file)
DEFAULT_PRODUCTS = [
    ("Sourdough Loaf", "4.50", 120, "sourdough.jpg"),
    ("Chocolate Croissant", "3.25", 200, "choco-croissant.jpg"),
    ("Almond Danish", "3.75", 150, "almond-danish.jpg"),
    ("Cinnamon Roll", "3.00", 180, "cinnamon-roll.jpg"),
    ("Blueberry Muffin", "2.75", 160, "blueberry-muffin.jpg"),
]


class SeedCatalogHandler:

    def __init__(self, product_repo: ProductRepository) -> None:
        self._product_repo = product_repo

    def handle(self, image_base: str = "public") -> int:
        """Insert the missing starter products; return how many were added."""
        image_base = image_base.rstrip("/")
        added = 0
        for name, price, stock, image in DEFAULT_PRODUCTS:
            if self._product_repo.get_by_name(name) is not None:
                continue
            product = Product.create(
                name=name,
                price=Money.of(price),
                total_stock=stock,
                image_path=f"{image_base}/{image}",
            )
            self._product_repo.save(product)
            added += 1

        if added:
            logger.info(f"Seeded {added} products")
        else:
            logger.info("Seed skipped: all products already exist")
        return added
