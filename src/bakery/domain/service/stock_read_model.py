"""Domain service: Stock Read Model.

Combines the catalog and the ledger into StockLevel rows. Nothing is
cached; every call recomputes from the repositories, so the figures are
never more than one commit behind.

Ordering rule: the ledger is always read *before* the product row.
Sold quantities only grow and every committed state has
``total_stock >= sold_quantity``, so a total read after the ledger sum
is at least that sum and ``remaining_stock`` cannot come out negative
even while writes are in flight.
"""

from __future__ import annotations

from bakery.domain.model.stock import StockLevel
from bakery.domain.repository.product_repository import ProductRepository
from bakery.domain.repository.sale_repository import SaleRepository


class StockReadModel:

    def __init__(self, product_repo: ProductRepository, sale_repo: SaleRepository) -> None:
        self._product_repo = product_repo
        self._sale_repo = sale_repo

    def get(self, product_id: str, include_deleted: bool = False) -> StockLevel | None:
        """Return the stock level for one product, or None if not visible."""
        sold = self._sale_repo.sold_quantity(product_id)
        product = self._product_repo.get_by_id(product_id)
        if product is None or (product.is_deleted and not include_deleted):
            return None
        return StockLevel(product=product, sold_quantity=sold)

    def list_active(self) -> list[StockLevel]:
        """Return every non-deleted product, ordered by name (then id)."""
        sold = self._sale_repo.sold_quantities()
        products = self._product_repo.list_active()
        levels = [
            StockLevel(product=p, sold_quantity=sold.get(p.id, 0))
            for p in products
        ]
        levels.sort(key=lambda lvl: (lvl.product.name, lvl.product.id))
        return levels
