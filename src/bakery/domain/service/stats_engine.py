"""Domain service: Stats Engine.

Fleet-wide summaries and best-seller rankings, recomputed from the read
model and the ledger on every call.
"""

from __future__ import annotations

from collections.abc import Iterable
from dataclasses import dataclass
from datetime import datetime

from bakery.domain.exceptions import EntityNotFoundError, ValidationError
from bakery.domain.model.product import Product
from bakery.domain.model.sale import Sale
from bakery.domain.model.stock import StockLevel
from bakery.domain.model.value_objects import Money
from bakery.domain.repository.product_repository import ProductRepository
from bakery.domain.repository.sale_repository import SaleRepository
from bakery.domain.service.stock_read_model import StockReadModel


@dataclass(frozen=True)
class StockSummary:
    total_products: int
    total_stock: int
    total_sold_quantity: int
    total_remaining_stock: int


@dataclass(frozen=True)
class ProductSalesTotal:
    """Quantity and revenue summed over one product's sales."""

    product_id: str
    sold_quantity: int
    revenue: Money


@dataclass(frozen=True)
class BestSeller:
    """A ranking winner, with the product's name and price as of now."""

    product: Product
    sold_quantity: int
    revenue: Money


@dataclass(frozen=True)
class BestSellers:
    by_quantity: BestSeller | None
    by_revenue: BestSeller | None


# ---------------------------------------------------------------------------
# Pure aggregation helpers
# ---------------------------------------------------------------------------


def summarize(levels: Iterable[StockLevel]) -> StockSummary:
    count = stock = sold = 0
    for level in levels:
        count += 1
        stock += level.product.total_stock
        sold += level.sold_quantity
    return StockSummary(
        total_products=count,
        total_stock=stock,
        total_sold_quantity=sold,
        total_remaining_stock=stock - sold,
    )


def totals_by_product(sales: Iterable[Sale]) -> list[ProductSalesTotal]:
    quantities: dict[str, int] = {}
    revenues: dict[str, Money] = {}
    for sale in sales:
        pid = sale.product_id
        quantities[pid] = quantities.get(pid, 0) + sale.quantity.value
        revenues[pid] = revenues.get(pid, Money.zero()) + sale.total_amount
    return [
        ProductSalesTotal(product_id=pid, sold_quantity=qty, revenue=revenues[pid])
        for pid, qty in quantities.items()
    ]


def best_by_quantity(totals: list[ProductSalesTotal]) -> ProductSalesTotal | None:
    """Highest summed quantity; the lowest product id wins a tie."""
    if not totals:
        return None
    return min(totals, key=lambda t: (-t.sold_quantity, t.product_id))


def best_by_revenue(totals: list[ProductSalesTotal]) -> ProductSalesTotal | None:
    """Highest summed revenue; the lowest product id wins a tie."""
    if not totals:
        return None
    return min(totals, key=lambda t: (-t.revenue.amount, t.product_id))


# ---------------------------------------------------------------------------
# Service
# ---------------------------------------------------------------------------


class StatsEngine:

    def __init__(self, product_repo: ProductRepository, sale_repo: SaleRepository) -> None:
        self._product_repo = product_repo
        self._sale_repo = sale_repo

    def summary(self) -> StockSummary:
        """Sum the read model across all non-deleted products."""
        read_model = StockReadModel(self._product_repo, self._sale_repo)
        return summarize(read_model.list_active())

    def best_sellers(
        self,
        sold_from: datetime | None = None,
        sold_to: datetime | None = None,
    ) -> BestSellers:
        """Rank products by quantity and by revenue within a time window.

        Sales of products deleted since still count; the ranking is a
        historical report.
        """
        if sold_from is not None and sold_to is not None and sold_from > sold_to:
            raise ValidationError("'from' must not be later than 'to'")

        totals = totals_by_product(
            self._sale_repo.find(sold_from=sold_from, sold_to=sold_to)
        )
        return BestSellers(
            by_quantity=self._resolve(best_by_quantity(totals)),
            by_revenue=self._resolve(best_by_revenue(totals)),
        )

    def _resolve(self, total: ProductSalesTotal | None) -> BestSeller | None:
        if total is None:
            return None
        product = self._product_repo.get_by_id(total.product_id)
        if product is None:
            raise EntityNotFoundError(
                f"Sales reference unknown product '{total.product_id}'"
            )
        return BestSeller(
            product=product,
            sold_quantity=total.sold_quantity,
            revenue=total.revenue,
        )
