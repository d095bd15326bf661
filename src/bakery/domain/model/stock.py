"""StockLevel, the derived read-model row for one product.

Never stored. Built from a Product and the sum of its ledger entries
each time someone asks.
"""

from __future__ import annotations

from dataclasses import dataclass

from bakery.domain.exceptions import InsufficientStockError, ValidationError
from bakery.domain.model.product import Product


@dataclass(frozen=True)
class StockLevel:
    """Per-product stock figures.

    Invariants:
    - ``sold_quantity`` is never negative
    - ``remaining_stock`` is always >= 0
    """

    product: Product
    sold_quantity: int

    def __post_init__(self) -> None:
        if self.sold_quantity < 0:
            raise ValidationError("Sold quantity cannot be negative")

    @property
    def remaining_stock(self) -> int:
        return self.product.total_stock - self.sold_quantity

    def ensure_available(self, quantity: int) -> None:
        """Raise InsufficientStockError unless ``quantity`` units remain."""
        if quantity > self.remaining_stock:
            raise InsufficientStockError(
                f"Insufficient stock for {self.product.name} "
                f"(need {quantity}, have {self.remaining_stock} remaining)"
            )
