"""A Sale: one immutable entry of the append-only ledger."""

from __future__ import annotations

import uuid
from collections.abc import Iterable
from dataclasses import dataclass
from datetime import datetime

from bakery.domain.model.product import Product, utcnow
from bakery.domain.model.value_objects import Money, Quantity


@dataclass(frozen=True)
class Sale:
    """Captures the price snapshot of a product at sale time.

    ``unit_price`` and ``product_name`` are copied from the product when
    the sale is recorded and never re-derived afterwards. There is no
    update or delete: a recorded sale is permanent.
    """

    id: str
    product_id: str
    product_name: str
    quantity: Quantity
    unit_price: Money  # locked at sale time
    sold_at: datetime

    @property
    def total_amount(self) -> Money:
        return self.unit_price * self.quantity.value

    def sold_within(self, sold_from: datetime | None, sold_to: datetime | None) -> bool:
        """True if ``sold_at`` lies in the inclusive window; None is unbounded."""
        if sold_from is not None and self.sold_at < sold_from:
            return False
        if sold_to is not None and self.sold_at > sold_to:
            return False
        return True

    @staticmethod
    def record(product: Product, quantity: Quantity, sold_at: datetime | None = None) -> Sale:
        return Sale(
            id=str(uuid.uuid4()),
            product_id=product.id,
            product_name=product.name,
            quantity=quantity,
            unit_price=product.price,
            sold_at=sold_at or utcnow(),
        )


def newest_first(sales: Iterable[Sale]) -> list[Sale]:
    """Ledger display order: ``sold_at`` descending, then id descending."""
    return sorted(sales, key=lambda s: (s.sold_at, s.id), reverse=True)
