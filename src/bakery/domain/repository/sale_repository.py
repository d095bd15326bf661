"""Abstract repository for the Sale ledger.

The ledger is append-only: there is deliberately no save/update/delete.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from datetime import datetime

from bakery.domain.model.sale import Sale


class SaleRepository(ABC):

    @abstractmethod
    def append(self, sale: Sale) -> None:
        """Add a sale to the ledger."""

    @abstractmethod
    def sold_quantity(self, product_id: str) -> int:
        """Return the summed quantity of every sale of one product."""

    @abstractmethod
    def sold_quantities(self) -> dict[str, int]:
        """Return the summed quantity per product id, for products with sales."""

    @abstractmethod
    def find(
        self,
        product_id: str | None = None,
        sold_from: datetime | None = None,
        sold_to: datetime | None = None,
    ) -> list[Sale]:
        """Return matching sales, newest first (id breaks ties).

        Both bounds are inclusive; ``None`` leaves that side open.
        """
