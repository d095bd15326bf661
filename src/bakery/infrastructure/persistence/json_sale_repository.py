"""JSON-file-backed implementation of the append-only SaleRepository."""

from __future__ import annotations

from datetime import datetime
from decimal import Decimal
from pathlib import Path

from bakery.domain.model.sale import Sale, newest_first
from bakery.domain.model.value_objects import Money, Quantity
from bakery.domain.repository.sale_repository import SaleRepository
from bakery.infrastructure.persistence.json_file import JsonFile


class JsonSaleRepository(SaleRepository):

    def __init__(self, file_path: Path, lock_timeout: float = 10.0) -> None:
        self._file = JsonFile(file_path, lock_timeout=lock_timeout)

    # --- SaleRepository interface ---------------------------------------------

    def append(self, sale: Sale) -> None:
        with self._file.update() as records:
            records.append(self._to_raw(sale))

    def sold_quantity(self, product_id: str) -> int:
        return sum(
            sale.quantity.value
            for sale in self._file.load(self._to_domain)
            if sale.product_id == product_id
        )

    def sold_quantities(self) -> dict[str, int]:
        totals: dict[str, int] = {}
        for sale in self._file.load(self._to_domain):
            totals[sale.product_id] = totals.get(sale.product_id, 0) + sale.quantity.value
        return totals

    def find(
        self,
        product_id: str | None = None,
        sold_from: datetime | None = None,
        sold_to: datetime | None = None,
    ) -> list[Sale]:
        return newest_first(
            sale
            for sale in self._file.load(self._to_domain)
            if (product_id is None or sale.product_id == product_id)
            and sale.sold_within(sold_from, sold_to)
        )

    # --- Serialization --------------------------------------------------------

    @staticmethod
    def _to_raw(sale: Sale) -> dict:
        # total_amount is derived on load, never stored
        return {
            "id": sale.id,
            "product_id": sale.product_id,
            "product_name": sale.product_name,
            "quantity": sale.quantity.value,
            "unit_price": str(sale.unit_price.amount),
            "sold_at": sale.sold_at.isoformat(),
        }

    @staticmethod
    def _to_domain(raw: dict) -> Sale:
        return Sale(
            id=raw["id"],
            product_id=raw["product_id"],
            product_name=raw["product_name"],
            quantity=Quantity(raw["quantity"]),
            unit_price=Money(Decimal(raw["unit_price"])),
            sold_at=datetime.fromisoformat(raw["sold_at"]),
        )
