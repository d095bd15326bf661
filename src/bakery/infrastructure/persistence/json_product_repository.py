"""JSON-file-backed implementation of ProductRepository."""

from __future__ import annotations

from datetime import datetime
from decimal import Decimal
from pathlib import Path

from bakery.domain.model.product import Product
from bakery.domain.model.value_objects import Money
from bakery.domain.repository.product_repository import ProductRepository
from bakery.infrastructure.persistence.json_file import JsonFile


class JsonProductRepository(ProductRepository):

    def __init__(self, file_path: Path, lock_timeout: float = 10.0) -> None:
        self._file = JsonFile(file_path, lock_timeout=lock_timeout)

    # --- ProductRepository interface ------------------------------------------

    def get_by_id(self, product_id: str) -> Product | None:
        for product in self._file.load(self._to_domain):
            if product.id == product_id:
                return product
        return None

    def get_by_name(self, name: str) -> Product | None:
        for product in self._file.load(self._to_domain):
            if product.name == name:
                return product
        return None

    def list_active(self) -> list[Product]:
        return [p for p in self._file.load(self._to_domain) if not p.is_deleted]

    def save(self, product: Product) -> None:
        with self._file.update() as records:
            for i, raw in enumerate(records):
                if raw.get("id") == product.id:
                    records[i] = self._to_raw(product)
                    break
            else:
                records.append(self._to_raw(product))

    # --- Serialization --------------------------------------------------------

    @staticmethod
    def _to_raw(product: Product) -> dict:
        return {
            "id": product.id,
            "name": product.name,
            "price": str(product.price.amount),
            "total_stock": product.total_stock,
            "image_path": product.image_path,
            "deleted_at": product.deleted_at.isoformat() if product.deleted_at else None,
            "created_at": product.created_at.isoformat(),
            "updated_at": product.updated_at.isoformat(),
        }

    @staticmethod
    def _to_domain(raw: dict) -> Product:
        deleted_at = raw.get("deleted_at")
        return Product(
            id=raw["id"],
            name=raw["name"],
            price=Money(Decimal(raw["price"])),
            total_stock=raw["total_stock"],
            image_path=raw.get("image_path"),
            deleted_at=datetime.fromisoformat(deleted_at) if deleted_at else None,
            created_at=datetime.fromisoformat(raw["created_at"]),
            updated_at=datetime.fromisoformat(raw["updated_at"]),
        )
