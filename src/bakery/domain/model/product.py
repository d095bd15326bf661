"""Product aggregate.

Products live independently of sales. They have their own lifecycle:
prices and stock capacity change, products are soft-deleted from the
catalog. A product is never removed outright because sales keep
referring to it by id.
"""

from __future__ import annotations

import uuid
from dataclasses import dataclass, field
from datetime import datetime, timezone

from bakery.domain.exceptions import ConflictError, ValidationError
from bakery.domain.model.value_objects import Money


def utcnow() -> datetime:
    return datetime.now(timezone.utc)


@dataclass
class Product:
    """A product in the catalog.

    Use ``Product.create()`` for new products; it validates every field.
    The ``__init__`` stays simple so the repository can reconstitute
    persisted products without re-validating.
    """

    id: str
    name: str
    price: Money
    total_stock: int
    image_path: str | None = None
    deleted_at: datetime | None = None
    created_at: datetime = field(default_factory=utcnow)
    updated_at: datetime = field(default_factory=utcnow)

    # --- Factory (used for NEW products only) ---------------------------------

    @staticmethod
    def create(
        name: str,
        price: Money,
        total_stock: int,
        image_path: str | None = None,
    ) -> Product:
        return Product(
            id=str(uuid.uuid4()),
            name=_checked_name(name),
            price=price,
            total_stock=_checked_stock(total_stock),
            image_path=_checked_image_path(image_path),
        )

    @property
    def is_deleted(self) -> bool:
        return self.deleted_at is not None

    # --- Mutations ------------------------------------------------------------

    def rename(self, name: str) -> None:
        self.name = _checked_name(name)
        self._touch()

    def reprice(self, price: Money) -> None:
        """Change the product price.

        Existing sales are unaffected; they captured the unit price at
        the moment they were recorded.
        """
        self.price = price
        self._touch()

    def resize_stock(self, total_stock: int, sold_quantity: int) -> None:
        """Set the stock capacity, never below what has already been sold."""
        total_stock = _checked_stock(total_stock)
        if total_stock < sold_quantity:
            raise ConflictError(
                f"Cannot set total stock of {self.name} to {total_stock} "
                f"— {sold_quantity} already sold"
            )
        self.total_stock = total_stock
        self._touch()

    def change_image(self, image_path: str) -> None:
        self.image_path = _checked_image_path(image_path)
        self._touch()

    def soft_delete(self) -> None:
        if self.is_deleted:
            raise ValidationError(f"Product {self.id} is already deleted")
        self.deleted_at = utcnow()
        self._touch()

    def _touch(self) -> None:
        self.updated_at = utcnow()


# ---------------------------------------------------------------------------
# Field checks
# ---------------------------------------------------------------------------


def _checked_name(name: str) -> str:
    if not isinstance(name, str) or not name.strip():
        raise ValidationError("Product name is required")
    return name.strip()


def _checked_stock(total_stock: int) -> int:
    if not isinstance(total_stock, int) or isinstance(total_stock, bool):
        raise ValidationError(
            f"Total stock must be an integer, got {type(total_stock).__name__}"
        )
    if total_stock < 0:
        raise ValidationError("Total stock cannot be negative")
    return total_stock


def _checked_image_path(image_path: str | None) -> str | None:
    if image_path is None:
        return None
    if not isinstance(image_path, str) or not image_path.strip():
        raise ValidationError("Image path cannot be empty")
    return image_path
