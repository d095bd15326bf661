"""Data Transfer Objects — plain containers that cross layer boundaries.

DTOs carry data between the CLI and application layers without
exposing domain internals to the outside world. Money is rendered as a
two-decimal string and timestamps as ISO-8601 UTC.
"""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime, timezone
from typing import Generic, TypeVar

from bakery.domain.exceptions import ValidationError
from bakery.domain.model.sale import Sale
from bakery.domain.model.stock import StockLevel

T = TypeVar("T")

MAX_PAGE_SIZE = 100


# --- Inputs -------------------------------------------------------------------


@dataclass(frozen=True)
class PageRequest:
    page: int = 1
    limit: int = 20

    def __post_init__(self) -> None:
        if self.page < 1:
            raise ValidationError("Page must be at least 1")
        if not 1 <= self.limit <= MAX_PAGE_SIZE:
            raise ValidationError(f"Limit must be between 1 and {MAX_PAGE_SIZE}")

    @property
    def offset(self) -> int:
        return (self.page - 1) * self.limit

    def slice(self, items: list[T]) -> list[T]:
        return items[self.offset:self.offset + self.limit]


@dataclass(frozen=True)
class ProductChanges:
    """Input: a partial product update. ``None`` means "leave unchanged"."""

    name: str | None = None
    price: str | None = None
    total_stock: int | None = None
    image_path: str | None = None

    @property
    def is_empty(self) -> bool:
        return all(
            value is None
            for value in (self.name, self.price, self.total_stock, self.image_path)
        )


# --- Outputs ------------------------------------------------------------------


@dataclass(frozen=True)
class Page(Generic[T]):
    items: list[T]
    total: int


@dataclass(frozen=True)
class ProductDTO:
    id: str
    name: str
    price: str  # e.g. "4.50"
    total_stock: int
    image_path: str | None
    sold_quantity: int
    remaining_stock: int
    deleted_at: str | None


@dataclass(frozen=True)
class SaleDTO:
    id: str
    product_id: str
    product_name: str
    quantity: int
    unit_price: str
    total_amount: str
    sold_at: str


@dataclass(frozen=True)
class SummaryDTO:
    total_products: int
    total_stock: int
    total_sold_quantity: int
    total_remaining_stock: int


@dataclass(frozen=True)
class BestSellerDTO:
    product_id: str
    name: str
    price: str  # current price, not the price paid
    sold_quantity: int
    total_revenue: str


@dataclass(frozen=True)
class BestSellersDTO:
    best_by_quantity: BestSellerDTO | None
    best_by_revenue: BestSellerDTO | None


# --- Mapping ------------------------------------------------------------------


def to_utc(value: datetime | None) -> datetime | None:
    """Treat naive timestamps as UTC; convert aware ones to UTC."""
    if value is None:
        return None
    if value.tzinfo is None:
        return value.replace(tzinfo=timezone.utc)
    return value.astimezone(timezone.utc)


def format_timestamp(value: datetime) -> str:
    return value.astimezone(timezone.utc).isoformat()


def product_to_dto(level: StockLevel) -> ProductDTO:
    product = level.product
    return ProductDTO(
        id=product.id,
        name=product.name,
        price=str(product.price),
        total_stock=product.total_stock,
        image_path=product.image_path,
        sold_quantity=level.sold_quantity,
        remaining_stock=level.remaining_stock,
        deleted_at=format_timestamp(product.deleted_at) if product.deleted_at else None,
    )


def sale_to_dto(sale: Sale) -> SaleDTO:
    return SaleDTO(
        id=sale.id,
        product_id=sale.product_id,
        product_name=sale.product_name,
        quantity=sale.quantity.value,
        unit_price=str(sale.unit_price),
        total_amount=str(sale.total_amount),
        sold_at=format_timestamp(sale.sold_at),
    )
