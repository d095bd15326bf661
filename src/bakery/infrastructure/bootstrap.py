"""Composition root — wires concrete implementations to domain interfaces.

This is the only place in the codebase that knows about *all* layers.
Every other module depends only on abstractions.
"""

from __future__ import annotations

from pathlib import Path

from bakery.domain.service.product_locks import ProductLocks
from bakery.infrastructure.config import settings
from bakery.infrastructure.persistence.file_product_locks import FileProductLocks
from bakery.infrastructure.persistence.json_product_repository import (
    JsonProductRepository,
)
from bakery.infrastructure.persistence.json_sale_repository import (
    JsonSaleRepository,
)

# One lock registry per data directory within a process: every handler
# that changes stock must share it.
_product_locks: dict[Path, FileProductLocks] = {}


def product_repository() -> JsonProductRepository:
    return JsonProductRepository(
        settings.DATA_DIR / "products.json", lock_timeout=settings.LOCK_TIMEOUT_SECONDS
    )


def sale_repository() -> JsonSaleRepository:
    return JsonSaleRepository(
        settings.DATA_DIR / "sales.json", lock_timeout=settings.LOCK_TIMEOUT_SECONDS
    )


def product_locks() -> ProductLocks:
    lock_dir = settings.DATA_DIR / "locks"
    return _product_locks.setdefault(
        lock_dir, FileProductLocks(lock_dir, timeout=settings.LOCK_TIMEOUT_SECONDS)
    )
