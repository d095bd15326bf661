"""Per-product mutual exclusion for stock-changing operations.

Every operation that can move ``remaining_stock`` (recording a sale,
resizing or deleting a product) holds the product's lock for the whole
read-check-write sequence. Locks are keyed by product id, so work on
different products never waits.
"""

from __future__ import annotations

import logging
import threading
from collections.abc import Iterator
from contextlib import contextmanager

from bakery.domain.exceptions import StorageUnavailableError

logger = logging.getLogger(__name__)


class ProductLocks:

    def __init__(self, timeout: float = 10.0) -> None:
        if timeout <= 0:
            raise ValueError("Lock timeout must be positive")
        self._timeout = timeout
        self._locks: dict[str, threading.Lock] = {}
        self._registry_lock = threading.Lock()

    @property
    def timeout(self) -> float:
        return self._timeout

    @contextmanager
    def hold(self, product_id: str) -> Iterator[None]:
        """Hold the lock for ``product_id`` for the duration of the block.

        Raises StorageUnavailableError if the lock cannot be taken within
        the configured timeout.
        """
        lock = self._lock_for(product_id)
        if not lock.acquire(timeout=self._timeout):
            logger.error(f"Timed out waiting for stock lock on product {product_id}")
            raise StorageUnavailableError(
                f"Product {product_id} is busy; gave up after {self._timeout}s"
            )
        try:
            yield
        finally:
            lock.release()

    def _lock_for(self, product_id: str) -> threading.Lock:
        with self._registry_lock:
            lock = self._locks.get(product_id)
            if lock is None:
                lock = self._locks[product_id] = threading.Lock()
            return lock
