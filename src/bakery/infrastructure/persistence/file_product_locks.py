"""Product locks that also hold across processes.

Every ``bakery`` command runs in its own process, so the in-process
registry alone cannot keep two concurrent sales of the last unit apart.
Each hold additionally takes ``<lock_dir>/<product_id>.lock`` with an
OS-level file lock, after the thread lock, with the same timeout.
"""

from __future__ import annotations

import logging
from collections.abc import Iterator
from contextlib import contextmanager
from pathlib import Path

from filelock import FileLock, Timeout

from bakery.domain.exceptions import StorageUnavailableError
from bakery.domain.service.product_locks import ProductLocks

logger = logging.getLogger(__name__)


class FileProductLocks(ProductLocks):

    def __init__(self, lock_dir: Path, timeout: float = 10.0) -> None:
        super().__init__(timeout=timeout)
        self._lock_dir = lock_dir

    @contextmanager
    def hold(self, product_id: str) -> Iterator[None]:
        with super().hold(product_id):
            file_lock = self._file_lock_for(product_id)
            try:
                file_lock.acquire()
            except Timeout as exc:
                logger.error(f"Timed out waiting for file lock on product {product_id}")
                raise StorageUnavailableError(
                    f"Product {product_id} is busy; gave up after {self.timeout}s"
                ) from exc
            except OSError as exc:
                raise StorageUnavailableError(
                    f"Cannot lock product {product_id}"
                ) from exc
            try:
                yield
            finally:
                file_lock.release()

    def _file_lock_for(self, product_id: str) -> FileLock:
        try:
            self._lock_dir.mkdir(parents=True, exist_ok=True)
        except OSError as exc:
            raise StorageUnavailableError(f"Cannot create {self._lock_dir}") from exc
        return FileLock(str(self._lock_dir / f"{product_id}.lock"), timeout=self.timeout)
