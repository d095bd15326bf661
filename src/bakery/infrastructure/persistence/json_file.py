"""Shared file helpers for the JSON-backed repositories.

Each file holds a JSON list of records. Writes go to a uniquely named
temporary file that is then renamed over the real one, so a reader sees
either the old or the new list in full. Read-modify-write cycles on one
path are serialized by a per-path thread lock within a process and by a
``<file>.lock`` file lock across processes.
"""

from __future__ import annotations

import json
import logging
import os
import tempfile
import threading
from collections.abc import Callable, Iterator
from contextlib import contextmanager
from pathlib import Path
from typing import TypeVar

from filelock import FileLock, Timeout

from bakery.domain.exceptions import DomainException, StorageUnavailableError

logger = logging.getLogger(__name__)

T = TypeVar("T")

_path_locks: dict[Path, threading.Lock] = {}
_path_locks_guard = threading.Lock()


def _lock_for(path: Path) -> threading.Lock:
    with _path_locks_guard:
        lock = _path_locks.get(path)
        if lock is None:
            lock = _path_locks[path] = threading.Lock()
        return lock


class JsonFile:

    def __init__(self, file_path: Path, lock_timeout: float = 10.0) -> None:
        self._file_path = file_path.resolve()
        self._lock = _lock_for(self._file_path)
        self._file_lock = FileLock(
            str(self._file_path) + ".lock", timeout=lock_timeout
        )
        self._ensure_file()

    def read(self) -> list[dict]:
        try:
            return json.loads(self._file_path.read_text(encoding="utf-8"))
        except (OSError, ValueError) as exc:
            logger.error(f"Failed to read {self._file_path}: {exc}")
            raise StorageUnavailableError(f"Cannot read {self._file_path.name}") from exc

    def load(self, to_domain: Callable[[dict], T]) -> list[T]:
        """Read every record and convert it; a malformed record is a storage fault."""
        items = []
        for raw in self.read():
            try:
                items.append(to_domain(raw))
            except (KeyError, TypeError, ValueError, ArithmeticError, DomainException) as exc:
                logger.error(f"Malformed record in {self._file_path}: {exc!r}")
                raise StorageUnavailableError(
                    f"Malformed record in {self._file_path.name}"
                ) from exc
        return items

    @contextmanager
    def update(self) -> Iterator[list[dict]]:
        """Yield the current records; persist them when the block exits cleanly."""
        with self._exclusive():
            records = self.read()
            yield records
            self._write(records)

    # --- File helpers ---------------------------------------------------------

    @contextmanager
    def _exclusive(self) -> Iterator[None]:
        with self._lock:
            try:
                self._file_lock.acquire()
            except Timeout as exc:
                logger.error(f"Timed out waiting for write lock on {self._file_path}")
                raise StorageUnavailableError(
                    f"{self._file_path.name} is busy; gave up after {self._file_lock.timeout}s"
                ) from exc
            except OSError as exc:
                raise StorageUnavailableError(f"Cannot lock {self._file_path.name}") from exc
            try:
                yield
            finally:
                self._file_lock.release()

    def _write(self, records: list[dict]) -> None:
        tmp_name = None
        try:
            with tempfile.NamedTemporaryFile(
                "w",
                encoding="utf-8",
                dir=self._file_path.parent,
                prefix=f".{self._file_path.name}.",
                suffix=".tmp",
                delete=False,
            ) as tmp:
                tmp_name = tmp.name
                tmp.write(json.dumps(records, indent=2) + "\n")
            os.replace(tmp_name, self._file_path)
        except OSError as exc:
            logger.error(f"Failed to write {self._file_path}: {exc}")
            if tmp_name is not None and os.path.exists(tmp_name):
                os.unlink(tmp_name)
            raise StorageUnavailableError(f"Cannot write {self._file_path.name}") from exc

    def _ensure_file(self) -> None:
        try:
            self._file_path.parent.mkdir(parents=True, exist_ok=True)
        except OSError as exc:
            raise StorageUnavailableError(f"Cannot create {self._file_path.name}") from exc
        if self._file_path.exists():
            return
        # Another process may create it between the check and the lock.
        with self._exclusive():
            if not self._file_path.exists():
                self._write([])
