"""Lock-guarded JSON document on disk.

Every repository keeps its data in one JSON file.  All access to a file
goes through ``locked()``, which serialises readers and writers within
the process (one lock per resolved path, shared by every repository
instance) and bounds the wait by the store timeout.  Writes go to a
temporary file first and are swapped in with ``os.replace`` so a crash
never leaves half a document behind.
"""

from __future__ import annotations

import json
import os
import threading
from collections.abc import Iterator
from contextlib import contextmanager
from pathlib import Path
from typing import Any

from storefront.domain.exceptions import StoreTimeoutError

_registry_lock = threading.Lock()
_file_locks: dict[Path, threading.Lock] = {}


def _lock_for(path: Path) -> threading.Lock:
    with _registry_lock:
        return _file_locks.setdefault(path, threading.Lock())


class JsonFile:

    def __init__(self, file_path: Path, empty: Any, timeout: float) -> None:
        self._file_path = file_path.resolve()
        self._empty = empty
        self._timeout = timeout
        self._lock = _lock_for(self._file_path)
        with self.locked():
            self._ensure_file()

    @property
    def path(self) -> Path:
        return self._file_path

    @contextmanager
    def locked(self) -> Iterator[None]:
        if not self._lock.acquire(timeout=self._timeout):
            raise StoreTimeoutError(
                f"Timed out after {self._timeout}s waiting for {self._file_path.name}"
            )
        try:
            yield
        finally:
            self._lock.release()

    # --- Callers must hold ``locked()`` ---------------------------------------

    def load(self) -> Any:
        return json.loads(self._file_path.read_text(encoding="utf-8"))

    def persist(self, data: Any) -> None:
        tmp_path = self._file_path.with_suffix(self._file_path.suffix + ".tmp")
        tmp_path.write_text(json.dumps(data, indent=2) + "\n", encoding="utf-8")
        os.replace(tmp_path, self._file_path)

    def _ensure_file(self) -> None:
        if not self._file_path.exists():
            self._file_path.parent.mkdir(parents=True, exist_ok=True)
            self.persist(self._empty)
