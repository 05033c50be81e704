"""
File-based local store.

All records live in one JSON document ({key: value}). Every write rewrites
the document to a temp file and swaps it in with os.replace, so readers see
either the old or the new document, never a partial one.
"""

import json
import os
import tempfile
from contextlib import contextmanager
from typing import Dict, Iterator, Optional

from ..core.canonical import canonical_json_bytes
from ..core.errors import LocalStoreError
from .store import LocalStore

try:
    import fcntl
except ImportError:  # Windows or unsupported platform
    fcntl = None


class FileLocalStore(LocalStore):
    """
    JSON-file local store.

    Storage format: single JSON object, canonical (sorted keys)

    Guarantees:
    - Atomic replace on every write
    - Exclusive lock (fcntl) around read-modify-write where available

    The lock serializes writers in one host; the read in check-then-save
    sequences above this store is still not transactional.
    """

    def __init__(self, path: str) -> None:
        """
        Initialize file local store.

        Args:
            path: Path to the JSON document (created on first write)
        """
        self.path = path
        self.lock_path = f"{path}.lock"
        os.makedirs(os.path.dirname(path) or ".", exist_ok=True)

    @contextmanager
    def _locked(self) -> Iterator[None]:
        with open(self.lock_path, "a+b") as lock:
            if fcntl:
                fcntl.flock(lock.fileno(), fcntl.LOCK_EX)
            try:
                yield
            finally:
                if fcntl:
                    fcntl.flock(lock.fileno(), fcntl.LOCK_UN)

    def _read_all(self) -> Dict[str, str]:
        if not os.path.exists(self.path):
            return {}
        try:
            with open(self.path, "r", encoding="utf-8") as f:
                content = f.read()
        except OSError as ex:
            raise LocalStoreError(str(ex)) from ex
        if not content.strip():
            return {}
        try:
            data = json.loads(content)
        except ValueError as ex:
            raise LocalStoreError(f"corrupt local store {self.path}: {ex}") from ex
        if not isinstance(data, dict):
            raise LocalStoreError(f"corrupt local store {self.path}: not an object")
        return data

    def _write_all(self, data: Dict[str, str]) -> None:
        directory = os.path.dirname(self.path) or "."
        try:
            fd, tmp_path = tempfile.mkstemp(prefix=".local-", dir=directory)
            with os.fdopen(fd, "wb") as f:
                f.write(canonical_json_bytes(data))
                f.flush()
                os.fsync(f.fileno())
            os.replace(tmp_path, self.path)
        except OSError as ex:
            raise LocalStoreError(str(ex)) from ex

    def get(self, key: str) -> Optional[str]:
        return self._read_all().get(key)

    def set(self, key: str, value: str) -> None:
        with self._locked():
            data = self._read_all()
            data[key] = value
            self._write_all(data)

    def remove(self, key: str) -> None:
        with self._locked():
            data = self._read_all()
            if key not in data:
                return
            del data[key]
            self._write_all(data)
