"""A collection of JSON documents stored in one file.

Shared by the JSON repositories.  Writes go to a temporary file that
replaces the collection with ``os.replace``, so a reader sees either the
old or the new collection, never a half-written one.  ``transaction()``
holds the file's lock across read-modify-write; that is what makes the
stock compare-and-set atomic within the process.
"""

from __future__ import annotations

import copy
import json
import os
import tempfile
import threading
from collections.abc import Iterator
from contextlib import contextmanager
from pathlib import Path

from storefront.domain.exceptions import StorageError

_LOCKS: dict[Path, threading.RLock] = {}
_LOCKS_GUARD = threading.Lock()


def _lock_for(path: Path) -> threading.RLock:
    with _LOCKS_GUARD:
        return _LOCKS.setdefault(path, threading.RLock())


class JsonCollection:

    def __init__(self, file_path: Path) -> None:
        self._file_path = file_path.resolve()
        self._lock = _lock_for(self._file_path)
        self._ensure_file()

    @property
    def file_path(self) -> Path:
        return self._file_path

    def load(self) -> list[dict]:
        """Snapshot of every document."""
        return self._load_raw()

    @contextmanager
    def transaction(self) -> Iterator[list[dict]]:
        """Yield the documents for in-place changes and write them back.

        Nothing is written if the block raises or leaves the documents
        unchanged.
        """
        with self._lock:
            records = self._load_raw()
            before = copy.deepcopy(records)
            yield records
            if records != before:
                self._persist_raw(records)

    # --- File helpers ---------------------------------------------------------

    def _load_raw(self) -> list[dict]:
        try:
            records = json.loads(self._file_path.read_text(encoding="utf-8"))
        except (OSError, ValueError) as exc:
            raise StorageError(f"Cannot read {self._file_path.name}: {exc}") from exc
        if not isinstance(records, list):
            raise StorageError(f"{self._file_path.name} does not hold a list of documents")
        return records

    def _persist_raw(self, records: list[dict]) -> None:
        payload = json.dumps(records, indent=2) + "\n"
        try:
            fd, tmp_name = tempfile.mkstemp(
                dir=self._file_path.parent, prefix=f".{self._file_path.name}.", suffix=".tmp"
            )
            try:
                with os.fdopen(fd, "w", encoding="utf-8") as fh:
                    fh.write(payload)
                    fh.flush()
                    os.fsync(fh.fileno())
                os.replace(tmp_name, self._file_path)
            except BaseException:
                Path(tmp_name).unlink(missing_ok=True)
                raise
        except OSError as exc:
            raise StorageError(f"Cannot write {self._file_path.name}: {exc}") from exc

    def _ensure_file(self) -> None:
        try:
            if not self._file_path.exists():
                self._file_path.parent.mkdir(parents=True, exist_ok=True)
                self._file_path.write_text("[]", encoding="utf-8")
        except OSError as exc:
            raise StorageError(f"Cannot create {self._file_path}: {exc}") from exc
