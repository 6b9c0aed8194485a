"""JSON list store.

A store is a single pretty-printed JSON file whose top-level value is an
array of records. Reads load the whole array; writes replace the whole file.

Concurrency model:
- One lock per store serializes read-modify-write cycles (single writer).
- Files are written to a temp file and moved into place, so readers never
  see a half-written document.
- Integer ids are time-derived (milliseconds) but strictly increasing.
"""

from __future__ import annotations

import json
import os
import tempfile
import threading
import time
from contextlib import contextmanager
from pathlib import Path
from typing import Any, Iterator

import structlog

logger = structlog.get_logger(__name__)

Record = dict[str, Any]


class StoreError(Exception):
    """Error reading, parsing or writing a store file."""

    pass


class JsonListStore:
    """A JSON document holding an ordered list of records."""

    def __init__(self, path: Path, name: str | None = None):
        """Create a store handle. Nothing touches the disk until initialize().

        Args:
            path: Location of the JSON file
            name: Short name used in log events (defaults to file stem)
        """
        self.path = Path(path)
        self.name = name or self.path.stem
        self._lock = threading.RLock()
        self._last_id: int | None = None

    def initialize(self) -> bool:
        """Create the file with an empty array if it does not exist.

        Returns:
            True if the file was created, False if it already existed.
        """
        with self._lock:
            if self.path.exists():
                return False
            try:
                self.path.parent.mkdir(parents=True, exist_ok=True)
            except OSError as e:
                raise StoreError(f"Cannot create directory for {self.name}: {e}") from e
            self._write(self.path, [])
            logger.info("store_created", store=self.name, path=str(self.path))
            return True

    def read_all(self) -> list[Record]:
        """Load every record in storage order.

        Raises:
            StoreError: If the file is missing, unreadable or not a JSON array.
        """
        try:
            with open(self.path, encoding="utf-8") as f:
                data = json.load(f)
        except (OSError, json.JSONDecodeError) as e:
            logger.error("store_read_failed", store=self.name, error=str(e))
            raise StoreError(f"Cannot read {self.name}: {e}") from e

        if not isinstance(data, list):
            logger.error("store_invalid_document", store=self.name, got=type(data).__name__)
            raise StoreError(f"{self.name} does not contain a JSON array")

        return data

    def write_all(self, records: list[Record]) -> None:
        """Replace the whole document with ``records``."""
        with self._lock:
            self._write(self.path, records)

    @contextmanager
    def transaction(self) -> Iterator[list[Record]]:
        """Read-modify-write cycle under the store lock.

        The yielded list may be mutated in place. It is written back only if
        the block exits without raising.

        Example:
            with store.transaction() as records:
                records.append(new_record)
        """
        with self._lock:
            records = self.read_all()
            yield records
            self._write(self.path, records)

    def next_id(self) -> int:
        """Allocate a unique, strictly increasing integer id.

        Ids follow the wall clock in milliseconds but never repeat, even
        for several allocations within the same millisecond.
        """
        with self._lock:
            if self._last_id is None:
                self._last_id = self._max_existing_id()
            candidate = int(time.time() * 1000)
            if candidate <= self._last_id:
                candidate = self._last_id + 1
            self._last_id = candidate
            return candidate

    def _max_existing_id(self) -> int:
        if not self.path.exists():
            return 0
        ids = [r.get("id") for r in self.read_all() if isinstance(r, dict)]
        return max((i for i in ids if isinstance(i, int)), default=0)

    def _write(self, path: Path, records: list[Record]) -> None:
        tmp_name: str | None = None
        try:
            fd, tmp_name = tempfile.mkstemp(
                dir=path.parent, prefix=f".{path.name}.", suffix=".tmp"
            )
            with os.fdopen(fd, "w", encoding="utf-8") as f:
                json.dump(records, f, indent=2, ensure_ascii=False)
            os.replace(tmp_name, path)
        except (OSError, TypeError, ValueError) as e:
            logger.error("store_write_failed", store=self.name, error=str(e))
            if tmp_name is not None and os.path.exists(tmp_name):
                os.unlink(tmp_name)
            raise StoreError(f"Cannot write {self.name}: {e}") from e

        logger.debug("store_written", store=self.name, records=len(records))

    def __repr__(self) -> str:
        return f"JsonListStore(name={self.name!r}, path={str(self.path)!r})"
