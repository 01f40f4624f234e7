# ==============================================================================
# JSON File Event Store Implementation
# ==============================================================================
"""
Single-file implementation of the EventStore interface.

The whole collection lives in one JSON array. Appends are a read-modify-write
under a process-local lock, and the new file is written to a temporary path
then swapped in with os.replace, so readers never see a half-written file.

A missing file is an empty collection, not an error.
"""

import json
import logging
import os
import tempfile
import threading
from pathlib import Path

from pulse.base import EventStore, StoreUnavailableError
from pulse.utils.config import get_settings

logger = logging.getLogger(__name__)


class JsonFileEventStore(EventStore):
    """Event store backed by a JSON array on the local filesystem."""

    def __init__(self, path: Path | str | None = None):
        """
        Initialize the file store.

        Args:
            path: JSON file path. If None, uses settings.
        """
        self._path = Path(path) if path is not None else get_settings().file_store.path
        self._lock = threading.Lock()

    @property
    def name(self) -> str:
        return "file"

    @property
    def path(self) -> Path:
        return self._path

    def append(self, record: dict) -> None:
        with self._lock:
            records = self._read()
            records.append(record)
            self._write(records)
        logger.debug("File store now holds %d events", len(records))

    def read_all(self) -> list[dict]:
        with self._lock:
            return self._read()

    def clear(self) -> None:
        with self._lock:
            try:
                self._path.unlink(missing_ok=True)
            except OSError as e:
                raise StoreUnavailableError(self.name, f"cannot remove {self._path}: {e}") from e

    def _read(self) -> list[dict]:
        try:
            text = self._path.read_text(encoding="utf-8")
        except FileNotFoundError:
            return []
        except OSError as e:
            raise StoreUnavailableError(self.name, f"cannot read {self._path}: {e}") from e

        if not text.strip():
            return []
        try:
            data = json.loads(text)
        except json.JSONDecodeError as e:
            raise StoreUnavailableError(self.name, f"corrupt JSON in {self._path}: {e}") from e
        if not isinstance(data, list):
            raise StoreUnavailableError(self.name, f"expected a JSON array in {self._path}")
        return data

    def _write(self, records: list[dict]) -> None:
        try:
            self._path.parent.mkdir(parents=True, exist_ok=True)
            fd, tmp_name = tempfile.mkstemp(
                dir=self._path.parent, prefix=f".{self._path.name}.", suffix=".tmp"
            )
            try:
                with os.fdopen(fd, "w", encoding="utf-8") as f:
                    json.dump(records, f, indent=2)
                os.replace(tmp_name, self._path)
            except BaseException:
                Path(tmp_name).unlink(missing_ok=True)
                raise
        except OSError as e:
            raise StoreUnavailableError(self.name, f"cannot write {self._path}: {e}") from e
