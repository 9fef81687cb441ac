"""
Local File Storage Implementation

DESIGN DECISION: State lives in one JSON file per key under a data
directory, because:
1. Users can inspect or back up their data with ordinary tools
2. No database setup required
3. Collections are tiny (tens of records), so rewriting a whole file is cheap

Writes go to a temporary file in the same directory, are fsynced, and
are then renamed over the target with os.replace(). A crash mid-write
leaves the previous file intact; readers never see a half-written value.
"""

import os
import re
import tempfile
from pathlib import Path
from typing import Optional

from tenacity import Retrying, retry_if_exception_type, stop_after_attempt, wait_exponential

from subscan.log import get_logger
from subscan.services.storage.interface import (
    KeyValueStorageInterface,
    StorageUnavailableError,
)


_KEY_PATTERN = re.compile(r"^[A-Za-z0-9_-][A-Za-z0-9_.-]*$")

logger = get_logger(__name__)


class LocalFileStorage(KeyValueStorageInterface):
    """
    File-backed key-value storage.

    Transient OS errors are retried with exponential backoff; once the
    attempts run out the failure surfaces as StorageUnavailableError.
    """

    def __init__(
        self,
        directory: Path,
        attempts: int = 3,
        retry_wait_seconds: float = 0.1,
    ):
        self._directory = Path(directory)
        self._attempts = attempts
        self._retry_wait_seconds = retry_wait_seconds

    @property
    def directory(self) -> Path:
        return self._directory

    def _retrying(self) -> Retrying:
        return Retrying(
            stop=stop_after_attempt(self._attempts),
            wait=wait_exponential(multiplier=self._retry_wait_seconds, max=2),
            retry=retry_if_exception_type(OSError),
            reraise=True,
        )

    def path_for(self, key: str) -> Path:
        """Resolve the file holding `key`. Rejects keys that could escape the directory."""
        if not _KEY_PATTERN.match(key):
            raise ValueError(f"Invalid storage key: {key!r}")
        return self._directory / f"{key}.json"

    def get(self, key: str) -> Optional[bytes]:
        path = self.path_for(key)
        try:
            return self._retrying()(self._read, path)
        except OSError as e:
            logger.error("storage_read_failed", path=str(path), error=str(e))
            raise StorageUnavailableError(f"Could not read {path}: {e}") from e

    def set(self, key: str, data: bytes) -> None:
        path = self.path_for(key)
        try:
            self._retrying()(self._write_atomic, path, data)
        except OSError as e:
            logger.error("storage_write_failed", path=str(path), error=str(e))
            raise StorageUnavailableError(f"Could not write {path}: {e}") from e

    @staticmethod
    def _read(path: Path) -> Optional[bytes]:
        try:
            return path.read_bytes()
        except FileNotFoundError:
            return None

    @staticmethod
    def _write_atomic(path: Path, data: bytes) -> None:
        path.parent.mkdir(parents=True, exist_ok=True)
        fd, tmp_name = tempfile.mkstemp(
            dir=path.parent,
            prefix=f".{path.stem}.",
            suffix=".tmp",
        )
        try:
            with os.fdopen(fd, "wb") as handle:
                handle.write(data)
                handle.flush()
                os.fsync(handle.fileno())
            os.replace(tmp_name, path)
        except BaseException:
            # Never leave temp files behind, then let the error propagate
            try:
                os.unlink(tmp_name)
            except FileNotFoundError:
                pass
            raise
