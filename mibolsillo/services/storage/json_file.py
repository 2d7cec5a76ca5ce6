"""
JSON File Storage Implementation

The desktop counterpart of the browser's localStorage: a single JSON
document on disk mapping keys to string values.

TRADEOFFS:
- The whole file is rewritten on every set (fine for a personal ledger)
- Writes go to a temporary file first and are moved into place, so a
  crash mid-write leaves the previous file intact
- An unreadable file is moved to "<name>.corrupt" before the next write
  replaces it, so nothing the user stored is silently destroyed
- No locking; one writer process is assumed
"""

import json
import os
import tempfile
from pathlib import Path
from typing import Optional

import structlog

from mibolsillo.services.storage.interface import (
    KeyValueStorageInterface,
    StorageReadError,
    StorageWriteError,
)


logger = structlog.get_logger(__name__)


class JsonFileStorage(KeyValueStorageInterface):
    """
    Key-value storage persisted to one JSON file.

    The file is created lazily on the first write.
    """

    def __init__(self, path: Path):
        self._path = Path(path)

    @property
    def path(self) -> Path:
        return self._path

    @property
    def backup_path(self) -> Path:
        """Where an unreadable file is moved before being replaced."""
        return self._path.with_name(self._path.name + ".corrupt")

    def _read_all(self) -> dict[str, str]:
        if not self._path.exists():
            return {}

        try:
            with open(self._path, "r", encoding="utf-8") as f:
                data = json.load(f)
        except (OSError, ValueError) as e:
            # ValueError covers both bad JSON and bytes that are not UTF-8
            raise StorageReadError(f"Cannot read {self._path}: {e}") from e

        if not isinstance(data, dict):
            raise StorageReadError(
                f"Unexpected content in {self._path}: expected an object"
            )

        items = {}
        for k, v in data.items():
            if isinstance(v, str):
                items[str(k)] = v
            else:
                logger.warning(
                    "storage_value_skipped",
                    path=str(self._path),
                    key=str(k),
                    value_type=type(v).__name__,
                )
        return items

    def _write_all(self, data: dict[str, str]) -> None:
        try:
            self._path.parent.mkdir(parents=True, exist_ok=True)
            fd, tmp_name = tempfile.mkstemp(
                prefix=f".{self._path.name}.",
                suffix=".tmp",
                dir=self._path.parent,
            )
            try:
                with os.fdopen(fd, "w", encoding="utf-8") as f:
                    json.dump(data, f, ensure_ascii=False, indent=2)
                os.replace(tmp_name, self._path)
            except BaseException:
                if os.path.exists(tmp_name):
                    os.unlink(tmp_name)
                raise
        except OSError as e:
            raise StorageWriteError(f"Cannot write {self._path}: {e}") from e

        logger.debug("storage_file_written", path=str(self._path), keys=len(data))

    def _set_aside(self) -> Path:
        """Move an unreadable file out of the way so it is not overwritten."""
        backup = self.backup_path
        try:
            os.replace(self._path, backup)
        except OSError as e:
            raise StorageWriteError(
                f"Cannot move unreadable {self._path} aside: {e}"
            ) from e
        return backup

    def get_item(self, key: str) -> Optional[str]:
        return self._read_all().get(key)

    def set_item(self, key: str, value: str) -> None:
        try:
            data = self._read_all()
        except StorageReadError as e:
            if not self._path.is_file():
                raise StorageWriteError(f"Cannot write {self._path}: {e}") from e
            backup = self._set_aside()
            logger.warning(
                "storage_file_reset",
                path=str(self._path),
                backup=str(backup),
                error=str(e),
            )
            data = {}
        data[key] = value
        self._write_all(data)
