"""Persistent key-value store.

This module provides the KeyValueStore class: a get/set/remove/rename
facade over a single JSON document mapping keys to stored strings. Values
go through the same pipeline as files (stringify -> compress on save,
decompress -> parse on load).

Storage location: ~/.local/state/dirkit/store.json
"""

import json
import logging
import os
from collections.abc import Callable
from pathlib import Path
from tempfile import NamedTemporaryFile
from typing import Any

from dirkit.core.paths import get_store_path
from dirkit.fs.codec import decode_payload, encode_payload
from dirkit.fs.models import ResultEnvelope, Status

logger = logging.getLogger(__name__)


class StoreError(Exception):
    """Raised when the store file cannot be read or written."""


class KeyValueStore:
    """String store persisted as a JSON document.

    Every mutation rewrites the whole document atomically. The file is
    created on the first save.

    Attributes:
        path: Location of the store document.
    """

    def __init__(self, path: Path | None = None) -> None:
        """Initialize KeyValueStore.

        Args:
            path: Optional override for the store file.
                  Default: ~/.local/state/dirkit/store.json
        """
        self._path = path if path is not None else get_store_path()

    @property
    def path(self) -> Path:
        """Path to the store document."""
        return self._path

    def keys(self) -> list[str]:
        """Return the stored keys in sorted order."""
        return sorted(self._read())

    def exists(self, key: str) -> bool:
        """Check if a value is stored under key."""
        return key in self._read()

    def load(
        self,
        key: str,
        *,
        decompress: bool = False,
        parse: bool = False,
        object_hook: Callable[[dict[str, Any]], Any] | None = None,
    ) -> ResultEnvelope:
        """Read the value stored under key.

        Args:
            key: Store key.
            decompress: Run the decompression stage.
            parse: Run the JSON parse stage.
            object_hook: Optional hook for the JSON decoder.

        Returns:
            OK envelope with the value, PATH_NOT_FOUND for an unknown key,
            or DECODE_FAILED / PARSE_FAILED from the pipeline.

        Raises:
            StoreError: If the store document is unreadable.
        """
        entries = self._read()
        if key not in entries:
            return ResultEnvelope(Status.PATH_NOT_FOUND)
        return decode_payload(
            entries[key],
            decompress=decompress,
            parse=parse,
            object_hook=object_hook,
        )

    def save(
        self,
        key: str,
        data: Any,
        *,
        stringify: bool = False,
        compress: bool = False,
        overwrite: bool = True,
        indent: int | None = None,
    ) -> Status:
        """Store a value under key.

        Args:
            key: Store key.
            data: Value to store; a string unless stringify is set.
            stringify: Serialize the value to JSON first.
            compress: Compress the resulting text.
            overwrite: Allow replacing an existing value.
            indent: JSON indentation for the stringify stage.

        Returns:
            OK, or OVERWRITE_NOT_PERMITTED if the key exists and overwrite
            is disabled.

        Raises:
            TypeError: If data cannot go through the write pipeline.
            StoreError: If the store document cannot be read or written.
        """
        entries = self._read()
        if not overwrite and key in entries:
            return Status.OVERWRITE_NOT_PERMITTED

        entries[key] = encode_payload(data, stringify=stringify, compress=compress, indent=indent)
        self._write(entries)
        logger.debug("Stored key %s", key)
        return Status.OK

    def remove(self, key: str) -> Status:
        """Delete the value stored under key.

        Returns:
            OK, or PATH_NOT_FOUND for an unknown key.

        Raises:
            StoreError: If the store document cannot be read or written.
        """
        entries = self._read()
        if key not in entries:
            return Status.PATH_NOT_FOUND

        del entries[key]
        self._write(entries)
        logger.debug("Removed key %s", key)
        return Status.OK

    def rename(self, old: str, new: str, *, overwrite: bool = False) -> Status:
        """Move a value to another key.

        Renaming a key onto itself is a no-op that returns OK.

        Returns:
            OK, PATH_NOT_FOUND if old is unknown, or OVERWRITE_NOT_PERMITTED
            if new exists and overwrite is disabled.

        Raises:
            StoreError: If the store document cannot be read or written.
        """
        entries = self._read()
        if old not in entries:
            return Status.PATH_NOT_FOUND
        if old == new:
            return Status.OK
        if not overwrite and new in entries:
            return Status.OVERWRITE_NOT_PERMITTED

        entries[new] = entries.pop(old)
        self._write(entries)
        logger.debug("Renamed key %s to %s", old, new)
        return Status.OK

    def _read(self) -> dict[str, str]:
        """Load the store document.

        Returns:
            Mapping of keys to stored strings (empty if the file is missing).

        Raises:
            StoreError: If the file cannot be read or is not a JSON object
                of strings.
        """
        if not self._path.exists():
            return {}

        try:
            with self._path.open(encoding="utf-8") as f:
                data = json.load(f)
        except json.JSONDecodeError as e:
            msg = f"Corrupted store file {self._path}: {e}"
            raise StoreError(msg) from e
        except OSError as e:
            msg = f"Failed to read store file {self._path}: {e}"
            raise StoreError(msg) from e

        if not isinstance(data, dict) or not all(isinstance(v, str) for v in data.values()):
            msg = f"Store file must hold an object of strings: {self._path}"
            raise StoreError(msg)
        return data

    def _write(self, entries: dict[str, str]) -> None:
        """Write the store document atomically.

        Raises:
            StoreError: If the file cannot be written.
        """
        tmp_path: Path | None = None
        try:
            self._path.parent.mkdir(parents=True, exist_ok=True)
            with NamedTemporaryFile(
                mode="w",
                encoding="utf-8",
                dir=self._path.parent,
                delete=False,
                suffix=".tmp",
            ) as f:
                tmp_path = Path(f.name)
                json.dump(entries, f, indent=2, sort_keys=True)
            os.replace(str(tmp_path), str(self._path))
        except OSError as e:
            if tmp_path is not None and tmp_path.exists():
                tmp_path.unlink()
            msg = f"Failed to write store file {self._path}: {e}"
            raise StoreError(msg) from e
