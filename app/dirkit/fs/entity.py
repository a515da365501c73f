"""Abstract filesystem entity.

An entity is identified by a normalized path. Name queries and path
resolution never touch the filesystem; existence and kind queries do a
single host stat call each.
"""

from __future__ import annotations

import os
import posixpath
import re
from abc import ABC, abstractmethod
from enum import Enum
from pathlib import Path
from typing import TYPE_CHECKING, Any

from dirkit.fs.context import IOContext
from dirkit.fs.models import Status

if TYPE_CHECKING:
    from dirkit.fs.directory import Directory

_SEPARATOR_RUN = re.compile(r"/{2,}")


class EntityKind(str, Enum):
    """Kind of a filesystem entity."""

    FILE = "file"
    DIRECTORY = "directory"


def normalize_path(path: str | os.PathLike[str]) -> str:
    """Normalize a path to its canonical entity form.

    Backslashes become forward slashes, repeated separators collapse,
    ``.`` and ``..`` segments are resolved lexically and any trailing
    slash is dropped. The empty path becomes ``.``. Normalizing an
    already normalized path returns it unchanged.

    Args:
        path: Raw path as given by the caller.

    Returns:
        Normalized path string.

    Example:
        >>> normalize_path("saves//slot1/../slot2/")
        'saves/slot2'
    """
    text = os.fspath(path).replace("\\", "/")
    text = _SEPARATOR_RUN.sub("/", text)
    return posixpath.normpath(text) if text else "."


class Entity(ABC):
    """Base class for files and directories.

    Args:
        path: Raw path, relative to the context's project root or absolute.
        context: Execution context. Defaults to a local-mode context rooted
            at the current working directory.
    """

    def __init__(self, path: str | os.PathLike[str], *, context: IOContext | None = None) -> None:
        self._raw_path = os.fspath(path)
        self._full_path = normalize_path(self._raw_path)
        self._context = context if context is not None else IOContext()

    @property
    @abstractmethod
    def kind(self) -> EntityKind:
        """Return the kind of this entity."""

    @property
    def context(self) -> IOContext:
        """Execution context shared with derived entities."""
        return self._context

    @property
    def raw_path(self) -> str:
        """Path exactly as given at construction."""
        return self._raw_path

    @property
    def full_path(self) -> str:
        """Normalized path."""
        return self._full_path

    @property
    def absolute_path(self) -> Path:
        """Normalized path resolved against the project root."""
        return self._context.resolve(self._full_path)

    @property
    def full_name(self) -> str:
        """Last path segment, extension included."""
        return posixpath.basename(self._full_path)

    @property
    def base_name(self) -> str:
        """Last path segment without its last extension."""
        return posixpath.splitext(self.full_name)[0]

    @property
    def extension(self) -> str:
        """Last extension including the dot, or an empty string."""
        return posixpath.splitext(self.full_name)[1]

    @property
    def path(self) -> str:
        """Parent part of the normalized path ("" when there is none)."""
        return posixpath.dirname(self._full_path)

    def child_path(self, name: str) -> str:
        """Normalized path of a direct child with the given name."""
        return normalize_path(f"{self._full_path}/{name}")

    def exists(self) -> bool:
        """Check if the entity exists on the host."""
        return self._context.host.exists(self.absolute_path)

    def is_file(self) -> bool:
        """Check if the entity is a regular file on the host."""
        return self._context.host.is_file(self.absolute_path)

    def is_directory(self) -> bool:
        """Check if the entity is a directory on the host."""
        return self._context.host.is_dir(self.absolute_path)

    def _check(
        self,
        options: Any,
        *,
        require_callback: bool = True,
        require_exists: bool = True,
    ) -> Status | None:
        """Run the entry-point preconditions in their fixed order.

        Order: options present, trust level, success callback (asynchronous
        calls only), target exists. Stops at the first failure.

        Args:
            options: Option object passed by the caller.
            require_callback: Asynchronous calls must pass on_success.
            require_exists: The target must exist.

        Returns:
            The failing status, or None when every check passed.
        """
        if options is None:
            return Status.MISSING_OPTIONS
        if not self._context.is_local_mode():
            return Status.NOT_PERMITTED
        if require_callback and not options.sync and not callable(options.on_success):
            return Status.MISSING_CALLBACK
        if require_exists and not self.exists():
            return Status.PATH_NOT_FOUND
        return None

    def get_directory(self) -> Directory:
        """Return the parent directory, sharing this entity's context."""
        from dirkit.fs.directory import Directory

        return Directory(self.path or ".", context=self._context)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Entity):
            return NotImplemented
        return self.kind == other.kind and self.absolute_path == other.absolute_path

    def __hash__(self) -> int:
        return hash((self.kind, self.absolute_path))

    def __repr__(self) -> str:
        return f"{type(self).__name__}({self._full_path!r})"
