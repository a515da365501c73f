"""Resource loader collaborator for media files.

The entity layer only selects candidate files; turning them into usable
media is delegated to a loader. The default loader hands back the raw
bytes wrapped in a MediaHandle.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import TYPE_CHECKING, Any, Protocol

if TYPE_CHECKING:
    from dirkit.fs.file import File


class MediaKind(str, Enum):
    """Kind of media a file is loaded as."""

    IMAGE = "image"
    AUDIO = "audio"


@dataclass(frozen=True, slots=True)
class MediaHandle:
    """Loaded media resource.

    Attributes:
        path: Absolute path of the source file.
        kind: Media kind the file was loaded as.
        data: Raw file content.
    """

    path: str
    kind: MediaKind
    data: bytes

    @property
    def size_bytes(self) -> int:
        """Size of the loaded content in bytes."""
        return len(self.data)


class ResourceLoader(Protocol):
    """Turns a file believed to hold media into a loaded handle."""

    def load(self, file: File, kind: MediaKind) -> Any: ...

    async def load_async(self, file: File, kind: MediaKind) -> Any: ...


class BytesResourceLoader:
    """Loader that reads the file content without decoding it."""

    def load(self, file: File, kind: MediaKind) -> MediaHandle:
        """Read the file synchronously."""
        path = file.absolute_path
        return MediaHandle(path=str(path), kind=kind, data=path.read_bytes())

    async def load_async(self, file: File, kind: MediaKind) -> MediaHandle:
        """Read the file through the context's host filesystem."""
        path = file.absolute_path
        data = await file.context.host.read_bytes(path)
        return MediaHandle(path=str(path), kind=kind, data=data)
