"""Host filesystem primitives.

Enumeration, mutation and reads are asynchronous and go through
aiofiles, which offloads the blocking system call to a worker thread.
Existence and kind queries are plain stat calls. Entity queries use the
blocking versions, enumeration awaits the aiofiles ones.
"""

import os
from pathlib import Path

import aiofiles  # type: ignore[import-untyped]
import aiofiles.os  # type: ignore[import-untyped]


class HostFileSystem:
    """Adapter over the operating system's filesystem calls.

    Every path argument is an absolute path. Errors are not translated:
    OSError subclasses raised by the underlying call propagate to the
    caller unchanged.
    """

    def exists(self, path: Path) -> bool:
        """Check existence (blocking stat)."""
        return os.path.exists(path)

    def is_file(self, path: Path) -> bool:
        """Check if path is a regular file (blocking stat)."""
        return os.path.isfile(path)

    def is_dir(self, path: Path) -> bool:
        """Check if path is a directory (blocking stat)."""
        return os.path.isdir(path)

    async def is_file_async(self, path: Path) -> bool:
        """Check if path is a regular file without blocking the loop."""
        return bool(await aiofiles.os.path.isfile(path))

    async def is_dir_async(self, path: Path) -> bool:
        """Check if path is a directory without blocking the loop."""
        return bool(await aiofiles.os.path.isdir(path))

    async def listdir(self, path: Path) -> list[str]:
        """List directory entry names in sorted order."""
        names: list[str] = await aiofiles.os.listdir(path)
        return sorted(names)

    async def mkdir(self, path: Path) -> None:
        """Create a single directory."""
        await aiofiles.os.mkdir(path)

    async def rmdir(self, path: Path) -> None:
        """Remove an empty directory."""
        await aiofiles.os.rmdir(path)

    async def unlink(self, path: Path) -> None:
        """Remove a file."""
        await aiofiles.os.remove(path)

    async def read_text(self, path: Path, encoding: str = "utf-8") -> str:
        """Read a whole text file."""
        async with aiofiles.open(path, encoding=encoding) as f:
            content: str = await f.read()
            return content

    async def read_bytes(self, path: Path) -> bytes:
        """Read a whole binary file."""
        async with aiofiles.open(path, mode="rb") as f:
            content: bytes = await f.read()
            return content

    async def write_text(self, path: Path, content: str, encoding: str = "utf-8") -> int:
        """Write a text file, replacing any previous content.

        Returns:
            Number of bytes written.
        """
        async with aiofiles.open(path, mode="w", encoding=encoding) as f:
            await f.write(content)
        return len(content.encode(encoding))
