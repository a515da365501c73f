"""Execution context for entities.

The context replaces process-wide state: it names the project root that
relative paths resolve against, the trust level that gates enumeration
and mutation, and the collaborators (host filesystem, resource loader)
the entities talk to. Entities created by enumeration share the context
of the directory that produced them.
"""

from dataclasses import dataclass, field
from pathlib import Path

from dirkit.fs.host import HostFileSystem
from dirkit.fs.loader import BytesResourceLoader, ResourceLoader


@dataclass(frozen=True, slots=True)
class IOContext:
    """Project root, trust level and collaborators for entity operations.

    Attributes:
        project_root: Directory that relative entity paths resolve against.
        local_mode: Trust level. False simulates a sandboxed host where
            filesystem enumeration and mutation are not permitted.
        host: Host filesystem adapter.
        loader: Resource loader used for media files.
    """

    project_root: Path = field(default_factory=Path.cwd)
    local_mode: bool = True
    host: HostFileSystem = field(default_factory=HostFileSystem)
    loader: ResourceLoader = field(default_factory=BytesResourceLoader)

    def is_local_mode(self) -> bool:
        """Check if filesystem enumeration and mutation are permitted."""
        return self.local_mode

    def resolve(self, full_path: str) -> Path:
        """Resolve a normalized path against the project root.

        Args:
            full_path: Normalized entity path.

        Returns:
            The path itself when absolute, otherwise joined to the root.
        """
        path = Path(full_path)
        if path.is_absolute():
            return path
        return self.project_root / path
