"""Filesystem entity layer.

This module provides file and directory entities with blocking,
callback and awaitable access, typed file discovery, bounded recursive
search, and the shared status/result protocol.
"""

from dirkit.fs.context import IOContext
from dirkit.fs.directory import Directory
from dirkit.fs.entity import Entity, EntityKind, normalize_path
from dirkit.fs.file import File
from dirkit.fs.host import HostFileSystem
from dirkit.fs.loader import BytesResourceLoader, MediaHandle, MediaKind, ResourceLoader
from dirkit.fs.models import (
    ListOptions,
    LoadOptions,
    RemoveOptions,
    ResultEnvelope,
    SaveOptions,
    Status,
    Template,
    matches_template,
)
from dirkit.fs.search import BoundedSearch, TraversalBudget

__all__ = [
    "BoundedSearch",
    "BytesResourceLoader",
    "Directory",
    "Entity",
    "EntityKind",
    "File",
    "HostFileSystem",
    "IOContext",
    "ListOptions",
    "LoadOptions",
    "MediaHandle",
    "MediaKind",
    "RemoveOptions",
    "ResourceLoader",
    "ResultEnvelope",
    "SaveOptions",
    "Status",
    "Template",
    "TraversalBudget",
    "matches_template",
    "normalize_path",
]
