"""Result protocol and option models for the entity layer.

This module defines the closed status vocabulary shared by every
operation, the result envelope returned by read-like operations, the
option objects accepted by directory and file operations, and the
template matching rules used by discovery and search.
"""

import re
from collections.abc import Callable
from dataclasses import dataclass
from enum import Enum
from typing import Any


class Status(str, Enum):
    """Outcome of an entity operation.

    Attributes:
        OK: Operation completed.
        PENDING: Asynchronous operation in flight; the result arrives later.
        NOT_PERMITTED: The trust level of the context forbids the operation.
        PATH_NOT_FOUND: The target path (or store key) does not exist.
        ALREADY_EXISTS: The directory to create already exists.
        NOT_EMPTY: The directory to remove still has children.
        MISSING_CALLBACK: Asynchronous call without a success callback.
        MISSING_OPTIONS: No option object was passed.
        OVERWRITE_NOT_PERMITTED: Target exists and overwriting is disabled.
        DECODE_FAILED: The decompression stage failed.
        PARSE_FAILED: The parse stage failed.
    """

    OK = "ok"
    PENDING = "pending"
    NOT_PERMITTED = "not_permitted"
    PATH_NOT_FOUND = "path_not_found"
    ALREADY_EXISTS = "already_exists"
    NOT_EMPTY = "not_empty"
    MISSING_CALLBACK = "missing_callback"
    MISSING_OPTIONS = "missing_options"
    OVERWRITE_NOT_PERMITTED = "overwrite_not_permitted"
    DECODE_FAILED = "decode_failed"
    PARSE_FAILED = "parse_failed"


@dataclass(frozen=True, slots=True)
class ResultEnvelope:
    """Status/data pair returned by read-like operations.

    Attributes:
        status: Outcome of the operation.
        data: Payload, only ever set when status is OK.
        error: Stage exception for DECODE_FAILED / PARSE_FAILED results.
    """

    status: Status
    data: Any = None
    error: Exception | None = None

    def __post_init__(self) -> None:
        """Reject payloads attached to non-OK results."""
        if self.data is not None and self.status != Status.OK:
            msg = f"Envelope with status {self.status.value} cannot carry data"
            raise ValueError(msg)

    @property
    def ok(self) -> bool:
        """Check if the operation completed."""
        return self.status == Status.OK

    @property
    def pending(self) -> bool:
        """Check if the result will be delivered later."""
        return self.status == Status.PENDING


PENDING_RESULT = ResultEnvelope(Status.PENDING)

# Exact full-name match (str) or pattern searched in the full name.
Template = str | re.Pattern[str] | None

SuccessCallback = Callable[[Any], None]
ErrorCallback = Callable[[Any], None]


def matches_template(name: str, template: object) -> bool:
    """Check a full name against a discovery template.

    Args:
        name: Full name (last path segment) of an entity.
        template: Compiled pattern, exact name, or anything else.

    Returns:
        True if the pattern is found in the name or the name equals the
        string. Templates of any other kind (including None and the empty
        string) match everything.
    """
    if isinstance(template, re.Pattern):
        return template.search(name) is not None
    if isinstance(template, str) and template:
        return name == template
    return True


def validate_search_limit(search_limit: int) -> None:
    """Reject search budgets below one directory."""
    if search_limit < 1:
        msg = f"search_limit must be at least 1, got {search_limit}"
        raise ValueError(msg)


@dataclass(frozen=True, slots=True)
class ListOptions:
    """Options for directory enumeration and search.

    Attributes:
        sync: Block and return the final result instead of a pending one.
        template: Name filter applied to discovered entities.
        on_success: Receives the final envelope in asynchronous mode.
        on_error: Receives a host error in asynchronous mode.
        search_limit: Maximum number of directories a search examines,
            root included.
    """

    sync: bool = False
    template: Template = None
    on_success: SuccessCallback | None = None
    on_error: ErrorCallback | None = None
    search_limit: int = 1

    def __post_init__(self) -> None:
        """Validate the search budget."""
        validate_search_limit(self.search_limit)


@dataclass(frozen=True, slots=True)
class LoadOptions:
    """Options for reading a file.

    Attributes:
        sync: Block and return the final result instead of a pending one.
        decompress: Run the decompression stage on the raw text.
        parse: Run the JSON parse stage after decompression.
        encoding: Text encoding of the file.
        object_hook: Optional hook passed to the JSON decoder.
        on_success: Receives the final envelope in asynchronous mode.
        on_error: Receives a host error in asynchronous mode.
    """

    sync: bool = False
    decompress: bool = False
    parse: bool = False
    encoding: str = "utf-8"
    object_hook: Callable[[dict[str, Any]], Any] | None = None
    on_success: SuccessCallback | None = None
    on_error: ErrorCallback | None = None


@dataclass(frozen=True, slots=True)
class SaveOptions:
    """Options for writing a file.

    Attributes:
        sync: Block and return the final status instead of PENDING.
        stringify: Serialize the value to JSON before writing.
        compress: Compress the (serialized) text before writing.
        overwrite: Allow replacing an existing file.
        indent: JSON indentation used by the stringify stage.
        encoding: Text encoding of the file.
        on_success: Receives the final status in asynchronous mode.
        on_error: Receives a host error in asynchronous mode.
    """

    sync: bool = False
    stringify: bool = False
    compress: bool = False
    overwrite: bool = True
    indent: int | None = None
    encoding: str = "utf-8"
    on_success: SuccessCallback | None = None
    on_error: ErrorCallback | None = None


@dataclass(frozen=True, slots=True)
class RemoveOptions:
    """Options for removing a file or an empty directory."""

    sync: bool = False
    on_success: SuccessCallback | None = None
    on_error: ErrorCallback | None = None


# Typed discovery patterns. Audio and image files may also carry the
# packaged (encrypted) extension of the same media kind.
AUDIO_PATTERN = re.compile(r"\.(ogg|rpgmvo)$", re.IGNORECASE)
IMAGE_PATTERN = re.compile(r"\.(png|rpgmvp)$", re.IGNORECASE)
VIDEO_PATTERN = re.compile(r"\.webm$", re.IGNORECASE)
JSON_PATTERN = re.compile(r"\.json$", re.IGNORECASE)
TXT_PATTERN = re.compile(r"\.txt$", re.IGNORECASE)
