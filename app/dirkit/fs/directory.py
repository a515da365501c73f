"""Directory entity: enumeration, typed discovery, mutation and search.

Listing operations take a ListOptions object. With ``sync=True`` they
block and return the final envelope; otherwise they need an
``on_success`` callback, return a PENDING envelope and report later.
Every listing operation also has an awaitable ``*_async`` twin.

Preconditions are checked in a fixed order and stop at the first
failure: options present, trust level, callback present (asynchronous
calls), target exists.
"""

import asyncio
import logging
from collections.abc import Callable
from dataclasses import replace
from typing import Any

from dirkit.fs.bridge import bridge, dispatch, run_blocking
from dirkit.fs.entity import Entity, EntityKind
from dirkit.fs.file import File
from dirkit.fs.models import (
    AUDIO_PATTERN,
    IMAGE_PATTERN,
    JSON_PATTERN,
    PENDING_RESULT,
    TXT_PATTERN,
    VIDEO_PATTERN,
    ListOptions,
    RemoveOptions,
    ResultEnvelope,
    Status,
    Template,
    matches_template,
)
from dirkit.fs.search import BoundedSearch

logger = logging.getLogger(__name__)


def _only(result: ResultEnvelope, kind: EntityKind) -> ResultEnvelope:
    """Keep the entities of one kind in an OK envelope."""
    if not result.ok:
        return result
    return ResultEnvelope(Status.OK, [e for e in result.data if e.kind == kind])


class Directory(Entity):
    """A directory on the host filesystem.

    Example:
        >>> saves = Directory("saves")
        >>> result = saves.find_files(
        ...     ListOptions(sync=True, template=re.compile(r"\\.json$"), search_limit=5)
        ... )
        >>> [f.full_name for f in result.data]
        ['file1.json', 'file2.json']
    """

    @property
    def kind(self) -> EntityKind:
        """Directories are always EntityKind.DIRECTORY."""
        return EntityKind.DIRECTORY

    # =========================================================================
    # Enumeration
    # =========================================================================

    def get_all(self, options: ListOptions | None) -> ResultEnvelope:
        """List direct children as File and Directory entities.

        Children that are neither (dead symlinks, sockets) are skipped.
        Possible statuses: OK, PENDING, MISSING_OPTIONS, NOT_PERMITTED,
        MISSING_CALLBACK, PATH_NOT_FOUND.

        Args:
            options: Listing options; template filters by full name.

        Returns:
            The final envelope (sync), a PENDING envelope (async), or the
            first failed precondition.

        Raises:
            OSError: Host listing failure in blocking mode.
            RuntimeError: Asynchronous call without a running event loop.
        """
        status = self._check(options)
        if status is not None:
            return ResultEnvelope(status)
        assert options is not None

        coro = self._enumerate(options.template)
        if options.sync:
            return run_blocking(coro)

        dispatch(coro, options.on_success, options.on_error)
        return PENDING_RESULT

    async def get_all_async(self, options: ListOptions | None = None) -> ResultEnvelope:
        """Awaitable version of get_all."""
        return await self._await_listing(self.get_all, options)

    def get_files(self, options: ListOptions | None) -> ResultEnvelope:
        """List direct children that are files."""
        return self._get_kind(options, EntityKind.FILE)

    async def get_files_async(self, options: ListOptions | None = None) -> ResultEnvelope:
        """Awaitable version of get_files."""
        return await self._await_listing(self.get_files, options)

    def get_directories(self, options: ListOptions | None) -> ResultEnvelope:
        """List direct children that are directories."""
        return self._get_kind(options, EntityKind.DIRECTORY)

    async def get_directories_async(self, options: ListOptions | None = None) -> ResultEnvelope:
        """Awaitable version of get_directories."""
        return await self._await_listing(self.get_directories, options)

    def _get_kind(self, options: ListOptions | None, kind: EntityKind) -> ResultEnvelope:
        if options is None:
            return ResultEnvelope(Status.MISSING_OPTIONS)
        if options.sync:
            return _only(self.get_all(options), kind)

        on_success = options.on_success
        if callable(on_success):
            # Filter the eventual result; the listing itself is issued once.
            options = replace(options, on_success=lambda result: on_success(_only(result, kind)))
        return self.get_all(options)

    async def _enumerate(self, template: Template = None) -> ResultEnvelope:
        host = self.context.host
        names = await host.listdir(self.absolute_path)

        entities: list[Entity] = []
        for name in names:
            if not matches_template(name, template):
                continue
            child = self.child_path(name)
            child_abs = self.context.resolve(child)
            if await host.is_file_async(child_abs):
                entities.append(File(child, context=self.context))
            elif await host.is_dir_async(child_abs):
                entities.append(Directory(child, context=self.context))
            else:
                logger.warning("Skipping entry that is neither file nor directory: %s", child)

        return ResultEnvelope(Status.OK, entities)

    async def _await_listing(
        self,
        start: Callable[[ListOptions], ResultEnvelope],
        options: ListOptions | None,
    ) -> ResultEnvelope:
        base = options if options is not None else ListOptions()
        return await bridge(
            lambda resolve, reject: start(
                replace(base, sync=False, on_success=resolve, on_error=reject)
            )
        )

    # =========================================================================
    # Typed discovery
    # =========================================================================

    def _get_typed(self, options: ListOptions | None, pattern: Template) -> ResultEnvelope:
        if options is None:
            return ResultEnvelope(Status.MISSING_OPTIONS)
        return self.get_files(replace(options, template=pattern))

    def get_audio_files(self, options: ListOptions | None) -> ResultEnvelope:
        """List audio files (.ogg and packaged .rpgmvo)."""
        return self._get_typed(options, AUDIO_PATTERN)

    async def get_audio_files_async(self, options: ListOptions | None = None) -> ResultEnvelope:
        """Awaitable version of get_audio_files."""
        return await self._await_listing(self.get_audio_files, options)

    def get_image_files(self, options: ListOptions | None) -> ResultEnvelope:
        """List image files (.png and packaged .rpgmvp)."""
        return self._get_typed(options, IMAGE_PATTERN)

    async def get_image_files_async(self, options: ListOptions | None = None) -> ResultEnvelope:
        """Awaitable version of get_image_files."""
        return await self._await_listing(self.get_image_files, options)

    def get_video_files(self, options: ListOptions | None) -> ResultEnvelope:
        """List video files (.webm)."""
        return self._get_typed(options, VIDEO_PATTERN)

    async def get_video_files_async(self, options: ListOptions | None = None) -> ResultEnvelope:
        """Awaitable version of get_video_files."""
        return await self._await_listing(self.get_video_files, options)

    def get_json_files(self, options: ListOptions | None) -> ResultEnvelope:
        """List JSON files."""
        return self._get_typed(options, JSON_PATTERN)

    async def get_json_files_async(self, options: ListOptions | None = None) -> ResultEnvelope:
        """Awaitable version of get_json_files."""
        return await self._await_listing(self.get_json_files, options)

    def get_txt_files(self, options: ListOptions | None) -> ResultEnvelope:
        """List text files."""
        return self._get_typed(options, TXT_PATTERN)

    async def get_txt_files_async(self, options: ListOptions | None = None) -> ResultEnvelope:
        """Awaitable version of get_txt_files."""
        return await self._await_listing(self.get_txt_files, options)

    # =========================================================================
    # Bounded search
    # =========================================================================

    def find_files(self, options: ListOptions | None) -> ResultEnvelope:
        """Collect matching files from this directory and admitted subdirectories.

        The root is examined first. Every subdirectory met while fewer than
        ``search_limit`` directories have been admitted is admitted and
        examined too; later ones are skipped entirely. With the default
        limit of 1 only the root's direct children are considered.

        Possible statuses: OK, PENDING, MISSING_OPTIONS, NOT_PERMITTED,
        MISSING_CALLBACK, PATH_NOT_FOUND.

        Args:
            options: Template and search_limit select what is collected.

        Returns:
            OK envelope with the files (sync), PENDING (async), or the first
            failed precondition. Result order is not defined.

        Raises:
            OSError: First host failure of any branch, in blocking mode.
        """
        return self._find(options, EntityKind.FILE)

    async def find_files_async(self, options: ListOptions | None = None) -> ResultEnvelope:
        """Awaitable version of find_files."""
        return await self._await_listing(self.find_files, options)

    def find_directories(self, options: ListOptions | None) -> ResultEnvelope:
        """Collect matching directories within the search budget.

        Each subdirectory is matched against the template and, independently
        of the match, admitted for descent while the budget lasts.
        """
        return self._find(options, EntityKind.DIRECTORY)

    async def find_directories_async(self, options: ListOptions | None = None) -> ResultEnvelope:
        """Awaitable version of find_directories."""
        return await self._await_listing(self.find_directories, options)

    def _find(self, options: ListOptions | None, target: EntityKind) -> ResultEnvelope:
        status = self._check(options)
        if status is not None:
            return ResultEnvelope(status)
        assert options is not None

        search = BoundedSearch(self, options, target)
        if options.sync:
            return run_blocking(search.run(drain=True))

        dispatch(search.run(), options.on_success, options.on_error)
        return PENDING_RESULT

    # =========================================================================
    # Mutation
    # =========================================================================

    def create(self) -> Status:
        """Create this directory (its parent must exist).

        Possible statuses: OK, NOT_PERMITTED, ALREADY_EXISTS.

        Raises:
            OSError: Host failure.
        """
        status = self._check_create()
        if status is not None:
            return status
        return run_blocking(self._mkdir())

    async def create_async(self) -> Status:
        """Awaitable version of create."""
        status = self._check_create()
        if status is not None:
            return status
        return await self._mkdir()

    def create_directory(self, name: str) -> Status:
        """Create a direct child directory."""
        return Directory(self.child_path(name), context=self.context).create()

    async def create_directory_async(self, name: str) -> Status:
        """Awaitable version of create_directory."""
        return await Directory(self.child_path(name), context=self.context).create_async()

    def _check_create(self) -> Status | None:
        if not self.context.is_local_mode():
            return Status.NOT_PERMITTED
        if self.exists():
            return Status.ALREADY_EXISTS
        return None

    async def _mkdir(self) -> Status:
        await self.context.host.mkdir(self.absolute_path)
        logger.debug("Created directory %s", self.full_path)
        return Status.OK

    def is_empty(self) -> bool:
        """Check if a blocking listing finds no children.

        A listing that does not succeed also counts as empty.
        """
        result = self.get_all(ListOptions(sync=True))
        return not result.ok or not result.data

    def remove(self, options: RemoveOptions | None) -> Status:
        """Remove this directory if it is empty.

        Emptiness is checked with a blocking listing before anything is
        removed. The success callback is optional.
        Possible statuses: OK, PENDING, MISSING_OPTIONS, NOT_PERMITTED,
        PATH_NOT_FOUND, NOT_EMPTY.

        Raises:
            OSError: Host failure in blocking mode.
        """
        status = self._check(options, require_callback=False)
        if status is not None:
            return status
        assert options is not None

        if not self.is_empty():
            return Status.NOT_EMPTY

        coro = self._rmdir()
        if options.sync:
            return run_blocking(coro)

        dispatch(coro, options.on_success, options.on_error)
        return Status.PENDING

    async def remove_async(self) -> Status:
        """Awaitable version of remove."""
        return await bridge(
            lambda resolve, reject: self.remove(
                RemoveOptions(sync=False, on_success=resolve, on_error=reject)
            )
        )

    async def _rmdir(self) -> Status:
        await self.context.host.rmdir(self.absolute_path)
        logger.debug("Removed directory %s", self.full_path)
        return Status.OK

    # =========================================================================
    # Media
    # =========================================================================

    def load_audio_files(self) -> list[Any]:
        """Hand every audio file to the resource loader.

        Returns:
            Loaded handles, or an empty list when discovery fails.
        """
        result = self.get_audio_files(ListOptions(sync=True))
        if not result.ok:
            return []
        return [file.load_audio() for file in result.data]

    async def load_audio_files_async(self) -> list[Any]:
        """Awaitable version of load_audio_files."""
        result = await self.get_audio_files_async()
        if not result.ok:
            return []
        return list(await asyncio.gather(*(file.load_audio_async() for file in result.data)))

    def load_images(self) -> list[Any]:
        """Hand every image file to the resource loader.

        Returns:
            Loaded handles, or an empty list when discovery fails.
        """
        result = self.get_image_files(ListOptions(sync=True))
        if not result.ok:
            return []
        return [file.load_image() for file in result.data]

    async def load_images_async(self) -> list[Any]:
        """Awaitable version of load_images."""
        result = await self.get_image_files_async()
        if not result.ok:
            return []
        return list(await asyncio.gather(*(file.load_image_async() for file in result.data)))
