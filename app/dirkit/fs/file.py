"""File entity with read, save and media operations.

Every operation comes in a callback/blocking form selected by the
``sync`` option and an awaitable ``*_async`` twin. Both forms run the
same coroutine.
"""

import logging
from dataclasses import replace
from typing import Any

from dirkit.fs.bridge import bridge, dispatch, run_blocking
from dirkit.fs.codec import decode_payload, encode_payload
from dirkit.fs.entity import Entity, EntityKind
from dirkit.fs.loader import MediaKind
from dirkit.fs.models import (
    AUDIO_PATTERN,
    IMAGE_PATTERN,
    JSON_PATTERN,
    PENDING_RESULT,
    TXT_PATTERN,
    VIDEO_PATTERN,
    LoadOptions,
    RemoveOptions,
    ResultEnvelope,
    SaveOptions,
    Status,
)

logger = logging.getLogger(__name__)


class File(Entity):
    """A single file on the host filesystem.

    Example:
        >>> settings = File("data/settings.json")
        >>> result = settings.load_json(LoadOptions(sync=True))
        >>> if result.ok:
        ...     print(result.data["volume"])
    """

    @property
    def kind(self) -> EntityKind:
        """Files are always EntityKind.FILE."""
        return EntityKind.FILE

    # =========================================================================
    # Name checks
    # =========================================================================

    def is_audio(self) -> bool:
        """Check if the name carries an audio extension."""
        return AUDIO_PATTERN.search(self.full_name) is not None

    def is_image(self) -> bool:
        """Check if the name carries an image extension."""
        return IMAGE_PATTERN.search(self.full_name) is not None

    def is_video(self) -> bool:
        """Check if the name carries a video extension."""
        return VIDEO_PATTERN.search(self.full_name) is not None

    def is_json(self) -> bool:
        """Check if the name carries a JSON extension."""
        return JSON_PATTERN.search(self.full_name) is not None

    def is_txt(self) -> bool:
        """Check if the name carries a text extension."""
        return TXT_PATTERN.search(self.full_name) is not None

    # =========================================================================
    # Reading
    # =========================================================================

    def load(self, options: LoadOptions | None) -> ResultEnvelope:
        """Read the file and run the decompress -> parse pipeline.

        Possible statuses: OK, PENDING, MISSING_OPTIONS, NOT_PERMITTED,
        MISSING_CALLBACK, PATH_NOT_FOUND, DECODE_FAILED, PARSE_FAILED.

        Args:
            options: Read options. Asynchronous calls need on_success.

        Returns:
            The final envelope (sync), a PENDING envelope (async), or the
            first failed precondition.

        Raises:
            OSError: Host read failure in blocking mode.
        """
        status = self._check(options)
        if status is not None:
            return ResultEnvelope(status)
        assert options is not None

        coro = self._read(options)
        if options.sync:
            return run_blocking(coro)

        dispatch(coro, options.on_success, options.on_error)
        return PENDING_RESULT

    async def load_async(self, options: LoadOptions | None = None) -> ResultEnvelope:
        """Awaitable version of load."""
        base = options if options is not None else LoadOptions()
        return await bridge(
            lambda resolve, reject: self.load(
                replace(base, sync=False, on_success=resolve, on_error=reject)
            )
        )

    def load_json(self, options: LoadOptions | None) -> ResultEnvelope:
        """Read the file with the parse stage enabled."""
        if options is None:
            return ResultEnvelope(Status.MISSING_OPTIONS)
        return self.load(replace(options, parse=True))

    async def load_json_async(self, options: LoadOptions | None = None) -> ResultEnvelope:
        """Awaitable version of load_json."""
        base = options if options is not None else LoadOptions()
        return await self.load_async(replace(base, parse=True))

    async def _read(self, options: LoadOptions) -> ResultEnvelope:
        text = await self.context.host.read_text(self.absolute_path, options.encoding)
        result = decode_payload(
            text,
            decompress=options.decompress,
            parse=options.parse,
            object_hook=options.object_hook,
        )
        if not result.ok:
            logger.debug("Pipeline failed for %s: %s", self.full_path, result.status.value)
        return result

    # =========================================================================
    # Writing
    # =========================================================================

    def save(self, data: Any, options: SaveOptions | None) -> Status:
        """Run the stringify -> compress pipeline and write the file.

        The success callback is optional for saves. Possible statuses: OK,
        PENDING, MISSING_OPTIONS, NOT_PERMITTED, OVERWRITE_NOT_PERMITTED.

        Args:
            data: Value to write; a string unless stringify is set.
            options: Write options.

        Returns:
            Final status (sync), PENDING (async), or the failed precondition.

        Raises:
            TypeError: If data cannot go through the write pipeline.
            OSError: Host write failure in blocking mode.
        """
        status = self._check(options, require_callback=False, require_exists=False)
        if status is not None:
            return status
        assert options is not None

        if not options.overwrite and self.exists():
            return Status.OVERWRITE_NOT_PERMITTED

        text = encode_payload(
            data,
            stringify=options.stringify,
            compress=options.compress,
            indent=options.indent,
        )
        coro = self._write(text, options.encoding)
        if options.sync:
            return run_blocking(coro)

        dispatch(coro, options.on_success, options.on_error)
        return Status.PENDING

    async def save_async(self, data: Any, options: SaveOptions | None = None) -> Status:
        """Awaitable version of save."""
        base = options if options is not None else SaveOptions()
        return await bridge(
            lambda resolve, reject: self.save(
                data, replace(base, sync=False, on_success=resolve, on_error=reject)
            )
        )

    async def _write(self, text: str, encoding: str) -> Status:
        written = await self.context.host.write_text(self.absolute_path, text, encoding)
        logger.debug("Wrote %d bytes to %s", written, self.full_path)
        return Status.OK

    # =========================================================================
    # Removal
    # =========================================================================

    def remove(self, options: RemoveOptions | None) -> Status:
        """Delete the file.

        Possible statuses: OK, PENDING, MISSING_OPTIONS, NOT_PERMITTED,
        PATH_NOT_FOUND.

        Raises:
            OSError: Host failure in blocking mode.
        """
        status = self._check(options, require_callback=False)
        if status is not None:
            return status
        assert options is not None

        coro = self._unlink()
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

    async def _unlink(self) -> Status:
        await self.context.host.unlink(self.absolute_path)
        return Status.OK

    # =========================================================================
    # Media
    # =========================================================================

    def load_image(self) -> Any:
        """Hand the file to the resource loader as an image."""
        return self.context.loader.load(self, MediaKind.IMAGE)

    async def load_image_async(self) -> Any:
        """Awaitable version of load_image."""
        return await self.context.loader.load_async(self, MediaKind.IMAGE)

    def load_audio(self) -> Any:
        """Hand the file to the resource loader as audio."""
        return self.context.loader.load(self, MediaKind.AUDIO)

    async def load_audio_async(self) -> Any:
        """Awaitable version of load_audio."""
        return await self.context.loader.load_async(self, MediaKind.AUDIO)
