"""Payload pipeline stages shared by files and the key-value store.

Writing runs stringify then compress; reading runs decompress then
parse. Each stage is toggled independently, and a failing read stage
stops the pipeline with its own status.
"""

import base64
import binascii
import json
import zlib
from collections.abc import Callable
from typing import Any

from dirkit.fs.models import ResultEnvelope, Status


def compress_text(text: str) -> str:
    """Compress text into a base64 string safe for text storage."""
    return base64.b64encode(zlib.compress(text.encode("utf-8"))).decode("ascii")


def decompress_text(text: str) -> str:
    """Reverse compress_text.

    Raises:
        ValueError: If the text is not valid compressed data.
    """
    try:
        raw = base64.b64decode(text.encode("ascii"), validate=True)
        return zlib.decompress(raw).decode("utf-8")
    except (binascii.Error, zlib.error, UnicodeError) as e:
        msg = f"Cannot decompress payload: {e}"
        raise ValueError(msg) from e


def encode_payload(
    data: Any,
    *,
    stringify: bool = False,
    compress: bool = False,
    indent: int | None = None,
) -> str:
    """Run the write pipeline.

    Args:
        data: Value to store. Must be a string unless stringify is set.
        stringify: Serialize the value to JSON first.
        compress: Compress the resulting text.
        indent: JSON indentation for the stringify stage.

    Returns:
        Text ready to be written.

    Raises:
        TypeError: If data is not a string and stringify is off, or if it
            is not JSON serializable.
    """
    if stringify:
        text = json.dumps(data, indent=indent)
    elif isinstance(data, str):
        text = data
    else:
        msg = f"Expected str payload without stringify, got {type(data).__name__}"
        raise TypeError(msg)

    if compress:
        text = compress_text(text)
    return text


def decode_payload(
    text: str,
    *,
    decompress: bool = False,
    parse: bool = False,
    object_hook: Callable[[dict[str, Any]], Any] | None = None,
) -> ResultEnvelope:
    """Run the read pipeline.

    Args:
        text: Raw stored text.
        decompress: Run the decompression stage.
        parse: Run the JSON parse stage.
        object_hook: Optional hook for the JSON decoder.

    Returns:
        OK envelope with the decoded value, or a DECODE_FAILED /
        PARSE_FAILED envelope carrying the stage's exception. Empty text
        skips both stages.
    """
    data: Any = text
    if not text:
        return ResultEnvelope(Status.OK, data)

    if decompress:
        try:
            data = decompress_text(data)
        except ValueError as e:
            return ResultEnvelope(Status.DECODE_FAILED, error=e)

    if parse:
        try:
            data = json.loads(data, object_hook=object_hook)
        except ValueError as e:
            return ResultEnvelope(Status.PARSE_FAILED, error=e)

    return ResultEnvelope(Status.OK, data)
