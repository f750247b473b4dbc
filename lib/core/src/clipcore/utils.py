import hashlib
import json
import os
from datetime import datetime, timezone
from pathlib import Path
from typing import Any, Sequence, Union

from clipcore.constants import (
    AUDIO_FORMAT_LIST,
    ENTRY_HASH_LENGTH,
    IMAGE_FORMAT_LIST,
    PREVIEW_SUFFIX,
)


def get_time() -> datetime:
    """Return the current time as a timezone-aware UTC datetime."""
    return datetime.now(timezone.utc)


def format_timestamp(moment: datetime) -> str:
    """
    Format a datetime as an ISO 8601 string with millisecond precision.

    Naive datetimes are assumed to be UTC. UTC offsets are written as "Z".

    Args:
        moment (datetime): The datetime to format.

    Returns:
        str: The formatted timestamp.

    Example:
        >>> format_timestamp(datetime(2024, 1, 1, 12, 0, tzinfo=timezone.utc))
        '2024-01-01T12:00:00.000Z'
    """
    if moment.tzinfo is None:
        moment = moment.replace(tzinfo=timezone.utc)
    moment = moment.astimezone(timezone.utc)
    return moment.isoformat(timespec="milliseconds").replace("+00:00", "Z")


def content_digest(content_type: str, data: Any) -> str:
    """
    Calculate the SHA256 hash of a (type, data) pair.

    Bytes-like payloads are hashed as-is; anything else is hashed as its JSON
    serialization.

    Args:
        content_type (str): The clipboard content type.
        data (Any): The captured payload.

    Returns:
        str: The SHA256 hash as a hexadecimal string.
    """
    sha256_hash = hashlib.sha256()
    sha256_hash.update(content_type.encode("utf-8"))
    sha256_hash.update(b"\x00")
    if isinstance(data, (bytes, bytearray, memoryview)):
        sha256_hash.update(bytes(data))
    else:
        sha256_hash.update(
            json.dumps(data, sort_keys=True, default=str).encode("utf-8")
        )
    return sha256_hash.hexdigest()


def generate_entry_id(content_type: str, data: Any, captured_at: datetime) -> str:
    """
    Build a history entry id from the capture time and a content hash.

    Args:
        content_type (str): The clipboard content type.
        data (Any): The captured payload.
        captured_at (datetime): Capture time used as the id prefix.

    Returns:
        str: "<ISO timestamp>-<8 hex characters>".

    Example:
        "2024-01-01T12:00:00.000Z-9f2c41e0" for a text capture at noon UTC.
    """
    digest = content_digest(content_type, data)[:ENTRY_HASH_LENGTH]
    return f"{format_timestamp(captured_at)}-{digest}"


def normalize_paths(
    data: Union[str, bytes, os.PathLike, Sequence[Union[str, bytes, os.PathLike]]],
) -> list[str]:
    """
    Wrap a single path into a list and convert every path to a string.

    Bytes and other os.PathLike values count as one path and are decoded with
    os.fsdecode.

    Args:
        data: One path or a sequence of paths.

    Returns:
        list[str]: The paths, order preserved.

    Raises:
        TypeError: If data or one of its items is not a path.

    Example:
        >>> normalize_paths(b"/tmp/a.txt")
        ['/tmp/a.txt']
    """
    if isinstance(data, (str, bytes, os.PathLike)):
        return [os.fsdecode(data)]
    return [os.fsdecode(item) for item in data]


def make_preview(text: str, limit: int) -> str | None:
    """
    Return a truncated preview of text, or None when it fits within limit.

    Example:
        >>> make_preview("abcdef", 3)
        'abc...'
    """
    if len(text) <= limit:
        return None
    return text[:limit] + PREVIEW_SUFFIX


def is_image_file(path: Union[str, Path]) -> bool:
    """
    Check if the given path is an image file based on its extension.

    Example:
        >>> is_image_file("photo.JPG")
        True
    """
    return Path(path).suffix.lower() in IMAGE_FORMAT_LIST


def is_audio_file(path: Union[str, Path]) -> bool:
    """
    Check if the given path is an audio file based on its extension.

    Example:
        >>> is_audio_file("memo.m4a")
        True
    """
    return Path(path).suffix.lower() in AUDIO_FORMAT_LIST


__all__ = [
    "get_time",
    "format_timestamp",
    "content_digest",
    "generate_entry_id",
    "normalize_paths",
    "make_preview",
    "is_image_file",
    "is_audio_file",
]
