# region Docstring
"""
clipcore.models.history.clipboard_history
Domain models for clipboard history entries and the serialized history index.
Overview:
- Provides one Pydantic model per clipboard content type, each with its own payload
    and metadata shape, combined into the HistoryEntry tagged union.
- Provides a TypeAdapter for reading and writing the whole index as a JSON array.
Contents:
- Metadata models:
    - TextMetadata: character length plus an optional truncated preview.
    - ImageMetadata: byte size of the captured image.
    - PathsMetadata: path count and the ordered path list.
- Entry models:
    - BaseEntry:
        Common fields (id, type, timestamp). Provides matches() for substring search
        and blob_filename for entries backed by a blob file.
    - TextEntry: data is the captured string.
    - ImageEntry: data is the blob filename ("<id>.png") inside the history directory.
    - AudioFileEntry / FilesEntry: data is the ordered list of source paths.
    - UnknownEntry: any other type string; data is stored as captured.
- Union / adapters:
    - HistoryEntry: Annotated union routed by entry_tag(), so type strings outside the
        known set land on UnknownEntry with their original value kept.
    - HistoryIndexAdapter: TypeAdapter(list[HistoryEntry]) used for index persistence.
Design notes:
- Timestamps are truncated to millisecond precision so an entry compares equal to
    itself after a write/read cycle of the index file.
- None fields are excluded when the index is dumped, so a short text entry is written
    as {"length": n} without a preview key.
"""
# endregion
# region Imports
from datetime import datetime, timezone
from typing import Annotated, Any, Literal, Optional, Union

from pydantic import (
    BaseModel,
    ConfigDict,
    Discriminator,
    Field,
    Tag,
    TypeAdapter,
    field_serializer,
    field_validator,
)

from clipcore.constants import ContentTypes
from clipcore.utils import format_timestamp


# endregion
# region Metadata Models
class TextMetadata(BaseModel):
    length: int = Field(..., description="Number of characters in the captured text")
    preview: Optional[str] = Field(
        None, description="First characters of long text followed by '...'"
    )


class ImageMetadata(BaseModel):
    size: int = Field(..., description="Size of the captured image in bytes")


class PathsMetadata(BaseModel):
    count: int = Field(..., description="Number of captured paths")
    paths: list[str] = Field(..., description="The captured paths, order preserved")


# endregion
# region Entry Models
class BaseEntry(BaseModel):
    """
    Fields shared by every clipboard history entry.

    Attributes:
        id (str): "<ISO timestamp>-<8 hex characters>" identifier.
        type (str): Clipboard content type; selects the entry model.
        timestamp (datetime): Capture time (UTC, millisecond precision).
    """

    id: str = Field(..., description="Unique ID of the history entry")
    type: str = Field(..., description="Clipboard content type")
    timestamp: datetime = Field(..., description="Capture time of the entry")

    model_config = ConfigDict(
        json_schema_extra={
            "examples": [
                {
                    "id": "2024-01-01T12:00:00.000Z-1a2b3c4d",
                    "type": "text",
                    "timestamp": "2024-01-01T12:00:00.000Z",
                    "data": "Sample clipboard text",
                    "metadata": {"length": 21},
                }
            ]
        },
    )

    @field_validator("timestamp", mode="after")
    def truncate_timestamp(cls, v: datetime) -> datetime:
        if v.tzinfo is None:
            v = v.replace(tzinfo=timezone.utc)
        return v.replace(microsecond=v.microsecond - v.microsecond % 1000)

    @field_serializer("timestamp")
    def serialize_timestamp(self, v: datetime) -> str:
        return format_timestamp(v)

    @property
    def blob_filename(self) -> Optional[str]:
        """Filename of the blob backing this entry, if any."""
        return None

    def matches(self, needle: str) -> bool:
        """Case-insensitive substring match; needle must already be lower-cased."""
        return False


class TextEntry(BaseEntry):
    type: Literal["text"] = "text"
    data: str = Field(..., description="The captured text")
    metadata: TextMetadata

    def matches(self, needle: str) -> bool:
        return needle in self.data.lower()


class ImageEntry(BaseEntry):
    type: Literal["image"] = "image"
    data: str = Field(..., description="Blob filename inside the history directory")
    metadata: ImageMetadata

    @property
    def blob_filename(self) -> Optional[str]:
        return self.data


class PathListEntry(BaseEntry):
    """Entries whose payload is a list of filesystem paths."""

    data: list[str] = Field(..., description="The captured paths")
    metadata: PathsMetadata

    def matches(self, needle: str) -> bool:
        return any(needle in path.lower() for path in self.metadata.paths)


class AudioFileEntry(PathListEntry):
    type: Literal["audio_file"] = "audio_file"


class FilesEntry(PathListEntry):
    type: Literal["files"] = "files"


class UnknownEntry(BaseEntry):
    """
    Passthrough entry for content types without a dedicated model.

    The original type string is kept, so "video" stays "video" on disk.
    """

    type: str = ContentTypes.UNKNOWN.value
    data: Any = None
    metadata: dict[str, Any] = Field(default_factory=dict)

    def matches(self, needle: str) -> bool:
        paths = self.metadata.get("paths")
        if not isinstance(paths, list):
            return False
        return any(needle in str(path).lower() for path in paths)


# endregion
# region Union / Adapters
_TAGGED_TYPES = (
    ContentTypes.TEXT.value,
    ContentTypes.IMAGE.value,
    ContentTypes.AUDIO_FILE.value,
    ContentTypes.FILES.value,
)


def entry_tag(value: Any) -> str:
    """Route raw dicts and model instances to their HistoryEntry variant."""
    if isinstance(value, dict):
        content_type = value.get("type")
    else:
        content_type = getattr(value, "type", None)
    if isinstance(content_type, ContentTypes):
        content_type = content_type.value
    if content_type in _TAGGED_TYPES:
        return content_type
    return ContentTypes.UNKNOWN.value


HistoryEntry = Annotated[
    Union[
        Annotated[TextEntry, Tag(ContentTypes.TEXT.value)],
        Annotated[ImageEntry, Tag(ContentTypes.IMAGE.value)],
        Annotated[AudioFileEntry, Tag(ContentTypes.AUDIO_FILE.value)],
        Annotated[FilesEntry, Tag(ContentTypes.FILES.value)],
        Annotated[UnknownEntry, Tag(ContentTypes.UNKNOWN.value)],
    ],
    Discriminator(entry_tag),
]
"""Any clipboard history entry, routed by its type field."""

HistoryEntryAdapter: TypeAdapter = TypeAdapter(HistoryEntry)
"""Validates a single entry dict into its HistoryEntry variant."""

HistoryIndexAdapter: TypeAdapter = TypeAdapter(list[HistoryEntry])
"""Reads and writes the full history index (newest first)."""


def dump_index(entries: list) -> bytes:
    """Serialize entries as the pretty-printed JSON index file body."""
    return HistoryIndexAdapter.dump_json(entries, indent=2, exclude_none=True)


def load_index(raw: Union[str, bytes]) -> list:
    """Parse an index file body; raises ValueError for invalid JSON or entries."""
    return HistoryIndexAdapter.validate_json(raw)


# endregion

__all__ = [
    "TextMetadata",
    "ImageMetadata",
    "PathsMetadata",
    "BaseEntry",
    "TextEntry",
    "ImageEntry",
    "PathListEntry",
    "AudioFileEntry",
    "FilesEntry",
    "UnknownEntry",
    "HistoryEntry",
    "HistoryEntryAdapter",
    "HistoryIndexAdapter",
    "entry_tag",
    "dump_index",
    "load_index",
]
