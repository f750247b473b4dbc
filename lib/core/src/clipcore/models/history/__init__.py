"""
clipcore.models.history
Package initialization for clipboard history domain models.
Overview:
- Provides the HistoryEntry tagged union and its per-type entry models.
- Provides the models describing best-effort blob cleanup outcomes.
Contents:
- Entry Models:
    - TextEntry, ImageEntry, AudioFileEntry, FilesEntry, UnknownEntry and their
        metadata models, combined as HistoryEntry.
- Index helpers:
    - HistoryIndexAdapter, dump_index, load_index for the JSON index file.
- Cleanup Models:
    - CleanupWarning, CleanupReport.
"""

from .cleanup import CleanupReport, CleanupWarning  # noqa: F401
from .clipboard_history import (  # noqa: F401
    AudioFileEntry,
    BaseEntry,
    FilesEntry,
    HistoryEntry,
    HistoryEntryAdapter,
    HistoryIndexAdapter,
    ImageEntry,
    ImageMetadata,
    PathListEntry,
    PathsMetadata,
    TextEntry,
    TextMetadata,
    UnknownEntry,
    dump_index,
    entry_tag,
    load_index,
)

__models__ = [
    "AudioFileEntry",
    "BaseEntry",
    "FilesEntry",
    "HistoryEntry",
    "ImageEntry",
    "ImageMetadata",
    "PathListEntry",
    "PathsMetadata",
    "TextEntry",
    "TextMetadata",
    "UnknownEntry",
    "CleanupReport",
    "CleanupWarning",
]
__adapters__ = [
    "HistoryEntryAdapter",
    "HistoryIndexAdapter",
    "dump_index",
    "entry_tag",
    "load_index",
]
__all__ = [*__models__, *__adapters__]
