# region Docstring
"""
clipcore.models
Centralized imports for all Pydantic models used by the clipkeeper libraries.

Overview:
- Provides a single import point for history entry models and transform result models.

Contents:
- History Models:
        - Per-type clipboard entries combined as the HistoryEntry tagged union
        - Index serialization helpers
        - Blob cleanup warnings and reports
- Transform Models:
        - Replacement pairs, colour swatches, image extraction and transcription results
"""
# endregion
# region Imports
from .history import (  # noqa: F401
    AudioFileEntry,
    BaseEntry,
    CleanupReport,
    CleanupWarning,
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
    load_index,
)
from .transforms import (  # noqa: F401
    ColorSwatch,
    ImageExtractionResult,
    ReplacementPair,
    TranscriptionResult,
)

# endregion

models = [
    "AudioFileEntry",
    "BaseEntry",
    "CleanupReport",
    "CleanupWarning",
    "FilesEntry",
    "HistoryEntry",
    "ImageEntry",
    "ImageMetadata",
    "PathListEntry",
    "PathsMetadata",
    "TextEntry",
    "TextMetadata",
    "UnknownEntry",
    "ColorSwatch",
    "ImageExtractionResult",
    "ReplacementPair",
    "TranscriptionResult",
]
"""
Pydantic model classes for application logic and I/O.
"""

helpers = [
    "HistoryEntryAdapter",
    "HistoryIndexAdapter",
    "dump_index",
    "load_index",
]

__all__ = models + helpers
