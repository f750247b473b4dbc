# region Docstring
"""
clipcore.constants
Shared constants and enumerations for clipboard history and clipboard transforms.
Overview:
- Defines the clipboard content types a capture can be classified as.
- Provides defaults for the history store (capacity, preview length, filenames).
- Provides enumerations for the media formats the transforms recognise.
Contents:
- Format Enumerations:
    - ContentTypes: Enum of clipboard content types (text, image, audio_file, files, unknown).
    - ImageFormats: Enum of image extensions the image extractor copies (.png, .jpg,
        .jpeg, .gif, .bmp).
    - AudioFormats: Enum of audio extensions the transcriber accepts.
- Derived Lists:
    - CONTENT_TYPE_LIST, IMAGE_FORMAT_LIST, AUDIO_FORMAT_LIST.
- History Store Defaults:
    - DEFAULT_MAX_ENTRIES, TEXT_PREVIEW_LENGTH, PREVIEW_SUFFIX, INDEX_FILENAME,
        BLOB_EXTENSION, ENTRY_HASH_LENGTH.
Design Notes:
- Format enums inherit from both str and enum.Enum, allowing direct string comparison
    while maintaining type safety and IDE autocompletion support.
"""
# endregion
# region Imports
import enum
from typing import List

# endregion
# region Constants -- Format Enums


class ContentTypes(str, enum.Enum):
    """Enumeration of clipboard content types."""

    TEXT = "text"
    IMAGE = "image"
    AUDIO_FILE = "audio_file"  # One or more copied audio files
    FILES = "files"  # One or more copied files of any other kind
    UNKNOWN = "unknown"


class ImageFormats(str, enum.Enum):
    """Enumeration of image formats copied by the image extractor."""

    PNG = ".png"  # Portable Network Graphics
    JPG = ".jpg"  # Common abbreviation for JPEG
    JPEG = ".jpeg"  # Joint Photographic Experts Group
    GIF = ".gif"  # Graphics Interchange Format
    BMP = ".bmp"  # Bitmap Image File


class AudioFormats(str, enum.Enum):
    """Enumeration of audio formats accepted by the transcriber."""

    WAV = ".wav"  # Waveform Audio File Format
    MP3 = ".mp3"  # MPEG-1 Audio Layer III
    M4A = ".m4a"  # MPEG-4 Audio
    AAC = ".aac"  # Advanced Audio Coding
    FLAC = ".flac"  # Free Lossless Audio Codec
    OGG = ".ogg"  # Ogg Vorbis
    OPUS = ".opus"  # Opus Interactive Audio Codec
    AIFF = ".aiff"  # Audio Interchange File Format


# endregion
# region Constants -- Derived Lists

CONTENT_TYPE_LIST: List[str] = [ct.value for ct in ContentTypes]
"""List[str]: Every recognised clipboard content type."""
IMAGE_FORMAT_LIST: List[str] = [fmt.value for fmt in ImageFormats]
"""List[str]: Image extensions handled by the image extractor."""
AUDIO_FORMAT_LIST: List[str] = [fmt.value for fmt in AudioFormats]
"""List[str]: Audio extensions handled by the transcriber."""

# endregion
# region Constants -- History Store

DEFAULT_MAX_ENTRIES: int = 1000
"""int: Number of entries kept before the oldest one is evicted."""
TEXT_PREVIEW_LENGTH: int = 500
"""int: Text longer than this gets a truncated preview in its metadata."""
PREVIEW_SUFFIX: str = "..."
"""str: Marker appended to truncated text previews."""
INDEX_FILENAME: str = "history_index.json"
"""str: Filename of the JSON index inside the history directory."""
BLOB_EXTENSION: str = ".png"
"""str: Extension of image blob files written next to the index."""
ENTRY_HASH_LENGTH: int = 8
"""int: Number of hex characters of the content hash used in entry ids."""

# endregion

__all__ = [
    "ContentTypes",
    "ImageFormats",
    "AudioFormats",
    "CONTENT_TYPE_LIST",
    "IMAGE_FORMAT_LIST",
    "AUDIO_FORMAT_LIST",
    "DEFAULT_MAX_ENTRIES",
    "TEXT_PREVIEW_LENGTH",
    "PREVIEW_SUFFIX",
    "INDEX_FILENAME",
    "BLOB_EXTENSION",
    "ENTRY_HASH_LENGTH",
]
