"""
clipservices
Service layer of clipkeeper: the clipboard history store, the clipboard transforms,
and the content handler that ties them together.
"""

from .content_handler import ClipboardContentHandler, ClipboardWriter  # noqa: F401
from .history_store import HistoryStore  # noqa: F401
from .image_extractor import ImageExtractor  # noqa: F401
from .models import HandlerResult  # noqa: F401
from .text_replacer import apply_replacements, parse_replacements, replace_text  # noqa: F401
from .transcription import AudioTranscriber, extract_transcript_text  # noqa: F401

__all__ = [
    "AudioTranscriber",
    "ClipboardContentHandler",
    "ClipboardWriter",
    "HandlerResult",
    "HistoryStore",
    "ImageExtractor",
    "apply_replacements",
    "extract_transcript_text",
    "parse_replacements",
    "replace_text",
]
