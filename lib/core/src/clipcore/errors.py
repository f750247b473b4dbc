"""
clipcore.errors
Exception hierarchy shared by the history store and the clipboard transforms.

Only initialization and persistence failures of the history store cross the
store boundary. Corrupt index files are healed in place and blob cleanup
failures are reported as warnings, so neither has an exception here.
"""


class ClipkeeperError(Exception):
    """Base class for every error raised by clipkeeper libraries."""


# region History Store Errors
class HistoryError(ClipkeeperError):
    """Base class for history store failures."""


class HistoryInitializationError(HistoryError):
    """The history directory (or the healed empty index) could not be written."""


class HistoryPersistenceError(HistoryError):
    """
    Writing an image blob or the index file failed.

    The in-memory index may already hold the change; call HistoryStore.reload()
    to resynchronise with the file on disk.
    """


# endregion
# region Transform Errors
class TransformError(ClipkeeperError):
    """Base class for clipboard transform failures."""


class ReplacementError(TransformError):
    """Invalid input or replacement spec for the text replacer."""


class ImageExtractionError(TransformError):
    """The image extractor could not read or save an image."""


class TranscriptionError(TransformError):
    """No audio file could be converted or transcribed."""


# endregion

__all__ = [
    "ClipkeeperError",
    "HistoryError",
    "HistoryInitializationError",
    "HistoryPersistenceError",
    "TransformError",
    "ReplacementError",
    "ImageExtractionError",
    "TranscriptionError",
]
