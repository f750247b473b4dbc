# region Docstring
"""
clipservices.content_handler
Per-capture pipeline: record a clipboard item in the history, then run its transform.
Overview:
- The clipboard monitor calls handle(type, data) once per captured item.
- The capture is always recorded first. Recording failures are logged and reported in
    the result but never stop the transform from running.
- Dispatch by type:
    - audio_file: transcribe, write the transcript back to the clipboard.
    - text: apply the configured replacement spec and write the result back; without a
        spec the text is only logged.
    - image: extract colours from bytes, or copy image files from a path list.
    - files / anything else: logged only.
- With record_derived=True, transcripts and replaced text are recorded as a second
    text entry.
Contents:
- Protocols:
    - ClipboardWriter: callable(content_type, data) -> bool that writes to the clipboard.
- Service Classes:
    - ClipboardContentHandler
Design Notes:
- Transcription and colour extraction block, so they run in worker threads.
- Transform errors are logged and returned as status="error"; the host process never
    sees them.
"""
# endregion
# region Imports
import asyncio
from logging import Logger
from typing import Any, Optional, Protocol

from clipcore.config import TransformSettings
from clipcore.constants import ContentTypes
from clipcore.errors import ClipkeeperError
from clipcore.models.history import HistoryEntry

from .history_store import HistoryStore
from .image_extractor import ImageExtractor
from .models import HandlerResult
from .text_replacer import replace_text
from .transcription import AudioTranscriber


# endregion
# region Protocols
class ClipboardWriter(Protocol):
    def __call__(self, content_type: str, data: Any) -> bool: ...


# endregion
# region Service Classes
class ClipboardContentHandler:
    """
    Records clipboard captures and runs the matching transform.
    """

    def __init__(
        self,
        store: HistoryStore,
        logger: Logger,
        image_extractor: Optional[ImageExtractor] = None,
        transcriber: Optional[AudioTranscriber] = None,
        replacements: Optional[str] = None,
        clipboard_writer: Optional[ClipboardWriter] = None,
        record_derived: bool = False,
        pair_separator: str = ",",
        value_separator: str = ":",
    ):
        """
        Initializes the ClipboardContentHandler.

        Args:
            store (HistoryStore): Where every capture is recorded.
            logger (Logger): The logger instance for logging.
            image_extractor (Optional[ImageExtractor]): Image transform; images are only
                recorded when omitted.
            transcriber (Optional[AudioTranscriber]): Audio transform; audio is only
                recorded when omitted.
            replacements (Optional[str]): Replacement spec applied to copied text.
            clipboard_writer (Optional[ClipboardWriter]): Receives transform output.
            record_derived (bool): Record transcripts and replaced text as text entries.
            pair_separator (str): Separator between replacement pairs.
            value_separator (str): Separator between search and replacement.
        """
        self.store = store
        self.logger = logger.getChild("ClipboardContentHandler")
        self.image_extractor = image_extractor
        self.transcriber = transcriber
        self.replacements = replacements
        self.clipboard_writer = clipboard_writer
        self.record_derived = record_derived
        self.pair_separator = pair_separator
        self.value_separator = value_separator

    @classmethod
    def from_settings(
        cls,
        store: HistoryStore,
        settings: TransformSettings,
        logger: Logger,
        transcriber: Optional[AudioTranscriber] = None,
        clipboard_writer: Optional[ClipboardWriter] = None,
        record_derived: bool = False,
    ) -> "ClipboardContentHandler":
        return cls(
            store=store,
            logger=logger,
            image_extractor=ImageExtractor.from_settings(settings, logger),
            transcriber=transcriber,
            replacements=settings.replacements,
            clipboard_writer=clipboard_writer,
            record_derived=record_derived,
            pair_separator=settings.pair_separator,
            value_separator=settings.value_separator,
        )

    async def handle(self, content_type: str, data: Any) -> HandlerResult:
        """Record the capture, then run the transform for its type."""
        if isinstance(content_type, ContentTypes):
            content_type = content_type.value
        entry = await self._record(content_type, data)
        result = HandlerResult(content_type=content_type, entry=entry)
        if entry is None:
            result.message = "Capture was not recorded in the history"

        try:
            if content_type == ContentTypes.AUDIO_FILE.value:
                await self._handle_audio(data, result)
            elif content_type == ContentTypes.TEXT.value:
                await self._handle_text(data, result)
            elif content_type == ContentTypes.IMAGE.value:
                await self._handle_image(data, result)
            elif content_type == ContentTypes.FILES.value:
                self.logger.info("Files copied")
                result.status = "skipped"
            else:
                self.logger.info("Unknown content copied")
                result.status = "skipped"
        except ClipkeeperError as e:
            self.logger.error(f"Error processing clipboard content: {e}")
            result.status = "error"
            result.message = str(e)
        return result

    async def _record(self, content_type: str, data: Any) -> Optional[HistoryEntry]:
        try:
            return await self.store.add_entry(content_type, data)
        except (ClipkeeperError, TypeError) as e:
            self.logger.error(f"Error adding to clipboard history: {e}")
            return None

    async def _handle_audio(self, data: Any, result: HandlerResult) -> None:
        result.action = "transcribe"
        if self.transcriber is None:
            result.status = "skipped"
            return
        transcription = await asyncio.to_thread(self.transcriber.transcribe, data)
        result.output = transcription.text
        await self._emit_text(transcription.text, result)

    async def _handle_text(self, data: str, result: HandlerResult) -> None:
        if not self.replacements:
            result.action = "log"
            result.status = "skipped"
            self.logger.info(f"Text copied: {str(data)[:80]!r}")
            return
        result.action = "replace"
        modified = replace_text(
            data, self.replacements, self.pair_separator, self.value_separator
        )
        result.output = modified
        await self._emit_text(modified, result)

    async def _handle_image(self, data: Any, result: HandlerResult) -> None:
        if isinstance(data, (bytes, bytearray, memoryview)):
            result.action = "extract_colors"
        else:
            result.action = "copy_images"
        if self.image_extractor is None:
            result.status = "skipped"
            return
        result.output = await asyncio.to_thread(self.image_extractor.process, data)

    async def _emit_text(self, text: str, result: HandlerResult) -> None:
        if self.clipboard_writer is not None:
            if not self.clipboard_writer(ContentTypes.TEXT.value, text):
                self.logger.error("Failed to write to clipboard")
        if self.record_derived:
            result.derived_entry = await self._record(ContentTypes.TEXT.value, text)


# endregion
__all__ = ["ClipboardContentHandler", "ClipboardWriter"]
