# region Docstring
"""
clipservices.history_store
Persistent, capacity-bounded clipboard history backed by a JSON index and image blobs.
Contents:
- Service Classes:
    - HistoryStore: add_entry, get_history, get_entries_by_type, search_entries,
        get_entry, clear_history, reload. from_settings() builds one from HistorySettings.
Design Notes:
- Every public method awaits ensure_initialized(); the first call loads the index once.
- Mutations are serialized by a second asyncio.Lock and the index is rewritten in full.
- Blob deletes are best effort. Failures are logged and kept as CleanupWarning models.
"""
# endregion
# region Imports
import asyncio
import os
from collections import deque
from datetime import datetime
from logging import Logger
from pathlib import Path
from typing import Any, Optional, Union
from uuid import uuid4

from clipcore.config import HistorySettings
from clipcore.constants import (
    BLOB_EXTENSION,
    DEFAULT_MAX_ENTRIES,
    INDEX_FILENAME,
    TEXT_PREVIEW_LENGTH,
    ContentTypes,
)
from clipcore.errors import HistoryInitializationError, HistoryPersistenceError
from clipcore.models.history import (
    AudioFileEntry,
    CleanupReport,
    CleanupWarning,
    FilesEntry,
    HistoryEntry,
    ImageEntry,
    ImageMetadata,
    PathsMetadata,
    TextEntry,
    TextMetadata,
    UnknownEntry,
    dump_index,
    load_index,
)
from clipcore.utils import generate_entry_id, get_time, make_preview, normalize_paths

# endregion
# region Service Classes
class HistoryStore:
    """
    Clipboard history store. history_index holds the entries newest first;
    cleanup_warnings keeps the latest failed blob deletes from eviction.
    """

    def __init__(
        self,
        history_dir: Union[str, Path],
        logger: Logger,
        max_entries: int = DEFAULT_MAX_ENTRIES,
        index_filename: str = INDEX_FILENAME,
        preview_length: int = TEXT_PREVIEW_LENGTH,
    ):
        """Nothing touches the filesystem until first use."""
        if max_entries < 1:
            raise ValueError(f"max_entries must be positive, got {max_entries}")
        self.history_dir = Path(history_dir)
        self.index_path = self.history_dir / index_filename
        self.max_entries = max_entries
        self.preview_length = preview_length
        self.logger = logger.getChild("HistoryStore")
        self.history_index: list[HistoryEntry] = []
        self.initialized = False
        self.cleanup_warnings: deque[CleanupWarning] = deque(maxlen=max_entries)
        self._init_lock = asyncio.Lock()
        self._write_lock = asyncio.Lock()

    @classmethod
    def from_settings(cls, settings: HistorySettings, logger: Logger) -> "HistoryStore":
        """Build a store from HistorySettings."""
        return cls(
            history_dir=settings.history_dir,
            logger=logger,
            max_entries=settings.max_entries,
            index_filename=settings.index_filename,
            preview_length=settings.preview_length,
        )

    # region Initialization
    async def ensure_initialized(self) -> None:
        """Load the index on first use. Raises HistoryInitializationError."""
        if self.initialized:
            return
        async with self._init_lock:
            if self.initialized:
                return
            await self._load()

    async def _load(self) -> None:
        try:
            await asyncio.to_thread(self.history_dir.mkdir, parents=True, exist_ok=True)
        except OSError as e:
            self.logger.error(f"Failed to create history directory {self.history_dir}: {e}")
            raise HistoryInitializationError(f"Cannot create {self.history_dir}: {e}") from e

        entries = await asyncio.to_thread(self._read_index)
        if entries is None:
            self.history_index = []
            try:
                await self._save_index()
            except HistoryPersistenceError as e:
                raise HistoryInitializationError(
                    f"Cannot write empty history index {self.index_path}: {e}"
                ) from e
        else:
            self.history_index = entries
        self.initialized = True
        self.logger.debug(f"History loaded from {self.index_path} ({len(self.history_index)} entries)")

    def _read_index(self) -> Optional[list[HistoryEntry]]:
        """Return the parsed index, or None when the file is missing or unusable."""
        try:
            raw = self.index_path.read_bytes()
        except FileNotFoundError:
            self.logger.info(f"No history index at {self.index_path}, starting empty")
            return None
        except OSError as e:
            self.logger.warning(f"Could not read history index {self.index_path}: {e}")
            return None
        try:
            return load_index(raw)
        except ValueError as e:
            self.logger.warning(
                f"History index {self.index_path} is corrupt, replacing it with an empty one: {e}"
            )
            return None

    async def reload(self) -> None:
        """Discard the in-memory index and load it again from disk."""
        async with self._write_lock:
            async with self._init_lock:
                self.initialized = False
                self.history_index = []
                await self._load()

    # endregion
    # region Persistence
    async def _save_index(self) -> None:
        payload = dump_index(list(self.history_index))
        try:
            await asyncio.to_thread(self._write_atomic, self.index_path, payload)
        except OSError as e:
            self.logger.error(f"Failed to write history index {self.index_path}: {e}")
            raise HistoryPersistenceError(f"Cannot write history index {self.index_path}: {e}") from e

    @staticmethod
    def _write_atomic(path: Path, payload: bytes) -> None:
        temp_path = path.with_name(f".{path.name}.{uuid4().hex}.tmp")
        try:
            temp_path.write_bytes(payload)
            os.replace(temp_path, path)
        finally:
            if temp_path.exists():
                temp_path.unlink()

    def blob_path(self, filename: str) -> Path:
        """Absolute path of a blob file inside the history directory."""
        return self.history_dir / filename

    async def _save_blob(self, entry_id: str, data: bytes) -> str:
        filename = f"{entry_id}{BLOB_EXTENSION}"
        try:
            await asyncio.to_thread(self.blob_path(filename).write_bytes, data)
        except OSError as e:
            self.logger.error(f"Failed to write image blob {filename}: {e}")
            raise HistoryPersistenceError(f"Cannot write image blob {filename}: {e}") from e
        return filename

    async def _delete_blob(self, entry: HistoryEntry, reason: str) -> Optional[CleanupWarning]:
        filename = entry.blob_filename
        if filename is None:
            return None
        try:
            await asyncio.to_thread(self.blob_path(filename).unlink)
        except OSError as e:
            self.logger.warning(f"Could not delete blob {filename} ({reason}): {e}")
            return CleanupWarning(entry_id=entry.id, filename=filename, reason=reason, message=str(e))
        return None

    # endregion
    # region Entry Construction
    async def _build_entry(
        self, content_type: str, data: Any, entry_id: str, captured_at: datetime
    ) -> HistoryEntry:
        if content_type == ContentTypes.IMAGE.value:
            payload = bytes(data)
            filename = await self._save_blob(entry_id, payload)
            return ImageEntry(
                id=entry_id,
                timestamp=captured_at,
                data=filename,
                metadata=ImageMetadata(size=len(payload)),
            )
        if content_type in (ContentTypes.AUDIO_FILE.value, ContentTypes.FILES.value):
            paths = list(data)
            entry_cls = AudioFileEntry if content_type == ContentTypes.AUDIO_FILE.value else FilesEntry
            return entry_cls(
                id=entry_id,
                timestamp=captured_at,
                data=paths,
                metadata=PathsMetadata(count=len(paths), paths=paths),
            )
        if content_type == ContentTypes.TEXT.value:
            return TextEntry(
                id=entry_id,
                timestamp=captured_at,
                data=data,
                metadata=TextMetadata(
                    length=len(data), preview=make_preview(data, self.preview_length)
                ),
            )
        entry = UnknownEntry(id=entry_id, type=content_type, timestamp=captured_at, data=data)
        try:
            entry.model_dump_json()
        except ValueError as e:
            raise TypeError(f"{content_type} data is not JSON serializable: {e}") from e
        return entry

    @staticmethod
    def _validate_payload(content_type: str, data: Any) -> Any:
        """Return data ready to store, path payloads as a list of str. Raises TypeError."""
        if content_type == ContentTypes.IMAGE.value:
            if not isinstance(data, (bytes, bytearray, memoryview)):
                raise TypeError(f"image data must be bytes, got {type(data).__name__}")
        elif content_type == ContentTypes.TEXT.value:
            if not isinstance(data, str):
                raise TypeError(f"text data must be str, got {type(data).__name__}")
        elif content_type in (ContentTypes.AUDIO_FILE.value, ContentTypes.FILES.value):
            try:
                return normalize_paths(data)
            except TypeError as e:
                raise TypeError(f"{content_type} data must be a path or paths: {e}") from e
        return data

    # endregion
    # region Mutations
    async def add_entry(self, content_type: Union[str, ContentTypes], data: Any) -> HistoryEntry:
        """
        Record one clipboard capture as the newest history entry.

        data is str for text, bytes for image, and one path or a sequence of paths for
        audio_file and files. Any other type string is stored as a passthrough entry.

        Raises:
            TypeError: The payload does not fit the content type. Nothing is changed.
            HistoryPersistenceError: The blob or the index could not be written.
        """
        if isinstance(content_type, ContentTypes):
            content_type = content_type.value
        data = self._validate_payload(content_type, data)
        await self.ensure_initialized()

        async with self._write_lock:
            captured_at = get_time()
            entry_id = generate_entry_id(content_type, data, captured_at)
            try:
                entry = await self._build_entry(content_type, data, entry_id, captured_at)
                self.history_index.insert(0, entry)
                await self._evict_overflow()
                await self._save_index()
            except Exception as e:
                self.logger.error(f"Failed to add {content_type} entry {entry_id}: {e}")
                raise
            self.logger.debug(f"Added {content_type} entry {entry_id}")
            return entry

    async def _evict_overflow(self) -> None:
        while len(self.history_index) > self.max_entries:
            removed = self.history_index.pop()
            self.logger.debug(f"Evicted {removed.type} entry {removed.id}")
            warning = await self._delete_blob(removed, "evict")
            if warning is not None:
                self.cleanup_warnings.append(warning)

    def drain_cleanup_warnings(self) -> list[CleanupWarning]:
        """Return the collected eviction warnings and forget them."""
        warnings = list(self.cleanup_warnings)
        self.cleanup_warnings.clear()
        return warnings

    async def clear_history(self) -> CleanupReport:
        """Delete every image blob, then persist an empty index."""
        await self.ensure_initialized()
        async with self._write_lock:
            report = CleanupReport(removed_entries=len(self.history_index))
            for entry in self.history_index:
                if entry.blob_filename is None:
                    continue
                warning = await self._delete_blob(entry, "clear")
                if warning is None:
                    report.removed_blobs.append(entry.blob_filename)
                else:
                    report.warnings.append(warning)
            self.history_index = []
            await self._save_index()
            self.logger.info(
                f"Cleared {report.removed_entries} history entries "
                f"({len(report.removed_blobs)} blobs removed, {len(report.warnings)} failed)"
            )
            return report

    # endregion
    # region Queries
    async def get_history(self) -> list[HistoryEntry]:
        """Return every entry, newest first."""
        await self.ensure_initialized()
        return list(self.history_index)

    async def get_entries_by_type(self, content_type: Union[str, ContentTypes]) -> list[HistoryEntry]:
        """Return entries whose type equals content_type, newest first."""
        await self.ensure_initialized()
        if isinstance(content_type, ContentTypes):
            content_type = content_type.value
        return [entry for entry in self.history_index if entry.type == content_type]

    async def search_entries(self, query: str) -> list[HistoryEntry]:
        """Case-insensitive substring search over text data and file paths."""
        await self.ensure_initialized()
        needle = query.lower()
        return [entry for entry in self.history_index if entry.matches(needle)]

    async def get_entry(self, entry_id: str) -> Optional[HistoryEntry]:
        """Return the entry with entry_id, or None."""
        await self.ensure_initialized()
        return next((entry for entry in self.history_index if entry.id == entry_id), None)

    # endregion


# endregion
__all__ = ["HistoryStore"]
