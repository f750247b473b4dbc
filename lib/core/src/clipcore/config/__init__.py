"""
clipcore.config
Settings for the clipkeeper libraries and CLI.
Overview:
- One settings class per consumer: the CLI shell, the history store, the text and
    image transforms, and the transcriber. Each is loaded through get_settings().
- Field aliases are the environment variable names (CLIPKEEPER_HISTORY_DIR,
    CLIPKEEPER_MAX_ENTRIES, WHISPER_MODEL, ...).
Contents:
- AppSettings: log level, log directory, log archive retention, deployment kind.
- HistorySettings: history directory, index filename, capacity, preview length.
- TransformSettings: output directory, replacement spec and separators, palette size.
- TranscriptionSettings: whisper and ffmpeg executables, model, language, sample rate.
- get_settings: re-exported from clipcore.config.factory.
Design Notes:
- Every field has a default under DATA_DIR or MODELS_DIR, so nothing needs to be
    configured on a developer machine.
"""

from pathlib import Path
from typing import Optional

from pydantic import Field, field_validator

from clipcore.config.base import APP_ENV, APP_ROOT, DATA_DIR, MODELS_DIR
from clipcore.config.factory import FactoryBaseSettings
from clipcore.config.factory import get_settings  # noqa: F401  This is used externally
from clipcore.constants import (
    DEFAULT_MAX_ENTRIES,
    INDEX_FILENAME,
    TEXT_PREVIEW_LENGTH,
)


class AppSettings(FactoryBaseSettings):
    """Application configuration settings."""

    app_root: Path = Field(
        default=Path(APP_ROOT),
        description="Root directory of the application.",
    )
    environment: str = Field(
        default=APP_ENV,
        description="Current application environment (prod, docker, dev).",
        alias="ENVIRONMENT",
    )
    log_level: str = Field(
        default="info",
        description="Log level for the clipkeeper CLI.",
        alias="CLIPKEEPER_LOG_LEVEL",
    )
    log_dir: Path = Field(
        default=DATA_DIR / "logs",
        description="Directory for the JSON log file and its daily archives.",
        alias="CLIPKEEPER_LOG_DIR",
    )
    log_archive_days: int = Field(
        default=10,
        description="Number of archived log files to keep. [Default: 10]",
        alias="CLIPKEEPER_LOG_ARCHIVE_DAYS",
    )

    @field_validator("log_level", mode="before")
    def normalize_log_level(cls, v):
        if isinstance(v, str):
            return v.strip().lower()
        return v


class HistorySettings(FactoryBaseSettings):
    """
    Configuration for the clipboard history store.
    """

    history_dir: Path = Field(
        default=DATA_DIR / "clipboard_history",
        description="Directory holding the history index and image blobs.",
        alias="CLIPKEEPER_HISTORY_DIR",
    )
    index_filename: str = Field(
        default=INDEX_FILENAME,
        description="Filename of the JSON history index inside history_dir.",
        alias="CLIPKEEPER_INDEX_FILENAME",
    )
    max_entries: int = Field(
        default=DEFAULT_MAX_ENTRIES,
        gt=0,
        description="Maximum number of retained entries. [Default: 1000]",
        alias="CLIPKEEPER_MAX_ENTRIES",
    )
    preview_length: int = Field(
        default=TEXT_PREVIEW_LENGTH,
        gt=0,
        description="Text longer than this gets a truncated preview. [Default: 500]",
        alias="CLIPKEEPER_PREVIEW_LENGTH",
    )

    @property
    def index_path(self) -> Path:
        """Full path of the history index file."""
        return self.history_dir / self.index_filename


class TransformSettings(FactoryBaseSettings):
    """
    Configuration for the text replacer and the image extractor.
    """

    output_dir: Path = Field(
        default=DATA_DIR / "clipboard_output",
        description="Directory where transforms write their files.",
        alias="CLIPKEEPER_OUTPUT_DIR",
    )
    pair_separator: str = Field(
        default=",",
        min_length=1,
        description="Separator between replacement pairs. [Default: ',']",
        alias="CLIPKEEPER_REPLACE_PAIR_SEPARATOR",
    )
    value_separator: str = Field(
        default=":",
        min_length=1,
        description="Separator between search and replacement. [Default: ':']",
        alias="CLIPKEEPER_REPLACE_VALUE_SEPARATOR",
    )
    replacements: Optional[str] = Field(
        default=None,
        description="Replacement spec applied to copied text, e.g. 'foo:bar,baz:qux'.",
        alias="CLIPKEEPER_REPLACEMENTS",
    )
    max_colors: int = Field(
        default=8,
        gt=0,
        le=256,
        description="Number of palette colours extracted from images. [Default: 8]",
        alias="CLIPKEEPER_MAX_COLORS",
    )
    sample_size: tuple[int, int] = Field(
        default=(256, 256),
        description="Images are downsampled to fit this box before quantizing. (Width,Height)",
        alias="CLIPKEEPER_COLOR_SAMPLE_SIZE",
    )


class TranscriptionSettings(FactoryBaseSettings):
    """
    Configuration for the whisper.cpp based transcription pipeline.
    """

    whisper_command: str = Field(
        default="whisper-cli",
        description="Executable of the whisper.cpp command line client.",
        alias="WHISPER_COMMAND",
    )
    model_name: str = Field(
        default="large-v3-turbo",
        description="Whisper model name; resolved to ggml-<name>.bin in models_dir.",
        alias="WHISPER_MODEL",
    )
    models_dir: Path = Field(
        default=MODELS_DIR,
        description="Directory containing the ggml model files.",
        alias="WHISPER_MODELS_DIR",
    )
    language: str = Field(
        default="auto",
        description="Spoken language passed to whisper ('auto' to detect).",
        alias="WHISPER_LANGUAGE",
    )
    translate: bool = Field(
        default=False,
        description="Translate the transcript to English.",
        alias="WHISPER_TRANSLATE",
    )
    ffmpeg_command: str = Field(
        default="ffmpeg",
        description="Executable used to convert audio to WAV.",
        alias="FFMPEG_COMMAND",
    )
    sample_rate: int = Field(
        default=16000,
        description="Sample rate of the converted WAV file.",
        alias="STT_SAMPLE_RATE",
    )
    keep_wav: bool = Field(
        default=False,
        description="Keep the converted WAV file after transcription.",
        alias="WHISPER_KEEP_WAV",
    )
    timeout: Optional[float] = Field(
        default=None,
        description="Timeout in seconds for each external command. None waits forever.",
        alias="WHISPER_TIMEOUT",
    )

    @property
    def model_path(self) -> Path:
        """Path of the ggml model file for model_name."""
        return self.models_dir / f"ggml-{self.model_name}.bin"


__all__ = [
    "AppSettings",
    "HistorySettings",
    "TransformSettings",
    "TranscriptionSettings",
    "get_settings",
]
