"""
Configuration settings for the clipkeeper CLI.

This module provides the application settings instance and the settings
loaders for the history store and the transforms.

Attributes:
    app_settings: Application-wide settings instance (log level, log directory).
    LOG_FILE_PATH: Path of the JSON log file.
"""

from pathlib import Path

from clipcore.config import (
    AppSettings,
    HistorySettings,
    TranscriptionSettings,
    TransformSettings,
    get_settings,
)

app_settings: AppSettings = get_settings(AppSettings)
"""Application-wide settings instance: ('LOG_LEVEL', 'LOG_DIR', 'LOG_ARCHIVE_DAYS')."""

LOG_FILE_PATH: Path = app_settings.log_dir / "clipkeeper.jsonl"
"""Path of the JSON log file. Daily archives are written next to it."""


def history_settings() -> HistorySettings:
    """History store settings, read on every call so tests can swap the environment."""
    return get_settings(HistorySettings)


def transform_settings() -> TransformSettings:
    """Text replacer and image extractor settings."""
    return get_settings(TransformSettings)


def transcription_settings() -> TranscriptionSettings:
    """Transcription pipeline settings."""
    return get_settings(TranscriptionSettings)
