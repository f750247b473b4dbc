"""
Core clipkeeper package.

This package contains the shared building blocks of clipkeeper: settings,
constants, the exception hierarchy, helpers for ids and timestamps, and the
Pydantic models for clipboard history entries and transform results.

It leverages Pydantic for settings management, supporting multiple
sources such as environment variables and YAML files.
"""

from . import constants  # noqa: F401
from .config import (  # noqa: F401
    AppSettings,
    HistorySettings,
    TranscriptionSettings,
    TransformSettings,
    get_settings,
)
from .errors import (  # noqa: F401
    ClipkeeperError,
    HistoryError,
    HistoryInitializationError,
    HistoryPersistenceError,
    TransformError,
)
