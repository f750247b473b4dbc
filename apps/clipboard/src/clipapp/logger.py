"""
Logging for the clipkeeper CLI.

Records go to a JSON-lines file (python-json-logger) in the configured log
directory; warnings and errors are echoed to stderr. The previous day's file is
rotated into ``clipkeeper_<YYYYmmdd_HHMMSS>.jsonl`` on start-up and only the
newest ``log_archive_days`` archives are kept.
"""

import logging
from datetime import datetime, timedelta
from logging import Logger as T_Logger
from logging.config import dictConfig
from pathlib import Path
from typing import Optional

from clipcore.utils import get_time

from .config import LOG_FILE_PATH, app_settings

ARCHIVE_STAMP = "%Y%m%d_%H%M%S"
ARCHIVE_INTERVAL = timedelta(days=1)


def logging_config(log_file: Path, level: str) -> dict:
    """dictConfig schema: JSON file handler plus a warnings-only console handler."""
    level = level.upper()
    return {
        "version": 1,
        "disable_existing_loggers": False,
        "formatters": {
            "json": {
                "()": "pythonjsonlogger.json.JsonFormatter",
                "fmt": "%(asctime)s %(levelname)s %(name)s %(message)s",
            },
            "console": {"format": "%(levelname)s %(name)s: %(message)s"},
        },
        "handlers": {
            "jsonl": {
                "class": "logging.FileHandler",
                "filename": str(log_file),
                "formatter": "json",
                "encoding": "utf-8",
                "level": level,
            },
            "stderr": {
                "class": "logging.StreamHandler",
                "formatter": "console",
                "level": "WARNING",
            },
        },
        "loggers": {
            "clipkeeper": {"handlers": ["jsonl", "stderr"], "level": level, "propagate": False},
        },
        "root": {"handlers": ["jsonl"], "level": level},
    }


def _archives(log_file: Path) -> list[Path]:
    """Archived log files, newest first."""
    return sorted(
        log_file.parent.glob(f"{log_file.stem}_*{log_file.suffix}"),
        key=lambda archive: archive.stat().st_mtime,
        reverse=True,
    )


def archive_daily_log_file(log_file: Path, now: Optional[datetime] = None) -> Optional[Path]:
    """
    Rename a non-empty log file to a timestamped archive unless one was made in the last day.

    Returns:
        Optional[Path]: The new archive, or None when nothing was rotated.
    """
    now = (now or get_time()).replace(tzinfo=None)
    archives = _archives(log_file)
    if archives:
        stamp = archives[0].stem[len(log_file.stem) + 1 :]
        try:
            latest = datetime.strptime(stamp, ARCHIVE_STAMP)
        except ValueError:
            return None
        if now - latest < ARCHIVE_INTERVAL:
            return None

    if not log_file.exists() or log_file.stat().st_size == 0:
        return None
    archive = log_file.with_name(f"{log_file.stem}_{now.strftime(ARCHIVE_STAMP)}{log_file.suffix}")
    log_file.rename(archive)
    return archive


def prune_log_archives(log_file: Path, keep: int) -> list[Path]:
    """Delete all but the newest ``keep`` archives; returns the deleted paths."""
    stale = _archives(log_file)[keep:]
    for archive in stale:
        archive.unlink()
    return stale


def setup_logging(log_file: Path = LOG_FILE_PATH) -> T_Logger:
    """Rotate old files, then configure logging. The file handler opens log_file."""
    log_file.parent.mkdir(parents=True, exist_ok=True)
    archive_daily_log_file(log_file)
    prune_log_archives(log_file, app_settings.log_archive_days)
    dictConfig(logging_config(log_file, app_settings.log_level))
    return logging.getLogger("clipkeeper")


logger: T_Logger = setup_logging()
system_logger = logger.getChild("SYSTEM")
system_logger.debug("Logger for clipkeeper initialized.")
