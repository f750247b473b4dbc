# region Docstring
"""
clipcore.config.base
Where clipkeeper runs and where it keeps its files.
Overview:
- The deployment kind is one of "prod", "docker" or "dev". It comes from the
    ENVIRONMENT variable when that holds a known name, otherwise from the working
    directory: /app means a container, /srv a production host, anything else a
    developer checkout.
- Every default path used by the settings classes hangs off the values resolved here.
Contents:
- Classes:
    - AppEnv: class methods resolving the deployment kind and its directories.
- Module-level Constants:
    - APP_ROOT (Path): Working directory at import; .env and config*.yaml live here.
    - APP_ENV (EnvName): Deployment kind.
    - DATA_DIR (Path): History, transform output and logs.
    - MODELS_DIR (Path): Whisper model files.
Design Notes:
- Resolved once at import. CLIPKEEPER_DATA_DIR and WHISPER_MODELS_DIR override the
    per-environment locations everywhere.
"""
# endregion
# region Imports
import os
from pathlib import Path
from typing import Literal

# endregion
# region AppEnv Class
EnvName = Literal["prod", "docker", "dev"]


class AppEnv:
    """
    Deployment detection for clipkeeper.

    Attributes:
        ROOT (Path): Resolved working directory at import time.
        KNOWN (frozenset[str]): Accepted values of the ENVIRONMENT variable.
    """

    ROOT: Path = Path.cwd().resolve()
    KNOWN: frozenset[str] = frozenset({"prod", "docker", "dev"})

    @classmethod
    def environment(cls) -> EnvName:
        declared = os.getenv("ENVIRONMENT", "").strip().lower()
        if declared in cls.KNOWN:
            return declared  # type: ignore[return-value]

        cwd = Path.cwd().as_posix()
        if cwd.startswith("/app"):
            return "docker"
        if cwd.startswith("/srv"):
            return "prod"
        return "dev"

    @classmethod
    def data_dir(cls) -> Path:
        """History, transform output and logs for the detected deployment."""
        override = os.getenv("CLIPKEEPER_DATA_DIR")
        if override:
            return Path(override).expanduser().resolve()
        return {
            "docker": Path("/data"),
            "prod": Path("/srv/clipkeeper/data"),
        }.get(cls.environment(), cls.ROOT / ".data")

    @classmethod
    def models_dir(cls) -> Path:
        """Directory holding the ggml whisper models."""
        override = os.getenv("WHISPER_MODELS_DIR")
        if override:
            return Path(override).expanduser().resolve()
        return {
            "docker": Path("/models"),
            "prod": Path("/srv/clipkeeper/models"),
        }.get(cls.environment(), cls.data_dir() / "whisper_models")


# endregion
# region Module-level Constants
APP_ROOT: Path = AppEnv.ROOT
"""[Path] Working directory the process started in."""
APP_ENV: EnvName = AppEnv.environment()
"""[EnvName] Deployment kind."""
DATA_DIR: Path = AppEnv.data_dir()
"""[Path] Root of the clipboard history, transform output and logs."""
MODELS_DIR: Path = AppEnv.models_dir()
"""[Path] Whisper model files."""
# endregion


__all__ = [
    "APP_ENV",
    "APP_ROOT",
    "DATA_DIR",
    "MODELS_DIR",
    "AppEnv",
    "EnvName",
]
