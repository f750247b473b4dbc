import os
import sys
import tempfile
from io import BytesIO
from pathlib import Path

import pytest
from PIL import Image

# Add the src directories to the path for imports
repo_root = Path(__file__).parent.parent.parent.parent
sys.path.insert(0, str(repo_root / "lib" / "core" / "src"))
sys.path.insert(0, str(repo_root / "lib" / "services" / "src"))
sys.path.insert(0, str(repo_root / "apps" / "clipboard" / "src"))

# The CLI configures logging on import; keep its log file out of the working tree
os.environ.setdefault("CLIPKEEPER_LOG_DIR", tempfile.mkdtemp(prefix="clipkeeper-logs-"))

from clipcore.config import get_settings  # noqa: E402


@pytest.fixture(autouse=True)
def cli_env(monkeypatch, tmp_path):
    """Point every settings class at a fresh temporary directory."""
    monkeypatch.setenv("CLIPKEEPER_HISTORY_DIR", str(tmp_path / "history"))
    monkeypatch.setenv("CLIPKEEPER_OUTPUT_DIR", str(tmp_path / "output"))
    monkeypatch.delenv("CLIPKEEPER_REPLACEMENTS", raising=False)
    monkeypatch.delenv("CLIPKEEPER_MAX_ENTRIES", raising=False)
    get_settings.cache_clear()
    yield tmp_path
    get_settings.cache_clear()


@pytest.fixture
def png_file(tmp_path) -> Path:
    """A small two-colour PNG on disk."""
    image = Image.new("RGB", (20, 20), (255, 255, 255))
    image.paste((0, 0, 0), (0, 0, 20, 5))
    buffer = BytesIO()
    image.save(buffer, format="PNG")
    path = tmp_path / "picture.png"
    path.write_bytes(buffer.getvalue())
    return path
