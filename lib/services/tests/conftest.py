import logging
import sys
from io import BytesIO
from pathlib import Path

import pytest
from PIL import Image

# Add the src directories to the path for imports
lib_path = Path(__file__).parent.parent.parent
sys.path.insert(0, str(lib_path / "core" / "src"))
sys.path.insert(0, str(lib_path / "services" / "src"))

from clipservices import HistoryStore  # noqa: E402


@pytest.fixture
def logger() -> logging.Logger:
    """Provide a test logger."""
    test_logger = logging.getLogger("clipkeeper.tests")
    test_logger.setLevel(logging.DEBUG)
    return test_logger


@pytest.fixture
def history_dir(tmp_path) -> Path:
    """A history directory that does not exist yet."""
    return tmp_path / "clipboard_history"


@pytest.fixture
def store(history_dir, logger) -> HistoryStore:
    """A store with the default capacity in a temporary directory."""
    return HistoryStore(history_dir, logger)


@pytest.fixture
def make_png():
    """Build PNG bytes filled with the given colours, one horizontal band each."""

    def _make_png(*colors, size=(40, 40), mode="RGB") -> bytes:
        colors = colors or ((255, 0, 0),)
        image = Image.new(mode, size)
        band = size[1] // len(colors)
        for i, color in enumerate(colors):
            top = i * band
            bottom = size[1] if i == len(colors) - 1 else top + band
            image.paste(color, (0, top, size[0], bottom))
        buffer = BytesIO()
        image.save(buffer, format="PNG")
        return buffer.getvalue()

    return _make_png
