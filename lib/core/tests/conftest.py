import sys
from datetime import datetime, timezone
from pathlib import Path

import pytest

# Add the src directory to the path for imports
src_path = Path(__file__).parent.parent / "src"
sys.path.insert(0, str(src_path))


@pytest.fixture(autouse=True)
def clear_settings_cache():
    """Settings are cached per class; start every test from a clean cache."""
    from clipcore.config import get_settings

    get_settings.cache_clear()
    yield
    get_settings.cache_clear()


@pytest.fixture
def captured_at() -> datetime:
    """A fixed capture time with sub-millisecond precision."""
    return datetime(2024, 1, 1, 12, 0, 0, 123456, tzinfo=timezone.utc)


@pytest.fixture
def sample_index_data():
    """Provide a raw index list with one entry of every kind."""
    return [
        {
            "id": "2024-01-01T12:00:05.000Z-aaaaaaaa",
            "type": "text",
            "timestamp": "2024-01-01T12:00:05.000Z",
            "data": "hello world",
            "metadata": {"length": 11},
        },
        {
            "id": "2024-01-01T12:00:04.000Z-bbbbbbbb",
            "type": "image",
            "timestamp": "2024-01-01T12:00:04.000Z",
            "data": "2024-01-01T12:00:04.000Z-bbbbbbbb.png",
            "metadata": {"size": 2048},
        },
        {
            "id": "2024-01-01T12:00:03.000Z-cccccccc",
            "type": "audio_file",
            "timestamp": "2024-01-01T12:00:03.000Z",
            "data": ["/music/memo.m4a"],
            "metadata": {"count": 1, "paths": ["/music/memo.m4a"]},
        },
        {
            "id": "2024-01-01T12:00:02.000Z-dddddddd",
            "type": "files",
            "timestamp": "2024-01-01T12:00:02.000Z",
            "data": ["/docs/a.txt", "/docs/b.txt"],
            "metadata": {"count": 2, "paths": ["/docs/a.txt", "/docs/b.txt"]},
        },
        {
            "id": "2024-01-01T12:00:01.000Z-eeeeeeee",
            "type": "video",
            "timestamp": "2024-01-01T12:00:01.000Z",
            "data": {"frames": 10},
        },
    ]
