import asyncio
import json
import re

import pytest
import pytest_asyncio

from clipcore.config import HistorySettings
from clipcore.constants import ContentTypes
from clipcore.errors import HistoryInitializationError, HistoryPersistenceError
from clipcore.models.history import (
    AudioFileEntry,
    FilesEntry,
    ImageEntry,
    TextEntry,
    UnknownEntry,
    load_index,
)
from clipservices import HistoryStore

ID_PATTERN = re.compile(r"^\d{4}-\d{2}-\d{2}T\d{2}:\d{2}:\d{2}\.\d{3}Z-[0-9a-f]{8}$")


def read_index(store: HistoryStore) -> list:
    return json.loads(store.index_path.read_text(encoding="utf-8"))


# region Initialization
@pytest.mark.asyncio()
async def test_first_use_creates_directory_and_empty_index(store, history_dir):
    """Nothing is touched until first use; then an empty index is written."""
    assert not history_dir.exists()
    assert await store.get_history() == []
    assert store.initialized
    assert read_index(store) == []


@pytest.mark.asyncio()
async def test_concurrent_initialization_runs_once(store, monkeypatch):
    calls = []
    original = store._load

    async def counting_load():
        calls.append(1)
        await original()

    monkeypatch.setattr(store, "_load", counting_load)
    await asyncio.gather(*(store.ensure_initialized() for _ in range(10)))
    assert calls == [1]


@pytest.mark.asyncio()
async def test_corrupt_index_is_replaced_with_empty_history(history_dir, logger):
    """A malformed index heals to an empty, valid index without raising."""
    history_dir.mkdir(parents=True)
    (history_dir / "history_index.json").write_text("{not valid json", encoding="utf-8")
    store = HistoryStore(history_dir, logger)
    assert await store.get_history() == []
    assert read_index(store) == []


@pytest.mark.asyncio()
async def test_index_with_invalid_entries_is_replaced(history_dir, logger):
    history_dir.mkdir(parents=True)
    (history_dir / "history_index.json").write_text(
        json.dumps([{"id": "x", "type": "text"}]), encoding="utf-8"
    )
    store = HistoryStore(history_dir, logger)
    assert await store.get_history() == []


@pytest.mark.asyncio()
async def test_unusable_directory_raises_initialization_error(tmp_path, logger):
    blocker = tmp_path / "not_a_dir"
    blocker.write_text("file", encoding="utf-8")
    store = HistoryStore(blocker / "history", logger)
    with pytest.raises(HistoryInitializationError):
        await store.get_history()
    assert not store.initialized


def test_capacity_must_be_positive(history_dir, logger):
    with pytest.raises(ValueError):
        HistoryStore(history_dir, logger, max_entries=0)


def test_from_settings(tmp_path, logger):
    settings = HistorySettings(
        history_dir=tmp_path / "h", max_entries=5, index_filename="index.json"
    )
    store = HistoryStore.from_settings(settings, logger)
    assert store.max_entries == 5
    assert store.index_path == tmp_path / "h" / "index.json"


# endregion
# region Adding Entries
@pytest.mark.asyncio()
async def test_add_text_entry(store):
    entry = await store.add_entry("text", "Hello clipboard")
    assert isinstance(entry, TextEntry)
    assert ID_PATTERN.match(entry.id)
    assert entry.data == "Hello clipboard"
    assert entry.metadata.length == 15
    assert entry.metadata.preview is None
    assert read_index(store)[0]["metadata"] == {"length": 15}


@pytest.mark.asyncio()
async def test_long_text_gets_preview(history_dir, logger):
    store = HistoryStore(history_dir, logger, preview_length=10)
    entry = await store.add_entry(ContentTypes.TEXT, "abcdefghijklmnop")
    assert entry.metadata.length == 16
    assert entry.metadata.preview == "abcdefghij..."


@pytest.mark.asyncio()
async def test_id_prefix_matches_timestamp(store):
    entry = await store.add_entry("text", "a")
    assert entry.id.startswith(entry.model_dump(mode="json")["timestamp"])


@pytest.mark.asyncio()
async def test_add_image_writes_blob(store, make_png):
    png = make_png((0, 128, 255))
    entry = await store.add_entry("image", png)
    assert isinstance(entry, ImageEntry)
    assert entry.data == f"{entry.id}.png"
    assert entry.metadata.size == len(png)
    assert store.blob_path(entry.data).read_bytes() == png


@pytest.mark.asyncio()
async def test_single_path_is_wrapped(store):
    entry = await store.add_entry("audio_file", "/music/memo.m4a")
    assert isinstance(entry, AudioFileEntry)
    assert entry.data == ["/music/memo.m4a"]
    assert entry.metadata.count == 1
    assert entry.metadata.paths == ["/music/memo.m4a"]


@pytest.mark.asyncio()
async def test_files_keep_their_order(store):
    entry = await store.add_entry("files", ["/b.txt", "/a.txt", "/c.txt"])
    assert isinstance(entry, FilesEntry)
    assert entry.metadata.paths == ["/b.txt", "/a.txt", "/c.txt"]
    assert entry.metadata.count == 3


@pytest.mark.asyncio()
async def test_unknown_type_is_stored_as_passthrough(store):
    entry = await store.add_entry("video", {"duration": 3})
    assert isinstance(entry, UnknownEntry)
    assert entry.type == "video"
    assert read_index(store)[0]["data"] == {"duration": 3}


@pytest.mark.asyncio()
async def test_wrong_payload_types_are_rejected_without_changes(store):
    await store.add_entry("text", "keep me")
    with pytest.raises(TypeError):
        await store.add_entry("image", "not bytes")
    with pytest.raises(TypeError):
        await store.add_entry("text", b"bytes")
    with pytest.raises(TypeError):
        await store.add_entry("video", object())
    history = await store.get_history()
    assert [entry.data for entry in history] == ["keep me"]
    assert len(read_index(store)) == 1
    assert list(store.history_dir.glob("*.png")) == []


class _Location:
    def __init__(self, path):
        self.path = path

    def __fspath__(self):
        return self.path


@pytest.mark.asyncio()
async def test_bytes_path_is_stored_as_one_path(store, history_dir, logger):
    entry = await store.add_entry("files", b"/tmp/x")
    assert entry.data == ["/tmp/x"]
    assert entry.metadata.paths == ["/tmp/x"]
    assert entry.metadata.count == 1
    assert [found.id for found in await store.search_entries("tmp/x")] == [entry.id]
    reopened = HistoryStore(history_dir, logger)
    assert (await reopened.get_entry(entry.id)).data == ["/tmp/x"]


@pytest.mark.asyncio()
async def test_path_like_objects_are_stored_as_paths(store):
    single = await store.add_entry("audio_file", _Location("/music/memo.m4a"))
    assert single.data == ["/music/memo.m4a"]
    several = await store.add_entry("files", [_Location("/b.txt"), b"/a.txt"])
    assert several.metadata.paths == ["/b.txt", "/a.txt"]


@pytest.mark.asyncio()
async def test_non_path_payloads_are_rejected_without_changes(store):
    await store.add_entry("files", ["/keep.txt"])
    with pytest.raises(TypeError):
        await store.add_entry("files", 42)
    with pytest.raises(TypeError):
        await store.add_entry("audio_file", ["/ok.mp3", 3.5])
    assert [entry.data for entry in await store.get_history()] == [["/keep.txt"]]
    assert len(read_index(store)) == 1


@pytest.mark.asyncio()
async def test_newest_entry_comes_first(store):
    for text in ("first", "second", "third"):
        await store.add_entry("text", text)
    history = await store.get_history()
    assert [entry.data for entry in history] == ["third", "second", "first"]
    assert [item["data"] for item in read_index(store)] == ["third", "second", "first"]


@pytest.mark.asyncio()
async def test_get_history_returns_a_copy(store):
    await store.add_entry("text", "a")
    history = await store.get_history()
    history.clear()
    assert len(await store.get_history()) == 1


@pytest.mark.asyncio()
async def test_ids_are_unique_under_load(store):
    """1000 rapid captures with distinct data get 1000 distinct ids."""
    for i in range(1000):
        await store.add_entry("text", f"capture {i}")
    history = await store.get_history()
    assert len(history) == 1000
    assert len({entry.id for entry in history}) == 1000


@pytest.mark.asyncio()
async def test_concurrent_adds_are_all_persisted(store):
    await asyncio.gather(*(store.add_entry("text", f"item {i}") for i in range(25)))
    history = await store.get_history()
    assert len(history) == 25
    assert len(read_index(store)) == 25
    assert {entry.data for entry in history} == {f"item {i}" for i in range(25)}


# endregion
# region Capacity
@pytest.mark.asyncio()
async def test_capacity_evicts_oldest(history_dir, logger):
    store = HistoryStore(history_dir, logger, max_entries=3)
    for i in range(5):
        await store.add_entry("text", f"entry {i}")
    history = await store.get_history()
    assert [entry.data for entry in history] == ["entry 4", "entry 3", "entry 2"]
    assert len(read_index(store)) == 3


@pytest.mark.asyncio()
async def test_evicting_an_image_removes_its_blob(history_dir, logger, make_png):
    store = HistoryStore(history_dir, logger, max_entries=2)
    image = await store.add_entry("image", make_png((1, 2, 3)))
    blob = store.blob_path(image.data)
    assert blob.exists()
    await store.add_entry("text", "one")
    await store.add_entry("text", "two")
    assert not blob.exists()
    assert await store.get_entry(image.id) is None
    assert list(store.cleanup_warnings) == []


@pytest.mark.asyncio()
async def test_missing_blob_on_eviction_is_a_warning(history_dir, logger, make_png):
    store = HistoryStore(history_dir, logger, max_entries=1)
    image = await store.add_entry("image", make_png())
    store.blob_path(image.data).unlink()
    await store.add_entry("text", "replacement")
    assert [entry.data for entry in await store.get_history()] == ["replacement"]
    assert len(store.cleanup_warnings) == 1
    warning = store.cleanup_warnings[0]
    assert warning.entry_id == image.id
    assert warning.reason == "evict"


@pytest.mark.asyncio()
async def test_eviction_warnings_are_bounded_and_drained(history_dir, logger, make_png):
    store = HistoryStore(history_dir, logger, max_entries=1)
    for color in ((10, 0, 0), (20, 0, 0), (30, 0, 0), (40, 0, 0)):
        image = await store.add_entry("image", make_png(color))
        store.blob_path(image.data).unlink()
    await store.add_entry("text", "last")
    assert len(store.cleanup_warnings) == 1
    drained = store.drain_cleanup_warnings()
    assert [warning.entry_id for warning in drained] == [image.id]
    assert list(store.cleanup_warnings) == []
    assert store.drain_cleanup_warnings() == []


@pytest.mark.asyncio()
async def test_capacity_holds_for_loaded_oversized_index(history_dir, logger):
    """An index written with a larger capacity is trimmed on the next add."""
    big = HistoryStore(history_dir, logger, max_entries=10)
    for i in range(6):
        await big.add_entry("text", f"old {i}")
    small = HistoryStore(history_dir, logger, max_entries=3)
    await small.add_entry("text", "new")
    history = await small.get_history()
    assert [entry.data for entry in history] == ["new", "old 5", "old 4"]


# endregion
# region Persistence
@pytest.mark.asyncio()
async def test_history_survives_restart(history_dir, logger, make_png):
    store = HistoryStore(history_dir, logger)
    await store.add_entry("text", "persisted")
    await store.add_entry("image", make_png())
    await store.add_entry("files", ["/x/y.txt"])
    await store.add_entry("clipboard/rtf", "{\\rtf1}")
    before = await store.get_history()

    reopened = HistoryStore(history_dir, logger)
    assert await reopened.get_history() == before


@pytest.mark.asyncio()
async def test_index_file_round_trips(store):
    await store.add_entry("text", "x" * 600)
    raw = store.index_path.read_bytes()
    assert load_index(raw) == await store.get_history()


@pytest.mark.asyncio()
async def test_failed_index_write_raises_and_reload_recovers(store, monkeypatch):
    await store.add_entry("text", "saved")

    def failing_write(path, payload):
        raise OSError("disk full")

    monkeypatch.setattr(store, "_write_atomic", failing_write)
    with pytest.raises(HistoryPersistenceError):
        await store.add_entry("text", "lost")
    assert len(await store.get_history()) == 2

    monkeypatch.undo()
    await store.reload()
    assert [entry.data for entry in await store.get_history()] == ["saved"]


@pytest.mark.asyncio()
async def test_no_temporary_files_are_left_behind(store):
    for i in range(3):
        await store.add_entry("text", str(i))
    assert sorted(path.name for path in store.history_dir.iterdir()) == ["history_index.json"]


# endregion
# region Clearing
@pytest.mark.asyncio()
async def test_clear_removes_entries_and_blobs(store, make_png):
    for color in ((255, 0, 0), (0, 255, 0), (0, 0, 255)):
        await store.add_entry("image", make_png(color))
    await store.add_entry("text", "one")
    await store.add_entry("text", "two")
    assert len(list(store.history_dir.glob("*.png"))) == 3

    report = await store.clear_history()
    assert report.ok
    assert report.removed_entries == 5
    assert len(report.removed_blobs) == 3
    assert await store.get_history() == []
    assert read_index(store) == []
    assert list(store.history_dir.glob("*.png")) == []


@pytest.mark.asyncio()
async def test_clear_reports_missing_blobs(store, make_png):
    image = await store.add_entry("image", make_png())
    store.blob_path(image.data).unlink()
    report = await store.clear_history()
    assert not report.ok
    assert report.removed_blobs == []
    assert report.warnings[0].filename == image.data
    assert report.warnings[0].reason == "clear"
    assert await store.get_history() == []


# endregion
# region Queries
@pytest_asyncio.fixture
async def populated_store(store, make_png):
    await store.add_entry("text", "Hello World")
    await store.add_entry("image", make_png())
    await store.add_entry("files", ["/Users/me/Documents/Report.pdf", "/tmp/other.txt"])
    await store.add_entry("audio_file", ["/Music/voice-memo.m4a"])
    await store.add_entry("text", "another snippet")
    return store


@pytest.mark.asyncio()
async def test_search_is_case_insensitive(populated_store):
    results = await populated_store.search_entries("hello")
    assert [entry.data for entry in results] == ["Hello World"]
    results = await populated_store.search_entries("WORLD")
    assert len(results) == 1


@pytest.mark.asyncio()
async def test_search_matches_paths(populated_store):
    results = await populated_store.search_entries("report")
    assert len(results) == 1
    assert results[0].type == "files"
    results = await populated_store.search_entries("memo")
    assert results[0].type == "audio_file"


@pytest.mark.asyncio()
async def test_search_never_matches_images(populated_store):
    assert await populated_store.search_entries("png") == []


@pytest.mark.asyncio()
async def test_empty_query_matches_text_and_paths(populated_store):
    results = await populated_store.search_entries("")
    assert [entry.type for entry in results] == ["text", "audio_file", "files", "text"]


@pytest.mark.asyncio()
async def test_get_entries_by_type(populated_store):
    texts = await populated_store.get_entries_by_type(ContentTypes.TEXT)
    assert [entry.data for entry in texts] == ["another snippet", "Hello World"]
    assert len(await populated_store.get_entries_by_type("image")) == 1
    assert await populated_store.get_entries_by_type("video") == []


@pytest.mark.asyncio()
async def test_get_entry(populated_store):
    history = await populated_store.get_history()
    target = history[2]
    assert await populated_store.get_entry(target.id) == target
    assert await populated_store.get_entry("missing") is None



@pytest.mark.asyncio()
async def test_search_foo_scenario(store, make_png):
    await store.add_entry("text", "this has foo in it")
    await store.add_entry("text", "nothing here")
    await store.add_entry("files", ["/tmp/foobar.txt"])
    await store.add_entry("image", make_png())
    results = await store.search_entries("foo")
    assert [entry.type for entry in results] == ["files", "text"]
    assert results[1].data == "this has foo in it"


@pytest.mark.asyncio()
async def test_evicting_non_image_entries_touches_no_files(history_dir, logger, make_png):
    store = HistoryStore(history_dir, logger, max_entries=2)
    image = await store.add_entry("image", make_png())
    await store.add_entry("files", ["/a.txt"])
    await store.add_entry("text", "evicts the image")
    await store.add_entry("text", "evicts the files entry")
    assert sorted(path.name for path in history_dir.iterdir()) == ["history_index.json"]
    assert list(store.cleanup_warnings) == []
    assert await store.get_entry(image.id) is None
# endregion
