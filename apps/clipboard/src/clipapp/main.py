import asyncio
from pathlib import Path
from typing import List, Optional

import typer
from rich.console import Console
from rich.markup import escape
from rich.table import Table

from clipcore.constants import CONTENT_TYPE_LIST, ContentTypes
from clipcore.errors import ClipkeeperError
from clipcore.models.history import HistoryEntry, dump_index
from clipcore.utils import format_timestamp
from clipservices import (
    AudioTranscriber,
    ClipboardContentHandler,
    HistoryStore,
    ImageExtractor,
    replace_text,
)

from .config import history_settings, transcription_settings, transform_settings
from .logger import logger

console = Console(
    width=160,
    color_system="auto",
)

app = typer.Typer(name="clipkeeper", help="Browse and manage the clipboard history.")


def _store() -> HistoryStore:
    return HistoryStore.from_settings(history_settings(), logger)


def _fail(message: str) -> None:
    console.print(f"[bold red]Error:[/bold red] {escape(message)}")
    raise typer.Exit(code=1)


def _summary(entry: HistoryEntry, width: int = 60) -> str:
    if entry.type == ContentTypes.TEXT.value:
        text = " ".join(entry.data.split())
    elif entry.type == ContentTypes.IMAGE.value:
        text = f"{entry.data} ({entry.metadata.size} bytes)"
    elif entry.type in (ContentTypes.AUDIO_FILE.value, ContentTypes.FILES.value):
        text = ", ".join(entry.metadata.paths)
        if entry.metadata.count > 1:
            text = f"[{entry.metadata.count}] {text}"
    else:
        text = str(entry.data)
    return text if len(text) <= width else text[: width - 3] + "..."


def _print_entries(entries: list[HistoryEntry], title: str) -> None:
    if not entries:
        console.print(f"[yellow]{title}: no entries[/yellow]")
        return
    table = Table(title=title)
    table.add_column("ID", style="cyan", no_wrap=True)
    table.add_column("Type", style="magenta", no_wrap=True)
    table.add_column("Captured", no_wrap=True)
    table.add_column("Content")
    for entry in entries:
        table.add_row(
            entry.id, escape(entry.type), format_timestamp(entry.timestamp), escape(_summary(entry))
        )
    console.print(table)


@app.command(name="list", help="List history entries, newest first.")
def list_entries(
    content_type: Optional[str] = typer.Option(
        None, "--type", "-t", help=f"Only show one type ({', '.join(CONTENT_TYPE_LIST)})."
    ),
    limit: int = typer.Option(20, "--limit", "-n", min=1, help="Maximum entries to show."),
    as_json: bool = typer.Option(False, "--json", help="Print the entries as JSON."),
):
    store = _store()
    try:
        if content_type:
            entries = asyncio.run(store.get_entries_by_type(content_type))
        else:
            entries = asyncio.run(store.get_history())
    except ClipkeeperError as e:
        _fail(str(e))
    entries = entries[:limit]
    if as_json:
        typer.echo(dump_index(entries).decode("utf-8"))
        return
    _print_entries(entries, "Clipboard history")


@app.command(name="search", help="Case-insensitive search over text and file paths.")
def search(query: str = typer.Argument(..., help="Substring to look for.")):
    try:
        entries = asyncio.run(_store().search_entries(query))
    except ClipkeeperError as e:
        _fail(str(e))
    _print_entries(entries, f"Matches for {query!r}")


@app.command(name="show", help="Print one entry as JSON.")
def show(entry_id: str = typer.Argument(..., help="ID of the entry.")):
    try:
        entry = asyncio.run(_store().get_entry(entry_id))
    except ClipkeeperError as e:
        _fail(str(e))
    if entry is None:
        _fail(f"No entry with id {entry_id}")
    typer.echo(entry.model_dump_json(indent=2, exclude_none=True))


@app.command(name="add-text", help="Record a text entry.")
def add_text(text: str = typer.Argument(..., help="Text to record.")):
    try:
        entry = asyncio.run(_store().add_entry(ContentTypes.TEXT, text))
    except ClipkeeperError as e:
        _fail(str(e))
    console.print(f"[bold green]Added[/bold green] {entry.id}")


@app.command(name="add-files", help="Record a list of copied file paths.")
def add_files(
    paths: List[Path] = typer.Argument(..., help="Paths to record."),
    audio: bool = typer.Option(False, "--audio", help="Record as an audio_file entry."),
):
    content_type = ContentTypes.AUDIO_FILE if audio else ContentTypes.FILES
    resolved = [str(path.expanduser().resolve()) for path in paths]
    try:
        entry = asyncio.run(_store().add_entry(content_type, resolved))
    except ClipkeeperError as e:
        _fail(str(e))
    console.print(f"[bold green]Added[/bold green] {entry.id}")


@app.command(name="add-image", help="Record an image file as an image entry.")
def add_image(path: Path = typer.Argument(..., exists=True, dir_okay=False, help="Image file.")):
    try:
        entry = asyncio.run(_store().add_entry(ContentTypes.IMAGE, path.read_bytes()))
    except ClipkeeperError as e:
        _fail(str(e))
    console.print(f"[bold green]Added[/bold green] {entry.id} ({entry.metadata.size} bytes)")


@app.command(name="clear", help="Delete every entry and image blob.")
def clear(yes: bool = typer.Option(False, "--yes", "-y", help="Do not ask for confirmation.")):
    if not yes:
        typer.confirm("Delete the whole clipboard history?", abort=True)
    try:
        report = asyncio.run(_store().clear_history())
    except ClipkeeperError as e:
        _fail(str(e))
    console.print(
        f"[bold green]Cleared[/bold green] {report.removed_entries} entries, "
        f"{len(report.removed_blobs)} blobs removed"
    )
    for warning in report.warnings:
        console.print(f"[yellow]Could not delete {warning.filename}: {escape(warning.message)}[/yellow]")


@app.command(name="replace", help="Apply a 'search:replace,...' spec to text and print it.")
def replace(
    text: str = typer.Argument(..., help="Text to transform."),
    pairs: Optional[str] = typer.Option(
        None, "--pairs", "-p", help="Replacement spec; defaults to CLIPKEEPER_REPLACEMENTS."
    ),
):
    settings = transform_settings()
    spec = pairs or settings.replacements
    if not spec:
        _fail("No replacement spec given")
    try:
        result = replace_text(text, spec, settings.pair_separator, settings.value_separator)
    except ClipkeeperError as e:
        _fail(str(e))
    typer.echo(result)


@app.command(name="colors", help="Extract the dominant colours of an image file.")
def colors(path: Path = typer.Argument(..., exists=True, dir_okay=False, help="Image file.")):
    extractor = ImageExtractor.from_settings(transform_settings(), logger)
    try:
        result = extractor.extract_colors(path.read_bytes())
    except ClipkeeperError as e:
        _fail(str(e))
    table = Table(title=f"{path.name} ({result.width}x{result.height})")
    table.add_column("Colour", no_wrap=True)
    table.add_column("RGB", no_wrap=True)
    table.add_column("Area", justify="right")
    for swatch in result.colors:
        table.add_row(
            f"[on {swatch.hex}]  [/] {swatch.hex}",
            f"{swatch.red}, {swatch.green}, {swatch.blue}",
            f"{swatch.area:.1%}",
        )
    console.print(table)


@app.command(name="capture", help="Run a capture through the history and its transform.")
def capture(
    content_type: str = typer.Argument(..., help=f"One of {', '.join(CONTENT_TYPE_LIST)}."),
    values: List[str] = typer.Argument(..., help="Text, paths, or an image file path."),
    record_derived: bool = typer.Option(
        False, "--record-derived", help="Also record transcripts and replaced text."
    ),
):
    if content_type == ContentTypes.TEXT.value:
        data = " ".join(values)
    elif content_type == ContentTypes.IMAGE.value:
        try:
            data = Path(values[0]).read_bytes()
        except OSError as e:
            _fail(f"Cannot read image {values[0]}: {e}")
    else:
        data = [str(Path(value).expanduser().resolve()) for value in values]

    settings = transform_settings()
    handler = ClipboardContentHandler.from_settings(
        _store(),
        settings,
        logger,
        transcriber=AudioTranscriber(transcription_settings(), settings.output_dir, logger),
        record_derived=record_derived,
    )
    result = asyncio.run(handler.handle(content_type, data))
    if result.entry is not None:
        console.print(f"[bold green]Recorded[/bold green] {result.entry.id}")
    message = f" ({escape(result.message)})" if result.message else ""
    console.print(f"{result.action}: {result.status}{message}")
    if isinstance(result.output, str):
        typer.echo(result.output)
    if result.status == "error":
        raise typer.Exit(code=1)


@app.command(name="info", help="Show where the history lives and how full it is.")
def info():
    settings = history_settings()
    try:
        entries = asyncio.run(_store().get_history())
    except ClipkeeperError as e:
        _fail(str(e))
    console.print(f"[bold cyan]History directory:[/bold cyan] {settings.history_dir}")
    console.print(f"[bold cyan]Index file:[/bold cyan] {settings.index_path}")
    console.print(f"[bold cyan]Entries:[/bold cyan] {len(entries)} / {settings.max_entries}")


if __name__ == "__main__":
    app()
