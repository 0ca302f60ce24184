"""
mkvsubs.cli - Typer CLI entry point.

Pick an MKV file, choose subtitle tracks, and extract them.
"""

from __future__ import annotations

from pathlib import Path

import typer
from rich.console import Console
from rich.markup import escape
from rich.table import Table

from mkvsubs import __version__
from mkvsubs.config import ToolConfig, load_config
from mkvsubs.discovery import gather_mkv_files
from mkvsubs.exceptions import (
    ConfigError,
    DependencyError,
    ParseError,
    ProbeError,
    ValidationError,
)
from mkvsubs.extract import ExtractionOutcome, RunSummary, SubtitleExtractor
from mkvsubs.formats import Unsupported, resolve_format
from mkvsubs.logging import configure_logging
from mkvsubs.probe import probe_subtitle_tracks
from mkvsubs.selection import RichSelectionGateway, SelectionGateway
from mkvsubs.tracks import SubtitleTrack
from mkvsubs.utils import format_size
from mkvsubs.validation import check_tools, validate_source_file

app = typer.Typer(
    name="mkvsubs",
    help="Extract subtitle tracks from MKV files.",
    add_completion=False,
)
console = Console()


def version_callback(value: bool) -> None:
    if value:
        console.print(f"mkvsubs {__version__}")
        raise typer.Exit()


def pick_source_file(directory: Path, gateway: SelectionGateway) -> Path | None:
    """Let the user pick an MKV file from a directory.

    Raises:
        ValidationError: If `directory` is not a directory or holds no MKV files
    """
    if not directory.is_dir():
        raise ValidationError(f"Not a directory: {directory}")
    mkv_files = gather_mkv_files(directory)
    if not mkv_files:
        raise ValidationError(f"No MKV files found in {directory}")
    choice = gateway.choose_one(
        [f.name for f in mkv_files],
        header="Choose an MKV file to extract subtitles from",
    )
    if choice is None:
        return None
    return mkv_files[choice]


def track_table(tracks: list[SubtitleTrack], title: str) -> Table:
    table = Table(title=title)
    table.add_column("Stream", style="cyan", justify="right")
    table.add_column("Language", style="green")
    table.add_column("Codec")
    table.add_column("Title")
    table.add_column("Output")
    for track in tracks:
        fmt = resolve_format(track.codec_id)
        flags = [name for name, on in (("default", track.default), ("forced", track.forced)) if on]
        title_cell = escape(track.title or "")
        if flags:
            title_cell = f"{title_cell} [dim]({', '.join(flags)})[/dim]".strip()
        if isinstance(fmt, Unsupported):
            output = "[yellow]unsupported[/yellow]"
        elif fmt.companion_extension:
            output = f".{fmt.extension} + .{fmt.companion_extension}"
        else:
            output = f".{fmt.extension}"
        table.add_row(
            str(track.stream_index),
            track.language or "-",
            track.codec_id,
            title_cell,
            output,
        )
    return table


def select_tracks(
    tracks: list[SubtitleTrack],
    gateway: SelectionGateway,
    requested: list[int] | None,
) -> list[SubtitleTrack]:
    """Choose the tracks to extract.

    With `requested` stream indices no prompt is shown. Otherwise only tracks
    with a supported codec are offered.

    Raises:
        ValidationError: If a requested index is not a subtitle stream
    """
    if requested:
        by_index = {t.stream_index: t for t in tracks}
        missing = [i for i in requested if i not in by_index]
        if missing:
            available = ", ".join(str(i) for i in by_index) or "none"
            raise ValidationError(
                f"No subtitle stream with index {', '.join(map(str, missing))} "
                f"(available: {available})"
            )
        return [by_index[i] for i in dict.fromkeys(requested)]

    candidates = []
    for track in tracks:
        if isinstance(resolve_format(track.codec_id), Unsupported):
            console.print(
                f"[yellow]Warning: stream {track.stream_index} uses unsupported codec "
                f"'{track.codec_id}' and can't be extracted[/yellow]"
            )
        else:
            candidates.append(track)

    chosen = gateway.choose_many(
        [t.label for t in candidates],
        header="Select subtitle tracks to extract",
    )
    return [candidates[i] for i in sorted(chosen)]


def status_cell(outcome: ExtractionOutcome) -> str:
    if outcome.status == "succeeded":
        return "[green]✓ Extracted[/green]"
    if outcome.status == "skipped":
        return "[dim]Skipped (file exists)[/dim]"
    if outcome.status == "unsupported":
        return f"[yellow]Skipped ({outcome.reason})[/yellow]"
    return f"[red]Error: {escape(outcome.reason or '')}[/red]"


def print_summary(summary: RunSummary) -> None:
    table = Table(title=f"Subtitle Extraction: {summary.source_file.name}")
    table.add_column("Stream", style="cyan", justify="right")
    table.add_column("Output", style="green")
    table.add_column("Size")
    table.add_column("Status", style="yellow")
    for outcome in summary.outcomes:
        output = outcome.output_path.name if outcome.output_path else "-"
        if outcome.companion_path:
            output = f"{output} + {outcome.companion_path.name}"
        size = format_size(outcome.output_path) if outcome.succeeded else "-"
        table.add_row(str(outcome.track.stream_index), output, size, status_cell(outcome))
    console.print(table)

    console.print(
        f"\n[green]✓[/green] Extracted {summary.count('succeeded')}, "
        f"skipped {summary.count('skipped') + summary.count('unsupported')}, "
        f"failed {summary.count('failed')}"
    )


def needs_mkvextract(tracks: list[SubtitleTrack]) -> bool:
    for track in tracks:
        fmt = resolve_format(track.codec_id)
        if not isinstance(fmt, Unsupported) and fmt.tool == "mkvextract":
            return True
    return False


def require_tools(config: ToolConfig, require_mkvextract: bool = False) -> None:
    try:
        check_tools(config, require_mkvextract=require_mkvextract)
    except DependencyError as e:
        console.print(f"[red]Error: {escape(str(e))}[/red]")
        if e.install_hint:
            console.print(f"[dim]{e.install_hint}[/dim]")
        raise typer.Exit(1)


def load_tool_config(output_dir: Path | None, on_existing: str) -> ToolConfig:
    try:
        return load_config(output_dir=output_dir, on_existing=on_existing)
    except ConfigError as e:
        console.print(f"[red]Error: Invalid configuration: {escape(str(e))}[/red]")
        raise typer.Exit(1)


@app.command()
def main(
    file: Path | None = typer.Option(
        None, "--file", "-f", help="MKV file to extract from (skips file selection)"
    ),
    directory: Path = typer.Option(
        Path("."), "--dir", "-d", help="Directory to pick an MKV file from"
    ),
    output_dir: Path | None = typer.Option(
        None, "--output-dir", "-o", help="Write subtitles here instead of beside the source"
    ),
    tracks: list[int] | None = typer.Option(
        None, "--track", "-t", help="Stream index to extract (repeatable, skips track selection)"
    ),
    on_existing: str = typer.Option(
        "ask", "--on-existing", help="When an output file exists: ask, overwrite, or skip"
    ),
    list_only: bool = typer.Option(False, "--list", "-l", help="List subtitle tracks and exit"),
    verbose: bool = typer.Option(
        False, "--verbose", "-v", "--debug", help="Enable debug logging"
    ),
    version: bool = typer.Option(
        False,
        "--version",
        help="Show version and exit",
        callback=version_callback,
        is_eager=True,
    ),
) -> None:
    """Extract subtitle tracks from an MKV file."""
    configure_logging(verbose)
    config = load_tool_config(output_dir, on_existing)

    require_tools(config)

    gateway = RichSelectionGateway(console)

    try:
        source = file if file is not None else pick_source_file(directory, gateway)
        if source is None:
            console.print("[yellow]No file selected.[/yellow]")
            raise typer.Exit(0)
        validate_source_file(source)
    except ValidationError as e:
        console.print(f"[red]Error: {escape(str(e))}[/red]")
        raise typer.Exit(1)

    try:
        found = probe_subtitle_tracks(source, config)
    except ProbeError as e:
        console.print(f"[red]Error: {escape(str(e))}[/red]")
        raise typer.Exit(1)
    except ParseError as e:
        console.print(f"[red]Error: {escape(f'{source}: {e}')}[/red]")
        raise typer.Exit(1)

    if not found:
        console.print(f"[yellow]No subtitle tracks found in {source}[/yellow]")
        raise typer.Exit(0)

    if list_only:
        console.print(track_table(found, title=f"Subtitle tracks in {source.name}"))
        raise typer.Exit(0)

    try:
        selected = select_tracks(found, gateway, tracks)
    except ValidationError as e:
        console.print(f"[red]Error: {escape(str(e))}[/red]")
        raise typer.Exit(1)

    if not selected:
        console.print("[yellow]No tracks selected.[/yellow]")
        raise typer.Exit(0)

    if needs_mkvextract(selected):
        require_tools(config, require_mkvextract=True)

    extractor = SubtitleExtractor(config, gateway)
    summary = extractor.extract_tracks(source, selected)
    print_summary(summary)

    if summary.exit_code:
        raise typer.Exit(summary.exit_code)
