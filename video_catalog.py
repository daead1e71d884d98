#!/usr/bin/env python3
"""
Video Catalog - CLI Tool
Download videos with yt-dlp + ffmpeg and keep a catalog of what is on disk.
"""

import sys

import click
from rich.console import Console
from rich.markup import escape
from rich.panel import Panel
from rich.table import Table

from core.errors import CatalogError, FetchFailed
from core.logger import setup_logging
from core.managers import CatalogController, EventType
from core.models import AppSettings
from core.runtime import open_path

console = Console()


def fail(message: str) -> None:
    """Print an error and exit non-zero."""
    console.print(f"[red]✗ {escape(message)}[/red]")
    sys.exit(1)


def make_controller(settings: AppSettings) -> CatalogController:
    """Create a controller whose store diagnostics are echoed to the console."""
    controller = CatalogController(settings)
    controller.events.register_handler(
        EventType.PARSE_SKIPPED,
        lambda event: console.print(f"[yellow]⚠ Skipped {escape(str(event.data))}[/yellow]"),
    )
    controller.events.register_handler(
        EventType.PERSIST_FAILED,
        lambda event: console.print(f"[yellow]⚠ {escape(str(event.data))}[/yellow]"),
    )
    return controller


def print_catalog(records) -> None:
    """Render the catalog as a table with 1-based indices."""
    if not records:
        console.print("[dim]Catalog is empty[/dim]")
        return

    table = Table(title=f"{len(records)} video(s)")
    table.add_column("#", justify="right", style="cyan")
    table.add_column("Title")
    table.add_column("Uploader")
    table.add_column("Channel")
    table.add_column("Views", justify="right")
    table.add_column("File")

    for i, record in enumerate(records, 1):
        table.add_row(
            str(i),
            escape(record.get_display_title()),
            escape(record.uploader),
            escape(record.channel),
            f"{record.views:,}",
            "[green]✓[/green]" if record.media_exists() else "[red]missing[/red]",
        )
    console.print(table)


@click.group()
@click.option('--save-dir', '-d', default=None, help='Save directory (default: settings / $VIDEO_CATALOG_DIR)')
@click.option('--settings', 'settings_file', default=None, help='Settings JSON file (default: settings.json)')
@click.option('--log-file', default=None, help='Log file path (default: video_catalog.log)')
@click.pass_context
def cli(ctx, save_dir, settings_file, log_file):
    """
    Download videos and manage the local catalog.

    Examples:

        video-catalog download https://www.youtube.com/watch?v=dQw4w9WgXcQ

        video-catalog list --rescan

        video-catalog remove 2
    """
    setup_logging(log_file, console=False)
    settings = AppSettings.load(settings_file)
    if save_dir:
        settings.save_folder = save_dir
    ctx.obj = settings


@cli.command()
@click.argument('url')
@click.option('--dry-run', is_flag=True, help='Show command without executing')
@click.pass_obj
def download(settings, url, dry_run):
    """Download URL into the save directory and add it to the catalog."""
    controller = make_controller(settings)

    if dry_run:
        try:
            builder = controller.fetcher.build_command(url, controller.store.save_dir)
        except CatalogError as e:
            fail(str(e))
        console.print("[cyan]Command that would be executed:[/cyan]")
        console.print(builder.get_command_string(), markup=False, soft_wrap=True)
        return

    console.print(f"[cyan]Downloading:[/cyan] {escape(url.strip())}")
    console.print(f"[dim]Saving to {escape(str(controller.store.save_dir))}[/dim]\n")

    failed = []
    controller.events.register_handler(EventType.PERSIST_FAILED, failed.append)
    try:
        record = controller.request_download(url, schedule_reload=False)
    except FetchFailed as e:
        for line in e.tail():
            console.print(line, style="dim", markup=False)
        controller.events.process_pending()
        fail(f"Download failed: {e}")
    except CatalogError as e:
        controller.events.process_pending()
        fail(str(e))

    # The process has exited, so reconcile right away instead of on a timer
    controller.reload()
    controller.events.process_pending()

    console.print(Panel(
        f"[bold]{escape(record.title)}[/bold]\n{escape(record.get_byline())}\nViews: {record.views:,}\n[dim]{escape(record.file_path)}[/dim]",
        title="✓ Downloaded",
        style="green",
    ))
    if failed:
        sys.exit(1)


@cli.command(name="list")
@click.option('--rescan', is_flag=True, help='Rebuild the catalog from the metadata files first')
@click.pass_obj
def list_catalog(settings, rescan):
    """Show the catalog."""
    controller = make_controller(settings)
    try:
        records = controller.reload() if rescan else controller.load_cached()
    except CatalogError as e:
        fail(str(e))
    controller.events.process_pending()
    print_catalog(records)


@cli.command()
@click.pass_obj
def reload(settings):
    """Rebuild the catalog from the metadata files in the save directory."""
    controller = make_controller(settings)
    records = controller.reload()
    failed = []
    controller.events.register_handler(EventType.PERSIST_FAILED, failed.append)
    controller.events.process_pending()
    console.print(f"[green]✓ Catalog rebuilt:[/green] {len(records)} video(s)")
    if failed:
        sys.exit(1)


@cli.command()
@click.argument('indices', nargs=-1, type=int, required=True)
@click.pass_obj
def remove(settings, indices):
    """Remove entries (1-based, as shown by list). Files stay on disk."""
    controller = make_controller(settings)
    try:
        controller.load_cached()
        removed = controller.remove(i - 1 for i in indices)
    except IndexError:
        fail(f"Index out of range (catalog has {len(controller.records)} entries)")
    except CatalogError as e:
        fail(str(e))

    failed = []
    controller.events.register_handler(EventType.PERSIST_FAILED, failed.append)
    controller.events.process_pending()
    for record in removed:
        console.print(f"[green]✓ Removed:[/green] {escape(record.title)}")
    if failed:
        sys.exit(1)


@cli.command(name="open")
@click.argument('index', type=int)
@click.pass_obj
def open_media(settings, index):
    """Open the media file of entry INDEX (1-based)."""
    controller = make_controller(settings)
    try:
        records = controller.load_cached()
    except CatalogError as e:
        fail(str(e))

    if not 1 <= index <= len(records):
        fail(f"Index out of range (catalog has {len(records)} entries)")

    record = records[index - 1]
    if not record.media_exists():
        fail(f"Media file not found: {record.file_path}")

    try:
        open_path(record.file_path)
    except OSError as e:
        fail(f"Could not open {record.file_path}: {e}")
    console.print(f"[cyan]Opening[/cyan] {escape(record.file_path)}")


def main():
    cli()


if __name__ == '__main__':
    main()
