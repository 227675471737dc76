"""Disk commands.

Lists mounted filesystems with their capacity and shows the contents
of a single disk's mount point.
"""

from pathlib import Path
from typing import Annotated

import typer

from filebyte.cli.display import create_disk_table, print_listing, print_skipped
from filebyte.cli.types import build_filter, get_settings, resolve_size_unit, write_export
from filebyte.disk.report import build_report, find_mount, format_mount
from filebyte.disk.source import list_mount_points
from filebyte.filesystem.errors import PathNotFoundError
from filebyte.filesystem.export import ExportFormat
from filebyte.filesystem.sorting import SortKey, sort_entries
from filebyte.filesystem.traverser import Traverser
from filebyte.utils.formatting import console, print_error, print_warning

app = typer.Typer(
    help="Show disk capacity and contents.",
    invoke_without_command=True,
    no_args_is_help=True,
)


@app.command("list")
def list_disks(
    ctx: typer.Context,
    all_partitions: Annotated[
        bool,
        typer.Option("--all", "-A", help="Include pseudo and virtual filesystems."),
    ] = False,
    size: Annotated[
        str | None,
        typer.Option("--size", "-s", help="Size unit: auto, b, kb, mb, gb or tb."),
    ] = None,
) -> None:
    """List mounted disks with total, used and available space."""
    settings = get_settings(ctx)
    unit = resolve_size_unit(size, settings)

    mounts = list_mount_points(all_partitions=all_partitions)
    if not mounts:
        print_warning("No mounted disks found.")
        return

    console.print(create_disk_table(build_report(mounts, unit)))


@app.command("show")
def show_disk(
    ctx: typer.Context,
    name: Annotated[
        str,
        typer.Argument(help="Device path, device name or mount point."),
    ],
    aggregate: Annotated[
        bool,
        typer.Option("--aggregate", "-a", help="Report recursive sizes for directories."),
    ] = False,
    search: Annotated[
        str | None,
        typer.Option("--search", "-e", help="Only show entries matching this regex."),
    ] = None,
    exclude: Annotated[
        str | None,
        typer.Option("--exclude", "-x", help="Hide entries matching this regex."),
    ] = None,
    match_path: Annotated[
        bool,
        typer.Option("--match-path", help="Match patterns against the full path instead of the name."),
    ] = False,
    sort_by: Annotated[
        SortKey | None,
        typer.Option("--sort-by", "-S", help="Sort by name, size or date.", case_sensitive=False),
    ] = None,
    size: Annotated[
        str | None,
        typer.Option("--size", "-s", help="Size unit: auto, b, kb, mb, gb or tb."),
    ] = None,
    properties: Annotated[
        bool,
        typer.Option("--properties", "-p", help="Show timestamps, permissions and MIME type."),
    ] = False,
    limit: Annotated[
        int | None,
        typer.Option("--limit", "-n", min=1, help="Limit number of entries to display."),
    ] = None,
    export_path: Annotated[
        Path | None,
        typer.Option("--export", "-o", help="Export entries to a .json or .csv file."),
    ] = None,
    export_format: Annotated[
        ExportFormat | None,
        typer.Option("--export-format", help="Export format (inferred from suffix if omitted).", case_sensitive=False),
    ] = None,
    with_metadata: Annotated[
        bool,
        typer.Option("--with-metadata", help="Wrap JSON export with root, time and filter metadata."),
    ] = False,
) -> None:
    """Show a disk's capacity and the entries at its mount point.

    Examples:
        filebyte disk show /                 # By mount point
        filebyte disk show nvme0n1p2 -S size # By device name, largest first
    """
    settings = get_settings(ctx)
    unit = resolve_size_unit(size, settings)
    entry_filter = build_filter(search, exclude, match_path)

    mounts = list_mount_points(all_partitions=True)
    try:
        mount = find_mount(mounts, name)
    except PathNotFoundError as e:
        print_error(str(e))
        raise typer.Exit(code=1) from e

    console.print(create_disk_table([format_mount(mount, unit)]))

    traverser = Traverser(entry_filter=entry_filter, aggregate_sizes=aggregate)
    try:
        entries = sort_entries(traverser.walk(mount.mount_point), sort_by or settings.sort_by)
    except PathNotFoundError as e:
        print_error(str(e))
        raise typer.Exit(code=1) from e

    print_listing(entries, unit, properties=properties, limit=limit, title=mount.mount_point)
    print_skipped(traverser.skipped)

    if export_path is not None:
        write_export(
            entries,
            export_path,
            root=mount.mount_point,
            recursive=False,
            entry_filter=entry_filter,
            export_format=export_format,
            with_metadata=with_metadata,
        )
