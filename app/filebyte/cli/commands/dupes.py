"""Duplicates command implementation.

Finds files with identical content by bucketing on size and hashing
only the files that share a size.
"""

from pathlib import Path
from typing import Annotated

import typer

from filebyte.cli.display import create_duplicates_table, print_skipped
from filebyte.cli.types import build_filter, get_settings, resolve_size_unit, write_export
from filebyte.filesystem.duplicates import DuplicateFinder
from filebyte.filesystem.errors import PathNotFoundError
from filebyte.filesystem.export import ExportFormat
from filebyte.filesystem.traverser import Traverser
from filebyte.utils.formatting import console, print_error, print_success
from filebyte.utils.units import format_size


def find_duplicate_files(
    ctx: typer.Context,
    path: Annotated[
        Path,
        typer.Argument(help="Directory to search for duplicates."),
    ] = Path("."),
    recursive: Annotated[
        bool,
        typer.Option("--recursive/--no-recursive", "-r/-R", help="Search subdirectories."),
    ] = True,
    min_size: Annotated[
        int,
        typer.Option("--min-size", min=0, help="Ignore files smaller than this many bytes."),
    ] = 0,
    workers: Annotated[
        int | None,
        typer.Option("--workers", "-w", min=1, max=64, help="Threads used for hashing."),
    ] = None,
    search: Annotated[
        str | None,
        typer.Option("--search", "-e", help="Only consider entries matching this regex."),
    ] = None,
    exclude: Annotated[
        str | None,
        typer.Option("--exclude", "-x", help="Ignore entries matching this regex (not descended)."),
    ] = None,
    match_path: Annotated[
        bool,
        typer.Option("--match-path", help="Match patterns against the full path instead of the name."),
    ] = False,
    size: Annotated[
        str | None,
        typer.Option("--size", "-s", help="Size unit: auto, b, kb, mb, gb or tb."),
    ] = None,
    follow_links: Annotated[
        bool | None,
        typer.Option("--follow-links/--no-follow-links", help="Descend through symlinked directories."),
    ] = None,
    export_path: Annotated[
        Path | None,
        typer.Option("--export", "-o", help="Export duplicate files to a .json or .csv file."),
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
    """Find duplicate files by content.

    Files are grouped by exact size first; only files sharing a size
    are hashed (SHA-256). Unreadable files are listed as skipped.

    Examples:
        filebyte dupes ~/Pictures            # Search recursively
        filebyte dupes . --min-size 1048576  # Only files of 1 MB or more
        filebyte dupes . -w 4                # Hash with four threads
    """
    settings = get_settings(ctx)
    unit = resolve_size_unit(size, settings)
    entry_filter = build_filter(search, exclude, match_path)

    traverser = Traverser(
        recursive=recursive,
        entry_filter=entry_filter,
        follow_symlinks=settings.follow_symlinks if follow_links is None else follow_links,
        max_depth=settings.max_tree_depth if recursive else None,
    )
    finder = DuplicateFinder(
        chunk_size=settings.hash_chunk_size,
        workers=workers or settings.hash_workers,
        min_size=min_size,
    )
    try:
        groups = finder.find(traverser.walk(path))
    except PathNotFoundError as e:
        print_error(str(e))
        raise typer.Exit(code=1) from e

    if groups:
        console.print(create_duplicates_table(groups, unit))
        reclaimable = sum(g.reclaimable_bytes for g in groups)
        files = sum(g.count for g in groups)
        console.print(
            f"\n[dim]{len(groups)} duplicate groups ({files} files), "
            f"{format_size(reclaimable, unit)} reclaimable[/dim]"
        )
    else:
        print_success("No duplicate files found.")
    console.print(f"[dim]Hashed {finder.hashed_count} candidate files[/dim]")

    print_skipped([*traverser.skipped, *finder.skipped])

    if export_path is not None:
        entries = [entry for group in groups for entry in group.entries]
        write_export(
            entries,
            export_path,
            root=str(path),
            recursive=recursive,
            entry_filter=entry_filter,
            export_format=export_format,
            with_metadata=with_metadata,
        )
