"""List command implementation.

Lists the entries of a directory, optionally recursively, with
filtering, sorting, size aggregation and export.
"""

import logging
from pathlib import Path
from typing import Annotated

import typer

from filebyte.cli.display import print_listing, print_skipped
from filebyte.cli.types import build_filter, get_settings, resolve_size_unit, write_export
from filebyte.filesystem.errors import PathNotFoundError
from filebyte.filesystem.export import ExportFormat
from filebyte.filesystem.sorting import SortKey, sort_entries
from filebyte.filesystem.traverser import Traverser
from filebyte.utils.formatting import print_error

logger = logging.getLogger(__name__)


def list_entries(
    ctx: typer.Context,
    path: Annotated[
        Path,
        typer.Argument(help="Directory or file to list."),
    ] = Path("."),
    recursive: Annotated[
        bool,
        typer.Option("--recursive", "-r", help="Descend into subdirectories."),
    ] = False,
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
        typer.Option("--exclude", "-x", help="Hide entries matching this regex (not descended)."),
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
    follow_links: Annotated[
        bool | None,
        typer.Option("--follow-links/--no-follow-links", help="Descend through symlinked directories."),
    ] = None,
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
    """List directory entries.

    Directories are listed before files. Directory sizes are 0 unless
    --aggregate is given.

    Examples:
        filebyte ls                          # List the current directory
        filebyte ls ~/src -r -e '\\.py$'      # Python files, recursively
        filebyte ls . -S size -a             # Largest first, with directory totals
        filebyte ls . -p                     # Show extended properties
        filebyte ls . -o listing.csv         # Export to CSV
    """
    settings = get_settings(ctx)
    unit = resolve_size_unit(size, settings)
    entry_filter = build_filter(search, exclude, match_path)
    sort_key = sort_by or settings.sort_by

    traverser = Traverser(
        recursive=recursive,
        entry_filter=entry_filter,
        aggregate_sizes=aggregate,
        follow_symlinks=settings.follow_symlinks if follow_links is None else follow_links,
        max_depth=settings.max_tree_depth if recursive else None,
    )
    try:
        entries = sort_entries(traverser.walk(path), sort_key)
    except PathNotFoundError as e:
        print_error(str(e))
        raise typer.Exit(code=1) from e

    logger.debug("Listed %d entries under %s", len(entries), path)
    print_listing(entries, unit, properties=properties, limit=limit, title=str(path))
    print_skipped(traverser.skipped)

    if export_path is not None:
        write_export(
            entries,
            export_path,
            root=str(path),
            recursive=recursive,
            entry_filter=entry_filter,
            export_format=export_format,
            with_metadata=with_metadata,
        )
