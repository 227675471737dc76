"""Stats command implementation.

Summarizes a directory: file types, size and age distributions, the
largest and smallest files, and owner permission counts.
"""

from pathlib import Path
from typing import Annotated

import typer

from filebyte.cli.display import (
    create_distribution_table,
    create_summary_table,
    create_type_table,
    print_skipped,
)
from filebyte.cli.types import build_filter, get_settings, resolve_size_unit
from filebyte.filesystem.errors import PathNotFoundError
from filebyte.filesystem.stats import analyze, file_type_stats
from filebyte.filesystem.traverser import Traverser
from filebyte.utils.formatting import console, print_error


def show_stats(
    ctx: typer.Context,
    path: Annotated[
        Path,
        typer.Argument(help="Directory to analyze."),
    ] = Path("."),
    recursive: Annotated[
        bool,
        typer.Option("--recursive/--no-recursive", "-r/-R", help="Include subdirectories."),
    ] = True,
    top: Annotated[
        int,
        typer.Option("--top", "-t", min=1, help="Number of file types to show."),
    ] = 10,
    search: Annotated[
        str | None,
        typer.Option("--search", "-e", help="Only count entries matching this regex."),
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
) -> None:
    """Show statistics for a directory.

    Examples:
        filebyte stats                       # Current directory, recursively
        filebyte stats ~/src -R              # Immediate children only
        filebyte stats . -t 5 -x node_modules
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
    try:
        entries = traverser.collect(path)
    except PathNotFoundError as e:
        print_error(str(e))
        raise typer.Exit(code=1) from e

    if not entries:
        console.print("[muted]No entries found.[/]")
        print_skipped(traverser.skipped)
        return

    analysis = analyze(entries)
    type_counts, total_files = file_type_stats(entries)

    console.print(create_summary_table(analysis, unit))
    if type_counts:
        console.print(create_type_table(type_counts[:top], total_files))
    console.print(create_distribution_table("Size Distribution", analysis.size_distribution))
    console.print(create_distribution_table("Age Distribution", analysis.age_distribution))
    print_skipped(traverser.skipped)
