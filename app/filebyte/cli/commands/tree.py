"""Tree command implementation.

Renders a directory as a connector-drawn tree, directories first.
"""

from pathlib import Path
from typing import Annotated

import typer

from filebyte.cli.display import print_skipped, tree_label
from filebyte.cli.types import build_filter, get_settings, resolve_size_unit, write_export
from filebyte.filesystem.errors import AccessError, PathNotFoundError
from filebyte.filesystem.export import ExportFormat
from filebyte.filesystem.tree import build_tree, render_tree
from filebyte.utils.formatting import console, print_error


def show_tree(
    ctx: typer.Context,
    path: Annotated[
        Path,
        typer.Argument(help="Directory to render."),
    ] = Path("."),
    max_depth: Annotated[
        int | None,
        typer.Option("--max-depth", "-d", min=1, max=4096, help="Deepest level to render."),
    ] = None,
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
    show_size: Annotated[
        bool,
        typer.Option("--show-size", help="Show sizes next to names."),
    ] = False,
    aggregate: Annotated[
        bool,
        typer.Option("--aggregate", "-a", help="Show recursive sizes for directories (implies --show-size)."),
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
        typer.Option("--export", "-o", help="Export tree entries to a .json or .csv file."),
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
    """Display a directory tree.

    Directories deeper than --max-depth are shown with a "…" marker.
    Symlinks back to an ancestor are marked [cycle] and not followed.

    Examples:
        filebyte tree                        # Tree of the current directory
        filebyte tree ~/src -d 2             # Two levels deep
        filebyte tree . -x '^\\.git$'         # Skip .git directories
        filebyte tree . -a                   # With directory totals
    """
    settings = get_settings(ctx)
    unit = resolve_size_unit(size, settings)
    entry_filter = build_filter(search, exclude, match_path)

    try:
        root, skipped = build_tree(
            path,
            max_depth=max_depth or settings.max_tree_depth,
            entry_filter=entry_filter,
            follow_symlinks=settings.follow_symlinks if follow_links is None else follow_links,
            aggregate_sizes=aggregate,
        )
    except (PathNotFoundError, AccessError) as e:
        print_error(str(e))
        raise typer.Exit(code=1) from e

    label = tree_label(unit, show_size=show_size or aggregate)
    console.print(render_tree(root, label=label), highlight=False)
    print_skipped(skipped)

    if export_path is not None:
        # Pre-order, matching the rendered line order
        entries = [node.entry for node in root.iter_nodes()[1:]]
        write_export(
            entries,
            export_path,
            root=str(path),
            recursive=True,
            entry_filter=entry_filter,
            export_format=export_format,
            with_metadata=with_metadata,
        )
