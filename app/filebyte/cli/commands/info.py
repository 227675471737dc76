"""Info command implementation.

Shows the details of a single file or directory.
"""

import os
from pathlib import Path
from typing import Annotated

import typer

from filebyte.cli.display import create_info_table, print_skipped
from filebyte.cli.types import get_settings, resolve_size_unit
from filebyte.filesystem.errors import AccessError, PathNotFoundError
from filebyte.filesystem.probe import probe
from filebyte.filesystem.sizing import DirectorySizer
from filebyte.utils.formatting import console, print_error


def show_info(
    ctx: typer.Context,
    path: Annotated[
        Path,
        typer.Argument(help="File or directory to inspect."),
    ],
    size: Annotated[
        str | None,
        typer.Option("--size", "-s", help="Size unit: auto, b, kb, mb, gb or tb."),
    ] = None,
    shallow: Annotated[
        bool,
        typer.Option("--shallow", help="Do not compute the recursive size of a directory."),
    ] = False,
) -> None:
    """Show details of a file or directory.

    Directories report the total size of all files beneath them unless
    --shallow is given.

    Examples:
        filebyte info notes.md
        filebyte info ~/Downloads -s mb
    """
    settings = get_settings(ctx)
    unit = resolve_size_unit(size, settings)

    try:
        entry = probe(path)
    except (PathNotFoundError, AccessError) as e:
        print_error(str(e))
        raise typer.Exit(code=1) from e

    sizer = DirectorySizer()
    if entry.is_directory and not shallow:
        total, partial = sizer.size_of(entry.path)
        entry = entry.with_size(total, partial)

    console.print(create_info_table(entry, os.path.abspath(entry.path), unit))
    print_skipped(sizer.skipped)
