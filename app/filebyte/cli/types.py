"""Shared types and utilities for CLI commands.

This module provides option parsing and export helpers used across
multiple CLI command modules to avoid code duplication.
"""

from pathlib import Path

import typer

from filebyte.core.settings import FilebyteSettings
from filebyte.filesystem.errors import InvalidFilterError, WriteError
from filebyte.filesystem.export import ExportDocument, ExportFormat, export_document
from filebyte.filesystem.filters import EntryFilter
from filebyte.filesystem.models import Entry
from filebyte.utils.formatting import print_error, print_info
from filebyte.utils.units import SizeUnit


def get_settings(ctx: typer.Context) -> FilebyteSettings:
    """Get the settings loaded by the main callback.

    Args:
        ctx: Context of the running command.

    Returns:
        Settings stored on the root context, or defaults when absent.
    """
    obj = ctx.find_root().obj
    if isinstance(obj, dict):
        settings = obj.get("settings")
        if isinstance(settings, FilebyteSettings):
            return settings
    return FilebyteSettings()


def resolve_size_unit(value: str | None, settings: FilebyteSettings) -> SizeUnit:
    """Parse the --size option, falling back to the configured unit.

    Raises:
        typer.BadParameter: If the unit name is unknown.
    """
    if value is None:
        return settings.size_unit
    try:
        return SizeUnit.parse(value)
    except ValueError as e:
        raise typer.BadParameter(str(e), param_hint="--size") from e


def build_filter(search: str | None, exclude: str | None, match_path: bool) -> EntryFilter:
    """Compile filter options before any traversal begins.

    Exits with code 1 when a pattern is malformed.
    """
    try:
        return EntryFilter.compile(search, exclude, match_path=match_path)
    except InvalidFilterError as e:
        print_error(str(e))
        raise typer.Exit(code=1) from e


def write_export(
    entries: list[Entry],
    destination: Path,
    *,
    root: str,
    recursive: bool,
    entry_filter: EntryFilter,
    export_format: ExportFormat | None = None,
    with_metadata: bool = False,
) -> None:
    """Export entries in the order given.

    Output already printed to the terminal is left untouched when the
    export fails; the command then exits with code 1.
    """
    document = ExportDocument.create(
        entries,
        root,
        recursive=recursive,
        entry_filter=entry_filter,
    )
    try:
        written = export_document(
            document,
            destination,
            export_format,
            with_metadata=with_metadata,
        )
    except WriteError as e:
        print_error(str(e))
        raise typer.Exit(code=1) from e
    print_info(f"Exported {len(entries)} entries to {written}")
