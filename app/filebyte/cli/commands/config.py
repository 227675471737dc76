"""Settings commands.

Shows, creates and edits the user settings file that provides default
option values for the other commands.
"""

from typing import Annotated

import typer
from pydantic import ValidationError
from rich.markup import escape
from rich.table import Table

from filebyte.core.paths import get_settings_path
from filebyte.core.settings import (
    FilebyteSettings,
    SettingsError,
    load_settings,
    save_settings,
)
from filebyte.utils.formatting import console, print_error, print_info, print_success, print_warning

app = typer.Typer(
    help="Show and edit filebyte settings.",
    invoke_without_command=True,
    no_args_is_help=True,
)


def _load_or_exit() -> FilebyteSettings:
    try:
        return load_settings()
    except SettingsError as e:
        print_error(str(e))
        raise typer.Exit(code=1) from e


@app.command()
def show() -> None:
    """Show the effective settings and where they are stored."""
    settings = _load_or_exit()
    path = get_settings_path()

    table = Table(
        title="Settings",
        show_header=True,
        header_style="bold_header",
        border_style="border",
    )
    table.add_column("Key", style="header")
    table.add_column("Value")
    table.add_column("Description", style="muted")
    for key, value in settings.model_dump(mode="json").items():
        field = FilebyteSettings.model_fields[key]
        table.add_row(key, str(value), field.description or "")
    console.print(table)

    if path.exists():
        console.print(f"[dim]Loaded from {escape(str(path))}[/dim]")
    else:
        console.print(f"[dim]No settings file at {escape(str(path))}; showing defaults[/dim]")


@app.command()
def init(
    force: Annotated[
        bool,
        typer.Option("--force", "-f", help="Overwrite an existing settings file."),
    ] = False,
) -> None:
    """Write a settings file with default values."""
    path = get_settings_path()
    if path.exists() and not force:
        print_warning(f"Settings file already exists: {path}")
        print_info("Use --force to overwrite it.")
        raise typer.Exit(code=1)

    try:
        written = save_settings(FilebyteSettings(), path)
    except SettingsError as e:
        print_error(str(e))
        raise typer.Exit(code=1) from e
    print_success(f"Settings written to {written}")


@app.command("set")
def set_value(
    key: Annotated[str, typer.Argument(help="Setting name, e.g. size_unit.")],
    value: Annotated[str, typer.Argument(help="New value.")],
) -> None:
    """Change one setting and save the file."""
    if key not in FilebyteSettings.model_fields:
        valid = ", ".join(FilebyteSettings.model_fields)
        print_error(f"Unknown setting '{key}' (valid: {valid})")
        raise typer.Exit(code=1)

    settings = _load_or_exit()
    data = settings.model_dump(mode="json")
    data[key] = value
    try:
        updated = FilebyteSettings.model_validate(data)
    except ValidationError as e:
        print_error(f"Invalid value for {key}: {e.errors()[0]['msg']}")
        raise typer.Exit(code=1) from e

    try:
        save_settings(updated)
    except SettingsError as e:
        print_error(str(e))
        raise typer.Exit(code=1) from e
    print_success(f"{key} = {updated.model_dump(mode='json')[key]}")
