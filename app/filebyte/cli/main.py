"""Main CLI application entry point.

Defines the Typer application and global options.
"""

from typing import Annotated

import typer

from filebyte import __version__
from filebyte.cli.commands import config, disk, dupes, info, ls, stats, tree
from filebyte.core.settings import FilebyteSettings, SettingsError, load_settings
from filebyte.utils.formatting import configure_logging, print_warning, set_color

# Create main Typer app
app = typer.Typer(
    name="filebyte",
    help="Inspect files, directories and disks.",
    no_args_is_help=True,
    rich_markup_mode="rich",
    context_settings={"help_option_names": ["-h", "--help"]},
)


def version_callback(value: bool) -> None:
    """Print version and exit."""
    if value:
        typer.echo(f"filebyte version {__version__}")
        raise typer.Exit()


@app.callback()
def main(
    ctx: typer.Context,
    version: Annotated[
        bool | None,
        typer.Option(
            "--version",
            "-V",
            callback=version_callback,
            is_eager=True,
            help="Show version and exit.",
        ),
    ] = None,
    verbose: Annotated[
        bool,
        typer.Option(
            "--verbose",
            "-v",
            help="Enable verbose output.",
        ),
    ] = False,
    quiet: Annotated[
        bool,
        typer.Option(
            "--quiet",
            "-q",
            help="Only log errors.",
        ),
    ] = False,
    no_color: Annotated[
        bool,
        typer.Option(
            "--no-color",
            help="Disable colored output.",
        ),
    ] = False,
) -> None:
    """filebyte - Inspect files, directories and disks.

    List and filter directory contents, render trees, find duplicate
    files, summarize directories and report disk usage.
    """
    configure_logging(verbose=verbose, quiet=quiet)

    try:
        settings = load_settings()
    except SettingsError as e:
        print_warning(f"{e}; using default settings")
        settings = FilebyteSettings()

    set_color(settings.color and not no_color)

    # Store options in context for subcommands
    ctx.ensure_object(dict)
    ctx.obj["verbose"] = verbose
    ctx.obj["quiet"] = quiet
    ctx.obj["settings"] = settings


# Register commands
app.command(name="ls")(ls.list_entries)
app.command(name="tree")(tree.show_tree)
app.command(name="dupes")(dupes.find_duplicate_files)
app.command(name="info")(info.show_info)
app.command(name="stats")(stats.show_stats)
app.add_typer(disk.app, name="disk")
app.add_typer(config.app, name="config")


if __name__ == "__main__":
    app()
