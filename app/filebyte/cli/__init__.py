"""CLI package for filebyte.

This package contains the Typer application and all subcommands.
"""

from filebyte.cli.main import app

__all__ = ["app"]
