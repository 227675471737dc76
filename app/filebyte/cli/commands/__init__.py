"""CLI commands for filebyte.

This package contains all subcommand implementations.
"""

from filebyte.cli.commands import config, disk, dupes, info, ls, stats, tree

__all__ = ["config", "disk", "dupes", "info", "ls", "stats", "tree"]
