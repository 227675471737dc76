"""Shared Rich display functions for entries and analysis results.

Provides reusable table builders and printers for listings, skipped
entries, duplicate groups, statistics, disk capacity and single-path
details across CLI commands.
"""

from collections.abc import Callable, Sequence
from datetime import datetime

from rich.markup import escape
from rich.table import Table

from filebyte.disk.report import DiskRow
from filebyte.filesystem.duplicates import DuplicateGroup
from filebyte.filesystem.models import Entry, EntryKind, SkippedEntry
from filebyte.filesystem.stats import Analysis, BucketCount, TypeCount
from filebyte.filesystem.tree import TreeNode
from filebyte.utils.formatting import console
from filebyte.utils.units import SizeUnit, format_size

DATE_FORMAT = "%Y-%m-%d %H:%M"


def _new_table(title: str | None = None) -> Table:
    return Table(
        title=escape(title) if title is not None else None,
        show_header=True,
        header_style="bold_header",
        border_style="border",
    )


def format_timestamp(value: datetime | None) -> str:
    """Render a timestamp in local time, or "-" when unknown."""
    if value is None:
        return "-"
    return value.astimezone().strftime(DATE_FORMAT)


def format_entry_size(entry: Entry, unit: SizeUnit) -> str:
    """Render an entry's size, marking partial directory totals."""
    text = format_size(entry.size_bytes, unit)
    if entry.size_partial:
        text = f"{text} (partial)"
    return text


def styled_name(entry: Entry) -> str:
    """Entry name with kind styling and symlink target."""
    name = escape(entry.name)
    if entry.kind == EntryKind.DIRECTORY:
        return f"[kind.directory]{name}/[/]"
    if entry.kind == EntryKind.SYMLINK:
        target = escape(entry.link_target or "?")
        label = f"[kind.symlink]{name}[/] [muted]-> {target}[/]"
        if entry.broken_link:
            label = f"{label} [warning](broken)[/]"
        return label
    if entry.kind == EntryKind.OTHER:
        return f"[kind.other]{name}[/]"
    return f"[kind.file]{name}[/]"


def create_entries_table(
    entries: Sequence[Entry],
    unit: SizeUnit = SizeUnit.AUTO,
    *,
    properties: bool = False,
    title: str | None = None,
    show_path: bool = False,
) -> Table:
    """Create a Rich table displaying entries in the given order.

    Args:
        entries: Entries to display (already sorted and filtered).
        unit: Size display unit.
        properties: Add timestamp, permission and MIME columns.
        title: Optional table title.
        show_path: Show the full path instead of the bare name.

    Returns:
        Rich Table configured for entry display.
    """
    table = _new_table(title)
    table.add_column("Name", no_wrap=True)
    table.add_column("Kind", style="muted")
    table.add_column("Size", style="size", justify="right")
    if properties:
        table.add_column("Created", style="date")
        table.add_column("Modified", style="date")
        table.add_column("Permissions", style="permissions")
        table.add_column("MIME", style="mime")
    else:
        table.add_column("Modified", style="date")

    for entry in entries:
        name = escape(entry.path) if show_path else styled_name(entry)
        row = [name, entry.kind.value, format_entry_size(entry, unit)]
        if properties:
            row.extend(
                [
                    format_timestamp(entry.created_at),
                    format_timestamp(entry.modified_at),
                    entry.permissions,
                    entry.mime_guess or "-",
                ]
            )
        else:
            row.append(format_timestamp(entry.modified_at))
        table.add_row(*row)

    return table


def create_skipped_table(skipped: Sequence[SkippedEntry]) -> Table:
    """Create a Rich table listing skipped entries and the reason."""
    table = _new_table("Skipped")
    table.add_column("Path", no_wrap=True)
    table.add_column("Reason", style="warning")
    table.add_column("Detail", style="muted")
    for item in skipped:
        table.add_row(escape(item.path), item.reason.value, escape(item.detail))
    return table


def print_skipped(skipped: Sequence[SkippedEntry]) -> None:
    """Print the skipped table when anything was skipped."""
    if not skipped:
        return
    console.print()
    console.print(create_skipped_table(skipped))


def print_listing(
    entries: Sequence[Entry],
    unit: SizeUnit,
    *,
    properties: bool = False,
    limit: int | None = None,
    title: str | None = None,
) -> None:
    """Print an entry table followed by a count and size summary.

    Args:
        entries: Sorted entries.
        unit: Size display unit.
        properties: Show the extended property columns.
        limit: Maximum rows to display.
        title: Table title.
    """
    if not entries:
        console.print("[muted]No entries found.[/]")
        return

    shown = entries[:limit] if limit else entries
    console.print(create_entries_table(shown, unit, properties=properties, title=title))

    total = sum(e.size_bytes for e in entries if not e.is_directory)
    directories = sum(1 for e in entries if e.is_directory)
    console.print(
        f"\n[dim]{len(entries)} entries ({directories} directories), "
        f"{format_size(total, unit)} in files[/dim]"
    )
    if limit and len(shown) < len(entries):
        console.print(f"[dim](showing {len(shown)} of {len(entries)}, limited to {limit})[/dim]")


def tree_label(unit: SizeUnit, *, show_size: bool = False) -> Callable[[TreeNode], str]:
    """Build a markup label function for :func:`render_tree`."""

    def label(node: TreeNode) -> str:
        text = styled_name(node.entry)
        if show_size and (not node.entry.is_directory or node.entry.size_bytes > 0):
            text = f"{text} [size]({format_entry_size(node.entry, unit)})[/]"
        if node.cycle:
            text = f"{text} [warning]\\[cycle][/]"
        return text

    return label


def create_duplicates_table(groups: Sequence[DuplicateGroup], unit: SizeUnit) -> Table:
    """Create a Rich table with one row per duplicate file.

    Rows are grouped by a running group number; the first row of each
    group carries the shared size and digest prefix.
    """
    table = _new_table("Duplicate Files")
    table.add_column("#", style="muted", justify="right")
    table.add_column("Size", style="size", justify="right")
    table.add_column("SHA-256", style="muted", no_wrap=True)
    table.add_column("Path")

    for number, group in enumerate(groups, start=1):
        for index, entry in enumerate(group.entries):
            if index == 0:
                table.add_row(
                    str(number),
                    format_size(group.size_bytes, unit),
                    group.digest[:12],
                    escape(entry.path),
                )
            else:
                table.add_row("", "", "", escape(entry.path))
        if number < len(groups):
            table.add_section()

    return table


def create_type_table(type_counts: Sequence[TypeCount], total: int) -> Table:
    """Create a Rich table of file counts per MIME type."""
    table = _new_table(f"File Types ({total} files)")
    table.add_column("MIME Type", style="mime")
    table.add_column("Count", justify="right")
    table.add_column("Share", style="muted", justify="right")
    for item in type_counts:
        table.add_row(item.mime, str(item.count), f"{item.percent:.1f}%")
    return table


def create_distribution_table(title: str, buckets: Sequence[BucketCount]) -> Table:
    """Create a Rich table for a size or age distribution."""
    table = _new_table(title)
    table.add_column("Range")
    table.add_column("Count", justify="right")
    table.add_column("Share", style="muted", justify="right")
    for bucket in buckets:
        table.add_row(bucket.label, str(bucket.count), f"{bucket.percent:.1f}%")
    return table


def create_summary_table(analysis: Analysis, unit: SizeUnit) -> Table:
    """Create a two-column Rich table of totals, extremes and permissions."""
    table = _new_table("Summary")
    table.add_column("Metric", style="header")
    table.add_column("Value")

    table.add_row("Total items", str(analysis.total_items))
    table.add_row("Files", str(analysis.file_count))
    table.add_row("Directories", str(analysis.directory_count))
    table.add_row("Total file size", f"[size]{format_size(analysis.total_file_bytes, unit)}[/]")
    if analysis.largest is not None:
        table.add_row(
            "Largest file",
            f"{escape(analysis.largest.path)} [size]({format_size(analysis.largest.size_bytes, unit)})[/]",
        )
    if analysis.smallest is not None:
        table.add_row(
            "Smallest file",
            f"{escape(analysis.smallest.path)} [size]({format_size(analysis.smallest.size_bytes, unit)})[/]",
        )
    perms = analysis.permissions
    table.add_row("Readable", str(perms.readable))
    table.add_row("Writable", str(perms.writable))
    table.add_row("Executable", str(perms.executable))
    table.add_row("Read-only", str(perms.read_only))
    return table


def create_disk_table(rows: Sequence[DiskRow]) -> Table:
    """Create a Rich table displaying disk capacity rows."""
    table = _new_table("Disks")
    table.add_column("Device", no_wrap=True)
    table.add_column("Mount Point", style="kind.directory")
    table.add_column("Type", style="muted")
    table.add_column("Total", style="size", justify="right")
    table.add_column("Used", style="size", justify="right")
    table.add_column("Available", style="size", justify="right")
    table.add_column("Use%", justify="right")
    for row in rows:
        table.add_row(
            escape(row.device),
            escape(row.mount_point),
            row.filesystem_type,
            row.total,
            row.used,
            row.available,
            row.usage,
        )
    return table


def create_info_table(entry: Entry, absolute_path: str, unit: SizeUnit) -> Table:
    """Create a two-column Rich table with the details of one entry."""
    table = _new_table(entry.name)
    table.add_column("Property", style="header")
    table.add_column("Value")

    table.add_row("Path", escape(absolute_path))
    table.add_row("Kind", entry.kind.value)
    table.add_row("Size", f"[size]{format_entry_size(entry, unit)}[/] [muted]({entry.size_bytes} bytes)[/]")
    if entry.kind == EntryKind.SYMLINK:
        table.add_row("Target", escape(entry.link_target or "?"))
        table.add_row("Broken", "yes" if entry.broken_link else "no")
    if not entry.is_directory:
        table.add_row("MIME", f"[mime]{entry.mime_guess or 'unknown'}[/]")
        table.add_row("Extension", entry.extension)
    table.add_row("Permissions", f"[permissions]{entry.permissions}[/] [muted]({entry.permission_bits:o})[/]")
    table.add_row("Created", f"[date]{format_timestamp(entry.created_at)}[/]")
    table.add_row("Modified", f"[date]{format_timestamp(entry.modified_at)}[/]")
    return table
