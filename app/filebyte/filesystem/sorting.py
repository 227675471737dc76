"""Entry ordering.

Directories always precede every other kind. Within a category the
selected key orders entries (name ascending, size descending, date
newest first) and the name breaks ties, compared case-sensitively.
"""

from collections.abc import Callable, Iterable
from enum import Enum
from typing import Any

from filebyte.filesystem.models import Entry


class SortKey(str, Enum):
    """Secondary sort criterion."""

    NAME = "name"
    SIZE = "size"
    DATE = "date"


def _category(entry: Entry) -> int:
    return 0 if entry.is_directory else 1


_KEYS: dict[SortKey, Callable[[Entry], tuple[Any, ...]]] = {
    SortKey.NAME: lambda e: (_category(e), e.name),
    SortKey.SIZE: lambda e: (_category(e), -e.size_bytes, e.name),
    SortKey.DATE: lambda e: (_category(e), -e.modified_at.timestamp(), e.name),
}


def sort_entries(entries: Iterable[Entry], key: SortKey = SortKey.NAME) -> list[Entry]:
    """Return entries ordered by category, ``key``, then name.

    The sort is stable, so entries that compare equal on all three
    levels keep their input order.

    Args:
        entries: Entries to order (consumed fully).
        key: Secondary criterion.

    Returns:
        New list in sorted order.
    """
    return sorted(entries, key=_KEYS[key])
