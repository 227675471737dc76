"""Include/exclude filtering of entries by regular expression.

An entry is kept iff the include pattern is absent or matches, and the
exclude pattern is absent or does not match. Patterns use ``re.search``
semantics, so an unanchored pattern matches anywhere in the subject.
"""

import re
from collections.abc import Iterable, Iterator
from dataclasses import dataclass

from filebyte.filesystem.errors import InvalidFilterError
from filebyte.filesystem.models import Entry


def _compile(pattern: str | None, label: str) -> re.Pattern[str] | None:
    if pattern is None:
        return None
    try:
        return re.compile(pattern)
    except re.error as e:
        msg = f"Invalid {label} pattern {pattern!r}: {e}"
        raise InvalidFilterError(msg, pattern) from e


@dataclass(frozen=True, slots=True)
class EntryFilter:
    """Compiled include/exclude filter.

    Attributes:
        include: Pattern an entry must match to be kept (None = keep all).
        exclude: Pattern that drops a matching entry (None = drop none).
        match_path: Match against the full path instead of the name.
    """

    include: re.Pattern[str] | None = None
    exclude: re.Pattern[str] | None = None
    match_path: bool = False

    @classmethod
    def compile(
        cls,
        include: str | None = None,
        exclude: str | None = None,
        *,
        match_path: bool = False,
    ) -> "EntryFilter":
        """Build a filter from pattern text.

        Raises:
            InvalidFilterError: If either pattern is not a valid regex.
        """
        return cls(
            include=_compile(include, "include"),
            exclude=_compile(exclude, "exclude"),
            match_path=match_path,
        )

    @property
    def is_empty(self) -> bool:
        return self.include is None and self.exclude is None

    def _subject(self, entry: Entry) -> str:
        return entry.path if self.match_path else entry.name

    def is_excluded(self, entry: Entry) -> bool:
        """True if the exclude pattern matches the entry."""
        return self.exclude is not None and self.exclude.search(self._subject(entry)) is not None

    def is_included(self, entry: Entry) -> bool:
        """True if the include pattern is absent or matches the entry."""
        return self.include is None or self.include.search(self._subject(entry)) is not None

    def matches(self, entry: Entry) -> bool:
        """True if the entry passes both patterns."""
        return self.is_included(entry) and not self.is_excluded(entry)

    def apply(self, entries: Iterable[Entry]) -> Iterator[Entry]:
        """Yield only the entries that pass the filter."""
        return (entry for entry in entries if self.matches(entry))

    def describe(self) -> dict[str, str | bool | None]:
        """Pattern text for export metadata."""
        return {
            "include": self.include.pattern if self.include else None,
            "exclude": self.exclude.pattern if self.exclude else None,
            "match_path": self.match_path,
        }


NO_FILTER = EntryFilter()
