"""Aggregate statistics over an entry collection.

Provides file-type counts, size and age distributions, extreme files,
and a permission summary for the ``stats`` command.
"""

from collections import Counter
from collections.abc import Sequence
from dataclasses import dataclass
from datetime import UTC, datetime

from filebyte.filesystem.models import Entry

_KB = 1024
_MB = 1024 * _KB
_GB = 1024 * _MB

_DAY = 86_400

# (label, lower bound inclusive, upper bound exclusive or None)
SIZE_BUCKETS: tuple[tuple[str, int, int | None], ...] = (
    ("Empty (0 B)", 0, 1),
    ("Tiny (< 1 KB)", 1, _KB),
    ("Small (1 KB - 1 MB)", _KB, _MB),
    ("Medium (1 MB - 100 MB)", _MB, 100 * _MB),
    ("Large (100 MB - 1 GB)", 100 * _MB, _GB),
    ("Huge (> 1 GB)", _GB, None),
)

AGE_BUCKETS: tuple[tuple[str, int, int | None], ...] = (
    ("Today", 0, _DAY),
    ("This Week", _DAY, 7 * _DAY),
    ("This Month", 7 * _DAY, 30 * _DAY),
    ("This Year", 30 * _DAY, 365 * _DAY),
    ("Older", 365 * _DAY, None),
)


@dataclass(frozen=True, slots=True)
class BucketCount:
    """Number of entries falling into one labelled range."""

    label: str
    count: int
    percent: float


@dataclass(frozen=True, slots=True)
class TypeCount:
    """Number of files sharing a MIME guess."""

    mime: str
    count: int
    percent: float


@dataclass(frozen=True, slots=True)
class PermissionSummary:
    """Owner permission counts across all entries."""

    readable: int
    writable: int
    executable: int
    read_only: int


@dataclass(frozen=True, slots=True)
class Analysis:
    """Detailed analysis of an entry collection.

    Attributes:
        total_items: Number of entries analyzed.
        file_count: Entries that are not directories.
        directory_count: Directory entries.
        total_file_bytes: Sum of non-directory sizes.
        size_distribution: Non-empty size buckets in ascending order.
        age_distribution: Non-empty age buckets, newest first.
        largest: Largest regular file, if any.
        smallest: Smallest non-empty regular file, if any.
        permissions: Owner permission counts.
    """

    total_items: int
    file_count: int
    directory_count: int
    total_file_bytes: int
    size_distribution: tuple[BucketCount, ...]
    age_distribution: tuple[BucketCount, ...]
    largest: Entry | None
    smallest: Entry | None
    permissions: PermissionSummary


def _percent(count: int, total: int) -> float:
    return count / total * 100.0 if total else 0.0


def _bucketize(
    values: Sequence[int],
    buckets: tuple[tuple[str, int, int | None], ...],
    total: int,
) -> tuple[BucketCount, ...]:
    result: list[BucketCount] = []
    for label, low, high in buckets:
        count = sum(1 for v in values if v >= low and (high is None or v < high))
        if count:
            result.append(BucketCount(label=label, count=count, percent=_percent(count, total)))
    return tuple(result)


def file_type_stats(entries: Sequence[Entry]) -> tuple[list[TypeCount], int]:
    """Count non-directory entries per MIME guess.

    Entries without a MIME guess are counted in the total but left out
    of the ranking.

    Returns:
        Tuple of (type counts, most common first; total non-directory entries).
    """
    files = [e for e in entries if not e.is_directory]
    counter = Counter(e.mime_guess for e in files if e.mime_guess)
    total = len(files)
    ranked = sorted(counter.items(), key=lambda item: (-item[1], item[0]))
    return [TypeCount(mime=m, count=c, percent=_percent(c, total)) for m, c in ranked], total


def analyze(entries: Sequence[Entry], now: datetime | None = None) -> Analysis:
    """Compute the detailed analysis for ``entries``.

    Args:
        entries: Entries to analyze (typically a recursive walk).
        now: Reference time for age buckets; defaults to the current time.
    """
    now = now or datetime.now(tz=UTC)
    total = len(entries)
    directories = [e for e in entries if e.is_directory]
    others = [e for e in entries if not e.is_directory]
    regular = [e for e in entries if e.is_file]

    ages = [max(0, int((now - e.modified_at).total_seconds())) for e in entries]

    largest = max(regular, key=lambda e: e.size_bytes, default=None)
    non_empty = [e for e in regular if e.size_bytes > 0]
    smallest = min(non_empty, key=lambda e: e.size_bytes, default=None)

    return Analysis(
        total_items=total,
        file_count=len(others),
        directory_count=len(directories),
        total_file_bytes=sum(e.size_bytes for e in others),
        size_distribution=_bucketize([e.size_bytes for e in entries], SIZE_BUCKETS, total),
        age_distribution=_bucketize(ages, AGE_BUCKETS, total),
        largest=largest,
        smallest=smallest,
        permissions=summarize_permissions(entries),
    )


def summarize_permissions(entries: Sequence[Entry]) -> PermissionSummary:
    """Count entries by owner read/write/execute bits."""
    readable = sum(1 for e in entries if e.permission_bits & 0o400)
    writable = sum(1 for e in entries if e.permission_bits & 0o200)
    executable = sum(1 for e in entries if e.permission_bits & 0o100)
    read_only = sum(1 for e in entries if e.permission_bits & 0o400 and not e.permission_bits & 0o200)
    return PermissionSummary(
        readable=readable,
        writable=writable,
        executable=executable,
        read_only=read_only,
    )
