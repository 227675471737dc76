"""Duplicate file detection.

Two sequential grouping passes keep the cost near linear when there are
no duplicates:

1. Bucket regular files by exact size and drop single-member buckets.
2. Hash every remaining candidate with SHA-256 and group each bucket by
   digest; groups with two or more members are duplicates.

Files that cannot be read are recorded in :attr:`DuplicateFinder.skipped`
and left out of their bucket. No byte-for-byte verification follows
the digest match.
"""

import functools
import hashlib
import logging
from collections.abc import Callable, Iterable
from concurrent.futures import Future, ThreadPoolExecutor
from dataclasses import dataclass
from pathlib import Path

from filebyte.filesystem.errors import ReadError
from filebyte.filesystem.models import Entry, EntryKind, SkippedEntry, SkipReason

logger = logging.getLogger(__name__)

DEFAULT_CHUNK_SIZE = 1024 * 1024


@dataclass(frozen=True, slots=True)
class DuplicateGroup:
    """Files sharing an identical size and content digest.

    Attributes:
        size_bytes: Size of every member.
        digest: Hex SHA-256 digest of every member.
        entries: Members in input order (always two or more).
    """

    size_bytes: int
    digest: str
    entries: tuple[Entry, ...]

    def __post_init__(self) -> None:
        """Validate group data after initialization."""
        if len(self.entries) < 2:
            msg = f"A duplicate group needs at least 2 entries, got {len(self.entries)}"
            raise ValueError(msg)

    @property
    def count(self) -> int:
        return len(self.entries)

    @property
    def paths(self) -> list[str]:
        return [e.path for e in self.entries]

    @property
    def reclaimable_bytes(self) -> int:
        """Bytes freed if all but one member were removed."""
        return self.size_bytes * (self.count - 1)


def hash_file(path: str | Path, chunk_size: int = DEFAULT_CHUNK_SIZE) -> str:
    """Compute the SHA-256 digest of a whole file.

    Args:
        path: File to hash.
        chunk_size: Bytes read per iteration.

    Returns:
        Hex digest string.

    Raises:
        ReadError: If the file cannot be opened or read.
    """
    digest = hashlib.sha256()
    try:
        with open(path, "rb") as f:
            for chunk in iter(lambda: f.read(chunk_size), b""):
                digest.update(chunk)
    except OSError as e:
        raise ReadError(f"Cannot read {path}: {e.strerror or e}", str(path)) from e
    return digest.hexdigest()


def bucket_by_size(entries: Iterable[Entry], min_size: int = 0) -> dict[int, list[Entry]]:
    """Group regular files by exact size, keeping only buckets of 2+.

    Args:
        entries: Candidate entries; non-files are ignored.
        min_size: Files smaller than this are ignored.

    Returns:
        Mapping of size to members, in first-seen order.
    """
    buckets: dict[int, list[Entry]] = {}
    for entry in entries:
        if entry.kind != EntryKind.FILE or entry.size_bytes < min_size:
            continue
        buckets.setdefault(entry.size_bytes, []).append(entry)
    return {size: members for size, members in buckets.items() if len(members) > 1}


class DuplicateFinder:
    """Groups entries into duplicate sets.

    Args:
        chunk_size: Read size used while hashing.
        workers: Hashing threads; 1 hashes in the calling thread.
        min_size: Minimum file size to consider.
    """

    def __init__(
        self,
        *,
        chunk_size: int = DEFAULT_CHUNK_SIZE,
        workers: int = 1,
        min_size: int = 0,
    ) -> None:
        if workers < 1:
            msg = f"workers must be at least 1, got {workers}"
            raise ValueError(msg)
        self._chunk_size = chunk_size
        self._workers = workers
        self._min_size = min_size
        self.skipped: list[SkippedEntry] = []
        self.hashed_count = 0

    def find(self, entries: Iterable[Entry]) -> list[DuplicateGroup]:
        """Return duplicate groups, largest file size first.

        Args:
            entries: Entries to analyze; only regular files are considered.

        Returns:
            Duplicate groups, each with two or more members.
        """
        self.skipped = []
        self.hashed_count = 0

        buckets = bucket_by_size(entries, self._min_size)
        candidates = [entry for size in buckets for entry in buckets[size]]
        logger.debug(
            "%d size bucket(s) with %d candidate file(s) to hash", len(buckets), len(candidates)
        )
        digests = self._hash_all(candidates)

        groups: list[DuplicateGroup] = []
        for size in sorted(buckets, reverse=True):
            by_digest: dict[str, list[Entry]] = {}
            for entry in buckets[size]:
                digest = digests.get(entry.path)
                if digest is None:
                    continue
                by_digest.setdefault(digest, []).append(entry)
            for digest, members in by_digest.items():
                if len(members) > 1:
                    groups.append(DuplicateGroup(size_bytes=size, digest=digest, entries=tuple(members)))
        return groups

    def _hash_all(self, candidates: list[Entry]) -> dict[str, str]:
        """Hash candidates, recording unreadable files.

        Results and failures are merged in the calling thread only.
        """
        digests: dict[str, str] = {}
        if self._workers == 1:
            for entry in candidates:
                self._collect(entry, functools.partial(hash_file, entry.path, self._chunk_size), digests)
            return digests

        with ThreadPoolExecutor(max_workers=self._workers) as executor:
            futures: list[tuple[Entry, Future[str]]] = [
                (entry, executor.submit(hash_file, entry.path, self._chunk_size))
                for entry in candidates
            ]
            for entry, future in futures:
                self._collect(entry, future.result, digests)
        return digests

    def _collect(self, entry: Entry, compute: Callable[[], str], digests: dict[str, str]) -> None:
        try:
            digests[entry.path] = compute()
        except ReadError as e:
            logger.warning("Excluded from duplicate analysis: %s", e)
            self.skipped.append(SkippedEntry(path=entry.path, reason=SkipReason.READ_ERROR, detail=str(e)))
            return
        self.hashed_count += 1


def find_duplicates(entries: Iterable[Entry]) -> list[DuplicateGroup]:
    """Convenience wrapper using a default :class:`DuplicateFinder`."""
    return DuplicateFinder().find(entries)
