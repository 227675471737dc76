"""Filesystem domain models for inspection and analysis.

This module defines the immutable records produced while probing and
walking a directory tree: the entry kind, the normalized entry record
itself, and the record used to surface entries that had to be skipped.
"""

import stat
from dataclasses import dataclass, replace
from datetime import datetime
from enum import Enum
from pathlib import PurePath


class EntryKind(str, Enum):
    """Kind of filesystem entry, fixed at probe time.

    Attributes:
        FILE: Regular file.
        DIRECTORY: Directory.
        SYMLINK: Symbolic link (live or broken).
        OTHER: Socket, FIFO, device node or anything else.
    """

    FILE = "file"
    DIRECTORY = "directory"
    SYMLINK = "symlink"
    OTHER = "other"


class SkipReason(str, Enum):
    """Reason an entry or subtree was skipped during a walk.

    Attributes:
        ACCESS_DENIED: Permission denied on the entry or its listing.
        VANISHED: Entry disappeared between listing and stat.
        READ_ERROR: File content could not be read (hashing).
        SYMLINK_CYCLE: Symlink leads back to an ancestor directory.
        DEPTH_LIMIT: Directory lies beyond the configured depth guard.
    """

    ACCESS_DENIED = "access_denied"
    VANISHED = "vanished"
    READ_ERROR = "read_error"
    SYMLINK_CYCLE = "symlink_cycle"
    DEPTH_LIMIT = "depth_limit"


@dataclass(frozen=True, slots=True)
class SkippedEntry:
    """A recoverable failure recorded instead of aborting the operation.

    Attributes:
        path: Path of the entry or subtree that was skipped.
        reason: Classification of the failure.
        detail: Human-readable detail (usually the OS error text).
    """

    path: str
    reason: SkipReason
    detail: str = ""


@dataclass(frozen=True, slots=True)
class Entry:
    """Normalized metadata record for one filesystem object.

    Attributes:
        path: Path as discovered (not resolved through symlinks).
        name: Final path component.
        kind: Entry kind determined from lstat.
        size_bytes: File size; for directories 0 or the recursive sum
            when aggregation was requested; for symlinks the target
            file size, or 0 when broken or pointing at a directory.
        modified_at: Last modification time (UTC).
        created_at: Creation time (UTC) where the platform reports it.
        permission_bits: Permission bits of the entry (``S_IMODE``).
        mime_guess: MIME type guessed from the name (files only).
        broken_link: True for a symlink whose target cannot be resolved.
        link_target: Raw target text of a symlink.
        size_partial: True when an aggregate size misses unreadable subtrees.
    """

    path: str
    name: str
    kind: EntryKind
    size_bytes: int
    modified_at: datetime
    created_at: datetime | None
    permission_bits: int
    mime_guess: str | None = None
    broken_link: bool = False
    link_target: str | None = None
    size_partial: bool = False

    def __post_init__(self) -> None:
        """Validate entry data after initialization."""
        if not self.path:
            msg = "Path cannot be empty"
            raise ValueError(msg)
        if self.size_bytes < 0:
            msg = f"Size cannot be negative, got {self.size_bytes}"
            raise ValueError(msg)

    @property
    def is_directory(self) -> bool:
        return self.kind == EntryKind.DIRECTORY

    @property
    def is_file(self) -> bool:
        return self.kind == EntryKind.FILE

    @property
    def permissions(self) -> str:
        """Permission bits rendered as ``rwxr-xr-x``."""
        return stat.filemode(self.permission_bits)[1:]

    @property
    def extension(self) -> str:
        """File extension without the dot.

        Dotfiles without a further suffix (``.bashrc``) report the text
        after the leading dot. Names without any dot report ``"none"``.
        """
        suffix = PurePath(self.name).suffix
        if suffix:
            return suffix[1:]
        if self.name.startswith(".") and len(self.name) > 1:
            return self.name[1:]
        return "none"

    def depth_from(self, root: str) -> int:
        """Number of path components between ``root`` and this entry."""
        return len(PurePath(self.path).relative_to(root).parts)

    def with_size(self, size_bytes: int, partial: bool = False) -> "Entry":
        """Return a copy carrying an aggregate size."""
        return replace(self, size_bytes=size_bytes, size_partial=partial)
