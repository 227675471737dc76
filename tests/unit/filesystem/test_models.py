"""Unit tests for filesystem models.

Tests for Entry, EntryKind, SkipReason and SkippedEntry.
"""

from collections.abc import Callable
from dataclasses import FrozenInstanceError

import pytest
from filebyte.filesystem.models import Entry, EntryKind, SkippedEntry, SkipReason


class TestEntryKind:
    """Tests for EntryKind enum."""

    def test_values(self) -> None:
        """EntryKind values are lowercase names."""
        assert EntryKind.FILE.value == "file"
        assert EntryKind.DIRECTORY.value == "directory"
        assert EntryKind.SYMLINK.value == "symlink"
        assert EntryKind.OTHER.value == "other"

    def test_is_string_enum(self) -> None:
        """EntryKind compares equal to its string value."""
        assert EntryKind.FILE == "file"


class TestSkippedEntry:
    """Tests for SkippedEntry dataclass."""

    def test_default_detail(self) -> None:
        """SkippedEntry detail defaults to empty string."""
        item = SkippedEntry(path="/x", reason=SkipReason.ACCESS_DENIED)
        assert item.detail == ""

    def test_reason_values(self) -> None:
        """SkipReason values are snake_case."""
        assert SkipReason.SYMLINK_CYCLE.value == "symlink_cycle"
        assert SkipReason.DEPTH_LIMIT.value == "depth_limit"


class TestEntry:
    """Tests for Entry dataclass."""

    def test_empty_path_rejected(self, make_entry: Callable[..., Entry]) -> None:
        """Entry rejects an empty path."""
        entry = make_entry("a.txt")
        with pytest.raises(ValueError, match="Path cannot be empty"):
            Entry(
                path="",
                name="a.txt",
                kind=EntryKind.FILE,
                size_bytes=0,
                modified_at=entry.modified_at,
                created_at=None,
                permission_bits=0o644,
            )

    def test_negative_size_rejected(self, make_entry: Callable[..., Entry]) -> None:
        """Entry rejects a negative size."""
        with pytest.raises(ValueError, match="cannot be negative"):
            make_entry("a.txt", size_bytes=-1)

    def test_is_frozen(self, make_entry: Callable[..., Entry]) -> None:
        """Entry is immutable once created."""
        entry = make_entry("a.txt")
        with pytest.raises(FrozenInstanceError):
            entry.size_bytes = 10  # type: ignore[misc]

    def test_kind_properties(self, make_entry: Callable[..., Entry]) -> None:
        """is_directory and is_file reflect the kind."""
        directory = make_entry("docs", kind=EntryKind.DIRECTORY)
        file = make_entry("a.txt")
        link = make_entry("link", kind=EntryKind.SYMLINK)

        assert directory.is_directory and not directory.is_file
        assert file.is_file and not file.is_directory
        assert not link.is_file and not link.is_directory

    def test_permissions_string(self, make_entry: Callable[..., Entry]) -> None:
        """permissions renders the rwx string without a type character."""
        assert make_entry("a", permission_bits=0o755).permissions == "rwxr-xr-x"
        assert make_entry("b", permission_bits=0o640).permissions == "rw-r-----"

    @pytest.mark.parametrize(
        ("name", "expected"),
        [
            ("report.pdf", "pdf"),
            ("archive.tar.gz", "gz"),
            (".bashrc", "bashrc"),
            ("Makefile", "none"),
        ],
    )
    def test_extension(self, make_entry: Callable[..., Entry], name: str, expected: str) -> None:
        """extension handles suffixes, dotfiles and bare names."""
        assert make_entry(name).extension == expected

    def test_depth_from(self, make_entry: Callable[..., Entry]) -> None:
        """depth_from counts path components below the root."""
        entry = make_entry("c.txt", parent="/data/a/b")
        assert entry.depth_from("/data") == 3

    def test_with_size_returns_copy(self, make_entry: Callable[..., Entry]) -> None:
        """with_size returns a new entry and leaves the original untouched."""
        entry = make_entry("docs", kind=EntryKind.DIRECTORY)
        sized = entry.with_size(4096, partial=True)

        assert sized.size_bytes == 4096
        assert sized.size_partial is True
        assert entry.size_bytes == 0
        assert entry.size_partial is False
