"""Pytest configuration and shared fixtures.

This module contains fixtures used across all test modules.
"""

import os
from collections.abc import Callable
from datetime import UTC, datetime
from pathlib import Path

import pytest
from filebyte.filesystem.models import Entry, EntryKind

# Relative path -> file content; directories are created as needed
SAMPLE_FILES: dict[str, str] = {
    "a.txt": "same content",
    "b.txt": "same content",
    "c.txt": "diff content",
    ".hidden": "x",
    "docs/readme.md": "# Readme\n",
    "docs/notes.txt": "notes here",
    "src/main.py": "print('hi')\n",
    "src/pkg/util.py": "X = 1\n",
}


def build_tree(root: Path, files: dict[str, str]) -> Path:
    """Create ``files`` under ``root`` and return ``root``."""
    root.mkdir(parents=True, exist_ok=True)
    for relative, content in files.items():
        target = root / relative
        target.parent.mkdir(parents=True, exist_ok=True)
        target.write_text(content)
    return root


@pytest.fixture
def sample_tree(tmp_path: Path) -> Path:
    """A small directory tree with three same-size text files.

    Layout::

        root/
          .hidden
          a.txt, b.txt (identical), c.txt (same size, different content)
          docs/readme.md, docs/notes.txt
          src/main.py, src/pkg/util.py
    """
    return build_tree(tmp_path / "root", SAMPLE_FILES)


@pytest.fixture
def make_entry() -> Callable[..., Entry]:
    """Factory for in-memory entries that never touch the filesystem."""

    def _make(
        name: str,
        kind: EntryKind = EntryKind.FILE,
        size_bytes: int = 0,
        modified_at: datetime | None = None,
        permission_bits: int = 0o644,
        mime_guess: str | None = None,
        parent: str = "/data",
    ) -> Entry:
        return Entry(
            path=os.path.join(parent, name),
            name=name,
            kind=kind,
            size_bytes=size_bytes,
            modified_at=modified_at or datetime(2024, 1, 1, tzinfo=UTC),
            created_at=None,
            permission_bits=permission_bits,
            mime_guess=mime_guess,
        )

    return _make


@pytest.fixture
def isolated_config(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> Path:
    """Point XDG_CONFIG_HOME at a temporary directory."""
    config_home = tmp_path / "config"
    monkeypatch.setenv("XDG_CONFIG_HOME", str(config_home))
    return config_home / "filebyte"


@pytest.fixture(autouse=True)
def _wide_terminal(monkeypatch: pytest.MonkeyPatch) -> None:
    """Pin a wide terminal so Rich output does not wrap on long tmp paths."""
    monkeypatch.setenv("COLUMNS", "200")
