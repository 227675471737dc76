"""Directory traversal producing probed, filtered entries.

The traverser walks a directory with an explicit worklist. Directories
entered during a walk are tracked by ``(st_dev, st_ino)``. A symlink
pointing back at an ancestor is reported as a cycle instead of being
followed forever; a symlink to a directory that the walk already reaches
under another path is listed but not descended. A single unreadable
entry or subtree never aborts the walk; it is recorded in
:attr:`Traverser.skipped` and the walk continues.
"""

import logging
import os
from collections.abc import Iterator
from pathlib import Path

from filebyte.filesystem.errors import AccessError, PathNotFoundError
from filebyte.filesystem.filters import NO_FILTER, EntryFilter
from filebyte.filesystem.models import Entry, EntryKind, SkippedEntry, SkipReason
from filebyte.filesystem.probe import probe
from filebyte.filesystem.sizing import DirectorySizer, InodeKey

logger = logging.getLogger(__name__)


class Traverser:
    """Walks a directory and yields :class:`Entry` records.

    Filtering follows two rules: an entry matching the exclude pattern
    is dropped and, if it is a directory, not descended; an entry that
    merely fails the include pattern is not yielded but is still
    descended, so matches deeper in the tree are found.

    Args:
        recursive: Descend into subdirectories.
        entry_filter: Include/exclude filter applied to every entry.
        aggregate_sizes: Report recursive file-byte totals for directories
            instead of 0.
        follow_symlinks: Descend through symlinks that point at directories
            (recursive walks only).
        max_depth: Deepest entry level to yield (1 = immediate children).
            Directories beyond it are recorded as depth-limited.
    """

    def __init__(
        self,
        *,
        recursive: bool = False,
        entry_filter: EntryFilter = NO_FILTER,
        aggregate_sizes: bool = False,
        follow_symlinks: bool = True,
        max_depth: int | None = None,
    ) -> None:
        if max_depth is not None and max_depth < 1:
            msg = f"max_depth must be at least 1, got {max_depth}"
            raise ValueError(msg)
        self._recursive = recursive
        self._filter = entry_filter
        self._aggregate = aggregate_sizes
        self._follow_symlinks = follow_symlinks
        self._max_depth = max_depth

        # Per-walk state, reset by walk()
        self._skipped: list[SkippedEntry] = []
        self._sizer = DirectorySizer()

    @property
    def skipped(self) -> list[SkippedEntry]:
        """Entries and subtrees skipped so far, in discovery order."""
        seen: set[tuple[str, SkipReason]] = set()
        merged: list[SkippedEntry] = []
        for item in (*self._skipped, *self._sizer.skipped):
            marker = (item.path, item.reason)
            if marker in seen:
                continue
            seen.add(marker)
            merged.append(item)
        return merged

    def walk(self, root: str | Path) -> Iterator[Entry]:
        """Walk ``root`` and return a lazy iterator of entries.

        A directory root yields its children (recursively when
        configured), never the root itself. A file root yields the
        probed file. The returned iterator is single-use; call
        :meth:`walk` again to re-scan.

        Args:
            root: File or directory to walk.

        Returns:
            Iterator over entries that pass the filter.

        Raises:
            PathNotFoundError: If ``root`` does not exist.
        """
        root_str = os.path.normpath(os.fspath(root))
        self._skipped = []
        self._sizer = DirectorySizer()

        if not os.path.lexists(root_str):
            raise PathNotFoundError(f"Path '{root_str}' does not exist", root_str)

        if os.path.isdir(root_str):
            return self._iter_directory(root_str)
        return self._iter_single(root_str)

    def collect(self, root: str | Path) -> list[Entry]:
        """Walk ``root`` and materialize the result."""
        return list(self.walk(root))

    def _iter_single(self, path: str) -> Iterator[Entry]:
        entry = self._probe(path)
        if entry is not None and self._filter.matches(entry):
            yield entry

    def _iter_directory(self, root: str) -> Iterator[Entry]:
        root_key = self._dir_key(root)
        if root_key is None:
            return
        root_real = os.path.realpath(root)
        visited: dict[InodeKey, str] = {root_key: root}
        # Each frame carries the keys of its own ancestor chain
        stack: list[tuple[str, int, frozenset[InodeKey]]] = [(root, 0, frozenset({root_key}))]

        while stack:
            directory, depth, ancestors = stack.pop()
            subdirs: list[Entry] = []

            for child_path in self._list(directory):
                entry = self._probe(child_path)
                if entry is None:
                    continue
                if self._filter.is_excluded(entry):
                    continue

                if entry.is_directory and self._aggregate:
                    total, partial = self._sizer.size_of(entry.path)
                    entry = entry.with_size(total, partial)

                if self._filter.is_included(entry):
                    yield entry

                if self._recursive and self._is_walkable(entry):
                    subdirs.append(entry)

            # Reversed so the stack pops subdirectories in name order
            for subdir in reversed(subdirs):
                key = self._dir_key(subdir.path)
                if key is None:
                    continue
                if key in ancestors:
                    logger.warning("Symlink cycle at %s (ancestor %s)", subdir.path, visited[key])
                    self._record(
                        subdir.path,
                        SkipReason.SYMLINK_CYCLE,
                        f"links back to {visited[key]}",
                    )
                    continue
                if subdir.kind == EntryKind.SYMLINK and self._is_alias(subdir.path, key, visited, root_real):
                    continue
                if self._max_depth is not None and depth + 1 >= self._max_depth:
                    self._record(subdir.path, SkipReason.DEPTH_LIMIT, f"deeper than {self._max_depth}")
                    continue
                visited.setdefault(key, subdir.path)
                stack.append((subdir.path, depth + 1, ancestors | {key}))

    def _is_alias(self, path: str, key: InodeKey, visited: dict[InodeKey, str], root_real: str) -> bool:
        """True if a symlinked directory is reached through another path.

        Targets inside the walk root are listed under their real path, and
        a second link to an already entered directory adds nothing.
        """
        target_real = os.path.realpath(path)
        if os.path.commonpath([target_real, root_real]) == root_real:
            logger.debug("Not following %s: %s is inside the walk root", path, target_real)
            return True
        if key in visited:
            logger.debug("Not following %s: already entered as %s", path, visited[key])
            return True
        return False

    def _is_walkable(self, entry: Entry) -> bool:
        if entry.is_directory:
            return True
        if entry.kind == EntryKind.SYMLINK and self._follow_symlinks and not entry.broken_link:
            return os.path.isdir(entry.path)
        return False

    def _list(self, directory: str) -> list[str]:
        """Return child paths of ``directory`` sorted by name."""
        try:
            names = sorted(os.listdir(directory))
        except FileNotFoundError as e:
            self._record(directory, SkipReason.VANISHED, str(e.strerror or e))
            return []
        except OSError as e:
            logger.warning("Cannot list directory %s: %s", directory, e.strerror or e)
            self._record(directory, SkipReason.ACCESS_DENIED, str(e.strerror or e))
            return []
        return [os.path.join(directory, name) for name in names]

    def _probe(self, path: str) -> Entry | None:
        try:
            entry = probe(path)
        except PathNotFoundError as e:
            logger.debug("Entry vanished before stat: %s", path)
            self._record(path, SkipReason.VANISHED, str(e))
            return None
        except AccessError as e:
            logger.warning("%s", e)
            self._record(path, SkipReason.ACCESS_DENIED, str(e))
            return None
        if entry.broken_link:
            logger.debug("Broken symlink recorded: %s -> %s", path, entry.link_target)
        return entry

    def _dir_key(self, path: str) -> InodeKey | None:
        try:
            st = os.stat(path)
        except OSError as e:
            self._record(path, SkipReason.ACCESS_DENIED, str(e.strerror or e))
            return None
        return st.st_dev, st.st_ino

    def _record(self, path: str, reason: SkipReason, detail: str) -> None:
        self._skipped.append(SkippedEntry(path=path, reason=reason, detail=detail))


def walk(
    root: str | Path,
    recursive: bool = False,
    entry_filter: EntryFilter = NO_FILTER,
) -> Iterator[Entry]:
    """Convenience wrapper around :meth:`Traverser.walk`."""
    return Traverser(recursive=recursive, entry_filter=entry_filter).walk(root)
